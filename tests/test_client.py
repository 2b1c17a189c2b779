"""Tests for the async expense API client against a mocked transport."""

from __future__ import annotations

import asyncio
import json
import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

import httpx
import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from client import ExpenseApiClient
from config.settings import Settings
from core.errors import FetchError, MalformedMutationResponseError, MalformedResponseError, MutationError
from core.models import ExpenseDraft
from core.store import ExpenseStore

BASE_URL = "http://api.test"

EXPENSES_PAYLOAD = [
    {"id": 1, "amount": 50, "description": "Groceries", "date": "2024-01-10", "category": "Food"},
    {"id": 2, "amount": 30.5, "description": None, "date": "2024-01-15T09:30:00", "category": None},
]


class Recorder:
    def __init__(self, responder) -> None:
        self.requests: list[httpx.Request] = []
        self._responder = responder

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responder(request)


def _client(responder, token: str | None = "secret-token") -> tuple[ExpenseApiClient, Recorder]:
    recorder = Recorder(responder)
    client = ExpenseApiClient(
        BASE_URL,
        token_provider=lambda: token,
        transport=httpx.MockTransport(recorder),
    )
    return client, recorder


def test_list_expenses_parses_payload_and_sends_bearer_token():
    client, recorder = _client(lambda request: httpx.Response(200, json=EXPENSES_PAYLOAD))

    expenses = asyncio.run(client.list_expenses())

    assert [expense.id for expense in expenses] == [1, 2]
    assert expenses[1].amount == Decimal("30.5")
    assert expenses[1].description == ""
    assert expenses[1].date == date(2024, 1, 15)
    assert expenses[1].category_label == "Uncategorized"

    request = recorder.requests[0]
    assert request.method == "GET"
    assert request.url.path == "/expenses"
    assert request.headers["Authorization"] == "Bearer secret-token"


def test_token_is_read_on_every_request():
    tokens = iter(["first", "second"])
    recorder = Recorder(lambda request: httpx.Response(200, json=[]))
    client = ExpenseApiClient(BASE_URL, token_provider=lambda: next(tokens), transport=httpx.MockTransport(recorder))

    asyncio.run(client.list_expenses())
    asyncio.run(client.list_expenses())

    assert [request.headers["Authorization"] for request in recorder.requests] == [
        "Bearer first",
        "Bearer second",
    ]


def test_missing_token_sends_no_authorization_header():
    client, recorder = _client(lambda request: httpx.Response(200, json=[]), token=None)

    asyncio.run(client.list_expenses())

    assert "Authorization" not in recorder.requests[0].headers


def test_http_error_becomes_fetch_error_with_detail():
    client, _ = _client(lambda request: httpx.Response(401, json={"detail": "Not authenticated"}))

    with pytest.raises(FetchError) as excinfo:
        asyncio.run(client.list_expenses())

    assert str(excinfo.value) == "Failed to fetch expenses: Not authenticated"
    assert excinfo.value.status_code == 401


def test_object_detail_uses_its_message():
    client, _ = _client(lambda request: httpx.Response(400, json={"detail": {"msg": "Amount too large"}}))
    draft = ExpenseDraft(amount=Decimal("1"), date=date(2024, 1, 1))

    with pytest.raises(MutationError) as excinfo:
        asyncio.run(client.create_expense(draft))

    assert str(excinfo.value) == "Failed to create expense: Amount too large"
    assert excinfo.value.operation == "create expense"


def test_transport_failure_becomes_fetch_error():
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client, _ = _client(refuse)

    with pytest.raises(FetchError, match="Failed to fetch expenses: ConnectError"):
        asyncio.run(client.list_expenses())


@pytest.mark.parametrize(
    "body",
    [
        {"items": []},
        [{"id": 1, "amount": -5, "date": "2024-01-01"}],
        [{"id": 1, "amount": 5, "date": "not-a-date"}],
        [{"amount": 5, "date": "2024-01-01"}],
    ],
)
def test_unexpected_shapes_fail_closed(body):
    client, _ = _client(lambda request: httpx.Response(200, json=body))

    with pytest.raises(MalformedResponseError):
        asyncio.run(client.list_expenses())


def test_non_json_body_is_malformed():
    client, _ = _client(lambda request: httpx.Response(200, text="<html>oops</html>"))

    with pytest.raises(MalformedResponseError):
        asyncio.run(client.list_expenses())


def test_store_turns_malformed_response_into_banner():
    client, _ = _client(lambda request: httpx.Response(200, json={"unexpected": True}))
    store = ExpenseStore(client)

    applied = asyncio.run(store.refresh())

    assert applied is False
    assert store.records == ()
    assert store.error == "Expected a list of expenses"


def test_create_and_update_send_full_payload():
    def respond(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        return httpx.Response(200, json={"id": 7, **body})

    client, recorder = _client(respond)
    draft = ExpenseDraft(amount=Decimal("12.5"), description="Taxi", date=date(2024, 3, 2), category="")

    created = asyncio.run(client.create_expense(draft))
    updated = asyncio.run(client.update_expense(7, draft))

    assert created.id == updated.id == 7
    assert [request.method for request in recorder.requests] == ["POST", "PUT"]
    assert recorder.requests[1].url.path == "/expenses/7"
    assert json.loads(recorder.requests[0].content) == {
        "amount": 12.5,
        "description": "Taxi",
        "date": "2024-03-02",
        "category": None,
    }


def test_delete_and_single_fetch_paths():
    def respond(request: httpx.Request) -> httpx.Response:
        if request.method == "DELETE":
            return httpx.Response(204)
        return httpx.Response(200, json=EXPENSES_PAYLOAD[0])

    client, recorder = _client(respond)

    asyncio.run(client.delete_expense(1))
    expense = asyncio.run(client.get_expense(1))

    assert expense.description == "Groceries"
    assert [(request.method, request.url.path) for request in recorder.requests] == [
        ("DELETE", "/expenses/1"),
        ("GET", "/expenses/1"),
    ]


def test_failed_delete_raises_mutation_error():
    client, _ = _client(lambda request: httpx.Response(404, json={"detail": "Expense not found"}))

    with pytest.raises(MutationError, match="Failed to delete expense: Expense not found") as excinfo:
        asyncio.run(client.delete_expense(99))

    assert excinfo.value.status_code == 404


def test_profile_endpoints():
    def respond(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/users/password":
            return httpx.Response(200, json={"message": "ok"})
        if request.method == "PUT":
            return httpx.Response(200, json=json.loads(request.content))
        return httpx.Response(200, json={"username": "sam", "email": "sam@example.com"})

    client, recorder = _client(respond)

    profile = asyncio.run(client.get_profile())
    updated = asyncio.run(client.update_profile({"email": "new@example.com"}))
    asyncio.run(client.change_password("old-pass", "new-pass-123"))

    assert profile["username"] == "sam"
    assert updated == {"email": "new@example.com"}
    assert json.loads(recorder.requests[-1].content) == {
        "current_password": "old-pass",
        "new_password": "new-pass-123",
    }


def test_from_settings_uses_configured_base_url_and_token():
    settings = Settings(api_base_url="http://configured.test/", access_token="from-settings")
    recorder = Recorder(lambda request: httpx.Response(200, json=[]))

    client = ExpenseApiClient.from_settings(settings, transport=httpx.MockTransport(recorder))
    asyncio.run(client.list_expenses())

    request = recorder.requests[0]
    assert request.url.host == "configured.test"
    assert request.headers["Authorization"] == "Bearer from-settings"


def test_non_object_profile_reply_is_a_failed_update():
    client, _ = _client(lambda request: httpx.Response(200, json=[1, 2]))

    with pytest.raises(MutationError, match="Failed to update profile") as excinfo:
        asyncio.run(client.update_profile({"email": "new@example.com"}))

    assert isinstance(excinfo.value, MalformedMutationResponseError)
    assert excinfo.value.operation == "update profile"
    assert excinfo.value.status_code == 200


@pytest.mark.parametrize("method", ["create_expense", "update_expense"])
def test_invalid_expense_write_reply_is_a_failed_mutation(method):
    client, _ = _client(lambda request: httpx.Response(201, json={"unexpected": True}))
    draft = ExpenseDraft(amount=Decimal("5"), date=date(2024, 2, 1))
    args = (draft,) if method == "create_expense" else (3, draft)

    with pytest.raises(MalformedMutationResponseError) as excinfo:
        asyncio.run(getattr(client, method)(*args))

    assert isinstance(excinfo.value, MutationError)
    assert excinfo.value.operation == method.replace("_", " ")


def test_store_refetches_after_malformed_create_reply():
    def respond(request: httpx.Request) -> httpx.Response:
        if request.method == "POST":
            return httpx.Response(201, json={"unexpected": True})
        return httpx.Response(200, json=EXPENSES_PAYLOAD)

    client, recorder = _client(respond)
    store = ExpenseStore(client)
    draft = ExpenseDraft(amount=Decimal("30.5"), date=date(2024, 1, 15))

    with pytest.raises(MutationError):
        asyncio.run(store.create(draft))

    assert [(request.method, request.url.path) for request in recorder.requests] == [
        ("POST", "/expenses"),
        ("GET", "/expenses"),
    ]
    assert [expense.id for expense in store.records] == [1, 2]
