"""Async HTTP client for the expense and user endpoints."""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional, Type, TypeVar

import httpx
from pydantic import ValidationError

from config.logging_config import get_logger
from config.settings import Settings
from core.errors import (
    FetchError,
    MalformedMutationResponseError,
    MalformedResponseError,
    MutationError,
    SpendViewError,
)
from core.models import Expense, ExpenseDraft, ExpenseId

__all__ = ["ExpenseApiClient", "TokenProvider"]

logger = get_logger(__name__)

TokenProvider = Callable[[], Optional[str]]
T = TypeVar("T")


def _detail_message(response: httpx.Response) -> Optional[str]:
    """Extract a human readable ``detail`` from an error body, if there is one."""

    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, Mapping):
        return None

    detail = body.get("detail")
    if isinstance(detail, str):
        return detail
    if isinstance(detail, Mapping) and isinstance(detail.get("msg"), str):
        return detail["msg"]
    if isinstance(detail, list) and detail and isinstance(detail[0], Mapping):
        message = detail[0].get("msg")
        if isinstance(message, str):
            return message
    return None


def _parse_expense(payload: Any) -> Expense:
    try:
        return Expense.model_validate(payload)
    except ValidationError as exc:
        raise MalformedResponseError(f"Unexpected expense payload: {exc.error_count()} invalid field(s)") from exc


def _parse_profile(payload: Any) -> dict[str, Any]:
    if not isinstance(payload, Mapping):
        raise MalformedResponseError("Expected a user profile object")
    return dict(payload)


class ExpenseApiClient:
    """Thin wrapper over :class:`httpx.AsyncClient` for the expense API.

    The bearer token is read from ``token_provider`` on every request; the
    client never stores or refreshes it.
    """

    def __init__(
        self,
        base_url: str,
        *,
        token_provider: Optional[TokenProvider] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._token_provider = token_provider
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> "ExpenseApiClient":
        if "token_provider" not in kwargs and settings.access_token:
            token = settings.access_token
            kwargs["token_provider"] = lambda: token
        return cls(**settings.client_kwargs, **kwargs)

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        token = self._token_provider() if self._token_provider else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        *,
        action: str,
        error_cls: Type[SpendViewError],
        json: Any = None,
    ) -> httpx.Response:
        def fail(message: str, status_code: Optional[int] = None) -> SpendViewError:
            if error_cls is MutationError:
                return MutationError(message, operation=action, status_code=status_code)
            return error_cls(message, status_code=status_code)

        logger.debug("%s %s", method, path)
        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
                headers=self._headers(),
            ) as client:
                response = await client.request(method, path, json=json)
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            detail = _detail_message(exc.response) or f"HTTP {status}"
            logger.warning("%s %s failed with %s", method, path, status)
            raise fail(f"Failed to {action}: {detail}", status) from exc
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise fail(f"Failed to {action}: {exc.__class__.__name__}") from exc
        return response

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise MalformedResponseError("Response body is not valid JSON") from exc

    @classmethod
    def _written(cls, response: httpx.Response, action: str, parse: Callable[[Any], T]) -> T:
        """Parse the body of an accepted write; a bad shape is reported as a failed write."""

        try:
            return parse(cls._json(response))
        except MalformedResponseError as exc:
            logger.warning("Malformed response to %s (HTTP %s): %s", action, response.status_code, exc)
            raise MalformedMutationResponseError(
                f"Failed to {action}: {exc}", operation=action, status_code=response.status_code
            ) from exc

    async def list_expenses(self) -> list[Expense]:
        response = await self._request("GET", "/expenses", action="fetch expenses", error_cls=FetchError)
        payload = self._json(response)
        if not isinstance(payload, list):
            raise MalformedResponseError("Expected a list of expenses")
        return [_parse_expense(item) for item in payload]

    async def get_expense(self, expense_id: ExpenseId) -> Expense:
        response = await self._request(
            "GET", f"/expenses/{expense_id}", action="fetch expense details", error_cls=FetchError
        )
        return _parse_expense(self._json(response))

    async def create_expense(self, draft: ExpenseDraft) -> Expense:
        response = await self._request(
            "POST",
            "/expenses",
            action="create expense",
            error_cls=MutationError,
            json=draft.to_payload(),
        )
        return self._written(response, "create expense", _parse_expense)

    async def update_expense(self, expense_id: ExpenseId, draft: ExpenseDraft) -> Expense:
        response = await self._request(
            "PUT",
            f"/expenses/{expense_id}",
            action="update expense",
            error_cls=MutationError,
            json=draft.to_payload(),
        )
        return self._written(response, "update expense", _parse_expense)

    async def delete_expense(self, expense_id: ExpenseId) -> None:
        await self._request(
            "DELETE", f"/expenses/{expense_id}", action="delete expense", error_cls=MutationError
        )

    async def get_profile(self) -> dict[str, Any]:
        response = await self._request(
            "GET", "/users/me", action="fetch user information", error_cls=FetchError
        )
        return _parse_profile(self._json(response))

    async def update_profile(self, profile: Mapping[str, Any]) -> dict[str, Any]:
        response = await self._request(
            "PUT", "/users/me", action="update profile", error_cls=MutationError, json=dict(profile)
        )
        return self._written(response, "update profile", _parse_profile)

    async def change_password(self, current_password: str, new_password: str) -> None:
        await self._request(
            "PUT",
            "/users/password",
            action="update password",
            error_cls=MutationError,
            json={"current_password": current_password, "new_password": new_password},
        )
