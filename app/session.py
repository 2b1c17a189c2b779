"""Per-browser-session wiring of the SpendView engine for the Streamlit app."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Optional, TypeVar

import streamlit as st

from client import ExpenseApiClient
from config import Settings, get_logger, get_settings
from core import DeleteCoordinator, ExpenseStore
from core.view import ViewOrchestrator, ViewParameters

T = TypeVar("T")

SESSION_KEY = "spendview_session"
VIEW_PARAMS_KEY = "spendview_view_params"

logger = get_logger(__name__)


def run(awaitable: Awaitable[T]) -> T:
    """Drive one async workflow to completion inside a Streamlit rerun."""

    async def _runner() -> T:
        return await awaitable

    return asyncio.run(_runner())


@dataclass
class AppSession:
    settings: Settings
    client: ExpenseApiClient
    store: ExpenseStore
    orchestrator: ViewOrchestrator
    deleter: DeleteCoordinator
    loaded: bool = False

    def refresh(self) -> bool:
        applied = run(self.store.refresh())
        self.loaded = True
        self.sync()
        return applied

    def ensure_loaded(self) -> None:
        if not self.loaded:
            self.refresh()

    def sync(self) -> None:
        """Push the store's records into the orchestrator and persist the parameters."""

        self.orchestrator.set_expenses(self.store.records)
        save_parameters(self.orchestrator.parameters)


def _token_provider() -> Optional[str]:
    return st.session_state.get("access_token") or get_settings().access_token


def load_parameters() -> Optional[ViewParameters]:
    stored = st.session_state.get(VIEW_PARAMS_KEY)
    if not stored:
        return None
    try:
        return ViewParameters.from_dict(stored)
    except (TypeError, ValueError):
        logger.warning("Discarding unreadable view parameters from session state")
        return None


def save_parameters(parameters: ViewParameters) -> None:
    st.session_state[VIEW_PARAMS_KEY] = parameters.to_dict()


def get_session() -> AppSession:
    """Return the session bundle, building it on the first rerun of a browser session."""

    existing = st.session_state.get(SESSION_KEY)
    if isinstance(existing, AppSession):
        return existing

    settings = get_settings()
    client = ExpenseApiClient.from_settings(settings, token_provider=_token_provider)
    store = ExpenseStore(client)
    orchestrator = ViewOrchestrator(
        parameters=load_parameters(),
        page_size=settings.page_size,
    )
    deleter = DeleteCoordinator(store.delete, store.refresh)

    session = AppSession(
        settings=settings,
        client=client,
        store=store,
        orchestrator=orchestrator,
        deleter=deleter,
    )
    st.session_state[SESSION_KEY] = session
    logger.debug("Created SpendView session for %s", settings.api_base_url)
    return session


__all__ = [
    "AppSession",
    "get_session",
    "load_parameters",
    "run",
    "save_parameters",
]
