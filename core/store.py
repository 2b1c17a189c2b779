"""Authoritative expense list held between fetches, with a stale-response guard."""

from __future__ import annotations

import asyncio
from typing import Optional, Protocol, Sequence

from config.logging_config import get_logger
from core.errors import FetchError, MalformedMutationResponseError, MalformedResponseError, MutationError
from core.models import Expense, ExpenseDraft, ExpenseId

__all__ = ["ExpenseBackend", "ExpenseStore"]

logger = get_logger(__name__)


class ExpenseBackend(Protocol):
    async def list_expenses(self) -> Sequence[Expense]: ...

    async def get_expense(self, expense_id: ExpenseId) -> Expense: ...

    async def create_expense(self, draft: ExpenseDraft) -> Expense: ...

    async def update_expense(self, expense_id: ExpenseId, draft: ExpenseDraft) -> Expense: ...

    async def delete_expense(self, expense_id: ExpenseId) -> None: ...


class ExpenseStore:
    """Keeps the last successfully fetched records and the current banner error.

    Each :meth:`refresh` supersedes the previous one: the older in-flight
    request is cancelled and, should its response still arrive, it is
    discarded. Only the latest request may update the records.
    """

    def __init__(self, backend: ExpenseBackend) -> None:
        self._backend = backend
        self._records: tuple[Expense, ...] = ()
        self._error: Optional[str] = None
        self._loading = False
        self._generation = 0
        self._inflight: Optional[asyncio.Future] = None

    @property
    def records(self) -> tuple[Expense, ...]:
        return self._records

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def is_loading(self) -> bool:
        return self._loading

    def clear_error(self) -> None:
        self._error = None

    async def refresh(self) -> bool:
        """Fetch the full expense list; return ``True`` when the response was applied."""

        self._generation += 1
        generation = self._generation

        previous = self._inflight
        if previous is not None and not previous.done():
            previous.cancel()

        task = asyncio.ensure_future(self._backend.list_expenses())
        self._inflight = task
        self._loading = True

        try:
            records = await task
        except asyncio.CancelledError:
            if generation != self._generation:
                logger.debug("Expense fetch %s superseded by %s", generation, self._generation)
                return False
            self._loading = False
            raise
        except FetchError as exc:
            if generation != self._generation:
                return False
            self._loading = False
            self._error = str(exc)
            logger.warning("Failed to fetch expenses: %s", exc)
            return False

        if generation != self._generation:
            logger.debug("Discarding stale expense response %s", generation)
            return False

        self._records = tuple(records)
        self._error = None
        self._loading = False
        self._inflight = None
        return True

    async def load(self, expense_id: ExpenseId) -> Expense:
        """Fetch one expense for the edit workflow."""

        try:
            return await self._backend.get_expense(expense_id)
        except FetchError as exc:
            logger.warning("Failed to fetch expense %s: %s", expense_id, exc)
            raise

    async def create(self, draft: ExpenseDraft) -> Expense:
        try:
            created = await self._backend.create_expense(draft)
        except (MalformedMutationResponseError, MalformedResponseError) as exc:
            # The write may have landed; the list must still reflect the server.
            logger.warning("Create expense returned a malformed response: %s", exc)
            await self.refresh()
            raise
        except MutationError as exc:
            logger.warning("Failed to create expense: %s", exc)
            raise
        await self.refresh()
        return created

    async def update(self, expense_id: ExpenseId, draft: ExpenseDraft) -> Expense:
        try:
            updated = await self._backend.update_expense(expense_id, draft)
        except (MalformedMutationResponseError, MalformedResponseError) as exc:
            logger.warning("Update of expense %s returned a malformed response: %s", expense_id, exc)
            await self.refresh()
            raise
        except MutationError as exc:
            logger.warning("Failed to update expense %s: %s", expense_id, exc)
            raise
        await self.refresh()
        return updated

    async def delete(self, expense_id: ExpenseId) -> None:
        """Delete without refreshing; the :class:`DeleteCoordinator` drives the re-fetch."""

        await self._backend.delete_expense(expense_id)
