"""Confirm-then-delete state machine guarding destructive actions."""

from __future__ import annotations

from enum import Enum
from typing import Any, Awaitable, Callable, Optional

from config.logging_config import get_logger
from core.errors import DeleteInProgressError, DeleteStateError, MutationError
from core.models import Expense, ExpenseId

__all__ = ["DeleteCoordinator", "DeleteState"]

logger = get_logger(__name__)

DeleteCall = Callable[[ExpenseId], Awaitable[Any]]
RefreshCall = Callable[[], Awaitable[Any]]


class DeleteState(str, Enum):
    IDLE = "idle"
    CONFIRM_PENDING = "confirm_pending"
    DELETING = "deleting"


class DeleteCoordinator:
    """Coordinates ``Idle -> ConfirmPending -> Deleting -> Idle``.

    Only one delete may be in flight at a time. The record list is never
    edited locally: after a successful delete the injected ``refresh`` call
    re-fetches the authoritative list.
    """

    def __init__(self, delete: DeleteCall, refresh: RefreshCall) -> None:
        self._delete = delete
        self._refresh = refresh
        self._state = DeleteState.IDLE
        self._target: Optional[Expense] = None
        self._last_error: Optional[MutationError] = None

    @property
    def state(self) -> DeleteState:
        return self._state

    @property
    def target(self) -> Optional[Expense]:
        return self._target

    @property
    def is_busy(self) -> bool:
        return self._state is DeleteState.DELETING

    @property
    def last_error(self) -> Optional[MutationError]:
        return self._last_error

    def select(self, expense: Expense) -> None:
        """Ask for confirmation before deleting ``expense``."""

        if self.is_busy:
            raise DeleteInProgressError(
                f"Cannot select expense {expense.id} while expense {self._target.id} is being deleted."
            )
        self._target = expense
        self._last_error = None
        self._state = DeleteState.CONFIRM_PENDING

    def cancel(self) -> None:
        if self.is_busy:
            raise DeleteInProgressError("Cannot cancel a delete that is already in flight.")
        self._target = None
        self._last_error = None
        self._state = DeleteState.IDLE

    async def confirm(self) -> Expense:
        """Delete the selected expense, then refresh the record list.

        On failure the coordinator returns to ``ConfirmPending`` with the same
        target, records the error and re-raises it.
        """

        if self.is_busy:
            raise DeleteInProgressError("A delete is already in progress.")
        if self._state is not DeleteState.CONFIRM_PENDING or self._target is None:
            raise DeleteStateError("No expense is awaiting delete confirmation.")

        target = self._target
        self._state = DeleteState.DELETING
        logger.info("Deleting expense %s", target.id)

        succeeded = False
        try:
            await self._delete(target.id)
            succeeded = True
        except MutationError as exc:
            self._last_error = exc
            logger.warning("Failed to delete expense %s: %s", target.id, exc)
            raise
        finally:
            if succeeded:
                self._state = DeleteState.IDLE
                self._target = None
            else:
                self._state = DeleteState.CONFIRM_PENDING

        await self._refresh()
        return target
