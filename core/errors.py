"""Error taxonomy shared by the SpendView client, store and coordinators."""

from __future__ import annotations

from typing import Optional

__all__ = [
    "SpendViewError",
    "FetchError",
    "MalformedResponseError",
    "MutationError",
    "MalformedMutationResponseError",
    "DeleteStateError",
    "DeleteInProgressError",
]


class SpendViewError(RuntimeError):
    """Base class for every error surfaced to the rendering layer."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class FetchError(SpendViewError):
    """Raised when a list or single-record fetch fails."""


class MalformedResponseError(FetchError):
    """Raised when the server answers with a body that does not match the expense shape."""


class MutationError(SpendViewError):
    """Raised when a create, update, delete or profile write fails."""

    def __init__(
        self,
        message: str,
        *,
        operation: str,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message, status_code=status_code)
        self.operation = operation


class MalformedMutationResponseError(MutationError):
    """Raised when a write was accepted but its response body is not the expected shape.

    The server may have applied the change, so callers should re-fetch.
    """


class DeleteStateError(SpendViewError):
    """Raised when a delete action is not valid in the coordinator's current state."""


class DeleteInProgressError(DeleteStateError):
    """Raised when a second delete is requested while one is still in flight."""
