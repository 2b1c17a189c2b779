"""HTTP collaborators for the SpendView engine."""

from .api import ExpenseApiClient, TokenProvider

__all__ = ["ExpenseApiClient", "TokenProvider"]
