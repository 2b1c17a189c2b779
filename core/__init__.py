"""Core domain package for the SpendView expense engine.

The view orchestrator lives in :mod:`core.view`; it depends on the
``analytics`` package and is therefore imported from there directly.
"""

from .models import (
    CATEGORIES,
    DEFAULT_PAGE_SIZE,
    UNCATEGORIZED,
    ChartDataset,
    DerivedView,
    Expense,
    ExpenseDraft,
    FilterCriteria,
    MonthlyTotal,
    Page,
    PageState,
    SortSpec,
    SummaryStats,
)
from .errors import (
    DeleteInProgressError,
    DeleteStateError,
    FetchError,
    MalformedMutationResponseError,
    MalformedResponseError,
    MutationError,
    SpendViewError,
)
from .deletion import DeleteCoordinator, DeleteState
from .filtering import filter_expenses, matches, unique_categories
from .pagination import ELLIPSIS, page_window, paginate, total_pages
from .sorting import SortEngine, build_comparator, sort_expenses, sort_indicator
from .store import ExpenseBackend, ExpenseStore

__all__ = [
    "CATEGORIES",
    "DEFAULT_PAGE_SIZE",
    "ELLIPSIS",
    "UNCATEGORIZED",
    "ChartDataset",
    "DeleteCoordinator",
    "DeleteInProgressError",
    "DeleteState",
    "DeleteStateError",
    "DerivedView",
    "Expense",
    "ExpenseBackend",
    "ExpenseDraft",
    "ExpenseStore",
    "FetchError",
    "FilterCriteria",
    "MalformedMutationResponseError",
    "MalformedResponseError",
    "MonthlyTotal",
    "MutationError",
    "Page",
    "PageState",
    "SortEngine",
    "SortSpec",
    "SpendViewError",
    "SummaryStats",
    "build_comparator",
    "filter_expenses",
    "matches",
    "page_window",
    "paginate",
    "sort_expenses",
    "sort_indicator",
    "total_pages",
    "unique_categories",
]
