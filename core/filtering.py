"""Filter predicate applied before sorting, pagination and aggregation."""

from __future__ import annotations

from typing import Callable, Iterable

from core.models import Expense, FilterCriteria

__all__ = [
    "build_predicate",
    "filter_expenses",
    "matches",
    "unique_categories",
]


def matches(expense: Expense, criteria: FilterCriteria) -> bool:
    """Return ``True`` when ``expense`` satisfies every active criterion."""

    if criteria.category and expense.category != criteria.category:
        return False
    if criteria.start_date is not None and expense.date < criteria.start_date:
        return False
    if criteria.end_date is not None and expense.date > criteria.end_date:
        return False
    return True


def build_predicate(criteria: FilterCriteria) -> Callable[[Expense], bool]:
    def predicate(expense: Expense) -> bool:
        return matches(expense, criteria)

    return predicate


def filter_expenses(expenses: Iterable[Expense], criteria: FilterCriteria) -> list[Expense]:
    """Return the expenses matching ``criteria`` in their original order."""

    predicate = build_predicate(criteria)
    return [expense for expense in expenses if predicate(expense)]


def unique_categories(expenses: Iterable[Expense]) -> list[str]:
    """Distinct non-empty categories in first-seen order, for the category picker."""

    seen: dict[str, None] = {}
    for expense in expenses:
        if expense.category:
            seen.setdefault(expense.category, None)
    return list(seen)
