"""Sort specification state machine and expense comparators."""

from __future__ import annotations

from functools import cmp_to_key
from typing import Any, Callable, Iterable, Optional

from core.models import SORT_FIELDS, Expense, ExpenseId, SortSpec

__all__ = [
    "Comparator",
    "SortEngine",
    "build_comparator",
    "next_sort_spec",
    "sort_expenses",
    "sort_indicator",
]

Comparator = Callable[[Expense, Expense], int]

_FIELD_KEYS: dict[str, Callable[[Expense], Any]] = {
    "amount": lambda expense: expense.amount,
    "date": lambda expense: expense.date,
    "description": lambda expense: expense.description or "",
    "category": lambda expense: expense.category or "",
}


def _compare(left: Any, right: Any) -> int:
    return (left > right) - (left < right)


def _id_key(value: ExpenseId) -> tuple[int, Any]:
    # Integer ids order numerically and always before string ids.
    if isinstance(value, int):
        return (0, value)
    return (1, str(value))


def next_sort_spec(spec: SortSpec, field: str) -> SortSpec:
    """Return the spec that follows a click on the ``field`` column header.

    Clicking the active column flips its direction; clicking another column
    selects it in ascending order.
    """

    if field not in SORT_FIELDS:
        raise ValueError(f"Unsupported sort field: {field!r}")
    if field == spec.field:
        return SortSpec(field=field, direction="asc" if spec.descending else "desc")
    return SortSpec(field=field, direction="asc")


def build_comparator(spec: SortSpec) -> Comparator:
    """Build a strict total order over expenses for ``spec``.

    Ties on the sort field fall back to the expense id in the same direction,
    so a descending sort is always the exact reverse of the ascending one.
    """

    key = _FIELD_KEYS[spec.field]
    sign = -1 if spec.descending else 1

    def compare(left: Expense, right: Expense) -> int:
        result = _compare(key(left), key(right))
        if result == 0:
            result = _compare(_id_key(left.id), _id_key(right.id))
        return sign * result

    return compare


def sort_expenses(expenses: Iterable[Expense], spec: SortSpec) -> list[Expense]:
    return sorted(expenses, key=cmp_to_key(build_comparator(spec)))


def sort_indicator(spec: SortSpec, field: str) -> str:
    """Arrow shown next to a column header; empty for inactive columns."""

    if field != spec.field:
        return ""
    return "↓" if spec.descending else "↑"


class SortEngine:
    """Owns the active :class:`SortSpec` and applies the toggle protocol."""

    def __init__(self, spec: Optional[SortSpec] = None) -> None:
        self._spec = spec or SortSpec()

    @property
    def spec(self) -> SortSpec:
        return self._spec

    def request_sort(self, field: str) -> SortSpec:
        self._spec = next_sort_spec(self._spec, field)
        return self._spec

    def comparator(self) -> Comparator:
        return build_comparator(self._spec)

    def sort(self, expenses: Iterable[Expense]) -> list[Expense]:
        return sort_expenses(expenses, self._spec)
