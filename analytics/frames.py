"""DataFrame construction shared by the aggregation helpers."""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable

import pandas as pd

from core.models import Expense

__all__ = ["FRAME_COLUMNS", "exact_sum", "expenses_frame"]

FRAME_COLUMNS: list[str] = [
    "id",
    "date",
    "amount",
    "description",
    "category",
    "category_label",
]


def exact_sum(values: Iterable[Decimal]) -> Decimal:
    """Sum decimal amounts without passing through floating point."""

    return sum(values, Decimal(0))


def expenses_frame(expenses: Iterable[Expense]) -> pd.DataFrame:
    """Return a frame with one row per expense.

    ``amount`` keeps its :class:`~decimal.Decimal` values (object dtype) so that
    grouped totals stay exact; ``date`` is a datetime column for period bucketing.
    """

    records = [
        {
            "id": expense.id,
            "date": pd.Timestamp(expense.date),
            "amount": expense.amount,
            "description": expense.description,
            "category": expense.category,
            "category_label": expense.category_label,
        }
        for expense in expenses
    ]
    if not records:
        return pd.DataFrame(columns=FRAME_COLUMNS)

    df = pd.DataFrame.from_records(records, columns=FRAME_COLUMNS)
    df["amount"] = df["amount"].astype(object)
    df["date"] = pd.to_datetime(df["date"])
    return df
