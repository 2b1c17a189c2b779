"""Headline statistics over a filtered expense set."""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from analytics.frames import exact_sum, expenses_frame
from core.models import Expense, SummaryStats

__all__ = ["summary_statistics"]


def summary_statistics(expenses: Iterable[Expense]) -> SummaryStats:
    """Return count, total, mean and maximum amount.

    An empty set yields zeros for every figure.
    """

    df = expenses_frame(expenses)
    count = int(len(df))
    if count == 0:
        zero = Decimal(0)
        return SummaryStats(count=0, total=zero, mean=zero, max=zero)

    amounts = df["amount"].tolist()
    total = exact_sum(amounts)
    return SummaryStats(
        count=count,
        total=total,
        mean=total / count,
        max=max(amounts),
    )
