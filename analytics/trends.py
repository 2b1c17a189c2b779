"""Monthly expense trend helpers."""

from __future__ import annotations

from typing import Iterable

from analytics.frames import exact_sum, expenses_frame
from core.models import Expense, MonthlyTotal

__all__ = ["MONTH_LABEL_FORMAT", "monthly_totals"]

MONTH_LABEL_FORMAT = "%b %Y"


def monthly_totals(expenses: Iterable[Expense]) -> list[MonthlyTotal]:
    """Return per-month totals in chronological order.

    Buckets are keyed by the (year, month) period of each expense date and the
    result is ordered by that period, never by its text label.
    """

    df = expenses_frame(expenses)
    if df.empty:
        return []

    df["period"] = df["date"].dt.to_period("M")
    grouped = df.groupby("period", sort=True)["amount"].agg(exact_sum)

    return [
        MonthlyTotal(
            year=int(period.year),
            month=int(period.month),
            label=period.strftime(MONTH_LABEL_FORMAT),
            total=total,
        )
        for period, total in grouped.items()
    ]
