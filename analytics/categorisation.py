"""Category aggregation helpers."""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Mapping

import numpy as np
import pandas as pd

from analytics.frames import exact_sum, expenses_frame
from core.models import Expense

__all__ = [
    "build_category_breakdown",
    "category_totals",
    "compute_category_total",
]


def category_totals(expenses: Iterable[Expense]) -> dict[str, Decimal]:
    """Return the summed amount per display category.

    Expenses without a category are grouped under ``Uncategorized``. Callers
    must not rely on the iteration order of the result.
    """

    df = expenses_frame(expenses)
    if df.empty:
        return {}

    grouped = df.groupby("category_label", sort=False)["amount"].agg(exact_sum)
    return {str(label): total for label, total in grouped.items()}


def compute_category_total(expenses: Iterable[Expense], category_name: str) -> Decimal:
    """Return total spend for ``category_name`` (display label) within the supplied expenses."""

    return category_totals(expenses).get(category_name, Decimal(0))


def build_category_breakdown(totals: Mapping[str, Decimal]) -> pd.DataFrame:
    """Return a DataFrame ranking categories by spend, with their share of the total."""

    if not totals:
        return pd.DataFrame(columns=["Category", "Total", "Share", "Rank"])

    breakdown = pd.DataFrame(
        {
            "Category": list(totals.keys()),
            "Total": [float(value) for value in totals.values()],
        }
    )
    breakdown = breakdown.sort_values(["Total", "Category"], ascending=[False, True]).reset_index(drop=True)

    total_value = float(breakdown["Total"].sum())
    if total_value > 0:
        breakdown["Share"] = breakdown["Total"] / total_value
    else:
        breakdown["Share"] = 0.0
    breakdown["Rank"] = np.arange(1, len(breakdown) + 1)
    return breakdown
