"""Chart-ready datasets prepared from the aggregates.

Rendering is left to the visualization layer; these helpers only decide
labels, values, colours and ordering.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Mapping, Optional, Sequence

from core.models import ChartDataset, MonthlyTotal

__all__ = [
    "CATEGORY_CHART_TITLE",
    "CATEGORY_PALETTE",
    "MONTHLY_BAR_COLOR",
    "MONTHLY_CHART_TITLE",
    "build_category_dataset",
    "build_monthly_dataset",
]

CATEGORY_CHART_TITLE = "Expenses by Category"
MONTHLY_CHART_TITLE = "Monthly Expense Trend"

CATEGORY_PALETTE: tuple[str, ...] = (
    "#FF6384",
    "#36A2EB",
    "#FFCE56",
    "#4BC0C0",
    "#9966FF",
    "#FF9F40",
    "#8D99AE",
    "#EF476F",
)
MONTHLY_BAR_COLOR = "#36A2EB"


def build_category_dataset(totals: Mapping[str, Decimal]) -> Optional[ChartDataset]:
    """Return the pie dataset for ``totals`` or ``None`` when there is nothing to plot."""

    if not totals:
        return None

    labels = list(totals.keys())
    colors = [CATEGORY_PALETTE[index % len(CATEGORY_PALETTE)] for index in range(len(labels))]
    return {
        "title": CATEGORY_CHART_TITLE,
        "labels": labels,
        "values": [float(totals[label]) for label in labels],
        "colors": colors,
    }


def build_monthly_dataset(monthly: Sequence[MonthlyTotal]) -> Optional[ChartDataset]:
    """Return the bar dataset for chronologically ordered ``monthly`` totals."""

    if not monthly:
        return None

    return {
        "title": MONTHLY_CHART_TITLE,
        "labels": [entry.label for entry in monthly],
        "values": [float(entry.total) for entry in monthly],
        "colors": [MONTHLY_BAR_COLOR] * len(monthly),
    }
