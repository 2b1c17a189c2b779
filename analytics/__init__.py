"""Aggregation helpers shared across SpendView services."""

from analytics.categorisation import (
    build_category_breakdown,
    category_totals,
    compute_category_total,
)
from analytics.datasets import (
    CATEGORY_PALETTE,
    MONTHLY_BAR_COLOR,
    build_category_dataset,
    build_monthly_dataset,
)
from analytics.frames import exact_sum, expenses_frame
from analytics.statistics import summary_statistics
from analytics.trends import monthly_totals

__all__ = [
    "CATEGORY_PALETTE",
    "MONTHLY_BAR_COLOR",
    "build_category_breakdown",
    "build_category_dataset",
    "build_monthly_dataset",
    "category_totals",
    "compute_category_total",
    "exact_sum",
    "expenses_frame",
    "monthly_totals",
    "summary_statistics",
]
