"""Visualization utilities for SpendView dashboards."""

from .charts import NO_DATA_MESSAGE, build_category_chart, build_monthly_chart
from .theme import theme_tokens

__all__ = [
    "NO_DATA_MESSAGE",
    "build_category_chart",
    "build_monthly_chart",
    "theme_tokens",
]
