"""Shared Plotly theme tokens for SpendView visualizations."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ThemeTokens:
    label_color: str = "#475569"
    label_font: str = "Inter"
    label_size: int = 12
    neutral_grey: str = "#94A3B8"
    neutral_white: str = "#FFFFFF"
    neutral_background: str = "rgba(148, 163, 184, 0.25)"
    currency_symbol: str = "$"
    chart_height: int = 300


_TOKENS = ThemeTokens()


def theme_tokens() -> ThemeTokens:
    """Return the shared visualization tokens.

    Series colours come from the prepared datasets; the tokens only cover
    layout, typography and the empty-state styling.
    """

    return _TOKENS
