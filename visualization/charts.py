"""Plotly chart builders for the SpendView dashboard."""

from __future__ import annotations

from typing import Optional

import plotly.graph_objects as go

from core.models import ChartDataset

from .theme import theme_tokens

TOKENS = theme_tokens()

NO_DATA_MESSAGE = "No data available"

__all__ = [
    "NO_DATA_MESSAGE",
    "build_category_chart",
    "build_monthly_chart",
]


def _empty_plotly_figure(message: str) -> go.Figure:
    fig = go.Figure()
    fig.update_layout(
        annotations=[
            dict(
                text=message,
                x=0.5,
                y=0.5,
                xref="paper",
                yref="paper",
                showarrow=False,
                font=dict(color=TOKENS.neutral_grey, size=14, family=TOKENS.label_font),
            )
        ],
        xaxis=dict(visible=False),
        yaxis=dict(visible=False),
        margin=dict(l=0, r=0, t=20, b=0),
        height=TOKENS.chart_height,
        plot_bgcolor="rgba(0,0,0,0)",
        paper_bgcolor="rgba(0,0,0,0)",
    )
    return fig


def build_category_chart(dataset: Optional[ChartDataset]) -> go.Figure:
    """Render the category dataset as a pie chart with a right-hand legend."""

    if not dataset or not dataset["values"]:
        return _empty_plotly_figure(NO_DATA_MESSAGE)

    currency = TOKENS.currency_symbol
    fig = go.Figure(
        go.Pie(
            labels=dataset["labels"],
            values=dataset["values"],
            marker=dict(colors=dataset["colors"], line=dict(color=TOKENS.neutral_white, width=2)),
            sort=False,
            textposition="inside",
            texttemplate="%{percent:.0%}",
            hovertemplate=f"%{{label}}<br>{currency}%{{value:,.2f}}<extra></extra>",
        )
    )
    fig.update_layout(
        margin=dict(l=0, r=0, t=0, b=0),
        height=TOKENS.chart_height,
        legend=dict(
            title="",
            orientation="v",
            yanchor="middle",
            y=0.5,
            xanchor="left",
            x=1.05,
            font=dict(color=TOKENS.label_color, family=TOKENS.label_font, size=TOKENS.label_size),
        ),
        showlegend=True,
    )
    return fig


def build_monthly_chart(dataset: Optional[ChartDataset]) -> go.Figure:
    """Render the monthly dataset as a bar chart, keeping the dataset's month order."""

    if not dataset or not dataset["values"]:
        return _empty_plotly_figure(NO_DATA_MESSAGE)

    currency = TOKENS.currency_symbol
    fig = go.Figure(
        go.Bar(
            x=dataset["labels"],
            y=dataset["values"],
            name="Monthly Expenses",
            marker=dict(color=dataset["colors"]),
            hovertemplate=f"%{{x}}<br>{currency}%{{y:,.2f}}<extra></extra>",
        )
    )
    fig.update_layout(
        title="",
        margin=dict(l=0, r=0, t=20, b=0),
        height=TOKENS.chart_height,
        showlegend=True,
        legend=dict(
            orientation="h",
            yanchor="bottom",
            y=1.02,
            xanchor="left",
            x=0.0,
            font=dict(color=TOKENS.label_color, family=TOKENS.label_font, size=TOKENS.label_size),
        ),
        xaxis=dict(type="category", categoryorder="array", categoryarray=dataset["labels"], showgrid=False),
        yaxis=dict(showgrid=True, gridcolor=TOKENS.neutral_background, zeroline=False),
        plot_bgcolor="rgba(0,0,0,0)",
        paper_bgcolor="rgba(0,0,0,0)",
    )
    return fig
