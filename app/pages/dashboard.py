"""Dashboard page: headline statistics plus category and monthly charts."""

from __future__ import annotations

import streamlit as st

from analytics import build_category_breakdown
from app.layout import card, category_options, render_filter_sidebar
from app.session import AppSession, save_parameters
from core import DerivedView, unique_categories
from visualization import build_category_chart, build_monthly_chart, theme_tokens


def _render_summary(view: DerivedView) -> None:
    currency = theme_tokens().currency_symbol
    summary = view.summary
    cols = st.columns(4)
    cols[0].metric("Total spent", f"{currency}{summary.total:,.2f}")
    cols[1].metric("Expenses", f"{summary.count}")
    cols[2].metric("Average expense", f"{currency}{summary.mean:,.2f}")
    cols[3].metric("Largest expense", f"{currency}{summary.max:,.2f}")


def _render_breakdown(view: DerivedView) -> None:
    breakdown = build_category_breakdown(view.category_totals)
    if breakdown.empty:
        st.info("No category spend recorded yet.")
        return
    st.dataframe(
        breakdown,
        hide_index=True,
        use_container_width=True,
        column_config={
            "Total": st.column_config.NumberColumn(format=f"{theme_tokens().currency_symbol}%.2f"),
            "Share": st.column_config.ProgressColumn(min_value=0.0, max_value=1.0, format="%.2f"),
        },
    )


def render_page(session: AppSession) -> None:
    """Render the dashboard page over the currently filtered expenses."""

    st.title("Dashboard")
    orchestrator = session.orchestrator
    if session.store.error:
        st.error(session.store.error)

    categories = category_options(unique_categories(orchestrator.expenses))
    changed = render_filter_sidebar(orchestrator.parameters.criteria, categories)
    if changed is not None:
        orchestrator.set_filter(changed)
        save_parameters(orchestrator.parameters)
        st.rerun()

    view = orchestrator.view()
    if orchestrator.parameters.criteria.is_active:
        st.caption("Figures reflect the active filters.")

    with card("Summary"):
        _render_summary(view)

    left, right = st.columns(2, gap="medium")
    with left:
        with card("Expenses by Category"):
            st.plotly_chart(build_category_chart(view.category_chart), use_container_width=True, key="category-pie")
    with right:
        with card("Monthly Expense Trend"):
            st.plotly_chart(build_monthly_chart(view.monthly_chart), use_container_width=True, key="monthly-bar")

    with card("Category breakdown", suffix=f"{len(view.category_totals)} categories"):
        _render_breakdown(view)


__all__ = ["render_page"]
