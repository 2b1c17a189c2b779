"""Create and edit form shared by the expense workflows."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional

import streamlit as st
from pydantic import ValidationError

from app.layout import category_options
from core import ExpenseDraft

NO_CATEGORY = "Select a category"


def render_expense_form(
    form_key: str,
    initial: Optional[ExpenseDraft] = None,
    *,
    submit_label: str = "Save",
) -> Optional[ExpenseDraft]:
    """Render the expense form and return a validated draft once it is submitted."""

    extra = [initial.category] if initial and initial.category else []
    options = [NO_CATEGORY, *category_options(extra)]
    current_category = initial.category if initial and initial.category else NO_CATEGORY

    with st.form(form_key, clear_on_submit=initial is None):
        amount = st.number_input(
            "Amount",
            min_value=0.0,
            step=0.01,
            format="%.2f",
            value=float(initial.amount) if initial else 0.0,
        )
        description = st.text_input("Description", value=initial.description if initial else "")
        expense_date = st.date_input("Date", value=initial.date if initial else date.today())
        category = st.selectbox("Category", options, index=options.index(current_category))
        submitted = st.form_submit_button(submit_label, type="primary")

    if not submitted:
        return None

    try:
        return ExpenseDraft(
            amount=Decimal(f"{amount:.2f}"),
            description=description.strip(),
            date=expense_date,
            category=None if category == NO_CATEGORY else category,
        )
    except ValidationError as exc:
        st.error(f"Please check the form: {exc.errors()[0]['msg']}")
        return None


__all__ = ["NO_CATEGORY", "render_expense_form"]
