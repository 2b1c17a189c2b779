"""Expense list page: filters, sortable columns, pagination and the edit workflows."""

from __future__ import annotations

from typing import Optional

import streamlit as st

from app.layout import card, category_options, render_filter_sidebar
from app.pages.expense_form import render_expense_form
from app.session import AppSession, run, save_parameters
from core import (
    ELLIPSIS,
    DeleteState,
    Expense,
    ExpenseDraft,
    FetchError,
    MutationError,
    Page,
    SortSpec,
    SpendViewError,
    sort_indicator,
    unique_categories,
)
from visualization import theme_tokens

FLASH_KEY = "expenses_flash"
EDITING_KEY = "expenses_editing"

COLUMNS: tuple[tuple[str, str], ...] = (
    ("date", "Date"),
    ("description", "Description"),
    ("category", "Category"),
    ("amount", "Amount"),
)
COLUMN_WIDTHS = (1.2, 2.4, 1.4, 1.1, 1.4)


def format_amount(expense: Expense) -> str:
    return f"{theme_tokens().currency_symbol}{expense.amount:,.2f}"


def format_date(expense: Expense) -> str:
    return expense.date.strftime("%b %d, %Y")


def header_label(spec: SortSpec, field: str, label: str) -> str:
    indicator = sort_indicator(spec, field)
    return f"{label} {indicator}" if indicator else label


def _flash(message: str) -> None:
    st.session_state[FLASH_KEY] = message


def _render_flash() -> None:
    message = st.session_state.pop(FLASH_KEY, None)
    if message:
        st.success(message)


def _render_error_banner(session: AppSession) -> None:
    error = session.store.error
    if not error:
        return
    banner, retry = st.columns((5, 1))
    banner.error(error)
    if retry.button("Retry", key="retry-fetch"):
        session.refresh()
        st.rerun()


def _render_create_card(session: AppSession) -> None:
    with st.expander("Add expense", expanded=False):
        draft = render_expense_form("create-expense", submit_label="Add expense")
        if draft is None:
            return
        try:
            run(session.store.create(draft))
        except SpendViewError as exc:
            st.error(str(exc))
            return
        session.sync()
        _flash("Expense added.")
        st.rerun()


def _render_edit_card(session: AppSession) -> None:
    editing: Optional[Expense] = st.session_state.get(EDITING_KEY)
    if editing is None:
        return

    with card("Edit expense", suffix=f"#{editing.id}"):
        draft = render_expense_form(
            f"edit-expense-{editing.id}",
            ExpenseDraft.from_expense(editing),
            submit_label="Update expense",
        )
        if st.button("Cancel editing", key="cancel-edit"):
            st.session_state.pop(EDITING_KEY, None)
            st.rerun()
        if draft is None:
            return
        try:
            run(session.store.update(editing.id, draft))
        except SpendViewError as exc:
            st.error(str(exc))
            return
        st.session_state.pop(EDITING_KEY, None)
        session.sync()
        _flash("Expense updated.")
        st.rerun()


def _start_edit(session: AppSession, expense: Expense) -> None:
    try:
        st.session_state[EDITING_KEY] = run(session.store.load(expense.id))
    except FetchError as exc:
        st.error(str(exc))
        return
    st.rerun()


def _render_delete_confirmation(session: AppSession) -> None:
    deleter = session.deleter
    target = deleter.target
    if deleter.state is DeleteState.IDLE or target is None:
        return

    with card("Confirm delete", suffix="This cannot be undone"):
        name = target.description or "this expense"
        st.markdown(f"Are you sure you want to delete **{name}** ({format_amount(target)}, {format_date(target)})?")
        if deleter.last_error is not None:
            st.error(str(deleter.last_error))

        confirm_col, cancel_col, _ = st.columns((1, 1, 4))
        busy = deleter.is_busy
        confirm_clicked = confirm_col.button(
            "Deleting…" if busy else "Delete",
            key="confirm-delete",
            type="primary",
            disabled=busy,
        )
        cancel_clicked = cancel_col.button("Cancel", key="cancel-delete", disabled=busy)

    if cancel_clicked:
        deleter.cancel()
        st.rerun()
    if confirm_clicked:
        try:
            run(deleter.confirm())
        except MutationError:
            # The coordinator keeps the target and exposes the failure.
            st.rerun()
        session.sync()
        _flash("Expense deleted.")
        st.rerun()


def _render_table(session: AppSession, page: Page) -> None:
    orchestrator = session.orchestrator
    spec = orchestrator.parameters.sort

    header = st.columns(COLUMN_WIDTHS)
    for column, (field, label) in zip(header, COLUMNS):
        if column.button(header_label(spec, field, label), key=f"sort-{field}"):
            orchestrator.request_sort(field)
            save_parameters(orchestrator.parameters)
            st.rerun()
    header[-1].markdown("**Actions**")

    busy = session.deleter.is_busy
    for expense in page.items:
        row = st.columns(COLUMN_WIDTHS)
        row[0].write(format_date(expense))
        row[1].write(expense.description or "—")
        row[2].write(expense.category_label)
        row[3].write(format_amount(expense))
        edit_col, delete_col = row[4].columns(2)
        if edit_col.button("Edit", key=f"edit-{expense.id}", disabled=busy):
            _start_edit(session, expense)
        if delete_col.button("Delete", key=f"delete-{expense.id}", disabled=busy):
            session.deleter.select(expense)
            st.rerun()


def _render_pagination(session: AppSession, page: Page) -> None:
    start = (page.number - 1) * page.page_size + 1
    end = start + len(page.items) - 1
    st.caption(f"Showing {start}–{end} of {page.total_items} expenses")

    if not page.show_controls:
        return

    orchestrator = session.orchestrator
    controls = st.columns(len(page.window) + 4)
    actions = [
        (controls[0], "«", "page-first", page.has_previous, orchestrator.first_page),
        (controls[1], "‹", "page-prev", page.has_previous, orchestrator.previous_page),
        (controls[-2], "›", "page-next", page.has_next, orchestrator.next_page),
        (controls[-1], "»", "page-last", page.has_next, orchestrator.last_page),
    ]
    for column, label, key, enabled, action in actions:
        if column.button(label, key=key, disabled=not enabled):
            action()
            save_parameters(orchestrator.parameters)
            st.rerun()

    for index, entry in enumerate(page.window):
        column = controls[index + 2]
        if entry == ELLIPSIS:
            column.markdown(ELLIPSIS)
            continue
        is_current = entry == page.number
        if column.button(
            str(entry),
            key=f"page-{entry}",
            type="primary" if is_current else "secondary",
            disabled=is_current,
        ):
            orchestrator.go_to_page(int(entry))
            save_parameters(orchestrator.parameters)
            st.rerun()


def render_page(session: AppSession) -> None:
    """Render the expense list page."""

    orchestrator = session.orchestrator
    title_col, refresh_col = st.columns((5, 1))
    title_col.title("Expenses")
    if refresh_col.button("Refresh", key="refresh-expenses"):
        session.refresh()
        st.rerun()

    _render_flash()
    _render_error_banner(session)

    categories = category_options(unique_categories(orchestrator.expenses))
    changed = render_filter_sidebar(orchestrator.parameters.criteria, categories)
    if changed is not None:
        orchestrator.set_filter(changed)
        save_parameters(orchestrator.parameters)
        st.rerun()

    _render_create_card(session)
    _render_edit_card(session)
    _render_delete_confirmation(session)

    view = orchestrator.view()
    with card("Your expenses", suffix=f"{view.summary.count} shown"):
        if view.page.total_items == 0:
            if orchestrator.parameters.criteria.is_active:
                st.info("No expenses match the current filters.")
            else:
                st.info("No expenses recorded yet. Add your first expense above.")
            return
        _render_table(session, view.page)
        _render_pagination(session, view.page)


__all__ = ["format_amount", "format_date", "header_label", "render_page"]
