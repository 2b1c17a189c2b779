"""Tests for the composed view pipeline and the orchestrator's parameter handling."""

from __future__ import annotations

import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.models import Expense, FilterCriteria, PageState, SortSpec
from core.view import ViewOrchestrator, ViewParameters, build_view
from data.synth import generate_synthetic_expenses


@pytest.fixture()
def records() -> list[Expense]:
    return [
        Expense(id=1, amount=Decimal("50"), date=date(2024, 1, 10), category="Food"),
        Expense(id=2, amount=Decimal("30"), date=date(2024, 1, 15), category="Food"),
        Expense(id=3, amount=Decimal("20"), date=date(2024, 2, 1), category="Transportation"),
    ]


def test_default_view_orders_most_recent_first_with_aggregates(records):
    view = build_view(records, FilterCriteria(), SortSpec("date", "desc"), PageState())

    assert [expense.id for expense in view.ordered] == [3, 2, 1]
    assert view.category_totals == {"Food": Decimal("80"), "Transportation": Decimal("20")}
    assert [(entry.label, entry.total) for entry in view.monthly_totals] == [
        ("Jan 2024", Decimal("80")),
        ("Feb 2024", Decimal("20")),
    ]


def test_pages_of_two(records):
    first = build_view(records, FilterCriteria(), SortSpec(), PageState(current_page=1, page_size=2))
    second = build_view(records, FilterCriteria(), SortSpec(), PageState(current_page=2, page_size=2))

    assert [expense.id for expense in first.page.items] == [3, 2]
    assert [expense.id for expense in second.page.items] == [1]
    assert first.page.total_pages == 2


def test_aggregates_follow_filtered_set_not_visible_page(records):
    view = build_view(
        records,
        FilterCriteria(category="Food"),
        SortSpec("amount", "asc"),
        PageState(current_page=1, page_size=1),
    )

    assert [expense.id for expense in view.page.items] == [2]
    assert view.summary.count == 2
    assert view.summary.total == Decimal("80")
    assert view.category_totals == {"Food": Decimal("80")}


def test_empty_view_has_zero_summary_and_no_charts():
    view = build_view([], FilterCriteria(), SortSpec(), PageState())

    assert view.page.total_pages == 0
    assert view.summary.count == 0
    assert view.summary.mean == 0
    assert view.category_chart is None
    assert view.monthly_chart is None


def test_filter_change_and_sort_change_reset_to_first_page():
    orchestrator = ViewOrchestrator(generate_synthetic_expenses("2024-01-01", months=3, seed=5), page_size=5)
    orchestrator.go_to_page(3)
    assert orchestrator.view().page.number == 3

    orchestrator.request_sort("amount")
    assert orchestrator.parameters.page.current_page == 1
    assert orchestrator.parameters.sort == SortSpec("amount", "asc")

    orchestrator.go_to_page(2)
    orchestrator.update_filter(category="Food")
    assert orchestrator.parameters.page.current_page == 1

    orchestrator.go_to_page(2)
    orchestrator.reset_filters()
    assert orchestrator.parameters.criteria == FilterCriteria()
    assert orchestrator.parameters.page.current_page == 1


def test_page_navigation_is_clamped(records):
    orchestrator = ViewOrchestrator(records, page_size=2)

    orchestrator.go_to_page(50)
    assert orchestrator.view().page.number == 2
    orchestrator.next_page()
    assert orchestrator.parameters.page.current_page == 2
    orchestrator.first_page()
    orchestrator.previous_page()
    assert orchestrator.parameters.page.current_page == 1
    orchestrator.last_page()
    assert orchestrator.parameters.page.current_page == 2


def test_shrinking_record_set_keeps_page_in_range(records):
    orchestrator = ViewOrchestrator(records, page_size=2)
    orchestrator.last_page()

    orchestrator.set_expenses(records[:2])

    view = orchestrator.view()
    assert view.page.number == 1
    assert [expense.id for expense in view.page.items] == [2, 1]


def test_view_is_recomputed_from_current_records(records):
    orchestrator = ViewOrchestrator(records)
    before = orchestrator.view()

    orchestrator.set_expenses(records + [Expense(id=4, amount=Decimal("5"), date=date(2024, 3, 1))])
    after = orchestrator.view()

    assert before.summary.count == 3
    assert after.summary.count == 4
    assert after.category_totals["Uncategorized"] == Decimal("5")


def test_parameters_round_trip_through_session_dict():
    parameters = ViewParameters(
        criteria=FilterCriteria(category="Food", start_date=date(2024, 1, 1)),
        sort=SortSpec("amount", "asc"),
        page=PageState(current_page=3, page_size=20),
    )

    restored = ViewParameters.from_dict(parameters.to_dict())

    assert restored == parameters
    assert ViewOrchestrator(parameters=restored).parameters == parameters
