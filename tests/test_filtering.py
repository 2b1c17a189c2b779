"""Tests for the expense filter predicate."""

from __future__ import annotations

import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.filtering import filter_expenses, matches, unique_categories
from core.models import Expense, FilterCriteria
from data.synth import generate_synthetic_expenses


@pytest.fixture()
def expenses() -> list[Expense]:
    return [
        Expense(id=1, amount=Decimal("50"), date=date(2024, 1, 10), category="Food", description="Groceries"),
        Expense(id=2, amount=Decimal("30"), date=date(2024, 1, 15), category="Food"),
        Expense(id=3, amount=Decimal("20"), date=date(2024, 2, 1), category="Transportation"),
        Expense(id=4, amount=Decimal("5"), date=date(2024, 2, 3), category=None),
        Expense(id=5, amount=Decimal("12"), date=date(2024, 2, 3), category="food"),
    ]


def test_empty_criteria_keeps_everything_in_order(expenses):
    result = filter_expenses(expenses, FilterCriteria())

    assert [expense.id for expense in result] == [1, 2, 3, 4, 5]


def test_category_match_is_exact_and_case_sensitive(expenses):
    result = filter_expenses(expenses, FilterCriteria(category="Food"))

    assert [expense.id for expense in result] == [1, 2]


def test_uncategorised_expense_only_passes_without_category_filter(expenses):
    uncategorised = expenses[3]

    assert matches(uncategorised, FilterCriteria())
    assert not matches(uncategorised, FilterCriteria(category="Food"))
    assert not matches(uncategorised, FilterCriteria(category="Uncategorized"))


def test_date_bounds_are_inclusive(expenses):
    criteria = FilterCriteria(start_date=date(2024, 1, 15), end_date=date(2024, 2, 1))

    result = filter_expenses(expenses, criteria)

    assert [expense.id for expense in result] == [2, 3]


def test_criteria_are_combined_with_and(expenses):
    criteria = FilterCriteria(category="Food", start_date=date(2024, 1, 12))

    assert [expense.id for expense in filter_expenses(expenses, criteria)] == [2]


def test_inverted_range_matches_nothing(expenses):
    criteria = FilterCriteria(start_date=date(2024, 3, 1), end_date=date(2024, 1, 1))

    assert filter_expenses(expenses, criteria) == []


def test_criteria_round_trip_through_session_dict():
    criteria = FilterCriteria(category="Food", start_date=date(2024, 1, 1))

    restored = FilterCriteria.from_dict(criteria.to_dict())

    assert restored == criteria
    assert FilterCriteria.from_dict({"category": "", "start_date": "", "end_date": " "}) == FilterCriteria()


def test_cleared_criteria_are_inactive():
    criteria = FilterCriteria(category="Food", end_date=date(2024, 1, 31))

    assert criteria.is_active
    assert not criteria.cleared().is_active


def test_unique_categories_in_first_seen_order(expenses):
    assert unique_categories(expenses) == ["Food", "Transportation", "food"]


@pytest.mark.parametrize("seed", [1, 7, 42])
def test_filtered_set_is_subset_satisfying_predicate(seed):
    records = generate_synthetic_expenses("2024-01-01", months=3, seed=seed)
    criteria = FilterCriteria(category="Food", start_date=date(2024, 1, 20), end_date=date(2024, 3, 10))

    result = filter_expenses(records, criteria)

    ids = {expense.id for expense in records}
    assert all(expense.id in ids for expense in result)
    assert all(matches(expense, criteria) for expense in result)
    assert len(result) == sum(1 for expense in records if matches(expense, criteria))
