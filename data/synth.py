"""Synthetic expense generator for SpendView demos and property tests.

Produces records shaped like the ``GET /expenses`` response: non-negative
amounts, calendar dates, optional descriptions and categories drawn from the
fixed category set (with a small share left uncategorised).
"""

from __future__ import annotations

import calendar
import json
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal
from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple, TypeVar

import numpy as np

from core.models import Expense

T = TypeVar("T")


@dataclass(frozen=True)
class ExpenseProfile:
    """A kind of expense with its typical amount range and monthly frequency."""

    description: str
    category: Optional[str]
    amount_range: Tuple[float, float]
    per_month: Tuple[int, int]


EXPENSE_PROFILES: Sequence[ExpenseProfile] = (
    ExpenseProfile("Groceries", "Food", (12.0, 95.0), (4, 8)),
    ExpenseProfile("Lunch out", "Food", (6.5, 24.0), (2, 6)),
    ExpenseProfile("Bus pass", "Transportation", (2.5, 4.5), (6, 14)),
    ExpenseProfile("Fuel", "Transportation", (35.0, 80.0), (0, 2)),
    ExpenseProfile("Rent", "Housing", (1100.0, 1100.0), (1, 1)),
    ExpenseProfile("Electricity bill", "Utilities", (45.0, 120.0), (1, 1)),
    ExpenseProfile("Internet", "Utilities", (39.99, 39.99), (1, 1)),
    ExpenseProfile("Cinema", "Entertainment", (9.0, 28.0), (0, 2)),
    ExpenseProfile("Pharmacy", "Healthcare", (4.0, 35.0), (0, 2)),
    ExpenseProfile("Online course", "Education", (15.0, 60.0), (0, 1)),
    ExpenseProfile("Gift", "Other", (10.0, 75.0), (0, 1)),
    ExpenseProfile("", None, (1.0, 20.0), (0, 2)),
)


def generate_synthetic_expenses(
    start_date: date | datetime | str,
    months: int = 6,
    *,
    seed: Optional[int] = None,
    first_id: int = 1,
) -> List[Expense]:
    """Generate ``months`` complete months of expenses starting at ``start_date``'s month.

    Records are returned in id order, which is also creation order; dates are
    deliberately not sorted so consumers exercise their own ordering.
    """

    if months <= 0:
        raise ValueError("months must be a positive integer")

    rng = np.random.default_rng(seed)
    anchor = _month_floor(_normalize_date(start_date))

    expenses: List[Expense] = []
    next_id = first_id
    for offset in range(months):
        month_start = _add_months(anchor, offset)
        month_days = _month_dates(month_start.year, month_start.month)
        for profile in EXPENSE_PROFILES:
            low, high = profile.per_month
            count = int(rng.integers(low, high + 1))
            for _ in range(count):
                expense_date = _rng_choice(month_days, rng)
                amount = _draw_amount(profile.amount_range, rng)
                expenses.append(
                    Expense(
                        id=next_id,
                        amount=amount,
                        description=profile.description,
                        date=expense_date,
                        category=profile.category,
                    )
                )
                next_id += 1

    order = rng.permutation(len(expenses))
    shuffled = [expenses[int(index)] for index in order]
    return sorted(shuffled, key=lambda expense: expense.id)


def expense_payloads(expenses: Sequence[Expense]) -> list[dict[str, Any]]:
    """Return JSON-ready dicts in the API response shape."""

    return [
        {
            "id": expense.id,
            "amount": float(expense.amount),
            "description": expense.description,
            "date": expense.date.isoformat(),
            "category": expense.category,
        }
        for expense in expenses
    ]


def write_expenses_json(
    path: str | Path,
    *,
    start_date: date | datetime | str,
    months: int = 6,
    seed: Optional[int] = None,
) -> List[Expense]:
    """Generate synthetic expenses and persist them to ``path`` as a JSON array."""

    expenses = generate_synthetic_expenses(start_date, months, seed=seed)
    Path(path).write_text(json.dumps(expense_payloads(expenses), indent=2), encoding="utf-8")
    return expenses


def _draw_amount(bounds: Tuple[float, float], rng: np.random.Generator) -> Decimal:
    low, high = bounds
    value = low if low == high else float(rng.uniform(low, high))
    return Decimal(f"{value:.2f}")


def _normalize_date(value: date | datetime | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return datetime.fromisoformat(value).date()
    raise TypeError(f"Unsupported date value: {value!r}")


def _add_months(anchor: date, months: int) -> date:
    month = anchor.month - 1 + months
    year = anchor.year + month // 12
    month = month % 12 + 1
    day = min(anchor.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def _month_floor(moment: date) -> date:
    return moment.replace(day=1)


def _month_dates(year: int, month: int) -> List[date]:
    start = date(year, month, 1)
    _, max_day = calendar.monthrange(year, month)
    return [start + timedelta(days=offset) for offset in range(max_day)]


def _rng_choice(options: Sequence[T], rng: np.random.Generator) -> T:
    if not options:
        raise ValueError("Cannot choose from an empty sequence")
    idx = int(rng.integers(0, len(options)))
    return options[idx]


if __name__ == "__main__":  # pragma: no cover - manual seeding helper
    import sys

    target = sys.argv[1] if len(sys.argv) > 1 else "expenses.json"
    generated = write_expenses_json(target, start_date=date.today().replace(day=1), months=6, seed=7)
    print(f"Wrote {len(generated)} expenses to {target}")
