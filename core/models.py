"""Shared data model definitions for the SpendView expense engine."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Literal, Mapping, Optional, TypedDict, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

ExpenseId = Union[int, str]
SortField = Literal["date", "amount", "description", "category"]
SortDirection = Literal["asc", "desc"]

SORT_FIELDS: tuple[str, ...] = ("date", "amount", "description", "category")
SORT_DIRECTIONS: tuple[str, ...] = ("asc", "desc")

UNCATEGORIZED = "Uncategorized"
CATEGORIES: tuple[str, ...] = (
    "Food",
    "Transportation",
    "Housing",
    "Utilities",
    "Entertainment",
    "Healthcare",
    "Education",
    "Other",
)

DEFAULT_PAGE_SIZE = 10


def _calendar_date(value: Any) -> Any:
    # Servers occasionally send full timestamps; only the calendar part matters.
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, str) and len(value) > 10:
        return value[:10]
    return value


class Expense(BaseModel):
    """A single expense record as owned by the storage backend."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: ExpenseId
    amount: Decimal = Field(ge=0, allow_inf_nan=False)
    description: str = ""
    date: dt.date
    category: Optional[str] = None

    @field_validator("description", mode="before")
    @classmethod
    def _blank_description(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("date", mode="before")
    @classmethod
    def _strip_time(cls, value: Any) -> Any:
        return _calendar_date(value)

    @property
    def category_label(self) -> str:
        """Category used for display and aggregation."""

        return self.category or UNCATEGORIZED


class ExpenseDraft(BaseModel):
    """Body of a create or full-replace request."""

    model_config = ConfigDict(frozen=True)

    amount: Decimal = Field(ge=0, allow_inf_nan=False)
    description: str = ""
    date: dt.date
    category: Optional[str] = None

    @field_validator("description", mode="before")
    @classmethod
    def _blank_description(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("date", mode="before")
    @classmethod
    def _strip_time(cls, value: Any) -> Any:
        return _calendar_date(value)

    @classmethod
    def from_expense(cls, expense: Expense) -> "ExpenseDraft":
        return cls(
            amount=expense.amount,
            description=expense.description,
            date=expense.date,
            category=expense.category,
        )

    def to_payload(self) -> dict[str, Any]:
        return {
            "amount": float(self.amount),
            "description": self.description,
            "date": self.date.isoformat(),
            "category": self.category or None,
        }


def _parse_optional_date(value: Any) -> Optional[dt.date]:
    if value is None:
        return None
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    text = str(value).strip()
    if not text:
        return None
    return dt.date.fromisoformat(text[:10])


@dataclass(frozen=True)
class FilterCriteria:
    """User-selected constraints narrowing the listed and aggregated expenses."""

    category: Optional[str] = None
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None

    @property
    def is_active(self) -> bool:
        return bool(self.category) or self.start_date is not None or self.end_date is not None

    def cleared(self) -> "FilterCriteria":
        return FilterCriteria()

    def to_dict(self) -> dict[str, str]:
        return {
            "category": self.category or "",
            "start_date": self.start_date.isoformat() if self.start_date else "",
            "end_date": self.end_date.isoformat() if self.end_date else "",
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FilterCriteria":
        category = data.get("category") or None
        return cls(
            category=str(category) if category is not None else None,
            start_date=_parse_optional_date(data.get("start_date")),
            end_date=_parse_optional_date(data.get("end_date")),
        )


@dataclass(frozen=True)
class SortSpec:
    """Active sort column and direction; most recent first by default."""

    field: str = "date"
    direction: str = "desc"

    def __post_init__(self) -> None:
        if self.field not in SORT_FIELDS:
            raise ValueError(f"Unsupported sort field: {self.field!r}")
        if self.direction not in SORT_DIRECTIONS:
            raise ValueError(f"Unsupported sort direction: {self.direction!r}")

    @property
    def descending(self) -> bool:
        return self.direction == "desc"

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "direction": self.direction}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SortSpec":
        return cls(
            field=str(data.get("field", "date")),
            direction=str(data.get("direction", "desc")),
        )


@dataclass(frozen=True)
class PageState:
    current_page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.page_size <= 0:
            raise ValueError("page_size must be a positive integer")
        if self.current_page < 1:
            raise ValueError("current_page is 1-indexed")

    def to_dict(self) -> dict[str, int]:
        return {"current_page": self.current_page, "page_size": self.page_size}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PageState":
        return cls(
            current_page=int(data.get("current_page", 1)),
            page_size=int(data.get("page_size", DEFAULT_PAGE_SIZE)),
        )


@dataclass(frozen=True)
class Page:
    """The visible slice of the ordered expenses plus its navigation metadata."""

    items: tuple[Expense, ...]
    number: int
    page_size: int
    total_items: int
    total_pages: int
    window: tuple[Union[int, str], ...] = field(default_factory=tuple)

    @property
    def has_previous(self) -> bool:
        return self.number > 1

    @property
    def has_next(self) -> bool:
        return self.number < self.total_pages

    @property
    def show_controls(self) -> bool:
        return self.total_pages > 1


@dataclass(frozen=True)
class MonthlyTotal:
    year: int
    month: int
    label: str
    total: Decimal


@dataclass(frozen=True)
class SummaryStats:
    count: int
    total: Decimal
    mean: Decimal
    max: Decimal


class ChartDataset(TypedDict):
    title: str
    labels: list[str]
    values: list[float]
    colors: list[str]


@dataclass(frozen=True)
class DerivedView:
    """Everything a single render cycle needs, derived from one set of inputs."""

    filtered: tuple[Expense, ...]
    ordered: tuple[Expense, ...]
    page: Page
    category_totals: dict[str, Decimal]
    monthly_totals: tuple[MonthlyTotal, ...]
    summary: SummaryStats
    category_chart: Optional[ChartDataset]
    monthly_chart: Optional[ChartDataset]


__all__ = [
    "CATEGORIES",
    "DEFAULT_PAGE_SIZE",
    "SORT_DIRECTIONS",
    "SORT_FIELDS",
    "UNCATEGORIZED",
    "ChartDataset",
    "DerivedView",
    "Expense",
    "ExpenseDraft",
    "ExpenseId",
    "FilterCriteria",
    "MonthlyTotal",
    "Page",
    "PageState",
    "SortDirection",
    "SortField",
    "SortSpec",
    "SummaryStats",
]
