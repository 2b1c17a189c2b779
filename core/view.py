"""Composition of filter, sort, pagination and aggregation into one derived view."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Mapping, Optional

from analytics.categorisation import category_totals
from analytics.datasets import build_category_dataset, build_monthly_dataset
from analytics.statistics import summary_statistics
from analytics.trends import monthly_totals
from config.logging_config import get_logger
from core.filtering import filter_expenses
from core.models import (
    DEFAULT_PAGE_SIZE,
    DerivedView,
    Expense,
    FilterCriteria,
    PageState,
    SortSpec,
)
from core.pagination import (
    first_page,
    go_to_page,
    last_page,
    next_page,
    paginate,
    previous_page,
    total_pages,
)
from core.sorting import SortEngine, sort_expenses

__all__ = ["ViewOrchestrator", "ViewParameters", "build_view"]

logger = get_logger(__name__)


def build_view(
    expenses: Iterable[Expense],
    criteria: FilterCriteria,
    sort: SortSpec,
    page: PageState,
) -> DerivedView:
    """Derive the visible page and the aggregates from one set of inputs.

    Aggregates are computed over the filtered set, never the visible page.
    """

    filtered = filter_expenses(expenses, criteria)
    ordered = sort_expenses(filtered, sort)
    visible = paginate(ordered, page)

    totals = category_totals(filtered)
    monthly = monthly_totals(filtered)

    return DerivedView(
        filtered=tuple(filtered),
        ordered=tuple(ordered),
        page=visible,
        category_totals=totals,
        monthly_totals=tuple(monthly),
        summary=summary_statistics(filtered),
        category_chart=build_category_dataset(totals),
        monthly_chart=build_monthly_dataset(monthly),
    )


@dataclass(frozen=True)
class ViewParameters:
    """Serialisable snapshot of the user's view selections."""

    criteria: FilterCriteria = field(default_factory=FilterCriteria)
    sort: SortSpec = field(default_factory=SortSpec)
    page: PageState = field(default_factory=PageState)

    def to_dict(self) -> dict[str, Any]:
        return {
            "criteria": self.criteria.to_dict(),
            "sort": self.sort.to_dict(),
            "page": self.page.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ViewParameters":
        return cls(
            criteria=FilterCriteria.from_dict(data.get("criteria", {})),
            sort=SortSpec.from_dict(data.get("sort", {})),
            page=PageState.from_dict(data.get("page", {})),
        )


class ViewOrchestrator:
    """Holds the source records and view parameters and rebuilds the view on demand.

    Every call to :meth:`view` recomputes the whole pipeline; nothing derived
    is cached between calls.
    """

    def __init__(
        self,
        expenses: Iterable[Expense] = (),
        parameters: Optional[ViewParameters] = None,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        parameters = parameters or ViewParameters(page=PageState(page_size=page_size))
        self._expenses: tuple[Expense, ...] = tuple(expenses)
        self._criteria = parameters.criteria
        self._sort_engine = SortEngine(parameters.sort)
        self._page = parameters.page

    @property
    def expenses(self) -> tuple[Expense, ...]:
        return self._expenses

    @property
    def parameters(self) -> ViewParameters:
        return ViewParameters(criteria=self._criteria, sort=self._sort_engine.spec, page=self._page)

    def set_expenses(self, expenses: Iterable[Expense]) -> None:
        """Replace the source records, keeping the current page within range."""

        self._expenses = tuple(expenses)
        self._page = go_to_page(self._page, self._page.current_page, self._total_pages())

    def set_filter(self, criteria: FilterCriteria) -> None:
        self._criteria = criteria
        self._page = first_page(self._page)
        logger.debug("Filter changed", extra={"criteria": criteria.to_dict()})

    def update_filter(self, **changes: Any) -> None:
        self.set_filter(replace(self._criteria, **changes))

    def reset_filters(self) -> None:
        self.set_filter(self._criteria.cleared())

    def request_sort(self, field_name: str) -> SortSpec:
        spec = self._sort_engine.request_sort(field_name)
        self._page = first_page(self._page)
        return spec

    def go_to_page(self, page: int) -> None:
        self._page = go_to_page(self._page, page, self._total_pages())

    def next_page(self) -> None:
        self._page = next_page(self._page, self._total_pages())

    def previous_page(self) -> None:
        self._page = previous_page(self._page, self._total_pages())

    def first_page(self) -> None:
        self._page = first_page(self._page)

    def last_page(self) -> None:
        self._page = last_page(self._page, self._total_pages())

    def view(self) -> DerivedView:
        return build_view(self._expenses, self._criteria, self._sort_engine.spec, self._page)

    def _total_pages(self) -> int:
        matching = filter_expenses(self._expenses, self._criteria)
        return total_pages(len(matching), self._page.page_size)
