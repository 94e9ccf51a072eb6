"""
Race query construction.

Translates listing parameters into SQLAlchemy predicates, pagination and
ordering. Every predicate list starts with the owner check.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import math
from typing import Sequence

from .models import Race
from .status import RaceStatus

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
ALL_MONTHS = "all"

# camelCase API name -> column
SORTABLE_COLUMNS = {
    "name": Race.name,
    "date": Race.date,
    "time": Race.time,
    "price": Race.price,
    "distance": Race.distance,
    "status": Race.status,
    "createdAt": Race.created_at,
    "updatedAt": Race.updated_at,
}
DEFAULT_SORT_FIELD = "date"


def _status_values(statuses) -> list[str]:
    return [s.value if isinstance(s, RaceStatus) else str(s) for s in statuses]


@dataclass
class RaceFilters:
    """
    Optional listing filters. Empty filters match every race of the owner.

    `statuses` may hold values outside RaceStatus; they match no race.
    """

    year: str | None = None
    month: str | None = None
    statuses: Sequence[RaceStatus | str] = field(default_factory=tuple)
    search: str | None = None
    start_date: str | None = None
    end_date: str | None = None

    @property
    def date_prefix(self) -> str | None:
        """Year prefix ("2025"), or year-month ("2025-03"); month alone is ignored."""
        if not self.year:
            return None
        if self.month and self.month != ALL_MONTHS:
            return f"{self.year}-{str(self.month).zfill(2)}"
        return self.year

    def conditions(self, owner_id: str) -> list:
        """SQLAlchemy WHERE clauses, owner first."""
        clauses = [Race.user_id == owner_id]

        prefix = self.date_prefix
        if prefix:
            clauses.append(Race.date.startswith(prefix, autoescape=True))

        if self.statuses:
            clauses.append(Race.status.in_(_status_values(self.statuses)))

        if self.search:
            clauses.append(Race.name_folded.contains(self.search.casefold(), autoescape=True))

        if self.start_date is not None:
            clauses.append(Race.date >= self.start_date)
        if self.end_date is not None:
            clauses.append(Race.date <= self.end_date)

        return clauses

    def echo(self) -> dict:
        """Applied listing filters, as reported back to the client."""
        return {
            "year": self.year,
            "month": self.month,
            "status": _status_values(self.statuses) or None,
            "search": self.search,
        }


def _parse_positive_int(value, default: int) -> int:
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default


@dataclass(frozen=True)
class PageRequest:
    """1-based page and row cap."""

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @classmethod
    def from_query(cls, page=None, limit=None) -> PageRequest:
        """Unparseable or non-positive values fall back to the defaults."""
        return cls(
            page=_parse_positive_int(page, DEFAULT_PAGE),
            limit=_parse_positive_int(limit, DEFAULT_LIMIT),
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class Pagination:
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int
    has_next_page: bool
    has_prev_page: bool

    @classmethod
    def build(cls, request: PageRequest, total: int) -> Pagination:
        total_pages = math.ceil(total / request.limit)
        return cls(
            current_page=request.page,
            total_pages=total_pages,
            total_items=total,
            items_per_page=request.limit,
            has_next_page=request.page < total_pages,
            has_prev_page=request.page > 1,
        )

    def to_dict(self) -> dict:
        return {
            "currentPage": self.current_page,
            "totalPages": self.total_pages,
            "totalItems": self.total_items,
            "itemsPerPage": self.items_per_page,
            "hasNextPage": self.has_next_page,
            "hasPrevPage": self.has_prev_page,
        }


@dataclass(frozen=True)
class SortSpec:
    key: str = DEFAULT_SORT_FIELD
    descending: bool = True

    @classmethod
    def from_query(cls, sort_by: str | None = None, sort_order: str | None = None) -> SortSpec:
        """Unknown fields sort by date; anything but "asc" is descending."""
        name = sort_by if sort_by in SORTABLE_COLUMNS else DEFAULT_SORT_FIELD
        return cls(key=name, descending=sort_order != "asc")

    def order_by(self) -> list:
        column = SORTABLE_COLUMNS[self.key]
        # id breaks ties
        if self.descending:
            return [column.desc(), Race.id.desc()]
        return [column.asc(), Race.id.asc()]
