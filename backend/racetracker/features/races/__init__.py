"""Races feature module: race catalog, filtering, statistics, import/export."""

from .status import (
    RaceStatus,
    COST_INCURRING_STATUSES,
    is_cost_incurring,
    counts_distance,
    is_value_lost,
)
from .models import Race
from .schemas import RaceCreate, RaceUpdate
from .filters import RaceFilters, PageRequest, Pagination, SortSpec
from .repository import RaceRepository
from .stats import (
    RaceSummary,
    summarize,
    count_by_status,
    total_cost,
    total_distance,
    value_lost,
    status_breakdown,
    monthly_breakdown,
    best_times,
)
from .service import RaceService

__all__ = [
    "RaceStatus",
    "COST_INCURRING_STATUSES",
    "is_cost_incurring",
    "counts_distance",
    "is_value_lost",
    "Race",
    "RaceCreate",
    "RaceUpdate",
    "RaceFilters",
    "PageRequest",
    "Pagination",
    "SortSpec",
    "RaceRepository",
    "RaceSummary",
    "summarize",
    "count_by_status",
    "total_cost",
    "total_distance",
    "value_lost",
    "status_breakdown",
    "monthly_breakdown",
    "best_times",
    "RaceService",
]
