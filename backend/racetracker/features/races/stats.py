"""Statistics over race records.

Pure functions: they take any sequence of race-like objects (ORM rows,
dataclasses, mocks) and never touch the database. Sums keep full
precision; rounding is left to whoever displays them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Protocol, Sequence

from racetracker.shared.formatters import parse_duration

from .status import (
    RaceStatus,
    counts_distance,
    is_cost_incurring,
    is_value_lost,
)


class RaceLike(Protocol):
    name: str
    date: str
    price: float
    distance: float
    status: str
    completion_time: Optional[str]


# label -> [min_km, max_km)
STANDARD_DISTANCES: dict[str, tuple[float, float]] = {
    "5k": (5.0, 6.0),
    "10k": (10.0, 11.0),
    "21k": (21.0, 22.0),
    "42k": (42.0, 43.0),
}


@dataclass
class RaceSummary:
    """Aggregate over a set of races."""

    total_races: int
    total_cost: float
    total_distance: float
    status_counts: dict[str, int]
    value_lost: float

    def to_dict(self) -> dict:
        return {
            "totalRaces": self.total_races,
            "totalCost": self.total_cost,
            "totalDistance": self.total_distance,
            "statusCounts": dict(self.status_counts),
            "valueLost": self.value_lost,
        }


@dataclass
class StatusTotals:
    """Count and summed price of one status."""

    status: str
    count: int
    total_price: float

    def to_dict(self) -> dict:
        return {"_id": self.status, "count": self.count, "totalPrice": self.total_price}


@dataclass
class MonthTotals:
    """Per-status counts for one calendar month ("01".."12")."""

    month: str
    status_counts: dict[str, int] = field(default_factory=dict)
    total: int = 0

    def to_dict(self) -> dict:
        return {
            "_id": self.month,
            "statuses": [
                {"status": status, "count": count}
                for status, count in self.status_counts.items()
            ],
            "total": self.total,
        }


@dataclass
class BestTime:
    """Fastest completed race in a distance bucket."""

    time: str  # "HH:MM:SS" as entered
    seconds: int
    race_name: str
    race_date: str

    def to_dict(self) -> dict:
        return {
            "time": self.time,
            "seconds": self.seconds,
            "raceName": self.race_name,
            "raceDate": self.race_date,
        }


def empty_status_counts() -> dict[str, int]:
    """Every status at zero, in enumeration order."""
    return {status.value: 0 for status in RaceStatus}


def count_by_status(races: Iterable[RaceLike]) -> dict[str, int]:
    """Number of races per status. All six keys are always present."""
    counts = empty_status_counts()
    for race in races:
        key = _status_key(race.status)
        if key in counts:
            counts[key] += 1
    return counts


def total_cost(races: Iterable[RaceLike]) -> float:
    """Sum of price over cost-incurring statuses; other races add nothing."""
    return sum((race.price for race in races if is_cost_incurring(race.status)), 0.0)


def total_distance(races: Iterable[RaceLike]) -> float:
    """Sum of distance over completed races only."""
    return sum((race.distance for race in races if counts_distance(race.status)), 0.0)


def value_lost(races: Iterable[RaceLike]) -> float:
    """Money spent on races the user could not attend."""
    return sum((race.price for race in races if is_value_lost(race.status)), 0.0)


def summarize(races: Sequence[RaceLike]) -> RaceSummary:
    """All headline numbers for a set of races.

    Example:
        completed 50/10km + could_not_go 30/5km
        → total_cost=80, total_distance=10, value_lost=30
    """
    return RaceSummary(
        total_races=len(races),
        total_cost=total_cost(races),
        total_distance=total_distance(races),
        status_counts=count_by_status(races),
        value_lost=value_lost(races),
    )


def status_breakdown(races: Iterable[RaceLike]) -> list[StatusTotals]:
    """Count and total price per status that occurs, in enumeration order.

    Unlike `total_cost`, every race's price is included here.
    """
    totals: dict[str, StatusTotals] = {}
    for race in races:
        key = _status_key(race.status)
        entry = totals.setdefault(key, StatusTotals(status=key, count=0, total_price=0.0))
        entry.count += 1
        entry.total_price += race.price

    order = {status.value: i for i, status in enumerate(RaceStatus)}
    return sorted(totals.values(), key=lambda t: order.get(t.status, len(order)))


def monthly_breakdown(races: Iterable[RaceLike]) -> list[MonthTotals]:
    """Per-month, per-status counts, sorted by month."""
    months: dict[str, MonthTotals] = {}
    for race in races:
        month = race.date[5:7]
        entry = months.setdefault(month, MonthTotals(month=month))
        key = _status_key(race.status)
        entry.status_counts[key] = entry.status_counts.get(key, 0) + 1
        entry.total += 1
    return [months[m] for m in sorted(months)]


def best_times(races: Iterable[RaceLike]) -> dict[str, BestTime | None]:
    """Fastest completed race per standard distance bucket.

    Races without a parseable completion time are skipped; a bucket with
    no candidate maps to None. On equal times the earlier entry wins.
    """
    best: dict[str, BestTime | None] = {label: None for label in STANDARD_DISTANCES}
    for race in races:
        if not counts_distance(race.status):
            continue
        seconds = parse_duration(race.completion_time)
        if seconds is None:
            continue
        for label, (low, high) in STANDARD_DISTANCES.items():
            if not low <= race.distance < high:
                continue
            current = best[label]
            if current is None or seconds < current.seconds:
                best[label] = BestTime(
                    time=race.completion_time.strip(),
                    seconds=seconds,
                    race_name=race.name,
                    race_date=race.date,
                )
    return best


def _status_key(status) -> str:
    return status.value if isinstance(status, RaceStatus) else str(status)
