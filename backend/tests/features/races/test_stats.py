"""
Tests for race statistics.

Pure aggregation over in-memory race objects; no database involved.
"""

from dataclasses import dataclass
from typing import Optional

import pytest

from racetracker.features.races.stats import (
    STANDARD_DISTANCES,
    best_times,
    count_by_status,
    empty_status_counts,
    monthly_breakdown,
    status_breakdown,
    summarize,
    total_cost,
    total_distance,
    value_lost,
)
from racetracker.features.races.status import RaceStatus


@dataclass
class FakeRace:
    name: str
    date: str
    status: str
    price: float = 0.0
    distance: float = 10.0
    completion_time: Optional[str] = None


ALL_STATUSES = [s.value for s in RaceStatus]


@pytest.fixture
def march_races():
    """Races A, B (in March) and C (April)."""
    return [
        FakeRace("A", "2025-03-01", "completed", price=50, distance=10),
        FakeRace("B", "2025-03-15", "could_not_go", price=30, distance=5),
        FakeRace("C", "2025-04-01", "cancelled", price=20, distance=8),
    ]


def in_range(races, start, end):
    return [r for r in races if start <= r.date <= end]


# =============================================================================
# Test Summary
# =============================================================================

class TestSummarize:
    """Tests for summarize()."""

    def test_march_example(self, march_races):
        """Range [03-01, 03-31] picks A and B only."""
        summary = summarize(in_range(march_races, "2025-03-01", "2025-03-31"))

        assert summary.total_races == 2
        assert summary.total_cost == 80
        assert summary.total_distance == 10
        assert summary.value_lost == 30
        assert summary.status_counts["completed"] == 1
        assert summary.status_counts["could_not_go"] == 1
        for status in ("registered", "intend_to_go", "undecided", "cancelled"):
            assert summary.status_counts[status] == 0

    def test_empty_input(self):
        summary = summarize([])

        assert summary.total_races == 0
        assert summary.total_cost == 0
        assert summary.total_distance == 0
        assert summary.value_lost == 0
        assert summary.status_counts == empty_status_counts()

    def test_status_counts_sum_to_total(self, march_races):
        summary = summarize(march_races)
        assert sum(summary.status_counts.values()) == summary.total_races

    def test_full_precision(self):
        """Sums are not rounded."""
        races = [
            FakeRace("X", "2025-01-01", "completed", price=0.1, distance=0.1),
            FakeRace("Y", "2025-01-02", "completed", price=0.2, distance=0.2),
        ]
        summary = summarize(races)
        assert summary.total_cost == 0.1 + 0.2
        assert summary.total_distance == 0.1 + 0.2

    def test_to_dict_uses_camel_case(self, march_races):
        data = summarize(march_races).to_dict()
        assert set(data) == {"totalRaces", "totalCost", "totalDistance", "statusCounts", "valueLost"}


# =============================================================================
# Test Cost / Distance / Value Lost
# =============================================================================

class TestTotals:
    """Tests for the individual sums."""

    @pytest.mark.parametrize("status,counted", [
        ("registered", True),
        ("completed", True),
        ("could_not_go", True),
        ("intend_to_go", False),
        ("undecided", False),
        ("cancelled", False),
    ])
    def test_cost_by_status(self, status, counted):
        races = [FakeRace("R", "2025-05-05", status, price=40)]
        assert total_cost(races) == (40 if counted else 0)

    def test_distance_only_completed(self):
        races = [FakeRace("R", "2025-05-05", s, distance=7) for s in ALL_STATUSES]
        assert total_distance(races) == 7

    def test_value_lost_only_could_not_go(self):
        races = [FakeRace("R", "2025-05-05", s, price=25) for s in ALL_STATUSES]
        assert value_lost(races) == 25

    def test_accepts_enum_members(self):
        races = [FakeRace("R", "2025-05-05", RaceStatus.COMPLETED, price=10, distance=5)]
        assert total_cost(races) == 10
        assert total_distance(races) == 5


# =============================================================================
# Test Status Counts
# =============================================================================

class TestCountByStatus:
    """Tests for count_by_status()."""

    def test_all_six_keys_present(self):
        assert list(count_by_status([])) == ALL_STATUSES

    def test_counts(self):
        races = [
            FakeRace("a", "2025-01-01", "registered"),
            FakeRace("b", "2025-01-02", "registered"),
            FakeRace("c", "2025-01-03", "undecided"),
        ]
        counts = count_by_status(races)
        assert counts["registered"] == 2
        assert counts["undecided"] == 1
        assert counts["completed"] == 0


# =============================================================================
# Test Breakdowns
# =============================================================================

class TestStatusBreakdown:
    """Tests for status_breakdown()."""

    def test_includes_every_price(self, march_races):
        """Unlike total cost, cancelled prices are summed too."""
        totals = {t.status: t for t in status_breakdown(march_races)}
        assert totals["cancelled"].total_price == 20
        assert totals["cancelled"].count == 1

    def test_only_present_statuses_in_enum_order(self, march_races):
        statuses = [t.status for t in status_breakdown(march_races)]
        assert statuses == ["completed", "cancelled", "could_not_go"]

    def test_to_dict_shape(self, march_races):
        entry = status_breakdown(march_races)[0].to_dict()
        assert entry == {"_id": "completed", "count": 1, "totalPrice": 50}


class TestMonthlyBreakdown:
    """Tests for monthly_breakdown()."""

    def test_groups_by_month_sorted(self, march_races):
        months = monthly_breakdown(list(reversed(march_races)))

        assert [m.month for m in months] == ["03", "04"]
        assert months[0].total == 2
        assert months[0].status_counts == {"could_not_go": 1, "completed": 1}

    def test_to_dict_shape(self, march_races):
        april = monthly_breakdown(march_races)[1].to_dict()
        assert april == {
            "_id": "04",
            "statuses": [{"status": "cancelled", "count": 1}],
            "total": 1,
        }


# =============================================================================
# Test Best Times
# =============================================================================

class TestBestTimes:
    """Tests for best_times()."""

    def test_all_buckets_present(self):
        assert set(best_times([])) == set(STANDARD_DISTANCES)
        assert all(v is None for v in best_times([]).values())

    def test_fastest_completed_wins(self):
        races = [
            FakeRace("Slow 10K", "2025-02-01", "completed", distance=10, completion_time="00:55:00"),
            FakeRace("Fast 10K", "2025-03-01", "completed", distance=10.5, completion_time="00:48:30"),
        ]
        best = best_times(races)["10k"]

        assert best.race_name == "Fast 10K"
        assert best.seconds == 48 * 60 + 30
        assert best.time == "00:48:30"

    def test_ignores_non_completed(self):
        races = [FakeRace("Dns", "2025-02-01", "could_not_go", distance=5, completion_time="00:20:00")]
        assert best_times(races)["5k"] is None

    def test_ignores_missing_or_bad_times(self):
        races = [
            FakeRace("No time", "2025-02-01", "completed", distance=21.1),
            FakeRace("Bad time", "2025-02-02", "completed", distance=21.1, completion_time="1h40"),
        ]
        assert best_times(races)["21k"] is None

    def test_bucket_bounds(self):
        """[42, 43): 43 km falls outside the marathon bucket."""
        races = [
            FakeRace("Ultra-ish", "2025-02-01", "completed", distance=43, completion_time="03:30:00"),
            FakeRace("Marathon", "2025-02-02", "completed", distance=42.19, completion_time="03:45:00"),
        ]
        assert best_times(races)["42k"].race_name == "Marathon"

    def test_tie_keeps_first(self):
        races = [
            FakeRace("First", "2025-02-01", "completed", distance=5, completion_time="00:25:00"),
            FakeRace("Second", "2025-02-02", "completed", distance=5, completion_time="00:25:00"),
        ]
        assert best_times(races)["5k"].race_name == "First"
