"""
API tests for /races/statistics and /races/stats.
"""

import pytest

STATISTICS = "/api/v1/races/statistics"
STATS = "/api/v1/races/stats"


@pytest.fixture
async def march_catalog(auth_headers, other_headers, create_race):
    """Races A, B, C plus a race from another user in the same range."""
    a = await create_race(auth_headers, name="A", date="2025-03-01", status="completed",
                          price=50, distance=10, completionTime="00:47:10")
    b = await create_race(auth_headers, name="B", date="2025-03-15", status="could_not_go",
                          price=30, distance=5)
    c = await create_race(auth_headers, name="C", date="2025-04-01", status="cancelled",
                          price=20, distance=8)
    await create_race(other_headers, name="Not mine", date="2025-03-10", status="completed",
                      price=999, distance=42)
    return {"A": a, "B": b, "C": c}


async def get_statistics(client, headers, start, end):
    response = await client.get(
        STATISTICS, params={"startDate": start, "endDate": end}, headers=headers
    )
    assert response.status_code == 200, response.text
    return response.json()["data"]


# =============================================================================
# Test Date-Range Statistics
# =============================================================================

class TestStatistics:
    """GET /races/statistics"""

    async def test_march_example(self, client, auth_headers, march_catalog):
        data = await get_statistics(client, auth_headers, "2025-03-01", "2025-03-31")

        assert data["totalRaces"] == 2
        assert data["totalCost"] == 80
        assert data["totalDistance"] == 10
        assert data["valueLost"] == 30
        assert data["statusCounts"] == {
            "registered": 0,
            "intend_to_go": 0,
            "completed": 1,
            "undecided": 0,
            "cancelled": 0,
            "could_not_go": 1,
        }
        assert {r["name"] for r in data["races"]} == {"A", "B"}

    async def test_bounds_inclusive(self, client, auth_headers, march_catalog):
        data = await get_statistics(client, auth_headers, "2025-03-15", "2025-04-01")
        assert {r["name"] for r in data["races"]} == {"B", "C"}

    async def test_best_times(self, client, auth_headers, march_catalog):
        data = await get_statistics(client, auth_headers, "2025-01-01", "2025-12-31")

        assert data["bestTimes"]["10k"] == {
            "time": "00:47:10",
            "seconds": 2830,
            "raceName": "A",
            "raceDate": "2025-03-01",
        }
        assert data["bestTimes"]["42k"] is None

    async def test_reversed_range_is_empty(self, client, auth_headers, march_catalog):
        data = await get_statistics(client, auth_headers, "2025-03-31", "2025-03-01")

        assert data["totalRaces"] == 0
        assert data["totalCost"] == 0
        assert data["totalDistance"] == 0
        assert data["valueLost"] == 0
        assert set(data["statusCounts"].values()) == {0}
        assert data["races"] == []

    @pytest.mark.parametrize("params,missing", [
        ({}, {"startDate", "endDate"}),
        ({"startDate": "2025-01-01"}, {"endDate"}),
        ({"endDate": "2025-12-31"}, {"startDate"}),
    ])
    async def test_missing_bound_is_400(self, client, auth_headers, params, missing):
        response = await client.get(STATISTICS, params=params, headers=auth_headers)

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Start and end dates are required"
        assert {e["field"] for e in body["errors"]} == missing

    async def test_malformed_bound_is_400(self, client, auth_headers):
        response = await client.get(
            STATISTICS, params={"startDate": "2025/01/01", "endDate": "2025-12-31"}, headers=auth_headers
        )
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "startDate"

    async def test_update_reflected_immediately(self, client, auth_headers, march_catalog):
        """Changing only the status shows up in the next aggregation."""
        before = await get_statistics(client, auth_headers, "2025-04-01", "2025-04-30")
        assert before["totalCost"] == 0

        response = await client.put(
            f"/api/v1/races/{march_catalog['C']['id']}",
            json={"status": "registered"},
            headers=auth_headers,
        )
        assert response.status_code == 200

        after = await get_statistics(client, auth_headers, "2025-04-01", "2025-04-30")
        assert after["totalCost"] == 20
        assert after["statusCounts"]["registered"] == 1
        assert after["statusCounts"]["cancelled"] == 0
        race = after["races"][0]
        assert (race["price"], race["distance"], race["name"]) == (20, 8, "C")


# =============================================================================
# Test Year Stats
# =============================================================================

class TestStats:
    """GET /races/stats"""

    async def test_year_scoped(self, client, auth_headers, march_catalog, create_race):
        await create_race(auth_headers, name="Last year", date="2024-05-05", status="registered")

        response = await client.get(STATS, params={"year": "2025"}, headers=auth_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["statusStats"] == [
            {"_id": "completed", "count": 1, "totalPrice": 50},
            {"_id": "cancelled", "count": 1, "totalPrice": 20},
            {"_id": "could_not_go", "count": 1, "totalPrice": 30},
        ]
        assert [m["_id"] for m in data["monthlyStats"]] == ["03", "04"]
        assert data["monthlyStats"][0]["total"] == 2

    async def test_all_time(self, client, auth_headers, march_catalog, create_race):
        await create_race(auth_headers, name="Last year", date="2024-05-05", status="registered")

        response = await client.get(STATS, headers=auth_headers)

        months = [m["_id"] for m in response.json()["data"]["monthlyStats"]]
        assert months == ["03", "04", "05"]

    async def test_empty(self, client, auth_headers):
        response = await client.get(STATS, params={"year": "2030"}, headers=auth_headers)
        assert response.json()["data"] == {"statusStats": [], "monthlyStats": []}
