"""
Races API Routes

Endpoints for the user's race catalog, statistics, import/export and
reports. Every endpoint requires a bearer token and only ever sees the
caller's own races.
"""

from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from racetracker.db.session import get_async_db
from racetracker.features.auth.dependencies import get_current_user
from racetracker.features.races.filters import PageRequest, RaceFilters, SortSpec
from racetracker.features.races.report import build_report, csv_response
from racetracker.features.races.schemas import RaceCreate, RaceUpdate
from racetracker.features.races.service import RaceService, parse_statuses
from racetracker.features.users.models import User
from racetracker.shared.clock import Clock, get_clock
from racetracker.shared.responses import envelope

router = APIRouter()


# === Listing ===

@router.get("")
async def list_races(
    year: Optional[str] = None,
    month: Optional[str] = None,
    status: Optional[List[str]] = Query(None),
    search: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_order: Optional[str] = Query(None, alias="sortOrder"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
):
    """
    List races with filters, sorting and pagination.

    `status` may be repeated; unknown values match nothing. Invalid
    `page`/`limit` fall back to 1/10.
    """
    filters = RaceFilters(
        year=year or None,
        month=month or None,
        statuses=status or (),
        search=search or None,
    )
    data = await RaceService(db).list_races(
        user.id,
        filters,
        PageRequest.from_query(page, limit),
        SortSpec.from_query(sort_by, sort_order),
    )
    return envelope(data)


# === Statistics ===

@router.get("/stats")
async def race_stats(
    year: Optional[str] = None,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
):
    """Status totals and monthly breakdown, optionally for one year."""
    data = await RaceService(db).get_stats(user.id, year or None)
    return envelope(data)


@router.get("/statistics")
async def race_statistics(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
):
    """Aggregated statistics for a date range. Both bounds are required."""
    data = await RaceService(db).get_statistics(user.id, start_date, end_date)
    return envelope(data)


# === Import / export / report ===

@router.get("/export")
async def export_races(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
):
    """All races as a portable JSON list."""
    races = await RaceService(db).export_races(user.id)
    return envelope(races)


@router.post("/import")
async def import_races(
    payload: Any = Body(...),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
    clock: Clock = Depends(get_clock),
):
    """Create or update races from an exported JSON payload."""
    summary = await RaceService(db).import_races(user.id, payload, clock())
    await db.commit()
    return envelope(summary.to_dict(), message="Import finished")


@router.get("/report.csv")
async def race_report(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    status: Optional[List[str]] = Query(None),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
    clock: Clock = Depends(get_clock),
):
    """CSV report of races in a date range, optionally limited to statuses."""
    races = await RaceService(db).report_races(
        user.id, start_date, end_date, parse_statuses(status)
    )
    filename = f"race_report_{clock().isoformat()}.csv"
    return csv_response(filename, build_report(races))


# === CRUD ===

@router.post("", status_code=201)
async def create_race(
    request: RaceCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
):
    race = await RaceService(db).create(user.id, request)
    await db.commit()
    return JSONResponse(
        status_code=201,
        content=envelope({"race": race.to_dict()}, message="Race created"),
    )


@router.get("/{race_id}")
async def get_race(
    race_id: str,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
):
    race = await RaceService(db).get(user.id, race_id)
    return envelope({"race": race.to_dict()})


@router.put("/{race_id}")
async def update_race(
    race_id: str,
    request: RaceUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
):
    """Partial update: only the fields present in the body change."""
    race = await RaceService(db).update(user.id, race_id, request)
    await db.commit()
    return envelope({"race": race.to_dict()}, message="Race updated")


@router.delete("/{race_id}")
async def delete_race(
    race_id: str,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
):
    await RaceService(db).delete(user.id, race_id)
    await db.commit()
    return envelope(message="Race deleted")
