"""
Race service.

Business logic behind the race endpoints: owner-scoped CRUD, listing,
statistics, import/export and reports. Transactions are committed by
the caller.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Sequence

from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from racetracker.shared.exceptions import FieldError, NotFoundError, ValidationError
from .filters import PageRequest, Pagination, RaceFilters, SortSpec
from .models import Race
from .repository import RaceRepository
from .schemas import RaceCreate, RaceUpdate, validate_iso_date
from .stats import best_times, monthly_breakdown, status_breakdown, summarize
from .status import RaceStatus
from .transfer import ImportSummary, export_race, has_usable_name, import_fields, parse_import_payload

logger = logging.getLogger(__name__)

RACE_NOT_FOUND = "Race not found"


def require_date_range(start_date: str | None, end_date: str | None) -> tuple[str, str]:
    """
    Both bounds must be present and "YYYY-MM-DD".

    start > end is allowed; it simply selects nothing.

    Raises:
        ValidationError: listing every missing or malformed bound
    """
    errors = []
    for field_name, value in (("startDate", start_date), ("endDate", end_date)):
        if not value:
            errors.append(FieldError(field_name, f"{field_name} is required"))
            continue
        try:
            validate_iso_date(value)
        except ValueError as e:
            errors.append(FieldError(field_name, str(e)))
    if errors:
        raise ValidationError("Start and end dates are required", errors=errors)
    return start_date, end_date


def parse_statuses(values: Sequence[str] | None) -> list[RaceStatus]:
    """Strict status filter parsing; unknown values are a ValidationError."""
    statuses = []
    for value in values or []:
        try:
            statuses.append(RaceStatus(value))
        except ValueError:
            raise ValidationError.for_field("status", f"Unknown status: {value}") from None
    return statuses


class RaceService:
    """
    Service for a user's race catalog.

    Usage:
        service = RaceService(db)
        stats = await service.get_statistics(user.id, "2025-01-01", "2025-12-31")
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = RaceRepository(db)

    # === CRUD ===

    async def create(self, owner_id: str, data: RaceCreate) -> Race:
        race = await self.repo.create(user_id=owner_id, **data.to_fields())
        logger.info("Race created: id=%s user=%s", race.id, owner_id)
        return race

    async def get(self, owner_id: str, race_id: str) -> Race:
        """Fetch an owned race; someone else's race is reported as missing."""
        race = await self.repo.get_owned(race_id, owner_id)
        if race is None:
            raise NotFoundError(RACE_NOT_FOUND)
        return race

    async def update(self, owner_id: str, race_id: str, data: RaceUpdate) -> Race:
        race = await self.get(owner_id, race_id)
        fields = data.to_fields()
        if fields:
            race = await self.repo.update(race, **fields)
        logger.info("Race updated: id=%s fields=%s", race.id, sorted(fields))
        return race

    async def delete(self, owner_id: str, race_id: str) -> None:
        race = await self.get(owner_id, race_id)
        await self.repo.delete(race)
        logger.info("Race deleted: id=%s user=%s", race_id, owner_id)

    # === Listing ===

    async def list_races(
        self,
        owner_id: str,
        filters: RaceFilters,
        page: PageRequest,
        sort: SortSpec,
    ) -> dict:
        races, total = await self.repo.list_page(owner_id, filters, page, sort)
        return {
            "races": [r.to_dict() for r in races],
            "pagination": Pagination.build(page, total).to_dict(),
            "filters": filters.echo(),
        }

    # === Statistics ===

    async def get_stats(self, owner_id: str, year: str | None = None) -> dict:
        """Status totals and monthly breakdown for one year (or all time)."""
        races = await self.repo.find_for_year(owner_id, year)
        return {
            "statusStats": [s.to_dict() for s in status_breakdown(races)],
            "monthlyStats": [m.to_dict() for m in monthly_breakdown(races)],
        }

    async def get_statistics(
        self,
        owner_id: str,
        start_date: str | None,
        end_date: str | None,
    ) -> dict:
        """
        Aggregate the owner's races dated within [start_date, end_date].

        Returns:
            totalRaces, totalCost, totalDistance, statusCounts (all six
            statuses), valueLost, bestTimes and the full race list
        """
        start_date, end_date = require_date_range(start_date, end_date)
        races = await self.repo.find_in_range(owner_id, start_date, end_date)

        result = summarize(races).to_dict()
        result["bestTimes"] = {
            label: best.to_dict() if best else None
            for label, best in best_times(races).items()
        }
        result["races"] = [r.to_dict() for r in races]
        return result

    # === Import / export ===

    async def export_races(self, owner_id: str) -> list[dict]:
        races = await self.repo.find_all(owner_id)
        return [export_race(r) for r in races]

    async def import_races(self, owner_id: str, payload: Any, today: date) -> ImportSummary:
        """
        Create or update races from an imported payload.

        Raises:
            ValidationError: if the payload shape is not recognised
        """
        items = parse_import_payload(payload)
        summary = ImportSummary()

        for item in items:
            if not has_usable_name(item):
                logger.warning("Import item without a name skipped")
                summary.errors += 1
                continue
            try:
                data = RaceCreate.model_validate(import_fields(item, today))
            except SchemaValidationError as e:
                logger.warning("Import item %r rejected: %s", item.get("name"), e.errors()[0]["msg"])
                summary.errors += 1
                continue

            existing = await self.repo.find_by_name(owner_id, data.name)
            if existing is not None:
                await self.repo.update(existing, **data.to_fields())
                summary.updated += 1
            else:
                await self.repo.create(user_id=owner_id, **data.to_fields())
                summary.created += 1

        logger.info(
            "Import for user=%s: created=%d updated=%d errors=%d",
            owner_id, summary.created, summary.updated, summary.errors,
        )
        return summary

    # === Reports ===

    async def report_races(
        self,
        owner_id: str,
        start_date: str | None,
        end_date: str | None,
        statuses: Sequence[RaceStatus] = (),
    ) -> list[Race]:
        """Races for the CSV report, oldest first."""
        start_date, end_date = require_date_range(start_date, end_date)
        filters = RaceFilters(statuses=statuses, start_date=start_date, end_date=end_date)
        return await self.repo.find_all(owner_id, filters, SortSpec(key="date", descending=False))
