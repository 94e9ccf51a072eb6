"""
Race repository.

Data access layer for Race records. Every query is scoped to the owner.
"""

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from racetracker.shared.repository import OwnedRepository
from .filters import RaceFilters, PageRequest, SortSpec
from .models import Race


class RaceRepository(OwnedRepository[Race]):
    """Repository for Race operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Race)

    async def list_page(
        self,
        owner_id: str,
        filters: RaceFilters,
        page: PageRequest,
        sort: SortSpec,
    ) -> tuple[list[Race], int]:
        """
        One page of the owner's races plus the total match count.

        Args:
            owner_id: Requesting user's ID
            filters: Listing filters
            page: Page number and size
            sort: Ordering

        Returns:
            Tuple of (races on the page, total matching races)
        """
        conditions = filters.conditions(owner_id)

        total_result = await self.db.execute(
            select(func.count()).select_from(Race).where(*conditions)
        )
        total = total_result.scalar() or 0

        result = await self.db.execute(
            select(Race)
            .where(*conditions)
            .order_by(*sort.order_by())
            .offset(page.offset)
            .limit(page.limit)
        )
        return list(result.scalars().all()), total

    async def find_all(
        self,
        owner_id: str,
        filters: RaceFilters | None = None,
        sort: SortSpec | None = None,
    ) -> list[Race]:
        """All matching races of the owner, unpaginated."""
        filters = filters or RaceFilters()
        sort = sort or SortSpec()
        result = await self.db.execute(
            select(Race)
            .where(*filters.conditions(owner_id))
            .order_by(*sort.order_by())
        )
        return list(result.scalars().all())

    async def find_in_range(self, owner_id: str, start_date: str, end_date: str) -> list[Race]:
        """
        Races dated within [start_date, end_date], both inclusive, newest first.

        A reversed range simply matches nothing.
        """
        return await self.find_all(
            owner_id,
            RaceFilters(start_date=start_date, end_date=end_date),
        )

    async def find_for_year(self, owner_id: str, year: str | None = None) -> list[Race]:
        """Races of one year, or every race when year is None."""
        return await self.find_all(owner_id, RaceFilters(year=year))

    async def find_by_name(self, owner_id: str, name: str) -> Race | None:
        """Case-insensitive exact name match (first by date if duplicated).

        Compares casefolded names, so "ÉTAPE" and "étape" are the same race.
        """
        result = await self.db.execute(
            select(Race)
            .where(Race.user_id == owner_id, Race.name_folded == name.casefold())
            .order_by(Race.date.desc(), Race.id)
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def count_by_owners(self) -> dict[str, int]:
        """Race count per owner (owners without races are absent)."""
        result = await self.db.execute(
            select(Race.user_id, func.count()).group_by(Race.user_id)
        )
        return {user_id: count for user_id, count in result.all()}
