"""
Generic async data access.

`BaseRepository` wraps one model and one `AsyncSession`; feature
repositories subclass it and add their own queries. Writes flush but never
commit: the route that opened the session decides when to commit.

Usage:
    class RaceRepository(OwnedRepository[Race]):
        def __init__(self, db: AsyncSession):
            super().__init__(db, Race)
"""

from typing import Any, Generic, Type, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """Single-model CRUD over an async session."""

    def __init__(self, db: AsyncSession, model: Type[T]):
        self.db = db
        self.model = model

    def _where(self, query: Select, criteria: dict[str, Any]) -> Select:
        """Add an equality clause per keyword (column name -> value)."""
        for column, value in criteria.items():
            query = query.where(getattr(self.model, column) == value)
        return query

    async def get_by_id(self, id: str) -> T | None:
        return await self.db.get(self.model, id)

    async def get_by(self, **criteria) -> T | None:
        """
        First row whose columns equal the given values.

        Example:
            await users.get_by(email="ana@runmail.com")
        """
        result = await self.db.execute(self._where(select(self.model), criteria).limit(1))
        return result.scalar_one_or_none()

    async def count(self, **criteria) -> int:
        query = self._where(select(func.count()).select_from(self.model), criteria)
        result = await self.db.execute(query)
        return result.scalar() or 0

    async def create(self, **values) -> T:
        """Insert a row and return it with server-side defaults loaded."""
        entity = self.model(**values)
        self.db.add(entity)
        await self.db.flush()
        await self.db.refresh(entity)
        return entity

    async def update(self, entity: T, **values) -> T:
        """Overwrite the given columns; untouched columns keep their value."""
        for column, value in values.items():
            setattr(entity, column, value)
        await self.db.flush()
        await self.db.refresh(entity)
        return entity

    async def delete(self, entity: T) -> None:
        await self.db.delete(entity)
        await self.db.flush()


class OwnedRepository(BaseRepository[T]):
    """
    Repository for rows that belong to a user.

    Owner-scoped lookups make a row owned by someone else look exactly like
    a missing one.
    """

    owner_field = "user_id"

    async def get_owned(self, id: str, owner_id: str) -> T | None:
        return await self.get_by(id=id, **{self.owner_field: owner_id})

    async def count_by_owner(self, owner_id: str) -> int:
        return await self.count(**{self.owner_field: owner_id})
