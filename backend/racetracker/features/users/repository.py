"""
User repository.

Data access layer for the User model.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from racetracker.shared.repository import BaseRepository
from .models import User


class UserRepository(BaseRepository[User]):
    """Repository for User operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, User)

    async def get_by_email(self, email: str) -> User | None:
        """
        Get user by email.

        Args:
            email: Email address (compared lower-cased)

        Returns:
            User if found, None otherwise
        """
        return await self.get_by(email=email.strip().lower())

    async def list_newest_first(self) -> list[User]:
        """All users ordered by creation time (newest first)."""
        result = await self.db.execute(
            select(User).order_by(User.created_at.desc(), User.id)
        )
        return list(result.scalars().all())
