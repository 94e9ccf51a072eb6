"""
User administration.

Listing with race counts, guarded deletion, and the bootstrap admin.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from racetracker.features.auth.security import hash_password
from racetracker.features.races.repository import RaceRepository
from racetracker.shared.exceptions import NotFoundError, ValidationError
from .models import User, ROLE_ADMIN
from .repository import UserRepository

logger = logging.getLogger(__name__)


class UserAdminService:
    """Admin-only user operations."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.users = UserRepository(db)
        self.races = RaceRepository(db)

    async def list_with_race_counts(self) -> list[dict]:
        """Every user (newest first) with the number of races they own."""
        users = await self.users.list_newest_first()
        counts = await self.races.count_by_owners()
        return [
            {**user.to_dict(), "raceCount": counts.get(user.id, 0)}
            for user in users
        ]

    async def delete_user(self, actor: User, user_id: str) -> None:
        """
        Delete a user account.

        Raises:
            NotFoundError: no such user
            ValidationError: deleting yourself, or the user still owns races
        """
        user = await self.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")

        if user.id == actor.id:
            raise ValidationError("You cannot delete your own account")

        race_count = await self.races.count_by_owner(user.id)
        if race_count > 0:
            raise ValidationError(
                f"Cannot delete user: they still have {race_count} race(s). "
                "Transfer or delete the races first."
            )

        await self.users.delete(user)
        logger.info("User deleted: id=%s by admin=%s", user_id, actor.id)


async def ensure_admin_user(db: AsyncSession, email: str, password: str, name: str) -> User:
    """Create the configured admin, or promote and re-key an existing account."""
    users = UserRepository(db)
    password_hash = await hash_password(password)
    user = await users.get_by_email(email)
    if user is None:
        user = await users.create(
            name=name,
            email=email.strip().lower(),
            password_hash=password_hash,
            role=ROLE_ADMIN,
        )
        logger.info("Admin user created: %s", user.email)
    else:
        user = await users.update(user, role=ROLE_ADMIN, password_hash=password_hash)
        logger.info("Admin user ensured: %s", user.email)
    await db.commit()
    return user
