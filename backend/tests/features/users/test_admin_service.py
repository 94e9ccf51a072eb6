"""
Tests for the bootstrap admin and user repository.
"""

from racetracker.features.auth.security import verify_password
from racetracker.features.users.models import ROLE_ADMIN, ROLE_USER
from racetracker.features.users.repository import UserRepository
from racetracker.features.users.service import ensure_admin_user


class TestEnsureAdminUser:
    """Tests for ensure_admin_user()."""

    async def test_creates_admin(self, db):
        user = await ensure_admin_user(db, "Boss@RaceTracker.app", "Admin123", "Boss")

        assert user.email == "boss@racetracker.app"
        assert user.role == ROLE_ADMIN
        assert await verify_password(user.password_hash, "Admin123")

    async def test_promotes_existing_user(self, db):
        users = UserRepository(db)
        existing = await users.create(name="Carla", email="carla@runmail.com", role=ROLE_USER)
        await db.commit()

        user = await ensure_admin_user(db, "carla@runmail.com", "NewPass1", "ignored")

        assert user.id == existing.id
        assert user.is_admin
        assert user.name == "Carla"
        assert await verify_password(user.password_hash, "NewPass1")

    async def test_idempotent(self, db):
        await ensure_admin_user(db, "boss@racetracker.app", "Admin123", "Boss")
        await ensure_admin_user(db, "boss@racetracker.app", "Admin123", "Boss")

        assert await UserRepository(db).count(role=ROLE_ADMIN) == 1


class TestUserRepository:
    """Tests for UserRepository."""

    async def test_email_lookup_is_case_insensitive(self, db):
        users = UserRepository(db)
        await users.create(name="Dani", email="dani@runmail.com")

        assert (await users.get_by_email("DANI@RunMail.com")).name == "Dani"
        assert await users.get_by_email("other@runmail.com") is None
