"""
User Routes

Admin-only user management.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from racetracker.db.session import get_async_db
from racetracker.features.auth.dependencies import require_admin
from racetracker.features.users.models import User
from racetracker.features.users.service import UserAdminService
from racetracker.shared.responses import envelope

router = APIRouter()


@router.get("")
async def list_users(
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """All users with their race counts, newest first."""
    users = await UserAdminService(db).list_with_race_counts()
    return envelope(users, total=len(users))


@router.delete("/{user_id}")
async def delete_user(
    user_id: str,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """
    Delete a user.

    Refused for your own account and for users who still own races.
    """
    await UserAdminService(db).delete_user(admin, user_id)
    await db.commit()
    return envelope(message="User deleted")
