"""
FastAPI dependencies for authentication.

Usage:
    @router.get("/races")
    async def list_races(user: User = Depends(get_current_user)): ...

    @router.get("/users", dependencies=[Depends(require_admin)])
"""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from racetracker.db.session import get_async_db
from racetracker.features.users.models import User
from racetracker.features.users.repository import UserRepository
from racetracker.shared.exceptions import ForbiddenError, UnauthorizedError
from .security import read_token

_bearer = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    db: AsyncSession = Depends(get_async_db),
) -> User:
    """Resolve the bearer token to a user that still exists."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise UnauthorizedError("Access token required")

    payload = read_token(credentials.credentials)
    user = await UserRepository(db).get_by_id(payload.user_id)
    if user is None:
        raise UnauthorizedError("User not found")
    return user


async def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        raise ForbiddenError("Access denied. Administrators only.")
    return user
