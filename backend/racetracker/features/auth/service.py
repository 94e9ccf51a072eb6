"""
Authentication service.

Registration and login; both return the user plus a fresh bearer token.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from racetracker.features.users.models import User, ROLE_USER
from racetracker.features.users.repository import UserRepository
from racetracker.features.users.schemas import LoginRequest, RegisterRequest
from racetracker.shared.exceptions import UnauthorizedError, ValidationError
from .security import hash_password, issue_token, verify_password

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


class AuthService:
    """
    Service for user authentication.

    Usage:
        service = AuthService(db)
        user, token = await service.login(request)
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.users = UserRepository(db)

    async def register(self, request: RegisterRequest) -> tuple[User, str]:
        """
        Create an account.

        Raises:
            ValidationError: email already registered
        """
        if await self.users.get_by_email(request.email):
            raise ValidationError.for_field("email", "A user with this email already exists")

        user = await self.users.create(
            name=request.name,
            email=request.email,
            password_hash=await hash_password(request.password),
            role=ROLE_USER,
        )
        logger.info("User registered: id=%s", user.id)
        return user, issue_token(user.id, user.email)

    async def login(self, request: LoginRequest) -> tuple[User, str]:
        """
        Check credentials.

        Raises:
            UnauthorizedError: unknown email or wrong password (same message)
        """
        user = await self.users.get_by_email(request.email)
        if user is None or not await verify_password(user.password_hash, request.password):
            logger.warning("Failed login attempt")
            raise UnauthorizedError(INVALID_CREDENTIALS)
        return user, issue_token(user.id, user.email)
