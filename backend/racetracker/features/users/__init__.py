"""
User management module.

Usage:
    from racetracker.features.users import User, UserRepository

Models:
- User: Application user (email/password or external identity)

Repositories:
- UserRepository: Data access for users
"""

from .models import User, ROLE_USER, ROLE_ADMIN
from .schemas import RegisterRequest, LoginRequest
from .repository import UserRepository

__all__ = [
    # Models
    "User",
    "ROLE_USER",
    "ROLE_ADMIN",
    # Schemas
    "RegisterRequest",
    "LoginRequest",
    # Repositories
    "UserRepository",
]
