"""
Password hashing and bearer tokens.

Hashing uses argon2 and runs in a worker thread so it does not block the
event loop. Tokens are signed, time-limited payloads; clients treat them
as opaque strings.
"""

import asyncio
import logging
from dataclasses import dataclass

from argon2 import PasswordHasher
from argon2.exceptions import (
    VerifyMismatchError,
    VerificationError,
    InvalidHashError,
)
from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired

from racetracker.config import settings
from racetracker.shared.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)

_ph = PasswordHasher()


def _serializer() -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(settings.secret_key, salt=settings.token_salt)


@dataclass
class TokenPayload:
    user_id: str
    email: str


# === Passwords ===

async def hash_password(password: str) -> str:
    """Hash a password without blocking."""
    return await asyncio.to_thread(_ph.hash, password)


def _verify(password_hash: str, password: str) -> bool:
    try:
        return _ph.verify(password_hash, password)
    except VerifyMismatchError:
        return False
    except VerificationError:
        logger.error("Password verification error")
        return False
    except InvalidHashError:
        logger.warning("Stored password hash is not a valid argon2 hash")
        return False


async def verify_password(password_hash: str | None, password: str) -> bool:
    """
    Check a password against a stored hash.

    Accounts without a password (external identity only) never match.
    """
    if not password_hash:
        return False
    return await asyncio.to_thread(_verify, password_hash, password)


# === Tokens ===

def issue_token(user_id: str, email: str) -> str:
    return _serializer().dumps({"uid": user_id, "email": email})


def read_token(token: str, max_age: int | None = None) -> TokenPayload:
    """
    Verify signature and age.

    Raises:
        UnauthorizedError: expired, tampered or malformed token
    """
    max_age = settings.token_max_age_seconds if max_age is None else max_age
    try:
        data = _serializer().loads(token, max_age=max_age)
    except SignatureExpired:
        raise UnauthorizedError("Token expired") from None
    except BadSignature:
        raise UnauthorizedError("Invalid token") from None

    if not isinstance(data, dict) or "uid" not in data:
        raise UnauthorizedError("Invalid token")
    return TokenPayload(user_id=str(data["uid"]), email=str(data.get("email") or ""))
