"""Authentication: password hashing, bearer tokens, request dependencies."""

from .security import hash_password, verify_password, issue_token, read_token
from .dependencies import get_current_user, require_admin
from .service import AuthService

__all__ = [
    "hash_password",
    "verify_password",
    "issue_token",
    "read_token",
    "get_current_user",
    "require_admin",
    "AuthService",
]
