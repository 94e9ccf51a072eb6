"""
Tests for password hashing and bearer tokens.
"""

import pytest

from racetracker.features.auth.security import (
    hash_password,
    issue_token,
    read_token,
    verify_password,
)
from racetracker.shared.exceptions import UnauthorizedError


class TestPasswords:
    """Tests for hash_password() / verify_password()."""

    async def test_round_trip(self):
        password_hash = await hash_password("Secret123")

        assert password_hash != "Secret123"
        assert await verify_password(password_hash, "Secret123")
        assert not await verify_password(password_hash, "secret123")

    async def test_missing_hash_never_matches(self):
        assert not await verify_password(None, "anything")

    async def test_garbage_hash_never_matches(self):
        assert not await verify_password("not-an-argon2-hash", "Secret123")


class TestTokens:
    """Tests for issue_token() / read_token()."""

    def test_round_trip(self):
        payload = read_token(issue_token("user-1", "ana@runmail.com"))

        assert payload.user_id == "user-1"
        assert payload.email == "ana@runmail.com"

    def test_tampered(self):
        token = issue_token("user-1", "ana@runmail.com")
        with pytest.raises(UnauthorizedError, match="Invalid token"):
            read_token("x" + token)

    def test_garbage(self):
        with pytest.raises(UnauthorizedError, match="Invalid token"):
            read_token("definitely.not.a-token")

    def test_expired(self):
        token = issue_token("user-1", "ana@runmail.com")
        with pytest.raises(UnauthorizedError, match="Token expired"):
            read_token(token, max_age=-1)
