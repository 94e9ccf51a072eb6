"""
Application error taxonomy.

Services raise these; the handlers in `shared.responses` turn them into
the JSON envelope with the matching status code.
"""

from dataclasses import dataclass


@dataclass
class FieldError:
    """Validation problem attached to a single input field."""

    field: str
    message: str

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


class RaceTrackerError(Exception):
    """Base application error."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(RaceTrackerError):
    """Malformed or missing input."""

    status_code = 400
    default_message = "Invalid data"

    def __init__(
        self,
        message: str | None = None,
        errors: list[FieldError] | None = None,
    ):
        super().__init__(message)
        self.errors = errors or []

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        """Shortcut for a single-field failure."""
        return cls(message, errors=[FieldError(field, message)])


class NotFoundError(RaceTrackerError):
    """Entity absent, or owned by someone else."""

    status_code = 404
    default_message = "Not found"


class UnauthorizedError(RaceTrackerError):
    """Missing, invalid or expired credentials."""

    status_code = 401
    default_message = "Authentication required"


class ForbiddenError(RaceTrackerError):
    """Authenticated but not allowed."""

    status_code = 403
    default_message = "Access denied"
