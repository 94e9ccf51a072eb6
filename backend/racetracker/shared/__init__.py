"""
Shared utilities (NOT business logic).

Usage:
    from racetracker.shared import ValidationError, envelope
    from racetracker.shared.formatters import parse_duration
"""
from .exceptions import (
    FieldError,
    RaceTrackerError,
    ValidationError,
    NotFoundError,
    UnauthorizedError,
    ForbiddenError,
)
from .responses import envelope, register_exception_handlers
from .clock import Clock, system_clock, get_clock
from .formatters import parse_duration, format_price, format_distance, format_date

__all__ = [
    # Errors
    "FieldError",
    "RaceTrackerError",
    "ValidationError",
    "NotFoundError",
    "UnauthorizedError",
    "ForbiddenError",
    # Responses
    "envelope",
    "register_exception_handlers",
    # Clock
    "Clock",
    "system_clock",
    "get_clock",
    # Formatters
    "parse_duration",
    "format_price",
    "format_distance",
    "format_date",
]
