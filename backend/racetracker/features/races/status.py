"""
Race status enumeration and the business rules keyed on it.

Which statuses count toward spend and distance lives here and nowhere else.
"""

from enum import Enum


class RaceStatus(str, Enum):
    """
    Lifecycle label of a race record.

    Any status may change to any other; no history is kept.
    """
    REGISTERED = "registered"
    INTEND_TO_GO = "intend_to_go"
    COMPLETED = "completed"
    UNDECIDED = "undecided"
    CANCELLED = "cancelled"
    COULD_NOT_GO = "could_not_go"


# Money was spent and not refunded
COST_INCURRING_STATUSES: frozenset[RaceStatus] = frozenset({
    RaceStatus.REGISTERED,
    RaceStatus.COMPLETED,
    RaceStatus.COULD_NOT_GO,
})

STATUS_LABELS: dict[RaceStatus, str] = {
    RaceStatus.REGISTERED: "Registered",
    RaceStatus.INTEND_TO_GO: "Intend to go",
    RaceStatus.COMPLETED: "Completed",
    RaceStatus.UNDECIDED: "Undecided",
    RaceStatus.CANCELLED: "Cancelled",
    RaceStatus.COULD_NOT_GO: "Could not go",
}

STATUS_VALUES: tuple[str, ...] = tuple(s.value for s in RaceStatus)


def parse_status(value: str | RaceStatus) -> RaceStatus:
    """Strict conversion; raises ValueError for unknown values."""
    try:
        return RaceStatus(value)
    except ValueError:
        raise ValueError(
            f"Status must be one of: {', '.join(STATUS_VALUES)}"
        ) from None


def normalize_status(value, default: RaceStatus = RaceStatus.INTEND_TO_GO) -> RaceStatus:
    """Lenient conversion for imported data: unknown values become `default`."""
    if isinstance(value, RaceStatus):
        return value
    if isinstance(value, str) and value in STATUS_VALUES:
        return RaceStatus(value)
    return default


def _coerce(status: str | RaceStatus) -> RaceStatus | None:
    try:
        return RaceStatus(status)
    except ValueError:
        return None


def is_cost_incurring(status: str | RaceStatus) -> bool:
    """Does the race price count toward total spend?"""
    # stored rows carry plain strings
    return _coerce(status) in COST_INCURRING_STATUSES


def counts_distance(status: str | RaceStatus) -> bool:
    """Does the race distance count toward distance run? Only completed races do."""
    return _coerce(status) is RaceStatus.COMPLETED


def is_value_lost(status: str | RaceStatus) -> bool:
    """Paid for but not attended."""
    return _coerce(status) is RaceStatus.COULD_NOT_GO


def status_label(status: str | RaceStatus) -> str:
    """Human label; unknown values are returned as-is."""
    coerced = _coerce(status)
    return STATUS_LABELS[coerced] if coerced else str(status)
