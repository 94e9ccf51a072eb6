"""
Formatting and parsing helpers for race values.

Aggregation keeps full precision; rounding happens only here.
"""

import re

DURATION_RE = re.compile(r"^([01]?[0-9]|2[0-3]):([0-5][0-9]):([0-5][0-9])$")


def parse_duration(value: str | None) -> int | None:
    """Parse "HH:MM:SS" to seconds.

    "00:25:30" → 1530
    "3:05:00"  → 11100
    ""         → None
    """
    if not value:
        return None
    match = DURATION_RE.match(value.strip())
    if not match:
        return None
    hours, minutes, seconds = (int(g) for g in match.groups())
    return hours * 3600 + minutes * 60 + seconds


def format_price(value: float) -> str:
    """2 decimal places: 50 → "50.00"."""
    return f"{value:.2f}"


def format_distance(value: float) -> str:
    """1 decimal place: 21.0975 → "21.1"."""
    return f"{value:.1f}"


def format_date(iso_date: str) -> str:
    """ISO "2025-03-01" → "01/03/2025". Non-ISO input is returned untouched."""
    parts = iso_date.split("-")
    if len(parts) != 3:
        return iso_date
    year, month, day = parts
    return f"{day}/{month}/{year}"
