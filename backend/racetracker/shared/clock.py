"""
Injectable "today".

Code that needs the current date takes a `Clock` instead of reading the
system time, so tests can pin the date with `app.dependency_overrides`.
"""

from datetime import date
from typing import Callable

Clock = Callable[[], date]


def system_clock() -> date:
    """Today's local date."""
    return date.today()


def get_clock() -> Clock:
    """FastAPI dependency returning the clock in use."""
    return system_clock
