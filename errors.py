"""Exception types raised by the month grid."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from models import Event


class MonthGridError(Exception):
    """Base class for recoverable month-grid errors."""


class FormatError(MonthGridError, ValueError):
    """A day code is not 8 ASCII digits or does not name a real date."""

    def __init__(self, day_code: str, reason: str) -> None:
        super().__init__(f"Invalid day code {day_code!r}: {reason}")
        self.day_code = day_code
        self.reason = reason


class DataError(MonthGridError):
    """An event's time range cannot be laid out day by day."""

    def __init__(self, event: Event, reason: str) -> None:
        super().__init__(f"Event {getattr(event, 'id', None)!r}: {reason}")
        self.event = event
        self.reason = reason


class GridRangeError(MonthGridError, ValueError):
    """A month whose 42-cell grid leaves the representable date range (years 1..9999)."""

    def __init__(self, year: int, month: int) -> None:
        super().__init__(f"Month {year:04d}-{month:02d} has grid cells outside years 1..9999")
        self.year = year
        self.month = month


class InvalidDayOfWeek(AssertionError):
    """Day-of-week number outside its numbering scheme (programming error)."""


class InvalidDayOfWeekIndex(AssertionError):
    """Grid column index outside 0..6 (programming error)."""
