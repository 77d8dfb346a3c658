"""Pure calendar arithmetic for the Monday-first month grid."""

import calendar
from datetime import date

from errors import InvalidDayOfWeek, InvalidDayOfWeekIndex

DAY_ABBR = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

# ISO numbering: 1=Monday .. 7=Sunday
MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY, SUNDAY = range(1, 8)

# Sunday-first platform numbering (java.util.Calendar style): 1=Sunday .. 7=Saturday
_ISO_FROM_SUNDAY_FIRST = {1: SUNDAY, 2: MONDAY, 3: TUESDAY, 4: WEDNESDAY,
                          5: THURSDAY, 6: FRIDAY, 7: SATURDAY}
_SUNDAY_FIRST_FROM_ISO = {v: k for k, v in _ISO_FROM_SUNDAY_FIRST.items()}


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in the given month (leap-year aware)."""
    return calendar.monthrange(year, month)[1]


def prev_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month earlier."""
    if month == 1:
        return year - 1, 12
    return year, month - 1


def next_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month later."""
    if month == 12:
        return year + 1, 1
    return year, month + 1


# ------------------------------------------------------------------
# Weekday numbering
# ------------------------------------------------------------------
def day_index_from_iso(day_of_week: int) -> int:
    """Convert an ISO weekday (1=Mon..7=Sun) to a Monday-first column index."""
    if day_of_week not in _SUNDAY_FIRST_FROM_ISO:
        raise InvalidDayOfWeek(f"Invalid day: {day_of_week}")
    return day_of_week - 1


def iso_from_day_index(index: int) -> int:
    """Convert a Monday-first column index (0..6) to an ISO weekday."""
    if index not in range(7):
        raise InvalidDayOfWeekIndex(f"Invalid day index: {index}")
    return index + 1


def iso_from_sunday_first(day_of_week: int) -> int:
    """Convert a Sunday-first weekday (1=Sun..7=Sat) to an ISO weekday."""
    try:
        return _ISO_FROM_SUNDAY_FIRST[day_of_week]
    except KeyError:
        raise InvalidDayOfWeek(f"Invalid day: {day_of_week}") from None


def sunday_first_from_iso(day_of_week: int) -> int:
    """Convert an ISO weekday to the Sunday-first numbering."""
    try:
        return _SUNDAY_FIRST_FROM_ISO[day_of_week]
    except KeyError:
        raise InvalidDayOfWeek(f"Invalid day: {day_of_week}") from None


def first_weekday_index(d: date) -> int:
    """Return the Monday-first column index (0..6) of d's first of month."""
    return day_index_from_iso(d.replace(day=1).isoweekday())


def is_weekend_iso(day_of_week: int) -> bool:
    return day_of_week in (SATURDAY, SUNDAY)


def is_weekend_index(index: int) -> bool:
    """True for the last two columns of a Monday-first grid row."""
    return is_weekend_iso(iso_from_day_index(index % 7))


def iso_week_number(d: date) -> int:
    """Return the ISO 8601 week-of-year for d."""
    return d.isocalendar()[1]
