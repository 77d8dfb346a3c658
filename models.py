"""Value types for the month grid: grid cells and the events laid onto them."""

from __future__ import annotations

from dataclasses import dataclass, field

# Grid geometry
ROW_COUNT = 6
COLUMN_COUNT = 7
DAYS_CNT = ROW_COUNT * COLUMN_COUNT  # 42 cells

# Time constants (seconds)
DAY = 86400
WEEK = 604800

# Event types
OTHER_EVENT = 0
BIRTHDAY_EVENT = 1
ANNIVERSARY_EVENT = 2
HOLIDAY_EVENT = 3

# Repeat rules
REPEAT_SAME_DAY = 1
REPEAT_ORDER_WEEKDAY_USE_LAST = 2
REPEAT_LAST_DAY = 3
REPEAT_ORDER_WEEKDAY = 4

# Event flags
FLAG_ALL_DAY = 1
FLAG_IS_IN_PAST = 2
FLAG_MISSING_YEAR = 4
FLAG_TASK_COMPLETED = 8


@dataclass(frozen=True)
class Event:
    """A single, already-materialized event occurrence.

    Recurring events must be expanded by the caller; the repeat fields are
    carried through untouched.
    """

    id: int | None
    title: str
    start_ts: int
    end_ts: int
    color: int = 0
    repeat_interval: int = 0
    repeat_limit: int = 0
    repeat_rule: int = 0
    flags: int = 0
    event_type: int = OTHER_EVENT
    location: str = ""
    description: str = ""

    @property
    def is_all_day(self) -> bool:
        return bool(self.flags & FLAG_ALL_DAY)

    @property
    def is_repeating(self) -> bool:
        return self.repeat_interval > 0

    @property
    def color_hex(self) -> str:
        """Colour as "#RRGGBB" (alpha dropped from the packed ARGB int)."""
        return f"#{self.color & 0xFFFFFF:06X}"


@dataclass(frozen=True)
class CalendarDay:
    """One cell of the 6x7 month grid."""

    day_number: int
    belongs_to_target_month: bool
    is_today: bool
    day_code: str
    iso_week_number: int
    grid_position: int
    is_weekend: bool
    events: tuple[Event, ...] = field(default=())

    @property
    def row(self) -> int:
        return self.grid_position // COLUMN_COUNT

    @property
    def column(self) -> int:
        return self.grid_position % COLUMN_COUNT

    @property
    def has_events(self) -> bool:
        return bool(self.events)


def color_from_hex(value: str) -> int:
    """Pack "#RRGGBB" into an opaque ARGB int, the way events store colours."""
    return 0xFF000000 | int(value.lstrip("#")[:6], 16)
