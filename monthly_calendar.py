"""Monthly grid builder: the 42-cell month view and its event overlay.

The builder is a set of pure functions of ``(target_date, now, events)``.
``MonthlyCalendar`` wires them to an event source and a renderer: it renders
the bare skeleton first, then renders again once events are attached.
"""

from __future__ import annotations

import calendar
from dataclasses import replace
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Callable, Iterable, Sequence

from loguru import logger

from calendar_logic import (
    days_in_month,
    first_weekday_index,
    is_weekend_index,
    iso_week_number,
)
from day_codes import date_from_epoch_seconds, day_code_of, year_code_of
from errors import DataError, GridRangeError
from models import DAYS_CNT, CalendarDay, Event
from settings import resolve_timezone

LEAD_PADDING_DAYS = 7
TRAIL_PADDING_DAYS = 43
MAX_EVENT_SPAN_DAYS = 2 * 366

RenderMonth = Callable[[str, list[CalendarDay], bool, date], None]
FetchEvents = Callable[[int, int], Sequence[Event]]


# ------------------------------------------------------------------
# Grid skeleton
# ------------------------------------------------------------------
def build_skeleton(target_date: date, now: date) -> list[CalendarDay]:
    """Return the 42 cells of target_date's month view, without events.

    Weeks start on Monday. ``now`` decides which cell (if any) is today.
    Raises GridRangeError for a month whose grid needs days outside
    years 1..9999 (only December 9999).
    """
    year, month = target_date.year, target_date.month
    first_of_month = date(year, month, 1)
    lead_offset = first_weekday_index(first_of_month)
    curr_month_days = days_in_month(year, month)
    try:
        grid_start = first_of_month - timedelta(days=lead_offset)
        grid_start + timedelta(days=DAYS_CNT - 1)
    except OverflowError:
        raise GridRangeError(year, month) from None
    today = day_code_of(now)

    days: list[CalendarDay] = []
    for i in range(DAYS_CNT):
        cell_date = grid_start + timedelta(days=i)
        # Previous, target, then following month.
        is_this_month = lead_offset <= i < lead_offset + curr_month_days
        value = cell_date.day
        days.append(CalendarDay(
            day_number=value,
            belongs_to_target_month=is_this_month,
            is_today=_is_today(cell_date.year, cell_date.month, value, today),
            day_code=day_code_of(cell_date),
            iso_week_number=iso_week_number(cell_date),
            grid_position=i,
            is_weekend=is_weekend_index(i),
        ))
    return days


def _is_today(year: int, month: int, day_in_month: int, today: str) -> bool:
    day_to_check = min(day_in_month, days_in_month(year, month))
    return day_code_of(date(year, month, day_to_check)) == today


# ------------------------------------------------------------------
# Event overlay
# ------------------------------------------------------------------
def _event_dates(event: Event, tz: tzinfo | None) -> tuple[date, date]:
    start = date_from_epoch_seconds(event.start_ts, tz).date()
    end = date_from_epoch_seconds(event.end_ts, tz).date()
    return start, end


def event_day_codes(
    event: Event,
    tz: tzinfo | None = None,
    max_span_days: int = MAX_EVENT_SPAN_DAYS,
) -> list[str]:
    """Return the day code of every calendar day the event touches.

    Raises DataError when the event ends before it starts or spans more
    than ``max_span_days`` days.
    """
    start, end = _event_dates(event, tz)
    if end < start:
        raise DataError(event, f"ends on {end} before it starts on {start}")
    span = (end - start).days + 1
    if span > max_span_days:
        raise DataError(event, f"spans {span} days, limit is {max_span_days}")
    return [day_code_of(start + timedelta(days=n)) for n in range(span)]


def _truncated_day_codes(event: Event, tz: tzinfo | None, max_span_days: int) -> list[str]:
    start, end = _event_dates(event, tz)
    span = max(1, min((end - start).days + 1, max_span_days))
    return [day_code_of(start + timedelta(days=n)) for n in range(span)]


def group_events_by_day(
    events: Iterable[Event],
    tz: tzinfo | None = None,
    max_span_days: int = MAX_EVENT_SPAN_DAYS,
) -> dict[str, list[Event]]:
    """Bucket events by day code, keeping the order they were supplied in.

    Malformed ranges are logged and laid out truncated instead of failing:
    an inverted event lands on its start day, an oversized one is capped.
    """
    day_events: dict[str, list[Event]] = {}
    for event in events:
        try:
            codes = event_day_codes(event, tz, max_span_days)
        except DataError as exc:
            logger.warning(f"{exc}; laying it out truncated")
            codes = _truncated_day_codes(event, tz, max_span_days)
        for code in codes:
            day_events.setdefault(code, []).append(event)
    return day_events


def attach_events(
    days: Sequence[CalendarDay],
    events: Iterable[Event],
    tz: tzinfo | None = None,
    max_span_days: int = MAX_EVENT_SPAN_DAYS,
) -> list[CalendarDay]:
    """Return a copy of days with each cell's events filled in."""
    day_events = group_events_by_day(events, tz, max_span_days)
    return [replace(day, events=tuple(day_events.get(day.day_code, ())))
            for day in days]


# ------------------------------------------------------------------
# Labels and query range
# ------------------------------------------------------------------
def month_label(target_date: date, now: date) -> str:
    """Month name, with the year appended when it is not the current one."""
    label = calendar.month_name[target_date.month]
    if year_code_of(target_date) != year_code_of(now):
        label += f" {year_code_of(target_date)}"
    return label


# A day of slack either side keeps local-time conversion inside years 1..9999.
_EARLIEST_DAY = date.min + timedelta(days=1)
_LATEST_DAY = date.max - timedelta(days=1)


def _shift_clamped(d: date, days: int) -> date:
    try:
        shifted = d + timedelta(days=days)
    except OverflowError:
        shifted = date.max if days > 0 else date.min
    return min(max(shifted, _EARLIEST_DAY), _LATEST_DAY)


def fetch_range(
    target_date: date,
    tz: tzinfo | None = None,
    lead_days: int = LEAD_PADDING_DAYS,
    trail_days: int = TRAIL_PADDING_DAYS,
) -> tuple[int, int]:
    """Return (start_ts, end_ts) covering every cell of the month view.

    The range is measured from the first of the target month, so the lead
    and trailing cells are always inside it. At the ends of the calendar
    both ends are clamped one day inside date.min and date.max.
    """
    first_of_month = date(target_date.year, target_date.month, 1)
    start = datetime.combine(_shift_clamped(first_of_month, -lead_days), time.min, tzinfo=tz)
    end = datetime.combine(_shift_clamped(first_of_month, trail_days), time.min, tzinfo=tz)
    return int(start.timestamp()), int(end.timestamp())


# ------------------------------------------------------------------
# Driver
# ------------------------------------------------------------------
class MonthlyCalendar:
    """Builds month views and hands them to a renderer.

    ``render_month(label, days, has_event_data, target_date)`` is called
    once with the bare grid and, when ``fetch_events`` is given, a second
    time with events attached.
    """

    def __init__(
        self,
        render_month: RenderMonth,
        fetch_events: FetchEvents | None = None,
        tz: tzinfo | None = None,
        clock: Callable[[], datetime] | None = None,
        max_span_days: int = MAX_EVENT_SPAN_DAYS,
        lead_padding_days: int = LEAD_PADDING_DAYS,
        trail_padding_days: int = TRAIL_PADDING_DAYS,
    ) -> None:
        self._render_month = render_month
        self._fetch_events = fetch_events
        self.tz = tz
        self._clock = clock or (lambda: datetime.now(self.tz))
        self.max_span_days = max_span_days
        self.lead_padding_days = lead_padding_days
        self.trail_padding_days = trail_padding_days

        self.target_date: date | None = None
        self.events: list[Event] = []

    @classmethod
    def from_settings(
        cls,
        settings: dict,
        render_month: RenderMonth,
        fetch_events: FetchEvents | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> "MonthlyCalendar":
        return cls(
            render_month,
            fetch_events,
            tz=resolve_timezone(settings.get("timezone")),
            clock=clock,
            max_span_days=settings["max_event_span_days"],
            lead_padding_days=settings["lead_padding_days"],
            trail_padding_days=settings["trail_padding_days"],
        )

    def update_monthly_calendar(self, target_date: date) -> list[CalendarDay]:
        """Render target_date's month and return the final grid."""
        now = self._clock()
        self.target_date = target_date
        label = month_label(target_date, now)

        days = build_skeleton(target_date, now)
        logger.debug(f"Built {label} grid {days[0].day_code}..{days[-1].day_code}")
        self._render_month(label, days, False, target_date)
        if self._fetch_events is None:
            return days

        start_ts, end_ts = fetch_range(
            target_date, self.tz, self.lead_padding_days, self.trail_padding_days)
        try:
            self.events = list(self._fetch_events(start_ts, end_ts))
        except Exception:
            logger.exception(f"Event source failed for range {start_ts}..{end_ts}")
            raise

        days = attach_events(days, self.events, self.tz, self.max_span_days)
        logger.debug(f"Attached {len(self.events)} events to {label}")
        self._render_month(label, days, True, target_date)
        return days

    get_month = update_monthly_calendar
