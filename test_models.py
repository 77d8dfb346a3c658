from dataclasses import FrozenInstanceError

import pytest

from models import (
    DAY,
    DAYS_CNT,
    FLAG_ALL_DAY,
    FLAG_TASK_COMPLETED,
    WEEK,
    CalendarDay,
    Event,
    color_from_hex,
)


def test_grid_constants():
    assert DAYS_CNT == 42
    assert WEEK == 7 * DAY


def test_event_helpers():
    event = Event(id=3, title="standup", start_ts=0, end_ts=DAY, color=0xFF00AA11,
                  repeat_interval=WEEK, flags=FLAG_ALL_DAY | FLAG_TASK_COMPLETED)
    assert event.is_all_day
    assert event.is_repeating
    assert event.color_hex == "#00AA11"
    assert not Event(id=None, title="once", start_ts=0, end_ts=0).is_repeating


def test_color_from_hex_round_trips_through_color_hex():
    assert color_from_hex("#FFD700") == 0xFFFFD700
    assert Event(id=None, title="x", start_ts=0, end_ts=0,
                 color=color_from_hex("#4CAF50")).color_hex == "#4CAF50"


def test_calendar_day_is_immutable():
    day = CalendarDay(day_number=5, belongs_to_target_month=True, is_today=False,
                      day_code="20240305", iso_week_number=10, grid_position=8,
                      is_weekend=False)
    assert (day.row, day.column) == (1, 1)
    assert day.events == ()
    assert not day.has_events
    with pytest.raises(FrozenInstanceError):
        day.is_today = True
