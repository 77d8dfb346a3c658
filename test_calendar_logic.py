from datetime import date

import pytest

from calendar_logic import (
    day_index_from_iso,
    days_in_month,
    first_weekday_index,
    iso_from_day_index,
    iso_from_sunday_first,
    iso_week_number,
    is_weekend_index,
    is_weekend_iso,
    next_month,
    prev_month,
    sunday_first_from_iso,
    SATURDAY,
    SUNDAY,
)
from errors import InvalidDayOfWeek, InvalidDayOfWeekIndex


@pytest.mark.parametrize("year, month, expected", [
    (2024, 1, 31),
    (2024, 2, 29),
    (2023, 2, 28),
    (2000, 2, 29),
    (2100, 2, 28),
    (2024, 4, 30),
])
def test_days_in_month(year, month, expected):
    assert days_in_month(year, month) == expected


def test_month_stepping_wraps_years():
    assert prev_month(2024, 1) == (2023, 12)
    assert prev_month(2024, 3) == (2024, 2)
    assert next_month(2024, 12) == (2025, 1)
    assert next_month(2024, 3) == (2024, 4)


def test_first_weekday_index_is_monday_based():
    assert first_weekday_index(date(2024, 3, 15)) == 4   # Fri 1 March 2024
    assert first_weekday_index(date(2024, 1, 31)) == 0   # Mon 1 January 2024
    assert first_weekday_index(date(2024, 9, 2)) == 6    # Sun 1 September 2024


def test_iso_day_index_conversions():
    assert [day_index_from_iso(d) for d in range(1, 8)] == list(range(7))
    assert [iso_from_day_index(i) for i in range(7)] == list(range(1, 8))


def test_sunday_first_conversions():
    assert iso_from_sunday_first(1) == SUNDAY
    assert iso_from_sunday_first(2) == 1
    assert iso_from_sunday_first(7) == SATURDAY
    for dow in range(1, 8):
        assert sunday_first_from_iso(iso_from_sunday_first(dow)) == dow


@pytest.mark.parametrize("func", [day_index_from_iso, iso_from_sunday_first, sunday_first_from_iso])
@pytest.mark.parametrize("value", [0, 8, -1])
def test_out_of_range_weekday_is_a_contract_violation(func, value):
    with pytest.raises(InvalidDayOfWeek):
        func(value)


@pytest.mark.parametrize("value", [-1, 7])
def test_out_of_range_index_is_a_contract_violation(value):
    with pytest.raises(InvalidDayOfWeekIndex):
        iso_from_day_index(value)
    with pytest.raises(AssertionError):
        iso_from_day_index(value)


def test_weekend_detection():
    assert [is_weekend_iso(d) for d in range(1, 8)] == [False] * 5 + [True, True]
    for i in range(42):
        assert is_weekend_index(i) == (i % 7 in (5, 6))


def test_iso_week_number_at_year_boundaries():
    assert iso_week_number(date(2021, 1, 3)) == 53
    assert iso_week_number(date(2021, 1, 4)) == 1
    assert iso_week_number(date(2024, 12, 30)) == 1
