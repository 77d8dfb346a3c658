from datetime import date, datetime, timedelta, timezone

import pytest

from day_codes import (
    date_from_epoch_seconds,
    date_of,
    day_code_from_ts,
    day_code_of,
    now_seconds,
    today_code,
    year_code_of,
)
from errors import FormatError


def test_day_code_is_zero_padded():
    assert day_code_of(date(2024, 3, 5)) == "20240305"
    assert day_code_of(date(5, 1, 2)) == "00050102"
    assert day_code_of(datetime(2024, 12, 31, 23, 59)) == "20241231"


@pytest.mark.parametrize("d", [
    date(1, 1, 1),
    date(999, 12, 31),
    date(2024, 2, 29),
    date(2023, 12, 31),
    date(9999, 12, 31),
])
def test_date_of_inverts_day_code_of(d):
    assert date_of(day_code_of(d)) == d


def test_round_trip_over_a_leap_year():
    d = date(2024, 1, 1)
    while d.year == 2024:
        assert date_of(day_code_of(d)) == d
        d += timedelta(days=1)


@pytest.mark.parametrize("code", [
    "2024035",       # too short
    "202403051",     # too long
    "2024-03-05",
    "2024O305",
    "２０２４０３０５",  # non-ASCII digits
    "20240230",      # no February 30th
    "20240431",      # April has 30 days
    "20231301",      # month 13
    "00000101",      # year zero
])
def test_date_of_rejects_malformed_codes(code):
    with pytest.raises(FormatError):
        date_of(code)


def test_format_error_is_a_value_error():
    with pytest.raises(ValueError) as excinfo:
        date_of("20230229")
    assert excinfo.value.day_code == "20230229"


def test_year_code_of():
    assert year_code_of(date(2024, 6, 1)) == "2024"
    assert year_code_of(date(999, 6, 1)) == "0999"


def test_date_from_epoch_seconds_uses_given_timezone():
    assert date_from_epoch_seconds(0, timezone.utc) == datetime(1970, 1, 1, tzinfo=timezone.utc)

    tokyo = timezone(timedelta(hours=9))
    ts = int(datetime(2024, 3, 5, 20, 0, tzinfo=timezone.utc).timestamp())
    local = date_from_epoch_seconds(ts, tokyo)
    assert local.utcoffset() == timedelta(hours=9)
    assert day_code_of(local) == "20240306"


def test_date_from_epoch_seconds_defaults_to_aware_local_time():
    assert date_from_epoch_seconds(86400).tzinfo is not None


def test_day_code_from_ts():
    ts = int(datetime(2024, 3, 5, 12, 30, tzinfo=timezone.utc).timestamp())
    assert day_code_from_ts(ts, timezone.utc) == "20240305"


def test_today_code_matches_clock():
    assert today_code(timezone.utc) in {
        day_code_of(datetime.now(timezone.utc) - timedelta(seconds=5)),
        day_code_of(datetime.now(timezone.utc)),
    }


def test_now_seconds_is_whole_epoch_seconds():
    before = int(datetime.now(timezone.utc).timestamp())
    assert before <= now_seconds() <= before + 5
