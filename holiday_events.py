"""Built-in holidays (Switzerland, Germany, China) served as all-day events."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, tzinfo
from typing import Callable, Iterable, NamedTuple

from loguru import logger

from day_codes import date_from_epoch_seconds
from models import FLAG_ALL_DAY, HOLIDAY_EVENT, Event, color_from_hex


def _easter(year: int) -> date:
    """Compute Easter Sunday (Anonymous Gregorian algorithm)."""
    a = year % 19
    b, c = divmod(year, 100)
    d, e = divmod(b, 4)
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i, k = divmod(c, 4)
    el = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * el) // 451
    month, day = divmod(h + el - 7 * m + 114, 31)
    return date(year, month, day + 1)


# --- date generators --------------------------------------------------------
# Each rule maps a year to the consecutive days it covers in that year.

def _run(first: date, n: int) -> list[date]:
    return [first + timedelta(days=i) for i in range(n)]


def _fixed(m: int, d: int, n: int = 1):
    return lambda year: _run(date(year, m, d), n)


def _easter_rel(offset: int):
    return lambda year: _run(_easter(year) + timedelta(days=offset), 1)


def _from_table(table: dict[int, tuple[int, int]], n: int = 1):
    """Days from a per-year (month, day) table; years outside it have none."""
    def fn(year):
        if year not in table:
            return []
        return _run(date(year, *table[year]), n)
    return fn


# --- Chinese lunar calendar lookup table (2024-2036) -----------------------

_SPRING_FESTIVAL = {
    2024: (2, 10), 2025: (1, 29), 2026: (2, 17), 2027: (2, 6),
    2028: (1, 26), 2029: (2, 13), 2030: (2, 3),  2031: (1, 23),
    2032: (2, 11), 2033: (1, 31), 2034: (2, 19), 2035: (2, 8),
    2036: (1, 28),
}


# --- Holiday registry ------------------------------------------------------

class HolidayRule(NamedTuple):
    key: str
    name: str
    country: str
    dates: Callable[[int], list[date]]


HOLIDAYS: list[HolidayRule] = [
    # Switzerland
    HolidayRule("ch_neujahr",        "Neujahr",        "CH", _fixed(1, 1)),
    HolidayRule("ch_berchtoldstag",  "Berchtoldstag",  "CH", _fixed(1, 2)),
    HolidayRule("ch_karfreitag",     "Karfreitag",     "CH", _easter_rel(-2)),
    HolidayRule("ch_ostermontag",    "Ostermontag",    "CH", _easter_rel(1)),
    HolidayRule("ch_tag_der_arbeit", "Tag der Arbeit", "CH", _fixed(5, 1)),
    HolidayRule("ch_auffahrt",       "Auffahrt",       "CH", _easter_rel(39)),
    HolidayRule("ch_pfingstmontag",  "Pfingstmontag",  "CH", _easter_rel(49)),
    HolidayRule("ch_bundesfeier",    "Bundesfeier",    "CH", _fixed(8, 1)),
    HolidayRule("ch_weihnachten",    "Weihnachten",    "CH", _fixed(12, 25)),
    # Germany
    HolidayRule("de_neujahr",            "Neujahr",                   "DE", _fixed(1, 1)),
    HolidayRule("de_karfreitag",         "Karfreitag",                "DE", _easter_rel(-2)),
    HolidayRule("de_ostermontag",        "Ostermontag",               "DE", _easter_rel(1)),
    HolidayRule("de_tag_der_arbeit",     "Tag der Arbeit",            "DE", _fixed(5, 1)),
    HolidayRule("de_christi_himmelfahrt", "Christi Himmelfahrt",       "DE", _easter_rel(39)),
    HolidayRule("de_pfingstmontag",      "Pfingstmontag",             "DE", _easter_rel(49)),
    HolidayRule("de_tag_dt_einheit",     "Tag der Deutschen Einheit", "DE", _fixed(10, 3)),
    HolidayRule("de_weihnachten1",       "1. Weihnachtstag",          "DE", _fixed(12, 25)),
    HolidayRule("de_weihnachten2",       "2. Weihnachtstag",          "DE", _fixed(12, 26)),
    # China
    HolidayRule("cn_neujahr",         "New Year's Day",       "CN", _fixed(1, 1)),
    HolidayRule("cn_spring_festival", "Spring Festival",      "CN", _from_table(_SPRING_FESTIVAL, 3)),
    HolidayRule("cn_labour_day",      "Labour Day",           "CN", _fixed(5, 1)),
    HolidayRule("cn_national_day",    "National Day",         "CN", _fixed(10, 1, 3)),
]

_BY_KEY = {h.key: h for h in HOLIDAYS}

COUNTRIES: list[tuple[str, str]] = [
    ("CH", "Switzerland"),
    ("DE", "Germany"),
    ("CN", "China"),
]

_FALLBACK_COLOR = "#888888"


def holidays_by_country(country: str) -> list[tuple[str, str]]:
    """Return [(key, name), ...] for the given country code."""
    return [(h.key, h.name) for h in HOLIDAYS if h.country == country]


def holidays_for_year(
    year: int, enabled_keys: Iterable[str],
) -> dict[date, list[tuple[str, str]]]:
    """Return {date: [(name, country), ...]} for all enabled holidays in a year."""
    result: dict[date, list[tuple[str, str]]] = {}
    for key in sorted(set(enabled_keys)):
        rule = _BY_KEY.get(key)
        if rule is None:
            logger.warning(f"Unknown holiday key {key!r} ignored")
            continue
        for d in rule.dates(year):
            result.setdefault(d, []).append((rule.name, rule.country))
    return result


# --- Holidays as events -----------------------------------------------------

def holiday_events(
    start_ts: int,
    end_ts: int,
    enabled_keys: Iterable[str],
    colors: dict[str, str] | None = None,
    tz: tzinfo | None = None,
) -> list[Event]:
    """Return enabled holidays between start_ts and end_ts as all-day events.

    Each event starts and ends at midnight of its day in ``tz`` so it lands
    in exactly one grid cell. Sorted by day, then country and name.
    """
    keys = set(enabled_keys)
    colors = colors or {}
    first = date_from_epoch_seconds(start_ts, tz).date()
    last = date_from_epoch_seconds(end_ts, tz).date()

    found: list[tuple[date, str, str]] = []
    for year in range(first.year, last.year + 1):
        for d, entries in holidays_for_year(year, keys).items():
            if first <= d <= last:
                found.extend((d, country, name) for name, country in entries)

    events: list[Event] = []
    for d, country, name in sorted(found):
        midnight = int(datetime.combine(d, time.min, tzinfo=tz).timestamp())
        events.append(Event(
            id=None,
            title=f"{name} ({country})",
            start_ts=midnight,
            end_ts=midnight,
            color=color_from_hex(colors.get(country, _FALLBACK_COLOR)),
            flags=FLAG_ALL_DAY,
            event_type=HOLIDAY_EVENT,
        ))
    return events


class HolidaySource:
    """Event source for MonthlyCalendar backed by the built-in holidays."""

    def __init__(self, enabled_keys: Iterable[str],
                 colors: dict[str, str] | None = None,
                 tz: tzinfo | None = None) -> None:
        self.enabled_keys = set(enabled_keys)
        self.colors = dict(colors or {})
        self.tz = tz

    def __call__(self, start_ts: int, end_ts: int) -> list[Event]:
        return holiday_events(start_ts, end_ts, self.enabled_keys, self.colors, self.tz)
