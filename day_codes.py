"""Day codes: the YYYYMMDD keys that join grid cells to events."""

from __future__ import annotations

import re
import time
from datetime import date, datetime, timezone, tzinfo

from errors import FormatError

_DAY_CODE_RE = re.compile(r"[0-9]{8}")


def day_code_of(d: date) -> str:
    """Format d as an 8-digit YYYYMMDD code."""
    # strftime("%Y") does not zero-pad years below 1000 on every platform
    return f"{d.year:04d}{d.month:02d}{d.day:02d}"


def date_of(day_code: str) -> date:
    """Parse a YYYYMMDD code back to a date.

    Raises FormatError for anything but 8 ASCII digits forming a real date.
    """
    if not isinstance(day_code, str) or not _DAY_CODE_RE.fullmatch(day_code):
        raise FormatError(str(day_code), "expected exactly 8 digits")
    try:
        return date(int(day_code[:4]), int(day_code[4:6]), int(day_code[6:]))
    except ValueError as exc:
        raise FormatError(day_code, str(exc)) from exc


def year_code_of(d: date) -> str:
    return f"{d.year:04d}"


def date_from_epoch_seconds(ts: int | float, tz: tzinfo | None = None) -> datetime:
    """Convert epoch seconds to an aware datetime in the working timezone.

    With tz=None the machine's local timezone is used.
    """
    utc = datetime.fromtimestamp(ts, tz=timezone.utc)
    return utc.astimezone(tz)


def day_code_from_ts(ts: int | float, tz: tzinfo | None = None) -> str:
    return day_code_of(date_from_epoch_seconds(ts, tz))


def today_code(tz: tzinfo | None = None) -> str:
    """Day code of the current date (reads the clock)."""
    return day_code_of(datetime.now(tz))


def now_seconds() -> int:
    """Current time in whole epoch seconds (reads the clock)."""
    return int(time.time())
