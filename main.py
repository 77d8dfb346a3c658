"""Entry point: prints a month grid, optionally rendering it to PNG."""

import argparse
import sys
from datetime import date, datetime

from calendar_logic import DAY_ABBR
from holiday_events import COUNTRIES, HolidaySource, holidays_by_country
from errors import GridRangeError
from logger import setup_logger
from models import COLUMN_COUNT, CalendarDay
from month_image import MonthImageRenderer
from monthly_calendar import MonthlyCalendar
from settings import load_settings, resolve_timezone


def parse_month(value: str) -> date:
    """Parse "YYYY-MM" into the first day of that month."""
    try:
        return datetime.strptime(value, "%Y-%m").date()
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM, got {value!r}") from None


def format_grid(label: str, days: list[CalendarDay]) -> str:
    """Plain-text grid: today marked "*", days with events marked "+"."""
    lines = [label.center(4 + 4 * COLUMN_COUNT).rstrip(),
             "  Wk" + "".join(f"{abbr:>4}" for abbr in DAY_ABBR)]
    for start in range(0, len(days), COLUMN_COUNT):
        week = days[start:start + COLUMN_COUNT]
        cells = []
        for day in week:
            mark = "*" if day.is_today else "+" if day.has_events else " "
            text = f"{day.day_number:>2}" if day.belongs_to_target_month else " ."
            cells.append(f" {text}{mark}")
        lines.append(f"{week[0].iso_week_number:>4}" + "".join(cells))
    return "\n".join(lines)


def _list_holidays() -> None:
    for code, country in COUNTRIES:
        print(f"{country} ({code})")
        for key, name in holidays_by_country(code):
            print(f"  {key:<24} {name}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="month-grid", description=__doc__)
    parser.add_argument("month", nargs="?", type=parse_month,
                        help="month to show as YYYY-MM (default: current month)")
    parser.add_argument("--holidays", nargs="*", metavar="KEY",
                        help="holiday keys to overlay (default: from settings)")
    parser.add_argument("--list-holidays", action="store_true",
                        help="list the built-in holiday keys and exit")
    parser.add_argument("--out", help="also write the grid as a PNG image")
    parser.add_argument("--settings", help="settings file (default: ~/.month-grid-settings.json)")
    parser.add_argument("--log-level", help="override the configured log level")
    args = parser.parse_args(argv)

    if args.list_holidays:
        _list_holidays()
        return 0

    settings = load_settings(args.settings)
    setup_logger(args.log_level or settings["log_level"], settings["log_file"])
    try:
        tz = resolve_timezone(settings["timezone"])
    except ValueError as exc:
        parser.error(str(exc))

    keys = settings["holidays"] if args.holidays is None else args.holidays
    source = HolidaySource(keys, settings["holiday_colors"], tz) if keys else None
    image_renderer = MonthImageRenderer(args.out) if args.out else None
    rendered: dict[str, str] = {}

    def render_month(label: str, days: list[CalendarDay],
                     has_event_data: bool, target_date: date) -> None:
        rendered["text"] = format_grid(label, days)
        if image_renderer is not None:
            image_renderer(label, days, has_event_data, target_date)

    cal = MonthlyCalendar.from_settings(settings, render_month, source)
    try:
        cal.get_month(args.month or datetime.now(tz).date())
    except GridRangeError as exc:
        parser.error(str(exc))
    print(rendered["text"])
    return 0


if __name__ == "__main__":
    sys.exit(main())
