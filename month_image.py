"""Render a finished month grid to a PIL image (the reference renderer)."""

from datetime import date
from pathlib import Path

from loguru import logger
from PIL import Image, ImageDraw, ImageFont

from calendar_logic import DAY_ABBR
from models import COLUMN_COUNT, ROW_COUNT, CalendarDay

# Colours
ACCENT = "#0078D4"
HEADER_BG = "#F3F3F3"
GRID_BG = "white"
WN_FG = "#888888"
MUTED_FG = "#BBBBBB"
WEEKEND_FG = "#CC0000"

CELL = 40
WN_W = 32
HEADER_H = 36
DOW_H = 24
MAX_DOTS = 3
DOT_R = 3


def _load_font(size: int) -> ImageFont.ImageFont:
    for name in ("DejaVuSans.ttf", "segoeui.ttf", "Arial.ttf"):
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    return ImageFont.load_default()


def _day_colors(day: CalendarDay) -> tuple[str, str]:
    """Return (background, foreground) for a cell."""
    if day.is_today:
        return ACCENT, "white"
    if not day.belongs_to_target_month:
        return GRID_BG, MUTED_FG
    if day.is_weekend:
        return GRID_BG, WEEKEND_FG
    return GRID_BG, "black"


def _centered_text(draw: ImageDraw.ImageDraw, box: tuple[int, int, int, int],
                   text: str, fill: str, font) -> None:
    # Centre the visible pixels, compensating for font metric offsets
    bbox = draw.textbbox((0, 0), text, font=font)
    x = box[0] + (box[2] - box[0] - (bbox[2] - bbox[0])) / 2 - bbox[0]
    y = box[1] + (box[3] - box[1] - (bbox[3] - bbox[1])) / 2 - bbox[1]
    draw.text((x, y), text, fill=fill, font=font)


def render_month_image(label: str, days: list[CalendarDay],
                       has_event_data: bool, target_date: date) -> Image.Image:
    """Draw header, weekday row, ISO week column and the 42 cells."""
    width = WN_W + COLUMN_COUNT * CELL
    height = HEADER_H + DOW_H + ROW_COUNT * CELL
    img = Image.new("RGB", (width, height), GRID_BG)
    draw = ImageDraw.Draw(img)
    font = _load_font(14)
    small = _load_font(11)

    draw.rectangle((0, 0, width, HEADER_H), fill=HEADER_BG)
    _centered_text(draw, (0, 0, width, HEADER_H), label, "#333333", _load_font(16))

    top = HEADER_H
    _centered_text(draw, (0, top, WN_W, top + DOW_H), "Wk", WN_FG, small)
    for col, abbr in enumerate(DAY_ABBR):
        x = WN_W + col * CELL
        fg = WEEKEND_FG if col >= 5 else "#333333"
        _centered_text(draw, (x, top, x + CELL, top + DOW_H), abbr, fg, small)

    top += DOW_H
    for day in days:
        x = WN_W + day.column * CELL
        y = top + day.row * CELL
        if day.column == 0:
            _centered_text(draw, (0, y, WN_W, y + CELL), str(day.iso_week_number), WN_FG, small)

        bg, fg = _day_colors(day)
        if bg != GRID_BG:
            draw.rectangle((x + 2, y + 2, x + CELL - 2, y + CELL - 2), fill=bg)
        _centered_text(draw, (x, y, x + CELL, y + CELL - 8), str(day.day_number), fg, font)

        if has_event_data and day.events:
            dots = day.events[:MAX_DOTS]
            cx = x + CELL / 2 - (len(dots) - 1) * (DOT_R * 3) / 2
            cy = y + CELL - 8
            for event in dots:
                draw.ellipse((cx - DOT_R, cy - DOT_R, cx + DOT_R, cy + DOT_R),
                             fill=event.color_hex)
                cx += DOT_R * 3
    return img


class MonthImageRenderer:
    """``render_month`` callback that keeps (and optionally saves) the last image."""

    def __init__(self, out_path: str | None = None) -> None:
        self.out_path = Path(out_path) if out_path else None
        self.image: Image.Image | None = None
        self.label: str | None = None
        self.has_event_data = False
        self.calls = 0

    def __call__(self, label: str, days: list[CalendarDay],
                 has_event_data: bool, target_date: date) -> None:
        self.image = render_month_image(label, days, has_event_data, target_date)
        self.label = label
        self.has_event_data = has_event_data
        self.calls += 1
        if self.out_path is not None:
            self.image.save(self.out_path)
            logger.info(f"Wrote {label} to {self.out_path}")
