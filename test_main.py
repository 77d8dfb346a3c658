import argparse
from datetime import date

import pytest

from main import format_grid, main, parse_month
from monthly_calendar import build_skeleton


def test_parse_month():
    assert parse_month("2024-03") == date(2024, 3, 1)
    with pytest.raises(argparse.ArgumentTypeError):
        parse_month("March")


def test_format_grid_marks_today_and_out_of_month_days():
    days = build_skeleton(date(2024, 3, 1), date(2024, 3, 15))
    lines = format_grid("March", days).splitlines()
    assert len(lines) == 8
    assert lines[0].strip() == "March"
    assert lines[1].split() == ["Wk", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
    assert lines[2].split() == ["9", ".", ".", ".", ".", "1", "2", "3"]
    assert "15*" in lines[4]


def test_main_prints_grid_with_holidays(tmp_path, capsys):
    code = main(["2024-03", "--settings", str(tmp_path / "s.json"),
                 "--holidays", "de_karfreitag", "--log-level", "WARNING"])
    assert code == 0
    out = capsys.readouterr().out
    assert "March" in out
    assert "29+" in out


def test_main_writes_png(tmp_path, capsys):
    png = tmp_path / "grid.png"
    main(["2024-02", "--settings", str(tmp_path / "s.json"), "--out", str(png),
          "--log-level", "WARNING"])
    assert png.exists()


def test_main_lists_holidays(capsys):
    assert main(["--list-holidays"]) == 0
    out = capsys.readouterr().out
    assert "Switzerland (CH)" in out
    assert "ch_bundesfeier" in out


def test_main_rejects_bad_month(capsys):
    with pytest.raises(SystemExit):
        main(["2024-13"])


def test_main_rejects_month_past_date_range(tmp_path, capsys):
    with pytest.raises(SystemExit):
        main(["9999-12", "--settings", str(tmp_path / "s.json"), "--log-level", "WARNING"])
    assert "outside years 1..9999" in capsys.readouterr().err
