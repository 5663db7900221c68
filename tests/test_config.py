"""
Tests for configuration loading and policy constants.
"""

from datetime import timedelta
from pathlib import Path

import pytest

from calview import debug, timezone_utils
from calview.config import (
    Config, EVENT_COLORS, MONTH_GRID_CELLS, WeekStart,
    is_palette_color,
)


def write_config(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "calview.toml"
    path.write_text(text, encoding="utf-8")
    return path


def test_policy_constants():
    assert MONTH_GRID_CELLS == 42
    assert len(EVENT_COLORS) == 6


def test_defaults():
    config = Config()
    assert config.grid.week_start == WeekStart.MONDAY
    assert config.preview.max_events_per_day == 3
    assert config.form.default_duration == timedelta(hours=1)
    assert config.layout.min_duration == timedelta(minutes=30)
    assert config.localization.get_month_name(10) == "October"


def test_load_full_file(tmp_path):
    path = write_config(tmp_path, """
[General]
timezone = "America/New_York"
debug = true

[Grid]
week_start = "Sunday"

[Preview]
max_events_per_day = 5

[Form]
default_duration_minutes = 45
default_start_hour = 8
default_color = "#EC4899"

[Layout]
min_event_minutes = 15

[Localization]
day_names = "Ma Di Wo Do Vr Za Zo"

[Messages]
title_required = "Titel ontbreekt"
""")
    config = Config.load(path)

    assert config.timezone == "America/New_York"
    assert config.debug is True
    assert config.grid.week_start == WeekStart.SUNDAY
    assert config.preview.max_events_per_day == 5
    assert config.form.default_duration == timedelta(minutes=45)
    assert config.form.default_start_hour == 8
    assert config.form.default_color == "#ec4899"
    assert config.layout.min_duration == timedelta(minutes=15)
    assert config.localization.weekday_headers(WeekStart.SUNDAY)[:2] == ["Zo", "Ma"]
    assert config.localization.get_month_name(1) == "January"
    assert config.messages.title_required == "Titel ontbreekt"
    assert config.messages.invalid_color == "Please choose one of the available colors"


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        Config.load(tmp_path / "nope.toml")


def test_default_path_follows_xdg(monkeypatch, tmp_path):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert Config.get_default_config_path() == tmp_path / "calview" / "calview.toml"


@pytest.mark.parametrize("text", [
    '[Grid]\nweek_start = "wednesday"\n',
    '[Form]\ndefault_color = "#123456"\n',
    '[Form]\ndefault_start_hour = 24\n',
    '[Layout]\nmin_event_minutes = 0\n',
    '[Preview]\nmax_events_per_day = -1\n',
])
def test_invalid_values(tmp_path, text):
    with pytest.raises(ValueError):
        Config.load(write_config(tmp_path, text))


def test_apply(tmp_path):
    config = Config.load(write_config(tmp_path, '[General]\ntimezone = "UTC"\ndebug = true\n'))
    config.apply()
    assert timezone_utils.get_timezone_name() == "UTC"
    assert debug.is_enabled()


def test_debug_output(capsys):
    debug.debug_print("TEST", "hidden")
    debug.set_debug(True)
    debug.debug_print("TEST", "shown")

    err = capsys.readouterr().err
    assert "hidden" not in err
    assert "TEST: shown" in err


def test_palette_helpers():
    assert is_palette_color("#3B82F6")
    assert not is_palette_color("#000000")
    assert not is_palette_color(None)
