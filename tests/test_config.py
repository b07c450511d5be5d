# tests/test_config.py

import pytest
from datetime import date, time

from calrender.config import parse_config, validate_configuration
from calrender.core.errors import ConfigurationError
from calrender.core.types import (
    CalendarConfiguration,
    CalendarKind,
    CustomDate,
    EventDisplayMode,
    GlyphVariant,
    LayoutStyle,
    Location,
    Weekday,
)


def test_defaults():
    cfg = parse_config({"year": 2025})
    assert cfg == CalendarConfiguration(year=2025)
    assert cfg.first_day_of_week == Weekday.SUNDAY
    assert cfg.event_display_mode == EventDisplayMode.LARGE
    assert cfg.observation_time == time(20, 0)
    assert cfg.location is None


def test_editor_keys():
    cfg = parse_config({
        "year": "2026",
        "calendarType": "lunar",
        "layoutStyle": "weekday-grid",
        "showMoonPhases": True,
        "compactMode": "true",
        "firstDayOfWeek": "monday",
        "eventDisplayMode": "compact",
        "emojiFont": "mono-blue",
        "weekendBgColor": "#eeeeee",
        "holidaySets": "US, JEWISH",
        "latitude": 40.7,
        "longitude": -74.0,
        "observationTime": "21:30",
        "timeZone": "Asia/Jerusalem",
        "customDates": {"2026-07-04": {"title": "BBQ", "emoji": "🔥", "color": "#123456"}},
        "moonSize": 30,
    })
    assert cfg.year == 2026
    assert cfg.kind == CalendarKind.HEBREW
    assert cfg.layout == LayoutStyle.WEEKDAY_GRID
    assert cfg.show_moon_phases and cfg.compact_mode
    assert cfg.first_day_of_week == Weekday.MONDAY
    assert cfg.event_display_mode == EventDisplayMode.SMALL
    assert cfg.glyph_variant == GlyphVariant.MONO
    assert cfg.colors.weekend_background == "#eeeeee"
    assert cfg.holiday_sets == ("US", "JEWISH")
    assert cfg.location == Location(40.7, -74.0)
    assert cfg.observation_time == time(21, 30)
    assert cfg.timezone == "Asia/Jerusalem"
    assert cfg.custom_dates == ((date(2026, 7, 4), CustomDate("BBQ", "🔥", "#123456")),)
    assert cfg.moon.size == 30


def test_snake_case_keys():
    cfg = parse_config({
        "year": 2025,
        "kind": "hebrew",
        "show_week_numbers": True,
        "event_display_mode": "text",
        "glyph_variant": "noto-color",
        "colors": {"holiday": "#abc"},
        "custom_dates": [("2025-01-02", "Text only")],
    })
    assert cfg.kind == CalendarKind.HEBREW
    assert cfg.show_week_numbers
    assert cfg.event_display_mode == EventDisplayMode.TEXT
    assert cfg.glyph_variant == GlyphVariant.COLOR
    assert cfg.colors.holiday == "#abc"
    assert cfg.custom_dates[0][1] == CustomDate(text="Text only")


@pytest.mark.parametrize("mode, flags", [
    ("none", (False, False, False)),
    ("illumination", (True, False, False)),
    ("phases", (False, True, False)),
    ("full-only", (False, False, True)),
])
def test_moon_display_mode(mode, flags):
    cfg = parse_config({"year": 2025, "moonDisplayMode": mode})
    assert (cfg.show_moon_illumination, cfg.show_moon_phases, cfg.show_full_moon_only) == flags


def test_zero_location_means_none():
    assert parse_config({"year": 2025, "latitude": 0, "longitude": 0}).location is None


def test_configuration_passes_through():
    cfg = CalendarConfiguration(year=2030)
    assert parse_config(cfg) is cfg


@pytest.mark.parametrize("raw, field", [
    ({}, "year"),
    ({"year": "twenty"}, "year"),
    ({"year": 999}, "year"),
    ({"year": 10000}, "year"),
    ({"year": 2025, "layoutStyle": "spiral"}, "layout"),
    ({"year": 2025, "calendarType": "mayan"}, "kind"),
    ({"year": 2025, "eventDisplayMode": "huge"}, "event_display_mode"),
    ({"year": 2025, "moonDisplayMode": "eclipse"}, "moon_display_mode"),
    ({"year": 2025, "timeZone": "Mars/Olympus"}, "timezone"),
    ({"year": 2025, "holidayColor": "red"}, "colors.holiday"),
    ({"year": 2025, "colors": {"sparkle": "#fff"}}, "colors"),
    ({"year": 2025, "latitude": 95, "longitude": 10}, "location"),
    ({"year": 2025, "firstDayOfWeek": "someday"}, "first_day_of_week"),
    ({"year": 2025, "observationTime": "late"}, "observation_time"),
    ({"year": 2025, "customDates": {"2025-02-30": "nope"}}, "custom_dates"),
    ({"year": 2025, "customDates": {"2025-02-03": {"text": "x", "color": "blue"}}}, "custom_dates"),
    ({"year": 2025, "customDates": {"2025-03-01": {"text": "x", "color": 123}}}, "custom_dates"),
    ({"year": 2025, "customDates": {"2025-03-01": {"text": "x", "emoji": 7}}}, "custom_dates"),
    ({"year": 2025, "customDates": {"2025-03-01": {"text": ["x"]}}}, "custom_dates"),
    ({"year": 2025, "showGrid": "maybe"}, "show_grid"),
    ({"year": 2025, "moonSize": 0}, "moon"),
])
def test_rejections_name_the_field(raw, field):
    with pytest.raises(ConfigurationError) as ei:
        parse_config(raw)
    assert ei.value.field == field


def test_configuration_error_is_a_value_error():
    with pytest.raises(ValueError):
        parse_config({"year": 12})


def test_validate_rejects_bad_dataclass():
    with pytest.raises(ConfigurationError) as ei:
        validate_configuration(CalendarConfiguration(year=2025, location=Location(0.0, 200.0)))
    assert ei.value.field == "location"


def test_validate_rejects_non_string_custom_color():
    cfg = CalendarConfiguration(year=2025, custom_dates=((date(2025, 3, 1), CustomDate("x", color=123)),))
    with pytest.raises(ConfigurationError) as ei:
        validate_configuration(cfg)
    assert ei.value.field == "custom_dates"
