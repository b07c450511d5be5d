# tests/test_layout.py

import pytest
from dataclasses import replace
from datetime import date

from calrender.calendars import hebrew
from calrender.core.types import (
    CalendarConfiguration,
    CalendarKind,
    ColorSource,
    CustomDate,
    EventDisplayMode,
    LayoutStyle,
    Weekday,
)
from calrender.holidays.sets import BuiltinHolidayProvider
from calrender.layout.engine import LAYOUTS, build_layout, layout_key
from calrender.layout.themes import THEMES, get_theme, pdf_safe_color

@pytest.fixture(scope="module")
def provider():
    return BuiltinHolidayProvider()

def _cell(layout, d):
    return next(c for c in layout.cells if c.date == d)

def test_registered_layouts():
    assert set(LAYOUTS.list()) == {"grid", "weekday-grid", "traditional", "hebrew"}
    assert layout_key(CalendarConfiguration(year=2025, kind=CalendarKind.HEBREW)) == "hebrew"

@pytest.mark.parametrize("style", list(LayoutStyle))
def test_every_style_has_twelve_months_and_all_days(style):
    layout = build_layout(CalendarConfiguration(year=2024, layout=style))
    assert len(layout.months) == 12
    assert len(layout.cells) == 366
    for block in layout.months:
        assert [c.date.month for c in block.cells] == [block.index] * len(block.cells)
        for c in block.cells:
            assert layout.bbox.x <= c.box.x and c.box.right <= layout.bbox.right
            assert layout.bbox.y <= c.box.y and c.box.bottom <= layout.bbox.bottom

def test_grid_geometry():
    layout = build_layout(CalendarConfiguration(year=2025))
    jan = layout.months[0]
    assert len(jan.cells) == 31
    assert jan.cells[0].box.x == 50.0
    assert jan.cells[0].box.width == 50.0 and jan.cells[0].box.height == 75.0
    feb = layout.months[1]
    assert len(feb.empty_slots) == 3

    compact = build_layout(CalendarConfiguration(year=2025, compact_mode=True))
    assert compact.months[0].cells[0].box.width == 40.0
    assert compact.bbox.width < layout.bbox.width

def test_weekday_grid_aligns_columns_to_first_day():
    # 2025-01-01 is a Wednesday
    sunday = build_layout(CalendarConfiguration(year=2025, layout=LayoutStyle.WEEKDAY_GRID))
    monday = build_layout(CalendarConfiguration(year=2025, layout=LayoutStyle.WEEKDAY_GRID,
                                                first_day_of_week=Weekday.MONDAY))
    assert sunday.months[0].cells[0].box.x == 50.0 + 3 * 50.0
    assert monday.months[0].cells[0].box.x == 50.0 + 2 * 50.0
    assert sunday.column_headers[0].text == "Su"
    assert monday.column_headers[0].text == "Mo"
    # same weekday, same column, in every month
    xs = {c.box.x % 350.0 for c in sunday.cells if c.date.weekday() == Weekday.SUNDAY}
    assert len(xs) == 1

def test_traditional_headers_follow_first_day():
    layout = build_layout(CalendarConfiguration(year=2025, layout=LayoutStyle.TRADITIONAL,
                                                first_day_of_week=Weekday.MONDAY, show_week_numbers=True))
    jan = layout.months[0]
    assert [h.text for h in jan.headers] == ["M", "T", "W", "T", "F", "S", "S"]
    assert jan.week_numbers
    # ISO week 1 of 2025 starts on 2024-12-30
    assert jan.week_numbers[0].text == "1"

def test_weekend_follows_calendar_day_not_column():
    for first in (Weekday.SUNDAY, Weekday.MONDAY, Weekday.SATURDAY):
        layout = build_layout(CalendarConfiguration(year=2025, first_day_of_week=first))
        weekend = {c.date.weekday() for c in layout.cells if c.is_weekend}
        assert weekend == {Weekday.SATURDAY, Weekday.SUNDAY}

def test_weekend_follows_locale_region():
    layout = build_layout(CalendarConfiguration(year=2025, locale="he-IL"))
    weekend = {c.date.weekday() for c in layout.cells if c.is_weekend}
    assert weekend == {Weekday.FRIDAY, Weekday.SATURDAY}

def test_weekend_fill_and_highlight_switch():
    on = build_layout(CalendarConfiguration(year=2025))
    sat = _cell(on, date(2025, 1, 4))
    assert sat.fill == "#f0f0f0"
    assert sat.color_source == ColorSource.WEEKEND
    off = build_layout(CalendarConfiguration(year=2025, highlight_weekends=False))
    assert _cell(off, date(2025, 1, 4)).fill is None
    assert _cell(off, date(2025, 1, 4)).color_source == ColorSource.DEFAULT

def test_color_precedence(provider):
    halloween = date(2025, 10, 31)
    xmas = date(2025, 12, 25)
    cfg = CalendarConfiguration(
        year=2025,
        holiday_sets=("US",),
        custom_dates=((halloween, CustomDate(text="Party", color="#0000ff")),),
    )
    layout = build_layout(cfg, provider=provider)
    party = _cell(layout, halloween)
    assert party.color_source == ColorSource.CUSTOM
    assert party.text_color == "#0000ff"
    assert party.is_custom and not party.is_holiday
    christmas = _cell(layout, xmas)
    assert christmas.color_source == ColorSource.HOLIDAY
    assert christmas.text_color == cfg.colors.holiday
    assert christmas.is_holiday

def test_glyph_size_by_display_mode(provider):
    d = date(2025, 12, 25)
    sizes = {}
    for mode in EventDisplayMode:
        cfg = CalendarConfiguration(year=2025, holiday_sets=("US",), event_display_mode=mode)
        cell = _cell(build_layout(cfg, provider=provider), d)
        sizes[mode] = cell.glyph.size if cell.glyph else None
        assert (cell.caption is not None) == mode.shows_caption
    assert sizes[EventDisplayMode.LARGE] == pytest.approx(25.0)
    assert sizes[EventDisplayMode.LARGE_TEXT] == pytest.approx(25.0)
    assert sizes[EventDisplayMode.SMALL] == pytest.approx(12.5)
    assert sizes[EventDisplayMode.TEXT] is None
    assert sizes[EventDisplayMode.NONE] is None

def test_moon_modes():
    illum = build_layout(CalendarConfiguration(year=2025, show_moon_illumination=True))
    assert all(c.moon is not None for c in illum.cells)
    assert illum.has_overlays

    full = build_layout(CalendarConfiguration(year=2025, show_full_moon_only=True))
    moons = [c for c in full.cells if c.moon is not None]
    assert moons
    assert all(c.moon.sample.illumination >= 0.95 for c in moons)

    phases = build_layout(CalendarConfiguration(year=2025, show_moon_phases=True))
    assert 45 <= sum(1 for c in phases.cells if c.moon is not None) <= 53

    plain = build_layout(CalendarConfiguration(year=2025))
    assert not plain.has_overlays

def test_moon_rotation_only_with_location():
    from calrender.core.types import Location
    cfg = CalendarConfiguration(year=2025, show_moon_illumination=True)
    assert all(c.moon.rotation_deg == 0.0 for c in build_layout(cfg).cells)
    located = build_layout(replace(cfg, location=Location(40.7, -74.0)))
    assert any(c.moon.rotation_deg != 0.0 for c in located.cells)

def test_week_numbers_on_first_day_cells():
    layout = build_layout(CalendarConfiguration(year=2025, show_week_numbers=True, first_day_of_week=Weekday.MONDAY))
    labelled = [c for c in layout.cells if c.week_number is not None]
    assert all(c.date.weekday() == Weekday.MONDAY for c in labelled)
    assert _cell(layout, date(2025, 1, 6)).week_number.text == "W2"

def test_hebrew_dates_on_standard_calendar():
    layout = build_layout(CalendarConfiguration(year=2025, show_hebrew_dates=True))
    assert _cell(layout, date(2025, 2, 14)).hebrew_label.text == "14 Adar"

@pytest.mark.parametrize("year", [2024, 2025, 2026])
def test_hebrew_layout_has_one_row_per_month(year):
    layout = build_layout(CalendarConfiguration(year=year, kind=CalendarKind.HEBREW))
    hy = hebrew.hebrew_year_for(year)
    assert len(layout.months) == hebrew.months_in_year(hy)
    assert [m.name for m in layout.months] == hebrew.year_month_names(hy)
    for m in layout.months:
        assert len(m.cells) == hebrew.days_in_month(m.index, hy)
    assert layout.title.text == str(hy)

def test_hebrew_layout_shabbat_and_holidays():
    layout = build_layout(CalendarConfiguration(year=2025, kind=CalendarKind.HEBREW))
    weekend = {c.date.weekday() for c in layout.cells if c.is_weekend}
    assert weekend == {Weekday.SATURDAY}
    adar = layout.months[5]
    purim = adar.cells[13]
    assert purim.annotation is not None and purim.annotation.text == "Purim"
    assert purim.glyph is not None and purim.glyph.symbol == "🎭"

def test_unknown_theme_falls_back_to_default():
    assert get_theme("nope") is THEMES["default"]
    assert get_theme(None) is THEMES["default"]

def test_rainbow_theme_colors_every_day():
    layout = build_layout(CalendarConfiguration(year=2025, theme="rainbowDays1"))
    assert all(c.fill and c.fill.startswith("hsl(") for c in layout.cells)
    assert pdf_safe_color(layout.cells[0].fill).startswith("#")

def test_pdf_safe_color():
    assert pdf_safe_color("rgba(161,161,161,0.30)") == "rgb(161,161,161)"
    assert pdf_safe_color("rgba(0,0,0,0)") == "none"
    assert pdf_safe_color("hsl(0, 100%, 50%)") == "#ff0000"
    assert pdf_safe_color("#abcdef") == "#abcdef"

def test_layout_is_deterministic(provider):
    cfg = CalendarConfiguration(year=2025, holiday_sets=("US", "JEWISH"), show_moon_phases=True)
    assert build_layout(cfg, provider=provider) == build_layout(cfg, provider=provider)

@pytest.mark.parametrize("sets, text, set_id", [
    (("US", "JEWISH"), "Labor Day", "US"),
    (("JEWISH", "US"), "Rosh Hashanah (Day 2)", "HEBREW_RELIGIOUS"),
])
def test_hebrew_layout_first_listed_set_wins(provider, sets, text, set_id):
    cfg = CalendarConfiguration(year=2025, kind=CalendarKind.HEBREW, holiday_sets=sets)
    cell = _cell(build_layout(cfg, provider=provider), date(2024, 9, 2))
    assert cell.annotation.text == text
    assert cell.annotation.set_id == set_id

def test_hebrew_layout_custom_date_beats_native_holiday(provider):
    cfg = CalendarConfiguration(year=2025, kind=CalendarKind.HEBREW, holiday_sets=("JEWISH",),
                                custom_dates=((date(2024, 9, 2), CustomDate("Picnic")),))
    assert _cell(build_layout(cfg, provider=provider), date(2024, 9, 2)).annotation.text == "Picnic"

def test_hebrew_layout_clamped_days_share_a_date():
    cfg = CalendarConfiguration(year=2025, kind=CalendarKind.HEBREW,
                                custom_dates=((date(2025, 2, 28), CustomDate("Party")),))
    adar = build_layout(cfg).months[5]
    assert adar.name == "Adar"
    assert adar.cells[27].date == adar.cells[28].date == date(2025, 2, 28)
    assert adar.cells[27].annotation.text == adar.cells[28].annotation.text == "Party"
