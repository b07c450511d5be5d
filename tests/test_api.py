# tests/test_api.py

import pytest
from datetime import date

import calrender
from calrender import api
from calrender.bootstrap import build_glyph_table
from calrender.core.errors import ConfigurationError
from calrender.core.types import GlyphVariant, HolidayDefinition
from calrender.settings import EngineSettings


class FixedProvider:
    def __init__(self, *defs):
        self.defs = defs

    def holidays(self, year, set_id):
        return [h for h in self.defs if h.set_id == set_id and h.date.year == year]


def test_public_surface():
    for name in calrender.__all__:
        assert hasattr(calrender, name)


def test_render_vector_from_editor_json():
    doc = calrender.render_vector({"year": 2025, "layoutStyle": "traditional", "showMoonPhases": True})
    assert doc.year == 2025 and doc.month_count == 12
    assert str(doc) == doc.markup
    assert doc.encode().startswith(b"<?xml")


def test_holiday_map_accepts_iso_keys():
    layout = calrender.build_layout({"year": 2025}, {"2025-03-14": "Pi Day", date(2025, 6, 28): "Tau Day"})
    names = {c.date: c.annotation.text for c in layout.cells if c.annotation is not None}
    assert names == {date(2025, 3, 14): "Pi Day", date(2025, 6, 28): "Tau Day"}


def test_holiday_map_rejects_bad_keys():
    with pytest.raises(ConfigurationError) as ei:
        calrender.build_layout({"year": 2025}, {"March 14": "Pi Day"})
    assert ei.value.field == "holiday_map"


def test_injected_provider():
    provider = FixedProvider(HolidayDefinition(date(2025, 8, 8), "Cat Day", "PETS", "🐈"))
    layout = calrender.build_layout({"year": 2025, "holidaySets": ["PETS"]}, provider=provider)
    cell = next(c for c in layout.cells if c.date == date(2025, 8, 8))
    assert cell.annotation.text == "Cat Day"
    assert cell.annotation.set_id == "PETS"


def test_default_provider_serves_builtin_sets():
    layout = calrender.build_layout({"year": 2025, "holidaySets": ["US"]})
    assert any(c.annotation and c.annotation.text == "Thanksgiving" for c in layout.cells)


def test_glyph_lookup():
    assert api.glyph_lookup("🎃") is not None
    assert api.glyph_lookup("🎃", GlyphVariant.MONO).variant == GlyphVariant.MONO
    assert api.glyph_lookup("🦄") is None


def test_uninitialized_glyph_table():
    saved = api._glyphs
    api.set_glyph_table(None)
    try:
        with pytest.raises(RuntimeError):
            api.glyph_lookup("🎃")
    finally:
        api.set_glyph_table(saved)


def test_glyph_dir_setting(tmp_path):
    (tmp_path / "emoji_u1f984.svg").write_text(
        '<svg viewBox="0 0 36 36"><circle r="4" fill="#ff00ff"/></svg>', encoding="utf-8")
    table = build_glyph_table(EngineSettings(glyph_dir=str(tmp_path)))
    assert table.lookup("🦄") is not None
    assert build_glyph_table(EngineSettings()).lookup("🦄") is None


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("CALRENDER_PAGE_WIDTH_IN", "17")
    monkeypatch.setenv("CALRENDER_LOG_FORMAT", "json")
    s = EngineSettings()
    assert s.page_width_in == 17.0
    assert s.log_format == "json"
