from __future__ import annotations

from typing import Optional

from calrender.glyphs.table import GlyphTable, builtin_glyph_table, glyph_table_from_directory
from calrender.holidays.sets import BuiltinHolidayProvider
from calrender.settings import EngineSettings, get_settings


def build_glyph_table(settings: Optional[EngineSettings] = None) -> GlyphTable:
    """Built-in glyphs, or the configured glyph directory layered over them."""
    settings = settings or get_settings()
    if settings.glyph_dir:
        return glyph_table_from_directory(settings.glyph_dir)
    return builtin_glyph_table()


def build_holiday_provider() -> BuiltinHolidayProvider:
    return BuiltinHolidayProvider()
