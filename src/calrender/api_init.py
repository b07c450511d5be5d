"""Glyph table and holiday provider bootstrap (import side-effect)."""
from .api import set_glyph_table, set_holiday_provider
from .bootstrap import build_glyph_table, build_holiday_provider

set_glyph_table(build_glyph_table())
set_holiday_provider(build_holiday_provider())
