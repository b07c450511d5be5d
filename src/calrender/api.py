from __future__ import annotations

from datetime import date
from typing import Any, Dict, Mapping, Optional, Union

from .config import parse_config
from .core.errors import ConfigurationError
from .core.registry import GlyphLookup, HolidayProvider
from .core.types import CalendarConfiguration, CalendarLayout, GlyphVariant, VectorDocument
from .glyphs.table import GlyphAsset
from .layout import engine as _engine
from .render.pdf import render_pdf
from .render.svg import render_layout
from .settings import EngineSettings

ConfigInput = Union[CalendarConfiguration, Mapping[str, Any]]
HolidayMapInput = Mapping[Union[date, str], str]

_glyphs: Optional[GlyphLookup] = None
_provider: Optional[HolidayProvider] = None


def set_glyph_table(table: Optional[GlyphLookup]) -> None:
    global _glyphs
    _glyphs = table


def set_holiday_provider(provider: Optional[HolidayProvider]) -> None:
    global _provider
    _provider = provider


def _glyph_table() -> GlyphLookup:
    if _glyphs is None:
        raise RuntimeError("Glyph table not initialized")
    return _glyphs


def _config(config: ConfigInput) -> CalendarConfiguration:
    return parse_config(config)


def _holiday_map(holiday_map: Optional[HolidayMapInput]) -> Optional[Dict[date, str]]:
    if holiday_map is None:
        return None
    out: Dict[date, str] = {}
    for k, name in holiday_map.items():
        if isinstance(k, date):
            out[k] = name
            continue
        try:
            out[date.fromisoformat(str(k))] = name
        except ValueError:
            raise ConfigurationError(f"Invalid holiday date {k!r}", field="holiday_map") from None
    return out


# ============================================================
# Pipeline
# ============================================================

def build_layout(
    config: ConfigInput,
    holiday_map: Optional[HolidayMapInput] = None,
    *,
    provider: Optional[HolidayProvider] = None,
) -> CalendarLayout:
    return _engine.build_layout(
        _config(config),
        _holiday_map(holiday_map),
        provider=provider if provider is not None else _provider,
    )


def render_vector(
    config: ConfigInput,
    holiday_map: Optional[HolidayMapInput] = None,
    *,
    provider: Optional[HolidayProvider] = None,
    glyphs: Optional[GlyphLookup] = None,
) -> VectorDocument:
    """Configuration (+ optional date -> holiday name map) to SVG markup."""
    layout = build_layout(config, holiday_map, provider=provider)
    return render_layout(layout, glyphs if glyphs is not None else _glyph_table())


def render_print_document(vector: VectorDocument, *, settings: Optional[EngineSettings] = None) -> bytes:
    """SVG markup to PDF bytes. Raises RenderingError on any conversion failure."""
    return render_pdf(vector, settings=settings)


def glyph_lookup(symbol: str, variant: GlyphVariant = GlyphVariant.COLOR) -> Optional[GlyphAsset]:
    return _glyph_table().lookup(symbol, variant)
