"""calrender public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

# Install the glyph table and holiday provider on import
from . import api_init as _api_init  # noqa: F401

from .api import (
    build_layout,
    render_vector,
    render_print_document,
    glyph_lookup,
    set_glyph_table,
    set_holiday_provider,
)
from .config import parse_config, validate_configuration
from .core.errors import CalrenderError, ConfigurationError, RenderingError
from .core.types import (
    CalendarConfiguration,
    CalendarKind,
    CalendarLayout,
    EventDisplayMode,
    GlyphVariant,
    LayoutStyle,
    VectorDocument,
)
from .lifecycle import GenerationOutcome, GenerationState, JobFailure, generate

__all__ = [
    "build_layout",
    "render_vector",
    "render_print_document",
    "glyph_lookup",
    "set_glyph_table",
    "set_holiday_provider",
    "parse_config",
    "validate_configuration",
    "CalrenderError",
    "ConfigurationError",
    "RenderingError",
    "CalendarConfiguration",
    "CalendarKind",
    "CalendarLayout",
    "EventDisplayMode",
    "GlyphVariant",
    "LayoutStyle",
    "VectorDocument",
    "GenerationOutcome",
    "GenerationState",
    "JobFailure",
    "generate",
]
