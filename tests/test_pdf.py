# tests/test_pdf.py

import pytest
from datetime import date

from calrender.core.errors import RenderingError
from calrender.core.types import CalendarConfiguration, CustomDate, GlyphVariant, VectorDocument
from calrender.glyphs.table import builtin_glyph_table
from calrender.layout.engine import build_layout
from calrender.render.pdf import PDF_MAGIC, render_pdf, validate_markup
from calrender.render.svg import render_layout
from calrender.settings import EngineSettings

GLYPH_DAYS = (
    (date(2025, 10, 31), "Pumpkins", "🎃"),
    (date(2025, 5, 5), "Dance", "💃"),
    (date(2025, 3, 30), "Prayer", "🙏"),
    (date(2025, 4, 10), "Palms", "🤲"),
)


@pytest.fixture(scope="module")
def settings():
    return EngineSettings(page_width_in=17.0, page_height_in=11.0)


def _vector(**kw):
    cfg = CalendarConfiguration(
        year=2025,
        custom_dates=tuple((d, CustomDate(text=t, emoji=e)) for d, t, e in GLYPH_DAYS),
        **kw,
    )
    return render_layout(build_layout(cfg), builtin_glyph_table())


@pytest.mark.parametrize("variant", list(GlyphVariant))
def test_glyph_calendar_converts(variant, settings):
    pdf = render_pdf(_vector(glyph_variant=variant, show_moon_phases=True), settings=settings)
    assert pdf.startswith(PDF_MAGIC)
    assert b"%%EOF" in pdf[-32:]


def test_conversion_is_deterministic(settings):
    vector = _vector(theme="vermontWeekends")
    assert render_pdf(vector, settings=settings) == render_pdf(vector, settings=settings)


def test_metadata(settings):
    pdf = render_pdf(_vector(), settings=settings)
    assert b"Calendar 2025" in pdf
    assert settings.pdf_creator.encode() in pdf


@pytest.mark.parametrize("markup", ["", "   \n"])
def test_empty_document_is_rejected(markup, settings):
    with pytest.raises(RenderingError):
        render_pdf(VectorDocument(markup=markup, year=2025, month_count=0), settings=settings)


def test_undeclared_xlink_prefix_is_rejected(settings):
    markup = (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<svg xmlns="http://www.w3.org/2000/svg" width="10" height="10">'
        '<use xlink:href="#a"/></svg>'
    )
    with pytest.raises(RenderingError) as ei:
        render_pdf(VectorDocument(markup=markup, year=2025, month_count=0), settings=settings)
    assert "well-formed" in str(ei.value)


def test_two_roots_are_rejected():
    with pytest.raises(RenderingError):
        validate_markup(b'<svg xmlns="http://www.w3.org/2000/svg"/><svg xmlns="http://www.w3.org/2000/svg"/>')


def test_non_svg_root_is_rejected():
    with pytest.raises(RenderingError):
        validate_markup(b"<html/>")


def test_entities_are_not_expanded():
    markup = (
        b'<?xml version="1.0"?><!DOCTYPE svg [<!ENTITY x SYSTEM "file:///etc/passwd">]>'
        b'<svg xmlns="http://www.w3.org/2000/svg"><text>&x;</text></svg>'
    )
    validate_markup(markup)


def test_page_geometry():
    s = EngineSettings()
    assert s.page_size_pt == (35.0 * 72, 23.0 * 72)
    assert s.margin_pt == 36.0
