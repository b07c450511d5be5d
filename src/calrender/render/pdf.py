"""
calrender.render.pdf
--------------------
VectorDocument -> PDF bytes.

The markup is parsed strictly first (lxml, no entities, no network) so that a
malformed document is rejected before conversion. svglib turns it into a
reportlab Drawing, which is scaled onto one large-format page (35 x 23 in by
default, 0.5 in margin), centered horizontally and aligned to the top.
The canvas is created with ``invariant=1``: the same document always
produces the same bytes.
"""
from __future__ import annotations

import io
from typing import Optional

import structlog
from lxml import etree
from reportlab.graphics import renderPDF
from reportlab.lib.colors import white
from reportlab.pdfgen import canvas
from svglib.svglib import svg2rlg

from ..core.errors import RenderingError
from ..core.types import VectorDocument
from ..settings import EngineSettings, get_settings

logger = structlog.get_logger()

SVG_ROOT_TAG = "{http://www.w3.org/2000/svg}svg"
PDF_MAGIC = b"%PDF"


def validate_markup(data: bytes) -> None:
    """Raise RenderingError unless ``data`` is well-formed XML with an SVG root."""
    if not data or not data.strip():
        raise RenderingError("Empty vector document")
    parser = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=True)
    try:
        root = etree.fromstring(data, parser)
    except etree.XMLSyntaxError as exc:
        raise RenderingError(f"Vector document is not well-formed XML: {exc}") from exc
    if root.tag != SVG_ROOT_TAG:
        raise RenderingError(f"Vector document root is {root.tag!r}, expected an SVG root")


def _draw_page(drawing, title: str, settings: EngineSettings) -> bytes:
    page_w, page_h = settings.page_size_pt
    margin = settings.margin_pt
    avail_w = page_w - 2 * margin
    avail_h = page_h - 2 * margin
    if drawing.width <= 0 or drawing.height <= 0:
        raise RenderingError("Vector document has no drawable area")

    scale = min(avail_w / drawing.width, avail_h / drawing.height)
    w = drawing.width * scale
    h = drawing.height * scale
    x = margin + (avail_w - w) / 2.0
    y = page_h - margin - h

    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=(page_w, page_h), invariant=1)
    c.setTitle(title)
    c.setCreator(settings.pdf_creator)
    c.setProducer(settings.pdf_producer)

    c.setFillColor(white)
    c.rect(0, 0, page_w, page_h, stroke=0, fill=1)

    c.saveState()
    c.translate(x, y)
    c.scale(scale, scale)
    renderPDF.draw(drawing, c, 0, 0)
    c.restoreState()

    c.showPage()
    c.save()
    return buf.getvalue()


def render_pdf(vector: VectorDocument, *, settings: Optional[EngineSettings] = None) -> bytes:
    """
    Convert a vector document to a single-page PDF.

    Raises RenderingError (chained to the cause) for an empty or malformed
    document, an unconvertible SVG, or any failure while drawing. No partial
    bytes are returned.
    """
    settings = settings or get_settings()
    data = vector.encode()
    validate_markup(data)

    try:
        drawing = svg2rlg(io.BytesIO(data))
        if drawing is None:
            raise RenderingError("SVG conversion produced no drawing")
        pdf = _draw_page(drawing, f"Calendar {vector.year}", settings)
    except RenderingError as exc:
        logger.error("pdf_conversion_failed", year=vector.year, error=str(exc))
        raise
    except Exception as exc:
        logger.error("pdf_conversion_failed", year=vector.year, error=str(exc), error_type=type(exc).__name__)
        raise RenderingError(f"PDF conversion failed for calendar {vector.year}: {exc}") from exc

    if not pdf.startswith(PDF_MAGIC):
        raise RenderingError("PDF writer returned an invalid document")

    logger.info("pdf_rendered", year=vector.year, size=len(pdf), months=vector.month_count)
    return pdf
