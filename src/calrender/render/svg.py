"""
calrender.render.svg
--------------------
CalendarLayout -> SVG markup.

Document shape:
    <?xml ...?>
    <svg xmlns=... [xmlns:xlink=...]>      single root
      <style/>, background, title, subtitle, column headers
      <g class="month" id="month-NN">       exactly one per month
        label, headers, week numbers, empty slots, day cells
      </g>
    </svg>

``xmlns:xlink`` is declared whenever a glyph or moon overlay is drawn, or the
body references ``xlink:`` at all. Output depends only on the layout: no
timestamps, no random ids.
"""
from __future__ import annotations

from typing import List, Optional
from xml.sax.saxutils import escape, quoteattr

import structlog

from ..core.errors import RenderingError
from ..core.registry import GlyphLookup
from ..core.types import CalendarLayout, DayCell, GlyphVariant, MonthBlock, TextPlacement, VectorDocument
from ..layout.themes import color_alpha, get_theme, pdf_safe_color
from .moon import moon_svg

logger = structlog.get_logger()

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
EMOJI_FONT_FAMILY = "Noto Color Emoji, Apple Color Emoji, Segoe UI Emoji, sans-serif"
TEXT_FONT_FAMILY = "Helvetica, Arial, sans-serif"

_STYLE = (
    "<style>"
    f"text {{ font-family: {TEXT_FONT_FAMILY}; }} "
    ".year-text { font-weight: bold; } "
    ".month-name { font-weight: bold; } "
    ".caption { font-style: italic; }"
    "</style>"
)


def _num(v: float) -> str:
    s = f"{v:.2f}".rstrip("0").rstrip(".")
    return "0" if s in ("", "-0") else s


def _fill_attrs(color: Optional[str], attr: str = "fill") -> str:
    safe = pdf_safe_color(color) or "none"
    alpha = color_alpha(color)
    out = f'{attr}="{safe}"'
    if safe != "none" and alpha < 1.0:
        out += f' {attr}-opacity="{_num(alpha)}"'
    return out


def _text(t: TextPlacement, *, font_family: Optional[str] = None) -> str:
    attrs = [f'x="{_num(t.x)}"', f'y="{_num(t.y)}"']
    if t.css_class:
        attrs.append(f'class="{t.css_class}"')
    if t.anchor != "start":
        attrs.append(f'text-anchor="{t.anchor}"')
    if t.size:
        attrs.append(f'font-size="{_num(t.size)}"')
    if t.color:
        attrs.append(_fill_attrs(t.color))
    if font_family:
        attrs.append(f"font-family={quoteattr(font_family)}")
    if t.rotate:
        attrs.append(f'transform="rotate(-90 {_num(t.x)} {_num(t.y)})"')
    return f"<text {' '.join(attrs)}>{escape(t.text)}</text>"


class _Writer:
    def __init__(self, layout: CalendarLayout, glyphs: Optional[GlyphLookup]) -> None:
        self.layout = layout
        self.config = layout.config
        self.glyphs = glyphs
        self.glyphs_embedded = 0
        self.glyphs_fallback = 0

    def glyph(self, cell: DayCell, prefix: str) -> str:
        g = cell.glyph
        variant = self.config.glyph_variant
        asset = self.glyphs.lookup(g.symbol, variant) if self.glyphs is not None else None
        if asset is not None:
            self.glyphs_embedded += 1
            return asset.embed(g.x, g.y, g.size, prefix)
        self.glyphs_fallback += 1
        fallback = TextPlacement(
            g.x + g.size / 2, g.y + g.size * 0.85, g.symbol, "emoji", anchor="middle", size=g.size,
            color="#000000" if variant == GlyphVariant.MONO else None,
        )
        return _text(fallback, font_family=EMOJI_FONT_FAMILY)

    def cell(self, cell: DayCell, prefix: str) -> List[str]:
        b = cell.box
        cfg = self.config
        out = []
        rect = f'<rect x="{_num(b.x)}" y="{_num(b.y)}" width="{_num(b.width)}" height="{_num(b.height)}"'
        rect += (" " + _fill_attrs(cell.fill)) if cell.fill else ' fill="none"'
        if cfg.show_grid:
            rect += f' stroke="{pdf_safe_color(cfg.colors.grid_line)}" stroke-width="0.5"'
        out.append(rect + "/>")
        for t in (cell.number, cell.day_name, cell.week_number, cell.hebrew_label):
            if t is not None:
                out.append(_text(t))
        if cell.moon is not None:
            out.append(moon_svg(cell.moon, cfg.colors))
        if cell.glyph is not None:
            out.append(self.glyph(cell, prefix))
        if cell.caption is not None:
            out.append(_text(cell.caption))
        return out

    def month(self, block: MonthBlock) -> str:
        cfg = self.config
        parts = [f'<g class="month" id="month-{block.index:02d}">', _text(block.label)]
        parts.extend(_text(h) for h in block.headers)
        parts.extend(_text(w) for w in block.week_numbers)
        if cfg.show_grid:
            stroke = pdf_safe_color(cfg.colors.grid_line)
            parts.extend(
                f'<rect class="empty" x="{_num(s.x)}" y="{_num(s.y)}" width="{_num(s.width)}" '
                f'height="{_num(s.height)}" fill="none" stroke="{stroke}" stroke-width="0.5"/>'
                for s in block.empty_slots
            )
        for i, c in enumerate(block.cells, start=1):
            parts.extend(self.cell(c, f"g{block.index:02d}{i:02d}_"))
        parts.append("</g>")
        return "".join(parts)

    def document(self) -> str:
        layout = self.layout
        box = layout.bbox
        background = get_theme(self.config.theme).background

        body: List[str] = [_STYLE]
        body.append(f'<rect class="background" x="0" y="0" width="{_num(box.width)}" '
                    f'height="{_num(box.height)}" {_fill_attrs(background)}/>')
        body.append(_text(layout.title))
        if layout.subtitle is not None:
            body.append(_text(layout.subtitle))
        body.extend(_text(h) for h in layout.column_headers)
        body.extend(self.month(m) for m in layout.months)
        inner = "\n".join(body)

        ns = f'xmlns="{SVG_NS}"'
        if layout.has_overlays or "xlink:" in inner:
            ns += f' xmlns:xlink="{XLINK_NS}"'
        root = (
            f'<svg {ns} width="{_num(box.width)}" height="{_num(box.height)}" '
            f'viewBox="{_num(box.x)} {_num(box.y)} {_num(box.width)} {_num(box.height)}">'
        )
        return f"{XML_DECLARATION}\n{root}\n{inner}\n</svg>\n"


def render_layout(layout: CalendarLayout, glyphs: Optional[GlyphLookup] = None) -> VectorDocument:
    """Serialize a layout. Raises RenderingError if the layout cannot be written."""
    writer = _Writer(layout, glyphs)
    try:
        markup = writer.document()
    except (AttributeError, TypeError, ValueError) as exc:
        raise RenderingError(f"Cannot serialize calendar {layout.config.year}: {exc}") from exc

    logger.info(
        "vector_rendered",
        year=layout.config.year,
        months=len(layout.months),
        glyphs=writer.glyphs_embedded,
        glyph_fallbacks=writer.glyphs_fallback,
        size=len(markup),
    )
    return VectorDocument(markup=markup, year=layout.config.year, month_count=len(layout.months))
