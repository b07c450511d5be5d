"""
calrender.glyphs.table
----------------------
Immutable symbol -> GlyphAsset table with color and monochrome variants.

The table is built once (see ``calrender.api_init``) and only read afterwards.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple, Union

import structlog

from ..core.types import GlyphVariant
from .builtin import BUILTIN_GLYPHS

logger = structlog.get_logger()

DEFAULT_VIEW_BOX = "0 0 128 128"
VARIATION_SELECTOR_16 = "\ufe0f"

# Symbols without a good grayscale rendering map onto a stand-in for mono output.
MONOCHROME_SUBSTITUTIONS = MappingProxyType({
    "🕎": "✡",
    "🪔": "🕯",
    "🤲": "🙏",
    "☪": "🌙",
    "🧧": "🏮",
    "🥮": "🌕",
    "🦫": "🐿",
    "🏳‍🌈": "🌈",
    "🪁": "☀",
    "🪈": "🎵",
    "🎖": "⭐",
    "🪦": "🌸",
    "🏔": "⛰",
})


def normalize_symbol(symbol: str) -> str:
    return symbol.replace(VARIATION_SELECTOR_16, "")


# ============================================================
# Fragment rewriting
# ============================================================

_HEX_COLOR = re.compile(r'(?<!href=")(?<=["\':\s,])#([0-9a-fA-F]{6}|[0-9a-fA-F]{3})(?![0-9A-Za-z_-])')
_ID_ATTR = re.compile(r'\bid="([^"]+)"')


def _gray_hex(match: "re.Match[str]") -> str:
    h = match.group(1)
    if len(h) == 3:
        h = "".join(c * 2 for c in h)
    r, g, b = (int(h[i:i + 2], 16) for i in (0, 2, 4))
    y = int(round(0.2126 * r + 0.7152 * g + 0.0722 * b))
    return f"#{y:02x}{y:02x}{y:02x}"


def grayscale(content: str) -> str:
    """Rewrite every hex color of a fragment to its luminance gray."""
    return _HEX_COLOR.sub(_gray_hex, content)


def uniquify_ids(content: str, prefix: str) -> str:
    """
    Prefix every id of a fragment and rewrite its references
    (``url(#id)``, ``xlink:href="#id"``, ``href="#id"``).
    """
    ids = set(_ID_ATTR.findall(content))
    if not ids:
        return content
    alternation = "|".join(re.escape(i) for i in sorted(ids, key=len, reverse=True))
    pattern = re.compile(
        r'(\bid=")(' + alternation + r')(")'
        r'|(url\(#)(' + alternation + r')(\))'
        r'|(href="#)(' + alternation + r')(")'
    )

    def sub(m: "re.Match[str]") -> str:
        for k in (1, 4, 7):
            if m.group(k) is not None:
                return f"{m.group(k)}{prefix}{m.group(k + 1)}{m.group(k + 2)}"
        return m.group(0)

    return pattern.sub(sub, content)


# ============================================================
# Assets
# ============================================================

@dataclass(frozen=True)
class GlyphAsset:
    symbol: str
    variant: GlyphVariant
    content: str
    view_box: str = DEFAULT_VIEW_BOX

    @property
    def uses_xlink(self) -> bool:
        return "xlink:" in self.content

    def embed(self, x: float, y: float, size: float, id_prefix: str) -> str:
        """Nested <svg> placing the glyph box at (x, y) with ids made unique."""
        body = uniquify_ids(self.content, id_prefix)
        return (
            f'<svg x="{x:.1f}" y="{y:.1f}" width="{size:.1f}" height="{size:.1f}" '
            f'viewBox="{self.view_box}" overflow="visible">{body}</svg>'
        )


class GlyphTable:
    """Read-only lookup of glyph assets by symbol and variant."""

    def __init__(self, fragments: Mapping[str, str], view_boxes: Optional[Mapping[str, str]] = None) -> None:
        view_boxes = view_boxes or {}
        color: Dict[str, GlyphAsset] = {}
        mono: Dict[str, GlyphAsset] = {}
        for raw, content in fragments.items():
            key = normalize_symbol(raw)
            vb = view_boxes.get(key, DEFAULT_VIEW_BOX)
            color[key] = GlyphAsset(key, GlyphVariant.COLOR, content, vb)
            mono[key] = GlyphAsset(key, GlyphVariant.MONO, grayscale(content), vb)
        self._color = MappingProxyType(color)
        self._mono = MappingProxyType(mono)

    def lookup(self, symbol: str, variant: GlyphVariant = GlyphVariant.COLOR) -> Optional[GlyphAsset]:
        key = normalize_symbol(symbol)
        if variant == GlyphVariant.MONO:
            sub = MONOCHROME_SUBSTITUTIONS.get(key, key)
            return self._mono.get(sub) or self._mono.get(key)
        return self._color.get(key)

    def symbols(self) -> List[str]:
        return sorted(self._color)

    def __contains__(self, symbol: object) -> bool:
        return isinstance(symbol, str) and normalize_symbol(symbol) in self._color

    def __len__(self) -> int:
        return len(self._color)


# ============================================================
# Loading
# ============================================================

_VIEW_BOX_ATTR = re.compile(r'viewBox="([^"]+)"')


def _inner_svg(text: str) -> Optional[str]:
    start = text.find("<svg")
    if start < 0:
        return None
    tag_end = text.find(">", start)
    end = text.rfind("</svg>")
    if tag_end < 0 or end < 0:
        return None
    return text[tag_end + 1:end].strip()


def symbol_from_filename(stem: str) -> Optional[str]:
    """``emoji_u1f3f3_fe0f_200d_1f308`` -> the emoji sequence."""
    if not stem.startswith("emoji_u"):
        return None
    try:
        return "".join(chr(int(cp, 16)) for cp in stem[len("emoji_u"):].split("_"))
    except ValueError:
        return None


def _read_glyph_file(f: Path) -> Optional[Tuple[str, str, str]]:
    symbol = symbol_from_filename(f.stem)
    if symbol is None:
        return None
    text = f.read_text(encoding="utf-8")
    inner = _inner_svg(text)
    if inner is None:
        return None
    m = _VIEW_BOX_ATTR.search(text)
    return normalize_symbol(symbol), inner, m.group(1) if m else DEFAULT_VIEW_BOX


def _scan_directory(path: Union[str, Path]) -> Tuple[Dict[str, str], Dict[str, str]]:
    root = Path(path)
    fragments: Dict[str, str] = {}
    view_boxes: Dict[str, str] = {}
    skipped = 0
    for f in sorted(root.glob("emoji_u*.svg")):
        entry = _read_glyph_file(f)
        if entry is None:
            skipped += 1
            continue
        symbol, inner, vb = entry
        fragments[symbol] = inner
        view_boxes[symbol] = vb
    logger.info("glyph_directory_loaded", path=str(root), loaded=len(fragments), skipped=skipped)
    return fragments, view_boxes


def load_glyph_directory(path: Union[str, Path]) -> Dict[str, str]:
    """
    Read Noto-style ``emoji_u<codepoints>.svg`` files into symbol -> fragment.

    Files that do not follow the naming scheme or carry no <svg> are skipped.
    """
    return _scan_directory(path)[0]


def builtin_glyph_table() -> GlyphTable:
    return GlyphTable(BUILTIN_GLYPHS)


def glyph_table_from_directory(path: Union[str, Path]) -> GlyphTable:
    """Directory glyphs on top of the built-in ones."""
    loaded, view_boxes = _scan_directory(path)
    fragments = dict(BUILTIN_GLYPHS)
    fragments.update(loaded)
    return GlyphTable(fragments, view_boxes)
