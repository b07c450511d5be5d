"""
calrender.glyphs.builtin
------------------------
Hand-drawn fallback glyphs on a 128x128 canvas.

Keys are symbols without U+FE0F. Fragments are the inner content of an
``<svg viewBox="0 0 128 128">`` element; ids are local and get a per-cell
prefix when embedded. Colors are hex so the monochrome pass can rewrite them.
"""
from __future__ import annotations

from types import MappingProxyType

# ============================================================
# Glyphs built from <symbol>/<use> and gradients
# ============================================================

_PUMPKIN = (
    '<defs>'
    '<radialGradient id="pumpkinShade" cx="0.5" cy="0.4" r="0.6">'
    '<stop offset="0" stop-color="#ffb74d"/><stop offset="1" stop-color="#e65100"/>'
    '</radialGradient>'
    '<symbol id="pumpkinLobe">'
    '<ellipse cx="0" cy="0" rx="24" ry="38" fill="url(#pumpkinShade)" stroke="#bf360c" stroke-width="2"/>'
    '</symbol>'
    '</defs>'
    '<rect x="58" y="14" width="12" height="22" rx="4" fill="#5d4037"/>'
    '<use xlink:href="#pumpkinLobe" x="38" y="74"/>'
    '<use xlink:href="#pumpkinLobe" x="90" y="74"/>'
    '<use xlink:href="#pumpkinLobe" x="64" y="72"/>'
    '<path d="M44 62 L54 50 L64 62 Z M70 62 L80 50 L90 62 Z" fill="#3e2723"/>'
    '<path d="M40 84 Q64 104 88 84 L82 92 L76 86 L70 94 L64 86 L58 94 L52 86 L46 92 Z" fill="#3e2723"/>'
)

_DANCER = (
    '<defs>'
    '<linearGradient id="dancerDress" x1="0" y1="0" x2="0" y2="1">'
    '<stop offset="0" stop-color="#ef5350"/><stop offset="1" stop-color="#b71c1c"/>'
    '</linearGradient>'
    '<symbol id="dancerLimb">'
    '<rect x="-4" y="0" width="8" height="34" rx="4" fill="#ffcc80"/>'
    '</symbol>'
    '</defs>'
    '<circle cx="64" cy="20" r="12" fill="#ffcc80"/>'
    '<path d="M52 14 Q64 0 76 14 Q70 8 64 10 Q58 8 52 14 Z" fill="#3e2723"/>'
    '<use xlink:href="#dancerLimb" transform="translate(58 34) rotate(40)"/>'
    '<use xlink:href="#dancerLimb" transform="translate(70 34) rotate(-130)"/>'
    '<path d="M54 32 L74 32 L100 96 Q64 110 28 96 Z" fill="url(#dancerDress)"/>'
    '<use xlink:href="#dancerLimb" transform="translate(56 96) rotate(10)"/>'
    '<use xlink:href="#dancerLimb" transform="translate(74 96) rotate(-25)"/>'
)

_PRAYING_HANDS = (
    '<defs>'
    '<linearGradient id="prayerSkin" x1="0" y1="0" x2="1" y2="1">'
    '<stop offset="0" stop-color="#ffe0b2"/><stop offset="1" stop-color="#ffb74d"/>'
    '</linearGradient>'
    '<symbol id="prayerHand">'
    '<path d="M64 12 Q56 14 54 30 L46 76 Q42 96 30 108 L58 118 Q64 100 64 88 Z" '
    'fill="url(#prayerSkin)" stroke="#e65100" stroke-width="2"/>'
    '</symbol>'
    '</defs>'
    '<use xlink:href="#prayerHand"/>'
    '<use xlink:href="#prayerHand" transform="translate(128 0) scale(-1 1)"/>'
    '<path d="M22 110 L60 122 L58 126 L20 116 Z M106 110 L68 122 L70 126 L108 116 Z" fill="#90caf9"/>'
)

_PALMS_UP = (
    '<defs>'
    '<linearGradient id="palmSkin" x1="0" y1="0" x2="0" y2="1">'
    '<stop offset="0" stop-color="#ffe0b2"/><stop offset="1" stop-color="#ffa726"/>'
    '</linearGradient>'
    '<symbol id="palm">'
    '<path d="M62 50 Q40 44 22 52 Q12 58 14 70 L20 100 Q26 112 44 112 L62 112 Z" '
    'fill="url(#palmSkin)" stroke="#e65100" stroke-width="2"/>'
    '<path d="M20 60 L16 40 M28 54 L26 32 M38 50 L38 28 M48 50 L50 30" '
    'stroke="#e65100" stroke-width="6" stroke-linecap="round" fill="none"/>'
    '</symbol>'
    '</defs>'
    '<use xlink:href="#palm"/>'
    '<use xlink:href="#palm" transform="translate(128 0) scale(-1 1)"/>'
)

# ============================================================
# Plain glyphs
# ============================================================

_STAR_POINTS = "64,8 80,46 120,48 88,74 100,114 64,90 28,114 40,74 8,48 48,46"

_PLAIN = {
    "🎉": (
        '<path d="M16 120 L44 40 L88 84 Z" fill="#ffb300"/>'
        '<path d="M30 80 L52 100 M38 60 L70 92" stroke="#e53935" stroke-width="6"/>'
        '<circle cx="92" cy="24" r="6" fill="#e91e63"/><circle cx="108" cy="52" r="5" fill="#42a5f5"/>'
        '<circle cx="70" cy="14" r="4" fill="#66bb6a"/><rect x="96" y="76" width="10" height="10" fill="#ab47bc"/>'
    ),
    "🎄": (
        '<path d="M64 8 L104 64 L84 64 L116 104 L12 104 L44 64 L24 64 Z" fill="#2e7d32"/>'
        '<rect x="56" y="104" width="16" height="18" fill="#6d4c41"/>'
        '<circle cx="56" cy="50" r="5" fill="#e53935"/><circle cx="76" cy="78" r="5" fill="#fdd835"/>'
        '<circle cx="44" cy="90" r="5" fill="#42a5f5"/>'
    ),
    "❤": '<path d="M64 116 L16 64 Q0 40 20 22 Q44 6 64 34 Q84 6 108 22 Q128 40 112 64 Z" fill="#e53935"/>',
    "✡": (
        '<path d="M64 10 L112 92 L16 92 Z M64 118 L16 36 L112 36 Z" fill="none" '
        'stroke="#1565c0" stroke-width="8" stroke-linejoin="round"/>'
    ),
    "🕯": (
        '<rect x="48" y="44" width="32" height="76" rx="4" fill="#fff8e1" stroke="#bcaaa4" stroke-width="2"/>'
        '<path d="M64 8 Q78 28 64 40 Q50 28 64 8 Z" fill="#ffb300"/>'
        '<rect x="62" y="38" width="4" height="8" fill="#3e2723"/>'
    ),
    "🌙": '<path d="M84 12 A54 54 0 1 0 116 92 A44 44 0 1 1 84 12 Z" fill="#fdd835"/>',
    "🌕": '<circle cx="64" cy="64" r="54" fill="#fff59d" stroke="#fbc02d" stroke-width="4"/>',
    "⭐": f'<polygon points="{_STAR_POINTS}" fill="#fdd835" stroke="#f9a825" stroke-width="3"/>',
    "🍁": (
        '<path d="M64 8 L74 36 L96 26 L90 52 L118 56 L94 76 L104 96 L70 88 L68 120 L60 120 '
        'L58 88 L24 96 L34 76 L10 56 L38 52 L32 26 L54 36 Z" fill="#d32f2f"/>'
    ),
    "🌈": (
        '<path d="M8 100 A56 56 0 0 1 120 100" fill="none" stroke="#e53935" stroke-width="10"/>'
        '<path d="M18 100 A46 46 0 0 1 110 100" fill="none" stroke="#fb8c00" stroke-width="10"/>'
        '<path d="M28 100 A36 36 0 0 1 100 100" fill="none" stroke="#fdd835" stroke-width="10"/>'
        '<path d="M38 100 A26 26 0 0 1 90 100" fill="none" stroke="#43a047" stroke-width="10"/>'
        '<path d="M48 100 A16 16 0 0 1 80 100" fill="none" stroke="#1e88e5" stroke-width="10"/>'
    ),
    "🕎": (
        '<path d="M16 40 Q16 80 64 80 Q112 80 112 40 M32 40 Q32 68 64 68 Q96 68 96 40 '
        'M48 40 Q48 56 64 56 Q80 56 80 40 M64 24 L64 108" fill="none" stroke="#f9a825" stroke-width="5"/>'
        '<rect x="40" y="106" width="48" height="10" rx="3" fill="#f9a825"/>'
        '<circle cx="16" cy="34" r="4" fill="#ff7043"/><circle cx="32" cy="34" r="4" fill="#ff7043"/>'
        '<circle cx="48" cy="34" r="4" fill="#ff7043"/><circle cx="64" cy="18" r="4" fill="#ff7043"/>'
        '<circle cx="80" cy="34" r="4" fill="#ff7043"/><circle cx="96" cy="34" r="4" fill="#ff7043"/>'
        '<circle cx="112" cy="34" r="4" fill="#ff7043"/>'
    ),
    "☀": (
        '<circle cx="64" cy="64" r="26" fill="#fdd835"/>'
        '<path d="M64 6 L64 26 M64 102 L64 122 M6 64 L26 64 M102 64 L122 64 M23 23 L37 37 '
        'M91 91 L105 105 M23 105 L37 91 M91 37 L105 23" stroke="#fbc02d" stroke-width="8" stroke-linecap="round"/>'
    ),
    "🎁": (
        '<rect x="14" y="50" width="100" height="70" fill="#e53935"/>'
        '<rect x="8" y="36" width="112" height="20" fill="#c62828"/>'
        '<rect x="56" y="36" width="16" height="84" fill="#fdd835"/>'
        '<path d="M64 36 Q40 4 30 24 Q28 36 64 36 Q100 36 98 24 Q88 4 64 36 Z" fill="#fdd835"/>'
    ),
    "🦃": (
        '<circle cx="64" cy="58" r="44" fill="#8d6e63"/><circle cx="64" cy="58" r="32" fill="#ff7043"/>'
        '<ellipse cx="64" cy="80" rx="26" ry="30" fill="#6d4c41"/>'
        '<circle cx="64" cy="48" r="14" fill="#8d6e63"/><path d="M64 50 L72 56 L64 60 Z" fill="#ffb300"/>'
        '<path d="M60 56 Q58 68 62 70" stroke="#d32f2f" stroke-width="4" fill="none"/>'
    ),
    "🐰": (
        '<ellipse cx="48" cy="30" rx="10" ry="26" fill="#eeeeee" stroke="#9e9e9e" stroke-width="2"/>'
        '<ellipse cx="80" cy="30" rx="10" ry="26" fill="#eeeeee" stroke="#9e9e9e" stroke-width="2"/>'
        '<circle cx="64" cy="78" r="40" fill="#eeeeee" stroke="#9e9e9e" stroke-width="2"/>'
        '<circle cx="50" cy="72" r="5" fill="#212121"/><circle cx="78" cy="72" r="5" fill="#212121"/>'
        '<path d="M58 88 L70 88 L64 94 Z" fill="#f48fb1"/>'
    ),
    "🍎": (
        '<path d="M64 36 Q30 20 18 56 Q12 96 44 118 Q56 124 64 116 Q72 124 84 118 Q116 96 110 56 Q98 20 64 36 Z" '
        'fill="#e53935"/>'
        '<path d="M64 36 Q64 20 72 10" stroke="#5d4037" stroke-width="5" fill="none"/>'
        '<path d="M70 22 Q90 8 100 20 Q84 32 70 22 Z" fill="#43a047"/>'
    ),
    "🍷": (
        '<path d="M36 12 L92 12 Q96 60 64 72 Q32 60 36 12 Z" fill="#f5f5f5" stroke="#9e9e9e" stroke-width="2"/>'
        '<path d="M38 34 L90 34 Q88 62 64 70 Q40 62 38 34 Z" fill="#880e4f"/>'
        '<rect x="61" y="72" width="6" height="36" fill="#bdbdbd"/>'
        '<ellipse cx="64" cy="112" rx="26" ry="6" fill="#bdbdbd"/>'
    ),
    "🌿": (
        '<path d="M20 116 Q60 80 108 12" stroke="#2e7d32" stroke-width="6" fill="none"/>'
        '<ellipse cx="50" cy="78" rx="20" ry="9" fill="#66bb6a" transform="rotate(-30 50 78)"/>'
        '<ellipse cx="74" cy="50" rx="20" ry="9" fill="#66bb6a" transform="rotate(-50 74 50)"/>'
        '<ellipse cx="72" cy="86" rx="18" ry="8" fill="#81c784" transform="rotate(10 72 86)"/>'
        '<ellipse cx="94" cy="60" rx="16" ry="7" fill="#81c784" transform="rotate(-10 94 60)"/>'
    ),
    "🔥": (
        '<path d="M64 6 Q96 42 100 74 Q102 112 64 122 Q26 112 28 74 Q32 48 52 30 Q50 52 62 60 Q58 30 64 6 Z" '
        'fill="#ff7043"/>'
        '<path d="M64 60 Q84 80 82 98 Q80 116 64 118 Q48 116 46 98 Q46 80 64 60 Z" fill="#ffca28"/>'
    ),
    "🎭": (
        '<path d="M12 20 L64 20 L64 64 Q64 96 38 96 Q12 96 12 64 Z" fill="#fdd835"/>'
        '<path d="M64 36 L116 36 L116 80 Q116 112 90 112 Q64 112 64 80 Z" fill="#42a5f5"/>'
        '<path d="M26 72 Q38 84 50 72" stroke="#212121" stroke-width="4" fill="none"/>'
        '<path d="M78 96 Q90 84 102 96" stroke="#212121" stroke-width="4" fill="none"/>'
    ),
    "🌾": (
        '<path d="M64 122 L64 30 M64 122 L40 40 M64 122 L88 40" stroke="#a1887f" stroke-width="4" fill="none"/>'
        '<ellipse cx="64" cy="22" rx="8" ry="18" fill="#ffb300"/>'
        '<ellipse cx="38" cy="32" rx="7" ry="16" fill="#ffb300" transform="rotate(-18 38 32)"/>'
        '<ellipse cx="90" cy="32" rx="7" ry="16" fill="#ffb300" transform="rotate(18 90 32)"/>'
    ),
    "🌳": (
        '<circle cx="64" cy="48" r="40" fill="#43a047"/>'
        '<rect x="56" y="80" width="16" height="42" fill="#6d4c41"/>'
    ),
    "🐑": (
        '<circle cx="64" cy="66" r="40" fill="#fafafa" stroke="#bdbdbd" stroke-width="3"/>'
        '<ellipse cx="32" cy="56" rx="16" ry="20" fill="#424242"/>'
        '<circle cx="28" cy="52" r="3" fill="#fafafa"/>'
        '<rect x="44" y="100" width="8" height="20" fill="#424242"/><rect x="76" y="100" width="8" height="20" fill="#424242"/>'
    ),
    "🐟": (
        '<ellipse cx="56" cy="64" rx="42" ry="24" fill="#42a5f5"/>'
        '<path d="M94 64 L122 40 L122 88 Z" fill="#1e88e5"/><circle cx="32" cy="58" r="5" fill="#212121"/>'
    ),
    "🕊": (
        '<path d="M12 70 Q40 44 70 58 Q84 20 118 14 Q104 40 100 64 Q92 104 48 100 L20 112 L30 94 Q14 86 12 70 Z" '
        'fill="#f5f5f5" stroke="#90a4ae" stroke-width="3"/>'
        '<circle cx="30" cy="68" r="3" fill="#212121"/>'
    ),
    "🎖": (
        '<path d="M40 8 L64 56 L88 8 Z" fill="#1e88e5"/>'
        '<circle cx="64" cy="84" r="32" fill="#fbc02d"/>'
        f'<polygon points="{_STAR_POINTS}" fill="#f57f17" transform="translate(42 62) scale(0.34)"/>'
    ),
    "👷": (
        '<circle cx="64" cy="74" r="36" fill="#ffcc80"/>'
        '<path d="M24 62 Q24 20 64 20 Q104 20 104 62 Z" fill="#fdd835"/>'
        '<rect x="16" y="58" width="96" height="10" rx="4" fill="#f9a825"/>'
        '<circle cx="52" cy="82" r="4" fill="#212121"/><circle cx="76" cy="82" r="4" fill="#212121"/>'
    ),
    "🏮": (
        '<ellipse cx="64" cy="66" rx="42" ry="44" fill="#d32f2f"/>'
        '<rect x="48" y="14" width="32" height="10" fill="#fbc02d"/><rect x="48" y="108" width="32" height="10" fill="#fbc02d"/>'
        '<path d="M64 24 L64 108 M40 30 Q26 66 40 102 M88 30 Q102 66 88 102" stroke="#b71c1c" stroke-width="3" fill="none"/>'
    ),
    "🐿": (
        '<path d="M92 112 Q124 80 108 40 Q96 12 76 28 Q100 48 84 84 Z" fill="#8d6e63"/>'
        '<ellipse cx="56" cy="80" rx="28" ry="34" fill="#a1887f"/>'
        '<circle cx="48" cy="38" r="18" fill="#a1887f"/><circle cx="42" cy="34" r="3" fill="#212121"/>'
    ),
    "🎵": (
        '<path d="M48 96 L48 24 L104 12 L104 84" stroke="#212121" stroke-width="6" fill="none"/>'
        '<ellipse cx="36" cy="98" rx="14" ry="10" fill="#212121"/><ellipse cx="92" cy="86" rx="14" ry="10" fill="#212121"/>'
    ),
    "🌸": (
        '<circle cx="64" cy="34" r="20" fill="#f8bbd0"/><circle cx="94" cy="56" r="20" fill="#f8bbd0"/>'
        '<circle cx="84" cy="92" r="20" fill="#f8bbd0"/><circle cx="44" cy="92" r="20" fill="#f8bbd0"/>'
        '<circle cx="34" cy="56" r="20" fill="#f8bbd0"/><circle cx="64" cy="66" r="12" fill="#f06292"/>'
    ),
    "⛰": (
        '<path d="M4 116 L52 30 L76 70 L88 52 L124 116 Z" fill="#78909c"/>'
        '<path d="M40 52 L52 30 L64 52 L56 48 L48 54 Z" fill="#fafafa"/>'
    ),
    "🌍": (
        '<circle cx="64" cy="64" r="56" fill="#42a5f5"/>'
        '<path d="M40 20 Q60 30 52 50 Q40 60 48 80 Q56 100 44 112 Q20 96 14 70 Q20 36 40 20 Z" fill="#66bb6a"/>'
        '<path d="M80 14 Q104 26 112 52 Q100 60 88 52 Q76 40 80 14 Z" fill="#66bb6a"/>'
    ),
}

BUILTIN_GLYPHS = MappingProxyType({
    "🎃": _PUMPKIN,
    "💃": _DANCER,
    "🙏": _PRAYING_HANDS,
    "🤲": _PALMS_UP,
    **_PLAIN,
})
