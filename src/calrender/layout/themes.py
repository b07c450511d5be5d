"""
calrender.layout.themes
-----------------------
Named color themes.

A theme gives the base text/background/header colors and a weekend fill that
may vary by month and by the weekend day's rank within the month. The
``rainbowDays*`` themes color every day instead.
"""
from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import date
from types import MappingProxyType
from typing import Callable, Optional, Sequence

from ..core.types import CalendarConfiguration, Palette

WeekendFill = Callable[[date, int], str]
DayFill = Callable[[date], str]


def _flat(color: str) -> WeekendFill:
    return lambda d, i: color


def _per_month(colors: Sequence[str]) -> WeekendFill:
    return lambda d, i: colors[d.month - 1]


def _per_month_rank(table: Sequence[Sequence[str]]) -> WeekendFill:
    def fill(d: date, i: int) -> str:
        row = table[d.month - 1]
        return row[min(i, len(row) - 1)]
    return fill


@dataclass(frozen=True)
class Theme:
    name: str
    text: str = "#000000"
    background: str = "#ffffff"
    month_header: str = "#333333"
    weekday_header: str = "#666666"
    weekend: WeekendFill = _flat("#f0f0f0")
    every_day: Optional[DayFill] = None


# ============================================================
# Theme tables
# ============================================================

_GREY_30 = "rgba(161,161,161,0.30)"
_GREY_60 = "rgba(161,161,161,0.6)"

_VERMONT = (
    ("#E8F1F2",) * 10,
    ("#F0F8FF",) * 10,
    ("#E9F7EF",) * 8 + ("#d1a4fd",) * 2,
    ("#7CFC00",) + ("#c8fc9f",) * 8 + ("#d1a4fd",),
    ("#82E0AA", "#D0ECE7", "#A2D9CE", "#73C6B6", "#45B39D",
     "#58D68D", "#82E0AA", "#ABEBC6", "#D5F5E3", "#FEF9E7"),
    ("#66CDAA",) * 10,
    ("#3CB371",) * 10,
    ("#5bf0ff",) * 10,
    ("#FAD7A0", "#F8C471", "#F5B041") + ("#F39C12",) * 5 + ("#FFD700",) * 2,
    ("#FF4500", "#FF8C00", "#DAA520",
     "rgba(180,120,60,0.4)", "rgba(190,130,70,0.4)", "rgba(200,140,80,0.4)",
     "rgba(210,160,100,0.4)", "rgba(225,190,140,0.4)", "#C0C0C0", "#808080"),
    (_GREY_30,) * 10,
    (_GREY_60,) * 10,
)

_LAKESHORE = (
    "#e3f2fd", "#e1f5fe", "#b3e5fc", "#e0f7fa", "#b2ebf2", "#b2dfdb",
    "#80deea", "#84ffff", "#a7ffeb", "#b2dfdb", "#b3e5fc", "#bbdefb",
)
_SUNSET = (
    "#fce4ec", "#f8bbd0", "#ffcdd2", "#ffccbc", "#ffe0b2", "#fff8e1",
    "#ffecb3", "#ffe082", "#ffd180", "#ffab91", "#ffcdd2", "#f8bbd0",
)
_FOREST = (
    "#e8f5e9", "#c8e6c9", "#dcedc8", "#c5e1a5", "#aed581", "#c8e6c9",
    "#a5d6a7", "#b9f6ca", "#dcedc8", "#d7ccc8", "#efebe9", "#e8f5e9",
)


def _day_hue(d: date) -> int:
    return int(d.day / 30 * 360)


def _rainbow_weekend(d: date, i: int) -> str:
    return f"hsl({_day_hue(d)}, 100%, 90%)"


def _rainbow_days_1(d: date) -> str:
    return f"hsl({d.isoweekday() * 30}, 100%, 90%)"


def _rainbow_days_2(d: date) -> str:
    return f"hsl({_day_hue(d)}, 100%, 80%)"


_MAX_DIST = math.sqrt(36 ** 2 + 31 ** 2)


def _rainbow_days_3(d: date) -> str:
    dist = math.sqrt((12 - d.month * 3) ** 2 + (31 - d.day) ** 2)
    light = 80 + (1 - dist / _MAX_DIST) * 10
    return f"hsl({_day_hue(d)}, 100%, {light:.1f}%)"


THEMES = MappingProxyType({
    t.name: t for t in (
        Theme("default"),
        Theme("vermontWeekends", month_header="#1b5e20", weekday_header="#333333",
              weekend=_per_month_rank(_VERMONT)),
        Theme("lakeshoreWeekends", month_header="#1565c0", weekend=_per_month(_LAKESHORE)),
        Theme("sunsetWeekends", month_header="#e65100", weekend=_per_month(_SUNSET)),
        Theme("forestWeekends", month_header="#2e7d32", weekend=_per_month(_FOREST)),
        Theme("rainbowWeekends", month_header="#e91e63", weekday_header="#9c27b0",
              weekend=_rainbow_weekend),
        Theme("rainbowDays1", every_day=_rainbow_days_1),
        Theme("rainbowDays2", every_day=_rainbow_days_2),
        Theme("rainbowDays3", every_day=_rainbow_days_3),
    )
})


def get_theme(name: Optional[str]) -> Theme:
    """Theme by name; unknown names fall back to ``default``."""
    return THEMES.get(name or "default", THEMES["default"])


def cell_background(
    theme: Theme,
    d: date,
    *,
    is_weekend: bool,
    weekend_index: int,
    highlight_weekends: bool = True,
    weekend_override: Optional[str] = None,
) -> Optional[str]:
    """Fill of a day cell, or None for the plain background."""
    if theme.every_day is not None:
        return theme.every_day(d)
    if is_weekend and highlight_weekends:
        return weekend_override or theme.weekend(d, weekend_index)
    return None


def palette_for(config: CalendarConfiguration) -> Palette:
    theme = get_theme(config.theme)
    c = config.colors
    return Palette(
        year_text=c.year_text or theme.text,
        month_text=c.month_text or theme.month_header,
        day_text=c.day_text or theme.text,
        day_name=c.day_name or theme.weekday_header,
        grid_line=c.grid_line,
        weekend=c.weekend_background or theme.weekend(date(config.year, 1, 1), 0),
        holiday=c.holiday,
        custom_date=c.custom_date,
    )


# ============================================================
# Print-safe colors
# ============================================================

_RGBA = re.compile(r"rgba\(\s*([\d.]+)\s*,\s*([\d.]+)\s*,\s*([\d.]+)\s*,\s*([\d.]+)\s*\)")
_HSL = re.compile(r"hsl\(\s*([-\d.]+)\s*,\s*([\d.]+)%\s*,\s*([\d.]+)%\s*\)")


def hsl_to_hex(h: float, s: float, l: float) -> str:
    """HSL (degrees, percent, percent) -> #rrggbb."""
    h = h % 360
    s /= 100.0
    l /= 100.0
    c = (1 - abs(2 * l - 1)) * s
    x = c * (1 - abs((h / 60) % 2 - 1))
    m = l - c / 2
    if h < 60:
        r, g, b = c, x, 0.0
    elif h < 120:
        r, g, b = x, c, 0.0
    elif h < 180:
        r, g, b = 0.0, c, x
    elif h < 240:
        r, g, b = 0.0, x, c
    elif h < 300:
        r, g, b = x, 0.0, c
    else:
        r, g, b = c, 0.0, x
    return "#" + "".join(f"{int(round((v + m) * 255)):02x}" for v in (r, g, b))


def pdf_safe_color(color: Optional[str]) -> Optional[str]:
    """
    Colors the print converter understands: ``rgba`` becomes ``rgb`` (or
    ``none`` when fully transparent) and ``hsl`` becomes hex.
    """
    if not color:
        return color
    m = _RGBA.fullmatch(color.strip())
    if m:
        r, g, b, a = m.groups()
        if float(a) == 0:
            return "none"
        return f"rgb({int(float(r))},{int(float(g))},{int(float(b))})"
    m = _HSL.fullmatch(color.strip())
    if m:
        return hsl_to_hex(*(float(v) for v in m.groups()))
    return color


def color_alpha(color: Optional[str]) -> float:
    """Alpha of an ``rgba`` color; 1.0 for everything else."""
    m = _RGBA.fullmatch(color.strip()) if color else None
    return float(m.group(4)) if m else 1.0
