"""
calrender.layout.cells
----------------------
Per-day decoration shared by every layout builder: colors, moon overlay,
glyph and caption placement, Hebrew date label and week number.

Builders decide where a cell goes; this module decides what goes in it.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, FrozenSet, Iterable, Mapping, Optional, Tuple

from ..astro.moon import is_near_full, is_phase_day, moon_rotation_deg
from ..calendars.gregorian import week_number, weekday_name
from ..core.types import (
    Annotation,
    AnnotationSource,
    Box,
    CalendarConfiguration,
    ColorSource,
    DayCell,
    EventDisplayMode,
    GlyphPlacement,
    LayoutStyle,
    MoonOverlay,
    MoonSample,
    Palette,
    TextPlacement,
    Weekday,
)
from .themes import Theme, cell_background


@dataclass(frozen=True)
class LayoutContext:
    config: CalendarConfiguration
    theme: Theme
    palette: Palette
    weekend: FrozenSet[Weekday]
    annotations: Mapping[date, Annotation] = field(default_factory=dict)
    moon: Mapping[date, MoonSample] = field(default_factory=dict)
    hebrew_labels: Mapping[date, str] = field(default_factory=dict)
    hebrew_sets: Tuple[str, ...] = ()
    set_rank: Mapping[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class MoonSpot:
    """Where a builder wants the moon of a cell, before caption adjustment."""
    cx: float
    cy: float
    radius: float
    border_width: float


def weekend_ranks(days: Iterable[date], weekend: FrozenSet[Weekday]) -> Dict[date, int]:
    """0-based rank of each weekend day among the weekend days of its month."""
    out: Dict[date, int] = {}
    seen: Dict[Tuple[int, int], int] = {}
    for d in sorted(days):
        if Weekday(d.weekday()) in weekend:
            key = (d.year, d.month)
            out[d] = seen.get(key, 0)
            seen[key] = out[d] + 1
    return out


# ============================================================
# Colors
# ============================================================

def cell_colors(
    ctx: LayoutContext,
    d: date,
    *,
    is_weekend: bool,
    weekend_index: int,
    annotation: Optional[Annotation],
) -> Tuple[Optional[str], str, ColorSource]:
    """(fill, text color, color source) with custom > holiday > weekend > default."""
    cfg = ctx.config
    fill = cell_background(
        ctx.theme,
        d,
        is_weekend=is_weekend,
        weekend_index=weekend_index,
        highlight_weekends=cfg.highlight_weekends,
        weekend_override=cfg.colors.weekend_background,
    )
    if annotation is not None and annotation.source == AnnotationSource.CUSTOM:
        return fill, annotation.color or ctx.palette.custom_date, ColorSource.CUSTOM
    if annotation is not None:
        return fill, annotation.color or ctx.palette.holiday, ColorSource.HOLIDAY
    if is_weekend and cfg.highlight_weekends:
        return fill, ctx.palette.day_text, ColorSource.WEEKEND
    return fill, ctx.palette.day_text, ColorSource.DEFAULT


# ============================================================
# Overlays
# ============================================================

def wants_moon(config: CalendarConfiguration, d: date, sample: Optional[MoonSample]) -> bool:
    if sample is None:
        return False
    if config.show_moon_illumination:
        return True
    if config.show_moon_phases and is_phase_day(d):
        return True
    return config.show_full_moon_only and is_near_full(sample)


def caption_for(annotation: Optional[Annotation], box: Box, mode: EventDisplayMode) -> Optional[TextPlacement]:
    if annotation is None or not annotation.text or not mode.shows_caption:
        return None
    size = max(5.0, box.width / 10.0)
    max_chars = max(3, int(box.width / (size * 0.55)))
    text = annotation.text if len(annotation.text) <= max_chars else annotation.text[:max_chars - 1] + "…"
    return TextPlacement(
        x=box.x + box.width / 2,
        y=box.bottom - 3,
        text=text,
        css_class="caption",
        anchor="middle",
        size=size,
        color=annotation.color,
    )


def glyph_for(
    annotation: Optional[Annotation],
    box: Box,
    mode: EventDisplayMode,
    *,
    has_moon: bool,
    caption: Optional[TextPlacement],
) -> Optional[GlyphPlacement]:
    if annotation is None or not annotation.emoji or mode in (EventDisplayMode.NONE, EventDisplayMode.TEXT):
        return None
    if mode == EventDisplayMode.SMALL:
        size = max(10.0, box.height / 6.0)
        baseline = box.bottom - 5
        return GlyphPlacement(annotation.emoji, box.x + 5, baseline - size, size)

    size = max(16.0, box.height / 3.0)
    if has_moon:
        baseline = box.bottom - 5 - (caption.size if caption is not None and caption.size else 0.0)
    else:
        baseline = box.y + box.height / 2 + 5
    return GlyphPlacement(annotation.emoji, box.x + box.width / 2 - size / 2, baseline - size, size)


def moon_for(ctx: LayoutContext, d: date, spot: Optional[MoonSpot], *, caption_shown: bool) -> Optional[MoonOverlay]:
    sample = ctx.moon.get(d)
    if spot is None or not wants_moon(ctx.config, d, sample):
        return None
    return MoonOverlay(
        cx=spot.cx,
        cy=spot.cy - (3.0 if caption_shown else 0.0),
        radius=spot.radius,
        rotation_deg=moon_rotation_deg(d, ctx.config.location),
        border_width=spot.border_width,
        sample=sample,
    )


# ============================================================
# Cell assembly
# ============================================================

def build_cell(
    ctx: LayoutContext,
    d: date,
    box: Box,
    *,
    month: int,
    label: str,
    number_at: Optional[Tuple[float, float, str]] = None,
    day_name_at: Optional[Tuple[float, float]] = None,
    day_name_text: Optional[str] = None,
    moon_spot: Optional[MoonSpot] = None,
    weekend_index: int = 0,
    is_weekend: Optional[bool] = None,
    annotation: Optional[Annotation] = None,
    number_size: float = 12.0,
) -> DayCell:
    """
    Decorate one cell. ``number_at`` is (x, y, anchor) of the day label;
    ``annotation`` overrides the context lookup (Hebrew cells).
    """
    cfg = ctx.config
    if is_weekend is None:
        is_weekend = Weekday(d.weekday()) in ctx.weekend
    if annotation is None:
        annotation = ctx.annotations.get(d)

    fill, text_color, source = cell_colors(
        ctx, d, is_weekend=is_weekend, weekend_index=weekend_index, annotation=annotation
    )

    number = None
    if cfg.show_day_numbers and number_at is not None:
        x, y, anchor = number_at
        number = TextPlacement(x, y, label, "day-number", anchor=anchor, size=number_size, color=text_color)

    day_name = None
    if cfg.show_day_names and day_name_at is not None:
        text = day_name_text or weekday_name(Weekday(d.weekday()), cfg.locale, length=3)
        day_name = TextPlacement(
            day_name_at[0], day_name_at[1], text, "day-name",
            size=max(6.0, number_size * 0.66), color=ctx.palette.day_name,
        )

    mode = cfg.event_display_mode
    caption = caption_for(annotation, box, mode)
    moon = moon_for(ctx, d, moon_spot, caption_shown=caption is not None)
    glyph = glyph_for(annotation, box, mode, has_moon=moon is not None, caption=caption)

    week = None
    if cfg.show_week_numbers and d.weekday() == int(cfg.first_day_of_week) and cfg.layout != LayoutStyle.TRADITIONAL:
        week = TextPlacement(
            box.right - 3, box.y + 10, f"W{week_number(d, cfg.first_day_of_week)}",
            "week-number", anchor="end", size=7.0, color=ctx.palette.day_name,
        )

    hebrew_label = None
    h = ctx.hebrew_labels.get(d)
    if h is not None:
        hebrew_label = TextPlacement(
            box.right - 3, box.bottom - (14 if caption is not None else 4), h,
            "hebrew-date", anchor="end", size=max(6.0, box.width / 8.0), color=ctx.palette.day_name,
        )

    return DayCell(
        date=d,
        month=month,
        box=box,
        number=number,
        day_name=day_name,
        is_weekend=is_weekend,
        fill=fill,
        text_color=text_color,
        color_source=source,
        annotation=annotation,
        glyph=glyph,
        caption=caption,
        moon=moon,
        week_number=week,
        hebrew_label=hebrew_label,
    )
