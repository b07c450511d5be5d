"""
calrender.layout.hebrew_grid
----------------------------
Hebrew-year layout: one row per Hebrew month (12, or 13 in leap years) and
30 day columns after a two-cell month label. Each cell is tied to the
approximate Gregorian date of its Hebrew day; Shabbat is that date falling
on Saturday.

The day is clamped to the Gregorian month, so two Hebrew cells can share a
date (Adar 28 and 29 both land on February 28 in 5785) and a custom date on
such a day shows twice. Some Gregorian days, such as December 30 and 31 or
January 31, have no cell at all.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from ..calendars import hebrew
from ..calendars.gregorian import month_name as gregorian_month_name
from ..core.types import (
    Annotation,
    AnnotationSource,
    Box,
    CalendarLayout,
    MonthBlock,
    TextPlacement,
    Weekday,
)
from .cells import LayoutContext, MoonSpot, build_cell
from .grid import HEADER_HEIGHT, cell_size, month_label, year_title

DAY_COLUMNS = 30


def _hebrew_annotations(ctx: LayoutContext, year: int) -> Dict[Tuple[int, int], Annotation]:
    out: Dict[Tuple[int, int], Annotation] = {}
    for set_id in ctx.hebrew_sets:
        for (m, d), name in sorted(hebrew.hebrew_holidays(year, set_id).items()):
            if (m, d) in out:
                continue
            out[(m, d)] = Annotation(
                date=hebrew.hebrew_to_gregorian(year, m, d),
                text=name,
                source=AnnotationSource.HOLIDAY_SET,
                emoji=hebrew.holiday_emoji(name),
                color=ctx.palette.holiday,
                set_id=set_id,
            )
    return out


def _pick_annotation(ctx: LayoutContext, resolved: Optional[Annotation],
                     native: Optional[Annotation]) -> Optional[Annotation]:
    """Custom and holiday-map entries stay; between two sets the first listed wins."""
    if native is None or resolved is None:
        return resolved or native
    if resolved.source != AnnotationSource.HOLIDAY_SET:
        return resolved
    unknown = len(ctx.set_rank)
    if ctx.set_rank.get(native.set_id or "", unknown) < ctx.set_rank.get(resolved.set_id or "", unknown):
        return native
    return resolved


def build_hebrew(ctx: LayoutContext) -> CalendarLayout:
    cfg = ctx.config
    cw, ch = cell_size(cfg.compact_mode)
    hy = hebrew.hebrew_year_for(cfg.year)
    label_w = 2 * cw
    holidays = _hebrew_annotations(ctx, hy)
    moon = cfg.moon

    headers = tuple(
        TextPlacement(label_w + (d - 1) * cw + cw / 2, 90, str(d), "weekday-header", anchor="middle",
                      size=10.0, color=ctx.palette.day_name)
        for d in range(1, DAY_COLUMNS + 1)
    )

    months: List[MonthBlock] = []
    for m in range(1, hebrew.months_in_year(hy) + 1):
        row_y = HEADER_HEIGHT + (m - 1) * ch
        name = hebrew.month_name(m, hy)
        n = hebrew.days_in_month(m, hy)
        cells = []
        shabbat_rank = 0
        for d in range(1, n + 1):
            g = hebrew.hebrew_to_gregorian(hy, m, d)
            x = label_w + (d - 1) * cw
            is_shabbat = g.weekday() == Weekday.SATURDAY
            annotation = _pick_annotation(ctx, ctx.annotations.get(g), holidays.get((m, d)))
            cells.append(build_cell(
                ctx, g, Box(x, row_y, cw, ch),
                month=m,
                label=str(d),
                number_at=(x + 5, row_y + 14, "start"),
                day_name_at=(x + 5, row_y + 26),
                day_name_text=f"{gregorian_month_name(g.month, cfg.locale, short=True)} {g.day}",
                moon_spot=MoonSpot(x + cw / 2, row_y + moon.offset_y, moon.size / 2.0, moon.border_width),
                weekend_index=shabbat_rank,
                is_weekend=is_shabbat,
                annotation=annotation,
            ))
            if is_shabbat:
                shabbat_rank += 1
        months.append(MonthBlock(
            index=m,
            name=name,
            box=Box(0.0, row_y, label_w + DAY_COLUMNS * cw, ch),
            label=month_label(ctx, name, name, row_y, label_w, ch),
            cells=tuple(cells),
            empty_slots=tuple(Box(label_w + (d - 1) * cw, row_y, cw, ch) for d in range(n + 1, DAY_COLUMNS + 1)),
        ))

    rows = len(months)
    return CalendarLayout(
        config=cfg,
        title=year_title(ctx, str(hy), y=60.0, size=48.0),
        subtitle=TextPlacement(50.0, 84.0, f"{hy - 3761}-{hy - 3760} CE", "subtitle", size=16.0,
                               color=ctx.palette.month_text),
        months=tuple(months),
        bbox=Box(0.0, 0.0, label_w + DAY_COLUMNS * cw + 20, HEADER_HEIGHT + rows * ch + 20),
        palette=ctx.palette,
        column_headers=headers,
    )
