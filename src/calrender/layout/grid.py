"""
calrender.layout.grid
---------------------
Row-per-month layout: a month label column followed by 31 day columns.
"""
from __future__ import annotations

from datetime import date
from typing import List, Tuple

from ..calendars.gregorian import days_in_month, month_name
from ..core.types import Box, CalendarLayout, MonthBlock, TextPlacement
from .cells import LayoutContext, MoonSpot, build_cell, weekend_ranks

HEADER_HEIGHT = 100.0
GRID_COLUMNS = 32


def cell_size(compact: bool) -> Tuple[float, float]:
    return (40.0, 60.0) if compact else (50.0, 75.0)


def month_label(ctx: LayoutContext, full: str, short: str, row_y: float, cw: float, ch: float,
                *, x: float = 5.0, anchor: str = "start") -> TextPlacement:
    """Row label; rotated labels are centered in the label column."""
    if ctx.config.rotate_month_names:
        return TextPlacement(cw / 2, row_y + ch / 2, full, "month-name", anchor="middle",
                             size=14.0, color=ctx.palette.month_text, rotate=True)
    return TextPlacement(x, row_y + ch / 2 + 5, short, "month-name", anchor=anchor,
                         size=16.0 if ch < 75 else 20.0, color=ctx.palette.month_text)


def year_title(ctx: LayoutContext, text: str, x: float = 50.0, y: float = 80.0, size: float = 80.0) -> TextPlacement:
    return TextPlacement(x, y, text, "year-text", size=size, color=ctx.palette.year_text)


def grid_moon_spot(ctx: LayoutContext, x: float, y: float) -> MoonSpot:
    m = ctx.config.moon
    return MoonSpot(x + m.offset_x, y + m.offset_y, m.size / 2.0, m.border_width)


def build_grid(ctx: LayoutContext) -> CalendarLayout:
    cfg = ctx.config
    cw, ch = cell_size(cfg.compact_mode)
    year = cfg.year

    days = [date(year, m, d) for m in range(1, 13) for d in range(1, days_in_month(year, m) + 1)]
    ranks = weekend_ranks(days, ctx.weekend)

    months: List[MonthBlock] = []
    for m in range(1, 13):
        row_y = HEADER_HEIGHT + (m - 1) * ch
        n = days_in_month(year, m)
        cells = []
        for d in range(1, n + 1):
            day = date(year, m, d)
            x = d * cw
            cells.append(build_cell(
                ctx, day, Box(x, row_y, cw, ch),
                month=m,
                label=str(d),
                number_at=(x + 5, row_y + 14, "start"),
                day_name_at=(x + 5, row_y + 26),
                moon_spot=grid_moon_spot(ctx, x, row_y),
                weekend_index=ranks.get(day, 0),
            ))
        months.append(MonthBlock(
            index=m,
            name=month_name(m, cfg.locale),
            box=Box(0.0, row_y, GRID_COLUMNS * cw, ch),
            label=month_label(ctx, month_name(m, cfg.locale), month_name(m, cfg.locale, short=True), row_y, cw, ch),
            cells=tuple(cells),
            empty_slots=tuple(Box(d * cw, row_y, cw, ch) for d in range(n + 1, 32)),
        ))

    return CalendarLayout(
        config=cfg,
        title=year_title(ctx, str(year)),
        months=tuple(months),
        bbox=Box(0.0, 0.0, GRID_COLUMNS * cw + 20, HEADER_HEIGHT + 12 * ch + 20),
        palette=ctx.palette,
    )
