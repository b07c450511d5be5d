"""
calrender.layout.weekday_grid
-----------------------------
Row-per-month layout with days shifted so that columns line up by weekday.

Column 0 of every row is ``first_day_of_week``; 37 columns hold any month.
"""
from __future__ import annotations

from datetime import date
from typing import List

from ..calendars.gregorian import column_of, days_in_month, month_name, weekday_name, weekday_order
from ..core.types import Box, CalendarLayout, MonthBlock, TextPlacement
from .cells import LayoutContext, build_cell, weekend_ranks
from .grid import HEADER_HEIGHT, cell_size, grid_moon_spot, month_label, year_title

DAY_COLUMNS = 37


def build_weekday_grid(ctx: LayoutContext) -> CalendarLayout:
    cfg = ctx.config
    cw, ch = cell_size(cfg.compact_mode)
    year = cfg.year
    order = weekday_order(cfg.first_day_of_week)

    days = [date(year, m, d) for m in range(1, 13) for d in range(1, days_in_month(year, m) + 1)]
    ranks = weekend_ranks(days, ctx.weekend)

    headers = tuple(
        TextPlacement(cw + col * cw + cw / 2, HEADER_HEIGHT - 8,
                      weekday_name(order[col % 7], cfg.locale, length=2),
                      "weekday-header", anchor="middle", size=10.0, color=ctx.palette.day_name)
        for col in range(DAY_COLUMNS)
    )

    months: List[MonthBlock] = []
    for m in range(1, 13):
        row_y = HEADER_HEIGHT + (m - 1) * ch
        n = days_in_month(year, m)
        start = column_of(date(year, m, 1), cfg.first_day_of_week)
        cells = []
        for d in range(1, n + 1):
            day = date(year, m, d)
            x = cw + (start + d - 1) * cw
            cells.append(build_cell(
                ctx, day, Box(x, row_y, cw, ch),
                month=m,
                label=str(d),
                number_at=(x + 5, row_y + 14, "start"),
                day_name_at=(x + 5, row_y + 26),
                moon_spot=grid_moon_spot(ctx, x, row_y),
                weekend_index=ranks.get(day, 0),
            ))
        used = range(start, start + n)
        months.append(MonthBlock(
            index=m,
            name=month_name(m, cfg.locale),
            box=Box(0.0, row_y, (DAY_COLUMNS + 1) * cw, ch),
            label=month_label(ctx, month_name(m, cfg.locale), month_name(m, cfg.locale, short=True),
                              row_y, cw, ch, x=cw - 5, anchor="end"),
            cells=tuple(cells),
            empty_slots=tuple(Box(cw + col * cw, row_y, cw, ch) for col in range(DAY_COLUMNS) if col not in used),
        ))

    return CalendarLayout(
        config=cfg,
        title=year_title(ctx, str(year)),
        months=tuple(months),
        bbox=Box(0.0, 0.0, cw * (DAY_COLUMNS + 1) + 20, ch * 12 + HEADER_HEIGHT + 20),
        palette=ctx.palette,
        column_headers=headers,
    )
