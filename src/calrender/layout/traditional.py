"""
calrender.layout.traditional
----------------------------
Wall-calendar style: twelve small month blocks in a 4 x 3 arrangement, each
a 7-column week grid headed by weekday initials.
"""
from __future__ import annotations

from datetime import date
from typing import List

from ..calendars.gregorian import column_of, days_in_month, month_name, week_number, weekday_name, weekday_order
from ..core.types import Box, CalendarLayout, MonthBlock, TextPlacement
from .cells import LayoutContext, MoonSpot, build_cell, weekend_ranks

BLOCK_COLUMNS = 4
BLOCK_ROWS = 3
# moon offsets are given for a 50-unit grid cell
_MOON_REFERENCE_CELL = 50.0


def build_traditional(ctx: LayoutContext) -> CalendarLayout:
    cfg = ctx.config
    c = 18.0 if cfg.compact_mode else 25.0
    week_col = c if cfg.show_week_numbers else 0.0
    mw = 7 * c + 20 + week_col
    mh = 8 * c + 40
    width = BLOCK_COLUMNS * mw + 40
    height = BLOCK_ROWS * mh + 60
    year = cfg.year
    order = weekday_order(cfg.first_day_of_week)

    scale = c / _MOON_REFERENCE_CELL
    moon = cfg.moon
    radius = max(3.0, moon.size / 5.0)

    days = [date(year, m, d) for m in range(1, 13) for d in range(1, days_in_month(year, m) + 1)]
    ranks = weekend_ranks(days, ctx.weekend)

    months: List[MonthBlock] = []
    for i in range(12):
        m = i + 1
        ox = (i % BLOCK_COLUMNS) * mw + 20 + week_col
        oy = (i // BLOCK_COLUMNS) * mh + 50
        name = month_name(m, cfg.locale)

        if cfg.rotate_month_names:
            label = TextPlacement(ox - week_col - 8, oy + 25 + 3 * c, name, "month-name", anchor="middle",
                                  size=c * 0.6, color=ctx.palette.month_text, rotate=True)
        else:
            label = TextPlacement(ox + 3.5 * c, oy, name, "month-name", anchor="middle",
                                  size=c * 0.7, color=ctx.palette.month_text)

        headers = tuple(
            TextPlacement(ox + k * c + c / 2, oy + 15, weekday_name(order[k], cfg.locale, length=1),
                          "weekday-header", anchor="middle", size=c * 0.4, color=ctx.palette.day_name)
            for k in range(7)
        )

        start = column_of(date(year, m, 1), cfg.first_day_of_week)
        n = days_in_month(year, m)
        cells = []
        week_labels = []
        for d in range(1, n + 1):
            day = date(year, m, d)
            slot = start + d - 1
            row, col = divmod(slot, 7)
            x = ox + col * c
            y = oy + 20 + row * c
            cells.append(build_cell(
                ctx, day, Box(x, y, c, c),
                month=m,
                label=str(d),
                number_at=(x + c / 2, y + c * 0.7, "middle"),
                moon_spot=MoonSpot(x + moon.offset_x * scale, y + moon.offset_y * scale, radius,
                                   moon.border_width * 0.5),
                weekend_index=ranks.get(day, 0),
                number_size=c * 0.45,
            ))
            if cfg.show_week_numbers and (col == 0 or d == 1):
                week_labels.append(TextPlacement(
                    ox - week_col / 2, y + c * 0.7, str(week_number(day, cfg.first_day_of_week)),
                    "week-number", anchor="middle", size=c * 0.35, color=ctx.palette.day_name,
                ))

        months.append(MonthBlock(
            index=m,
            name=name,
            box=Box(ox - week_col, oy - c, mw - 20, mh - 20),
            label=label,
            cells=tuple(cells),
            headers=headers,
            week_numbers=tuple(week_labels),
        ))

    return CalendarLayout(
        config=cfg,
        title=TextPlacement(width / 2, 30, str(year), "year-text", anchor="middle", size=24.0,
                            color=ctx.palette.year_text),
        months=tuple(months),
        bbox=Box(0.0, 0.0, width, height),
        palette=ctx.palette,
    )
