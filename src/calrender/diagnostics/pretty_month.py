#!/usr/bin/env python3
from __future__ import annotations

import argparse
from datetime import date, timedelta
from typing import List, Tuple

from calrender.astro.moon import is_full_moon_day, is_phase_day, moon_sample
from calrender.calendars import gregorian, hebrew
from calrender.core.types import Weekday

Cell = Tuple[str, str]


def dow_header(first_day: Weekday = Weekday.SUNDAY) -> str:
    return "     ".join(gregorian.weekday_name(w, length=2) for w in gregorian.weekday_order(first_day))


def cell(top: str, bot: str, w: int = 6) -> Cell:
    return (top[:w].ljust(w), bot[:w].ljust(w))


def print_grid(title: str, weeks: List[List[Cell]], first_day: Weekday = Weekday.SUNDAY) -> None:
    print(title)
    header = dow_header(first_day)
    print(header)
    print("-" * len(header))
    for wk in weeks:
        print(" ".join(c[0] for c in wk))
        print(" ".join(c[1] for c in wk))
    print()


def _weeks(days: List[Tuple[date, str, str]], first_day: Weekday) -> List[List[Cell]]:
    weeks: List[List[Cell]] = []
    wk: List[Cell] = [cell("", "") for _ in range(gregorian.column_of(days[0][0], first_day))]
    for _, top, bot in days:
        wk.append(cell(top, bot))
        if len(wk) == 7:
            weeks.append(wk)
            wk = []
    if wk:
        while len(wk) < 7:
            wk.append(cell("", ""))
        weeks.append(wk)
    return weeks


def _moon_mark(d: date) -> str:
    if is_full_moon_day(d):
        return "O"
    if is_phase_day(d):
        return "*"
    return ""


def gregorian_month_calendar(gy: int, gm: int, first_day: Weekday = Weekday.SUNDAY) -> None:
    """Day number with moon mark on top; approximate Hebrew month/day below."""
    first = date(gy, gm, 1)
    days = []
    for i in range(gregorian.days_in_month(gy, gm)):
        d = first + timedelta(days=i)
        h = hebrew.gregorian_to_hebrew(d)
        days.append((d, f"{d.day:2d}{_moon_mark(d)}", f"{h.month:02d}-{h.day:02d}"))
    print_grid(f"Gregorian month  {gy}-{gm:02d}   (O full, * principal phase)", _weeks(days, first_day), first_day)


def hebrew_month_calendar(hy: int, hm: int, first_day: Weekday = Weekday.SUNDAY) -> None:
    """Hebrew day on top; mapped Gregorian month-day and illumination % below."""
    days = []
    for hd in range(1, hebrew.days_in_month(hm, hy) + 1):
        g = hebrew.hebrew_to_gregorian(hy, hm, hd)
        pct = round(moon_sample(g).illumination * 100)
        days.append((g, f"{hd:2d}", f"{g.month:02d}-{g.day:02d}" + ("O" if pct >= 95 else "")))
    title = f"Hebrew month  {hebrew.month_name(hm, hy)} {hy}   ({days[0][0]} .. {days[-1][0]})"
    print_grid(title, _weeks(days, first_day), first_day)


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        description="Print a Gregorian-month and/or Hebrew-month grid with paired labels and moon marks."
    )
    p.add_argument("year", nargs="?", type=int, help="Gregorian year (same as --greg YEAR MONTH)")
    p.add_argument("month", nargs="?", type=int)
    p.add_argument("--greg", nargs=2, type=int, metavar=("GY", "GM"),
                   help="Gregorian month to print: GY GM (e.g. 2025 3)")
    p.add_argument("--hebrew", nargs=2, type=int, metavar=("HY", "HM"),
                   help="Hebrew month to print: HY HM (e.g. 5785 6)")
    p.add_argument("--monday", action="store_true", help="Start weeks on Monday")
    args = p.parse_args(argv)

    first_day = Weekday.MONDAY if args.monday else Weekday.SUNDAY
    if args.year is not None and not args.greg:
        args.greg = (args.year, args.month or 1)

    if not args.greg and not args.hebrew:
        today = date.today()
        gregorian_month_calendar(today.year, today.month, first_day)
        return 0

    if args.greg:
        gy, gm = args.greg
        gregorian_month_calendar(gy, gm, first_day)

    if args.hebrew:
        hy, hm = args.hebrew
        hebrew_month_calendar(hy, hm, first_day)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
