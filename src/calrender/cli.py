from __future__ import annotations

import argparse
import importlib
import inspect
import json
import sys
from datetime import date, time
from typing import Any, Dict

from .core.errors import CalrenderError, ConfigurationError


def _parse_ymd(s: str) -> date:
    y, m, d = map(int, s.split("-"))
    return date(y, m, d)


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


# ============================================================
# Rendering commands
# ============================================================

def _render_parser(prog: str, description: str) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog=prog, description=description)
    p.add_argument("--config", help="JSON configuration file (editor camelCase or snake_case keys)")
    p.add_argument("--year", type=int, help="Gregorian year (overrides the config file)")
    p.add_argument("--kind", choices=["standard", "hebrew", "lunar"])
    p.add_argument("--layout", choices=["grid", "weekday-grid", "traditional"])
    p.add_argument("--theme")
    p.add_argument("--locale")
    p.add_argument("--set", dest="sets", action="append", default=[], help="holiday set id (repeatable)")
    p.add_argument("--moon", choices=["none", "illumination", "phases", "full-only"])
    p.add_argument("--display", help="event display mode: large|large-text|small|text|none")
    p.add_argument("--mono", action="store_true", help="use monochrome glyphs")
    p.add_argument("--compact", action="store_true")
    p.add_argument("--week-numbers", action="store_true")
    p.add_argument("-o", "--output", help="output file (default: stdout for svg)")
    return p


def _config_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    raw: Dict[str, Any] = {}
    if args.config:
        with open(args.config, "r", encoding="utf-8") as f:
            raw = json.load(f)
        if not isinstance(raw, dict):
            raise ConfigurationError(f"{args.config}: top level must be a JSON object")
    overrides = {
        "year": args.year,
        "calendarType": args.kind,
        "layoutStyle": args.layout,
        "theme": args.theme,
        "locale": args.locale,
        "moonDisplayMode": args.moon,
        "eventDisplayMode": args.display,
    }
    raw.update({k: v for k, v in overrides.items() if v is not None})
    if args.sets:
        raw["holidaySets"] = list(raw.get("holidaySets") or raw.get("holiday_sets") or ()) + args.sets
    if args.mono:
        raw["emojiFont"] = "noto-mono"
    if args.compact:
        raw["compactMode"] = True
    if args.week_numbers:
        raw["showWeekNumbers"] = True
    if "year" not in raw:
        raw["year"] = date.today().year
    return raw


def _fail(exc: CalrenderError) -> int:
    field = getattr(exc, "field", None)
    where = f" [{field}]" if field else ""
    print(f"error{where}: {exc}", file=sys.stderr)
    return 2 if isinstance(exc, ConfigurationError) else 1


def cmd_svg(argv: list[str]) -> int:
    import calrender

    p = _render_parser("calrender svg", "Render a calendar to SVG")
    args = p.parse_args(argv)
    try:
        vector = calrender.render_vector(_config_from_args(args))
    except CalrenderError as exc:
        return _fail(exc)

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(vector.markup)
        print(f"wrote {args.output} ({len(vector.markup)} chars, {vector.month_count} months)", file=sys.stderr)
    else:
        sys.stdout.write(vector.markup)
    return 0


def cmd_pdf(argv: list[str]) -> int:
    import calrender

    p = _render_parser("calrender pdf", "Render a calendar to a print-ready PDF")
    args = p.parse_args(argv)
    if not args.output:
        p.error("pdf needs -o/--output")
    try:
        vector = calrender.render_vector(_config_from_args(args))
        pdf = calrender.render_print_document(vector)
    except CalrenderError as exc:
        return _fail(exc)

    with open(args.output, "wb") as f:
        f.write(pdf)
    print(f"wrote {args.output} ({len(pdf)} bytes)", file=sys.stderr)
    return 0


# ============================================================
# Inspection commands
# ============================================================

def cmd_moon(argv: list[str]) -> int:
    from .astro.moon import is_full_moon_day, is_phase_day, moon_rotation_deg, moon_sample
    from .astro.solar import rise_set_times
    from .core.types import Location

    p = argparse.ArgumentParser(prog="calrender moon", description="Moon phase and illumination for a date")
    p.add_argument("date", help="YYYY-MM-DD")
    p.add_argument("--lat", type=float, help="Observer latitude in degrees")
    p.add_argument("--lon", type=float, help="Observer longitude in degrees (positive East)")
    p.add_argument("--tz", default="America/New_York", help="Time zone of the observation time")
    p.add_argument("--time", default="20:00", help="Local observation time HH:MM")
    args = p.parse_args(argv)

    d = _parse_ymd(args.date)
    loc = Location(args.lat, args.lon) if args.lat is not None and args.lon is not None else None
    s = moon_sample(d, location=loc, observation_time=time.fromisoformat(args.time), tz=args.tz)

    print(f"Date: {d.isoformat()}" + (f"  (lat {loc.latitude:g}, lon {loc.longitude:g}, {args.time} {args.tz})" if loc else "  (00:00 UTC)"))
    print(f"  Phase         = {s.phase:.4f} turns ({s.phase_name})")
    print(f"  Phase angle   = {s.phase_angle:.6f} rad")
    print(f"  Illumination  = {s.illumination:.4f}")
    print(f"  Waxing        = {s.waxing}")
    print(f"  Phase day     = {is_phase_day(d)}  (full moon day: {is_full_moon_day(d)})")
    if loc is not None:
        print(f"  Rotation      = {moon_rotation_deg(d, loc):.2f} deg")
        rs = rise_set_times(d, loc, args.tz)
        if rs.sunrise is None:
            print("  Sun           = no rise/set (polar day or night)")
        else:
            print(f"  Sunrise       = {rs.sunrise:%H:%M}   Sunset  = {rs.sunset:%H:%M}")
            print(f"  Moonrise      ~ {rs.moonrise:%H:%M}   Moonset ~ {rs.moonset:%H:%M}")
    return 0


def cmd_hebrew(argv: list[str]) -> int:
    from .calendars import hebrew

    p = argparse.ArgumentParser(prog="calrender hebrew", description="Hebrew year structure and holidays (approximate)")
    p.add_argument("year", type=int, help="Hebrew year, e.g. 5785")
    p.add_argument("--set", default="HEBREW_RELIGIOUS", help="HEBREW_RELIGIOUS | HEBREW_CULTURAL | HEBREW_ALL")
    args = p.parse_args(argv)

    y = args.year
    leap = "leap" if hebrew.is_leap_year(y) else "common"
    print(f"Hebrew year {y}: {hebrew.months_in_year(y)} months, {hebrew.year_length(y)} days ({leap})")
    print(f"  {hebrew.APPROXIMATION_NOTICE}")
    print()
    for m in range(1, hebrew.months_in_year(y) + 1):
        g0 = hebrew.hebrew_to_gregorian(y, m, 1)
        print(f"  {m:2d} {hebrew.month_name(m, y):<10s} {hebrew.days_in_month(m, y):2d} days  from ~{g0.isoformat()}")
    print()
    print(f"Holidays ({args.set}):")
    for (m, d), name in sorted(hebrew.hebrew_holidays(y, args.set).items()):
        g = hebrew.hebrew_to_gregorian(y, m, d)
        print(f"  {d:2d} {hebrew.month_name(m, y):<10s} ~{g.isoformat()}  {name}")
    return 0


def cmd_holidays(argv: list[str]) -> int:
    from .holidays.sets import BuiltinHolidayProvider

    provider = BuiltinHolidayProvider()
    p = argparse.ArgumentParser(prog="calrender holidays", description="List a built-in holiday set")
    p.add_argument("year", type=int)
    p.add_argument("set", help="set id: " + ", ".join(provider.available()))
    args = p.parse_args(argv)

    defs = provider.holidays(args.year, args.set)
    if not defs:
        print(f"No holidays for set {args.set!r}. Available: {', '.join(provider.available())}", file=sys.stderr)
        return 1
    for h in defs:
        print(f"{h.date.isoformat()}  {h.emoji or ' '}  {h.name}")
    return 0


def main(argv: list[str] | None = None) -> int:
    from .logging_config import configure_logging

    if argv is None:
        argv = sys.argv[1:]

    configure_logging()

    p = argparse.ArgumentParser(prog="calrender", description="Printable calendar renderer CLI.")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("svg", help="Render a calendar to SVG", add_help=False)
    sub.add_parser("pdf", help="Render a calendar to PDF", add_help=False)
    sub.add_parser("moon", help="Moon phase and illumination for a date", add_help=False)
    sub.add_parser("hebrew", help="Hebrew year months and holidays", add_help=False)
    sub.add_parser("holidays", help="List a built-in holiday set", add_help=False)

    # diagnostics
    sub.add_parser("pretty-month", help="Print Gregorian/Hebrew month grids (diagnostics)", add_help=False)

    args, rest = p.parse_known_args(argv)

    commands = {
        "svg": cmd_svg,
        "pdf": cmd_pdf,
        "moon": cmd_moon,
        "hebrew": cmd_hebrew,
        "holidays": cmd_holidays,
    }
    if args.cmd in commands:
        return commands[args.cmd](rest)

    if args.cmd == "pretty-month":
        return _run_module_main("calrender.diagnostics.pretty_month", rest)

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
