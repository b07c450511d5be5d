"""
calrender.config
----------------
Mapping -> CalendarConfiguration.

``parse_config`` accepts the camelCase keys used by the web editor
(``showMoonPhases``, ``weekendBgColor``, ``emojiFont`` ...) as well as the
snake_case field names, fills in documented defaults and validates the
result. Every rejection is a ConfigurationError naming the offending field,
raised before any computation starts.
"""
from __future__ import annotations

import re
from datetime import date, time
from typing import Any, Dict, Mapping, Optional, Tuple, Type, TypeVar
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import structlog

from .core.errors import ConfigurationError
from .core.types import (
    CalendarConfiguration,
    CalendarKind,
    ColorScheme,
    CustomDate,
    EventDisplayMode,
    GlyphVariant,
    LayoutStyle,
    Location,
    MoonStyle,
    Weekday,
)

logger = structlog.get_logger()

MIN_YEAR = 1000
MAX_YEAR = 9999

HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

E = TypeVar("E")

# ============================================================
# Aliases
# ============================================================

KIND_ALIASES: Dict[str, CalendarKind] = {
    "standard": CalendarKind.STANDARD,
    "gregorian": CalendarKind.STANDARD,
    "hebrew": CalendarKind.HEBREW,
    "lunar": CalendarKind.HEBREW,
}

DISPLAY_MODE_ALIASES: Dict[str, EventDisplayMode] = {
    "expanded": EventDisplayMode.LARGE,
    "compact": EventDisplayMode.SMALL,
    "small-text": EventDisplayMode.SMALL,
}

VARIANT_ALIASES: Dict[str, GlyphVariant] = {
    "noto-color": GlyphVariant.COLOR,
    "noto-mono": GlyphVariant.MONO,
    "color": GlyphVariant.COLOR,
    "mono": GlyphVariant.MONO,
}

# camelCase key -> CalendarConfiguration field
FLAG_KEYS: Dict[str, str] = {
    "showMoonPhases": "show_moon_phases",
    "showMoonIllumination": "show_moon_illumination",
    "showFullMoonOnly": "show_full_moon_only",
    "showWeekNumbers": "show_week_numbers",
    "compactMode": "compact_mode",
    "showDayNames": "show_day_names",
    "showDayNumbers": "show_day_numbers",
    "showGrid": "show_grid",
    "highlightWeekends": "highlight_weekends",
    "rotateMonthNames": "rotate_month_names",
    "showHebrewDates": "show_hebrew_dates",
}

# camelCase key -> ColorScheme field
COLOR_KEYS: Dict[str, str] = {
    "yearColor": "year_text",
    "monthColor": "month_text",
    "dayTextColor": "day_text",
    "dayNameColor": "day_name",
    "gridLineColor": "grid_line",
    "weekendBgColor": "weekend_background",
    "holidayColor": "holiday",
    "customDateColor": "custom_date",
    "moonLightColor": "moon_light",
    "moonDarkColor": "moon_dark",
    "moonBorderColor": "moon_border",
}

# moonDisplayMode -> (show_moon_illumination, show_moon_phases, show_full_moon_only)
MOON_DISPLAY_MODES: Dict[str, Tuple[bool, bool, bool]] = {
    "none": (False, False, False),
    "illumination": (True, False, False),
    "phases": (False, True, False),
    "full-only": (False, False, True),
}

WEEKDAY_NAMES: Dict[str, Weekday] = {w.name.lower(): w for w in Weekday}


# ============================================================
# Field helpers
# ============================================================

def _pick(raw: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for k in keys:
        if k in raw and raw[k] is not None:
            return raw[k]
    return default


def _bool(value: Any, field: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("true", "false", "1", "0", "yes", "no"):
        return value.lower() in ("true", "1", "yes")
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    raise ConfigurationError(f"Expected a boolean for {field}, got {value!r}", field=field)


def _enum(value: Any, cls: Type[E], field: str, aliases: Optional[Mapping[str, E]] = None) -> E:
    if isinstance(value, cls):
        return value
    key = str(value).strip().lower()
    if aliases and key in aliases:
        return aliases[key]
    try:
        return cls(key)  # type: ignore[call-arg]
    except ValueError:
        allowed = sorted(set([m.value for m in cls] + list(aliases or ())))  # type: ignore[attr-defined]
        raise ConfigurationError(f"Unsupported {field} {value!r}. Allowed: {allowed}", field=field) from None


def _weekday(value: Any) -> Weekday:
    if isinstance(value, Weekday):
        return value
    if isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= 6:
        return Weekday(value)
    w = WEEKDAY_NAMES.get(str(value).strip().lower())
    if w is None:
        raise ConfigurationError(f"Unknown first day of week {value!r}", field="first_day_of_week")
    return w


def _time(value: Any) -> time:
    if isinstance(value, time):
        return value
    try:
        return time.fromisoformat(str(value))
    except ValueError:
        raise ConfigurationError(f"Invalid observation time {value!r}", field="observation_time") from None


def _date(value: Any, field: str) -> date:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        raise ConfigurationError(f"Invalid date {value!r}", field=field) from None


def _location(raw: Mapping[str, Any]) -> Optional[Location]:
    loc = raw.get("location")
    if isinstance(loc, Location) or (loc is None and not ("latitude" in raw or "longitude" in raw)):
        return loc
    src = loc if isinstance(loc, Mapping) else raw
    try:
        lat = float(src.get("latitude", 0.0))
        lon = float(src.get("longitude", 0.0))
    except (TypeError, ValueError):
        raise ConfigurationError("Latitude and longitude must be numbers", field="location") from None
    # 0/0 is the editor's "no location"
    if lat == 0.0 and lon == 0.0:
        return None
    return Location(lat, lon)


def _colors(raw: Mapping[str, Any]) -> ColorScheme:
    values: Dict[str, Any] = {}
    nested = raw.get("colors")
    if isinstance(nested, ColorScheme):
        return nested
    if isinstance(nested, Mapping):
        for k, v in nested.items():
            values[COLOR_KEYS.get(k, k)] = v
    for camel, name in COLOR_KEYS.items():
        v = _pick(raw, camel)
        if v is not None:
            values[name] = v
    unknown = set(values) - set(ColorScheme.__dataclass_fields__)
    if unknown:
        raise ConfigurationError(f"Unknown color field(s): {sorted(unknown)}", field="colors")
    return ColorScheme(**{k: v for k, v in values.items() if v is not None})


def _moon_style(raw: Mapping[str, Any]) -> MoonStyle:
    if isinstance(raw.get("moon"), MoonStyle):
        return raw["moon"]
    base = MoonStyle()
    try:
        return MoonStyle(
            size=int(_pick(raw, "moonSize", "moon_size", default=base.size)),
            offset_x=int(_pick(raw, "moonOffsetX", "moon_offset_x", default=base.offset_x)),
            offset_y=int(_pick(raw, "moonOffsetY", "moon_offset_y", default=base.offset_y)),
            border_width=float(_pick(raw, "moonBorderWidth", "moon_border_width", default=base.border_width)),
        )
    except (TypeError, ValueError):
        raise ConfigurationError("Moon size, offsets and border width must be numbers", field="moon") from None


def _custom_dates(raw: Mapping[str, Any]) -> Tuple[Tuple[date, CustomDate], ...]:
    entries = _pick(raw, "customDates", "custom_dates", default=())
    if isinstance(entries, Mapping):
        entries = entries.items()
    out = []
    for key, value in entries:
        d = _date(key, "custom_dates")
        if isinstance(value, CustomDate):
            cd = value
        elif isinstance(value, str):
            cd = CustomDate(text=value)
        elif isinstance(value, Mapping):
            text = _pick(value, "text", "title", "name", default="")
            emoji = _pick(value, "emoji")
            if not isinstance(text, str) or not (emoji is None or isinstance(emoji, str)):
                raise ConfigurationError(f"Custom date {d} needs string text and emoji", field="custom_dates")
            cd = CustomDate(text=text, emoji=emoji, color=_pick(value, "color"))
        else:
            raise ConfigurationError(f"Invalid custom date entry for {d}: {value!r}", field="custom_dates")
        out.append((d, cd))
    return tuple(out)


def _holiday_sets(raw: Mapping[str, Any]) -> Tuple[str, ...]:
    sets = _pick(raw, "holidaySets", "holiday_sets", default=())
    if isinstance(sets, str):
        sets = [s for s in sets.split(",") if s.strip()]
    return tuple(dict.fromkeys(str(s).strip() for s in sets))


# ============================================================
# Public
# ============================================================

def parse_config(raw: Mapping[str, Any]) -> CalendarConfiguration:
    """Build and validate a configuration from editor JSON or snake_case keys."""
    if isinstance(raw, CalendarConfiguration):
        validate_configuration(raw)
        return raw
    if not isinstance(raw, Mapping):
        raise ConfigurationError(f"Configuration must be a mapping, got {type(raw).__name__}")

    year = _pick(raw, "year")
    if year is None:
        raise ConfigurationError("Missing year", field="year")
    try:
        year = int(year)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Invalid year {year!r}", field="year") from None

    flags: Dict[str, bool] = {}
    moon_mode = _pick(raw, "moonDisplayMode", "moon_display_mode")
    if moon_mode is not None:
        mode = str(moon_mode).lower()
        if mode not in MOON_DISPLAY_MODES:
            raise ConfigurationError(f"Unknown moon display mode {moon_mode!r}", field="moon_display_mode")
        illum, phases, full = MOON_DISPLAY_MODES[mode]
        flags.update(show_moon_illumination=illum, show_moon_phases=phases, show_full_moon_only=full)
    for camel, name in FLAG_KEYS.items():
        v = _pick(raw, camel, name)
        if v is not None:
            flags[name] = _bool(v, name)

    kw: Dict[str, Any] = {}
    kind = _pick(raw, "calendarType", "kind")
    if kind is not None:
        kw["kind"] = _enum(kind, CalendarKind, "kind", KIND_ALIASES)
    layout = _pick(raw, "layoutStyle", "layout")
    if layout is not None:
        kw["layout"] = _enum(layout, LayoutStyle, "layout")
    mode = _pick(raw, "eventDisplayMode", "event_display_mode")
    if mode is not None:
        kw["event_display_mode"] = _enum(mode, EventDisplayMode, "event_display_mode", DISPLAY_MODE_ALIASES)
    variant = _pick(raw, "emojiFont", "glyph_variant")
    if variant is not None:
        v = str(variant).lower()
        # "mono-{color}" renders with the monochrome set
        kw["glyph_variant"] = GlyphVariant.MONO if v.startswith("mono-") else _enum(
            variant, GlyphVariant, "glyph_variant", VARIANT_ALIASES)
    first = _pick(raw, "firstDayOfWeek", "first_day_of_week")
    if first is not None:
        kw["first_day_of_week"] = _weekday(first)
    obs = _pick(raw, "observationTime", "observation_time")
    if obs is not None:
        kw["observation_time"] = _time(obs)
    for key, name in (("theme", "theme"), ("locale", "locale")):
        v = _pick(raw, key)
        if v is not None:
            kw[name] = str(v)
    tz = _pick(raw, "timeZone", "timezone")
    if tz is not None:
        kw["timezone"] = str(tz)

    config = CalendarConfiguration(
        year=year,
        location=_location(raw),
        colors=_colors(raw),
        moon=_moon_style(raw),
        holiday_sets=_holiday_sets(raw),
        custom_dates=_custom_dates(raw),
        **flags,
        **kw,
    )
    validate_configuration(config)
    logger.debug("config_parsed", year=config.year, kind=config.kind.value, layout=config.layout.value)
    return config


def validate_configuration(config: CalendarConfiguration) -> None:
    """Raise ConfigurationError for the first invalid field."""
    if not MIN_YEAR <= config.year <= MAX_YEAR:
        raise ConfigurationError(
            f"Year must be a 4-digit Gregorian year in [{MIN_YEAR}, {MAX_YEAR}], got {config.year}", field="year")
    if not isinstance(config.kind, CalendarKind):
        raise ConfigurationError(f"Unsupported calendar kind {config.kind!r}", field="kind")
    if not isinstance(config.layout, LayoutStyle):
        raise ConfigurationError(f"Unsupported layout {config.layout!r}", field="layout")
    if not isinstance(config.event_display_mode, EventDisplayMode):
        raise ConfigurationError(f"Unsupported display mode {config.event_display_mode!r}", field="event_display_mode")

    try:
        ZoneInfo(config.timezone)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        raise ConfigurationError(f"Unknown timezone {config.timezone!r}", field="timezone") from None

    if config.location is not None:
        if not -90.0 <= config.location.latitude <= 90.0:
            raise ConfigurationError(f"Latitude out of range: {config.location.latitude}", field="location")
        if not -180.0 <= config.location.longitude <= 180.0:
            raise ConfigurationError(f"Longitude out of range: {config.location.longitude}", field="location")

    for name in ColorScheme.__dataclass_fields__:
        value = getattr(config.colors, name)
        if value is not None and not (isinstance(value, str) and HEX_COLOR.match(value)):
            raise ConfigurationError(f"Invalid color for {name}: {value!r}", field=f"colors.{name}")
    for d, cd in config.custom_dates:
        if cd.color is not None and not (isinstance(cd.color, str) and HEX_COLOR.match(cd.color)):
            raise ConfigurationError(f"Invalid color for custom date {d}: {cd.color!r}", field="custom_dates")

    if config.moon.size <= 0 or config.moon.border_width < 0:
        raise ConfigurationError("Moon size must be positive and border width non-negative", field="moon")
