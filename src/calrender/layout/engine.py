"""
calrender.layout.engine
-----------------------
Entry point of the layout stage.

``build_layout`` resolves annotations, samples the moon, picks the builder
for the configured kind/style and returns an immutable CalendarLayout.
"""
from __future__ import annotations

from dataclasses import replace
from datetime import date, timedelta
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

import structlog

from ..astro.moon import samples_for_dates
from ..calendars import hebrew
from ..calendars.gregorian import weekend_days
from ..core.registry import HolidayProvider, Registry
from ..core.types import (
    CalendarConfiguration,
    CalendarKind,
    CalendarLayout,
    HolidayDefinition,
    LayoutStyle,
)
from ..holidays.overlay import collect_set_definitions, resolve
from ..holidays.sets import normalize_set_id
from .cells import LayoutContext
from .grid import build_grid
from .hebrew_grid import build_hebrew
from .themes import get_theme, palette_for
from .traditional import build_traditional
from .weekday_grid import build_weekday_grid

logger = structlog.get_logger()

LayoutBuilder = Callable[[LayoutContext], CalendarLayout]

HEBREW_LAYOUT = "hebrew"


def default_layout_registry() -> Registry[LayoutBuilder]:
    reg: Registry[LayoutBuilder] = Registry(kind="layout")
    reg.register(LayoutStyle.GRID.value, build_grid)
    reg.register(LayoutStyle.WEEKDAY_GRID.value, build_weekday_grid)
    reg.register(LayoutStyle.TRADITIONAL.value, build_traditional)
    reg.register(HEBREW_LAYOUT, build_hebrew)
    return reg


LAYOUTS = default_layout_registry()


def layout_key(config: CalendarConfiguration) -> str:
    if config.kind == CalendarKind.HEBREW:
        return HEBREW_LAYOUT
    return config.layout.value


def _span(first: date, last: date) -> List[date]:
    return [first + timedelta(days=i) for i in range((last - first).days + 1)]


def _native_id(raw: str) -> str:
    sid = normalize_set_id(raw)
    return "HEBREW_RELIGIOUS" if sid == "JEWISH" else sid


def _set_ranks(config: CalendarConfiguration) -> Dict[str, int]:
    """Listing order of the configured sets; the implicit Hebrew default ranks first."""
    if not config.holiday_sets:
        return {"HEBREW_RELIGIOUS": 0}
    ranks: Dict[str, int] = {}
    for raw in config.holiday_sets:
        ranks.setdefault(_native_id(raw), len(ranks))
    return ranks


def _split_sets(config: CalendarConfiguration) -> Tuple[Tuple[str, ...], Tuple[str, ...]]:
    """(Hebrew-native sets, Gregorian-resolved sets) for a Hebrew-kind calendar."""
    native: List[str] = []
    other: List[str] = []
    for raw in config.holiday_sets:
        sid = _native_id(raw)
        (native if sid in hebrew.HEBREW_HOLIDAY_SETS else other).append(sid)
    if not config.holiday_sets:
        native.append("HEBREW_RELIGIOUS")
    return tuple(dict.fromkeys(native)), tuple(dict.fromkeys(other))


def build_layout(
    config: CalendarConfiguration,
    holiday_map: Optional[Mapping[date, str]] = None,
    *,
    provider: Optional[HolidayProvider] = None,
    set_definitions: Optional[Mapping[str, Sequence[HolidayDefinition]]] = None,
    registry: Optional[Registry[LayoutBuilder]] = None,
) -> CalendarLayout:
    """
    Lay out a whole calendar.

    Holiday-set definitions come from ``set_definitions`` when given,
    otherwise from ``provider``. Without either, only ``holiday_map`` and the
    custom dates annotate the calendar.
    """
    registry = registry or LAYOUTS
    key = layout_key(config)
    builder = registry.get(key)

    hebrew_sets: Tuple[str, ...] = ()
    resolve_config = config
    if config.kind == CalendarKind.HEBREW:
        hy = hebrew.hebrew_year_for(config.year)
        first = hebrew.hebrew_to_gregorian(hy, 1, 1)
        last_month = hebrew.months_in_year(hy)
        last = hebrew.hebrew_to_gregorian(hy, last_month, hebrew.days_in_month(last_month, hy))
        years: Tuple[int, ...] = tuple(range(first.year, last.year + 1))
        hebrew_sets, other_sets = _split_sets(config)
        resolve_config = replace(config, holiday_sets=other_sets)
        days = _span(first, last)
    else:
        years = (config.year,)
        days = _span(date(config.year, 1, 1), date(config.year, 12, 31))

    if set_definitions is None and provider is not None:
        set_definitions = collect_set_definitions(resolve_config, provider, years)
    annotations = resolve(resolve_config, holiday_map, set_definitions)

    moon = {}
    if config.shows_moon:
        moon = {s.date: s for s in samples_for_dates(
            days, location=config.location, observation_time=config.observation_time, tz=config.timezone,
        )}

    hebrew_labels: Dict[date, str] = {}
    if config.show_hebrew_dates and config.kind == CalendarKind.STANDARD:
        for d in days:
            h = hebrew.gregorian_to_hebrew(d)
            hebrew_labels[d] = f"{h.day} {hebrew.month_name(h.month, h.year)}"

    ctx = LayoutContext(
        config=config,
        theme=get_theme(config.theme),
        palette=palette_for(config),
        weekend=weekend_days(config.locale),
        annotations=annotations,
        moon=moon,
        hebrew_labels=hebrew_labels,
        hebrew_sets=hebrew_sets,
        set_rank=_set_ranks(config),
    )
    layout = builder(ctx)
    logger.debug(
        "layout_built",
        layout=key,
        year=config.year,
        months=len(layout.months),
        annotations=len(annotations),
        moons=sum(1 for c in layout.cells if c.moon is not None),
    )
    return layout
