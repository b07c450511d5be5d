"""
calrender.holidays.overlay
--------------------------
Merge custom dates, the caller's holiday map and holiday sets into at most one
Annotation per calendar day.

Precedence per day:
    custom date  >  holiday_map entry  >  holiday sets

Among holiday sets the one listed first in ``config.holiday_sets`` wins. The
event display mode only affects glyph size downstream, never this order.
"""
from __future__ import annotations

from datetime import date
from typing import Dict, Mapping, Optional, Sequence

import structlog

from ..core.registry import HolidayProvider
from ..core.types import (
    Annotation,
    AnnotationSource,
    CalendarConfiguration,
    HolidayDefinition,
)
from .sets import normalize_set_id

logger = structlog.get_logger()


def collect_set_definitions(
    config: CalendarConfiguration,
    provider: HolidayProvider,
    years: Optional[Sequence[int]] = None,
) -> Dict[str, Sequence[HolidayDefinition]]:
    """Ask the provider for every configured set, keeping configuration order."""
    out: Dict[str, Sequence[HolidayDefinition]] = {}
    for raw in config.holiday_sets:
        sid = normalize_set_id(raw)
        if sid in out:
            continue
        defs = []
        for y in years or (config.year,):
            defs.extend(provider.holidays(y, sid))
        out[sid] = tuple(defs)
    return out


def _first_set_matches(
    config: CalendarConfiguration,
    set_definitions: Mapping[str, Sequence[HolidayDefinition]],
) -> Dict[date, HolidayDefinition]:
    first: Dict[date, HolidayDefinition] = {}
    order = [normalize_set_id(s) for s in config.holiday_sets]
    # sets passed but not configured still count, after the configured ones
    order += [s for s in set_definitions if s not in order]
    for sid in order:
        for h in set_definitions.get(sid, ()):
            first.setdefault(h.date, h)
    return first


def resolve(
    config: CalendarConfiguration,
    holiday_map: Optional[Mapping[date, str]] = None,
    set_definitions: Optional[Mapping[str, Sequence[HolidayDefinition]]] = None,
) -> Dict[date, Annotation]:
    holiday_map = holiday_map or {}
    set_match = _first_set_matches(config, set_definitions or {})
    custom = config.custom_date_map()
    colors = config.colors

    out: Dict[date, Annotation] = {}
    for d, h in set_match.items():
        out[d] = Annotation(
            date=d,
            text=h.name,
            source=AnnotationSource.HOLIDAY_SET,
            emoji=h.emoji,
            color=colors.holiday,
            set_id=h.set_id,
        )

    for d, name in holiday_map.items():
        h = set_match.get(d)
        out[d] = Annotation(
            date=d,
            text=name,
            source=AnnotationSource.HOLIDAY,
            emoji=h.emoji if h else None,
            color=colors.holiday,
            set_id=h.set_id if h else None,
        )

    for d, c in custom.items():
        h = set_match.get(d)
        out[d] = Annotation(
            date=d,
            text=c.text,
            source=AnnotationSource.CUSTOM,
            emoji=c.emoji or (h.emoji if h else None),
            color=c.color or colors.custom_date,
            set_id=None,
        )

    logger.debug(
        "annotations_resolved",
        year=config.year,
        custom=len(custom),
        holidays=len(holiday_map),
        set_days=len(set_match),
        total=len(out),
    )
    return out
