"""
calrender.holidays.sets
-----------------------
Built-in holiday sets.

A set builder maps a Gregorian year to its HolidayDefinitions. Builders live
in a Registry keyed by canonical set id; ``normalize_set_id`` maps the ids
used by front ends ("us", "mx", "fun", ...) onto those keys.
"""
from __future__ import annotations

from datetime import date, timedelta
from typing import Callable, Dict, List, Sequence, Tuple

import structlog

from ..astro.moon import mean_phase_dates
from ..calendars import hebrew, islamic
from ..calendars.gregorian import easter_sunday, last_weekday, nth_weekday, weekday_on_or_before
from ..core.registry import Registry
from ..core.types import HolidayDefinition, Weekday

logger = structlog.get_logger()

SetBuilder = Callable[[int], List[HolidayDefinition]]
_Entry = Tuple[date, str, str]  # (date, name, emoji)

_ALIASES = {
    "us": "US",
    "jewish": "JEWISH",
    "hebrew": "JEWISH",
    "christian": "CHRISTIAN",
    "muslim": "ISLAMIC",
    "islamic": "ISLAMIC",
    "buddhist": "BUDDHIST",
    "hindu": "HINDU",
    "in": "HINDU",
    "canadian": "CANADIAN",
    "ca": "CANADIAN",
    "uk": "UK",
    "european": "EUROPEAN",
    "major_world": "MAJOR_WORLD",
    "mexican": "MEXICAN",
    "mx": "MEXICAN",
    "pagan": "PAGAN",
    "wiccan": "PAGAN",
    "chinese": "CHINESE",
    "cn": "CHINESE",
    "lunar": "CHINESE",
    "secular": "SECULAR",
    "fun": "SECULAR",
}


def normalize_set_id(raw: str) -> str:
    """Canonical set id for a front-end id; unknown ids are upper-cased."""
    key = raw.strip()
    return _ALIASES.get(key.lower(), key.upper())


def _defs(set_id: str, entries: Sequence[_Entry]) -> List[HolidayDefinition]:
    return [HolidayDefinition(date=d, name=name, set_id=set_id, emoji=emoji or None) for d, name, emoji in entries]


# ============================================================
# Set builders
# ============================================================

def _us(year: int) -> List[HolidayDefinition]:
    return _defs("US", [
        (date(year, 1, 1), "New Year's Day", "🎉"),
        (nth_weekday(year, 1, Weekday.MONDAY, 3), "Martin Luther King Jr. Day", "🕊️"),
        (nth_weekday(year, 2, Weekday.MONDAY, 3), "Presidents' Day", "🏛️"),
        (last_weekday(year, 5, Weekday.MONDAY), "Memorial Day", "🎖️"),
        (date(year, 6, 19), "Juneteenth", ""),
        (date(year, 7, 4), "Independence Day", "🇺🇸"),
        (nth_weekday(year, 9, Weekday.MONDAY, 1), "Labor Day", "👷"),
        (nth_weekday(year, 10, Weekday.MONDAY, 2), "Columbus Day", ""),
        (date(year, 10, 31), "Halloween", "🎃"),
        (date(year, 11, 11), "Veterans Day", "🎖️"),
        (nth_weekday(year, 11, Weekday.THURSDAY, 4), "Thanksgiving", "🦃"),
        (date(year, 12, 25), "Christmas Day", "🎄"),
    ])


def _christian(year: int) -> List[HolidayDefinition]:
    easter = easter_sunday(year)
    return _defs("CHRISTIAN", [
        (date(year, 1, 6), "Epiphany", "⭐"),
        (easter - timedelta(days=46), "Ash Wednesday", "✝️"),
        (easter - timedelta(days=7), "Palm Sunday", "🌿"),
        (easter - timedelta(days=2), "Good Friday", "🐟"),
        (easter, "Easter Sunday", "🐑"),
        (easter + timedelta(days=39), "Ascension Day", "☁️"),
        (easter + timedelta(days=49), "Pentecost", "🕊️"),
        (date(year, 11, 1), "All Saints' Day", "👼"),
        (date(year, 12, 24), "Christmas Eve", "🕯️"),
        (date(year, 12, 25), "Christmas Day", "🎄"),
    ])


def _canadian(year: int) -> List[HolidayDefinition]:
    return _defs("CANADIAN", [
        (date(year, 1, 1), "New Year's Day", "🎉"),
        (nth_weekday(year, 2, Weekday.MONDAY, 3), "Family Day", "👨‍👩‍👧‍👦"),
        (easter_sunday(year) - timedelta(days=2), "Good Friday", "🐟"),
        (weekday_on_or_before(date(year, 5, 24), Weekday.MONDAY), "Victoria Day", "👑"),
        (date(year, 7, 1), "Canada Day", "🍁"),
        (nth_weekday(year, 9, Weekday.MONDAY, 1), "Labour Day", "👷"),
        (nth_weekday(year, 10, Weekday.MONDAY, 2), "Thanksgiving", "🦃"),
        (date(year, 11, 11), "Remembrance Day", "🎖️"),
        (date(year, 12, 25), "Christmas Day", "🎄"),
        (date(year, 12, 26), "Boxing Day", "🎁"),
    ])


def _uk(year: int) -> List[HolidayDefinition]:
    easter = easter_sunday(year)
    return _defs("UK", [
        (date(year, 1, 1), "New Year's Day", "🎉"),
        (easter - timedelta(days=2), "Good Friday", "🐟"),
        (easter + timedelta(days=1), "Easter Monday", "🐰"),
        (nth_weekday(year, 5, Weekday.MONDAY, 1), "Early May Bank Holiday", "🌸"),
        (last_weekday(year, 5, Weekday.MONDAY), "Spring Bank Holiday", "🌷"),
        (last_weekday(year, 8, Weekday.MONDAY), "Summer Bank Holiday", "☀️"),
        (date(year, 12, 25), "Christmas Day", "🎄"),
        (date(year, 12, 26), "Boxing Day", "🎁"),
    ])


def _major_world(year: int) -> List[HolidayDefinition]:
    return _defs("MAJOR_WORLD", [
        (date(year, 1, 1), "New Year's Day", "🎉"),
        (date(year, 2, 14), "Valentine's Day", "❤️"),
        (date(year, 3, 17), "St. Patrick's Day", "☘️"),
        (easter_sunday(year), "Easter", "🐰"),
        (date(year, 4, 22), "Earth Day", "🌍"),
        (date(year, 5, 1), "International Workers' Day", "👷"),
        (date(year, 10, 31), "Halloween", "🎃"),
        (date(year, 12, 25), "Christmas", "🎄"),
        (date(year, 12, 31), "New Year's Eve", "🎉"),
    ])


def _mexican(year: int) -> List[HolidayDefinition]:
    return _defs("MEXICAN", [
        (date(year, 1, 1), "Año Nuevo", "🎉"),
        (date(year, 1, 6), "Día de Reyes", "👑"),
        (nth_weekday(year, 2, Weekday.MONDAY, 1), "Día de la Constitución", "📜"),
        (nth_weekday(year, 3, Weekday.MONDAY, 3), "Natalicio de Benito Juárez", "🏛️"),
        (date(year, 5, 5), "Cinco de Mayo", "💃"),
        (date(year, 9, 16), "Día de la Independencia", "🇲🇽"),
        (date(year, 11, 2), "Día de los Muertos", "💀"),
        (nth_weekday(year, 11, Weekday.MONDAY, 3), "Día de la Revolución", "🎖️"),
        (date(year, 12, 12), "Día de la Virgen de Guadalupe", "🙏"),
        (date(year, 12, 25), "Navidad", "🎄"),
    ])


def _secular(year: int) -> List[HolidayDefinition]:
    return _defs("SECULAR", [
        (date(year, 2, 2), "Groundhog Day", "🦫"),
        (date(year, 2, 14), "Valentine's Day", "❤️"),
        (date(year, 3, 14), "Pi Day", "🥧"),
        (date(year, 4, 1), "April Fools' Day", "🃏"),
        (date(year, 4, 22), "Earth Day", "🌍"),
        (date(year, 5, 4), "Star Wars Day", "⭐"),
        (nth_weekday(year, 5, Weekday.SUNDAY, 2), "Mother's Day", "💐"),
        (nth_weekday(year, 6, Weekday.SUNDAY, 3), "Father's Day", "👔"),
        (date(year, 7, 29), "International Tiger Day", "🐯"),
        (date(year, 9, 19), "Talk Like a Pirate Day", "🏴‍☠️"),
        (date(year, 10, 31), "Halloween", "🎃"),
        (date(year, 12, 31), "New Year's Eve", "🎉"),
    ])


def _pagan(year: int) -> List[HolidayDefinition]:
    # fixed-date approximations of the solstices and equinoxes
    return _defs("PAGAN", [
        (date(year, 2, 1), "Imbolc", "🕯️"),
        (date(year, 3, 20), "Ostara", "🌱"),
        (date(year, 5, 1), "Beltane", "🔥"),
        (date(year, 6, 21), "Litha", "☀️"),
        (date(year, 8, 1), "Lughnasadh", "🌾"),
        (date(year, 9, 22), "Mabon", "🍂"),
        (date(year, 10, 31), "Samhain", "🎃"),
        (date(year, 12, 21), "Yule", "🌲"),
    ])


def _european(year: int) -> List[HolidayDefinition]:
    easter = easter_sunday(year)
    return _defs("EUROPEAN", [
        (date(year, 1, 1), "New Year's Day", "🎉"),
        (easter + timedelta(days=1), "Easter Monday", "🐰"),
        (date(year, 5, 1), "Labour Day", "👷"),
        (date(year, 5, 9), "Europe Day", "🇪🇺"),
        (easter + timedelta(days=39), "Ascension Day", "☁️"),
        (easter + timedelta(days=50), "Whit Monday", "🕊️"),
        (date(year, 11, 1), "All Saints' Day", "👼"),
        (date(year, 12, 25), "Christmas Day", "🎄"),
        (date(year, 12, 26), "St. Stephen's Day", "🎁"),
    ])


def _islamic(year: int) -> List[HolidayDefinition]:
    return _defs("ISLAMIC", islamic.holidays_in_gregorian_year(year))


# Lunisolar festivals below sit on the mean new or full moon, reckoned on the
# civil date of the festival's home time zone. Expect errors of a day.

_NEW, _FULL = 0.0, 0.5


def _moon_in(start: date, end: date, phase: float, utc_offset_hours: float, nth: int = 0) -> date:
    return mean_phase_dates(start, end, phase, utc_offset_hours=utc_offset_hours)[nth]


def _chinese(year: int) -> List[HolidayDefinition]:
    # months 5 and 8 start on the last new moon on or before the solstice and equinox
    cst = 8.0
    new_year = _moon_in(date(year - 1, 12, 22), date(year, 2, 28), _NEW, cst, nth=1)
    return _defs("CHINESE", [
        (new_year, "Lunar New Year", "🧧"),
        (new_year + timedelta(days=14), "Lantern Festival", "🏮"),
        (date(year, 4, 4), "Qingming Festival", "🪦"),
        (_moon_in(date(year, 5, 23), date(year, 6, 21), _NEW, cst, nth=-1) + timedelta(days=4), "Dragon Boat Festival", "🐉"),
        (_moon_in(date(year, 8, 25), date(year, 9, 23), _NEW, cst, nth=-1) + timedelta(days=14), "Mid-Autumn Festival", "🥮"),
    ])


def _hindu(year: int) -> List[HolidayDefinition]:
    ist = 5.5
    return _defs("HINDU", [
        (date(year, 1, 14), "Makar Sankranti", "🪁"),
        (_moon_in(date(year, 2, 25), date(year, 3, 28), _FULL, ist), "Holi", "🎨"),
        (_moon_in(date(year, 7, 25), date(year, 8, 23), _FULL, ist), "Raksha Bandhan", ""),
        (_moon_in(date(year, 10, 15), date(year, 11, 15), _NEW, ist), "Diwali", "🪔"),
    ])


def _buddhist(year: int) -> List[HolidayDefinition]:
    return _defs("BUDDHIST", [
        (date(year, 2, 15), "Parinirvana Day", ""),
        (_moon_in(date(year, 5, 1), date(year, 5, 31), _FULL, 0.0), "Vesak", "☸️"),
        (date(year, 12, 8), "Bodhi Day", "🌳"),
    ])


def _jewish_builder(set_id: str, hebrew_set: str) -> SetBuilder:
    def build(year: int) -> List[HolidayDefinition]:
        return [
            HolidayDefinition(date=d, name=name, set_id=set_id, emoji=hebrew.holiday_emoji(name))
            for d, name in hebrew.holidays_in_gregorian_year(year, hebrew_set)
        ]
    return build


def builtin_set_registry() -> Registry[SetBuilder]:
    reg: Registry[SetBuilder] = Registry(kind="holiday set")
    reg.register("US", _us)
    reg.register("CHRISTIAN", _christian)
    reg.register("CANADIAN", _canadian)
    reg.register("UK", _uk)
    reg.register("MAJOR_WORLD", _major_world)
    reg.register("MEXICAN", _mexican)
    reg.register("SECULAR", _secular)
    reg.register("PAGAN", _pagan)
    reg.register("EUROPEAN", _european)
    reg.register("ISLAMIC", _islamic)
    reg.register("CHINESE", _chinese)
    reg.register("HINDU", _hindu)
    reg.register("BUDDHIST", _buddhist)
    reg.register("JEWISH", _jewish_builder("JEWISH", "HEBREW_RELIGIOUS"))
    for name in hebrew.HEBREW_HOLIDAY_SETS:
        reg.register(name, _jewish_builder(name, name))
    return reg


# ============================================================
# Provider
# ============================================================

class BuiltinHolidayProvider:
    """HolidayProvider backed by the built-in set builders."""

    def __init__(self, registry: Registry[SetBuilder] | None = None) -> None:
        self._registry = registry if registry is not None else builtin_set_registry()

    def available(self) -> List[str]:
        return self._registry.list()

    def holidays(self, year: int, set_id: str) -> List[HolidayDefinition]:
        sid = normalize_set_id(set_id)
        builder = self._registry.find(sid)
        if builder is None:
            logger.warning("holiday_set_unknown", set_id=set_id, normalized=sid, year=year)
            return []
        return sorted(builder(year), key=lambda h: h.date)


def holiday_names(year: int, set_id: str, provider: BuiltinHolidayProvider | None = None) -> Dict[date, str]:
    """date -> name map, the shape an external holiday collaborator supplies."""
    out: Dict[date, str] = {}
    for h in (provider or BuiltinHolidayProvider()).holidays(year, set_id):
        out.setdefault(h.date, h.name)
    return out
