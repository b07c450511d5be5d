"""
calrender.calendars.hebrew
--------------------------
Approximate Hebrew calendar arithmetic.

APPROXIMATION NOTICE
    This converter is an engineering approximation, not a canonical Hebrew
    calendar. Leap years follow the 19-year Metonic rule exactly, but the
    lengths of Cheshvan and Kislev come from a ``year % 10`` heuristic, and
    Gregorian <-> Hebrew conversion uses a fixed year offset (3760/3761) with
    a linear month mapping (Tishrei ~ September). Converted dates carry
    errors of days to weeks, the mapping is lossy (days are clamped to month
    lengths) and it is not an exact inverse. Do not use it for religious
    observance.
"""
from __future__ import annotations

from datetime import date, timedelta
from functools import lru_cache
from typing import Dict, List, Optional, Tuple

from ..core.types import HebrewDate, HebrewDateMapping
from .gregorian import days_in_month as gregorian_days_in_month

APPROXIMATION_NOTICE = (
    "Hebrew dates are approximate: fixed 3760/3761 year offset, linear month "
    "mapping and heuristic Cheshvan/Kislev lengths; expect day-level errors."
)

MONTH_NAMES = (
    "Tishrei", "Cheshvan", "Kislev", "Tevet", "Shevat", "Adar",
    "Nisan", "Iyar", "Sivan", "Tammuz", "Av", "Elul",
)
ADAR_I = "Adar I"
ADAR_II = "Adar II"

_REGULAR_MONTH_DAYS = (30, 29, 30, 29, 30, 29, 30, 29, 30, 29, 30, 29)

HolidayKey = Tuple[int, int]  # (month, day)


# ============================================================
# Year structure
# ============================================================

def is_leap_year(year: int) -> bool:
    """Metonic rule: leap at cycle positions 3, 6, 8, 11, 14, 17, 19."""
    return ((7 * year + 1) % 19) < 7


def months_in_year(year: int) -> int:
    return 13 if is_leap_year(year) else 12


def _check_month(month: int, year: int) -> None:
    if not 1 <= month <= months_in_year(year):
        raise ValueError(f"Hebrew year {year} has no month {month}")


def _long_cheshvan(year: int) -> bool:
    return year % 10 in (5, 8)


def _long_kislev(year: int) -> bool:
    return year % 10 not in (3, 6)


def days_in_month(month: int, year: int) -> int:
    _check_month(month, year)
    leap = is_leap_year(year)
    if leap and month == 6:
        return 30
    if leap and month == 7:
        return 29
    if month == 2:
        return 30 if _long_cheshvan(year) else 29
    if month == 3:
        return 30 if _long_kislev(year) else 29
    slot = month - 1 if leap and month > 6 else month
    return _REGULAR_MONTH_DAYS[slot - 1]


def month_name(month: int, year: int) -> str:
    _check_month(month, year)
    if is_leap_year(year):
        if month == 6:
            return ADAR_I
        if month == 7:
            return ADAR_II
        if month > 7:
            return MONTH_NAMES[month - 2]
    return MONTH_NAMES[month - 1]


def year_month_names(year: int) -> List[str]:
    return [month_name(m, year) for m in range(1, months_in_year(year) + 1)]


def year_length(year: int) -> int:
    return sum(days_in_month(m, year) for m in range(1, months_in_year(year) + 1))


def hebrew_year_for(gregorian_year: int) -> int:
    """Hebrew year in progress on January 1 of ``gregorian_year``."""
    return gregorian_year + 3760


# ============================================================
# Approximate conversion
# ============================================================

def gregorian_to_hebrew(d: date) -> HebrewDate:
    """September starts the year (+3761); other months use +3760. Lossy."""
    year = d.year + 3761 if d.month >= 9 else d.year + 3760
    month = (d.month - 9) % 12 + 1
    day = min(d.day, days_in_month(month, year))
    return HebrewDate(year=year, month=month, day=day)


def hebrew_to_gregorian(year: int, month: int, day: int) -> date:
    """
    Linear inverse of ``gregorian_to_hebrew``: Tishrei..Tevet fall in
    year - 3761, later months in year - 3760. In leap years Adar II lands in
    March and Elul in September. The day is clamped to the Gregorian month.
    """
    _check_month(month, year)
    g_month = (month + 7) % 12 + 1
    g_year = year - 3761 if month <= 4 else year - 3760
    return date(g_year, g_month, min(max(day, 1), gregorian_days_in_month(g_year, g_month)))


def format_hebrew_date(h: HebrewDate) -> str:
    return f"{h.day} {month_name(h.month, h.year)} {h.year}"


# ============================================================
# Holidays
# ============================================================

_RELIGIOUS = "HEBREW_RELIGIOUS"
_CULTURAL = "HEBREW_CULTURAL"
_ALL = "HEBREW_ALL"
HEBREW_HOLIDAY_SETS = (_RELIGIOUS, _CULTURAL, _ALL)


def _religious(year: int) -> Dict[HolidayKey, str]:
    leap = is_leap_year(year)
    adar = 7 if leap else 6
    nisan, iyar, sivan, av = (8, 9, 10, 12) if leap else (7, 8, 9, 11)

    h: Dict[HolidayKey, str] = {
        (1, 1): "Rosh Hashanah (Day 1)",
        (1, 2): "Rosh Hashanah (Day 2)",
        (1, 10): "Yom Kippur",
        (1, 15): "Sukkot (Day 1)",
        (1, 16): "Sukkot (Day 2)",
        (1, 21): "Sukkot (Hoshana Rabbah)",
        (1, 22): "Shemini Atzeret",
        (1, 23): "Simchat Torah",
        (5, 15): "Tu BiShvat",
        (adar, 14): "Purim",
        (adar, 15): "Shushan Purim",
        (iyar, 18): "Lag BaOmer",
        (sivan, 6): "Shavuot (Day 1)",
        (sivan, 7): "Shavuot (Day 2)",
        (av, 9): "Tisha B'Av",
    }
    for d in range(17, 21):
        h[(1, d)] = "Sukkot (Chol HaMoed)"

    # Chanukah runs eight days from 25 Kislev into Tevet
    kislev_len = days_in_month(3, year)
    for n in range(8):
        day = 25 + n
        key = (3, day) if day <= kislev_len else (4, day - kislev_len)
        h[key] = f"Chanukah (Day {n + 1})"

    h[(nisan, 15)] = "Passover (Day 1)"
    h[(nisan, 16)] = "Passover (Day 2)"
    for d in range(17, 21):
        h[(nisan, d)] = "Passover (Chol HaMoed)"
    h[(nisan, 21)] = "Passover (Day 7)"
    h[(nisan, 22)] = "Passover (Day 8)"
    return h


def _cultural(year: int) -> Dict[HolidayKey, str]:
    leap = is_leap_year(year)
    adar = 7 if leap else 6
    nisan, iyar, av = (8, 9, 12) if leap else (7, 8, 11)
    return {
        (1, 3): "Fast of Gedaliah",
        (4, 10): "Tenth of Tevet",
        (adar, 13): "Fast of Esther",
        (nisan, 27): "Yom HaShoah",
        (iyar, 4): "Yom HaZikaron",
        (iyar, 5): "Yom HaAtzmaut",
        (iyar, 28): "Yom Yerushalayim",
        (av, 15): "Tu B'Av",
    }


def hebrew_holidays(year: int, holiday_set: Optional[str] = None) -> Dict[HolidayKey, str]:
    """
    (month, day) -> holiday name for a Hebrew year.

    An empty or missing set means HEBREW_RELIGIOUS; unknown sets give {}.
    """
    name = (holiday_set or _RELIGIOUS).upper()
    if name == _RELIGIOUS:
        return _religious(year)
    if name == _CULTURAL:
        return _cultural(year)
    if name == _ALL:
        out = _cultural(year)
        out.update(_religious(year))
        return out
    return {}


_EMOJI_BY_PREFIX = (
    ("Rosh Hashanah", "🍎"),
    ("Yom Kippur", "🕍"),
    ("Sukkot", "🌿"),
    ("Shemini Atzeret", "🌧️"),
    ("Simchat Torah", "📜"),
    ("Chanukah", "🕎"),
    ("Tu BiShvat", "🌳"),
    ("Purim", "🎭"),
    ("Shushan Purim", "🎭"),
    ("Passover", "🍷"),
    ("Lag BaOmer", "🔥"),
    ("Shavuot", "🌾"),
    ("Tisha B'Av", "🕯️"),
    ("Yom HaAtzmaut", "🇮🇱"),
    ("Yom HaShoah", "🕯️"),
    ("Yom HaZikaron", "🕯️"),
    ("Tu B'Av", "❤️"),
)


def holiday_emoji(name: str) -> Optional[str]:
    for prefix, emoji in _EMOJI_BY_PREFIX:
        if name.startswith(prefix):
            return emoji
    return None


def holidays_in_gregorian_year(gregorian_year: int, holiday_set: Optional[str] = None) -> List[Tuple[date, str]]:
    """Hebrew holidays that map (approximately) into a Gregorian year, in date order."""
    out: Dict[date, str] = {}
    for hy in (hebrew_year_for(gregorian_year), hebrew_year_for(gregorian_year) + 1):
        for (m, d), name in sorted(hebrew_holidays(hy, holiday_set).items()):
            g = hebrew_to_gregorian(hy, m, d)
            if g.year == gregorian_year:
                out.setdefault(g, name)
    return sorted(out.items())


# ============================================================
# Year mapping for overlays
# ============================================================

@lru_cache(maxsize=64)
def _holidays_cached(year: int, holiday_set: Optional[str]) -> Dict[HolidayKey, str]:
    return hebrew_holidays(year, holiday_set)


def year_mapping(gregorian_year: int, holiday_set: Optional[str] = None) -> Tuple[HebrewDateMapping, ...]:
    """One approximate Hebrew date string per Gregorian day of the year."""
    first = date(gregorian_year, 1, 1)
    n = (date(gregorian_year + 1, 1, 1) - first).days
    out = []
    for i in range(n):
        g = first + timedelta(days=i)
        h = gregorian_to_hebrew(g)
        holiday = _holidays_cached(h.year, holiday_set).get((h.month, h.day))
        out.append(HebrewDateMapping(gregorian=g, hebrew=format_hebrew_date(h), holiday=holiday))
    return tuple(out)
