"""
calrender.calendars.islamic
---------------------------
Tabular (arithmetic) Hijri calendar, civil epoch.

Months alternate 30/29 days and 11 of every 30 years are leap. Observed
dates follow moon sighting and may differ from the tabular date by a day or
two.
"""
from __future__ import annotations

import math
from datetime import date
from typing import List, Tuple

from ..astro.time_scales import jdn_to_date

# JDN of the day before 1 Muharram 1 AH (civil epoch, 16 July 622)
EPOCH_JDN = 1948439

MONTH_NAMES = (
    "Muharram", "Safar", "Rabi al-Awwal", "Rabi al-Thani", "Jumada al-Ula", "Jumada al-Thaniya",
    "Rajab", "Shaban", "Ramadan", "Shawwal", "Dhu al-Qidah", "Dhu al-Hijjah",
)

# (month, day, name, emoji)
HOLIDAYS: Tuple[Tuple[int, int, str, str], ...] = (
    (1, 1, "Islamic New Year", "🌙"),
    (1, 10, "Ashura", ""),
    (3, 12, "Mawlid", ""),
    (9, 1, "Ramadan begins", "🌙"),
    (9, 27, "Laylat al-Qadr", ""),
    (10, 1, "Eid al-Fitr", "☪️"),
    (12, 10, "Eid al-Adha", "🐑"),
)


def is_leap_year(year: int) -> bool:
    return (14 + 11 * year) % 30 < 11


def islamic_to_jdn(year: int, month: int, day: int) -> int:
    if not 1 <= month <= 12:
        raise ValueError(f"Hijri month must be in 1..12, got {month}")
    return day + math.ceil(29.5 * (month - 1)) + (year - 1) * 354 + (3 + 11 * year) // 30 + EPOCH_JDN


def islamic_to_gregorian(year: int, month: int, day: int) -> date:
    return jdn_to_date(islamic_to_jdn(year, month, day))


def holidays_in_gregorian_year(gregorian_year: int) -> List[Tuple[date, str, str]]:
    """(date, name, emoji) of the tabular holidays falling in a Gregorian year, in date order.

    A Hijri year is about eleven days shorter than a Gregorian one, so a
    holiday can fall twice in the same Gregorian year.
    """
    approx = (gregorian_year - 622) * 33 // 32
    out = []
    for hy in range(approx - 1, approx + 3):
        for month, day, name, emoji in HOLIDAYS:
            g = islamic_to_gregorian(hy, month, day)
            if g.year == gregorian_year:
                out.append((g, name, emoji))
    return sorted(out)
