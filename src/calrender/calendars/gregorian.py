from __future__ import annotations

import calendar as pycal
from datetime import date, timedelta
from typing import FrozenSet, Tuple

from ..core.types import Weekday


# ============================================================
# Month arithmetic
# ============================================================

def days_in_month(year: int, month: int) -> int:
    return pycal.monthrange(year, month)[1]


def nth_weekday(year: int, month: int, weekday: Weekday, n: int) -> date:
    """n-th (1-based) given weekday of a month."""
    first = date(year, month, 1)
    shift = (int(weekday) - first.weekday()) % 7
    d = first + timedelta(days=shift + 7 * (n - 1))
    if d.month != month:
        raise ValueError(f"No {n}th {weekday.name.title()} in {year}-{month:02d}")
    return d


def last_weekday(year: int, month: int, weekday: Weekday) -> date:
    last = date(year, month, days_in_month(year, month))
    return last - timedelta(days=(last.weekday() - int(weekday)) % 7)


def weekday_on_or_before(d: date, weekday: Weekday) -> date:
    return d - timedelta(days=(d.weekday() - int(weekday)) % 7)


def easter_sunday(year: int) -> date:
    """Gregorian Easter (anonymous Gregorian computus)."""
    a = year % 19
    b, c = divmod(year, 100)
    d, e = divmod(b, 4)
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i, k = divmod(c, 4)
    l = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * l) // 451
    month, day = divmod(h + l - 7 * m + 114, 31)
    return date(year, month, day + 1)


# ============================================================
# Weeks
# ============================================================

def weekday_order(first_day: Weekday) -> Tuple[Weekday, ...]:
    return tuple(Weekday((int(first_day) + i) % 7) for i in range(7))


def column_of(d: date, first_day: Weekday) -> int:
    """Column (0..6) of ``d`` in a week that starts on ``first_day``."""
    return (d.weekday() - int(first_day)) % 7


def week_number(d: date, first_day: Weekday) -> int:
    """
    ISO week number when weeks start on Monday; otherwise the week holding
    January 1 is week 1 and weeks begin on ``first_day``.
    """
    if first_day == Weekday.MONDAY:
        return d.isocalendar()[1]
    jan1 = date(d.year, 1, 1)
    offset = column_of(jan1, first_day)
    return (d.timetuple().tm_yday - 1 + offset) // 7 + 1


# Regions whose weekend is not Saturday/Sunday.
_WEEKEND_BY_REGION = {
    "IL": (Weekday.FRIDAY, Weekday.SATURDAY),
    "SA": (Weekday.FRIDAY, Weekday.SATURDAY),
    "EG": (Weekday.FRIDAY, Weekday.SATURDAY),
    "QA": (Weekday.FRIDAY, Weekday.SATURDAY),
    "KW": (Weekday.FRIDAY, Weekday.SATURDAY),
    "BH": (Weekday.FRIDAY, Weekday.SATURDAY),
    "OM": (Weekday.FRIDAY, Weekday.SATURDAY),
    "JO": (Weekday.FRIDAY, Weekday.SATURDAY),
    "IQ": (Weekday.FRIDAY, Weekday.SATURDAY),
    "DZ": (Weekday.FRIDAY, Weekday.SATURDAY),
    "YE": (Weekday.FRIDAY, Weekday.SATURDAY),
    "AF": (Weekday.THURSDAY, Weekday.FRIDAY),
    "IR": (Weekday.FRIDAY,),
}
_DEFAULT_WEEKEND = (Weekday.SATURDAY, Weekday.SUNDAY)


def _split_locale(locale: str) -> Tuple[str, str]:
    parts = locale.replace("_", "-").split("-")
    lang = parts[0].lower()
    region = parts[-1].upper() if len(parts) > 1 else ""
    return lang, region


def weekend_days(locale: str) -> FrozenSet[Weekday]:
    """
    Weekend weekdays of a locale. The weekend follows the calendar day, not
    the column: a Monday-first or Saturday-first layout keeps the same weekend.
    """
    _, region = _split_locale(locale)
    return frozenset(_WEEKEND_BY_REGION.get(region, _DEFAULT_WEEKEND))


# ============================================================
# Names
# ============================================================

_MONTHS = {
    "en": ("January", "February", "March", "April", "May", "June", "July",
           "August", "September", "October", "November", "December"),
    "es": ("enero", "febrero", "marzo", "abril", "mayo", "junio", "julio",
           "agosto", "septiembre", "octubre", "noviembre", "diciembre"),
    "fr": ("janvier", "février", "mars", "avril", "mai", "juin", "juillet",
           "août", "septembre", "octobre", "novembre", "décembre"),
    "de": ("Januar", "Februar", "März", "April", "Mai", "Juni", "Juli",
           "August", "September", "Oktober", "November", "Dezember"),
}

# Monday first
_WEEKDAYS = {
    "en": ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"),
    "es": ("lunes", "martes", "miércoles", "jueves", "viernes", "sábado", "domingo"),
    "fr": ("lundi", "mardi", "mercredi", "jeudi", "vendredi", "samedi", "dimanche"),
    "de": ("Montag", "Dienstag", "Mittwoch", "Donnerstag", "Freitag", "Samstag", "Sonntag"),
}


def month_name(month: int, locale: str = "en-US", *, short: bool = False) -> str:
    lang, _ = _split_locale(locale)
    name = _MONTHS.get(lang, _MONTHS["en"])[month - 1]
    return name[:3].capitalize() if short else name.capitalize()


def weekday_name(weekday: Weekday, locale: str = "en-US", *, length: int = 0) -> str:
    """Localized weekday name; ``length`` > 0 truncates (e.g. 2 -> "Mo")."""
    lang, _ = _split_locale(locale)
    name = _WEEKDAYS.get(lang, _WEEKDAYS["en"])[int(weekday)].capitalize()
    return name[:length] if length > 0 else name
