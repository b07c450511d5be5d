from __future__ import annotations

import math
from datetime import date, datetime, time, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from ..core.types import Location


# ============================================================
# Basic JD / JDN helpers
# ============================================================

def jd_to_jdn(jd: float) -> int:
    """
    Julian Date (days from noon) -> Julian Day Number (integer day starting at midnight).
      JDN = floor(JD + 0.5)
    """
    return int(math.floor(jd + 0.5))


def jdn_to_jd(jdn: int) -> float:
    """JD at midnight UTC of the given JDN."""
    return float(jdn) - 0.5


# ============================================================
# Gregorian calendar date <-> JDN  (Fliegel–Van Flandern)
# ============================================================

def date_to_jdn(d: date) -> int:
    """Gregorian date -> JDN (proleptic Gregorian, time-zone blind)."""
    a = (14 - d.month) // 12
    y2 = d.year + 4800 - a
    m2 = d.month + 12 * a - 3
    return d.day + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4 - y2 // 100 + y2 // 400 - 32045


def jdn_to_date(jdn: int) -> date:
    """JDN -> Gregorian date (proleptic Gregorian)."""
    a = jdn + 32044
    b = (4 * a + 3) // 146097
    c = a - (146097 * b) // 4

    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153

    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = 100 * b + d - 4800 + (m // 10)
    return date(int(year), int(month), int(day))


# ============================================================
# datetime(UTC) <-> JD(UTC)
# ============================================================

_JD_UNIX_EPOCH = 2440587.5  # JD at 1970-01-01 00:00:00 UTC


def datetime_utc_to_jd(dt: datetime) -> float:
    """Timezone-aware datetime -> JD (UTC)."""
    if dt.tzinfo is None:
        raise ValueError("datetime must be timezone-aware")
    return _JD_UNIX_EPOCH + dt.astimezone(timezone.utc).timestamp() / 86400.0


def jd_to_datetime_utc(jd: float) -> datetime:
    return datetime.fromtimestamp((jd - _JD_UNIX_EPOCH) * 86400.0, tz=timezone.utc)


def lmt_offset_hours(longitude_deg_east: float) -> float:
    """UTC -> Local Mean Time offset: 1 degree of longitude is 4 minutes."""
    return longitude_deg_east / 15.0


# ============================================================
# Observation instant
# ============================================================

def observation_jd(
    d: date,
    *,
    location: Optional[Location] = None,
    observation_time: Optional[time] = None,
    tz: Optional[str] = None,
) -> float:
    """
    JD(UTC) of the instant a calendar day is observed.

    Without a location this is UTC midnight of the civil date. With a location
    the configured local clock time in ``tz`` is used; when no zone is given
    the local mean time of the longitude stands in for it.
    """
    if location is None:
        return jdn_to_jd(date_to_jdn(d))

    t = observation_time or time(20, 0)
    if tz:
        local = datetime.combine(d, t, tzinfo=ZoneInfo(tz))
        return datetime_utc_to_jd(local)

    hours = t.hour + t.minute / 60.0 + t.second / 3600.0
    return jdn_to_jd(date_to_jdn(d)) + (hours - lmt_offset_hours(location.longitude)) / 24.0
