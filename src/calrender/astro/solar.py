# astro/solar.py

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from ..core.types import Location
from . import time_scales as ts
from .moon import moon_sample

J2000 = 2451545.0


def wrap_deg(x_deg: float) -> float:
    """Wrap degrees to [0,360)."""
    y = math.fmod(x_deg, 360.0)
    if y < 0:
        y += 360.0
    return y


def T_centuries(jd: float) -> float:
    return (jd - J2000) / 36525.0


def mean_obliquity_deg(T: float) -> float:
    """IAU2000 mean obliquity of the ecliptic (degrees)."""
    T2 = T * T
    eps_arcsec = (
        84381.406
        - 46.836769 * T
        - 0.0001831 * T2
        + 0.00200340 * T2 * T
        - 0.000000576 * T2 * T2
        - 0.0000000434 * T2 * T2 * T
    )
    return eps_arcsec / 3600.0


@dataclass(frozen=True)
class SolarCoordinates:
    """True and apparent solar longitude (degrees) and mean longitude L0."""
    L0_deg: float
    L_true_deg: float
    L_app_deg: float


def solar_longitude(jd: float) -> SolarCoordinates:
    """
    Truncated series for the solar longitude (accurate to ~0.01 deg).

    ``jd`` is taken as TT; callers pass UTC and accept the ~70 s offset.
    """
    T = T_centuries(jd)
    L0 = wrap_deg(280.46646 + 36000.76983 * T + 0.0003032 * T * T)
    M = math.radians(357.52911 + 35999.05029 * T - 0.0001537 * T * T)

    C = (
        (1.914602 - 0.004817 * T - 0.000014 * T * T) * math.sin(M)
        + (0.019993 - 0.000101 * T) * math.sin(2.0 * M)
        + 0.000289 * math.sin(3.0 * M)
    )
    L_true = wrap_deg(L0 + C)

    # aberration and leading nutation term
    omega = math.radians(125.04452 - 1934.136261 * T)
    L_app = wrap_deg(L_true - 0.00569 - 0.00478 * math.sin(omega))
    return SolarCoordinates(L0_deg=L0, L_true_deg=L_true, L_app_deg=L_app)


def solar_declination_deg(L_app_deg: float, eps_deg: float) -> float:
    s = math.sin(math.radians(eps_deg)) * math.sin(math.radians(L_app_deg))
    return math.degrees(math.asin(s))


def equation_of_time_minutes(jd: float) -> float:
    coords = solar_longitude(jd)
    eps = math.radians(mean_obliquity_deg(T_centuries(jd)))
    lam = math.radians(coords.L_app_deg)
    alpha = wrap_deg(math.degrees(math.atan2(math.cos(eps) * math.sin(lam), math.cos(lam))))
    diff = wrap_deg(coords.L0_deg - alpha + 180.0) - 180.0
    return 4.0 * diff


@dataclass(frozen=True)
class SunriseApparent:
    rise_app_hours: float
    set_app_hours: float


def sunrise_apparent_time(jd: float, lat_deg: float, h0_deg: float = -0.833) -> Optional[SunriseApparent]:
    """Sunrise/sunset in local apparent solar time; None for polar day or night."""
    coords = solar_longitude(jd)
    delta = math.radians(solar_declination_deg(coords.L_app_deg, mean_obliquity_deg(T_centuries(jd))))
    lat = math.radians(lat_deg)

    cos_H0 = (math.sin(math.radians(h0_deg)) - math.sin(lat) * math.sin(delta)) / (math.cos(lat) * math.cos(delta))
    if cos_H0 < -1.0 or cos_H0 > 1.0:
        return None

    H0 = math.degrees(math.acos(cos_H0)) / 15.0
    return SunriseApparent(rise_app_hours=12.0 - H0, set_app_hours=12.0 + H0)


@dataclass(frozen=True)
class SunriseCivil:
    rise_utc_hours: float
    set_utc_hours: float


def sunrise_sunset_utc(
    jd_utc_noon: float,
    lat_deg: float,
    lon_deg_east: float,
    h0_deg: float = -0.833,
) -> Optional[SunriseCivil]:
    """
    Sunrise/sunset in UTC hours with one refinement at the event instant.
    ``jd_utc_noon`` is the JD of 12:00 UTC of the civil day.
    """
    base = sunrise_apparent_time(jd_utc_noon, lat_deg, h0_deg)
    if base is None:
        return None

    zone = ts.lmt_offset_hours(lon_deg_east)
    eot_base = equation_of_time_minutes(jd_utc_noon)
    midnight = math.floor(jd_utc_noon - 0.5) + 0.5

    def refine(app_hours: float, rising: bool) -> float:
        guess = app_hours - eot_base / 60.0 - zone
        jd_event = midnight + guess / 24.0
        refined = sunrise_apparent_time(jd_event, lat_deg, h0_deg)
        if refined is None:
            return guess
        final = refined.rise_app_hours if rising else refined.set_app_hours
        return final - equation_of_time_minutes(jd_event) / 60.0 - zone

    return SunriseCivil(
        rise_utc_hours=refine(base.rise_app_hours, True) % 24.0,
        set_utc_hours=refine(base.set_app_hours, False) % 24.0,
    )


# ============================================================
# Local rise/set times for a calendar day
# ============================================================

@dataclass(frozen=True)
class RiseSet:
    sunrise: Optional[datetime]
    sunset: Optional[datetime]
    moonrise: Optional[datetime]
    moonset: Optional[datetime]


def _at_utc_hours(d: date, hours: float, tz: Optional[str]) -> datetime:
    dt = datetime(d.year, d.month, d.day, tzinfo=timezone.utc) + timedelta(hours=hours)
    return dt.astimezone(ZoneInfo(tz)) if tz else dt


def rise_set_times(d: date, location: Location, tz: Optional[str] = None) -> RiseSet:
    """
    Sun and approximate moon rise/set for an observer.

    The moon is assumed to trail the sun by its phase times 24 hours: a new
    moon rises with the sun, a full moon at sunset.
    """
    jd_noon = ts.jdn_to_jd(ts.date_to_jdn(d)) + 0.5
    sun = sunrise_sunset_utc(jd_noon, location.latitude, location.longitude)
    if sun is None:
        return RiseSet(None, None, None, None)

    lag = moon_sample(d).phase * 24.0
    return RiseSet(
        sunrise=_at_utc_hours(d, sun.rise_utc_hours, tz),
        sunset=_at_utc_hours(d, sun.set_utc_hours, tz),
        moonrise=_at_utc_hours(d, (sun.rise_utc_hours + lag) % 24.0, tz),
        moonset=_at_utc_hours(d, (sun.set_utc_hours + lag) % 24.0, tz),
    )
