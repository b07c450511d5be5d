"""
calrender.astro.moon
--------------------
Mean synodic-month model of the lunar phase.

The phase is the fraction of a synodic month elapsed since a reference new
moon; illumination is the lit fraction of the disc, (1 - cos angle) / 2.
The model ignores the lunar anomaly, so instants of principal phases can be
off by up to ~14 hours. This is enough to pick the day of a phase and to
draw the disc.
"""
from __future__ import annotations

import math
from datetime import date, time, timedelta
from typing import List, Optional, Sequence, Tuple

import numpy as np

from ..core.types import TAU, Location, MoonSample
from .time_scales import date_to_jdn, jdn_to_date, jdn_to_jd, observation_jd

# Reference new moon 2000-01-06 18:14 UTC
REFERENCE_NEW_MOON_JD = 2451550.2597
SYNODIC_MONTH_DAYS = 29.530588861

# Near-full policy for show-full-moon-only overlays. Not user-configurable.
FULL_MOON_THRESHOLD = 0.95

# Turns; slightly above half a day of phase motion (1 / 2 / 29.53).
PHASE_DAY_TOLERANCE = 0.017
PRINCIPAL_PHASES = (0.0, 0.25, 0.5, 0.75)


# ============================================================
# Scalar model
# ============================================================

def phase_fraction(jd_utc: float) -> float:
    """Elapsed fraction of the current synodic month at JD(UTC), in [0, 1)."""
    x = (jd_utc - REFERENCE_NEW_MOON_JD) / SYNODIC_MONTH_DAYS
    f = x - math.floor(x)
    return 0.0 if f >= 1.0 else f


def illumination_from_angle(angle: float) -> float:
    return min(1.0, max(0.0, (1.0 - math.cos(angle)) / 2.0))


def moon_sample(
    d: date,
    *,
    location: Optional[Location] = None,
    observation_time: Optional[time] = None,
    tz: Optional[str] = None,
) -> MoonSample:
    jd = observation_jd(d, location=location, observation_time=observation_time, tz=tz)
    angle = TAU * phase_fraction(jd)
    return MoonSample(date=d, phase_angle=angle, illumination=illumination_from_angle(angle))


def illumination(d: date, **kwargs) -> float:
    return moon_sample(d, **kwargs).illumination


# ============================================================
# Vectorized year pass
# ============================================================

def year_samples(
    year: int,
    *,
    location: Optional[Location] = None,
    observation_time: Optional[time] = None,
    tz: Optional[str] = None,
) -> Tuple[MoonSample, ...]:
    """One MoonSample per day of a Gregorian year."""
    first = date(year, 1, 1)
    n = (date(year + 1, 1, 1) - first).days
    days = [first + timedelta(days=i) for i in range(n)]
    return samples_for_dates(days, location=location, observation_time=observation_time, tz=tz)


def samples_for_dates(
    days: Sequence[date],
    *,
    location: Optional[Location] = None,
    observation_time: Optional[time] = None,
    tz: Optional[str] = None,
) -> Tuple[MoonSample, ...]:
    if not days:
        return ()
    jd = np.fromiter(
        (observation_jd(d, location=location, observation_time=observation_time, tz=tz) for d in days),
        dtype=float,
        count=len(days),
    )
    phase = np.mod((jd - REFERENCE_NEW_MOON_JD) / SYNODIC_MONTH_DAYS, 1.0)
    phase = np.where(phase >= 1.0, 0.0, phase)
    angle = TAU * phase
    illum = np.clip((1.0 - np.cos(angle)) / 2.0, 0.0, 1.0)
    return tuple(
        MoonSample(date=d, phase_angle=float(a), illumination=float(k))
        for d, a, k in zip(days, angle, illum)
    )


# ============================================================
# Phase days
# ============================================================

def _turn_distance(a: float, b: float) -> float:
    x = abs(a - b) % 1.0
    return min(x, 1.0 - x)


def _day_phase(d: date) -> float:
    # phase days use the civil date at UTC midnight, independent of location
    return moon_sample(d).phase


def is_phase_day(d: date, targets: Sequence[float] = PRINCIPAL_PHASES) -> bool:
    """True if ``d`` is the calendar day closest to one of the target phases."""
    p = _day_phase(d)
    prev_p = _day_phase(d - timedelta(days=1))
    next_p = _day_phase(d + timedelta(days=1))
    for t in targets:
        dist = _turn_distance(p, t)
        if dist < PHASE_DAY_TOLERANCE and dist <= _turn_distance(prev_p, t) and dist < _turn_distance(next_p, t):
            return True
    return False


def is_full_moon_day(d: date) -> bool:
    return is_phase_day(d, (0.5,))


def is_near_full(sample: MoonSample) -> bool:
    return sample.illumination >= FULL_MOON_THRESHOLD


def mean_phase_dates(first: date, last: date, phase: float = 0.0, *, utc_offset_hours: float = 0.0) -> List[date]:
    """
    Civil dates, at a fixed UTC offset, of the mean instants of ``phase``
    (0 new, 0.5 full) between ``first`` and ``last`` inclusive.
    """
    shift = utc_offset_hours / 24.0
    k = math.floor((jdn_to_jd(date_to_jdn(first)) - REFERENCE_NEW_MOON_JD) / SYNODIC_MONTH_DAYS) - 1
    out: List[date] = []
    while True:
        jd = REFERENCE_NEW_MOON_JD + (k + phase) * SYNODIC_MONTH_DAYS
        d = jdn_to_date(math.floor(jd + 0.5 + shift))
        if d > last:
            return out
        if d >= first:
            out.append(d)
        k += 1


# ============================================================
# Apparent orientation
# ============================================================

def moon_rotation_deg(d: date, location: Optional[Location]) -> float:
    """
    Rotation of the drawn terminator for an observer, in degrees.

    Heuristic parallactic angle: the declination follows a 28.6 degree
    envelope and the hour angle advances with the day of month. Southern
    observers see the disc flipped. No rotation without a location.
    """
    if location is None or (location.latitude == 0.0 and location.longitude == 0.0):
        return 0.0

    lat = math.radians(location.latitude)
    lng = math.radians(location.longitude)

    age = ((d - date(2000, 1, 1)).days - 5.5) % SYNODIC_MONTH_DAYS
    orbit = age / SYNODIC_MONTH_DAYS * TAU
    doy = d.timetuple().tm_yday
    dec = math.radians(28.6 * math.sin(orbit + doy * math.pi / 182.625))
    ha = d.day / 30.0 * TAU + lng

    if abs(location.latitude) < 1.0:
        pa = ha
    else:
        # cos(altitude) >= 0 cancels out of atan2
        pa = math.atan2(
            math.sin(ha) * math.cos(dec),
            math.sin(dec) * math.cos(lat) - math.cos(dec) * math.sin(lat) * math.cos(ha),
        )
        if location.latitude < 0:
            pa += math.pi
        pa += (1.0 - abs(location.latitude) / 90.0) * ha * 0.3

    rot = -math.degrees(pa) - 45.0
    return (rot + 180.0) % 360.0 - 180.0
