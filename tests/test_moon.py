# tests/test_moon.py

import pytest
import random
from datetime import date, time, timedelta

from calrender.astro import moon
from calrender.core.types import Location, PHASE_NAMES

def test_illumination_bounds_random_dates():
    random.seed(7)
    start = date(1000, 1, 1)
    span = (date(9999, 12, 31) - start).days
    for _ in range(2000):
        d = start + timedelta(days=random.randint(0, span))
        s = moon.moon_sample(d)
        assert 0.0 <= s.illumination <= 1.0
        assert 0.0 <= s.phase < 1.0
        assert s.phase_name in PHASE_NAMES

def test_reference_new_moon_and_following_full_moon():
    assert moon.illumination(date(2000, 1, 6)) < 0.02
    # half a synodic month later
    assert moon.illumination(date(2000, 1, 21)) > 0.99

def test_location_shifts_observation_instant():
    d = date(2025, 3, 10)
    utc = moon.moon_sample(d)
    local = moon.moon_sample(d, location=Location(40.7, -74.0), observation_time=time(20, 0), tz="America/New_York")
    assert local.phase != utc.phase
    # 20:00 EDT is 24 hours after UTC midnight: about 1/29.5 of a turn later
    assert (local.phase - utc.phase) % 1.0 == pytest.approx(1.0 / moon.SYNODIC_MONTH_DAYS, abs=0.002)

def test_year_samples_match_scalar_model():
    samples = moon.year_samples(2024)
    assert len(samples) == 366
    assert samples[0].date == date(2024, 1, 1)
    assert samples[-1].date == date(2024, 12, 31)
    for s in samples[::17]:
        ref = moon.moon_sample(s.date)
        assert s.illumination == pytest.approx(ref.illumination, abs=1e-9)
        assert s.phase_angle == pytest.approx(ref.phase_angle, abs=1e-9)

def test_samples_for_no_dates():
    assert moon.samples_for_dates([]) == ()

def test_phase_days_are_isolated():
    days = [date(2025, 1, 1) + timedelta(days=i) for i in range(365)]
    phase_days = [d for d in days if moon.is_phase_day(d)]
    # four principal phases per synodic month
    assert 45 <= len(phase_days) <= 53
    for a, b in zip(phase_days, phase_days[1:]):
        assert (b - a).days >= 5

def test_full_moon_days_are_bright():
    days = [date(2025, 1, 1) + timedelta(days=i) for i in range(365)]
    full = [d for d in days if moon.is_full_moon_day(d)]
    assert 12 <= len(full) <= 13
    for d in full:
        assert moon.illumination(d) > 0.97

def test_near_full_threshold():
    bright = moon.moon_sample(date(2000, 1, 21))
    dark = moon.moon_sample(date(2000, 1, 6))
    assert moon.FULL_MOON_THRESHOLD == 0.95
    assert moon.is_near_full(bright)
    assert not moon.is_near_full(dark)

def test_phase_names_follow_cycle():
    assert moon.moon_sample(date(2000, 1, 6)).phase_name == "new"
    assert moon.moon_sample(date(2000, 1, 21)).phase_name == "full"

def test_rotation_requires_location():
    d = date(2025, 5, 1)
    assert moon.moon_rotation_deg(d, None) == 0.0
    assert moon.moon_rotation_deg(d, Location(0.0, 0.0)) == 0.0
    rot = moon.moon_rotation_deg(d, Location(45.0, 10.0))
    assert -180.0 <= rot < 180.0
    assert rot != moon.moon_rotation_deg(d, Location(-45.0, 10.0))

def test_mean_phase_dates():
    new = moon.mean_phase_dates(date(2000, 1, 1), date(2000, 12, 31))
    assert new[0] == date(2000, 1, 6)
    assert len(new) == 13
    assert {(b - a).days for a, b in zip(new, new[1:])} <= {29, 30}
    # 18:14 UTC on January 6 is already January 7 at UTC+8
    assert moon.mean_phase_dates(date(2000, 1, 1), date(2000, 1, 31), utc_offset_hours=8)[0] == date(2000, 1, 7)
    full = moon.mean_phase_dates(date(2000, 1, 1), date(2000, 1, 31), 0.5)
    assert full == [date(2000, 1, 21)]
    assert moon.mean_phase_dates(date(2000, 1, 8), date(2000, 1, 20)) == []
