# tests/test_time_scales.py

import pytest
import random
from datetime import date, datetime, time, timezone

from calrender.astro import time_scales as ts
from calrender.core.types import Location

def test_jdn_date_roundtrip():
    random.seed(42)
    # Constrain to year 1 - 9999 to avoid datetime out of range
    for _ in range(10000):
        jdn_in = random.randint(1721426, 5373484)
        d = ts.jdn_to_date(jdn_in)
        jdn_out = ts.date_to_jdn(d)
        assert jdn_in == jdn_out
        assert ts.jd_to_jdn(ts.jdn_to_jd(jdn_in) + 0.25) == jdn_in

def test_jd_datetime_roundtrip():
    """
    Sub-day UTC round-tripping between continuous Julian Dates
    and timezone-aware datetime objects.
    """
    random.seed(42)
    for _ in range(1000):
        jd_in = random.uniform(2400000.5, 2500000.5)
        dt = ts.jd_to_datetime_utc(jd_in)
        jd_out = ts.datetime_utc_to_jd(dt)
        # 1e-8 days is roughly a millisecond
        assert jd_in == pytest.approx(jd_out, abs=1e-8)

def test_known_epochs():
    # J2000.0 civil date is January 1, 2000
    assert ts.date_to_jdn(date(2000, 1, 1)) == 2451545

    # Unix epoch is 1970-01-01 00:00:00 UTC
    unix_dt = datetime(1970, 1, 1, tzinfo=timezone.utc)
    assert ts.datetime_utc_to_jd(unix_dt) == 2440587.5

def test_naive_datetime_rejected():
    with pytest.raises(ValueError):
        ts.datetime_utc_to_jd(datetime(2000, 1, 1))

def test_observation_jd_without_location_is_utc_midnight():
    assert ts.observation_jd(date(2000, 1, 1)) == 2451544.5

def test_observation_jd_uses_local_clock_in_zone():
    # 20:00 EST on 2025-01-15 is 01:00 UTC the next day
    jd = ts.observation_jd(
        date(2025, 1, 15),
        location=Location(40.7, -74.0),
        observation_time=time(20, 0),
        tz="America/New_York",
    )
    expected = ts.datetime_utc_to_jd(datetime(2025, 1, 16, 1, 0, tzinfo=timezone.utc))
    assert jd == pytest.approx(expected, abs=1e-9)

def test_observation_jd_falls_back_to_local_mean_time():
    # 90 deg east is 6 hours ahead of UTC
    jd = ts.observation_jd(date(2025, 1, 15), location=Location(0.0, 90.0), observation_time=time(12, 0))
    expected = ts.datetime_utc_to_jd(datetime(2025, 1, 15, 6, 0, tzinfo=timezone.utc))
    assert jd == pytest.approx(expected, abs=1e-9)
