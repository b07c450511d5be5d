# tests/test_holiday_sets.py

import pytest
from datetime import date, timedelta

from calrender.calendars import gregorian, islamic
from calrender.core.types import Weekday
from calrender.holidays.sets import BuiltinHolidayProvider, holiday_names, normalize_set_id

@pytest.fixture
def provider():
    return BuiltinHolidayProvider()

@pytest.mark.parametrize("year,expected", [
    (2000, date(2000, 4, 23)),
    (2019, date(2019, 4, 21)),
    (2024, date(2024, 3, 31)),
    (2025, date(2025, 4, 20)),
    (2038, date(2038, 4, 25)),
])
def test_easter(year, expected):
    assert gregorian.easter_sunday(year) == expected

def test_weekday_rules():
    assert gregorian.nth_weekday(2025, 1, Weekday.MONDAY, 3) == date(2025, 1, 20)
    assert gregorian.last_weekday(2025, 5, Weekday.MONDAY) == date(2025, 5, 26)
    assert gregorian.weekday_on_or_before(date(2025, 5, 24), Weekday.MONDAY) == date(2025, 5, 19)
    with pytest.raises(ValueError):
        gregorian.nth_weekday(2025, 2, Weekday.MONDAY, 5)

def test_us_rules_2025(provider):
    names = {h.name: h.date for h in provider.holidays(2025, "US")}
    assert names["Martin Luther King Jr. Day"] == date(2025, 1, 20)
    assert names["Thanksgiving"] == date(2025, 11, 27)
    assert names["Memorial Day"] == date(2025, 5, 26)
    assert names["Labor Day"] == date(2025, 9, 1)
    assert names["Juneteenth"] == date(2025, 6, 19)

def test_results_are_sorted_and_tagged(provider):
    defs = provider.holidays(2025, "christian")
    assert [h.date for h in defs] == sorted(h.date for h in defs)
    assert {h.set_id for h in defs} == {"CHRISTIAN"}
    easter = next(h for h in defs if h.name == "Easter Sunday")
    assert easter.date == date(2025, 4, 20)

def test_canadian_victoria_day(provider):
    names = {h.name: h.date for h in provider.holidays(2025, "ca")}
    assert names["Victoria Day"] == date(2025, 5, 19)
    assert names["Thanksgiving"] == date(2025, 10, 13)

@pytest.mark.parametrize("raw,canonical", [
    ("us", "US"),
    ("mx", "MEXICAN"),
    ("fun", "SECULAR"),
    ("wiccan", "PAGAN"),
    ("muslim", "ISLAMIC"),
    ("jewish", "JEWISH"),
    ("HEBREW_ALL", "HEBREW_ALL"),
    ("something", "SOMETHING"),
])
def test_normalize_set_id(raw, canonical):
    assert normalize_set_id(raw) == canonical

def test_unknown_set_yields_empty(provider):
    assert provider.holidays(2025, "klingon") == []

def test_jewish_set_uses_hebrew_converter(provider):
    defs = provider.holidays(2025, "JEWISH")
    purim = [h for h in defs if h.name == "Purim"]
    assert len(purim) == 1
    assert purim[0].date == date(2025, 2, 14)
    assert purim[0].emoji == "🎭"
    assert all(h.date.year == 2025 for h in defs)

def test_mexican_has_dancer(provider):
    cinco = next(h for h in provider.holidays(2025, "MEXICAN") if h.name == "Cinco de Mayo")
    assert cinco.date == date(2025, 5, 5)
    assert cinco.emoji == "💃"

def test_available_sets(provider):
    available = provider.available()
    for sid in ("US", "CHRISTIAN", "CANADIAN", "UK", "MAJOR_WORLD", "SECULAR", "JEWISH", "MEXICAN",
                "EUROPEAN", "ISLAMIC", "CHINESE", "HINDU", "BUDDHIST", "HEBREW_RELIGIOUS", "HEBREW_ALL"):
        assert sid in available

def test_holiday_names_map():
    names = holiday_names(2025, "US")
    assert names[date(2025, 7, 4)] == "Independence Day"
    assert all(isinstance(k, date) for k in names)

def _near(actual, expected, days=1):
    return abs((actual - expected).days) <= days

def _by_name(provider, year, set_id):
    return {h.name: h.date for h in provider.holidays(year, set_id)}

def test_tabular_hijri_dates():
    assert islamic.islamic_to_jdn(1446, 10, 1) == 2460766
    assert islamic.islamic_to_gregorian(1446, 10, 1) == date(2025, 3, 31)
    assert islamic.islamic_to_gregorian(1, 1, 1) == date(622, 7, 19)
    assert sum(islamic.is_leap_year(y) for y in range(1, 31)) == 11
    with pytest.raises(ValueError):
        islamic.islamic_to_jdn(1446, 13, 1)

@pytest.mark.parametrize("y", [1445, 1446, 1447])
def test_hijri_year_length_follows_leap_rule(y):
    length = islamic.islamic_to_jdn(y + 1, 1, 1) - islamic.islamic_to_jdn(y, 1, 1)
    assert length == (355 if islamic.is_leap_year(y) else 354)

def test_islamic_set_2025(provider):
    names = _by_name(provider, 2025, "muslim")
    assert _near(names["Eid al-Fitr"], date(2025, 3, 30))
    assert _near(names["Eid al-Adha"], date(2025, 6, 6))
    assert _near(names["Ramadan begins"], date(2025, 3, 1))
    assert all(h.set_id == "ISLAMIC" for h in provider.holidays(2025, "ISLAMIC"))

def test_islamic_new_year_can_fall_twice():
    new_years = [d for d, name, _ in islamic.holidays_in_gregorian_year(2008) if name == "Islamic New Year"]
    assert len(new_years) == 2

@pytest.mark.parametrize("year,expected", [
    (2024, date(2024, 2, 10)),
    (2025, date(2025, 1, 29)),
    (2026, date(2026, 2, 17)),
])
def test_lunar_new_year(provider, year, expected):
    names = _by_name(provider, year, "cn")
    assert _near(names["Lunar New Year"], expected)
    assert date(year, 1, 21) <= names["Lunar New Year"] <= date(year, 2, 20)
    assert names["Lantern Festival"] - names["Lunar New Year"] == timedelta(days=14)

def test_chinese_festivals_2025(provider):
    names = _by_name(provider, 2025, "CHINESE")
    assert names["Qingming Festival"] == date(2025, 4, 4)
    assert _near(names["Dragon Boat Festival"], date(2025, 5, 31))
    assert _near(names["Mid-Autumn Festival"], date(2025, 10, 6))

@pytest.mark.parametrize("year,holi,diwali", [
    (2024, date(2024, 3, 25), date(2024, 11, 1)),
    (2025, date(2025, 3, 14), date(2025, 10, 21)),
])
def test_hindu_moon_festivals(provider, year, holi, diwali):
    names = _by_name(provider, year, "in")
    assert _near(names["Holi"], holi)
    assert _near(names["Diwali"], diwali)
    assert names["Makar Sankranti"] == date(year, 1, 14)

def test_buddhist_set(provider):
    names = _by_name(provider, 2025, "buddhist")
    assert names["Vesak"].month == 5
    assert _near(names["Vesak"], date(2025, 5, 12))
    assert names["Bodhi Day"] == date(2025, 12, 8)

def test_european_set(provider):
    names = _by_name(provider, 2025, "european")
    assert names["Europe Day"] == date(2025, 5, 9)
    assert names["Easter Monday"] == date(2025, 4, 21)
    assert names["Ascension Day"] == date(2025, 5, 29)
    assert names["Whit Monday"] == date(2025, 6, 9)
    assert names["St. Stephen's Day"] == date(2025, 12, 26)
