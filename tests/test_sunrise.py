# tests/test_sunrise.py

import pytest
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

import almanac
from almanac.core.errors import NoEventError
from almanac.core.types import Location
from almanac.reference import events
from almanac.reference.earth import adjusted_zenith, elevation_adjustment
from almanac.reference.time_scales import julian_day_from_date

SYDNEY = Location(151.20666584, -33.8559799094)
ALERT = Location(-62.3481, 82.5018)
URBANA = Location(-88.2073, 40.1106)
HONOLULU = Location(-157.8583, 21.3069)
KIRITIMATI = Location(-157.4000, 1.8700)


def minutes_of_day(dt: datetime) -> int:
    return dt.hour * 60 + dt.minute


# ------------------------------------------------------------
# NOAA solver
# ------------------------------------------------------------

def test_greenwich_equinox_noon_is_after_1200_utc():
    jd = julian_day_from_date(2019, 3, 20)
    T = (jd - 2451545.0) / 36525.0
    noon = events.solar_noon_utc(T, 0.0)
    # the Sun runs about 7.5 min slow on March 20
    assert noon == pytest.approx(720.0 + 7.5, abs=1.0)

def test_hour_angle_sign_follows_mode():
    rise = events.sun_hour_angle_at_horizon(40.0, -10.0, 90.833, "sunrise")
    set_ = events.sun_hour_angle_at_horizon(40.0, -10.0, 90.833, "sunset")
    assert rise > 0.0
    assert set_ == pytest.approx(-rise)

def test_hour_angle_polar_night_raises():
    with pytest.raises(NoEventError):
        events.sun_hour_angle_at_horizon(82.5, -22.3, 90.833, "sunrise")

def test_utc_sun_position_sydney():
    hours = events.utc_sun_position(julian_day_from_date(2019, 12, 4), SYDNEY, "geometric", "sunrise")
    # 2019-12-03 18:37 UTC
    assert hours == pytest.approx(18.0 + 37.0 / 60.0, abs=2.0 / 60.0)

def test_utc_sun_position_no_event():
    assert events.utc_sun_position(julian_day_from_date(2019, 12, 4), ALERT, "geometric", "sunrise") is None

def test_only_geometric_zenith_is_adjusted():
    assert adjusted_zenith(90.0) == pytest.approx(90.0 + 16.0 / 60.0 + 34.0 / 60.0)
    assert adjusted_zenith(90.0, 100.0) > adjusted_zenith(90.0)
    assert adjusted_zenith(96.0, 1000.0) == 96.0
    assert adjusted_zenith(108.0) == 108.0

def test_elevation_below_sea_level_has_no_dip():
    assert elevation_adjustment(-400.0) == 0.0
    assert elevation_adjustment(0.0) == 0.0


# ------------------------------------------------------------
# Public API
# ------------------------------------------------------------

# Local wall-clock times on 2019-12-04: (rise hour, rise minute, set hour, set minute)
CITIES_2019_12_04 = [
    ("sydney", SYDNEY, "Australia/Sydney", (5, 37, 19, 53)),
    ("moscow", Location(37.6173, 55.7558), "Europe/Moscow", (8, 39, 16, 0)),
    ("sao_paulo", Location(-46.6396, -23.5558), "America/Sao_Paulo", (5, 12, 18, 42)),
    ("beijing", Location(116.4074, 39.9042), "Asia/Shanghai", (7, 19, 16, 50)),
]


@pytest.mark.parametrize("name, location, zone, times", CITIES_2019_12_04)
def test_sunrise_on_the_local_day(name, location, zone, times):
    sunrise = almanac.sunrise(location, date(2019, 12, 4), time_zone=zone)
    assert sunrise.date() == date(2019, 12, 4)
    assert sunrise.tzinfo == ZoneInfo(zone)
    assert abs(minutes_of_day(sunrise) - (times[0] * 60 + times[1])) <= 2

@pytest.mark.parametrize("name, location, zone, times", CITIES_2019_12_04)
def test_sunset_on_the_local_day(name, location, zone, times):
    sunset = almanac.sunset(location, date(2019, 12, 4), time_zone=zone)
    assert sunset.date() == date(2019, 12, 4)
    assert abs(minutes_of_day(sunset) - (times[2] * 60 + times[3])) <= 2

def test_sydney_sunrise_in_utc_keeps_local_day():
    local = almanac.sunrise(SYDNEY, date(2019, 12, 4), time_zone="Australia/Sydney")
    utc = almanac.sunrise(SYDNEY, datetime(2019, 12, 4, tzinfo=ZoneInfo("Australia/Sydney")), time_zone="utc")
    assert utc.tzinfo == timezone.utc
    assert utc == local
    assert utc.day == 3

def test_urbana_sunset_1945():
    sunset = almanac.sunset(URBANA, date(1945, 11, 12), time_zone="America/Chicago")
    assert sunset.date() == date(1945, 11, 12)
    assert abs(minutes_of_day(sunset) - (16 * 60 + 39)) <= 1

def test_london_civil_dawn():
    london = Location(-0.1276, 51.5072, 11.0)
    dawn = almanac.sunrise(london, date(2024, 5, 26), solar_elevation="civil", time_zone="Europe/London")
    expected = datetime(2024, 5, 26, 4, 9, 59, tzinfo=ZoneInfo("Europe/London"))
    assert abs((dawn - expected).total_seconds()) <= 60

def test_civil_dawn_precedes_sunrise():
    london = (-0.1276, 51.5072)
    dawn = almanac.sunrise(london, date(2024, 5, 26), solar_elevation="civil", time_zone="Europe/London")
    rise = almanac.sunrise(london, date(2024, 5, 26), time_zone="Europe/London")
    assert dawn < rise

@pytest.mark.parametrize("day", [date(2019, 12, 4), date(2019, 7, 1)])
def test_alert_has_no_sunrise_or_sunset(day):
    assert almanac.sunrise(ALERT, day, time_zone="America/Toronto") is None
    assert almanac.sunset(ALERT, day, time_zone="America/Toronto") is None

def test_honolulu_sunset_wraps_to_next_utc_day():
    sunset = almanac.sunset(HONOLULU, date(2019, 12, 4), time_zone="Pacific/Honolulu")
    assert sunset.day == 4
    assert sunset.hour == 17
    assert sunset.astimezone(timezone.utc).day == 5

def test_kiritimati_sunrise_across_the_date_line():
    # UTC+14, more than a day ahead of local mean time
    sunrise = almanac.sunrise(KIRITIMATI, date(2019, 12, 4), time_zone="Pacific/Kiritimati")
    assert sunrise.day == 4
    assert sunrise.hour == 6

def test_sun_rise_or_set_rejects_unknown_mode():
    with pytest.raises(almanac.InputValidationError):
        almanac.sun_rise_or_set(SYDNEY, date(2019, 12, 4), rise_or_set="noon", time_zone="utc")

def test_unknown_solar_elevation_is_rejected():
    with pytest.raises(almanac.InputValidationError):
        almanac.sunrise(SYDNEY, date(2019, 12, 4), solar_elevation="golden", time_zone="Australia/Sydney")

@pytest.mark.parametrize("mode, hour, minute", [
    ("rise", 7, 4),
    ("set", 16, 28),
])
def test_new_york_december(mode, hour, minute):
    nyc = (-74.0060, 40.7128)
    event = almanac.sun_rise_or_set(nyc, date(2019, 12, 4), rise_or_set=mode, time_zone="America/New_York")
    assert event.date() == date(2019, 12, 4)
    assert abs(minutes_of_day(event) - (hour * 60 + minute)) <= 2

def test_nunavut_sunset_1945():
    # 14:24 at UTC-5
    sunset = almanac.sunset((-83.1076, 70.2998), date(1945, 11, 12), time_zone="America/Iqaluit")
    expected = datetime(1945, 11, 12, 19, 24, tzinfo=timezone.utc)
    assert abs((sunset - expected).total_seconds()) <= 120
