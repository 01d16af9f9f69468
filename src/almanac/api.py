from __future__ import annotations

import logging
from datetime import date, datetime, tzinfo
from typing import Optional, Union

from .core.errors import InputValidationError
from .core.types import (
    DEFAULT_OPTIONS,
    Location,
    LocationLike,
    RiseOrSet,
    SolarElevation,
    TimeZoneOption,
)
from .reference import events
from .reference.time_scales import (
    datetime_from_moment,
    julian_day_from_date,
    moment_from_date,
    moment_from_datetime,
    moment_to_datetime,
)
from . import zones

log = logging.getLogger(__name__)

DateLike = Union[date, datetime]


# ============================================================
# Sunrise / sunset
# ============================================================

def sunrise(
    location: LocationLike,
    day: DateLike,
    *,
    solar_elevation: SolarElevation = DEFAULT_OPTIONS["solar_elevation"],
    time_zone: TimeZoneOption = DEFAULT_OPTIONS["time_zone"],
) -> Optional[datetime]:
    """Sunrise on the local calendar day, or None when the Sun does not rise."""
    return sun_rise_or_set(location, day, rise_or_set="rise", solar_elevation=solar_elevation, time_zone=time_zone)


def sunset(
    location: LocationLike,
    day: DateLike,
    *,
    solar_elevation: SolarElevation = DEFAULT_OPTIONS["solar_elevation"],
    time_zone: TimeZoneOption = DEFAULT_OPTIONS["time_zone"],
) -> Optional[datetime]:
    """Sunset on the local calendar day, or None when the Sun does not set."""
    return sun_rise_or_set(location, day, rise_or_set="set", solar_elevation=solar_elevation, time_zone=time_zone)


def _anchor_zone(location: Location, day: DateLike, time_zone: TimeZoneOption) -> tzinfo:
    # The calendar the caller's day belongs to.
    if isinstance(day, datetime) and day.tzinfo is not None:
        return day.tzinfo
    if time_zone not in ("default", "utc"):
        return zones.zone_info(time_zone)
    return zones.requested_zone(location, "default")


def sun_rise_or_set(
    location: LocationLike,
    day: DateLike,
    *,
    rise_or_set: RiseOrSet,
    solar_elevation: SolarElevation = DEFAULT_OPTIONS["solar_elevation"],
    time_zone: TimeZoneOption = DEFAULT_OPTIONS["time_zone"],
) -> Optional[datetime]:
    """
    Sunrise or sunset for a location on a calendar day.

    `day` is a date or a datetime. An aware datetime names a day in its
    own zone; dates and naive datetimes name a day in the zone given by
    `time_zone`, or the zone at the location for "default" and "utc".
    The result is an aware datetime:

      time_zone="default"  in the day's zone (the location's for plain dates)
      time_zone="utc"      UTC
      time_zone=<name>     that IANA zone

    `solar_elevation` is "geometric" (default, corrected for refraction,
    solar radius and observer elevation), "civil", "nautical",
    "astronomical" or a zenith distance in degrees.

    Returns None at high latitudes when the Sun stays above or below the
    target elevation all day.
    """
    if rise_or_set not in ("rise", "set"):
        raise InputValidationError(f"rise_or_set must be 'rise' or 'set': {rise_or_set!r}")
    if not isinstance(day, (date, datetime)):
        raise InputValidationError(f"day must be a date or datetime: {day!r}")
    location = Location.of(location)
    mode = "sunrise" if rise_or_set == "rise" else "sunset"

    anchor = _anchor_zone(location, day, time_zone)
    local_day = zones.local_date(day, anchor)

    hours = events.utc_sun_position(julian_day_from_date(local_day), location, solar_elevation, mode)
    if hours is None:
        log.debug("no %s at %s on %s", mode, location.coordinates, local_day)
        return None

    event = moment_to_datetime(hours, local_day)
    event = zones.adjust_for_wraparound(event, location, mode)
    event = zones.antimeridian_adjustment(location, event, anchor)

    if time_zone == "default":
        return zones.shift_to_zone(event, anchor)
    return zones.shift_to_zone(event, zones.requested_zone(location, time_zone))


# ============================================================
# Seasons
# ============================================================

def solstice(year: int, month: Union[str, int]) -> datetime:
    """
    June or December solstice of a year (1000..3000) as an aware UTC
    datetime. `month` also accepts "march"/"september" (equinoxes).
    """
    return events.solstice_utc(year, month)


def equinox(year: int, month: Union[str, int]) -> datetime:
    """March or September equinox of a year (1000..3000), UTC."""
    name = events.season_event(month)
    if name not in ("march", "september"):
        raise InputValidationError(f"equinoxes are in march or september: {month!r}")
    return events.solstice_utc(year, name)


# ============================================================
# Moon
# ============================================================

def _moment(value: DateLike) -> float:
    if isinstance(value, datetime):
        return moment_from_datetime(value)
    if isinstance(value, date):
        return moment_from_date(value)
    raise InputValidationError(f"expected a date or datetime: {value!r}")


def lunar_phase(value: DateLike) -> float:
    """Lunar phase in degrees [0, 360) at a datetime (dates at 00:00 UTC)."""
    return events.lunar_phase(_moment(value))


def date_time_lunar_phase_at_or_after(value: DateLike, phase: Union[str, float]) -> datetime:
    """First UTC instant at or after value when the Moon reaches phase."""
    return datetime_from_moment(events.lunar_phase_at_or_after(events.phase_angle(phase), _moment(value)))


def date_time_lunar_phase_at_or_before(value: DateLike, phase: Union[str, float]) -> datetime:
    """Last UTC instant at or before value when the Moon was at phase."""
    return datetime_from_moment(events.lunar_phase_at_or_before(events.phase_angle(phase), _moment(value)))


def date_time_new_moon_before(value: DateLike) -> datetime:
    return datetime_from_moment(events.new_moon_before(_moment(value)))


def date_time_new_moon_at_or_after(value: DateLike) -> datetime:
    return datetime_from_moment(events.new_moon_at_or_after(_moment(value)))


def illuminated_fraction(value: DateLike) -> float:
    """Illuminated fraction of the lunar disk in [0, 1]."""
    return events.lunar_illumination(_moment(value)).fraction
