from __future__ import annotations

"""
almanac.zones

Time-zone collaborators: coordinate -> IANA zone lookup (timezonefinder),
UTC offsets from the zoneinfo database, and the date corrections applied
when a UTC event is shown on a local calendar.
"""

import logging
from datetime import date, datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from timezonefinder import TimezoneFinder

from .core.errors import TimeZoneNotFoundError
from .core.types import Location, TimeZoneOption
from .reference.time_scales import SECONDS_PER_DAY, SECONDS_PER_HOUR, local_mean_time_offset_seconds

log = logging.getLogger(__name__)

ZoneLike = Union[str, tzinfo]

UTC_ZONE = "Etc/UTC"


@lru_cache(maxsize=1)
def _finder() -> TimezoneFinder:
    return TimezoneFinder()


def resolve_time_zone(longitude: float, latitude: float) -> str:
    """IANA zone name in effect at a coordinate."""
    name = _finder().timezone_at(lng=longitude, lat=latitude)
    if name is None:
        raise TimeZoneNotFoundError(f"no time zone found at longitude={longitude}, latitude={latitude}")
    log.debug("resolved time zone %s for (%s, %s)", name, longitude, latitude)
    return name


def zone_info(zone: ZoneLike) -> tzinfo:
    """Zone name or tzinfo -> tzinfo."""
    if isinstance(zone, tzinfo):
        return zone
    if zone.lower() == "utc":
        return timezone.utc
    try:
        return ZoneInfo(zone)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise TimeZoneNotFoundError(f"unknown time zone {zone!r}") from e


def offset_for_zone(zone: ZoneLike, instant: datetime) -> float:
    """UTC offset of the zone's wall clock (DST included) at instant, in seconds."""
    tz = zone_info(zone)
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    offset = instant.astimezone(tz).utcoffset()
    return offset.total_seconds() if offset is not None else 0.0


def shift_to_zone(instant: datetime, zone: ZoneLike) -> datetime:
    """Aware instant expressed on the zone's wall clock."""
    return instant.astimezone(zone_info(zone))


def requested_zone(location: Location, time_zone: TimeZoneOption) -> tzinfo:
    """
    Zone for the `time_zone` option:
      "default" -> the zone at the location
      "utc"     -> UTC
      name      -> that zone
    """
    if time_zone == "default":
        return zone_info(resolve_time_zone(location.longitude, location.latitude))
    if time_zone == "utc":
        return timezone.utc
    return zone_info(time_zone)


# ------------------------------------------------------------
# Local calendar corrections
# ------------------------------------------------------------

def local_hour_offset(instant: datetime, location: Location, zone: ZoneLike = UTC_ZONE) -> float:
    """
    Hours by which Local Mean Time at the location runs ahead of the
    zone's wall clock at instant. Against UTC this is longitude / 15.
    """
    lmt = local_mean_time_offset_seconds(location.longitude)
    return (lmt - offset_for_zone(zone, instant)) / SECONDS_PER_HOUR


def adjust_for_wraparound(instant: datetime, location: Location, mode: str) -> datetime:
    """
    Put a sunrise/sunset computed as a UTC hour-of-day on the right UTC date.

    Converted to Local Mean Time, a sunrise later than 18:00 belongs to the
    previous day and a sunset earlier than 06:00 to the next.
    """
    solar_hour = instant.hour + instant.minute / 60.0 + local_hour_offset(instant, location)
    if mode == "sunrise" and solar_hour > 18.0:
        return instant - timedelta(seconds=SECONDS_PER_DAY)
    if mode == "sunset" and solar_hour < 6.0:
        return instant + timedelta(seconds=SECONDS_PER_DAY)
    return instant


def antimeridian_adjustment(location: Location, instant: datetime, zone: ZoneLike) -> datetime:
    """
    Zones on the far side of the date line (Kiribati, Samoa, ...) keep a
    calendar a whole day away from the local solar day. Shift the instant
    back by a day when the zone runs 20h or more ahead of Local Mean Time,
    forward when 20h or more behind.
    """
    hours = local_hour_offset(instant, location, zone)
    if hours >= 20.0:
        days = 1
    elif hours <= -20.0:
        days = -1
    else:
        days = 0
    if days:
        log.debug("antimeridian adjustment of %+d day(s) at longitude %s", days, location.longitude)
    return instant + timedelta(days=days)


def local_date(value: Union[date, datetime], zone: ZoneLike) -> date:
    """Calendar date of a date, naive datetime (wall clock) or aware datetime in zone."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.date()
        return value.astimezone(zone_info(zone)).date()
    return value
