from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Literal, Tuple, Union

from .errors import InputValidationError

ElevationName = Literal["geometric", "civil", "nautical", "astronomical"]
SolarElevation = Union[ElevationName, float]
RiseOrSet = Literal["rise", "set"]
TimeZoneOption = Union[Literal["default", "utc"], str]

# Degrees from the zenith.
SOLAR_ELEVATIONS: Dict[str, float] = {
    "geometric": 90.0,
    "civil": 96.0,
    "nautical": 102.0,
    "astronomical": 108.0,
}

DEFAULT_OPTIONS: Dict[str, Any] = {
    "solar_elevation": "geometric",
    "time_zone": "default",
}


def is_lat(lat: Any) -> bool:
    return isinstance(lat, (int, float)) and not isinstance(lat, bool) and -90.0 <= lat <= 90.0

def is_lng(lng: Any) -> bool:
    return isinstance(lng, (int, float)) and not isinstance(lng, bool) and -180.0 <= lng <= 180.0

def is_alt(alt: Any) -> bool:
    return isinstance(alt, (int, float)) and not isinstance(alt, bool)


@dataclass(frozen=True)
class Location:
    """
    A point on the Earth.

    longitude: degrees, positive East
    latitude:  degrees, positive North
    elevation: meters above mean sea level
    """
    longitude: float
    latitude: float
    elevation: float = 0.0

    def __post_init__(self) -> None:
        if not is_lng(self.longitude):
            raise InputValidationError(f"longitude must be in [-180, 180]: {self.longitude!r}")
        if not is_lat(self.latitude):
            raise InputValidationError(f"latitude must be in [-90, 90]: {self.latitude!r}")
        if not is_alt(self.elevation):
            raise InputValidationError(f"elevation must be a number: {self.elevation!r}")

    @classmethod
    def of(cls, value: "LocationLike") -> "Location":
        """Normalize a Location or a (lng, lat) / (lng, lat, elevation) tuple."""
        if isinstance(value, Location):
            return value
        if isinstance(value, tuple) and len(value) in (2, 3):
            return cls(*value)
        raise InputValidationError(f"cannot interpret {value!r} as a location")

    @property
    def coordinates(self) -> Tuple[float, float, float]:
        return (self.longitude, self.latitude, self.elevation)


LocationLike = Union[Location, Tuple[float, float], Tuple[float, float, float]]
