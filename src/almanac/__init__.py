"""almanac public API.

Sunrise and sunset, solstices and equinoxes, lunar phases and new moons
for a calendar date and a place. Most users only need what is re-exported here.
"""

from .api import (
    sunrise,
    sunset,
    sun_rise_or_set,
    solstice,
    equinox,
    lunar_phase,
    date_time_lunar_phase_at_or_after,
    date_time_lunar_phase_at_or_before,
    date_time_new_moon_before,
    date_time_new_moon_at_or_after,
    illuminated_fraction,
)
from .core.errors import (
    AlmanacError,
    InputValidationError,
    NoEventError,
    CollaboratorError,
    TimeZoneNotFoundError,
)
from .core.types import Location

__all__ = [
    "sunrise",
    "sunset",
    "sun_rise_or_set",
    "solstice",
    "equinox",
    "lunar_phase",
    "date_time_lunar_phase_at_or_after",
    "date_time_lunar_phase_at_or_before",
    "date_time_new_moon_before",
    "date_time_new_moon_at_or_after",
    "illuminated_fraction",
    "Location",
    "AlmanacError",
    "InputValidationError",
    "NoEventError",
    "CollaboratorError",
    "TimeZoneNotFoundError",
]
