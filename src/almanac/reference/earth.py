from __future__ import annotations

import math

from .kernel import to_degrees

GEOMETRIC_ZENITH = 90.0

# Degrees
REFRACTION = 34.0 / 60.0
SOLAR_RADIUS = 16.0 / 60.0

# Polar radius in km
EARTH_RADIUS = 6356.9


def elevation_adjustment(elevation: float) -> float:
    """
    Dip of the horizon (degrees) seen from `elevation` meters above the
    reference surface. Observers below it see no dip.
    """
    elevation = max(elevation, 0.0)
    return to_degrees(math.acos(EARTH_RADIUS / (EARTH_RADIUS + elevation / 1000.0)))


def adjusted_zenith(zenith: float, elevation: float = 0.0) -> float:
    """
    Zenith distance used by the sunrise/sunset solver.

    Only the geometric zenith (90°) is corrected for refraction, the solar
    semi-diameter and the observer's elevation. Civil, nautical,
    astronomical or custom zeniths are used as given.
    """
    if zenith == GEOMETRIC_ZENITH:
        return zenith + SOLAR_RADIUS + REFRACTION + elevation_adjustment(elevation)
    return zenith
