# reference/solar.py

from __future__ import annotations

import math
from typing import Union

from ..core.errors import InputValidationError
from ..core.types import SOLAR_ELEVATIONS
from . import astro_args as aa
from .deltat import julian_centuries_from_moment
from .kernel import invert_angular, mod, sigma, sin_deg, to_degrees, to_radians


# ============================================================
# NOAA model (Julian centuries T)
# ============================================================

def sun_geometric_mean_longitude(julian_centuries: float) -> float:
    """L0 = 280.46646 + 36000.76983 T + 0.0003032 T^2 (degrees, [0,360))"""
    T = julian_centuries
    return mod(280.46646 + T * (36000.76983 + 0.0003032 * T), 360.0)


def sun_geometric_mean_anomaly(julian_centuries: float) -> float:
    """M = 357.52911 + 35999.05029 T - 0.0001537 T^2 (degrees, [0,360))"""
    T = julian_centuries
    return mod(357.52911 + T * (35999.05029 - 0.0001537 * T), 360.0)


def earth_orbit_eccentricity(julian_centuries: float) -> float:
    """e = 0.016708634 - 0.000042037 T - 0.0000001267 T^2 (unitless)"""
    T = julian_centuries
    return 0.016708634 - T * (0.000042037 + 0.0000001267 * T)


def sun_equation_of_center(julian_centuries: float) -> float:
    """Equation of center C (degrees)."""
    T = julian_centuries
    m = to_radians(sun_geometric_mean_anomaly(T))
    return (
        math.sin(m) * (1.914602 - T * (0.004817 + 0.000014 * T))
        + math.sin(2.0 * m) * (0.019993 - 0.000101 * T)
        + math.sin(3.0 * m) * 0.000289
    )


def sun_true_longitude(julian_centuries: float) -> float:
    """True longitude L0 + C (degrees, not normalized)."""
    return sun_geometric_mean_longitude(julian_centuries) + sun_equation_of_center(julian_centuries)


def _omega(julian_centuries: float) -> float:
    return 125.04 - 1934.136 * julian_centuries


def sun_apparent_longitude(julian_centuries: float) -> float:
    """
    Apparent longitude with the two-term nutation/aberration shortcut:
      λ = true - 0.00569 - 0.00478 sin(Ω),  Ω = 125.04 - 1934.136 T
    """
    true_longitude = sun_true_longitude(julian_centuries)
    return true_longitude - 0.00569 - 0.00478 * math.sin(to_radians(_omega(julian_centuries)))


def mean_obliquity_of_ecliptic(julian_centuries: float) -> float:
    """
    ε0 = 23°26'(21.448" - 46.8150"T - 0.00059"T^2 + 0.001813"T^3)
    """
    T = julian_centuries
    seconds = 21.448 - T * (46.8150 + T * (0.00059 - T * 0.001813))
    return 23.0 + (26.0 + seconds / 60.0) / 60.0


def obliquity_correction(julian_centuries: float) -> float:
    """ε = ε0 + 0.00256 cos(Ω) (degrees)."""
    obliquity_of_ecliptic = mean_obliquity_of_ecliptic(julian_centuries)
    correction = obliquity_of_ecliptic + 0.00256 * math.cos(to_radians(_omega(julian_centuries)))
    return mod(correction, 360.0)


def solar_declination(julian_centuries: float) -> float:
    """δ = asin(sin ε sin λ) (degrees, signed)."""
    correction = to_radians(obliquity_correction(julian_centuries))
    lam = to_radians(sun_apparent_longitude(julian_centuries))
    sint = math.sin(correction) * math.sin(lam)
    return to_degrees(math.asin(sint))


def equation_of_time(julian_centuries: float) -> float:
    """
    Equation of time (minutes):

      y = tan^2(ε/2)
      E = y sin 2L0 - 2e sin M + 4ey sin M cos 2L0
          - ½ y^2 sin 4L0 - 5/4 e^2 sin 2M          (radians)
      minutes = 4 * degrees(E)
    """
    epsilon = to_radians(obliquity_correction(julian_centuries))
    l0 = to_radians(sun_geometric_mean_longitude(julian_centuries))
    m = to_radians(sun_geometric_mean_anomaly(julian_centuries))
    e = earth_orbit_eccentricity(julian_centuries)

    y = math.tan(epsilon / 2.0)
    y = y * y

    sin2l0 = math.sin(2.0 * l0)
    sin4l0 = math.sin(4.0 * l0)
    cos2l0 = math.cos(2.0 * l0)
    sinm = math.sin(m)
    sin2m = math.sin(2.0 * m)

    eq_time = (
        y * sin2l0
        - 2.0 * e * sinm
        + 4.0 * e * y * sinm * cos2l0
        - 0.5 * y * y * sin4l0
        - 1.25 * e * e * sin2m
    )
    return to_degrees(eq_time) * 4.0


# Semi-major axis of the Earth's orbit (AU)
SEMI_MAJOR_AXIS = 1.000001018


def sun_distance(julian_centuries: float) -> float:
    """
    Earth–Sun distance in AU:  a (1 - e^2) / (1 + e cos ν).

    The true anomaly ν is taken as M + T (mean anomaly plus the century
    count), not M + C. Kept as published; see DESIGN.md.
    """
    T = julian_centuries
    e = earth_orbit_eccentricity(T)
    nu = sun_geometric_mean_anomaly(T) + T
    return SEMI_MAJOR_AXIS * (1.0 - e * e) / (1.0 + e * math.cos(to_radians(nu)))


# ============================================================
# Precise apparent longitude (moments)
# ============================================================

# (amplitude, addend in degrees, multiplier in degrees per century)
_SOLAR_COEFFICIENTS = (
    403406.0, 195207.0, 119433.0, 112392.0, 3891.0, 2819.0, 1721.0,
    660.0, 350.0, 334.0, 314.0, 268.0, 242.0, 234.0, 158.0, 132.0, 129.0, 114.0,
    99.0, 93.0, 86.0, 78.0, 72.0, 68.0, 64.0, 46.0, 38.0, 37.0, 32.0, 29.0, 28.0, 27.0, 27.0,
    25.0, 24.0, 21.0, 21.0, 20.0, 18.0, 17.0, 14.0, 13.0, 13.0, 13.0, 12.0, 10.0, 10.0, 10.0,
    10.0,
)

_SOLAR_MULTIPLIERS = (
    0.9287892, 35999.1376958, 35999.4089666,
    35998.7287385, 71998.20261, 71998.4403,
    36000.35726, 71997.4812, 32964.4678,
    -19.4410, 445267.1117, 45036.8840, 3.1008,
    22518.4434, -19.9739, 65928.9345,
    9038.0293, 3034.7684, 33718.148, 3034.448,
    -2280.773, 29929.992, 31556.493, 149.588,
    9037.750, 107997.405, -4444.176, 151.771,
    67555.316, 31556.080, -4561.540,
    107996.706, 1221.655, 62894.167,
    31437.369, 14578.298, -31931.757,
    34777.243, 1221.999, 62894.511,
    -4442.039, 107997.909, 119.066, 16859.071,
    -4.578, 26895.292, -39.127, 12297.536,
    90073.778,
)

_SOLAR_ADDENDS = (
    270.54861, 340.19128, 63.91854, 331.26220,
    317.843, 86.631, 240.052, 310.26, 247.23,
    260.87, 297.82, 343.14, 166.79, 81.53,
    3.50, 132.75, 182.95, 162.03, 29.8,
    266.4, 249.2, 157.6, 257.8, 185.1, 69.9,
    8.0, 197.1, 250.4, 65.3, 162.7, 341.5,
    291.6, 98.5, 146.7, 110.0, 5.2, 342.6,
    230.9, 256.1, 45.3, 242.9, 115.2, 151.8,
    285.3, 53.3, 126.6, 205.7, 85.9,
    146.1,
)


def solar_longitude(t: float) -> float:
    """
    Apparent solar longitude (degrees, [0,360)) at universal moment t.

    Periodic series with aberration and nutation. Not interchangeable
    with sun_apparent_longitude: lunar phases are calibrated against this
    one, sunrise/sunset against the NOAA shortcut.
    """
    c = julian_centuries_from_moment(t)
    lam = (
        282.7771834
        + 36000.76953744 * c
        + 0.000005729577951308232 * sigma(
            [_SOLAR_COEFFICIENTS, _SOLAR_ADDENDS, _SOLAR_MULTIPLIERS],
            lambda x, y, z: x * sin_deg(y + z * c),
        )
    )
    return mod(lam + aa.aberration(t) + aa.nutation(t), 360.0)


def solar_longitude_after(lam: float, t: float) -> float:
    """First moment at or after t when the solar longitude is lam."""
    rate = aa.MEAN_TROPICAL_YEAR / 360.0
    tau = t + rate * mod(lam - solar_longitude(t), 360.0)
    a = max(t, tau - 5.0)
    b = tau + 5.0
    return invert_angular(solar_longitude, lam, a, b)


# ============================================================
# Target elevation
# ============================================================

def solar_elevation(elevation: Union[str, float]) -> float:
    """
    Resolve a named solar elevation ("geometric", "civil", "nautical",
    "astronomical") to degrees from the zenith. Numbers pass through.
    """
    if isinstance(elevation, str):
        try:
            return SOLAR_ELEVATIONS[elevation]
        except KeyError:
            raise InputValidationError(
                f"Unknown solar elevation '{elevation}'. Available: {sorted(SOLAR_ELEVATIONS)}"
            ) from None
    if isinstance(elevation, bool) or not isinstance(elevation, (int, float)):
        raise InputValidationError(f"solar elevation must be a name or a number: {elevation!r}")
    return float(elevation)
