from __future__ import annotations

from dataclasses import dataclass

from .kernel import angle, atan_deg, cos_deg, degrees, mod, poly, secs, sin_deg
from .deltat import julian_centuries_from_moment
from .time_scales import J2000, JULIAN_DAYS_PER_CENTURY


# ------------------------------------------------------------
# Mean periods
# ------------------------------------------------------------

MEAN_SYNODIC_MONTH = 29.530588861
MEAN_TROPICAL_YEAR = 365.242189


# ------------------------------------------------------------
# Fundamental arguments (Meeus ch. 47; degrees, wrapped to [0,360))
# ------------------------------------------------------------

def mean_lunar_longitude(c: float) -> float:
    """L' = 218.3164477 + 481267.88123421 T - 0.0015786 T^2 + T^3/538841 - T^4/65194000"""
    return degrees(poly(c, [218.3164477, 481267.88123421, -0.0015786, 1 / 538841, -1 / 65194000]))

def lunar_elongation(c: float) -> float:
    """D = 297.8501921 + 445267.1114034 T - 0.0018819 T^2 + T^3/545868 - T^4/113065000"""
    return degrees(poly(c, [297.8501921, 445267.1114034, -0.0018819, 1 / 545868, -1 / 113065000]))

def solar_anomaly(c: float) -> float:
    """M = 357.5291092 + 35999.0502909 T - 0.0001536 T^2 + T^3/24490000"""
    return degrees(poly(c, [357.5291092, 35999.0502909, -0.0001536, 1.0 / 24490000.0]))

def lunar_anomaly(c: float) -> float:
    """M' = 134.9633964 + 477198.8675055 T + 0.0087414 T^2 + T^3/69699 - T^4/14712000"""
    return degrees(poly(c, [134.9633964, 477198.8675055, 0.0087414, 1 / 69699, -1 / 14712000]))

def moon_node(c: float) -> float:
    """F = 93.2720950 + 483202.0175233 T - 0.0036539 T^2 - T^3/3526000 + T^4/863310000"""
    return degrees(poly(c, [93.2720950, 483202.0175233, -0.0036539, -1 / 3526000.0, 1 / 863310000.0]))

def eccentricity_factor(c: float) -> float:
    """
    Eccentricity factor E of the Earth's orbit. Series terms that contain
    the solar anomaly M are scaled by E^|multiplier of M|.
    """
    return poly(c, [1.0, -0.002516, -0.0000074])


@dataclass(frozen=True)
class FundamentalArgs:
    """Fundamental arguments in degrees."""
    Lp_deg: float
    D_deg: float
    M_deg: float
    Mp_deg: float
    F_deg: float
    E: float


def fundamental_args(c: float) -> FundamentalArgs:
    return FundamentalArgs(
        Lp_deg=mean_lunar_longitude(c),
        D_deg=lunar_elongation(c),
        M_deg=solar_anomaly(c),
        Mp_deg=lunar_anomaly(c),
        F_deg=moon_node(c),
        E=eccentricity_factor(c),
    )


# ------------------------------------------------------------
# Nutation, aberration, obliquity
# ------------------------------------------------------------

def nutation(t: float) -> float:
    """Longitudinal nutation (degrees) at moment t."""
    c = julian_centuries_from_moment(t)
    a = poly(c, [124.90, -1934.134, 0.002063])
    b = poly(c, [201.11, 72001.5377, 0.00057])
    return -0.004778 * sin_deg(a) - 0.0003667 * sin_deg(b)


def aberration(t: float) -> float:
    """Aberration (degrees) at moment t."""
    c = julian_centuries_from_moment(t)
    return 0.0000974 * cos_deg(177.63 + 35999.01848 * c) - 0.005575


def obliquity(t: float) -> float:
    """
    Mean obliquity of the ecliptic (degrees) at moment t:
      23°26'21.448" - 46.8150"T - 0.00059"T^2 + 0.001813"T^3
    """
    c = julian_centuries_from_moment(t)
    return angle(23, 26, 21.448) + poly(c, [0.0, angle(0, 0, -46.8150), angle(0, 0, -0.00059), angle(0, 0, 0.001813)])


def precession(t: float) -> float:
    """Precession (degrees) at moment t relative to J2000.0."""
    c = julian_centuries_from_moment(t)
    eta = mod(poly(c, [0.0, secs(47.0029), secs(-0.03302), secs(0.000060)]), 360.0)
    p = mod(poly(c, [174.876384, secs(-869.8089), secs(0.03536)]), 360.0)
    a = mod(poly(c, [0.0, secs(5029.0966), secs(1.11113), secs(0.000006)]), 360.0)
    big_a = cos_deg(eta) * sin_deg(p)
    big_b = cos_deg(p)
    arg = atan_deg(big_a, big_b)
    return mod(p + a - arg, 360.0)


# Precession accumulated at the sidereal zodiac epoch (Mesha samkranti, 285 CE).
SIDEREAL_START = 156.13605090692624


# ------------------------------------------------------------
# Sidereal time
# ------------------------------------------------------------

def sidereal_from_moment(t: float) -> float:
    """
    Mean sidereal time at Greenwich (degrees) for universal moment t.
    Uses universal-time centuries, not dynamical.
    """
    c = (t - J2000) / JULIAN_DAYS_PER_CENTURY
    return mod(poly(c, [280.46061837, 36525 * 360.98564736629, 0.000387933, -1 / 38710000]), 360.0)
