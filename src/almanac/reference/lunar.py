# reference/lunar.py

from __future__ import annotations

from ..core.types import Location
from . import astro_args as aa
from .deltat import julian_centuries_from_moment, universal_from_dynamical
from .kernel import (
    asin_deg,
    atan_deg,
    cos_deg,
    mod,
    poly,
    sigma,
    sin_deg,
    tan_deg,
)
from .time_scales import J2000

# Meters
AVERAGE_DISTANCE_EARTH_TO_MOON = 385_000_560.0
EQUATORIAL_EARTH_RADIUS = 6_378_140.0

# Lunations from the new moon of 0000-01 to the k=0 new moon of January 2000.
MONTHS_EPOCH_TO_J2000 = 24_724


# ============================================================
# Longitude & distance series (Meeus table 47.A)
# ============================================================

# Multipliers of D, M, M', F per term.
_LON_ELONGATION = (
    0.0, 2.0, 2.0, 0.0, 0.0, 0.0, 2.0, 2.0, 2.0, 2.0, 0.0, 1.0, 0.0, 2.0, 0.0, 0.0, 4.0, 0.0, 4.0, 2.0, 2.0, 1.0,
    1.0, 2.0, 2.0, 4.0, 2.0, 0.0, 2.0, 2.0, 1.0, 2.0, 0.0, 0.0, 2.0, 2.0, 2.0, 4.0, 0.0, 3.0, 2.0, 4.0, 0.0, 2.0,
    2.0, 2.0, 4.0, 0.0, 4.0, 1.0, 2.0, 0.0, 1.0, 3.0, 4.0, 2.0, 0.0, 1.0, 2.0,
)

_LON_SOLAR_ANOMALY = (
    0.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0, -1.0, 0.0, -1.0, 1.0, 0.0, 1.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 1.0, 1.0,
    0.0, 1.0, -1.0, 0.0, 0.0, 0.0, 1.0, 0.0, -1.0, 0.0, -2.0, 1.0, 2.0, -2.0, 0.0, 0.0, -1.0, 0.0, 0.0, 1.0,
    -1.0, 2.0, 2.0, 1.0, -1.0, 0.0, 0.0, -1.0, 0.0, 1.0, 0.0, 1.0, 0.0, 0.0, -1.0, 2.0, 1.0, 0.0,
)

_LON_LUNAR_ANOMALY = (
    1.0, -1.0, 0.0, 2.0, 0.0, 0.0, -2.0, -1.0, 1.0, 0.0, -1.0, 0.0, 1.0, 0.0, 1.0, 1.0, -1.0, 3.0, -2.0,
    -1.0, 0.0, -1.0, 0.0, 1.0, 2.0, 0.0, -3.0, -2.0, -1.0, -2.0, 1.0, 0.0, 2.0, 0.0, -1.0, 1.0, 0.0,
    -1.0, 2.0, -1.0, 1.0, -2.0, -1.0, -1.0, -2.0, 0.0, 1.0, 4.0, 0.0, -2.0, 0.0, 2.0, 1.0, -2.0, -3.0,
    2.0, 1.0, -1.0, 3.0,
)

_LON_MOON_NODE = (
    0.0, 0.0, 0.0, 0.0, 0.0, 2.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, -2.0, 2.0, -2.0, 0.0, 0.0, 0.0, 0.0, 0.0,
    0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 2.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, -2.0, 2.0, 0.0, 2.0, 0.0, 0.0, 0.0, 0.0,
    0.0, 0.0, -2.0, 0.0, 0.0, 0.0, 0.0, -2.0, -2.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0,
)

# Microdegrees
_LON_SINE_COEFF = (
    6288774.0, 1274027.0, 658314.0, 213618.0, -185116.0, -114332.0,
    58793.0, 57066.0, 53322.0, 45758.0, -40923.0, -34720.0, -30383.0,
    15327.0, -12528.0, 10980.0, 10675.0, 10034.0, 8548.0, -7888.0,
    -6766.0, -5163.0, 4987.0, 4036.0, 3994.0, 3861.0, 3665.0, -2689.0,
    -2602.0, 2390.0, -2348.0, 2236.0, -2120.0, -2069.0, 2048.0, -1773.0,
    -1595.0, 1215.0, -1110.0, -892.0, -810.0, 759.0, -713.0, -700.0, 691.0,
    596.0, 549.0, 537.0, 520.0, -487.0, -399.0, -381.0, 351.0, -340.0, 330.0,
    327.0, -323.0, 299.0, 294.0,
)

# The distance series has one more term than the longitude series
# (2D - M' - 2F, with no longitude amplitude).
_DIST_ELONGATION = _LON_ELONGATION + (2.0,)
_DIST_SOLAR_ANOMALY = _LON_SOLAR_ANOMALY + (0.0,)
_DIST_LUNAR_ANOMALY = _LON_LUNAR_ANOMALY + (-1.0,)
_DIST_MOON_NODE = _LON_MOON_NODE + (-2.0,)

# Meters
_DIST_COSINE_COEFF = (
    -20905355.0, -3699111.0, -2955968.0, -569925.0, 48888.0, -3149.0,
    246158.0, -152138.0, -170733.0, -204586.0, -129620.0, 108743.0,
    104755.0, 10321.0, 0.0, 79661.0, -34782.0, -23210.0, -21636.0, 24208.0,
    30824.0, -8379.0, -16675.0, -12831.0, -10445.0, -11650.0, 14403.0,
    -7003.0, 0.0, 10056.0, 6322.0, -9884.0, 5751.0, 0.0, -4950.0, 4130.0, 0.0,
    -3958.0, 0.0, 3258.0, 2616.0, -1897.0, -2117.0, 2354.0, 0.0, 0.0, -1423.0,
    -1117.0, -1571.0, -1739.0, 0.0, -4421.0, 0.0, 0.0, 0.0, 0.0, 1165.0, 0.0, 0.0,
    8752.0,
)


# ============================================================
# Latitude series (Meeus table 47.B)
# ============================================================

_LAT_ELONGATION = (
    0.0, 0.0, 0.0, 2.0, 2.0, 2.0, 2.0, 0.0, 2.0, 0.0, 2.0, 2.0, 2.0, 2.0, 2.0, 2.0, 2.0, 0.0, 4.0, 0.0, 0.0, 0.0,
    1.0, 0.0, 0.0, 0.0, 1.0, 0.0, 4.0, 4.0, 0.0, 4.0, 2.0, 2.0, 2.0, 2.0, 0.0, 2.0, 2.0, 2.0, 2.0, 4.0, 2.0, 2.0,
    0.0, 2.0, 1.0, 1.0, 0.0, 2.0, 1.0, 2.0, 0.0, 4.0, 4.0, 1.0, 4.0, 1.0, 4.0, 2.0,
)

_LAT_SOLAR_ANOMALY = (
    0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, -1.0, 0.0, 0.0, 1.0, -1.0, -1.0, -1.0, 1.0, 0.0, 1.0,
    0.0, 1.0, 0.0, 1.0, 1.0, 1.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, -1.0, 0.0, 0.0, 0.0, 0.0, 1.0, 1.0,
    0.0, -1.0, -2.0, 0.0, 1.0, 1.0, 1.0, 1.0, 1.0, 0.0, -1.0, 1.0, 0.0, -1.0, 0.0, 0.0, 0.0, -1.0, -2.0,
)

_LAT_LUNAR_ANOMALY = (
    0.0, 1.0, 1.0, 0.0, -1.0, -1.0, 0.0, 2.0, 1.0, 2.0, 0.0, -2.0, 1.0, 0.0, -1.0, 0.0, -1.0, -1.0, -1.0,
    0.0, 0.0, -1.0, 0.0, 1.0, 1.0, 0.0, 0.0, 3.0, 0.0, -1.0, 1.0, -2.0, 0.0, 2.0, 1.0, -2.0, 3.0, 2.0, -3.0,
    -1.0, 0.0, 0.0, 1.0, 0.0, 1.0, 1.0, 0.0, 0.0, -2.0, -1.0, 1.0, -2.0, 2.0, -2.0, -1.0, 1.0, 1.0, -2.0,
    0.0, 0.0,
)

_LAT_MOON_NODE = (
    1.0, 1.0, -1.0, -1.0, 1.0, -1.0, 1.0, 1.0, -1.0, -1.0, -1.0, -1.0, 1.0, -1.0, 1.0, 1.0, -1.0, -1.0,
    -1.0, 1.0, 3.0, 1.0, 1.0, 1.0, -1.0, -1.0, -1.0, 1.0, -1.0, 1.0, -3.0, 1.0, -3.0, -1.0, -1.0, 1.0,
    -1.0, 1.0, -1.0, 1.0, 1.0, 1.0, 1.0, -1.0, 3.0, -1.0, -1.0, 1.0, -1.0, -1.0, 1.0, -1.0, 1.0, -1.0,
    -1.0, -1.0, -1.0, -1.0, -1.0, 1.0,
)

# Microdegrees
_LAT_SINE_COEFF = (
    5128122.0, 280602.0, 277693.0, 173237.0, 55413.0, 46271.0, 32573.0,
    17198.0, 9266.0, 8822.0, 8216.0, 4324.0, 4200.0, -3359.0, 2463.0, 2211.0,
    2065.0, -1870.0, 1828.0, -1794.0, -1749.0, -1565.0, -1491.0, -1475.0,
    -1410.0, -1344.0, -1335.0, 1107.0, 1021.0, 833.0, 777.0, 671.0, 607.0,
    596.0, 491.0, -451.0, 439.0, 422.0, 421.0, -366.0, -351.0, 331.0, 315.0,
    302.0, -283.0, -229.0, 223.0, 223.0, -220.0, -220.0, -185.0, 181.0,
    -177.0, 176.0, 166.0, -164.0, 132.0, -119.0, 115.0, 107.0,
)


# ============================================================
# New moon series (Meeus ch. 49)
# ============================================================

_NM_SINE_COEFF = (
    -0.40720, 0.17241, 0.01608, 0.01039, 0.00739,
    -0.00514, 0.00208, -0.00111, -0.00057, 0.00056,
    -0.00042, 0.00042, 0.00038, -0.00024, -0.00007,
    0.00004, 0.00004, 0.00003, 0.00003, -0.00003,
    0.00003, -0.00002, -0.00002, 0.00002,
)

_NM_E_FACTOR = (
    0.0, 1.0, 0.0, 0.0, 1.0, 1.0, 2.0, 0.0, 0.0, 1.0, 0.0, 1.0,
    1.0, 1.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0,
)

_NM_SOLAR_COEFF = (
    0.0, 1.0, 0.0, 0.0, -1.0, 1.0, 2.0, 0.0, 0.0, 1.0, 0.0, 1.0,
    1.0, -1.0, 2.0, 0.0, 3.0, 1.0, 0.0, 1.0, -1.0, -1.0, 1.0, 0.0,
)

_NM_LUNAR_COEFF = (
    1.0, 0.0, 2.0, 0.0, 1.0, 1.0, 0.0, 1.0, 1.0, 2.0, 3.0, 0.0,
    0.0, 2.0, 1.0, 2.0, 0.0, 1.0, 2.0, 1.0, 1.0, 1.0, 3.0, 4.0,
)

_NM_MOON_COEFF = (
    0.0, 0.0, 0.0, 2.0, 0.0, 0.0, 0.0, -2.0, 2.0, 0.0, 0.0, 2.0,
    -2.0, 0.0, 0.0, -2.0, 0.0, -2.0, 2.0, 2.0, 2.0, -2.0, 0.0, 0.0,
)

_NM_ADD_CONST = (
    251.88, 251.83, 349.42, 84.66, 141.74, 207.14, 154.84,
    34.52, 207.19, 291.34, 161.72, 239.56, 331.55,
)

_NM_ADD_COEFF = (
    0.016321, 26.651886, 36.412478, 18.206239, 53.303771,
    2.453732, 7.306860, 27.261239, 0.121824, 1.844379,
    24.198154, 25.513099, 3.592518,
)

_NM_ADD_FACTOR = (
    0.000165, 0.000164, 0.000126, 0.000110, 0.000062, 0.000060,
    0.000056, 0.000047, 0.000042, 0.000040, 0.000037, 0.000035,
    0.000023,
)


# ============================================================
# Position
# ============================================================

def _venus_argument(c: float) -> float:
    return 119.75 + c * 131.849


def lunar_longitude(t: float) -> float:
    """
    Geocentric apparent lunar longitude (degrees, [0,360)) at universal moment t.

    Σ amp · E^|m| · sin(d·D + m·M + m'·M' + f·F), plus the Venus,
    Jupiter and flattening-of-the-Earth terms and nutation.
    """
    c = julian_centuries_from_moment(t)
    fa = aa.fundamental_args(c)
    e = fa.E

    correction = 1.0e-6 * sigma(
        [_LON_SINE_COEFF, _LON_ELONGATION, _LON_SOLAR_ANOMALY, _LON_LUNAR_ANOMALY, _LON_MOON_NODE],
        lambda v, w, x, y, z: v * e ** abs(x) * sin_deg(w * fa.D_deg + x * fa.M_deg + y * fa.Mp_deg + z * fa.F_deg),
    )
    venus = (3958.0 / 1000000.0) * sin_deg(_venus_argument(c))
    jupiter = (318.0 / 1000000.0) * sin_deg(53.09 + c * 479264.29)
    flat_earth = (1962.0 / 1000000.0) * sin_deg(fa.Lp_deg - fa.F_deg)
    return mod(fa.Lp_deg + correction + venus + jupiter + flat_earth + aa.nutation(t), 360.0)


def lunar_latitude(t: float) -> float:
    """Geocentric lunar latitude (degrees, signed) at universal moment t."""
    c = julian_centuries_from_moment(t)
    fa = aa.fundamental_args(c)
    e = fa.E
    l, f, m_prime = fa.Lp_deg, fa.F_deg, fa.Mp_deg

    beta = 1.0e-6 * sigma(
        [_LAT_SINE_COEFF, _LAT_ELONGATION, _LAT_SOLAR_ANOMALY, _LAT_LUNAR_ANOMALY, _LAT_MOON_NODE],
        lambda v, w, x, y, z: v * e ** abs(x) * sin_deg(w * fa.D_deg + x * fa.M_deg + y * m_prime + z * f),
    )
    venus = (175.0 / 1000000.0) * (
        sin_deg(_venus_argument(c) + f) + sin_deg(_venus_argument(c) - f)
    )
    flat_earth = (
        (-2235.0 / 1000000.0) * sin_deg(l)
        + (127.0 / 1000000.0) * sin_deg(l - m_prime)
        + (-115.0 / 1000000.0) * sin_deg(l + m_prime)
    )
    extra = (382.0 / 1000000.0) * sin_deg(313.45 + c * 481266.484)
    return beta + venus + flat_earth + extra


def lunar_distance(t: float) -> float:
    """Earth–Moon distance (meters) at universal moment t."""
    c = julian_centuries_from_moment(t)
    fa = aa.fundamental_args(c)
    e = fa.E

    correction = sigma(
        [_DIST_COSINE_COEFF, _DIST_ELONGATION, _DIST_SOLAR_ANOMALY, _DIST_LUNAR_ANOMALY, _DIST_MOON_NODE],
        lambda v, w, x, y, z: v * e ** abs(x) * cos_deg(w * fa.D_deg + x * fa.M_deg + y * fa.Mp_deg + z * fa.F_deg),
    )
    return AVERAGE_DISTANCE_EARTH_TO_MOON + correction


def lunar_node(t: float) -> float:
    """Longitude of the ascending node (degrees, [-90, 90))."""
    return mod(aa.moon_node(julian_centuries_from_moment(t)) + 90.0, 180.0) - 90.0


def sidereal_lunar_longitude(t: float) -> float:
    return mod(lunar_longitude(t) - aa.precession(t) + aa.SIDEREAL_START, 360.0)


# ============================================================
# Equatorial & horizontal coordinates
# ============================================================

def right_ascension(t: float, beta: float, lam: float) -> float:
    """Right ascension (degrees, [0,360)) of ecliptic (lam, beta) at moment t."""
    epsilon = aa.obliquity(t)
    return atan_deg(
        sin_deg(lam) * cos_deg(epsilon) - tan_deg(beta) * sin_deg(epsilon),
        cos_deg(lam),
    )


def declination(t: float, beta: float, lam: float) -> float:
    """Declination (degrees, signed) of ecliptic (lam, beta) at moment t."""
    epsilon = aa.obliquity(t)
    return asin_deg(sin_deg(beta) * cos_deg(epsilon) + cos_deg(beta) * sin_deg(epsilon) * sin_deg(lam))


def lunar_altitude(t: float, location: Location) -> float:
    """Geocentric altitude of the Moon (degrees, [-180, 180)) above the horizon."""
    phi, psi = location.latitude, location.longitude
    lam = lunar_longitude(t)
    beta = lunar_latitude(t)
    alpha = right_ascension(t, beta, lam)
    delta = declination(t, beta, lam)
    theta = aa.sidereal_from_moment(t)
    h = mod(theta + psi - alpha, 360.0)
    altitude = asin_deg(sin_deg(phi) * sin_deg(delta) + cos_deg(phi) * cos_deg(delta) * cos_deg(h))
    return mod(altitude + 180.0, 360.0) - 180.0


def lunar_parallax(t: float, location: Location) -> float:
    """Parallax in altitude (degrees) for the observer at location."""
    geo = lunar_altitude(t, location)
    delta = lunar_distance(t)
    alt = EQUATORIAL_EARTH_RADIUS / delta
    return asin_deg(alt * cos_deg(geo))


def topocentric_lunar_altitude(t: float, location: Location) -> float:
    return lunar_altitude(t, location) - lunar_parallax(t, location)


# ============================================================
# New moons
# ============================================================

def nth_new_moon(n: int) -> float:
    """
    Universal moment of the n-th new moon after the one of January 0000.

    Mean-phase polynomial in the lunation count since January 2000,
    periodic corrections depending on M, M', F and Ω, and thirteen
    planetary arguments; converted from dynamical to universal time with
    the moment-based ΔT model.
    """
    k = n - MONTHS_EPOCH_TO_J2000
    c = k / 1236.85

    approx = J2000 + poly(c, [5.09766, aa.MEAN_SYNODIC_MONTH * 1236.85, 0.00015437, -0.000000150, 0.00000000073])
    e = poly(c, [1.0, -0.002516, -0.0000074])
    solar_anomaly = poly(c, [2.5534, 1236.85 * 29.10535670, -0.0000014, -0.00000011])
    lunar_anomaly = poly(c, [201.5643, 385.81693528 * 1236.85, 0.0107582, 0.00001238, -0.000000058])
    moon_argument = poly(c, [160.7108, 390.67050284 * 1236.85, -0.0016118, -0.00000227, 0.000000011])
    omega = poly(c, [124.7746, -1.56375588 * 1236.85, 0.0020672, 0.00000215])

    correction = -0.00017 * sin_deg(omega) + sigma(
        [_NM_SINE_COEFF, _NM_E_FACTOR, _NM_SOLAR_COEFF, _NM_LUNAR_COEFF, _NM_MOON_COEFF],
        lambda v, w, x, y, z: v * e ** w * sin_deg(x * solar_anomaly + y * lunar_anomaly + z * moon_argument),
    )
    extra = 0.000325 * sin_deg(poly(c, [299.77, 132.8475848, -0.009173]))
    additional = sigma(
        [_NM_ADD_CONST, _NM_ADD_COEFF, _NM_ADD_FACTOR],
        lambda i, j, l: l * sin_deg(i + j * k),
    )
    return universal_from_dynamical(approx + correction + extra + additional)

