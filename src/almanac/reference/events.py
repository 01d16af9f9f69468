from __future__ import annotations

"""
almanac.reference.events

Event solvers built on the solar and lunar position models:

- sunrise / sunset (NOAA two-pass refinement on the cheap solar model)
- solstices and equinoxes (Meeus ch. 27, valid 1000..3000 CE)
- lunar phase, phase crossings and new moons (precise solar longitude)
- illuminated fraction of the lunar disk (Meeus ch. 48)

Sunrise/sunset work in Julian days and minutes; everything lunar works in
moments (days since 0000-01-01 00:00 UTC).
"""

import math
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from typing import Dict, Literal, Optional, Tuple, Union

from ..core.errors import InputValidationError, NoEventError
from ..core.types import Location
from . import astro_args as aa
from . import lunar, solar
from .deltat import jd_utc_from_jd_tt, julian_centuries_from_moment
from .earth import adjusted_zenith
from .kernel import (
    AU_TO_KM,
    cos_deg,
    final_index,
    invert_angular,
    mod,
    next_index,
    sigma,
    to_degrees,
    to_radians,
)
from .time_scales import (
    MINUTES_PER_DEGREE,
    date_from_julian_day,
    julian_centuries_from_julian_day,
    julian_day_from_julian_centuries,
)

Mode = Literal["sunrise", "sunset"]

MINUTES_PER_DAY = 1440.0


# ============================================================
# Sunrise / sunset
# ============================================================

def sun_hour_angle_at_horizon(latitude: float, solar_dec: float, zenith: float, mode: Mode) -> float:
    """
    Hour angle (radians) of the Sun at the target zenith distance;
    negative for sunset.

    Raises NoEventError when the Sun never reaches that zenith distance on
    the day (polar day or night).
    """
    lat_r = to_radians(latitude)
    dec_r = to_radians(solar_dec)
    zen_r = to_radians(zenith)

    x = math.cos(zen_r) / (math.cos(lat_r) * math.cos(dec_r)) - math.tan(lat_r) * math.tan(dec_r)
    if not (-1.0 <= x <= 1.0):
        raise NoEventError(f"sun does not reach zenith {zenith} at latitude {latitude}")

    hour_angle = math.acos(x)
    return -hour_angle if mode == "sunset" else hour_angle


def solar_noon_utc(julian_centuries: float, longitude: float) -> float:
    """
    Solar noon in minutes after 00:00 UTC for the day starting at the
    given Julian centuries; longitude is positive East.
    """
    century_start = julian_day_from_julian_centuries(julian_centuries)

    approx_tnoon = julian_centuries_from_julian_day(century_start - longitude / 360.0)
    approx_sol_noon = 720.0 - longitude * MINUTES_PER_DEGREE - solar.equation_of_time(approx_tnoon)

    tnoon = julian_centuries_from_julian_day(century_start - 0.5 + approx_sol_noon / MINUTES_PER_DAY)
    return 720.0 - longitude * MINUTES_PER_DEGREE - solar.equation_of_time(tnoon)


def approximate_utc_sun_position(
    approx_julian_centuries: float,
    latitude: float,
    longitude: float,
    zenith: float,
    mode: Mode,
) -> float:
    """
    One NOAA pass: event time in minutes from 00:00 UTC (may fall outside
    [0, 1440) for longitudes far from Greenwich).
    """
    eq_time = solar.equation_of_time(approx_julian_centuries)
    solar_dec = solar.solar_declination(approx_julian_centuries)
    hour_angle = sun_hour_angle_at_horizon(latitude, solar_dec, zenith, mode)

    delta = longitude + to_degrees(hour_angle)
    return 720.0 - MINUTES_PER_DEGREE * delta - eq_time


def calculate_utc_sun_position(
    julian_day: float,
    latitude: float,
    longitude: float,
    zenith: float,
    mode: Mode,
) -> float:
    """Two passes: first at solar noon, then at the first-pass estimate."""
    julian_centuries = julian_centuries_from_julian_day(julian_day)

    noon_minutes = solar_noon_utc(julian_centuries, longitude)
    tnoon = julian_centuries_from_julian_day(julian_day + noon_minutes / MINUTES_PER_DAY)
    first_pass = approximate_utc_sun_position(tnoon, latitude, longitude, zenith, mode)

    trefinement = julian_centuries_from_julian_day(julian_day + first_pass / MINUTES_PER_DAY)
    return approximate_utc_sun_position(trefinement, latitude, longitude, zenith, mode)


def utc_sun_position(
    julian_day: float,
    location: Location,
    solar_elevation: Union[str, float],
    mode: Mode,
) -> Optional[float]:
    """
    UTC hour of sunrise or sunset in [0, 24) on the day starting at
    julian_day, or None when the Sun does not reach the target elevation.
    """
    zenith = adjusted_zenith(solar.solar_elevation(solar_elevation), location.elevation)
    try:
        minutes = calculate_utc_sun_position(julian_day, location.latitude, location.longitude, zenith, mode)
    except NoEventError:
        return None
    return mod(minutes / 60.0, 24.0)


# ============================================================
# Solstices & equinoxes (Meeus ch. 27)
# ============================================================

SeasonEvent = Literal["march", "june", "september", "december"]

SOLSTICE_YEAR_RANGE = (1000, 3000)

# JDE0 polynomial in Y = (year - 2000) / 1000, table 27.B
_JDE0_COEFFS: Dict[str, Tuple[float, ...]] = {
    "march":     (2451623.80984, 365242.37404, 0.05169, -0.00411, -0.00057),
    "june":      (2451716.56767, 365241.62603, 0.00325, 0.00888, -0.00030),
    "september": (2451810.21715, 365242.01767, -0.11575, 0.00337, 0.00078),
    "december":  (2451900.05952, 365242.74049, -0.06223, -0.00823, 0.00032),
}

# Periodic terms of table 27.C: amplitude, phase (deg), rate (deg per century)
_PERIODIC_A = (
    485, 203, 199, 182, 156, 136, 77, 74, 70, 58, 52, 50,
    45, 44, 29, 18, 17, 16, 14, 12, 12, 12, 9, 8,
)
_PERIODIC_B = (
    324.96, 337.23, 342.08, 27.85, 73.14, 171.52, 222.54, 296.72, 243.58, 119.81, 297.17, 21.02,
    247.54, 325.15, 60.93, 155.12, 288.79, 198.04, 199.76, 95.39, 287.11, 320.81, 227.73, 15.45,
)
_PERIODIC_C = (
    1934.136, 32964.467, 20.186, 445267.112, 45036.886, 22518.443, 65928.934, 3034.906,
    9037.513, 33718.147, 150.678, 2281.226, 29929.562, 31555.956, 4443.417, 67555.328,
    4562.452, 62894.029, 31436.921, 14577.848, 31931.756, 34777.259, 1222.114, 16859.074,
)

_MONTH_EVENTS = {3: "march", 6: "june", 9: "september", 12: "december"}


def season_event(event: Union[str, int]) -> str:
    """Normalize an event given as a month name or month number."""
    if isinstance(event, int) and not isinstance(event, bool):
        name = _MONTH_EVENTS.get(event)
    elif isinstance(event, str):
        name = event.lower() if event.lower() in _JDE0_COEFFS else None
    else:
        name = None
    if name is None:
        raise InputValidationError(
            f"Unknown season event {event!r}. Available: {list(_JDE0_COEFFS)} or months 3, 6, 9, 12"
        )
    return name


def _check_year(year: int) -> None:
    lo, hi = SOLSTICE_YEAR_RANGE
    if isinstance(year, bool) or not isinstance(year, int) or not (lo <= year <= hi):
        raise InputValidationError(f"year must be an integer in [{lo}, {hi}]: {year!r}")


def solstice_jde(year: int, event: Union[str, int]) -> float:
    """
    Julian Ephemeris Day (TT) of a solstice or equinox.

    JDE0 from the mean-event polynomial, then
      T  = (JDE0 - 2451545) / 36525
      W  = 35999.373 T - 2.47
      Δλ = 1 + 0.0334 cos W + 0.0007 cos 2W
      S  = Σ A cos(B + C T)
      JDE = JDE0 + 0.00001 S / Δλ
    """
    _check_year(year)
    a, b, c, d, e = _JDE0_COEFFS[season_event(event)]

    y = (year - 2000) / 1000.0
    jde0 = a + y * (b + y * (c + y * (d + y * e)))

    t = julian_centuries_from_julian_day(jde0)
    w = 35999.373 * t - 2.47
    dl = 1.0 + 0.0334 * cos_deg(w) + 0.0007 * cos_deg(2.0 * w)
    s = sigma([_PERIODIC_A, _PERIODIC_B, _PERIODIC_C], lambda amp, phase, rate: amp * cos_deg(phase + rate * t))
    return jde0 + 0.00001 * s / dl


def solstice_utc(year: int, event: Union[str, int]) -> datetime:
    """Solstice or equinox as an aware UTC datetime."""
    return date_from_julian_day(jd_utc_from_jd_tt(solstice_jde(year, event), year))


# ============================================================
# Lunar phase
# ============================================================

def new() -> float:
    return 0.0

def first_quarter() -> float:
    return 90.0

def full() -> float:
    return 180.0

def last_quarter() -> float:
    return 270.0


LUNAR_PHASES: Dict[str, float] = {
    "new": new(),
    "first_quarter": first_quarter(),
    "full": full(),
    "last_quarter": last_quarter(),
}


def phase_angle(phase: Union[str, float]) -> float:
    """Named phase or angle in degrees -> angle in [0, 360)."""
    if isinstance(phase, str):
        try:
            return LUNAR_PHASES[phase]
        except KeyError:
            raise InputValidationError(
                f"Unknown lunar phase '{phase}'. Available: {list(LUNAR_PHASES)}"
            ) from None
    if isinstance(phase, bool) or not isinstance(phase, (int, float)):
        raise InputValidationError(f"lunar phase must be a name or a number: {phase!r}")
    return mod(float(phase), 360.0)


@lru_cache(maxsize=1)
def _first_new_moon() -> float:
    return lunar.nth_new_moon(0)


def lunar_phase(t: float) -> float:
    """
    Phase (degrees, [0,360)) at moment t: elongation of the Moon from the
    Sun in longitude. Near conjunction the raw elongation can land on the
    wrong side of 0/360; when it disagrees by more than half a turn with the
    position inside the current mean lunation, the latter wins.
    """
    phi = mod(lunar.lunar_longitude(t) - solar.solar_longitude(t), 360.0)
    n = round((t - _first_new_moon()) / aa.MEAN_SYNODIC_MONTH)
    phi_prime = 360.0 * mod((t - lunar.nth_new_moon(n)) / aa.MEAN_SYNODIC_MONTH, 1.0)
    if abs(phi - phi_prime) > 180.0:
        return phi_prime
    return phi


def lunar_phase_at_or_before(phi: float, t: float) -> float:
    """Last moment at or before t when the phase is phi."""
    tau = t - aa.MEAN_SYNODIC_MONTH / 360.0 * mod(lunar_phase(t) - phi, 360.0)
    a = tau - 2.0
    b = min(t, tau + 2.0)
    return invert_angular(lunar_phase, phi, a, b)


def lunar_phase_at_or_after(phi: float, t: float) -> float:
    """First moment at or after t when the phase is phi."""
    tau = t + aa.MEAN_SYNODIC_MONTH / 360.0 * mod(phi - lunar_phase(t), 360.0)
    a = max(t, tau - 2.0)
    b = tau + 2.0
    return invert_angular(lunar_phase, phi, a, b)


def _lunation_estimate(t: float) -> int:
    return round((t - _first_new_moon()) / aa.MEAN_SYNODIC_MONTH - lunar_phase(t) / 360.0)


def new_moon_before(t: float) -> float:
    """Moment of the last new moon strictly before t."""
    n = _lunation_estimate(t)
    return lunar.nth_new_moon(final_index(n - 1, lambda k: lunar.nth_new_moon(k) < t))


def new_moon_at_or_after(t: float) -> float:
    """Moment of the first new moon at or after t."""
    n = _lunation_estimate(t)
    return lunar.nth_new_moon(next_index(n, lambda k: lunar.nth_new_moon(k) >= t))


# ============================================================
# Illumination (Meeus ch. 48)
# ============================================================

@dataclass(frozen=True)
class Illumination:
    fraction: float        # [0, 1]
    phase_angle: float     # Sun-Moon-Earth angle, degrees [0, 180]
    elongation: float      # geocentric Sun-Moon angle, degrees [0, 180]


def lunar_illumination(t: float) -> Illumination:
    """
    Illuminated fraction of the lunar disk at moment t.

      cos ψ = cos β cos(λ - λ0)
      i     = atan2(R sin ψ, Δ - R cos ψ)
      k     = (1 + cos i) / 2

    with R the Earth–Sun and Δ the Earth–Moon distance.
    """
    lam = lunar.lunar_longitude(t)
    beta = lunar.lunar_latitude(t)
    lam0 = solar.solar_longitude(t)

    psi = math.acos(max(-1.0, min(1.0, cos_deg(beta) * cos_deg(lam - lam0))))
    big_r = solar.sun_distance(julian_centuries_from_moment(t)) * AU_TO_KM
    delta = lunar.lunar_distance(t) / 1000.0

    i = math.atan2(big_r * math.sin(psi), delta - big_r * math.cos(psi))
    return Illumination(
        fraction=(1.0 + math.cos(i)) / 2.0,
        phase_angle=to_degrees(i),
        elongation=to_degrees(psi),
    )
