from __future__ import annotations

"""
almanac.reference.deltat

ΔT (= TT − UT) models.

Two independent models live here and are deliberately kept apart:

- ``ephemeris_correction(t)``: moment-based piecewise polynomial
  (Reingold & Dershowitz, *Calendrical Calculations*), in days. Used by
  the solar and lunar position models through ``julian_centuries_from_moment``
  and by ``nth_new_moon``.
- ``delta_t_seconds_for_year(year)``: year-based model (Meeus, *Astronomical
  Algorithms*, ch. 10): a table of observed values for the even years
  1620..2002, linear interpolation in between, Meeus polynomials outside.
  Used only to bring solstice/equinox instants from TT to UTC.

The two disagree by a few seconds over the modern era. Which one is "right"
is an open question; callers must use the one their results are calibrated
against.
"""

from dataclasses import dataclass
from typing import Tuple

from .kernel import poly
from .time_scales import (
    J2000,
    JULIAN_DAYS_PER_CENTURY,
    SECONDS_PER_DAY,
    gregorian_year_from_moment,
    jdn_from_ymd,
)


# ---------------------------------------------------------------------------
# Table model
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DeltaTTable:
    """
    Piecewise-linear ΔT table over a year coordinate.
    """
    x: Tuple[float, ...]   # years (strictly increasing)
    y: Tuple[float, ...]   # ΔT in seconds

    def __len__(self) -> int:
        return len(self.x)

    def eval(self, xq: float) -> float:
        if not (self.x[0] <= xq <= self.x[-1]):
            raise ValueError(f"x out of range [{self.x[0]}, {self.x[-1]}]: {xq}")
        # binary search
        lo, hi = 0, len(self.x) - 1
        while hi - lo > 1:
            mid = (lo + hi) // 2
            if self.x[mid] <= xq:
                lo = mid
            else:
                hi = mid
        x0, x1 = self.x[lo], self.x[hi]
        y0, y1 = self.y[lo], self.y[hi]
        if x1 == x0:
            return y0
        t = (xq - x0) / (x1 - x0)
        return y0 + t * (y1 - y0)

    @property
    def range(self) -> Tuple[float, float]:
        return (self.x[0], self.x[-1])


# Meeus, Astronomical Algorithms, table 10.A: ΔT (seconds) for the even
# years 1620, 1622, ..., 2002.
_MEEUS_EVEN_YEARS = (
    # 1620
    121, 112, 103, 95, 88, 82, 77, 72, 68, 63, 60, 56, 53, 51, 48, 46, 44, 42, 40, 38,
    # 1660
    35, 33, 31, 29, 26, 24, 22, 20, 18, 16, 14, 12, 11, 10, 9, 8, 7, 7, 7, 7,
    # 1700
    7, 7, 8, 8, 9, 9, 9, 9, 9, 10, 10, 10, 10, 10, 10, 10, 10, 11, 11, 11,
    # 1740
    11, 11, 12, 12, 12, 12, 13, 13, 13, 14, 14, 14, 14, 15, 15, 15, 15, 15, 16, 16,
    # 1780
    16, 16, 16, 16, 16, 16, 15, 15, 14, 13,
    # 1800
    13.1, 12.5, 12.2, 12.0, 12.0, 12.0, 12.0, 12.0, 12.0, 11.9, 11.6, 11.0, 10.2, 9.2, 8.2,
    # 1830
    7.1, 6.2, 5.6, 5.4, 5.3, 5.4, 5.6, 5.9, 6.2, 6.5, 6.8, 7.1, 7.3, 7.5, 7.6,
    # 1860
    7.7, 7.3, 6.2, 5.2, 2.7, 1.4, -1.2, -2.8, -3.8, -4.8, -5.5, -5.3, -5.6, -5.7, -5.9,
    # 1890
    -6.0, -6.3, -6.5, -6.2, -4.7, -2.8, -0.1, 2.6, 5.3, 7.7, 10.4, 13.3, 16.0, 18.2, 20.2,
    # 1920
    21.1, 22.4, 23.5, 23.8, 24.3, 24.0, 23.9, 23.9, 23.7, 24.0, 24.3, 25.3, 26.2, 27.3, 28.2,
    # 1950
    29.1, 30.0, 30.7, 31.4, 32.2, 33.1, 34.0, 35.0, 36.5, 38.3, 40.2, 42.2, 44.5, 46.5, 48.5,
    # 1980
    50.5, 52.5, 53.8, 54.9, 55.8, 56.9, 58.3, 60.0, 61.6, 63.0, 63.8, 64.3,
)

MEEUS_TABLE = DeltaTTable(
    x=tuple(float(1620 + 2 * i) for i in range(len(_MEEUS_EVEN_YEARS))),
    y=tuple(float(v) for v in _MEEUS_EVEN_YEARS),
)


def delta_t_seconds_for_year(year: float) -> float:
    """
    Year-based ΔT in seconds (Meeus ch. 10).

    Inside 1620..2002 the table is read directly for even years and
    linearly interpolated otherwise (odd years get the neighbours' mean).
    Outside, with t = (year - 2000) / 100:
      year < 948 :  2177 + 497 t + 44.1 t^2
      otherwise  :  102 + 102 t + 25.3 t^2  (+ 0.37 (year - 2100) for 2000 < year < 2100)
    """
    a, b = MEEUS_TABLE.range
    if a <= year <= b:
        return MEEUS_TABLE.eval(year)

    t = (year - 2000.0) / 100.0
    if year < 948.0:
        return 2177.0 + 497.0 * t + 44.1 * t * t
    dt = 102.0 + 102.0 * t + 25.3 * t * t
    if 2000.0 < year < 2100.0:
        dt += 0.37 * (year - 2100.0)
    return dt


def jd_utc_from_jd_tt(jd_tt: float, year: float) -> float:
    """JD(TT) -> JD(UTC) with the year-based model."""
    return jd_tt - delta_t_seconds_for_year(year) / SECONDS_PER_DAY


def jd_tt_from_jd_utc(jd_utc: float, year: float) -> float:
    return jd_utc + delta_t_seconds_for_year(year) / SECONDS_PER_DAY


# ---------------------------------------------------------------------------
# Moment-based piecewise polynomial (Calendrical Calculations)
# ---------------------------------------------------------------------------

def ephemeris_correction(t: float) -> float:
    """
    ΔT in days for the Gregorian year containing moment t.

    Eras:
      2050..2150   parabola with discontinuity fix
      2006..2050   quadratic in (year - 2000)
      1987..2006   quintic in (year - 2000)
      1900..1987   polynomial in centuries from 1900-01-01 to mid-year
      1800..1900   same argument, 10th degree
      1700..1800   cubic in (year - 1700)
      1600..1700   cubic in (year - 1600)
       500..1600   polynomial in (year - 1000)/100
      -500..500    polynomial in year/100
      otherwise    long-term parabola in (year - 1820)/100
    """
    year = gregorian_year_from_moment(t)

    if 2050 <= year <= 2150:
        return (-20.0 + 32.0 * ((year - 1820) / 100.0) ** 2 + 0.5628 * (2150 - year)) / SECONDS_PER_DAY

    y2000 = year - 2000
    if 2006 <= year < 2050:
        return poly(y2000, [62.92, 0.32217, 0.005589]) / SECONDS_PER_DAY
    if 1987 <= year < 2006:
        return poly(y2000, [63.86, 0.3345, -0.060374, 0.0017275, 0.000651814, 0.00002373599]) / SECONDS_PER_DAY

    if 1800 <= year < 1987:
        # centuries from 1900-01-01 to July 1 of the year
        c = (jdn_from_ymd(year, 7, 1) - jdn_from_ymd(1900, 1, 1)) / JULIAN_DAYS_PER_CENTURY
        if year >= 1900:
            return poly(c, [-0.00002, 0.000297, 0.025184, -0.181133, 0.553040, -0.861938, 0.677066, -0.212591])
        return poly(c, [
            -0.000009, 0.003844, 0.083563, 0.865736, 4.867575, 15.845535,
            31.332267, 38.291999, 28.316289, 11.636204, 2.043794,
        ])

    if 1700 <= year < 1800:
        return poly(year - 1700, [8.118780842, -0.005092142, 0.003336121, -0.0000266484]) / SECONDS_PER_DAY
    if 1600 <= year < 1700:
        return poly(year - 1600, [120.0, -0.9808, -0.01532, 0.000140272128]) / SECONDS_PER_DAY
    if 500 <= year < 1600:
        return poly((year - 1000) / 100.0, [
            1574.2, -556.01, 71.23472, 0.319781, -0.8503463, -0.005050998, 0.0083572073,
        ]) / SECONDS_PER_DAY
    if -500 < year < 500:
        return poly(year / 100.0, [
            10583.6, -1014.41, 33.78311, -5.952053, -0.1798452, 0.022174192, 0.0090316521,
        ]) / SECONDS_PER_DAY

    return poly((year - 1820) / 100.0, [-20.0, 0.0, 32.0]) / SECONDS_PER_DAY


def dynamical_from_universal(t: float) -> float:
    """Universal moment -> dynamical (TT) moment."""
    return t + ephemeris_correction(t)


def universal_from_dynamical(t: float) -> float:
    """Dynamical (TT) moment -> universal moment."""
    return t - ephemeris_correction(t)


def julian_centuries_from_moment(t: float) -> float:
    """Dynamical-time Julian centuries from J2000.0 for a universal moment."""
    return (dynamical_from_universal(t) - J2000) / JULIAN_DAYS_PER_CENTURY
