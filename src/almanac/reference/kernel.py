from __future__ import annotations

import math
from typing import Callable, Optional, Sequence, Tuple, Union

Number = Union[int, float]


# ------------------------------------------------------------
# Units & helpers
# ------------------------------------------------------------

RADIANS_TO_DEGREES = 180.0 / math.pi

AU_TO_KM = 149_597_870.7
AU_TO_M = AU_TO_KM * 1000.0


def to_degrees(radians: float) -> float:
    return radians * RADIANS_TO_DEGREES

def to_radians(degrees: float) -> float:
    return degrees / RADIANS_TO_DEGREES

def au_to_km(au: float) -> float:
    return au * AU_TO_KM

def au_to_m(au: float) -> float:
    return au * AU_TO_M

def m_to_au(m: float) -> float:
    return m / AU_TO_M

def secs(x: float) -> float:
    """Arc seconds -> degrees."""
    return x / 3600.0

def angle(d: float, m: float, s: float) -> float:
    """Degrees, arc minutes and arc seconds -> degrees."""
    return d + (m + s / 60.0) / 60.0


# ------------------------------------------------------------
# Modular arithmetic
# ------------------------------------------------------------

def mod(x: Number, m: Number) -> Number:
    """
    Floored modulo: the result has the sign of m.

    Unlike math.fmod (truncated division) mod(-1, 360) == 359.
    Two ints give an int, anything else gives a float.
    """
    if isinstance(x, int) and isinstance(m, int):
        return x - (x // m) * m
    return x - math.floor(x / m) * m

def amod(x: Number, m: Number) -> Number:
    """Adjusted remainder in (0, m]: amod(12, 12) == 12."""
    return m + mod(x, -m)

def degrees(x: float) -> float:
    """Normalize an angle to [0, 360)."""
    return mod(x, 360.0)

def div_mod(n1: Number, n2: Number) -> Tuple[Number, Number]:
    """Floored quotient and remainder."""
    if isinstance(n1, int) and isinstance(n2, int):
        q = n1 // n2
    else:
        q = math.floor(n1 / n2)
    return q, n1 - q * n2

def signum(x: Number) -> int:
    if x > 0:
        return 1
    if x < 0:
        return -1
    return 0


# ------------------------------------------------------------
# Polynomials & periodic series
# ------------------------------------------------------------

def poly(x: float, coeffs: Sequence[float]) -> float:
    """Horner evaluation of coeffs[0] + x*(coeffs[1] + x*(coeffs[2] + ...))."""
    acc = 0.0
    for c in reversed(coeffs):
        acc = acc * x + c
    return acc

def sigma(coeff_lists: Sequence[Sequence[float]], f: Callable[..., float]) -> float:
    """
    Σ f(a_i, b_i, ...) over the i-th elements of equal-length lists.

    Every truncated trigonometric series in this package is a call to
    sigma: the first list holds the amplitudes, the others the per-term
    multipliers of the fundamental arguments.
    """
    lengths = {len(c) for c in coeff_lists}
    if len(lengths) > 1:
        raise ValueError(f"sigma needs lists of equal length, got {sorted(lengths)}")
    total = 0.0
    for term in zip(*coeff_lists):
        total += f(*term)
    return total


# ------------------------------------------------------------
# Trigonometry in degrees
# ------------------------------------------------------------

def sin_deg(x: float) -> float:
    return math.sin(to_radians(x))

def cos_deg(x: float) -> float:
    return math.cos(to_radians(x))

def tan_deg(x: float) -> float:
    return math.tan(to_radians(x))

def asin_deg(x: float) -> float:
    return to_degrees(math.asin(x))

def acos_deg(x: float) -> float:
    return to_degrees(math.acos(x))

def atan_deg(y: float, x: float) -> Optional[float]:
    """
    Quadrant-aware arctangent of y/x in degrees, normalized to [0, 360).
    Undefined (None) at the origin.
    """
    if x == 0 and y == 0:
        return None
    if x == 0:
        alpha = signum(y) * 90.0
    elif x > 0:
        alpha = to_degrees(math.atan(y / x))
    else:
        alpha = to_degrees(math.atan(y / x)) + (180.0 if y >= 0 else -180.0)
    return mod(alpha, 360.0)


# ------------------------------------------------------------
# Searches
# ------------------------------------------------------------

def linear_search(start: int, pred: Callable[[int], bool], direction: int = 1) -> int:
    """
    Step from start by direction (+1 or -1) and return the first index for
    which pred holds. Callers bracket the answer within a few steps.
    """
    if direction not in (1, -1):
        raise ValueError("direction must be +1 or -1")
    k = start
    while not pred(k):
        k += direction
    return k

def next_index(k: int, pred: Callable[[int], bool]) -> int:
    """Smallest index >= k for which pred holds."""
    return linear_search(k, pred, 1)

def final_index(k: int, pred: Callable[[int], bool]) -> int:
    """Largest index >= k such that pred holds for k, k+1, ..., that index."""
    return linear_search(k + 1, lambda i: not pred(i), 1) - 1

def bisection_search(
    lo: float,
    hi: float,
    done: Callable[[float, float], bool],
    go_left: Callable[[float], bool],
) -> float:
    """Midpoint of the first interval [lo, hi] for which done(lo, hi) holds."""
    while True:
        x = (lo + hi) / 2.0
        if done(lo, hi):
            return x
        if go_left(x):
            hi = x
        else:
            lo = x

def invert_angular(
    f: Callable[[float], float],
    y: float,
    a: float,
    b: float,
    *,
    tolerance: float = 1e-5,
) -> float:
    """
    x in [a, b] with f(x) == y (mod 360), by bisection.

    f must increase (modulo 360) across [a, b] and cross y once; multiple
    crossings inside the interval are not detected. The default tolerance
    of 1e-5 days is below a second.
    """
    return bisection_search(
        a,
        b,
        lambda lo, hi: hi - lo < tolerance,
        lambda x: mod(f(x) - y, 360.0) < 180.0,
    )
