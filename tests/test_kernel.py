# tests/test_kernel.py

import math
import random

import pytest

from almanac.reference import kernel as k


def test_mod_takes_sign_of_modulus():
    random.seed(7)
    for _ in range(1000):
        x = random.uniform(-1e4, 1e4)
        m = random.choice([360.0, 24.0, -7.5, 1.0])
        r = k.mod(x, m)
        if m > 0:
            assert 0.0 <= r < m
        else:
            assert m < r <= 0.0

def test_mod_is_periodic():
    random.seed(11)
    for _ in range(500):
        x = random.uniform(-720.0, 720.0)
        n = random.randint(-5, 5)
        assert k.mod(x + n * 360.0, 360.0) == pytest.approx(k.mod(x, 360.0), abs=1e-9)

def test_mod_integers_stay_integers():
    assert k.mod(-7, 3) == 2
    assert isinstance(k.mod(-7, 3), int)

def test_amod_range():
    assert k.amod(12, 12) == 12
    assert k.amod(13, 12) == 1

@pytest.mark.parametrize("coeffs", [
    [2.0],
    [1.0, -3.0],
    [0.5, 0.0, 4.0],
    [1.0, 2.0, 3.0, 4.0],
    [-1.0, 0.25, 0.0, 3.0, -2.0],
    [7.0, -6.0, 5.0, -4.0, 3.0, -2.0],
])
def test_poly_matches_direct_evaluation(coeffs):
    for x in (-2.5, -1.0, 0.0, 0.3, 1.0, 4.0):
        direct = sum(c * x ** i for i, c in enumerate(coeffs))
        assert k.poly(x, coeffs) == pytest.approx(direct, rel=1e-12, abs=1e-12)

def test_poly_of_nothing_is_zero():
    assert k.poly(3.0, []) == 0.0

def test_sigma_sums_over_rows():
    total = k.sigma([[1.0, 2.0, 3.0], [10.0, 20.0, 30.0]], lambda a, b: a * b)
    assert total == pytest.approx(140.0)

def test_sigma_rejects_ragged_tables():
    with pytest.raises(ValueError):
        k.sigma([[1.0, 2.0], [1.0]], lambda a, b: a * b)

@pytest.mark.parametrize("y, x, expected", [
    (1.0, 1.0, 45.0),
    (1.0, -1.0, 135.0),
    (-1.0, -1.0, 225.0),
    (-1.0, 1.0, 315.0),
    (1.0, 0.0, 90.0),
    (-1.0, 0.0, 270.0),
])
def test_atan_deg_quadrants(y, x, expected):
    assert k.atan_deg(y, x) == pytest.approx(expected)

def test_atan_deg_undefined_at_origin():
    assert k.atan_deg(0.0, 0.0) is None

def test_angle_and_secs():
    assert k.angle(23, 26, 21.448) == pytest.approx(23.439291111)
    assert k.secs(3600.0) == pytest.approx(1.0)

def test_linear_searches():
    assert k.next_index(0, lambda i: i * i >= 50) == 8
    assert k.final_index(0, lambda i: i * i < 50) == 7
    assert k.linear_search(20, lambda i: i * i <= 50, direction=-1) == 7
    assert k.linear_search(3, lambda i: i < 5, direction=-1) == 3
    with pytest.raises(ValueError):
        k.linear_search(0, lambda i: True, direction=2)

def test_invert_angular_monotone_function():
    def f(x):
        return k.mod(12.0 * x + 100.0, 360.0)

    random.seed(3)
    for _ in range(50):
        y = random.uniform(0.0, 360.0)
        a, b = 0.0, 30.0
        x = k.invert_angular(f, y, a, b)
        assert a <= x <= b
        err = k.mod(f(x) - y + 180.0, 360.0) - 180.0
        assert abs(err) < 1e-3

def test_invert_angular_across_zero():
    # wraps through 360 -> 0 inside the interval
    x = k.invert_angular(lambda t: k.mod(350.0 + t, 360.0), 5.0, 0.0, 20.0)
    assert x == pytest.approx(15.0, abs=1e-4)

def test_trig_helpers_use_degrees():
    assert k.sin_deg(30.0) == pytest.approx(0.5)
    assert k.cos_deg(60.0) == pytest.approx(0.5)
    assert k.asin_deg(1.0) == pytest.approx(90.0)
    assert k.to_radians(180.0) == pytest.approx(math.pi)

def test_unit_conversions():
    assert k.au_to_km(1.0) == pytest.approx(149_597_870.7)
    assert k.m_to_au(k.au_to_m(2.5)) == pytest.approx(2.5)

def test_div_mod_is_floored():
    assert k.div_mod(-7, 3) == (-3, 2)
    assert k.div_mod(7, -3) == (-3, -2)
    q, r = k.div_mod(-7.5, 2.0)
    assert (q, r) == (-4, pytest.approx(0.5))
