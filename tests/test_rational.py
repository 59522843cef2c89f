"""Unit tests for the scaled-integer GCD/LCM."""

import math

import pytest

from ddqueue.errors import InvalidInputError
from ddqueue.rational import gcd, lcm


def test_gcd_euclid():
    assert gcd(12, 18) == 6
    assert gcd(500, 333) == 1
    assert gcd(7, 0) == 7
    assert gcd(0, 0) == 0


def test_gcd_rejects_negative():
    with pytest.raises(InvalidInputError):
        gcd(-4, 2)


def test_lcm_of_simple_fractions():
    assert math.isclose(lcm(0.5, 1.0), 1.0)
    assert math.isclose(lcm(0.5, 0.25), 0.5)
    assert math.isclose(lcm(1.5, 2.0), 6.0)


def test_lcm_truncated_third_matches_exact_third():
    # 1/3 rounds to 333 thousandths, exactly like 0.333 does.
    assert math.isclose(lcm(0.5, 0.333), lcm(0.5, 1 / 3), abs_tol=1e-3)
    assert math.isclose(lcm(0.5, 0.333), 166.5)


def test_lcm_requires_positive_values():
    with pytest.raises(InvalidInputError):
        lcm(0.0, 1.0)
    with pytest.raises(InvalidInputError):
        lcm(0.0001, 1.0)  # vanishes at 1/1000
