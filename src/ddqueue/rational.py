"""Scaled-integer GCD/LCM used to size the post-saturation cycle."""

from __future__ import annotations

from .config import LCM_SCALE
from .errors import InvalidInputError


def gcd(a: int, b: int) -> int:
    """Greatest common divisor of two non-negative integers (Euclid)."""
    if a < 0 or b < 0:
        raise InvalidInputError("gcd is defined here for non-negative integers only.")
    while b != 0:
        a, b = b, a % b
    return a


def lcm(a: float, b: float, scale: int = LCM_SCALE) -> float:
    """
    Least common multiple of two positive rationals.

    Both values are rounded to integers at ``scale`` before the integer LCM is
    taken, so the result is exact to ``1/scale``: ``lcm(0.5, 1/3)`` and
    ``lcm(0.5, 0.333)`` agree.

    Raises:
        InvalidInputError: if either value is not positive or vanishes at the
            chosen resolution.
    """
    if a <= 0 or b <= 0:
        raise InvalidInputError("lcm requires two strictly positive values.")
    a_scaled = round(a * scale)
    b_scaled = round(b * scale)
    if a_scaled == 0 or b_scaled == 0:
        raise InvalidInputError(f"Values below the lcm resolution of 1/{scale}.")
    return abs(a_scaled * b_scaled) / gcd(a_scaled, b_scaled) / scale
