"""Input validation and the λ-versus-μ regime split."""

from __future__ import annotations

import math
import numbers
from enum import Enum

from .errors import InvalidInputError


class Regime(str, Enum):
    """Which side of the service rate the arrival rate sits on."""

    OVERLOAD = "overload"  # λ > μ
    UNDERLOAD = "underload"  # μ > λ
    BALANCED = "balanced"  # λ == μ


def _is_number(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def validate_rates(lam: float, mu: float) -> None:
    """Reject rates that are missing, non-numeric, non-finite or not strictly positive."""
    for name, value in (("lam", lam), ("mu", mu)):
        if not _is_number(value) or not math.isfinite(value):
            raise InvalidInputError(f"Rate {name} must be a finite number.")
        if value <= 0:
            raise InvalidInputError(f"Rate {name} must be strictly positive.")


def validate_capacity(capacity: int) -> None:
    if not _is_number(capacity) or not math.isfinite(capacity) or int(capacity) != capacity:
        raise InvalidInputError("Capacity K must be an integer.")
    if capacity < 1:
        raise InvalidInputError("Capacity K must be >= 1.")


def validate_count(value: float, name: str) -> None:
    if not _is_number(value) or not math.isfinite(value):
        raise InvalidInputError(f"{name} must be a finite number.")
    if value < 0:
        raise InvalidInputError(f"{name} must be non-negative.")


def validate_index(value: int, name: str) -> None:
    """Non-negative whole number, e.g. a customer index or a head count."""
    validate_count(value, name)
    if int(value) != value:
        raise InvalidInputError(f"{name} must be an integer.")


def validate_horizon(horizon: float) -> None:
    if not _is_number(horizon) or not math.isfinite(horizon) or horizon <= 0:
        raise InvalidInputError("Horizon must be a positive finite number.")


def classify(lam: float, mu: float) -> Regime:
    """Compare the two rates once and return the regime tag."""
    validate_rates(lam, mu)
    if lam > mu:
        return Regime.OVERLOAD
    if mu > lam:
        return Regime.UNDERLOAD
    return Regime.BALANCED
