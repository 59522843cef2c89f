"""Regime thresholds: saturation time under overload, emptying time under underload."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from .config import (
    SATURATION_MAX_ITER,
    SATURATION_NOT_FOUND,
    SATURATION_STEP_DIVISOR,
    TIME_TOLERANCE,
)
from .errors import UnstableSystemError
from .regime import Regime, classify, validate_capacity, validate_count

_CHUNK = 100_000


def transient_occupancy(t, lam: float, mu: float):
    """
    Pre-saturation occupancy ``floor(λt) - floor(μt - μ/λ)``.

    Works on scalars and numpy arrays alike. The floors absorb the shared
    time tolerance so an arrival and a departure landing on the same instant
    are both counted, as the event simulator does.
    """
    arrived = np.floor(lam * t + TIME_TOLERANCE)
    departed = np.floor(mu * t - mu / lam + TIME_TOLERANCE)
    return arrived - departed


def _round_time(t: float) -> float:
    return math.floor(t * 100.0 + 0.5) / 100.0


def find_saturation_time(
    lam: float,
    mu: float,
    capacity: int,
    max_iter: int = SATURATION_MAX_ITER,
) -> float:
    """
    Earliest time at which the transient formula reaches ``capacity``.

    The search starts at the first arrival and advances in steps of
    ``min(1/λ, 1/μ) / 1000``. The hit is rounded to two decimals since it only
    seeds the regime switch of :func:`ddqueue.occupancy.occupancy_at`.

    Returns:
        The saturation time, or ``SATURATION_NOT_FOUND`` when ``max_iter``
        steps pass without reaching ``capacity``.

    Raises:
        UnstableSystemError: unless λ > μ.
    """
    if classify(lam, mu) is not Regime.OVERLOAD:
        raise UnstableSystemError("Saturation time is only defined for lam > mu.")
    validate_capacity(capacity)
    if max_iter < 0:
        raise ValueError("max_iter must be non-negative.")

    interarrival = 1.0 / lam
    step = min(interarrival, 1.0 / mu) / SATURATION_STEP_DIVISOR

    done = 0
    while done < max_iter:
        count = min(_CHUNK, max_iter - done)
        t = interarrival + step * np.arange(done, done + count, dtype=float)
        hits = np.flatnonzero(np.rint(transient_occupancy(t, lam, mu)) == capacity)
        if hits.size:
            return _round_time(float(t[hits[0]]))
        done += count
    return SATURATION_NOT_FOUND


def find_emptying_time(mu: float, lam: float, initial_count: float) -> float:
    """
    Time ``M / (μ - λ)`` at which an initially loaded system drains.

    Raises:
        UnstableSystemError: unless μ > λ.
    """
    if classify(lam, mu) is not Regime.UNDERLOAD:
        raise UnstableSystemError("Emptying time is only defined for mu > lam.")
    validate_count(initial_count, "Initial customers M")
    return initial_count / (mu - lam)


@dataclass(frozen=True)
class RegimeThreshold:
    """The regime of a (λ, μ) pair together with its switching time ``ti``."""

    regime: Regime
    ti: float

    @property
    def converged(self) -> bool:
        return self.ti != SATURATION_NOT_FOUND


def regime_threshold(
    lam: float,
    mu: float,
    capacity: int,
    initial_count: float = 0,
    max_iter: int = SATURATION_MAX_ITER,
) -> RegimeThreshold:
    """Classify the rates once and compute the matching ``ti``."""
    regime = classify(lam, mu)
    if regime is Regime.OVERLOAD:
        ti = find_saturation_time(lam, mu, capacity, max_iter=max_iter)
    elif regime is Regime.UNDERLOAD:
        ti = find_emptying_time(mu, lam, initial_count)
    else:
        ti = 0.0
    return RegimeThreshold(regime=regime, ti=ti)
