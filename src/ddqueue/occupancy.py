"""Closed-form occupancy n(t) of a D/D/1/K queue."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .config import TIME_TOLERANCE
from .errors import InvalidInputError
from .rational import lcm
from .regime import Regime, classify, validate_capacity, validate_count
from .thresholds import transient_occupancy


@dataclass(frozen=True)
class CycleParams:
    """Shape of the repeating pattern after saturation (λ > μ)."""

    delta: float
    lcm_time: float
    n_samples: int

    @property
    def length(self) -> float:
        return self.n_samples * self.delta


def cycle_params(lam: float, mu: float) -> CycleParams:
    interarrival = 1.0 / lam
    service = 1.0 / mu
    delta = service - interarrival
    if delta <= 0:
        raise InvalidInputError("Cycle parameters require lam > mu.")
    lcm_time = lcm(interarrival, service)
    return CycleParams(delta=delta, lcm_time=lcm_time, n_samples=round(lcm_time / delta))


def _overload(t: float, lam: float, mu: float, ti: float, capacity: int) -> float:
    if t < 1.0 / lam:
        return 0
    if t < ti:
        return int(transient_occupancy(t, lam, mu))

    cycle = cycle_params(lam, mu)
    r = math.floor((t - ti) / cycle.length)
    t_prime = t - (ti + r * cycle.length)
    # Only the first two sub-intervals of the cycle are distinguished.
    if t_prime < cycle.delta - TIME_TOLERANCE:
        return capacity - 1
    if t_prime < 2 * cycle.delta - TIME_TOLERANCE:
        return capacity - 2
    return capacity - 1


def _underload(t: float, lam: float, mu: float, ti: float, initial_count: float) -> float:
    if t < ti:
        return initial_count + math.floor(lam * t + TIME_TOLERANCE) - math.floor(
            mu * t + TIME_TOLERANCE
        )
    return 0


def occupancy_at(
    t: float,
    lam: float,
    mu: float,
    ti: float,
    capacity: int,
    initial_count: float = 0,
) -> int:
    """
    Number of customers in the system at time ``t``.

    ``ti`` is the saturation time when λ > μ and the emptying time when μ > λ
    (see :func:`ddqueue.thresholds.regime_threshold`); it is ignored when the
    rates are equal, in which case the occupancy is taken to be 1.

    The result is clamped to ``[0, capacity]``.
    """
    validate_count(t, "Time t")
    validate_count(ti, "Threshold time ti")
    validate_capacity(capacity)
    validate_count(initial_count, "Initial customers M")

    regime = classify(lam, mu)
    if regime is Regime.OVERLOAD:
        n = _overload(t, lam, mu, ti, capacity)
    elif regime is Regime.UNDERLOAD:
        n = _underload(t, lam, mu, ti, initial_count)
    else:
        n = 1
    return int(min(max(0, round(n)), capacity))
