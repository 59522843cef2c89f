"""Closed-form steady-state metrics for the Markovian M/M/1 and M/M/c queues."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Mapping

from .errors import InvalidInputError, UnstableSystemError
from .regime import validate_index, validate_rates


@dataclass(frozen=True)
class MM1Metrics:
    """Steady-state L, W, Lq, Wq of an M/M/1 queue."""

    rho: float
    L: float
    W: float
    Lq: float
    Wq: float

    def as_dict(self) -> Mapping[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class MMCMetrics:
    """Steady-state metrics of an M/M/c queue; ``P0`` is the empty-system probability."""

    rho: float
    P0: float
    L: float
    W: float
    Lq: float
    Wq: float

    def as_dict(self) -> Mapping[str, float]:
        return asdict(self)


def mm1_metrics(lam: float, mu: float) -> MM1Metrics:
    """
    Raises:
        UnstableSystemError: when λ >= μ.
    """
    validate_rates(lam, mu)
    if lam >= mu:
        raise UnstableSystemError("Unstable system: lam must be less than mu.")
    return MM1Metrics(
        rho=lam / mu,
        L=lam / (mu - lam),
        W=1.0 / (mu - lam),
        Lq=lam * lam / (mu * (mu - lam)),
        Wq=lam / (mu * (mu - lam)),
    )


def mmc_metrics(lam: float, mu: float, c: int) -> MMCMetrics:
    """
    M/M/c metrics via P0, then Little's law for Wq, W and L.

    Raises:
        UnstableSystemError: when λ >= c·μ.
    """
    validate_rates(lam, mu)
    validate_index(c, "Number of servers c")
    if c < 1:
        raise InvalidInputError("Number of servers c must be >= 1.")
    c = int(c)

    r = lam / mu
    rho = r / c
    if rho >= 1.0:
        raise UnstableSystemError("Unstable system: lam must be less than c * mu.")

    head = sum(r**n / math.factorial(n) for n in range(c))
    tail = r**c / (math.factorial(c) * (1.0 - rho))
    P0 = 1.0 / (head + tail)

    Lq = P0 * r**c * rho / (math.factorial(c) * (1.0 - rho) ** 2)
    Wq = Lq / lam
    W = Wq + 1.0 / mu
    L = lam * W
    return MMCMetrics(rho=rho, P0=P0, L=L, W=W, Lq=Lq, Wq=Wq)
