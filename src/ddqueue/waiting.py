"""Queue waiting time Wq(n) of the n-th customer in a D/D/1/K queue."""

from __future__ import annotations

from .regime import Regime, classify, validate_count, validate_index


def waiting_time(
    lam: float,
    mu: float,
    ti: float,
    initial_count: float,
    customer_index: int,
) -> float:
    """
    Time the ``customer_index``-th arrival spends waiting before service.

    Under overload, customers arriving after ``ti`` use the ``n - 2`` spacing
    instead of ``n - 1``; this is an approximation of the cyclic regime.
    Under underload the ``initial_count`` customers present at t=0 are served
    first. Equal rates never wait. The result is never negative.
    """
    validate_count(ti, "Threshold time ti")
    validate_count(initial_count, "Initial customers M")
    validate_index(customer_index, "Customer index n")

    n = customer_index
    regime = classify(lam, mu)
    if regime is Regime.OVERLOAD:
        gap = 1.0 / mu - 1.0 / lam
        if n == 0:
            wq = 0.0
        elif n < lam * ti:
            wq = gap * (n - 1)
        else:
            wq = gap * (n - 2)
    elif regime is Regime.UNDERLOAD:
        wq = 0.0 if n == 0 else (initial_count + n - 1) / mu - n / lam
    else:
        wq = 0.0
    return max(0.0, wq)
