"""Pre-defined D/D/1/K scenarios covering each regime."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable

from .config import DEFAULT_HORIZON
from .dd1k_core import DD1KParams


@dataclass(frozen=True)
class Scenario:
    name: str
    lam: float
    mu: float
    capacity: int
    initial_count: int = 0


SCENARIOS: Dict[str, Scenario] = {
    "OVERLOAD": Scenario(name="OVERLOAD", lam=2.0, mu=1.0, capacity=3),
    "UNDERLOAD": Scenario(name="UNDERLOAD", lam=1.0, mu=2.0, capacity=5, initial_count=3),
    "BALANCED": Scenario(name="BALANCED", lam=1.0, mu=1.0, capacity=4),
    "THIRDS": Scenario(name="THIRDS", lam=1 / 3, mu=1 / 6, capacity=7),  # λ = 2μ, coarse clock
}


def list_scenarios() -> Iterable[str]:
    """Return available scenario identifiers."""
    return sorted(SCENARIOS.keys())


def get_scenario(name: str) -> Scenario:
    key = name.upper()
    if key not in SCENARIOS:
        raise KeyError(f"Scenario '{name}' is not defined. Available: {list(list_scenarios())}")
    return SCENARIOS[key]


def get_params(name: str, horizon: float = DEFAULT_HORIZON) -> DD1KParams:
    """Return `DD1KParams` for a named scenario."""
    scenario = get_scenario(name)
    return DD1KParams(
        lam=scenario.lam,
        mu=scenario.mu,
        capacity=scenario.capacity,
        initial_count=scenario.initial_count,
        horizon=horizon,
    )
