"""Analytics for the deterministic single-server finite-capacity queue (D/D/1/K)."""

from .config import SATURATION_NOT_FOUND, TIME_TOLERANCE
from .dd1k_core import DD1KParams, ReplicationResult, run_dd1k
from .errors import InvalidInputError, UnstableSystemError
from .markovian import MM1Metrics, MMCMetrics, mm1_metrics, mmc_metrics
from .occupancy import CycleParams, cycle_params, occupancy_at
from .rational import gcd, lcm
from .regime import Regime, classify
from .scenarios import Scenario, get_params, get_scenario, list_scenarios
from .thresholds import (
    RegimeThreshold,
    find_emptying_time,
    find_saturation_time,
    regime_threshold,
)
from .timeline import Event, EventKind, StepFunction, simulate_occupancy
from .waiting import waiting_time

__all__ = [
    "SATURATION_NOT_FOUND",
    "TIME_TOLERANCE",
    "CycleParams",
    "DD1KParams",
    "Event",
    "EventKind",
    "InvalidInputError",
    "MM1Metrics",
    "MMCMetrics",
    "Regime",
    "RegimeThreshold",
    "ReplicationResult",
    "Scenario",
    "StepFunction",
    "UnstableSystemError",
    "classify",
    "cycle_params",
    "find_emptying_time",
    "find_saturation_time",
    "gcd",
    "get_params",
    "get_scenario",
    "lcm",
    "list_scenarios",
    "mm1_metrics",
    "mmc_metrics",
    "occupancy_at",
    "regime_threshold",
    "run_dd1k",
    "simulate_occupancy",
    "waiting_time",
]
