"""SimPy replication of a deterministic D/D/1/K queue with M initial customers."""

from __future__ import annotations

from collections import deque
from dataclasses import asdict, dataclass, field
from typing import Deque, Dict, List, Optional

import numpy as np
import simpy

from .config import DEFAULT_HORIZON, TIME_TOLERANCE
from .regime import validate_capacity, validate_horizon, validate_index, validate_rates


@dataclass(frozen=True)
class DD1KParams:
    """
    Replication parameters bundled for convenience.

    ``initial_count`` customers are already in the system at t=0 and may
    exceed the admission cap of ``capacity - 1``; the cap only applies to
    arrivals, which balk until the backlog drains below it.
    """

    lam: float
    mu: float
    capacity: int
    initial_count: int = 0
    horizon: float = DEFAULT_HORIZON

    def __post_init__(self) -> None:
        validate_rates(self.lam, self.mu)
        validate_capacity(self.capacity)
        validate_index(self.initial_count, "Initial customers M")
        validate_horizon(self.horizon)


@dataclass
class ReplicationResult:
    """Aggregated outputs of one deterministic replication."""

    lam: float
    mu: float
    capacity: int
    initial_count: int
    horizon: float
    L: float
    Lq: float
    utilization: float
    Wq_mean: float
    W_mean: float
    arrivals: int
    admitted: int
    balked: int
    peak_in_system: int
    final_in_system: int
    # Queue wait of each admitted arrival, keyed by its arrival index (1-based).
    waits: Dict[int, float] = field(default_factory=dict)

    def as_dict(self) -> Dict[str, float]:
        payload = asdict(self)
        payload.pop("waits")
        return payload


class DD1KSystem:
    """SimPy processes plus the time-integrated measurements."""

    def __init__(self, env: simpy.Environment, params: DD1KParams, tolerance: float = TIME_TOLERANCE):
        self.env = env
        self.params = params
        self.tolerance = tolerance
        self.interarrival = 1.0 / params.lam
        self.service = 1.0 / params.mu
        self.server = simpy.Resource(env, capacity=1)
        # Committed departure schedule; drives the admission decision.
        self.departures: Deque[float] = deque()
        self.waits: Dict[int, float] = {}
        self.sojourns: List[float] = []
        self.in_system = 0
        self.peak_in_system = 0
        self.arrivals = 0
        self.admitted = 0
        self.balked = 0
        self.area_L = 0.0
        self.area_Lq = 0.0
        self.busy_area = 0.0
        self.last_event_time = 0.0

    def seed_initial_customers(self) -> None:
        """Place the M initial customers in line at t=0, bypassing the K-1 cap."""
        for _ in range(int(self.params.initial_count)):
            self._admit(index=None)

    def arrival_process(self):
        """Arrive every 1/λ until the horizon."""
        index = 0
        while True:
            yield self.env.timeout(self.interarrival)
            if self.env.now > self.params.horizon + self.tolerance:
                break
            index += 1
            self.arrivals += 1
            self._handle_arrival(index)

    def _handle_arrival(self, index: int) -> None:
        now = self.env.now
        # Departures due at this instant free their slot first.
        while self.departures and self.departures[0] <= now + self.tolerance:
            self.departures.popleft()
        if len(self.departures) < self.params.capacity - 1:
            self._admit(index)
        else:
            self.balked += 1

    def _admit(self, index: Optional[int]) -> None:
        self._update_time_integrals()
        arrival_time = self.env.now
        last = self.departures[-1] if self.departures else 0.0
        self.departures.append(max(arrival_time, last) + self.service)
        self.in_system += 1
        self.peak_in_system = max(self.peak_in_system, len(self.departures))
        if index is not None:
            self.admitted += 1
        self.env.process(self._customer(index, arrival_time))

    def _customer(self, index: Optional[int], arrival_time: float):
        with self.server.request() as req:
            yield req
            self._update_time_integrals()
            wait = self.env.now - arrival_time
            if index is not None:
                self.waits[index] = wait
            yield self.env.timeout(self.service)
            self._update_time_integrals()
            self.in_system -= 1
            if index is not None:
                self.sojourns.append(self.env.now - arrival_time)

    def _update_time_integrals(self, target_time: float | None = None) -> None:
        now = self.env.now if target_time is None else target_time
        start = self.last_event_time
        self.last_event_time = now

        dt = min(now, self.params.horizon) - min(start, self.params.horizon)
        if dt <= 0:
            return

        busy = self.server.count
        self.area_L += self.in_system * dt
        self.area_Lq += max(self.in_system - busy, 0) * dt
        self.busy_area += busy * dt


def run_dd1k(params: DD1KParams) -> ReplicationResult:
    """Run the deterministic queue up to the horizon and aggregate the results."""
    env = simpy.Environment()
    system = DD1KSystem(env, params)
    system.seed_initial_customers()
    env.process(system.arrival_process())
    env.run(until=params.horizon + system.tolerance)
    system._update_time_integrals(target_time=params.horizon)

    waits = list(system.waits.values())
    return ReplicationResult(
        lam=params.lam,
        mu=params.mu,
        capacity=params.capacity,
        initial_count=int(params.initial_count),
        horizon=params.horizon,
        L=system.area_L / params.horizon,
        Lq=system.area_Lq / params.horizon,
        utilization=system.busy_area / params.horizon,
        Wq_mean=float(np.mean(waits)) if waits else 0.0,
        W_mean=float(np.mean(system.sojourns)) if system.sojourns else 0.0,
        arrivals=system.arrivals,
        admitted=system.admitted,
        balked=system.balked,
        peak_in_system=system.peak_in_system,
        final_in_system=system.in_system,
        waits=dict(system.waits),
    )
