"""Event-driven occupancy timeline for a D/D/1/K queue."""

from __future__ import annotations

from bisect import bisect_right
from collections import deque
from dataclasses import dataclass
from enum import Enum
from functools import cmp_to_key
from typing import Deque, Iterator, List, Tuple

from .config import TIME_TOLERANCE
from .errors import InvalidInputError
from .regime import validate_capacity, validate_horizon, validate_rates


class EventKind(str, Enum):
    ARRIVAL = "arrival"
    DEPARTURE = "departure"


@dataclass(frozen=True)
class Event:
    """A single admitted arrival or completed departure."""

    time: float
    kind: EventKind

    @property
    def delta(self) -> int:
        return 1 if self.kind is EventKind.ARRIVAL else -1


@dataclass(frozen=True)
class StepFunction:
    """Occupancy breakpoints ready to be drawn as a stepped line."""

    times: Tuple[float, ...]
    values: Tuple[int, ...]

    def __post_init__(self) -> None:
        if len(self.times) != len(self.values):
            raise ValueError("times and values must have the same length.")

    def __len__(self) -> int:
        return len(self.times)

    def __iter__(self) -> Iterator[Tuple[float, int]]:
        return iter(zip(self.times, self.values))

    def value_at(self, t: float) -> int:
        """Occupancy held by the last breakpoint at or before ``t``."""
        if t < 0:
            raise InvalidInputError("Time t must be non-negative.")
        idx = bisect_right(self.times, t) - 1
        return self.values[max(idx, 0)]

    @property
    def peak(self) -> int:
        return max(self.values)


class DepartureQueue:
    """FIFO of committed departure times; never decreases."""

    def __init__(self, service_time: float):
        self.service_time = service_time
        self._times: Deque[float] = deque()

    def __len__(self) -> int:
        return len(self._times)

    def __iter__(self) -> Iterator[float]:
        return iter(self._times)

    @property
    def last(self) -> float:
        return self._times[-1] if self._times else 0.0

    def schedule(self, arrival_time: float) -> float:
        """Queue the departure of a customer admitted at ``arrival_time``."""
        departure = max(arrival_time, self.last) + self.service_time
        self._times.append(departure)
        return departure

    def due(self, t: float, tolerance: float = TIME_TOLERANCE) -> bool:
        return bool(self._times) and self._times[0] <= t + tolerance

    def pop(self) -> float:
        return self._times.popleft()


def _event_order(tolerance: float):
    def compare(a: Event, b: Event) -> int:
        if abs(a.time - b.time) > tolerance:
            return -1 if a.time < b.time else 1
        if a.kind is b.kind:
            return 0
        # The server frees its slot before the admission decision.
        return -1 if a.kind is EventKind.DEPARTURE else 1

    return cmp_to_key(compare)


def collect_events(
    lam: float,
    mu: float,
    horizon: float,
    capacity: int,
    tolerance: float = TIME_TOLERANCE,
) -> List[Event]:
    """Replay the deterministic arrival stream and return the sorted events."""
    interarrival = 1.0 / lam
    departures = DepartureQueue(service_time=1.0 / mu)
    limit = horizon + tolerance
    events: List[Event] = []
    in_system = 0

    i = 1
    while i * interarrival <= limit:
        t_arrival = i * interarrival
        while departures.due(t_arrival, tolerance):
            t_depart = departures.pop()
            in_system -= 1
            if t_depart <= limit:
                events.append(Event(t_depart, EventKind.DEPARTURE))

        if in_system < capacity - 1:
            in_system += 1
            events.append(Event(t_arrival, EventKind.ARRIVAL))
            departures.schedule(t_arrival)
        # Otherwise the customer balks.
        i += 1

    while len(departures):
        t_depart = departures.pop()
        if t_depart <= limit:
            events.append(Event(t_depart, EventKind.DEPARTURE))

    events.sort(key=_event_order(tolerance))
    return events


def _group_instants(events: List[Event], tolerance: float) -> List[Tuple[float, int]]:
    """Collapse events within ``tolerance`` of each other into (instant, net delta)."""
    instants: List[Tuple[float, int]] = []
    for event in events:
        if instants and abs(event.time - instants[-1][0]) <= tolerance:
            time, net = instants[-1]
            instants[-1] = (time, net + event.delta)
        else:
            instants.append((event.time, event.delta))
    return instants


def simulate_occupancy(
    lam: float,
    mu: float,
    horizon: float,
    capacity: int,
    tolerance: float = TIME_TOLERANCE,
) -> StepFunction:
    """
    Build the occupancy step function of a D/D/1/K queue on ``[0, horizon]``.

    A customer is admitted only while fewer than ``capacity - 1`` are in the
    system; later arrivals balk. Each jump is preceded by a breakpoint at
    ``instant - tolerance`` holding the previous value so the line renders as
    a true step.
    """
    validate_rates(lam, mu)
    validate_capacity(capacity)
    validate_horizon(horizon)

    events = collect_events(lam, mu, horizon, capacity, tolerance)

    times: List[float] = [0.0]
    values: List[int] = [0]
    occupancy = 0
    for instant, net in _group_instants(events, tolerance):
        if times[-1] < instant - tolerance:
            times.append(instant - tolerance)
            values.append(occupancy)
        occupancy += net
        times.append(instant)
        values.append(occupancy)

    if times[-1] < horizon:
        times.append(horizon)
        values.append(occupancy)

    return StepFunction(times=tuple(times), values=tuple(values))
