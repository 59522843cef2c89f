"""Tests for the saturation and emptying times."""

import math

import numpy as np
import pytest

from ddqueue.config import SATURATION_NOT_FOUND
from ddqueue.errors import InvalidInputError, UnstableSystemError
from ddqueue.regime import Regime
from ddqueue.thresholds import (
    find_emptying_time,
    find_saturation_time,
    regime_threshold,
    transient_occupancy,
)


def test_transient_occupancy_scalar_and_array():
    assert transient_occupancy(1.25, 2.0, 1.0) == 2
    values = transient_occupancy(np.array([0.75, 1.25, 1.75, 2.25]), 2.0, 1.0)
    assert values.tolist() == [1.0, 2.0, 2.0, 3.0]


@pytest.mark.parametrize("capacity,expected", [(3, 2.0), (6, 5.0), (20, 19.0)])
def test_saturation_time_for_double_arrival_rate(capacity, expected):
    assert find_saturation_time(2.0, 1.0, capacity) == expected


def test_saturation_time_is_rounded_to_hundredths():
    ti = find_saturation_time(3.0, 2.0, 5)
    assert ti > 0
    assert math.isclose(ti * 100, round(ti * 100), abs_tol=1e-6)


def test_unreachable_capacity_returns_sentinel():
    assert find_saturation_time(2.0, 1.0, 10_000) == SATURATION_NOT_FOUND


def test_exhausted_budget_returns_sentinel():
    assert find_saturation_time(2.0, 1.0, 6, max_iter=100) == SATURATION_NOT_FOUND
    assert find_saturation_time(2.0, 1.0, 6, max_iter=0) == SATURATION_NOT_FOUND


@pytest.mark.parametrize("lam,mu", [(1.0, 2.0), (1.0, 1.0)])
def test_saturation_requires_overload(lam, mu):
    with pytest.raises(UnstableSystemError):
        find_saturation_time(lam, mu, 3)


def test_emptying_time_closed_form():
    assert find_emptying_time(2.0, 1.0, 3) == 3.0
    assert find_emptying_time(5.0, 1.0, 0) == 0.0
    assert math.isclose(find_emptying_time(1.5, 1.0, 2), 4.0)


def test_emptying_time_requires_underload():
    with pytest.raises(UnstableSystemError):
        find_emptying_time(1.0, 2.0, 3)


def test_emptying_time_rejects_negative_count():
    with pytest.raises(InvalidInputError):
        find_emptying_time(2.0, 1.0, -1)


def test_regime_threshold_per_regime():
    over = regime_threshold(2.0, 1.0, 3)
    assert over.regime is Regime.OVERLOAD
    assert over.ti == 2.0
    assert over.converged

    under = regime_threshold(1.0, 2.0, 5, initial_count=3)
    assert under.regime is Regime.UNDERLOAD
    assert under.ti == 3.0

    balanced = regime_threshold(1.0, 1.0, 4)
    assert balanced.regime is Regime.BALANCED
    assert balanced.ti == 0.0


def test_regime_threshold_flags_non_convergence():
    result = regime_threshold(2.0, 1.0, 6, max_iter=10)
    assert not result.converged
