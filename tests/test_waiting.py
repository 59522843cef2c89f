"""Tests for the per-customer waiting time Wq(n)."""

import math

import pytest

from ddqueue.errors import InvalidInputError
from ddqueue.waiting import waiting_time


@pytest.mark.parametrize("n,expected", [(0, 0.0), (1, 0.0), (3, 1.0), (4, 1.0), (6, 2.0)])
def test_overload_before_and_after_saturation(n, expected):
    # λ·ti = 4, so customer 4 onwards uses the post-saturation spacing.
    assert math.isclose(waiting_time(2.0, 1.0, 2.0, 0, n), expected)


@pytest.mark.parametrize("n,expected", [(0, 0.0), (1, 0.5), (2, 0.0), (5, 0.0)])
def test_underload_with_initial_customers(n, expected):
    assert math.isclose(waiting_time(1.0, 2.0, 3.0, 3, n), expected)


def test_balanced_never_waits():
    assert waiting_time(1.0, 1.0, 0.0, 5, 10) == 0.0


def test_waiting_time_is_never_negative():
    for n in range(50):
        assert waiting_time(2.0, 1.0, 2.0, 0, n) >= 0.0
        assert waiting_time(1.0, 3.0, 1.0, 2, n) >= 0.0


def test_negative_customer_index_rejected():
    with pytest.raises(InvalidInputError):
        waiting_time(2.0, 1.0, 2.0, 0, -1)


@pytest.mark.parametrize("n", [2.5, "3", None])
def test_customer_index_must_be_a_whole_number(n):
    with pytest.raises(InvalidInputError):
        waiting_time(2.0, 1.0, 2.0, 0, n)
