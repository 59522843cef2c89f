"""Unit tests for the M/M/1 and M/M/c closed forms."""

import math

import pytest

from ddqueue.errors import InvalidInputError, UnstableSystemError
from ddqueue.markovian import mm1_metrics, mmc_metrics


def test_mm1_matches_known_case():
    metrics = mm1_metrics(0.5, 1.0)
    assert math.isclose(metrics.rho, 0.5)
    assert math.isclose(metrics.L, 1.0)
    assert math.isclose(metrics.W, 2.0)
    assert math.isclose(metrics.Lq, 0.5)
    assert math.isclose(metrics.Wq, 1.0)
    assert math.isclose(metrics.L, 0.5 * metrics.W)  # Little's law


def test_mmc_reduces_to_mm1_with_one_server():
    mm1 = mm1_metrics(0.7, 1.0)
    mmc = mmc_metrics(0.7, 1.0, 1)
    assert math.isclose(mmc.P0, 1.0 - 0.7, rel_tol=1e-9)
    for key in ("rho", "L", "W", "Lq", "Wq"):
        assert math.isclose(getattr(mmc, key), getattr(mm1, key), rel_tol=1e-9)


def test_mmc_two_servers_obeys_little():
    lam = 1.7
    metrics = mmc_metrics(lam, 1.0, 2)
    assert 0 < metrics.P0 < 1
    assert metrics.Lq > 0
    assert math.isclose(metrics.L, lam * metrics.W, rel_tol=1e-9)
    assert math.isclose(metrics.Lq, lam * metrics.Wq, rel_tol=1e-9)


def test_unstable_systems_raise():
    with pytest.raises(UnstableSystemError):
        mm1_metrics(1.0, 1.0)
    with pytest.raises(UnstableSystemError):
        mmc_metrics(2.0, 1.0, 2)


def test_mmc_requires_a_server():
    with pytest.raises(InvalidInputError):
        mmc_metrics(0.5, 1.0, 0)


@pytest.mark.parametrize("c", [None, "2", 1.5])
def test_mmc_rejects_non_integer_servers(c):
    with pytest.raises(InvalidInputError):
        mmc_metrics(0.5, 1.0, c)
