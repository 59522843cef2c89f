"""Tests for the named scenario registry."""

import pytest

from ddqueue.regime import Regime, classify
from ddqueue.scenarios import get_params, get_scenario, list_scenarios


def test_every_regime_has_a_scenario():
    regimes = {classify(get_scenario(name).lam, get_scenario(name).mu) for name in list_scenarios()}
    assert regimes == {Regime.OVERLOAD, Regime.UNDERLOAD, Regime.BALANCED}


def test_get_params_is_case_insensitive():
    params = get_params("underload", horizon=20.0)
    assert params.initial_count == 3
    assert params.horizon == 20.0


def test_unknown_scenario_raises():
    with pytest.raises(KeyError):
        get_scenario("Z")
