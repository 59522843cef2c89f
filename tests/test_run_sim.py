"""Checks for the run_sim command line front-end."""

import argparse
import math

import pandas as pd
import pytest

import run_sim


@pytest.mark.parametrize("text,expected", [("1/3", 1 / 3), ("0.25", 0.25), (" 2 ", 2.0)])
def test_parse_rate_accepts_decimals_and_fractions(text, expected):
    assert math.isclose(run_sim.parse_rate(text), expected)


@pytest.mark.parametrize("text", ["abc", "0", "-1", "1/0", ""])
def test_parse_rate_rejects_bad_values(text):
    with pytest.raises(argparse.ArgumentTypeError):
        run_sim.parse_rate(text)


def test_overload_scenario_writes_timeline_and_customers(tmp_path, capsys):
    timeline = tmp_path / "timeline.csv"
    customers = tmp_path / "customers.csv"
    run_sim.main(
        [
            "--scenario",
            "OVERLOAD",
            "-t",
            "1.25",
            "-n",
            "3",
            "--horizon",
            "10",
            "--timeline-out",
            str(timeline),
            "--customers-out",
            str(customers),
        ]
    )
    out = capsys.readouterr().out
    assert "overload" in out

    frame = pd.read_csv(timeline)
    assert list(frame.columns) == ["t", "n"]
    assert frame["t"].iloc[0] == 0.0
    assert frame["n"].max() <= 2

    waits = pd.read_csv(customers)
    assert not waits.empty
    assert (waits["Wq_sim"] >= 0).all()


def test_unreachable_capacity_exits_cleanly():
    with pytest.raises(SystemExit, match="saturation time"):
        run_sim.main(["--lam", "2", "--mu", "1", "-k", "10000"])


def test_deterministic_model_needs_capacity():
    with pytest.raises(SystemExit):
        run_sim.main(["--lam", "2", "--mu", "1"])


def test_markovian_models(capsys):
    run_sim.main(["--model", "mm1", "--lam", "1/2", "--mu", "1"])
    assert "MM1" in capsys.readouterr().out
    with pytest.raises(SystemExit, match="Unstable"):
        run_sim.main(["--model", "mmc", "--lam", "3", "--mu", "1", "-c", "2"])
