"""Checks for the formula-vs-simulation sweep."""

import pandas as pd
import pytest

import compare


def test_sample_times_are_slice_midpoints():
    assert compare.sample_times(10.0, 4).tolist() == pytest.approx([1.25, 3.75, 6.25, 8.75])


def test_overload_transient_phase_agrees(tmp_path):
    results = tmp_path / "samples.csv"
    summary = tmp_path / "summary.csv"
    reports = tmp_path / "reports"
    compare.main(
        [
            "--scenario",
            "OVERLOAD",
            "--horizon",
            "10",
            "--points",
            "100",
            "--results-out",
            str(results),
            "--summary-out",
            str(summary),
            "--reports-dir",
            str(reports),
        ]
    )
    table = pd.read_csv(summary).set_index("phase")
    assert table.loc["transient", "agreement"] == 1.0
    assert "cyclic" in table.index
    assert len(pd.read_csv(results)) == 100
    assert (reports / "formula_vs_sim.png").exists()
