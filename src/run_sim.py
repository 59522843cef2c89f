"""Command line interface to query a D/D/1/K queue (and its M/M/1, M/M/c cousins)."""

from __future__ import annotations

import argparse
from fractions import Fraction
from pathlib import Path
from typing import Tuple

import pandas as pd

try:
    from ddqueue import (
        DD1KParams,
        Regime,
        RegimeThreshold,
        ReplicationResult,
        StepFunction,
        get_scenario,
        list_scenarios,
        mm1_metrics,
        mmc_metrics,
        occupancy_at,
        regime_threshold,
        run_dd1k,
        simulate_occupancy,
        waiting_time,
    )
except ModuleNotFoundError:  # pragma: no cover - fallback when executed as package
    from .ddqueue import (
        DD1KParams,
        Regime,
        RegimeThreshold,
        ReplicationResult,
        StepFunction,
        get_scenario,
        list_scenarios,
        mm1_metrics,
        mmc_metrics,
        occupancy_at,
        regime_threshold,
        run_dd1k,
        simulate_occupancy,
        waiting_time,
    )


def parse_rate(text: str) -> float:
    """Accept a rate as a decimal (``0.25``) or a fraction (``1/4``)."""
    try:
        value = Fraction(text.strip())
    except (ValueError, ZeroDivisionError) as exc:
        raise argparse.ArgumentTypeError(f"Invalid rate '{text}'.") from exc
    if value <= 0:
        raise argparse.ArgumentTypeError("Rates must be strictly positive.")
    return float(value)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Compute n(t), Wq(n) and the occupancy timeline of a D/D/1/K queue."
    )
    parser.add_argument("--lam", type=parse_rate, help="Arrival rate lambda, e.g. 2 or 1/3.")
    parser.add_argument("--mu", type=parse_rate, help="Service rate mu, e.g. 1 or 1/4.")
    parser.add_argument(
        "--scenario",
        type=str,
        choices=list(list_scenarios()),
        help="Named scenario shortcut; overrides --lam/--mu/--capacity/--initial.",
    )
    parser.add_argument(
        "--model",
        type=str,
        choices=["dd1k", "mm1", "mmc"],
        default="dd1k",
        help="Queueing model to evaluate.",
    )
    parser.add_argument("-k", "--capacity", type=int, help="System constant K (D/D/1/K).")
    parser.add_argument("-m", "--initial", type=int, default=0, help="Customers present at t=0.")
    parser.add_argument("-c", "--servers", type=int, default=1, help="Servers for the M/M/c model.")
    parser.add_argument("-t", "--time", type=float, help="Time at which to evaluate n(t).")
    parser.add_argument("-n", "--customer", type=int, help="Customer index for Wq(n).")
    parser.add_argument("--horizon", type=float, default=50.0, help="Timeline length.")
    parser.add_argument(
        "--timeline-out",
        type=Path,
        default=Path("outputs/timeline.csv"),
        help="CSV where the occupancy step function is written.",
    )
    parser.add_argument(
        "--customers-out",
        type=Path,
        default=Path("outputs/customers.csv"),
        help="CSV with simulated vs. formula waits per customer.",
    )
    return parser.parse_args(argv)


def resolve_inputs(args: argparse.Namespace) -> Tuple[float, float, int | None, int]:
    """Return lambda, mu, K and M from a scenario or explicit flags."""
    if args.scenario:
        scenario = get_scenario(args.scenario)
        return scenario.lam, scenario.mu, scenario.capacity, scenario.initial_count
    if args.lam is None or args.mu is None:
        raise SystemExit("Either --scenario or both --lam and --mu must be provided.")
    if args.initial < 0:
        raise SystemExit("--initial must be >= 0.")
    return args.lam, args.mu, args.capacity, args.initial


def timeline_frame(step: StepFunction) -> pd.DataFrame:
    return pd.DataFrame({"t": step.times, "n": step.values})


def customers_frame(
    result: ReplicationResult, threshold: RegimeThreshold
) -> pd.DataFrame:
    rows = []
    for index, wait in sorted(result.waits.items()):
        formula = waiting_time(result.lam, result.mu, threshold.ti, result.initial_count, index)
        rows.append(
            {
                "customer": index,
                "arrival": index / result.lam,
                "Wq_sim": wait,
                "Wq_formula": formula,
                "abs_gap": abs(wait - formula),
            }
        )
    return pd.DataFrame(rows, columns=["customer", "arrival", "Wq_sim", "Wq_formula", "abs_gap"])


def ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def run_markovian(args: argparse.Namespace, lam: float, mu: float) -> None:
    try:
        if args.model == "mmc":
            metrics = mmc_metrics(lam, mu, args.servers)
        else:
            metrics = mm1_metrics(lam, mu)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc

    print(f"\nTeoria {args.model.upper()}:")
    for key, value in metrics.as_dict().items():
        print(f"  {key:<3}: {value:>10.4f}")


def run_deterministic(args: argparse.Namespace, lam: float, mu: float, k: int | None, m: int) -> None:
    if k is None:
        raise SystemExit("--capacity is required for the D/D/1/K model.")
    try:
        threshold = regime_threshold(lam, mu, k, m)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc
    if not threshold.converged:
        raise SystemExit("Could not determine saturation time (ti). Check inputs.")

    print("\nD/D/1/K:")
    print(f"  lambda     : {lam:>10.4f}")
    print(f"  mu         : {mu:>10.4f}")
    print(f"  K          : {k:>10d}")
    print(f"  M          : {m:>10d}")
    print(f"  regimen    : {threshold.regime.value:>10}")
    if threshold.regime is not Regime.BALANCED:
        print(f"  ti         : {threshold.ti:>10.2f}")

    try:
        if args.time is not None:
            n_t = occupancy_at(args.time, lam, mu, threshold.ti, k, m)
            print(f"  n({args.time:g}){'':<6}: {n_t:>10d}")
        if args.customer is not None:
            wq = waiting_time(lam, mu, threshold.ti, m, args.customer)
            print(f"  Wq({args.customer}){'':<5}: {wq:>10.4f}")

        step = simulate_occupancy(lam, mu, args.horizon, k)
        result = run_dd1k(DD1KParams(lam=lam, mu=mu, capacity=k, initial_count=m, horizon=args.horizon))
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc

    ensure_parent(args.timeline_out)
    timeline_frame(step).to_csv(args.timeline_out, index=False)
    customers = customers_frame(result, threshold)
    ensure_parent(args.customers_out)
    customers.to_csv(args.customers_out, index=False)

    print("\nReplicacion determinista:")
    for key in ["L", "Lq", "utilization", "Wq_mean", "W_mean"]:
        print(f"  {key:<11}: {getattr(result, key):>10.4f}")
    for key in ["arrivals", "admitted", "balked", "peak_in_system"]:
        print(f"  {key:<11}: {getattr(result, key):>10d}")
    if not customers.empty:
        print(f"  max |Wq gap|: {customers['abs_gap'].max():>9.4f}")

    print(f"\nLinea de tiempo guardada en {args.timeline_out.resolve()}")
    print(f"Esperas por cliente guardadas en {args.customers_out.resolve()}")


def main(argv=None) -> None:
    args = parse_args(argv)
    lam, mu, k, m = resolve_inputs(args)
    if args.model == "dd1k":
        run_deterministic(args, lam, mu, k, m)
    else:
        run_markovian(args, lam, mu)


if __name__ == "__main__":
    main()
