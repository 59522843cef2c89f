"""Draw the occupancy n(t) of a D/D/1/K queue as a stepped line."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional

import matplotlib.pyplot as plt

try:
    from ddqueue import StepFunction, simulate_occupancy
    from ddqueue.config import DEFAULT_HORIZON
except ModuleNotFoundError:  # pragma: no cover
    from .ddqueue import StepFunction, simulate_occupancy
    from .ddqueue.config import DEFAULT_HORIZON

try:
    from run_sim import parse_rate
except ModuleNotFoundError:  # pragma: no cover
    from .run_sim import parse_rate

LINE_COLOR = "#CE7759"
MARKER_COLOR = (1.0, 0.8, 0.0, 0.8)
AXIS_COLOR = "#48607c"


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Plot the occupancy timeline n(t).")
    parser.add_argument("--lam", type=parse_rate, required=True, help="Arrival rate lambda.")
    parser.add_argument("--mu", type=parse_rate, required=True, help="Service rate mu.")
    parser.add_argument("-k", "--capacity", type=int, required=True, help="System constant K.")
    parser.add_argument("-t", "--time", type=float, help="Optional time marker.")
    parser.add_argument("--horizon", type=float, default=DEFAULT_HORIZON, help="Fixed x-axis length.")
    parser.add_argument(
        "--out",
        type=Path,
        default=Path("reports/occupancy.png"),
        help="Where the PNG is written.",
    )
    return parser.parse_args(argv)


def plot_step_function(
    step: StepFunction,
    horizon: float,
    capacity: int,
    out: Path,
    marker: Optional[float] = None,
) -> None:
    fig, ax = plt.subplots(figsize=(10, 4))
    ax.step(step.times, step.values, where="post", color=LINE_COLOR, linewidth=2.5, label="n(t)")
    if marker is not None:
        ax.axvline(marker, color=MARKER_COLOR, linewidth=3, linestyle=(0, (6, 6)))
        ax.text(
            marker,
            capacity,
            f" t = {marker:g}",
            va="top",
            ha="left",
            fontsize=10,
            fontweight="bold",
            color="#333333",
            bbox={"facecolor": MARKER_COLOR, "edgecolor": "none"},
        )
    ax.set_xlim(0, horizon)
    ax.set_ylim(0, capacity)
    ax.set_xticks(range(0, int(horizon) + 1, max(1, int(horizon) // 25)))
    ax.set_yticks(range(0, capacity + 1))
    ax.set_xlabel("Time (t)", color=AXIS_COLOR)
    ax.set_ylabel("n(t)", color=AXIS_COLOR)
    ax.grid(color=AXIS_COLOR, alpha=0.2, linestyle="--")
    ax.legend(loc="upper right")
    fig.tight_layout()
    fig.savefig(out, dpi=150)
    plt.close(fig)


def main(argv=None) -> None:
    args = parse_args(argv)
    try:
        step = simulate_occupancy(args.lam, args.mu, args.horizon, args.capacity)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc

    args.out.parent.mkdir(parents=True, exist_ok=True)
    plot_step_function(step, args.horizon, args.capacity, args.out, marker=args.time)
    print(f"Figura guardada en {args.out.resolve()}")


if __name__ == "__main__":
    main()
