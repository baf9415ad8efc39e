"""Sweep the number of servers of an M/M/s or M/M/s/k system and pick the cheapest."""

from __future__ import annotations

import argparse
import logging
import math
from pathlib import Path
from typing import Iterable, List, Optional

import pandas as pd
from tqdm import tqdm

from .cost import service_cost, total_cost, waiting_cost
from .errors import QueueingError
from .general import (
    QueueModel,
    queue_clients_expected,
    queue_time_expected,
    system_clients_expected,
    system_time_expected,
)
from .kernel import DEFAULT_DECIMALS
from .plots import plot_costs_vs_servers, plot_metrics_vs_servers
from .run_model import parse_model
from .scenarios import get_scenario, list_scenarios

logger = logging.getLogger(__name__)

MULTI_SERVER_MODELS = (QueueModel.MMS, QueueModel.MMSK)


def parse_s_list(text: str) -> List[int]:
    values = []
    for chunk in text.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        try:
            s = int(chunk)
        except ValueError as exc:
            raise argparse.ArgumentTypeError(f"Invalid server count '{chunk}'.") from exc
        if s < 1:
            raise argparse.ArgumentTypeError("Every server count must be >= 1.")
        values.append(s)
    if not values:
        raise argparse.ArgumentTypeError("Provide at least one server count via --s-list.")
    return sorted(set(values))


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compare metrics and expected cost across server counts.")
    parser.add_argument("--lam", type=float, help="Arrival rate lambda (required unless --scenario).")
    parser.add_argument("--mu", type=float, help="Service rate mu (required unless --scenario).")
    parser.add_argument(
        "--scenario",
        type=str,
        choices=list(list_scenarios()),
        help="Named scenario shortcut providing lambda, mu and the capacity limit.",
    )
    parser.add_argument(
        "--model",
        type=parse_model,
        default=QueueModel.MMS,
        help="Multi-server model to sweep: 2/mms or 4/mmsk.",
    )
    parser.add_argument(
        "--s-list",
        type=parse_s_list,
        default=parse_s_list("1,2,3,4"),
        help='Comma-separated list of server counts to evaluate (e.g. "1,2,3,4").',
    )
    parser.add_argument("--limit", type=int, default=10, help="System capacity k for M/M/s/k.")
    parser.add_argument("--c-server", type=float, default=1.0, dest="c_server", help="Cost per server.")
    parser.add_argument(
        "--c-wait",
        type=float,
        default=1.0,
        dest="c_wait",
        help="Cost per customer in the system per unit time.",
    )
    parser.add_argument("--decimals", type=int, default=DEFAULT_DECIMALS, help="Rounding precision.")
    parser.add_argument(
        "--summary-out",
        type=Path,
        default=Path("outputs/compare_summary.csv"),
        help="CSV with metrics and costs per server count.",
    )
    parser.add_argument(
        "--reports-dir",
        type=Path,
        default=Path("reports"),
        help="Directory where comparison figures will be written.",
    )
    parser.add_argument("--log-level", type=str, default="WARNING", help="Logging level.")
    return parser.parse_args(argv)


def resolve_base_rates(args: argparse.Namespace) -> tuple[float, float, int]:
    if args.scenario:
        params = get_scenario(args.scenario).params
        return params.lam, params.mu, params.limit
    if args.lam is None or args.mu is None:
        raise SystemExit("Either --scenario or both --lam and --mu must be provided.")
    return args.lam, args.mu, args.limit


def evaluate_servers(
    model: QueueModel,
    lam: float,
    mu: float,
    s: int,
    limit: int,
    c_server: float,
    c_wait: float,
    decimals: int = DEFAULT_DECIMALS,
) -> dict[str, float]:
    """Metrics and costs for one server count; unstable or infeasible counts are flagged."""
    row: dict[str, float] = {"s": s, "rho": lam / (s * mu), "stable": True}
    if model is QueueModel.MMS and row["rho"] >= 1:
        logger.warning("Skipping s=%d: rho=%.4f >= 1 never reaches steady state.", s, row["rho"])
        row["stable"] = False
    elif model is QueueModel.MMSK and limit < s + 1:
        logger.warning("Skipping s=%d: capacity %d leaves no room to queue.", s, limit)
        row["stable"] = False
    elif model is QueueModel.MMSK and math.isclose(row["rho"], 1.0):
        logger.warning("Skipping s=%d: the closed-form Lq is undefined at rho=1.", s)
        row["stable"] = False
    if not row["stable"]:
        for key in ("Lq", "Ls", "Wq", "Ws", "service_cost", "waiting_cost", "total_cost"):
            row[key] = math.nan
        return row

    row["Lq"] = queue_clients_expected(model, lam, mu, s, 0, limit, decimals).result
    row["Ls"] = system_clients_expected(model, lam, mu, s, 0, limit, decimals).result
    row["Wq"] = queue_time_expected(model, lam, mu, s, 0, limit, decimals).result
    row["Ws"] = system_time_expected(model, lam, mu, s, 0, limit, decimals).result
    row["service_cost"] = service_cost(c_server, s, decimals)
    row["waiting_cost"] = waiting_cost(c_wait, model, lam, mu, s, 0, limit, decimals)
    row["total_cost"] = total_cost(row["service_cost"], row["waiting_cost"], decimals)
    return row


def sweep(
    model: QueueModel,
    lam: float,
    mu: float,
    s_values: Iterable[int],
    limit: int,
    c_server: float,
    c_wait: float,
    decimals: int = DEFAULT_DECIMALS,
) -> pd.DataFrame:
    if model not in MULTI_SERVER_MODELS:
        raise QueueingError(f"The {model.label} model has a fixed number of servers; use M/M/s or M/M/s/k.")
    rows = [
        evaluate_servers(model, lam, mu, s, limit, c_server, c_wait, decimals)
        for s in tqdm(list(s_values), desc="Servers", unit="s")
    ]
    return pd.DataFrame(rows).sort_values("s").reset_index(drop=True)


def recommend(summary: pd.DataFrame) -> Optional[int]:
    """Server count with the lowest total cost among the feasible ones."""
    stable = summary[summary["stable"]]
    if stable.empty:
        return None
    return int(stable.loc[stable["total_cost"].idxmin(), "s"])


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper())
    if args.model not in MULTI_SERVER_MODELS:
        raise SystemExit("--model must be 2 (mms) or 4 (mmsk).")
    lam, mu, limit = resolve_base_rates(args)

    summary = sweep(args.model, lam, mu, args.s_list, limit, args.c_server, args.c_wait, args.decimals)
    best_s = recommend(summary)

    args.summary_out.parent.mkdir(parents=True, exist_ok=True)
    summary.to_csv(args.summary_out, index=False)

    stable = summary[summary["stable"]]
    if not stable.empty:
        args.reports_dir.mkdir(parents=True, exist_ok=True)
        plot_metrics_vs_servers(stable, args.reports_dir / "metrics_vs_s.png")
        plot_costs_vs_servers(stable, best_s, args.reports_dir / "costs_vs_s.png")

    capacity = f", k={limit}" if args.model is QueueModel.MMSK else ""
    print(f"\n{args.model.label} with lambda={lam}, mu={mu}{capacity}")
    print(summary.to_string(index=False))
    if best_s is None:
        print("\nNo feasible server count in the sweep.")
    else:
        print(f"\nRecommended number of servers: {best_s}")
    print(f"Summary saved to {args.summary_out.resolve()}")


if __name__ == "__main__":
    main()
