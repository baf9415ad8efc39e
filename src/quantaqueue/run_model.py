"""Command line interface to evaluate one queueing model."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Mapping, Optional

import numpy as np
import pandas as pd

from .distribution import FINITE_MODELS, mean_customers, state_distribution
from .errors import QueueingError
from .general import ModelResult, QueueModel, evaluate_model, select_model
from .kernel import DEFAULT_DECIMALS
from .params import QueueParams
from .plots import plot_state_distribution
from .scenarios import get_scenario, list_scenarios

MODEL_ALIASES = {
    "mm1": QueueModel.MM1,
    "mms": QueueModel.MMS,
    "mm1k": QueueModel.MM1K,
    "mmsk": QueueModel.MMSK,
    "mg1": QueueModel.MG1,
}


def parse_model(text: str) -> QueueModel:
    """Accept a selector number (``"2"``) or a Kendall alias (``"mms"``, ``"M/M/s"``)."""
    key = str(text).strip().lower().replace("/", "")
    if key in MODEL_ALIASES:
        return MODEL_ALIASES[key]
    try:
        return select_model(int(key))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(
            f"Invalid model '{text}'. Use 1-5 or one of {sorted(MODEL_ALIASES)}."
        ) from exc


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Evaluate closed-form metrics of a queueing model.")
    parser.add_argument(
        "--model",
        type=parse_model,
        help="Queueing model: 1/mm1, 2/mms, 3/mm1k, 4/mmsk, 5/mg1 (required unless --scenario).",
    )
    parser.add_argument("--lam", type=float, help="Arrival rate lambda (required unless --scenario).")
    parser.add_argument("--mu", type=float, help="Service rate mu (required unless --scenario).")
    parser.add_argument(
        "--scenario",
        type=str,
        choices=list(list_scenarios()),
        help="Named scenario shortcut (A, B, C, D).",
    )
    parser.add_argument("--servers", type=int, default=1, help="Number of parallel servers s.")
    parser.add_argument("--limit", type=int, default=1, help="System capacity k for finite models.")
    parser.add_argument("--variance", type=float, default=0.0, help="Service variance for M/G/1.")
    parser.add_argument("--iteration", type=int, default=1, help="State n for Pn and busy servers.")
    parser.add_argument(
        "--max-n",
        type=int,
        default=None,
        help="Last state of the distribution table (defaults to k for finite models).",
    )
    parser.add_argument("--decimals", type=int, default=DEFAULT_DECIMALS, help="Rounding precision.")
    parser.add_argument(
        "--outputs",
        type=Path,
        default=Path("outputs/metrics.csv"),
        help="Path where the metrics CSV will be written.",
    )
    parser.add_argument(
        "--reports-dir",
        type=Path,
        default=None,
        help="Directory for the state distribution figure (skipped when omitted).",
    )
    parser.add_argument("--log-level", type=str, default="WARNING", help="Logging level.")
    return parser.parse_args(argv)


def resolve_params(args: argparse.Namespace) -> tuple[QueueModel, QueueParams]:
    """Return the model and parameters from either a scenario or explicit flags."""
    if args.scenario:
        scenario = get_scenario(args.scenario)
        model = args.model or select_model(scenario.model)
        return model, scenario.params
    if args.model is None or args.lam is None or args.mu is None:
        raise SystemExit("Either --scenario or all of --model, --lam and --mu must be provided.")
    params = QueueParams(
        lam=args.lam,
        mu=args.mu,
        server_size=args.servers,
        limit=args.limit,
        variance=args.variance,
    )
    return args.model, params


def metrics_frame(results: Mapping[str, ModelResult]) -> pd.DataFrame:
    rows = [{"metric": name, **result.as_dict()} for name, result in results.items()]
    return pd.DataFrame(rows, columns=["metric", "result", "message"])


def distribution_frame(probs: np.ndarray) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "n": np.arange(probs.size),
            "probability": probs,
            "cumulative": np.cumsum(probs),
        }
    )


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper())
    model, params = resolve_params(args)

    try:
        results = evaluate_model(model, params, iteration=args.iteration, decimals=args.decimals)
    except QueueingError as exc:
        raise SystemExit(f"{model.label}: {exc}") from exc
    metrics = metrics_frame(results)

    args.outputs.parent.mkdir(parents=True, exist_ok=True)
    metrics.to_csv(args.outputs, index=False)

    print(f"\n{model.label} (lambda={params.lam}, mu={params.mu}, s={params.server_size}, k={params.limit}):")
    for name, result in results.items():
        value = "n/a" if result.result is None else f"{result.result:>12.{args.decimals}f}"
        print(f"  {name:<24}: {value}")
    print(f"  {'rho':<24}: {params.rho:>12.{args.decimals}f}")

    if model in FINITE_MODELS or args.max_n is not None:
        probs = state_distribution(model, params, max_n=args.max_n)
        table = distribution_frame(probs)
        dist_path = args.outputs.parent / "distribution.csv"
        table.to_csv(dist_path, index=False)
        print("\nState distribution:")
        print(table.to_string(index=False, float_format=lambda v: f"{v:.{args.decimals}f}"))
        print(f"  mean customers (sum n*Pn): {mean_customers(probs):.{args.decimals}f}")
        print(f"Distribution saved to {dist_path.resolve()}")
        if args.reports_dir is not None:
            args.reports_dir.mkdir(parents=True, exist_ok=True)
            figure = args.reports_dir / "state_distribution.png"
            plot_state_distribution(table, f"{model.label} state distribution", figure)
            print(f"Figure saved to {figure.resolve()}")

    print(f"\nMetrics saved to {args.outputs.resolve()}")


if __name__ == "__main__":
    main()
