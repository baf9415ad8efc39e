"""Figures for state distributions and server-count sweeps."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional

import matplotlib.pyplot as plt
import pandas as pd


def plot_state_distribution(distribution: pd.DataFrame, title: str, out: Path) -> None:
    fig, ax = plt.subplots(figsize=(8, 4))
    ax.bar(distribution["n"], distribution["probability"], color="#4c72b0", alpha=0.85)
    ax2 = ax.twinx()
    ax2.plot(distribution["n"], distribution["cumulative"], color="black", marker="o", label="Cumulative")
    ax2.set_ylim(0, max(1.05, float(distribution["cumulative"].max()) * 1.05))
    ax.set_xlabel("n (customers in system)")
    ax.set_ylabel("Pn")
    ax2.set_ylabel("P(N <= n)")
    ax.set_title(title)
    fig.tight_layout()
    fig.savefig(out, dpi=150)
    plt.close(fig)


def plot_metrics_vs_servers(summary: pd.DataFrame, out: Path) -> None:
    s_values = summary["s"].astype(int).tolist()
    fig, ax = plt.subplots(figsize=(10, 5))
    for label in ["Lq", "Ls", "Wq", "Ws"]:
        ax.plot(s_values, summary[label], marker="o", label=label)
    ax.set_xlabel("s")
    ax.set_ylabel("Lq, Ls, Wq, Ws")
    ax.set_title("Metrics vs. number of servers")
    ax.legend(loc="upper right")
    fig.tight_layout()
    fig.savefig(out, dpi=150)
    plt.close(fig)


def plot_costs_vs_servers(summary: pd.DataFrame, best_s: Optional[int], out: Path) -> None:
    s_values = summary["s"].astype(int).tolist()
    fig, ax = plt.subplots(figsize=(8, 4))
    ax.plot(s_values, summary["service_cost"], linestyle="--", marker="x", label="Service cost")
    ax.plot(s_values, summary["waiting_cost"], linestyle="--", marker="^", label="Waiting cost")
    ax.plot(s_values, summary["total_cost"], marker="o", label="Total cost")
    ax.set_xlabel("s")
    ax.set_ylabel("Cost per unit time (lower is better)")
    ax.set_title("Expected cost vs. number of servers")
    if best_s is not None:
        best_row = summary[summary["s"] == best_s].iloc[0]
        ax.scatter([best_s], [best_row["total_cost"]], color="black", zorder=5, label="s*")
        ax.text(best_s, best_row["total_cost"], " s*", va="bottom", ha="left", fontsize=10, color="black")
    ax.legend()
    fig.tight_layout()
    fig.savefig(out, dpi=150)
    plt.close(fig)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Regenerate figures from a server-count sweep.")
    parser.add_argument(
        "--summary",
        type=Path,
        default=Path("outputs/compare_summary.csv"),
        help="CSV produced by quantaqueue-compare.",
    )
    parser.add_argument(
        "--reports-dir",
        type=Path,
        default=Path("reports"),
        help="Directory where PNG files will be saved.",
    )
    return parser.parse_args()


def load_summary(path: Path) -> pd.DataFrame:
    if not path.exists():
        raise FileNotFoundError(f"Summary file not found: {path}")
    df = pd.read_csv(path)
    if df.empty:
        raise ValueError("Summary file is empty. Run the comparison first.")
    return df


def main() -> None:
    args = parse_args()
    summary = load_summary(args.summary)
    stable = summary[summary["stable"]]
    best_s = int(stable.loc[stable["total_cost"].idxmin(), "s"]) if not stable.empty else None

    args.reports_dir.mkdir(parents=True, exist_ok=True)
    plot_metrics_vs_servers(stable, args.reports_dir / "metrics_vs_s.png")
    plot_costs_vs_servers(stable, best_s, args.reports_dir / "costs_vs_s.png")
    print(f"Figures saved to {args.reports_dir.resolve()}")


if __name__ == "__main__":
    main()
