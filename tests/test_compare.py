"""Tests for the command line helpers and the server-count sweep."""

import argparse
import math

import pandas as pd
import pytest

from quantaqueue import compare, run_model
from quantaqueue.errors import QueueingError
from quantaqueue.general import QueueModel


def test_parse_s_list_sorts_and_deduplicates():
    assert compare.parse_s_list("3,1,2,2") == [1, 2, 3]
    with pytest.raises(argparse.ArgumentTypeError):
        compare.parse_s_list("1,x")
    with pytest.raises(argparse.ArgumentTypeError):
        compare.parse_s_list("0,1")


@pytest.mark.parametrize(
    "text, expected",
    [("mm1", QueueModel.MM1), ("M/M/s", QueueModel.MMS), ("M/M/1/k", QueueModel.MM1K), ("4", QueueModel.MMSK)],
)
def test_parse_model_aliases(text, expected):
    assert run_model.parse_model(text) is expected


def test_parse_model_rejects_unknown():
    with pytest.raises(argparse.ArgumentTypeError):
        run_model.parse_model("7")


def test_sweep_flags_unstable_counts_and_recommends():
    summary = compare.sweep(QueueModel.MMS, 2, 1, [1, 2, 3, 4], 10, 1, 1)
    assert summary["s"].tolist() == [1, 2, 3, 4]
    assert summary["stable"].tolist() == [False, False, True, True]
    assert math.isnan(summary.loc[0, "total_cost"])
    assert summary.loc[2, "total_cost"] == pytest.approx(5.8889)
    assert summary.loc[3, "total_cost"] == pytest.approx(6.1739)
    assert compare.recommend(summary) == 3


def test_sweep_requires_multi_server_model():
    with pytest.raises(QueueingError):
        compare.sweep(QueueModel.MM1, 2, 1, [1], 10, 1, 1)


def test_recommend_without_feasible_rows():
    summary = compare.sweep(QueueModel.MMS, 5, 1, [1, 2], 10, 1, 1)
    assert compare.recommend(summary) is None


def test_run_model_writes_metrics_and_distribution(tmp_path, capsys):
    out = tmp_path / "metrics.csv"
    run_model.main(["--model", "mm1k", "--lam", "1", "--mu", "2", "--limit", "3", "--outputs", str(out)])

    metrics = pd.read_csv(out)
    assert len(metrics) == 7
    row = metrics.set_index("metric").loc["initial_probability"]
    assert row["result"] == pytest.approx(0.5333)

    distribution = pd.read_csv(tmp_path / "distribution.csv")
    assert distribution["n"].tolist() == [0, 1, 2, 3]
    assert distribution["cumulative"].iloc[-1] == pytest.approx(1.0)
    assert "M/M/1/k" in capsys.readouterr().out


def test_run_model_reports_formula_errors(tmp_path):
    argv = ["--model", "mm1k", "--lam", "2", "--mu", "2", "--limit", "3", "--outputs", str(tmp_path / "m.csv")]
    with pytest.raises(SystemExit):
        run_model.main(argv)


def test_compare_main_writes_summary(tmp_path):
    summary_out = tmp_path / "summary.csv"
    reports = tmp_path / "reports"
    compare.main(
        [
            "--lam", "2",
            "--mu", "1",
            "--s-list", "2,3,4",
            "--summary-out", str(summary_out),
            "--reports-dir", str(reports),
        ]
    )
    summary = pd.read_csv(summary_out)
    assert summary["s"].tolist() == [2, 3, 4]
    assert (reports / "costs_vs_s.png").exists()


def test_finite_sweep_skips_rho_one_and_tiny_capacity():
    summary = compare.sweep(QueueModel.MMSK, 3, 1, [2, 3, 6], 6, 1, 1)
    assert summary["stable"].tolist() == [True, False, False]
    assert compare.recommend(summary) == 2
