"""Unit tests for the finite-capacity M/M/1/k formulas."""

import math

import pytest

from quantaqueue import mm1k
from quantaqueue.errors import DomainError, RangeError

CASES = [(1.0, 2.0, 3), (0.9, 1.0, 5), (3.0, 2.0, 4), (0.2, 1.0, 1)]


def test_mm1k_matches_known_case():
    assert mm1k.initial_probability(1, 2, 3) == 0.5333
    assert mm1k.system_clients_expected(1, 2, 3) == 0.7333
    assert mm1k.queue_clients_expected(1, 2, 3) == 0.2667
    assert mm1k.system_time_expected(1, 2, 3) == 0.7333
    assert mm1k.queue_time_expected(1, 2, 3) == 0.2667
    assert mm1k.n_probability(1, 2, 3, 3) == 0.0667


@pytest.mark.parametrize("lam,mu,k", CASES)
def test_mm1k_probabilities_sum_to_one(lam, mu, k):
    r = lam / mu
    p0 = mm1k.initial_probability(lam, mu, k, 15)
    assert math.isclose(p0 * sum(r ** n for n in range(k + 1)), 1.0, rel_tol=1e-9)
    total = sum(mm1k.n_probability(lam, mu, n, k, 15) for n in range(k + 1))
    assert math.isclose(total, 1.0, rel_tol=1e-9)


@pytest.mark.parametrize("lam,mu,k", CASES)
def test_mm1k_ls_is_mean_of_distribution(lam, mu, k):
    mean = sum(n * mm1k.n_probability(lam, mu, n, k, 15) for n in range(k + 1))
    assert math.isclose(mm1k.system_clients_expected(lam, mu, k, 15), mean, abs_tol=1e-9)


def test_mm1k_qty_server_busy_cutoff():
    assert mm1k.qty_server_busy(1, 2, 2, 3) == 0.25
    assert mm1k.qty_server_busy(1, 2, 0, 3) == 1.0
    for n in range(4, 10):
        assert mm1k.qty_server_busy(1, 2, n, 3) == 0


def test_mm1k_rho_equal_one_is_rejected():
    with pytest.raises(DomainError, match="rho"):
        mm1k.initial_probability(2, 2, 3)


def test_mm1k_parameter_validation():
    with pytest.raises(DomainError, match="'limit'"):
        mm1k.initial_probability(1, 2, 0)
    with pytest.raises(DomainError, match="'mu'"):
        mm1k.system_clients_expected(1, 0, 3)
    with pytest.raises(RangeError):
        mm1k.qty_server_busy(1, 2, -1, 3)
    with pytest.raises(DomainError):
        mm1k.queue_time_expected(0, 2, 3)
