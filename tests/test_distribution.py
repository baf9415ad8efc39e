"""Unit tests for state distributions."""

import math

import numpy as np
import pytest

from quantaqueue import mm1k, mmsk
from quantaqueue.distribution import mean_customers, state_distribution
from quantaqueue.errors import RangeError
from quantaqueue.params import QueueParams


def test_finite_model_distribution_sums_to_one():
    params = QueueParams(lam=1.0, mu=2.0, limit=3)
    probs = state_distribution(3, params)
    assert probs.shape == (4,)
    assert math.isclose(float(probs.sum()), 1.0, rel_tol=1e-9)
    assert math.isclose(mean_customers(probs), mm1k.system_clients_expected(1, 2, 3, 15), rel_tol=1e-9)


def test_multi_server_finite_distribution():
    params = QueueParams(lam=1.0, mu=1.0, server_size=2, limit=4)
    probs = state_distribution(4, params)
    assert np.all(probs >= 0)
    assert math.isclose(mean_customers(probs), mmsk.system_clients_expected(1, 1, 2, 4, 15), rel_tol=1e-9)


def test_infinite_model_needs_max_n():
    params = QueueParams(lam=0.5, mu=1.0)
    with pytest.raises(RangeError):
        state_distribution(1, params)
    probs = state_distribution(1, params, max_n=60)
    assert math.isclose(float(probs.sum()), 1.0, abs_tol=1e-9)
