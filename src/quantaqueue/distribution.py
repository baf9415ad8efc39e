"""State-probability vectors assembled from the dispatcher."""

from __future__ import annotations

from typing import Optional

import numpy as np

from .errors import RangeError
from .general import ModelSelector, QueueModel, initial_probability, n_probability, select_model
from .kernel import INTERNAL_DECIMALS
from .params import QueueParams

FINITE_MODELS = (QueueModel.MM1K, QueueModel.MMSK)


def state_distribution(
    model: ModelSelector,
    params: QueueParams,
    max_n: Optional[int] = None,
    decimals: int = INTERNAL_DECIMALS,
) -> np.ndarray:
    """
    Return ``[P0, P1, ..., Pn]`` for the selected model.

    Finite-capacity models stop at ``params.limit`` unless ``max_n`` is
    given; infinite-capacity models require ``max_n``.
    """
    selected = select_model(model)
    if max_n is None:
        if selected not in FINITE_MODELS:
            raise RangeError(f"max_n is required for the infinite-capacity {selected.label} model.")
        max_n = params.limit
    if max_n < 0:
        raise RangeError("max_n cannot be lower than zero (0).")

    p = params
    probs = np.empty(max_n + 1, dtype=float)
    probs[0] = initial_probability(selected, p.lam, p.mu, p.server_size, p.limit, decimals).result
    for n in range(1, max_n + 1):
        probs[n] = n_probability(selected, p.lam, p.mu, p.server_size, n, p.limit, decimals).result
    return probs


def mean_customers(probs: np.ndarray) -> float:
    """First moment ``sum(n * Pn)`` of a state distribution."""
    probs = np.asarray(probs, dtype=float)
    return float(np.dot(np.arange(probs.size), probs))
