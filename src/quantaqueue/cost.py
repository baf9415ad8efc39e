"""Expected cost per unit time of running a queueing system."""

from __future__ import annotations

from .general import ModelSelector, system_time_expected
from .kernel import DEFAULT_DECIMALS, INTERNAL_DECIMALS, round_to


def service_cost(server_cost: float, server_size: int = 1, decimals: int = DEFAULT_DECIMALS) -> float:
    """Cost of keeping ``server_size`` servers open, ``server_cost * s``."""
    return round_to(server_cost * server_size, decimals)


def waiting_cost(
    waiting_cost: float,
    model: ModelSelector,
    lam: float,
    mu: float,
    server_size: int = 1,
    variance: float = 0,
    limit: int = 1,
    decimals: int = DEFAULT_DECIMALS,
) -> float:
    """Cost of customers in the system, ``waiting_cost * lam * Ws``."""
    ws = system_time_expected(model, lam, mu, server_size, variance, limit, INTERNAL_DECIMALS).result
    return round_to(waiting_cost * (lam * ws), decimals)


def total_cost(service: float, waiting: float, decimals: int = DEFAULT_DECIMALS) -> float:
    return round_to(service + waiting, decimals)
