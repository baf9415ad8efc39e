"""Closed-form steady-state metrics for an M/M/1 queue."""

from __future__ import annotations

from .basic import rho
from .kernel import DEFAULT_DECIMALS, INTERNAL_DECIMALS, round_to
from .validation import require_iteration, require_mu, require_nonzero


def _rho(lam: float, mu: float) -> float:
    require_mu(mu)
    return rho(lam, mu, 1, INTERNAL_DECIMALS)


def initial_probability(lam: float, mu: float, decimals: int = DEFAULT_DECIMALS) -> float:
    """Probability the system is empty, ``P0 = 1 - rho``."""
    r = _rho(lam, mu)
    return round_to(1 - r, decimals)


def n_probability(lam: float, mu: float, iteration: int = 1, decimals: int = DEFAULT_DECIMALS) -> float:
    """Probability of ``iteration`` customers, ``rho^n * P0`` for ``n >= 1``."""
    require_mu(mu)
    require_iteration(iteration, 1)
    r = _rho(lam, mu)
    p0 = initial_probability(lam, mu, INTERNAL_DECIMALS)
    return round_to((r ** iteration) * p0, decimals)


def system_clients_expected(lam: float, mu: float, decimals: int = DEFAULT_DECIMALS) -> float:
    """Ls = rho/(1 - rho)."""
    r = _rho(lam, mu)
    require_nonzero(1 - r, "1 - rho")
    return round_to(r / (1 - r), decimals)


def queue_clients_expected(lam: float, mu: float, decimals: int = DEFAULT_DECIMALS) -> float:
    """Lq = rho^2/(1 - rho)."""
    r = _rho(lam, mu)
    require_nonzero(1 - r, "1 - rho")
    return round_to((r ** 2) / (1 - r), decimals)


def system_time_expected(lam: float, mu: float, decimals: int = DEFAULT_DECIMALS) -> float:
    """Ws = 1/(mu - lam)."""
    require_mu(mu)
    require_nonzero(mu - lam, "mu - lambda")
    return round_to(1 / (mu - lam), decimals)


def queue_time_expected(lam: float, mu: float, decimals: int = DEFAULT_DECIMALS) -> float:
    """Wq = rho/(mu*(1 - rho))."""
    r = _rho(lam, mu)
    require_nonzero(1 - r, "1 - rho")
    return round_to(r / (mu * (1 - r)), decimals)
