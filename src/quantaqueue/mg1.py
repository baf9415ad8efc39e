"""M/G/1 metrics from the Pollaczek-Khinchine formula.

``variance`` is the service-time dispersion parameter ``v`` entering
``Lq = (lam^2 v^2 + rho^2) / (2 (1 - rho))``.
"""

from __future__ import annotations

from . import mm1
from .basic import rho
from .kernel import DEFAULT_DECIMALS, INTERNAL_DECIMALS, round_to
from .validation import require_iteration, require_mu, require_nonzero


def initial_probability(lam: float, mu: float, decimals: int = DEFAULT_DECIMALS) -> float:
    require_mu(mu)
    r = rho(lam, mu, 1, INTERNAL_DECIMALS)
    return round_to(1 - r, decimals)


def n_probability(lam: float, mu: float, iteration: int = 1, decimals: int = DEFAULT_DECIMALS) -> float:
    require_mu(mu)
    require_iteration(iteration, 1)
    r = rho(lam, mu, 1, INTERNAL_DECIMALS)
    p0 = mm1.initial_probability(lam, mu, INTERNAL_DECIMALS)
    return round_to((r ** iteration) * p0, decimals)


def queue_clients_expected(lam: float, mu: float, variance: float = 0, decimals: int = DEFAULT_DECIMALS) -> float:
    require_mu(mu)
    r = rho(lam, mu, 1, INTERNAL_DECIMALS)
    require_nonzero(1 - r, "1 - rho")
    return round_to(((lam ** 2) * (variance ** 2) + r ** 2) / (2 * (1 - r)), decimals)


def system_clients_expected(lam: float, mu: float, variance: float = 0, decimals: int = DEFAULT_DECIMALS) -> float:
    """Ls = rho + Lq."""
    require_mu(mu)
    r = rho(lam, mu, 1, INTERNAL_DECIMALS)
    lq = queue_clients_expected(lam, mu, variance, INTERNAL_DECIMALS)
    return round_to(r + lq, decimals)


def queue_time_expected(lam: float, mu: float, variance: float = 0, decimals: int = DEFAULT_DECIMALS) -> float:
    """Wq = Lq/lam."""
    lq = queue_clients_expected(lam, mu, variance, INTERNAL_DECIMALS)
    require_nonzero(lam, "lambda")
    return round_to(lq / lam, decimals)


def system_time_expected(lam: float, mu: float, variance: float = 0, decimals: int = DEFAULT_DECIMALS) -> float:
    """Ws = Wq + 1/mu."""
    wq = queue_time_expected(lam, mu, variance, INTERNAL_DECIMALS)
    return round_to(wq + 1 / mu, decimals)
