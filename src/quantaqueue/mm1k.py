"""
Closed-form metrics for the M/M/1/k queue (one server, at most k customers).

Every function requires ``mu != 0`` and ``limit >= 1``. Customers arriving
while the system holds ``limit`` customers are lost, so the queue is stable
for any utilization except ``rho == 1`` where the geometric sums degenerate.
"""

from __future__ import annotations

from .basic import rho
from .errors import DomainError
from .kernel import DEFAULT_DECIMALS, INTERNAL_DECIMALS, round_to
from .validation import require_iteration, require_limit, require_mu, require_nonzero


def _checked_rho(lam: float, mu: float, limit: int) -> float:
    require_mu(mu)
    require_limit(limit)
    r = rho(lam, mu, 1, INTERNAL_DECIMALS)
    if r == 1:
        raise DomainError("The utilization factor 'rho' is equal to one (1). Cannot compute.")
    return r


def qty_server_busy(
    lam: float,
    mu: float,
    iteration: int = 1,
    limit: int = 1,
    decimals: int = DEFAULT_DECIMALS,
) -> float:
    """Unnormalized state weight ``(lam/mu)^n``; zero beyond the capacity."""
    require_mu(mu)
    require_limit(limit)
    require_iteration(iteration, 0)
    if iteration > limit:
        return 0.0
    return round_to((lam / mu) ** iteration, decimals)


def initial_probability(lam: float, mu: float, limit: int = 1, decimals: int = DEFAULT_DECIMALS) -> float:
    """P0 = (1 - rho)/(1 - rho^(k+1))."""
    r = _checked_rho(lam, mu, limit)
    return round_to((1 - r) / (1 - r ** (limit + 1)), decimals)


def n_probability(
    lam: float,
    mu: float,
    iteration: int = 1,
    limit: int = 1,
    decimals: int = DEFAULT_DECIMALS,
) -> float:
    """Pn = P0 * rho^n."""
    require_iteration(iteration, 0)
    r = _checked_rho(lam, mu, limit)
    p0 = initial_probability(lam, mu, limit, INTERNAL_DECIMALS)
    return round_to(p0 * r ** iteration, decimals)


def system_clients_expected(lam: float, mu: float, limit: int = 1, decimals: int = DEFAULT_DECIMALS) -> float:
    """Ls = rho/(1 - rho) - (k+1)*rho^(k+1)/(1 - rho^(k+1))."""
    r = _checked_rho(lam, mu, limit)
    tail = r ** (limit + 1)
    return round_to(r / (1 - r) - ((limit + 1) * tail) / (1 - tail), decimals)


def queue_clients_expected(lam: float, mu: float, limit: int = 1, decimals: int = DEFAULT_DECIMALS) -> float:
    """Lq = Ls - (1 - P0)."""
    ls = system_clients_expected(lam, mu, limit, INTERNAL_DECIMALS)
    p0 = initial_probability(lam, mu, limit, INTERNAL_DECIMALS)
    return round_to(ls - (1 - p0), decimals)


def queue_time_expected(lam: float, mu: float, limit: int = 1, decimals: int = DEFAULT_DECIMALS) -> float:
    """Wq = Lq/lam."""
    lq = queue_clients_expected(lam, mu, limit, INTERNAL_DECIMALS)
    require_nonzero(lam, "lambda")
    return round_to(lq / lam, decimals)


def system_time_expected(lam: float, mu: float, limit: int = 1, decimals: int = DEFAULT_DECIMALS) -> float:
    """Ws = Ls/lam."""
    ls = system_clients_expected(lam, mu, limit, INTERNAL_DECIMALS)
    require_nonzero(lam, "lambda")
    return round_to(ls / lam, decimals)
