"""
Closed-form metrics for the M/M/s/k queue: s servers, room for k customers.

Arrivals that find ``k`` customers in the system are turned away, so the
arrival rate seen by state ``n`` is :func:`n_lambda`. The waiting-time
metrics divide by the effective arrival rate ``lam * (1 - Pk)``.
"""

from __future__ import annotations

from .basic import rho, summation
from .kernel import DEFAULT_DECIMALS, INTERNAL_DECIMALS, power_over_factorial, round_to
from .validation import (
    require_iteration,
    require_limit,
    require_mu,
    require_nonzero,
    require_server_size,
)


def _check(mu: float, server_size: int, limit: int, headroom: int = 0) -> int:
    require_mu(mu)
    require_server_size(server_size)
    s = int(server_size)
    require_limit(limit, s + headroom)
    return s


def n_lambda(lam: float, iteration: int = 0, limit: int = 0, decimals: int = DEFAULT_DECIMALS) -> float:
    """Arrival rate for state ``iteration``: ``lam`` up to the capacity, zero beyond."""
    if iteration > limit:
        return 0.0
    return round_to(lam, decimals)


def qty_server_busy(
    lam: float,
    mu: float,
    server_size: int = 1,
    iteration: int = 0,
    limit: int = 1,
    decimals: int = DEFAULT_DECIMALS,
) -> float:
    """Unnormalized weight of state ``iteration``; exactly zero past the capacity."""
    s = _check(mu, server_size, limit)
    require_iteration(iteration, 0)
    n = int(iteration)
    rate = n_lambda(lam, n, limit, INTERNAL_DECIMALS)
    a = rate / mu
    if n <= s:
        return round_to(power_over_factorial(a, n, n), decimals)
    return round_to(power_over_factorial(a, s, s) * (a / s) ** (n - s), decimals)


def initial_probability(
    lam: float,
    mu: float,
    server_size: int = 1,
    limit: int = 2,
    decimals: int = DEFAULT_DECIMALS,
) -> float:
    """P0 = 1 / (sum_{n<=s} a^n/n! + a^s/s! * sum_{n=s+1}^{k} rho^(n-s))."""
    s = _check(mu, server_size, limit, headroom=1)
    a = lam / mu
    r = lam / (s * mu)
    head = summation(0, s, lambda n: power_over_factorial(a, n, n), INTERNAL_DECIMALS)
    tail = summation(s + 1, limit, lambda n: r ** (n - s), INTERNAL_DECIMALS)
    return round_to(1 / (head + power_over_factorial(a, s, s) * tail), decimals)


def n_probability(
    lam: float,
    mu: float,
    server_size: int = 1,
    iteration: int = 0,
    limit: int = 2,
    decimals: int = DEFAULT_DECIMALS,
) -> float:
    s = _check(mu, server_size, limit, headroom=1)
    require_iteration(iteration, 0)
    n = int(iteration)
    if n > limit:
        return 0.0
    a = lam / mu
    p0 = initial_probability(lam, mu, s, limit, INTERNAL_DECIMALS)
    if n <= s:
        return round_to(power_over_factorial(a, n, n) * p0, decimals)
    return round_to(power_over_factorial(a, s, s) * (a / s) ** (n - s) * p0, decimals)


def queue_clients_expected(
    lam: float,
    mu: float,
    server_size: int = 1,
    limit: int = 2,
    decimals: int = DEFAULT_DECIMALS,
) -> float:
    """Lq with the finite-capacity correction ``1 - rho^(k-s) - (k-s) rho^(k-s) (1 - rho)``."""
    s = _check(mu, server_size, limit, headroom=1)
    r = rho(lam, mu, s, INTERNAL_DECIMALS)
    require_nonzero(1 - r, "1 - rho")
    p0 = initial_probability(lam, mu, s, limit, INTERNAL_DECIMALS)
    a = lam / mu
    m = limit - s
    correction = r * (1 - r ** m - m * r ** m * (1 - r))
    return round_to(p0 * power_over_factorial(a, s, s) / (1 - r) ** 2 * correction, decimals)


def system_clients_expected(
    lam: float,
    mu: float,
    server_size: int = 1,
    limit: int = 2,
    decimals: int = DEFAULT_DECIMALS,
) -> float:
    """Ls = Lq + sum_{i<s} i Pi + s (1 - sum_{i<s} Pi)."""
    s = _check(mu, server_size, limit, headroom=1)
    lq = queue_clients_expected(lam, mu, s, limit, INTERNAL_DECIMALS)

    def pn(i: int) -> float:
        return n_probability(lam, mu, s, i, limit, INTERNAL_DECIMALS)

    in_service = summation(1, s - 1, lambda i: i * pn(i), INTERNAL_DECIMALS)
    idle_mass = summation(0, s - 1, pn, INTERNAL_DECIMALS)
    return round_to(lq + in_service + s * (1 - idle_mass), decimals)


def effective_lambda(
    lam: float,
    mu: float,
    server_size: int = 1,
    limit: int = 2,
    decimals: int = DEFAULT_DECIMALS,
) -> float:
    """Rate of admitted customers, ``lam * (1 - Pk)``."""
    pk = n_probability(lam, mu, server_size, limit, limit, INTERNAL_DECIMALS)
    return round_to(lam * (1 - pk), decimals)


def lost_rate(
    lam: float,
    mu: float,
    server_size: int = 1,
    limit: int = 2,
    decimals: int = DEFAULT_DECIMALS,
) -> float:
    """
    Rate of customers turned away because the system is full, ``lam * Pk``.

    The admitted rate ``l(1 - Pk)`` is :func:`effective_lambda`.
    """
    pk = n_probability(lam, mu, server_size, limit, limit, INTERNAL_DECIMALS)
    return round_to(lam * pk, decimals)


def queue_time_expected(
    lam: float,
    mu: float,
    server_size: int = 1,
    limit: int = 2,
    decimals: int = DEFAULT_DECIMALS,
) -> float:
    """Wq = Lq / (lam (1 - Pk))."""
    lq = queue_clients_expected(lam, mu, server_size, limit, INTERNAL_DECIMALS)
    admitted = effective_lambda(lam, mu, server_size, limit, INTERNAL_DECIMALS)
    require_nonzero(admitted, "lambda * (1 - Pk)")
    return round_to(lq / admitted, decimals)


def system_time_expected(
    lam: float,
    mu: float,
    server_size: int = 1,
    limit: int = 2,
    decimals: int = DEFAULT_DECIMALS,
) -> float:
    """Ws = Ls / (lam (1 - Pk))."""
    ls = system_clients_expected(lam, mu, server_size, limit, INTERNAL_DECIMALS)
    admitted = effective_lambda(lam, mu, server_size, limit, INTERNAL_DECIMALS)
    require_nonzero(admitted, "lambda * (1 - Pk)")
    return round_to(ls / admitted, decimals)
