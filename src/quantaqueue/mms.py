"""
Closed-form metrics for the M/M/s queue (s parallel servers, infinite capacity).

Notation: ``a = lam/mu`` is the offered load and ``rho = a/s`` the
utilization per server.
"""

from __future__ import annotations

import math

from .basic import rho, summation
from .kernel import DEFAULT_DECIMALS, INTERNAL_DECIMALS, power_over_factorial, round_to
from .validation import require_iteration, require_mu, require_nonzero, require_server_size


def _check(mu: float, server_size: int) -> int:
    require_mu(mu)
    require_server_size(server_size)
    return int(server_size)


def qty_server_busy(
    lam: float,
    mu: float,
    server_size: int = 1,
    iteration: int = 1,
    decimals: int = DEFAULT_DECIMALS,
) -> float:
    """State weight ``a^n/n!`` while n <= s and ``a^n/(s! s^(n-s))`` beyond."""
    s = _check(mu, server_size)
    require_iteration(iteration, 1)
    n = int(iteration)
    a = lam / mu
    if n <= s:
        return round_to(power_over_factorial(a, n, n), decimals)
    return round_to(power_over_factorial(a, s, s) * (a / s) ** (n - s), decimals)


def initial_probability(lam: float, mu: float, server_size: int = 1, decimals: int = DEFAULT_DECIMALS) -> float:
    """P0 = 1 / (sum_{n<s} a^n/n! + a^s/s! * 1/(1 - rho))."""
    s = _check(mu, server_size)
    a = lam / mu
    head = summation(0, s - 1, lambda n: power_over_factorial(a, n, n), INTERNAL_DECIMALS)
    r = rho(lam, mu, s, INTERNAL_DECIMALS)
    require_nonzero(1 - r, "1 - rho")
    denominator = head + power_over_factorial(a, s, s) * (1 / (1 - r))
    require_nonzero(denominator, "P0 denominator")
    return round_to(1 / denominator, decimals)


def n_probability(
    lam: float,
    mu: float,
    server_size: int = 1,
    iteration: int = 0,
    decimals: int = DEFAULT_DECIMALS,
) -> float:
    """
    Pn for the M/M/s queue.

    For n <= s the numerator keeps the exponent ``s`` (``a^s/n! * P0``) and
    for n > s it is ``a/(s! s^(n-s)) * P0``; golden tests pin both branches.
    """
    s = _check(mu, server_size)
    require_iteration(iteration, 0)
    n = int(iteration)
    a = lam / mu
    p0 = initial_probability(lam, mu, s, INTERNAL_DECIMALS)
    if n <= s:
        return round_to(power_over_factorial(a, s, n) * p0, decimals)
    return round_to(a * power_over_factorial(1 / s, n - s, s) * p0, decimals)


def queue_clients_expected(lam: float, mu: float, server_size: int = 1, decimals: int = DEFAULT_DECIMALS) -> float:
    """Lq = P0 a^s / (s! (1 - rho)^2) * rho."""
    s = _check(mu, server_size)
    r = rho(lam, mu, s, INTERNAL_DECIMALS)
    p0 = initial_probability(lam, mu, s, INTERNAL_DECIMALS)
    a = lam / mu
    return round_to(p0 * power_over_factorial(a, s, s) / (1 - r) ** 2 * r, decimals)


def system_clients_expected(lam: float, mu: float, server_size: int = 1, decimals: int = DEFAULT_DECIMALS) -> float:
    """Ls = Lq + lam/mu."""
    lq = queue_clients_expected(lam, mu, server_size, INTERNAL_DECIMALS)
    return round_to(lq + lam / mu, decimals)


def queue_time_expected(lam: float, mu: float, server_size: int = 1, decimals: int = DEFAULT_DECIMALS) -> float:
    """Wq = Lq/lam."""
    lq = queue_clients_expected(lam, mu, server_size, INTERNAL_DECIMALS)
    require_nonzero(lam, "lambda")
    return round_to(lq / lam, decimals)


def system_time_expected(lam: float, mu: float, server_size: int = 1, decimals: int = DEFAULT_DECIMALS) -> float:
    """Ws = Wq + 1/mu."""
    wq = queue_time_expected(lam, mu, server_size, INTERNAL_DECIMALS)
    return round_to(wq + 1 / mu, decimals)


def system_time_probability(
    lam: float,
    mu: float,
    server_size: int = 1,
    time: float = 0,
    decimals: int = DEFAULT_DECIMALS,
) -> float:
    """Probability that a customer spends more than ``time`` in the system."""
    s = _check(mu, server_size)
    a = lam / mu
    r = rho(lam, mu, s, INTERNAL_DECIMALS)
    p0 = initial_probability(lam, mu, s, INTERNAL_DECIMALS)
    spare = s - 1 - a
    require_nonzero(spare, "serverSize - 1 - lambda/mu")
    erlang = p0 * power_over_factorial(a, s, s) / (1 - r)
    correction = (1 - math.exp(-mu * time * spare)) / spare
    return round_to(math.exp(-mu * time) * (1 + erlang * correction), decimals)


def probability_zero_queue_time(lam: float, mu: float, server_size: int = 1, decimals: int = DEFAULT_DECIMALS) -> float:
    """Probability an arrival finds an idle server: P0 + sum_{n=1}^{s-1} Pn."""
    s = _check(mu, server_size)
    p0 = initial_probability(lam, mu, s, INTERNAL_DECIMALS)
    busy = summation(1, s - 1, lambda n: n_probability(lam, mu, s, n, INTERNAL_DECIMALS), INTERNAL_DECIMALS)
    return round_to(p0 + busy, decimals)


def probability_queue_time(
    lam: float,
    mu: float,
    server_size: int = 1,
    time: float = 0,
    decimals: int = DEFAULT_DECIMALS,
) -> float:
    """Probability of waiting in queue longer than ``time``."""
    s = _check(mu, server_size)
    p_zero = probability_zero_queue_time(lam, mu, s, INTERNAL_DECIMALS)
    r = rho(lam, mu, s, INTERNAL_DECIMALS)
    return round_to((1 - p_zero) * math.exp(-s * mu * (1 - r) * time), decimals)
