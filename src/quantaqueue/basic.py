"""Leaf utilities: inverse, percentages, time conversion, series and rho."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Union

from .errors import DomainError, RangeError
from .kernel import DEFAULT_DECIMALS, compile_expression, format_number, round_to
from .units import TimeUnit
from .validation import require_mu, require_server_size

logger = logging.getLogger(__name__)

Term = Union[str, Callable[[int], float]]


class PercentMode(str, Enum):
    MULTIPLY = "MULTIPLY"
    DIVISION = "DIVISION"


def inverse(val: float, decimals: int = DEFAULT_DECIMALS) -> float:
    """Return ``1/val``."""
    if val == 0:
        raise DomainError("The parameter 'val' cannot be equal to zero (0).")
    return round_to(1 / val, decimals)


def _percent_mode(mode: Union[bool, str, PercentMode]) -> PercentMode:
    if isinstance(mode, bool):
        return PercentMode.MULTIPLY if mode else PercentMode.DIVISION
    try:
        return PercentMode(mode)
    except ValueError as exc:
        raise DomainError(f"Unknown percent mode {mode!r}; use MULTIPLY or DIVISION.") from exc


def percent(
    value: float,
    total: float = 100,
    mode: Union[bool, str, PercentMode] = PercentMode.MULTIPLY,
    decimals: int = DEFAULT_DECIMALS,
) -> str:
    """
    Format ``value`` as a percentage string.

    MULTIPLY returns ``value*total`` (``percent(0.25) == "25%"``); DIVISION
    returns ``value/total*100`` (``percent(50, 200, "DIVISION") == "25%"``).
    """
    if total == 0:
        raise DomainError("The parameter 'total' cannot be equal to zero (0).")
    if _percent_mode(mode) is PercentMode.MULTIPLY:
        result = value * total
    else:
        result = (value / total) * 100
    return f"{format_number(result, decimals)}%"


def _seconds(unit: Union[float, TimeUnit]) -> float:
    return unit.value if isinstance(unit, TimeUnit) else unit


def convert(
    source_value: float,
    source_unit: Union[float, TimeUnit],
    target_unit: Union[float, TimeUnit],
    decimals: int = DEFAULT_DECIMALS,
) -> float:
    """
    Return ``(1/(source_value*source_unit))*target_unit``.

    Units are lengths in seconds (or :class:`TimeUnit` entries). A rate of one
    event every 30 minutes is two events per hour: ``convert(30, 60, 3600) == 2``.
    """
    source_seconds = _seconds(source_unit)
    target_seconds = _seconds(target_unit)
    if target_seconds <= 0:
        raise DomainError(
            'The "targetUnit" variable cannot be minor or equal to zero (0) (targetUnit <= 0).'
        )
    if source_seconds == 0:
        raise DomainError('The "sourceUnit" variable cannot be equal to zero (0).')
    if source_value == 0:
        raise DomainError('The "sourceValue" variable cannot be equal to zero (0).')
    return round_to((1 / (source_value * source_seconds)) * target_seconds, decimals)


def summation(
    lower_limit: int,
    upper_limit: int,
    expression: Term = "n",
    decimals: int = DEFAULT_DECIMALS,
) -> float:
    """
    Sum ``expression`` for ``n`` from ``lower_limit`` to ``upper_limit`` inclusive.

    ``expression`` is either a string in ``n`` (``"(n+1)/2"``) or a callable
    taking the integer step. An empty range (``upper_limit < lower_limit``)
    sums to zero. Cost is linear in the width of the range.
    """
    if lower_limit != int(lower_limit) or upper_limit != int(upper_limit):
        raise RangeError("The summation limits must be integers.")
    term = expression if callable(expression) else compile_expression(expression, "n")
    total = 0.0
    for n in range(int(lower_limit), int(upper_limit) + 1):
        total += term(n)
    return round_to(total, decimals)


def rho(lam: float, mu: float = 1, server_size: int = 1, decimals: int = DEFAULT_DECIMALS) -> float:
    """Return the utilization factor ``lam/(mu*server_size)``."""
    require_mu(mu)
    require_server_size(server_size)
    value = lam / (mu * server_size)
    if value < 1:
        logger.info("The system stabilizes, i.e., converges to a number.")
    else:
        logger.debug("The system does not stabilize (rho=%s).", value)
    return round_to(value, decimals)
