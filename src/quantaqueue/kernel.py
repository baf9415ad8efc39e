"""
Numeric kernel: expression evaluation and boundary rounding.

String expressions use the usual calculator syntax (``+ - * / ^``, ``n!``,
the constant ``e``) and are parsed with SymPy. Formula modules do their
arithmetic directly on floats and only use :func:`round_to` at their public
boundary; dependent quantities are requested at ``INTERNAL_DECIMALS``.
"""

from __future__ import annotations

import math
import numbers
import re
import sys
from decimal import ROUND_HALF_UP, Decimal, localcontext
from tokenize import TokenError
from typing import Callable, Dict, FrozenSet

import sympy as sp
from sympy.parsing.sympy_parser import (
    convert_xor,
    implicit_multiplication,
    parse_expr,
    standard_transformations,
)

from .errors import DomainError, EvaluationError

DEFAULT_DECIMALS = 4
INTERNAL_DECIMALS = 15
MAX_DECIMALS = 15

_TRANSFORMATIONS = standard_transformations + (convert_xor, implicit_multiplication)
_CONSTANTS: Dict[str, sp.Basic] = {"e": sp.E, "pi": sp.pi}
_FUNCTIONS: FrozenSet[str] = frozenset({"sqrt", "exp", "log", "sin", "cos", "tan", "abs"})

# parse_expr hands its input to eval(), so only these tokens may reach it.
_TOKEN = re.compile(
    r"\s*(?:(?P<number>(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
    r"|(?P<name>[A-Za-z][A-Za-z0-9]*)"
    r"|(?P<op>\*\*|[-+*/^!(),]))"
)

# Largest n for which n! still converts to a float.
_FLOAT_FACTORIAL_MAX = 170
_LOG_FLOAT_MAX = math.log(sys.float_info.max)


def _check_tokens(expression: str, names: FrozenSet[str]) -> None:
    if not isinstance(expression, str):
        raise EvaluationError(f"Expression must be a string, got {type(expression).__name__}.")
    pos = 0
    end = len(expression.rstrip())
    while pos < end:
        match = _TOKEN.match(expression, pos)
        if match is None:
            raise EvaluationError(f"Unexpected character {expression[pos:].lstrip()[:1]!r} in '{expression}'.")
        name = match.group("name")
        if name is not None and name not in names and name not in _CONSTANTS and name not in _FUNCTIONS:
            raise EvaluationError(f"Undefined symbol {name}")
        pos = match.end()


def _parse(expression: str, bindings: Dict[str, sp.Basic]) -> sp.Expr:
    _check_tokens(expression, frozenset(bindings))
    local_dict = dict(_CONSTANTS)
    local_dict.update(bindings)
    try:
        expr = parse_expr(expression, local_dict=local_dict, transformations=_TRANSFORMATIONS)
    except (SyntaxError, TokenError, TypeError, ValueError, AttributeError) as exc:
        raise EvaluationError(f"Cannot parse expression '{expression}': {exc}") from exc
    if not isinstance(expr, sp.Expr):
        raise EvaluationError(f"Expression '{expression}' is not numeric.")
    return expr


def _check_symbols(expr: sp.Expr, allowed: frozenset = frozenset()) -> None:
    undefined = sorted(str(sym) for sym in expr.free_symbols - allowed)
    if undefined:
        raise EvaluationError(f"Undefined symbol {undefined[0]}")


def evaluate(expression: str, **bindings: float) -> float:
    """
    Evaluate ``expression`` with the given variable bindings.

    >>> evaluate("3!/2^2")
    1.5
    >>> evaluate("(n+1)/2", n=5)
    3.0

    Raises:
        EvaluationError: malformed syntax, an unbound symbol, or a result
                         that is not a real number.
    """
    expr = _parse(expression, {name: sp.sympify(value) for name, value in bindings.items()})
    _check_symbols(expr)
    value = expr.evalf()
    if value in (sp.oo, -sp.oo):
        return float(value)
    if value is sp.nan or value is sp.zoo or not value.is_real:
        raise EvaluationError(f"Expression '{expression}' does not evaluate to a real number.")
    return float(value)


def compile_expression(expression: str, variable: str = "n") -> Callable[[float], float]:
    """Parse ``expression`` once and return a float function of ``variable``."""
    symbol = sp.Symbol(variable)
    expr = _parse(expression, {variable: symbol})
    _check_symbols(expr, frozenset({symbol}))
    fn = sp.lambdify(symbol, expr, modules="math")

    def evaluate_at(value: float) -> float:
        try:
            return float(fn(value))
        except (ArithmeticError, ValueError, TypeError) as exc:
            raise EvaluationError(
                f"Cannot evaluate '{expression}' at {variable}={value}: {exc}"
            ) from exc

    return evaluate_at


def power_over_factorial(base: float, exponent: int, n: int) -> float:
    """
    Return ``base**exponent / n!``.

    Past ``n = 170`` (or when ``base**exponent`` alone overflows) the quotient
    is taken in log space, so large server counts give the tiny or moderate
    terms they should instead of an ``OverflowError``.

    Raises:
        DomainError: the quotient itself does not fit in a float.
    """
    if base == 0 and exponent > 0:
        return 0.0
    log_power = exponent * math.log(abs(base)) if base else 0.0
    if n <= _FLOAT_FACTORIAL_MAX and log_power < _LOG_FLOAT_MAX:
        return base ** exponent / math.factorial(n)
    log_value = log_power - math.lgamma(n + 1)
    if log_value >= _LOG_FLOAT_MAX:
        raise DomainError(f"The term {base}^{exponent}/{n}! is too large to represent.")
    sign = -1.0 if base < 0 and exponent % 2 else 1.0
    return sign * math.exp(log_value)


def round_decimal(value: float, decimals: int = DEFAULT_DECIMALS) -> Decimal:
    """Round half away from zero on the shortest decimal representation of ``value``."""
    if (
        isinstance(decimals, bool)
        or not isinstance(decimals, numbers.Integral)
        or not 0 <= decimals <= MAX_DECIMALS
    ):
        raise EvaluationError(
            "Number of decimals in function round must be an integer from 0 to 15 inclusive"
        )
    exact = Decimal(repr(float(value)))
    with localcontext() as ctx:
        ctx.prec = max(28, exact.adjusted() + int(decimals) + 2)
        return exact.quantize(Decimal(1).scaleb(-int(decimals)), rounding=ROUND_HALF_UP)


def round_to(value: float, decimals: int = DEFAULT_DECIMALS) -> float:
    if not math.isfinite(value):
        round_decimal(0.0, decimals)
        return float(value)
    return float(round_decimal(value, decimals))


def format_number(value: float, decimals: int = DEFAULT_DECIMALS) -> str:
    """Render a rounded value without trailing zeros (``25.0`` -> ``"25"``)."""
    if not math.isfinite(value):
        round_decimal(0.0, decimals)
        return str(value)
    rounded = round_decimal(value, decimals).normalize()
    return format(rounded, "f")
