"""Unit tests for expression evaluation and rounding."""

import math

import pytest

from quantaqueue.basic import summation
from quantaqueue.errors import DomainError, EvaluationError
from quantaqueue.kernel import compile_expression, evaluate, format_number, power_over_factorial, round_to


def test_evaluate_supports_power_and_factorial():
    assert math.isclose(evaluate("3!/2^2"), 1.5)
    assert math.isclose(evaluate("e^0"), 1.0)


def test_evaluate_substitutes_bindings():
    assert math.isclose(evaluate("(n+1)/2", n=5), 3.0)
    assert math.isclose(evaluate("n!", n=4), 24.0)


def test_evaluate_undefined_symbol():
    with pytest.raises(EvaluationError, match="Undefined symbol x"):
        evaluate("x+1")


def test_evaluate_malformed_expression():
    with pytest.raises(EvaluationError):
        evaluate("2+*3")


def test_compile_expression_evaluates_per_step():
    square = compile_expression("n^2")
    assert square(3) == 9.0
    assert compile_expression("n!")(4) == 24.0


def test_compile_expression_rejects_foreign_symbols():
    with pytest.raises(EvaluationError, match="Undefined symbol k"):
        compile_expression("n*k")


def test_round_to_is_half_up():
    assert round_to(0.12345, 4) == 0.1235
    assert round_to(2.5, 0) == 3.0
    assert round_to(2 / 3, 4) == 0.6667


def test_round_to_validates_decimals():
    for decimals in (-5, 16, 2.5):
        with pytest.raises(EvaluationError, match="integer from 0 to 15"):
            round_to(1.0, decimals)


def test_round_to_passes_infinity_through():
    assert math.isinf(round_to(float("inf"), 4))


def test_format_number_drops_trailing_zeros():
    assert format_number(25.0) == "25"
    assert format_number(0.12345, 4) == "0.1235"


def test_evaluate_allows_whitelisted_functions():
    assert math.isclose(evaluate("sqrt(16)"), 4.0)
    assert math.isclose(compile_expression("exp(n) - 1")(0), 0.0)


@pytest.mark.parametrize(
    "expression",
    [
        "().__class__.__base__.__subclasses__()",
        "eval(chr(49))",
        "lambda: 1",
        "[1][0]",
        "'1'",
        "1 if 1 else 2",
        "n.real",
    ],
)
def test_evaluate_rejects_python_syntax(expression):
    with pytest.raises(EvaluationError):
        evaluate(expression, n=1)
    with pytest.raises(EvaluationError):
        compile_expression(expression)


def test_attribute_chains_never_execute(tmp_path):
    target = tmp_path / "created"
    payload = (
        "().__class__.__base__.__subclasses__()[0].__init__.__globals__['system']"
        f"('touch {target}')"
    )
    with pytest.raises(EvaluationError):
        evaluate(payload)
    with pytest.raises(EvaluationError):
        summation(1, 1, payload + "+n")
    assert not target.exists()


def test_power_over_factorial_small_terms_are_exact():
    assert power_over_factorial(2, 3, 3) == 8 / 6
    assert power_over_factorial(0, 0, 3) == 1 / 6
    assert power_over_factorial(0, 2, 2) == 0.0


def test_power_over_factorial_past_float_factorial():
    expected = math.exp(200 * math.log(2) - math.lgamma(201))
    assert math.isclose(power_over_factorial(2, 200, 200), expected, rel_tol=1e-12)
    assert power_over_factorial(1.5, 400, 400) >= 0.0


def test_power_over_factorial_overflow_is_a_domain_error():
    with pytest.raises(DomainError):
        power_over_factorial(1000, 200, 10)
