import math
from types import MappingProxyType

import pytest

from formula_calculator import error as E
from formula_calculator.MathEngine import (
    Function,
    FunctionPower,
    Number,
    Operator,
    Variable,
    VariablePower,
    calculate,
    evaluate_postfix,
    parse_numeric,
)


def test_operand_order():
    assert evaluate_postfix([Number(2.0), Number(3.0), Operator("-")], {}) == -1
    assert evaluate_postfix([Number(3.0), Number(2.0), Operator("/")], {}) == 1.5


def test_function_arguments_keep_their_order():
    assert evaluate_postfix([Number(8.0), Number(2.0), Function("log")], {}) == pytest.approx(3.0)
    assert evaluate_postfix([Number(2.0), Number(8.0), Function("log")], {}) == pytest.approx(1 / 3)


def test_variables_are_looked_up_in_bindings():
    assert evaluate_postfix([Variable("x"), VariablePower("y", 2.0), Operator("+")], {"x": "1", "y": "3"}) == 10


def test_function_power_raises_the_function_result():
    assert evaluate_postfix([Number(9.0), FunctionPower("sqrt", 2.0)], {}) == pytest.approx(9.0)
    x = 2.0
    assert calculate("sin^2(x)", {"x": "2"}) == pytest.approx(math.sin(x) ** 2)
    assert calculate("sin^2(x)", {"x": "2"}) != pytest.approx(calculate("sin(x^2)", {"x": "2"}))


def test_pythagorean_identity():
    assert calculate("cos^2(x)+sin^2(x)", {"x": "1.234"}) == pytest.approx(1.0)


def test_power_operator():
    assert calculate("2^3^2") == 512
    assert calculate("2^(1+2)") == 8


def test_division_by_zero_follows_float_semantics():
    assert calculate("1/0") == math.inf
    assert math.isnan(calculate("0/0"))


def test_domain_errors_give_nan():
    assert math.isnan(calculate("sqrt(0-4)"))
    assert math.isnan(calculate("log(0-8,2)"))


def test_overflow_gives_infinity():
    assert calculate("10^400") == math.inf


def test_binding_values_use_numeric_prefix():
    assert calculate("x", {"x": "5abc"}) == 5
    assert calculate("x", {"x": " 2.5"}) == 2.5
    assert calculate("x^2", {"x": "-3"}) == 9
    assert math.isnan(calculate("x", {"x": "abc"}))
    assert math.isnan(calculate("x", {"x": ""}))


def test_parse_numeric():
    assert parse_numeric("12.5kg") == 12.5
    assert parse_numeric("1e3") == 1000
    assert parse_numeric("-Infinity") == -math.inf
    assert parse_numeric(4) == 4.0
    assert math.isnan(parse_numeric("e5"))


def test_bindings_are_only_read():
    bindings = MappingProxyType({"x": "4"})
    assert calculate("x^2+x", bindings) == 20


def test_undefined_variable():
    with pytest.raises(E.UndefinedVariable) as excinfo:
        calculate("x+1", {})
    assert excinfo.value.name == "x"
    assert excinfo.value.equation == "x+1"


def test_undefined_variable_power():
    with pytest.raises(E.UndefinedVariable):
        calculate("y^2", {"x": "1"})


@pytest.mark.parametrize("formula", ["log(8)", "2+", "sin()", "-1", "nthroot(27)"])
def test_missing_operands_or_arguments(formula):
    with pytest.raises(E.ArityError):
        calculate(formula)


@pytest.mark.parametrize("formula", ["2 3", "()", "(2+3", "sin(1,2)"])
def test_invalid_expression(formula):
    with pytest.raises(E.SyntaxError):
        calculate(formula)


def test_lex_error_carries_the_equation():
    with pytest.raises(E.LexError) as excinfo:
        calculate("2 # 3")
    assert excinfo.value.equation == "2 # 3"


def test_unknown_function_or_operator_is_handled():
    with pytest.raises(E.UnknownOperatorOrFunction):
        evaluate_postfix([Number(1.0), Function("exp")], {})
    with pytest.raises(E.UnknownOperatorOrFunction):
        evaluate_postfix([Number(1.0), Number(2.0), Operator("%")], {})


def test_every_error_kind_is_a_math_error():
    for error_class in (E.LexError, E.SyntaxError, E.UndefinedVariable, E.ArityError,
                        E.UnknownOperatorOrFunction):
        assert issubclass(error_class, E.MathError)
