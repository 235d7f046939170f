import pytest

from formula_calculator import error as E
from formula_calculator.MathEngine import (
    Function,
    FunctionPower,
    Number,
    Operator,
    Variable,
    to_postfix,
    tokenize,
)


def postfix(formula):
    return to_postfix(tokenize(formula))


def test_precedence():
    assert postfix("1+2*3") == [Number(1.0), Number(2.0), Number(3.0), Operator("*"), Operator("+")]


def test_left_associativity():
    assert postfix("8-3-2") == [Number(8.0), Number(3.0), Operator("-"), Number(2.0), Operator("-")]


def test_power_is_right_associative():
    assert postfix("2^3^2") == [Number(2.0), Number(3.0), Number(2.0), Operator("^"), Operator("^")]


def test_parentheses_are_removed():
    assert postfix("(1+2)*3") == [Number(1.0), Number(2.0), Operator("+"), Number(3.0), Operator("*")]


def test_function_emitted_after_its_arguments():
    assert postfix("sin(x)+1") == [Variable("x"), Function("sin"), Number(1.0), Operator("+")]
    assert postfix("log(8,2)") == [Number(8.0), Number(2.0), Function("log")]
    assert postfix("nthroot(1+26,3)") == [
        Number(1.0), Number(26.0), Operator("+"), Number(3.0), Function("nthroot"),
    ]


def test_function_power_closes_like_a_function():
    assert postfix("sin^2(x)") == [Variable("x"), FunctionPower("sin", 2.0)]


def test_missing_closing_parenthesis():
    with pytest.raises(E.SyntaxError):
        postfix("(2+3")


def test_missing_opening_parenthesis():
    with pytest.raises(E.SyntaxError):
        postfix("2+3)")


@pytest.mark.parametrize("formula", ["1,2", "1+2,3"])
def test_separator_outside_argument_list(formula):
    with pytest.raises(E.SyntaxError):
        postfix(formula)


def test_unknown_operator_symbol():
    with pytest.raises(E.UnknownOperatorOrFunction):
        to_postfix([Number(1.0), Operator("%"), Number(2.0)])
