# MathEngine.py
"""""
Core evaluation engine of the Formula Calculator.

Pipeline
--------
1) Tokenizer: converts a raw formula string into a flat list of tokens,
   inserting implicit multiplication and folding 'name^number' suffixes.
2) Converter: shunting-yard, turns the infix token list into postfix order.
3) Evaluator: runs the postfix list on a float stack with the variable values
   supplied by the caller.
4) Formatter: renders the float result as a display string.

Nothing in here keeps state between calls; the only module level data are the
read-only operator tables.
"""""

import logging
import math
import re
import string
from dataclasses import dataclass
from decimal import Decimal
from types import MappingProxyType

from . import ScientificEngine
from . import error as E

logger = logging.getLogger(__name__)

PROMPT_MESSAGE = "Enter a formula to see the result."
INVALID_MESSAGE = "Invalid formula"

# Supported operators, kept as plain strings for quick membership checks
Operations = "+-*/^(),"
Number_Chars = "0123456789."
Letters = string.ascii_letters

PRECEDENCE = MappingProxyType({
    "^": 4,
    "*": 3,
    "/": 3,
    "+": 2,
    "-": 2,
    "(": 1,
    ")": 1,
    ",": 1,
})

ASSOCIATIVITY = MappingProxyType({
    "^": "right",
    "*": "left",
    "/": "left",
    "+": "left",
    "-": "left",
})

# Leading numeric prefix, e.g. "12.5kg" -> 12.5, "-.5" -> -0.5
_NUMERIC_PREFIX = re.compile(r"[+-]?(?:Infinity|\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?)")


# -----------------------------
# Utilities / small helpers
# -----------------------------

def parse_numeric(text):
    """Parse the leading numeric part of text as float; NaN if there is none."""
    if isinstance(text, (int, float)) and not isinstance(text, bool):
        return float(text)
    match = _NUMERIC_PREFIX.match(str(text).lstrip())
    if match is None:
        return math.nan
    number = match.group(0)
    if number.lstrip("+-") == "Infinity":
        return -math.inf if number.startswith("-") else math.inf
    return float(number)


def isNumberChar(char):
    return char in Number_Chars


def isLetter(char):
    return char in Letters


def isAlnum(char):
    return char in Letters or char in string.digits


# -----------------------------
# Token types
# -----------------------------

@dataclass(frozen=True)
class Number:
    value: float


@dataclass(frozen=True)
class Variable:
    name: str


@dataclass(frozen=True)
class VariablePower:
    """Variable directly followed by '^<number>', e.g. 'x^2'."""
    name: str
    power: float


@dataclass(frozen=True)
class Function:
    name: str


@dataclass(frozen=True)
class FunctionPower:
    """Function directly followed by '^<number>': sin^2(x) == (sin(x))^2."""
    name: str
    power: float


@dataclass(frozen=True)
class Operator:
    symbol: str


FUNCTION_TOKENS = (Function, FunctionPower)
VARIABLE_TOKENS = (Variable, VariablePower)

_MULTIPLY = Operator("*")


# -----------------------------
# Tokenizer
# -----------------------------

def _scan(problem):
    """Yield tokens of problem one by one; raises LexError on an invalid character."""
    b = 0
    while b < len(problem):
        current_char = problem[b]

        # --- Whitespace (ignored) ---
        if current_char.isspace():
            b += 1

        # --- Numbers: maximal run of digits and '.' ---
        elif isNumberChar(current_char):
            start = b
            while b < len(problem) and isNumberChar(problem[b]):
                b += 1
            yield Number(parse_numeric(problem[start:b]))

            # 2x, 2(x+1)
            if b < len(problem) and (problem[b] == "(" or isLetter(problem[b])):
                yield _MULTIPLY

        # --- Identifiers: variables and functions ---
        elif isLetter(current_char):
            start = b
            while b < len(problem) and isLetter(problem[b]):
                b += 1
            name = problem[start:b]
            is_function = ScientificEngine.isFunction(name)

            # Exponent suffix: only a plain number directly after '^'
            power = None
            if b + 1 < len(problem) and problem[b] == "^" and isNumberChar(problem[b + 1]):
                exponent_start = b + 1
                b = exponent_start
                while b < len(problem) and isNumberChar(problem[b]):
                    b += 1
                power = parse_numeric(problem[exponent_start:b])

            if is_function:
                yield Function(name) if power is None else FunctionPower(name, power)
            else:
                yield Variable(name) if power is None else VariablePower(name, power)

            if b < len(problem):
                next_char = problem[b]
                if next_char == "(":
                    # A function binds directly to its parenthesis
                    if not is_function:
                        yield _MULTIPLY
                elif isAlnum(next_char):
                    yield _MULTIPLY

        # --- Operators, parentheses and argument separator ---
        elif current_char in Operations:
            yield Operator(current_char)
            b += 1

        else:
            raise E.LexError(f"Invalid character '{current_char}' in expression.", code="1000",
                             equation=problem, character=current_char, position=b)


def tokenize(problem):
    """Convert a raw formula string into a list of tokens.

    Notes:
    - Inserts implicit multiplication where needed ('2x' -> 2, '*', x).
    - 'x^2' and 'sin^2' become single VariablePower / FunctionPower tokens.
    """
    tokens = list(_scan(problem))
    logger.debug("Tokens: %s", tokens)
    return tokens


# -----------------------------
# Infix -> postfix (shunting-yard)
# -----------------------------

def _is_open_bracket(token):
    return isinstance(token, Operator) and token.symbol == "("


def _pops_before(top, symbol):
    """True if the stack top must go to the output before pushing operator symbol."""
    if isinstance(top, FUNCTION_TOKENS):
        return True
    if not isinstance(top, Operator) or top.symbol in "(),":
        return False
    if ASSOCIATIVITY.get(symbol) == "right":
        return PRECEDENCE[top.symbol] > PRECEDENCE[symbol]
    return PRECEDENCE[top.symbol] >= PRECEDENCE[symbol]


def to_postfix(tokens):
    """Reorder an infix token list into postfix order honouring precedence,
    associativity, brackets and function calls."""
    output = []
    operator_stack = []

    for token in tokens:
        if isinstance(token, (Number, Variable, VariablePower)):
            output.append(token)

        elif isinstance(token, FUNCTION_TOKENS):
            operator_stack.append(token)

        elif isinstance(token, Operator):
            symbol = token.symbol

            if symbol == ",":
                while operator_stack and not _is_open_bracket(operator_stack[-1]):
                    output.append(operator_stack.pop())
                if not operator_stack:
                    raise E.SyntaxError("',' outside of a function argument list.", code="2002")

            elif symbol == "(":
                operator_stack.append(token)

            elif symbol == ")":
                while operator_stack and not _is_open_bracket(operator_stack[-1]):
                    output.append(operator_stack.pop())
                if not operator_stack:
                    raise E.SyntaxError("Missing opening parenthesis '('", code="2000")
                operator_stack.pop()

                # Closing bracket of a call: emit the function itself
                if operator_stack and isinstance(operator_stack[-1], FUNCTION_TOKENS):
                    output.append(operator_stack.pop())

            elif symbol in PRECEDENCE:
                while operator_stack and _pops_before(operator_stack[-1], symbol):
                    output.append(operator_stack.pop())
                operator_stack.append(token)

            else:
                raise E.UnknownOperatorOrFunction(f"Unknown operator: {symbol}", code="3301")

        else:
            raise E.UnknownOperatorOrFunction(f"Unexpected token: {token!r}", code="3301")

    while operator_stack:
        top = operator_stack.pop()
        if isinstance(top, Operator) and top.symbol in "()":
            raise E.SyntaxError("Mismatched parentheses", code="2001")
        output.append(top)

    logger.debug("Postfix: %s", output)
    return output


# -----------------------------
# Postfix evaluator
# -----------------------------

def _lookup(name, bindings):
    if name not in bindings:
        raise E.UndefinedVariable(f"Variable '{name}' is not defined.", code="3100", name=name)
    return parse_numeric(bindings[name])


def apply_operator(symbol, a, b):
    """Apply a binary operator with float semantics (no exceptions for inf/NaN)."""
    if symbol == "+":
        return a + b
    elif symbol == "-":
        return a - b
    elif symbol == "*":
        return a * b
    elif symbol == "/":
        return ScientificEngine.divide(a, b)
    elif symbol == "^":
        return ScientificEngine.power(a, b)
    raise E.UnknownOperatorOrFunction(f"Unknown operator '{symbol}'.", code="3301")


def evaluate_postfix(postfix, bindings):
    """Run the postfix token list on a float stack and return the single result."""
    stack = []

    for token in postfix:
        if isinstance(token, Number):
            stack.append(token.value)

        elif isinstance(token, Variable):
            stack.append(_lookup(token.name, bindings))

        elif isinstance(token, VariablePower):
            stack.append(ScientificEngine.power(_lookup(token.name, bindings), token.power))

        elif isinstance(token, FUNCTION_TOKENS):
            if not ScientificEngine.isFunction(token.name):
                raise E.UnknownOperatorOrFunction(f"Unknown function '{token.name}'.", code="3300")
            arity = ScientificEngine.ARITY[token.name]
            if len(stack) < arity:
                raise E.ArityError(f"Not enough arguments for function '{token.name}'.", code="3200")

            # first popped value is the last argument
            args = [stack.pop() for _ in range(arity)]
            args.reverse()

            result = ScientificEngine.apply_function(token.name, args)
            if isinstance(token, FunctionPower):
                result = ScientificEngine.power(result, token.power)
            stack.append(result)

        elif isinstance(token, Operator):
            if len(stack) < 2:
                raise E.ArityError(f"Not enough operands for operator '{token.symbol}'.", code="3201")
            b = stack.pop()
            a = stack.pop()
            stack.append(apply_operator(token.symbol, a, b))

        else:
            raise E.UnknownOperatorOrFunction(f"Unexpected token: {token!r}", code="3301")

    if len(stack) != 1:
        raise E.SyntaxError("Invalid expression.", code="2003")

    return stack.pop()


# -----------------------------
# Result formatting
# -----------------------------

def format_number(value):
    """Render a float the way the result line shows it.

    Integral values have no fraction ('5', not '5.0'), other values use the
    shortest digits that round-trip. Magnitudes outside [1e-6, 1e21) use an
    exponent ('1e+21', '1.5e-7').
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    shortest = repr(float(value))
    if 1e-6 <= abs(value) < 1e21:
        return format(Decimal(shortest).normalize(), "f")

    mantissa, _, exponent = shortest.partition("e")
    exponent = int(exponent)
    sign = "+" if exponent >= 0 else "-"
    return f"{mantissa}e{sign}{abs(exponent)}"


# -----------------------------
# Public entry points
# -----------------------------

def calculate(problem, bindings=None):
    """Tokenize -> convert -> evaluate. Raises a MathError subclass on failure."""
    if bindings is None:
        bindings = {}
    try:
        tokens = tokenize(problem)
        postfix = to_postfix(tokens)
        result = evaluate_postfix(postfix, bindings)
        logger.debug("Result of %r: %r", problem, result)
        return result

    # Re-raise our domain errors after attaching the source equation
    except E.MathError as e:
        e.equation = problem
        raise e
    # Convert unexpected Python exceptions to our unified error type
    except (ArithmeticError, ValueError, TypeError) as e:
        raise E.MathError(message=str(e).strip(), code="9999", equation=problem) from e


def evaluate_expression(problem, bindings=None):
    """Main API: formula + variable values -> display string.

    Empty input gives the prompt text; every failure gives the same generic
    text, the specific error kind is only logged.
    """
    if not problem or not problem.strip():
        return PROMPT_MESSAGE

    try:
        result = calculate(problem, bindings)
    except E.MathError as e:
        logger.debug("Invalid formula %r: [%s] %s", problem, e.code, e.message)
        return INVALID_MESSAGE

    return format_number(result)


def free_variables(problem):
    """Names the formula needs values for, in first-occurrence order.

    Derived from the tokenizer itself, so the UI asks for exactly the names
    the evaluator will look up. Names found before an invalid character are
    still returned.
    """
    names = []
    if not problem:
        return names
    try:
        for token in _scan(problem):
            if isinstance(token, VARIABLE_TOKENS) and token.name not in names:
                names.append(token.name)
    except E.LexError as e:
        logger.debug("Variable scan stopped at position %s: %s", e.position, e.message)
    return names
