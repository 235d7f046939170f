# ScientificEngine.py
"""""
Fixed function table of the formula engine.

Trigonometry works in radians. Domain problems (sqrt(-1), log(0, 2), ...)
never raise: they produce NaN or +/-inf the same way IEEE float arithmetic
would, so a half-typed formula can't crash the UI.
"""""
import math
from types import MappingProxyType

from . import error as E


FUNCTIONS = ("sin", "cos", "tan", "sqrt", "nthroot", "log")

ARITY = MappingProxyType({
    "sin": 1,
    "cos": 1,
    "tan": 1,
    "sqrt": 1,
    "nthroot": 2,
    "log": 2,
})


def isFunction(name):
    """Return True if name is one of the recognised function identifiers."""
    return name in ARITY


def _ln(value):
    # math.log raises on the edges of its domain; mirror IEEE results instead
    if math.isnan(value) or value < 0:
        return math.nan
    if value == 0:
        return -math.inf
    return math.log(value)


def power(base, exponent):
    """pow() with float semantics: overflow gives inf, invalid domain gives NaN."""
    try:
        result = math.pow(base, exponent)
    except OverflowError:
        if base < 0 and exponent % 2 == 1:
            return -math.inf
        return math.inf
    except ValueError:
        # 0 ** negative
        if base == 0:
            if exponent % 2 == 1 and math.copysign(1.0, base) < 0:
                return -math.inf
            return math.inf
        return math.nan
    return result


def divide(a, b):
    """a / b where a zero divisor yields +/-inf or NaN instead of raising."""
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        sign = math.copysign(1.0, a) * math.copysign(1.0, b)
        return math.copysign(math.inf, sign)
    return a / b


def isSCT(name, value):  # Sin / Cos / Tan
    if math.isinf(value):
        return math.nan
    if name == "sin":
        return math.sin(value)
    elif name == "cos":
        return math.cos(value)
    elif name == "tan":
        return math.tan(value)
    raise E.UnknownOperatorOrFunction(f"Unknown function '{name}'.", code="3300")


def isRoot(value):
    if math.isnan(value) or value < 0:
        return math.nan
    return math.sqrt(value)


def isNthRoot(value, degree):
    return power(value, divide(1.0, degree))


def isLog(value, base):
    """Change of base: log(value, base) = ln(value) / ln(base)."""
    return divide(_ln(value), _ln(base))


def apply_function(name, args):
    """Apply a recognised function to its already collected argument list."""
    if name in ("sin", "cos", "tan"):
        return isSCT(name, args[0])
    elif name == "sqrt":
        return isRoot(args[0])
    elif name == "nthroot":
        return isNthRoot(args[0], args[1])
    elif name == "log":
        return isLog(args[0], args[1])
    raise E.UnknownOperatorOrFunction(f"Unknown function '{name}'.", code="3300")
