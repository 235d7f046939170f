from .MathEngine import (
    PROMPT_MESSAGE,
    INVALID_MESSAGE,
    tokenize,
    to_postfix,
    evaluate_postfix,
    calculate,
    evaluate_expression,
    free_variables,
    format_number,
)
from .error import (
    MathError,
    LexError,
    SyntaxError,
    UndefinedVariable,
    ArityError,
    UnknownOperatorOrFunction,
)
