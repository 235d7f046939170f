# error.py
"""""
Error taxonomy for the formula engine.

Every stage of the pipeline raises a MathError subclass. The public
evaluate_expression() collapses all of them into one generic string, but the
classes (and codes) stay distinct so callers and tests can tell them apart.
"""""


class MathError(Exception):
    def __init__(self, message, code="9999", equation=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.equation = equation


class LexError(MathError):
    """Invalid character while tokenizing."""
    def __init__(self, message, code="1000", equation=None, character=None, position=None):
        super().__init__(message, code=code, equation=equation)
        self.character = character
        self.position = position


class SyntaxError(MathError):
    pass


class UndefinedVariable(MathError):
    def __init__(self, message, code="3100", equation=None, name=None):
        super().__init__(message, code=code, equation=equation)
        self.name = name


class ArityError(MathError):
    pass


class UnknownOperatorOrFunction(MathError):
    pass


Error_Dictionary = {

    "1": "Tokenizer Error",
    "2": "Syntax Error",
    "3": "Evaluation Error",
    "4": "UI Error",
    "5": "Configuration Error",
    "9": "Unexpected Error"

}

# Error codes are structured in:
# 1. Digit: Main Error (see Error_Dictionary)
# 2. Digit: Specification
# 3. and 4. Digit: Error Number


ERROR_MESSAGES = {
    "1000": "Invalid character: ",  # + character

    "2000": "Missing '('. ",
    "2001": "Missing ')'. ",
    "2002": "',' outside of a function argument list.",
    "2003": "Invalid expression.",

    "3100": "Variable is not defined: ",  # + name
    "3200": "Not enough arguments for function: ",  # + function
    "3201": "Not enough operands for operator: ",  # + operator
    "3300": "Unknown function: ",  # + function
    "3301": "Unknown operator: ",  # + operator

    "4000": "Result could not be copied to the clipboard.",
    "5000": "Not all Settings could be saved: ",  # + error raising setting

    "9999": "Unexpected Error: "  # + error
}
