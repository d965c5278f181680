# calc_mcp_server/engine/errors.py
from __future__ import annotations
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    # validation
    TOO_LONG = "too_long"
    FORBIDDEN_CHARACTER = "forbidden_character"
    # lexing
    UNEXPECTED_CHARACTER = "unexpected_character"
    MALFORMED_NUMBER = "malformed_number"
    # parsing
    EMPTY_EXPRESSION = "empty_expression"
    UNEXPECTED_TOKEN = "unexpected_token"
    UNMATCHED_PARENTHESIS = "unmatched_parenthesis"
    UNKNOWN_FUNCTION = "unknown_function"
    TRAILING_TOKENS = "trailing_tokens"
    # evaluation
    DIVISION_BY_ZERO = "division_by_zero"
    INVALID_RESULT = "invalid_result"
    NEGATIVE_SQRT = "negative_sqrt"
    NON_POSITIVE_LOG = "non_positive_log"


class CalculatorError(Exception):
    """
    Base of every failure the engine reports.
      - kind:     flat ErrorKind, independent of the stage that raised it
      - stage:    'validation' | 'lexing' | 'parsing' | 'evaluation'
      - position: 0-based character offset in the expression, when known
    """

    kind: ErrorKind
    stage: str = ""

    def __init__(self, message: str, position: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.position = position


# ---- Stage bases ----
class ValidationError(CalculatorError):
    stage = "validation"


class LexError(CalculatorError):
    stage = "lexing"


class ParseError(CalculatorError):
    stage = "parsing"


class EvalError(CalculatorError):
    stage = "evaluation"


# ---- Validator ----
class TooLong(ValidationError):
    kind = ErrorKind.TOO_LONG

    def __init__(self, length: int, limit: int):
        super().__init__(f"expression too long ({length} characters, maximum {limit})")
        self.length = length
        self.limit = limit


class ForbiddenCharacter(ValidationError):
    kind = ErrorKind.FORBIDDEN_CHARACTER

    def __init__(self, char: str, position: int):
        super().__init__(f"forbidden character {char!r} at position {position}", position)
        self.char = char


# ---- Tokenizer ----
class UnexpectedCharacter(LexError):
    kind = ErrorKind.UNEXPECTED_CHARACTER

    def __init__(self, char: str, position: int):
        super().__init__(f"unexpected character {char!r} at position {position}", position)
        self.char = char


class MalformedNumber(LexError):
    kind = ErrorKind.MALFORMED_NUMBER

    def __init__(self, text: str, position: int):
        super().__init__(f"malformed number {text!r} at position {position}", position)
        self.text = text


# ---- Parser ----
class EmptyExpression(ParseError):
    kind = ErrorKind.EMPTY_EXPRESSION

    def __init__(self):
        super().__init__("empty expression")


class UnexpectedToken(ParseError):
    kind = ErrorKind.UNEXPECTED_TOKEN

    def __init__(self, token, position: int):
        # token is None when the input ended where an operand was required
        if token is None:
            message = f"unexpected end of expression at position {position}"
        else:
            message = f"unexpected token {token.text!r} at position {position}"
        super().__init__(message, position)
        self.token = token


class UnmatchedParenthesis(ParseError):
    kind = ErrorKind.UNMATCHED_PARENTHESIS

    def __init__(self, paren: str, position: int):
        if paren == "(":
            message = f"missing ')' for '(' at position {position}"
        else:
            message = f"unmatched ')' at position {position}"
        super().__init__(message, position)
        self.paren = paren


class UnknownFunction(ParseError):
    kind = ErrorKind.UNKNOWN_FUNCTION

    def __init__(self, name: str, position: int):
        super().__init__(f"unknown function {name!r} at position {position}", position)
        self.name = name


class TrailingTokens(ParseError):
    kind = ErrorKind.TRAILING_TOKENS

    def __init__(self, token, position: int):
        super().__init__(f"unexpected trailing input {token.text!r} at position {position}", position)
        self.token = token


# ---- Evaluator ----
class DivisionByZero(EvalError):
    kind = ErrorKind.DIVISION_BY_ZERO

    def __init__(self):
        super().__init__("division by zero")


class InvalidResult(EvalError):
    kind = ErrorKind.INVALID_RESULT

    def __init__(self, message: str = "result is not a finite number (NaN or infinity)"):
        super().__init__(message)


class NegativeSqrt(InvalidResult):
    kind = ErrorKind.NEGATIVE_SQRT

    def __init__(self, value: float):
        super().__init__(f"invalid result: square root of negative number {value!r}")
        self.value = value


class NonPositiveLog(InvalidResult):
    kind = ErrorKind.NON_POSITIVE_LOG

    def __init__(self, value: float):
        super().__init__(f"invalid result: logarithm of non-positive number {value!r}")
        self.value = value
