"""
Secure arithmetic expression engine.

    validate -> tokenize -> parse -> evaluate

compute() runs the four stages and raises the first CalculatorError any of
them reports. It keeps no state between calls.
"""
from __future__ import annotations

from .errors import (
    CalculatorError,
    DivisionByZero,
    EmptyExpression,
    ErrorKind,
    EvalError,
    ForbiddenCharacter,
    InvalidResult,
    LexError,
    MalformedNumber,
    NegativeSqrt,
    NonPositiveLog,
    ParseError,
    TooLong,
    TrailingTokens,
    UnexpectedCharacter,
    UnexpectedToken,
    UnknownFunction,
    UnmatchedParenthesis,
    ValidationError,
)
from .evaluator import evaluate
from .limits import DEFAULT_LIMITS, EngineLimits
from .parser import parse
from .tokenizer import tokenize
from .validator import validate


def compute(expression: str, limits: EngineLimits = DEFAULT_LIMITS) -> float:
    validate(expression, limits)
    tokens = tokenize(expression)
    tree = parse(tokens, limits)
    return evaluate(tree)


__all__ = [
    "compute",
    "validate",
    "tokenize",
    "parse",
    "evaluate",
    "EngineLimits",
    "DEFAULT_LIMITS",
    "CalculatorError",
    "ErrorKind",
    "ValidationError",
    "LexError",
    "ParseError",
    "EvalError",
    "TooLong",
    "ForbiddenCharacter",
    "UnexpectedCharacter",
    "MalformedNumber",
    "EmptyExpression",
    "UnexpectedToken",
    "UnmatchedParenthesis",
    "UnknownFunction",
    "TrailingTokens",
    "DivisionByZero",
    "InvalidResult",
    "NegativeSqrt",
    "NonPositiveLog",
]
