from __future__ import annotations
from dataclasses import dataclass

MAX_EXPRESSION_LENGTH = 1000
FORBIDDEN_CHARACTERS = frozenset({";", "|", "&"})
ALLOWED_FUNCTIONS = frozenset({"sqrt", "abs", "sin", "cos", "tan", "ln"})


@dataclass(frozen=True)
class EngineLimits:
    """Read-only limits shared by every compute() call."""

    max_expression_length: int = MAX_EXPRESSION_LENGTH
    forbidden_characters: frozenset[str] = FORBIDDEN_CHARACTERS
    allowed_functions: frozenset[str] = ALLOWED_FUNCTIONS


DEFAULT_LIMITS = EngineLimits()
