from __future__ import annotations
from .errors import ForbiddenCharacter, TooLong
from .limits import DEFAULT_LIMITS, EngineLimits


def validate(raw: str, limits: EngineLimits = DEFAULT_LIMITS) -> None:
    """Reject oversized input and shell metacharacters before tokenizing."""
    if len(raw) > limits.max_expression_length:
        raise TooLong(len(raw), limits.max_expression_length)
    for pos, ch in enumerate(raw):
        if ch in limits.forbidden_characters:
            raise ForbiddenCharacter(ch, pos)
