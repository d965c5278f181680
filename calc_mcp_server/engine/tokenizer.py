from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .errors import MalformedNumber, UnexpectedCharacter

DIGITS = "0123456789"
LETTERS = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
WHITESPACE = " \t\n\r\v\f"


class TokenKind(Enum):
    NUMBER = "number"
    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    SLASH = "/"
    CARET = "^"
    LPAREN = "("
    RPAREN = ")"
    IDENTIFIER = "identifier"


SINGLE_CHAR_TOKENS = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
    "/": TokenKind.SLASH,
    "^": TokenKind.CARET,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
}


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    position: int
    value: Optional[float] = None  # NUMBER only


def tokenize(raw: str) -> List[Token]:
    tokens: List[Token] = []
    pos, n = 0, len(raw)
    while pos < n:
        ch = raw[pos]
        if ch in WHITESPACE:
            pos += 1
        elif ch in DIGITS:
            tok = _read_number(raw, pos)
            tokens.append(tok)
            pos += len(tok.text)
        elif ch in SINGLE_CHAR_TOKENS:
            tokens.append(Token(SINGLE_CHAR_TOKENS[ch], ch, pos))
            pos += 1
        elif ch in LETTERS:
            end = pos
            while end < n and raw[end] in LETTERS:
                end += 1
            tokens.append(Token(TokenKind.IDENTIFIER, raw[pos:end], pos))
            pos = end
        else:
            raise UnexpectedCharacter(ch, pos)
    return tokens


def _read_number(raw: str, start: int) -> Token:
    n = len(raw)
    end = start
    while end < n and raw[end] in DIGITS:
        end += 1
    if end < n and raw[end] == ".":
        frac = end + 1
        while frac < n and raw[frac] in DIGITS:
            frac += 1
        if frac == end + 1:
            # "1." or "1.x"
            raise MalformedNumber(raw[start:frac], start)
        end = frac
        if end < n and raw[end] == ".":
            # "1.2.3"
            while end < n and (raw[end] in DIGITS or raw[end] == "."):
                end += 1
            raise MalformedNumber(raw[start:end], start)
    text = raw[start:end]
    return Token(TokenKind.NUMBER, text, start, float(text))
