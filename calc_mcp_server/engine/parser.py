from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .errors import (
    EmptyExpression,
    TrailingTokens,
    UnexpectedToken,
    UnknownFunction,
    UnmatchedParenthesis,
)
from .limits import DEFAULT_LIMITS, EngineLimits
from .nodes import BinaryOp, BinaryOperator, FunctionCall, Literal, Node, UnaryOp, UnaryOperator
from .tokenizer import Token, TokenKind

BINARY = {
    TokenKind.PLUS: BinaryOperator.ADD,
    TokenKind.MINUS: BinaryOperator.SUB,
    TokenKind.STAR: BinaryOperator.MUL,
    TokenKind.SLASH: BinaryOperator.DIV,
    TokenKind.CARET: BinaryOperator.POW,
}
PRECEDENCE = {
    BinaryOperator.ADD: 1,
    BinaryOperator.SUB: 1,
    BinaryOperator.MUL: 2,
    BinaryOperator.DIV: 2,
    BinaryOperator.POW: 3,
}
RIGHT_ASSOCIATIVE = {BinaryOperator.POW}


@dataclass
class _Group:
    """One parenthesized context: the top level, '(' ... ')' or name '(' ... ')'."""

    opener: Optional[Token] = None
    function: Optional[str] = None
    operands: List[Node] = field(default_factory=list)
    operators: List[BinaryOperator] = field(default_factory=list)
    negations: int = 0
    expect_operand: bool = True

    def push_operand(self, node: Node) -> None:
        # unary minus binds to the next operand only, tighter than '^'
        for _ in range(self.negations):
            node = UnaryOp(UnaryOperator.NEGATE, node)
        self.negations = 0
        self.operands.append(node)
        self.expect_operand = False

    def push_operator(self, op: BinaryOperator) -> None:
        while self.operators:
            top = self.operators[-1]
            if PRECEDENCE[top] > PRECEDENCE[op] or (
                PRECEDENCE[top] == PRECEDENCE[op] and op not in RIGHT_ASSOCIATIVE
            ):
                self._reduce()
            else:
                break
        self.operators.append(op)
        self.expect_operand = True

    def _reduce(self) -> None:
        op = self.operators.pop()
        right = self.operands.pop()
        left = self.operands.pop()
        self.operands.append(BinaryOp(op, left, right))

    def finish(self) -> Node:
        while self.operators:
            self._reduce()
        node = self.operands[0]
        return FunctionCall(self.function, node) if self.function else node


class Parser:
    """
    Operator-precedence parser for

      expr    := term (('+' | '-') term)*
      term    := power (('*' | '/') power)*
      power   := unary ('^' power)?
      unary   := '-' unary | primary
      primary := NUMBER | IDENTIFIER '(' expr ')' | '(' expr ')'

    '+' '-' '*' '/' associate left, '^' associates right, and unary minus binds
    tighter than '^' (so -2^2 == 4). Parentheses are tracked on an explicit
    stack of groups, so nesting depth is bounded only by the input length.
    """

    def __init__(self, tokens: Sequence[Token], limits: EngineLimits = DEFAULT_LIMITS):
        self.tokens: List[Token] = list(tokens)
        self.limits = limits
        self.pos = 0
        last = self.tokens[-1] if self.tokens else None
        self.end = last.position + len(last.text) if last else 0

    def peek(self, offset: int = 0) -> Optional[Token]:
        i = self.pos + offset
        return self.tokens[i] if i < len(self.tokens) else None

    def parse(self) -> Node:
        if not self.tokens:
            raise EmptyExpression()
        groups = [_Group()]
        while True:
            group = groups[-1]
            if group.expect_operand:
                opened = self._operand(group)
                if opened is not None:
                    groups.append(opened)
                continue

            tok = self.peek()
            if tok is not None and tok.kind in BINARY:
                self.pos += 1
                group.push_operator(BINARY[tok.kind])
                continue

            node, closed = self._close(group, tok)
            if not closed:
                return node
            groups.pop()
            groups[-1].push_operand(node)

    def _operand(self, group: _Group) -> Optional[_Group]:
        """Consume one operand token; returns a new group when it opens one."""
        tok = self.peek()
        if tok is None:
            raise UnexpectedToken(None, self.end)

        if tok.kind is TokenKind.MINUS:
            self.pos += 1
            group.negations += 1
            return None

        if tok.kind is TokenKind.NUMBER:
            self.pos += 1
            group.push_operand(Literal(tok.value))
            return None

        if tok.kind is TokenKind.LPAREN:
            self.pos += 1
            return _Group(opener=tok)

        if tok.kind is TokenKind.IDENTIFIER:
            opener = self.peek(1)
            # no variables: a name is only valid in call position
            if opener is None or opener.kind is not TokenKind.LPAREN:
                raise UnexpectedToken(tok, tok.position)
            if tok.text not in self.limits.allowed_functions:
                raise UnknownFunction(tok.text, tok.position)
            self.pos += 2
            return _Group(opener=opener, function=tok.text)

        raise UnexpectedToken(tok, tok.position)

    def _close(self, group: _Group, tok: Optional[Token]) -> Tuple[Node, bool]:
        node = group.finish()
        if group.opener is None:
            if tok is None:
                return node, False
            if tok.kind is TokenKind.RPAREN:
                raise UnmatchedParenthesis(")", tok.position)
            raise TrailingTokens(tok, tok.position)
        if tok is None:
            raise UnmatchedParenthesis("(", group.opener.position)
        if tok.kind is not TokenKind.RPAREN:
            raise UnexpectedToken(tok, tok.position)
        self.pos += 1
        return node, True


def parse(tokens: Sequence[Token], limits: EngineLimits = DEFAULT_LIMITS) -> Node:
    return Parser(tokens, limits).parse()
