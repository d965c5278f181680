from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Union


class UnaryOperator(Enum):
    NEGATE = "-"


class BinaryOperator(Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    POW = "^"


@dataclass(frozen=True)
class Literal:
    value: float


@dataclass(frozen=True)
class UnaryOp:
    op: UnaryOperator
    operand: "Node"


@dataclass(frozen=True)
class BinaryOp:
    op: BinaryOperator
    left: "Node"
    right: "Node"


@dataclass(frozen=True)
class FunctionCall:
    name: str
    argument: "Node"


Node = Union[Literal, UnaryOp, BinaryOp, FunctionCall]
