from __future__ import annotations
import math
from typing import Callable, Dict, List, Tuple

from .errors import DivisionByZero, InvalidResult, NegativeSqrt, NonPositiveLog
from .nodes import BinaryOp, BinaryOperator, FunctionCall, Literal, Node, UnaryOp


def _sqrt(x: float) -> float:
    if x < 0:
        raise NegativeSqrt(x)
    return math.sqrt(x)


def _ln(x: float) -> float:
    if x <= 0:
        raise NonPositiveLog(x)
    return math.log(x)


# tan has no singularity check: near odd multiples of pi/2 it returns a large
# finite value, and only a non-finite result is rejected.
FUNCTIONS: Dict[str, Callable[[float], float]] = {
    "sqrt": _sqrt,
    "abs": abs,
    "sin": math.sin,
    "cos": math.cos,
    "tan": math.tan,
    "ln": _ln,
}


def _pow(base: float, exponent: float) -> float:
    try:
        return math.pow(base, exponent)
    except OverflowError:
        raise InvalidResult("invalid result: exponentiation overflowed") from None
    except ValueError:
        # negative base with fractional exponent, or 0 to a negative power
        raise InvalidResult(f"invalid result: {base!r} ^ {exponent!r} is undefined") from None


def _finite(value: float) -> float:
    if not math.isfinite(value):
        raise InvalidResult()
    return value


def _binary(op: BinaryOperator, left: float, right: float) -> float:
    if op is BinaryOperator.ADD:
        return left + right
    if op is BinaryOperator.SUB:
        return left - right
    if op is BinaryOperator.MUL:
        return left * right
    if op is BinaryOperator.DIV:
        if right == 0.0:
            raise DivisionByZero()
        return left / right
    if op is BinaryOperator.POW:
        return _pow(left, right)
    raise ValueError(f"unsupported operator {op!r}")


def _call(name: str, argument: float) -> float:
    fn = FUNCTIONS.get(name)
    if fn is None:
        raise ValueError(f"function {name!r} has no implementation")
    return float(fn(argument))


def evaluate(node: Node) -> float:
    """
    Post-order walk over an explicit stack, left operand before right.
    Every intermediate value is checked for NaN/Inf as soon as it is computed,
    so the first failing node is the one reported.
    """
    values: List[float] = []
    pending: List[Tuple[Node, bool]] = [(node, False)]
    while pending:
        current, children_done = pending.pop()

        if isinstance(current, Literal):
            values.append(_finite(current.value))
            continue

        if isinstance(current, UnaryOp):
            children = (current.operand,)
        elif isinstance(current, BinaryOp):
            children = (current.left, current.right)
        elif isinstance(current, FunctionCall):
            children = (current.argument,)
        else:
            raise TypeError(f"not an expression node: {type(current).__name__}")

        if not children_done:
            pending.append((current, True))
            pending.extend((child, False) for child in reversed(children))
            continue

        if isinstance(current, UnaryOp):
            values.append(_finite(-values.pop()))
        elif isinstance(current, BinaryOp):
            right = values.pop()
            left = values.pop()
            values.append(_finite(_binary(current.op, left, right)))
        else:
            values.append(_finite(_call(current.name, values.pop())))

    return values[0]
