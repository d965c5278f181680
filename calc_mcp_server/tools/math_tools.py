from __future__ import annotations
import logging
from typing import Annotated

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from pydantic import Field

from ..engine import DEFAULT_LIMITS, CalculatorError, EngineLimits, compute

logger = logging.getLogger("calc_mcp.tools.math")

CALCULATE_DESCRIPTION = (
    "Securely evaluate a mathematical expression and return the result. "
    "Supports + - * /, exponentiation (^, right-associative), parentheses and the "
    "functions sqrt, abs, sin, cos, tan and ln (natural log). "
    "Input is length-limited and checked against malicious content."
)

EXPRESSION_DESCRIPTION = (
    'Expression to evaluate, e.g. "2 + 3 * 4", "sqrt(25)", "sin(1.57)". '
    "Unary minus binds tighter than ^, so -2^2 is 4."
)


def format_number(value: float) -> str:
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def format_result(value: float) -> str:
    return f"Result: {format_number(value)}"


def format_error(err: CalculatorError) -> str:
    return f"Calculation error: {err.message}"


def run_calculation(expression: str, limits: EngineLimits = DEFAULT_LIMITS) -> str:
    try:
        value = compute(expression, limits)
    except CalculatorError as e:
        logger.warning("rejected expression (%s): %s", e.kind.value, e.message)
        raise ToolError(format_error(e)) from e
    logger.debug("calculated %r = %r", expression, value)
    return format_result(value)


def register_math_tools(mcp: FastMCP, limits: EngineLimits = DEFAULT_LIMITS):

    @mcp.tool(name="calculate", description=CALCULATE_DESCRIPTION)
    def calculate(
        expression: Annotated[
            str,
            Field(
                description=EXPRESSION_DESCRIPTION,
                examples=["2 + 3 * 4", "(2 + 3) * 4", "sqrt(25)", "2^3^2"],
            ),
        ],
    ) -> str:
        return run_calculation(expression, limits)

    return calculate
