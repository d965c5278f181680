import math
import random

import pytest

from calc_mcp_server.engine import (
    CalculatorError,
    DivisionByZero,
    EmptyExpression,
    ErrorKind,
    EvalError,
    ForbiddenCharacter,
    InvalidResult,
    LexError,
    NegativeSqrt,
    ParseError,
    TooLong,
    UnexpectedToken,
    UnknownFunction,
    UnmatchedParenthesis,
    ValidationError,
    compute,
)


@pytest.mark.parametrize("expr, expected", [
    ("2 + 3", 5.0),
    ("4 * 5", 20.0),
    ("2 + 3 * 4", 14.0),
    ("(2 + 3) * 4", 20.0),
    ("2^3", 8.0),
    ("2^3^2", 512.0),
    ("-2^2", 4.0),
    ("-(2^2)", -4.0),
    ("10 - 4 - 3", 3.0),
    ("100 / 10 / 5", 2.0),
    ("sqrt(25)", 5.0),
    ("abs(-10)", 10.0),
    ("25^0.5", 5.0),
    ("3.14 * 2", 6.28),
    ("sqrt(16) + abs(-3) * 2", 10.0),
    ("cos(0) + sin(0)", 1.0),
    ("2 * -3", -6.0),
    ("\t( 1 +\n2 )", 3.0),
])
def test_compute(expr, expected):
    assert compute(expr) == pytest.approx(expected)


def test_ln_of_e_squared():
    assert compute("ln(2.718281828459045^2)") == pytest.approx(2.0)


@pytest.mark.parametrize("expr, error, stage_base", [
    ("1" * 1001, TooLong, ValidationError),
    ("2 + 3 & echo world", ForbiddenCharacter, ValidationError),
    ("", EmptyExpression, ParseError),
    ("2 +", UnexpectedToken, ParseError),
    ("(2+3", UnmatchedParenthesis, ParseError),
    ("foo(1)", UnknownFunction, ParseError),
    ("1/0", DivisionByZero, EvalError),
    ("sqrt(-1)", NegativeSqrt, EvalError),
    ("(-8)^(1/3)", InvalidResult, EvalError),
])
def test_errors(expr, error, stage_base):
    with pytest.raises(error) as exc:
        compute(expr)
    assert isinstance(exc.value, stage_base)
    assert isinstance(exc.value, CalculatorError)
    assert isinstance(exc.value.kind, ErrorKind)


def test_too_long_wins_over_everything_else():
    with pytest.raises(TooLong):
        compute("1+" * 1000)
    with pytest.raises(TooLong):
        compute("$;(" * 400)


def test_forbidden_character_regardless_of_content():
    for expr in ["2 + 3; rm -rf /", "sqrt(4) | cat", "foo(&)", "((((;", "1/0;"]:
        with pytest.raises(ForbiddenCharacter):
            compute(expr)


def test_lex_error_before_parse_error():
    with pytest.raises(LexError):
        compute("(2 + $")


def test_sqrt_negative_is_an_invalid_result():
    with pytest.raises(InvalidResult):
        compute("sqrt(-1)")


def test_huge_literal_is_invalid():
    with pytest.raises(InvalidResult):
        compute("9" * 400)


def test_idempotent():
    expr = "sin(1.2) * 3^2 - ln(7) / abs(-2)"
    assert compute(expr) == compute(expr)


def test_deep_left_chain_evaluates():
    assert compute("+".join(["1"] * 500)) == 500.0


@pytest.mark.parametrize("expr, expected", [
    ("-" * 101 + "1", -1.0),
    ("-" * 998 + "1", 1.0),
    ("(" * 101 + "1" + ")" * 101, 1.0),
    ("(" * 499 + "1" + ")" * 499, 1.0),
    ("^".join(["1"] * 500), 1.0),
    ("-1" + "^-1" * 332, -1.0),
    ("sqrt(" * 166 + "1" + ")" * 166, 1.0),
])
def test_deep_input_within_length_limit_evaluates(expr, expected):
    assert len(expr) <= 1000
    assert compute(expr) == expected


def test_results_are_always_finite():
    for expr in ["10^308 * 10", "2^1024", "tan(1.5707963267948966)", "abs(-1.5)"]:
        try:
            value = compute(expr)
        except InvalidResult:
            continue
        assert math.isfinite(value)


# ---- generated well-formed expressions never trip the defensive checks ----
def _random_expression(rng, depth=0):
    if depth > 3 or rng.random() < 0.3:
        whole = str(rng.randint(0, 99))
        return whole if rng.random() < 0.5 else f"{whole}.{rng.randint(0, 99)}"
    form = rng.choice(["binary", "binary", "neg", "paren", "call"])
    if form == "binary":
        op = rng.choice(["+", "-", "*", "/", "^"])
        return f"{_random_expression(rng, depth + 1)} {op} {_random_expression(rng, depth + 1)}"
    if form == "neg":
        return f"-{_random_expression(rng, depth + 1)}"
    if form == "paren":
        return f"({_random_expression(rng, depth + 1)})"
    fn = rng.choice(["sqrt", "abs", "sin", "cos", "tan", "ln"])
    return f"{fn}({_random_expression(rng, depth + 1)})"


def test_well_formed_expressions_only_fail_mathematically():
    rng = random.Random(1234)
    for _ in range(500):
        expr = _random_expression(rng)
        try:
            value = compute(expr)
        except (DivisionByZero, InvalidResult):
            continue
        assert math.isfinite(value), expr
