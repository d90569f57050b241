"""Tests for the sdb expression evaluator."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[2]
sys.path.append(str(REPO_ROOT / "python"))

from sdb.expr import (
    DivisionByZero,
    EmptyRange,
    EvalSettings,
    ExprError,
    NestingTooDeep,
    NoOperatorFound,
    NotANumber,
    UnbalancedParentheses,
    UnrecognizedInput,
    UnsupportedOperator,
    evaluate,
    evaluate_expression,
    find_main_operator,
    mark_unary_minus,
    tokenize,
)
from sdb.expr.evaluator import ExprResult, is_balanced, is_wrapped
from sdb.expr.settings import max_safe_depth

MASK32 = 0xFFFFFFFF


def _tokens(text):
    return mark_unary_minus(tokenize(text))


@pytest.mark.parametrize("a, b", [(3, 4), (0, 5), (MASK32, 1), (7, 2), (2, 7), (65536, 65536), (100, 0)])
@pytest.mark.parametrize("op", ["+", "-", "*", "/"])
def test_binary_operations_wrap_to_word(a, b, op):
    text = f"{a} {op} {b}"
    if op == "/" and b == 0:
        with pytest.raises(DivisionByZero):
            evaluate(text)
        return
    expected = {
        "+": lambda: (a + b) & MASK32,
        "-": lambda: (a - b) & MASK32,
        "*": lambda: (a * b) & MASK32,
        "/": lambda: a // b,
    }[op]()
    assert evaluate(text) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("1+2*3", 7),
        ("(1+2)*3", 9),
        ("8-3-2", 3),
        ("8-(3-2)", 7),
        ("100/10/5", 2),
        ("8/3*3", 6),
        ("2*3+4*5", 26),
        ("((((42))))", 42),
        ("3-2", 1),
        ("10u + 0u", 10),
        ("  7  ", 7),
    ],
)
def test_precedence_and_associativity(text, expected):
    assert evaluate(text) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("-2*3", (-6) & MASK32),
        ("-1", MASK32),
        ("--3", 3),
        ("- - -3", (-3) & MASK32),
        ("2*-3", (-6) & MASK32),
        ("1--1", 2),
        ("-(1+2)", (-3) & MASK32),
        ("-0", 0),
        ("-3-2", (-5) & MASK32),
        ("2+-3*4", (-10) & MASK32),
        ("(-4)/2", ((-4) & MASK32) // 2),
    ],
)
def test_unary_minus(text, expected):
    assert evaluate(text) == expected


@pytest.mark.parametrize("text", ["1+2", "2*3-1", "-4*2", "8/2/2", "1-2-3"])
def test_redundant_parentheses_are_transparent(text):
    assert evaluate(f"({text})") == evaluate(text)
    assert evaluate(f"(({text}))") == evaluate(text)


@pytest.mark.parametrize("text", ["(1+2", "1+2)", ")(", "(1))+((2", "((1)", "1)+(2"])
def test_unbalanced_parentheses(text):
    with pytest.raises(UnbalancedParentheses):
        evaluate(text)


@pytest.mark.parametrize("text", ["5/0", "0/0", "5/(3-3)", "1+4/(2*0)"])
def test_division_by_zero(text):
    with pytest.raises(DivisionByZero):
        evaluate(text)


@pytest.mark.parametrize(
    "text, error",
    [
        ("", EmptyRange),
        ("()", EmptyRange),
        ("1+", EmptyRange),
        ("+1", EmptyRange),
        ("1 2", NoOperatorFound),
        ("(1)(2)", NoOperatorFound),
        ("1==1", UnsupportedOperator),
        ("1 + x", UnrecognizedInput),
        ("(1+)/0", EmptyRange),
        ("4294967296", NotANumber),
        ("(", NotANumber),
    ],
)
def test_failures(text, error):
    with pytest.raises(error):
        evaluate(text)


def test_left_operand_failure_wins():
    result = evaluate_expression("(1+)/0")
    assert isinstance(result.error, EmptyRange)


def test_word_width_is_configurable():
    wide = EvalSettings(word_bits=64)
    assert evaluate("4294967296", settings=wide) == 1 << 32
    assert evaluate("-1", settings=wide) == (1 << 64) - 1
    narrow = EvalSettings(word_bits=8)
    assert evaluate("200+100", settings=narrow) == 44
    with pytest.raises(NotANumber):
        evaluate("256", settings=narrow)


def test_nesting_limit():
    settings = EvalSettings(max_depth=3)
    assert evaluate("((1))", settings=settings) == 1
    with pytest.raises(NestingTooDeep):
        evaluate("((((1))))", settings=settings)


def test_long_unary_chain_within_default_limits():
    assert evaluate("-" * 500 + "1") == 1
    assert evaluate("-" * 501 + "1") == MASK32


def test_evaluation_is_repeatable():
    text = "(3+4)*-2/7"
    first = evaluate_expression(text)
    second = evaluate_expression(text)
    assert first == second
    assert first.ok
    assert first.value == ((-14) & MASK32) // 7


def test_evaluate_expression_reports_reason():
    ok = evaluate_expression("1+2")
    assert ok.ok and ok.value == 3 and ok.reason is None
    failed = evaluate_expression("5/0")
    assert not failed.ok
    assert failed.value is None
    assert isinstance(failed.error, DivisionByZero)
    assert isinstance(failed.error, ExprError)
    assert failed.reason == "division by zero"


@pytest.mark.parametrize(
    "text, index",
    [
        ("1+2*3", 1),
        ("(1+2)*3", 5),
        ("8-3-2", 3),
        ("-2*3", 2),
        ("--3", 0),
        ("2*-3", 1),
        ("1*2+3*4", 3),
    ],
)
def test_find_main_operator(text, index):
    tokens = _tokens(text)
    assert find_main_operator(tokens, 0, len(tokens) - 1) == index


def test_find_main_operator_ignores_parenthesised_operators():
    tokens = _tokens("(1+2)")
    assert find_main_operator(tokens, 0, len(tokens) - 1) is None


def test_parenthesis_helpers():
    tokens = _tokens("(1)+(2)")
    last = len(tokens) - 1
    assert is_balanced(tokens, 0, last)
    assert not is_wrapped(tokens, 0, last)
    assert is_wrapped(tokens, 0, 2)
    assert not is_balanced(tokens, 0, 1)


def test_raised_token_capacity_keeps_depth_within_recursion_limit():
    settings = EvalSettings(max_tokens=4000)
    assert settings.max_depth <= max_safe_depth() < sys.getrecursionlimit()
    nested = evaluate_expression("(" * 1500 + "1" + ")" * 1500, settings=settings)
    assert isinstance(nested.error, NestingTooDeep)
    chain = evaluate_expression("+".join(["1"] * 1900), settings=settings)
    assert isinstance(chain.error, NestingTooDeep)
    assert evaluate("+".join(["1"] * 300), settings=settings) == 300


def test_explicit_depth_beyond_recursion_limit_is_rejected():
    with pytest.raises(ValueError):
        EvalSettings(max_tokens=100000, max_depth=sys.getrecursionlimit())


def test_lowered_recursion_limit_reports_nesting_error():
    settings = EvalSettings(max_tokens=4000)
    text = "(" * 700 + "1" + ")" * 700
    original = sys.getrecursionlimit()
    sys.setrecursionlimit(400)
    try:
        result = evaluate_expression(text, settings=settings)
    finally:
        sys.setrecursionlimit(original)
    assert isinstance(result.error, NestingTooDeep)


def test_expr_result_holds_exactly_one_outcome():
    assert ExprResult(value=0).ok
    with pytest.raises(ValueError):
        ExprResult()
    with pytest.raises(ValueError):
        ExprResult(value=1, error=DivisionByZero())
