"""
Arithmetic expression evaluation for the sdb debugger.

``evaluate_expression("1+2*3")`` returns an :class:`ExprResult` holding either
the unsigned machine-word value or the first :class:`ExprError` raised while
lexing or evaluating.  :func:`evaluate` is the raising variant.
"""

from __future__ import annotations

from .errors import (
    DivisionByZero,
    EmptyRange,
    EvalError,
    ExprError,
    LexError,
    LiteralTooLong,
    NestingTooDeep,
    NoOperatorFound,
    NotANumber,
    TooManyTokens,
    UnbalancedParentheses,
    UnrecognizedInput,
    UnsupportedOperator,
)
from .evaluator import Evaluator, ExprResult, evaluate, evaluate_expression, find_main_operator
from .lexer import Token, TokenKind, init_lexer, mark_unary_minus, tokenize
from .settings import DEFAULT_SETTINGS, EvalSettings

__all__ = [
    "DEFAULT_SETTINGS",
    "DivisionByZero",
    "EmptyRange",
    "EvalError",
    "EvalSettings",
    "Evaluator",
    "ExprError",
    "ExprResult",
    "LexError",
    "LiteralTooLong",
    "NestingTooDeep",
    "NoOperatorFound",
    "NotANumber",
    "Token",
    "TokenKind",
    "TooManyTokens",
    "UnbalancedParentheses",
    "UnrecognizedInput",
    "UnsupportedOperator",
    "evaluate",
    "evaluate_expression",
    "find_main_operator",
    "init_lexer",
    "mark_unary_minus",
    "tokenize",
]
