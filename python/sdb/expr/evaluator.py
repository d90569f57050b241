"""Recursive main-operator evaluator over token index ranges."""

from __future__ import annotations

import logging
import operator
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .errors import (
    DivisionByZero,
    EmptyRange,
    ExprError,
    NestingTooDeep,
    NoOperatorFound,
    NotANumber,
    UnbalancedParentheses,
    UnsupportedOperator,
)
from .lexer import Token, TokenKind, mark_unary_minus, tokenize
from .settings import DEFAULT_SETTINGS, EvalSettings

LOGGER = logging.getLogger("sdb.expr.evaluator")

PRIORITY: Dict[TokenKind, int] = {
    TokenKind.LPAREN: 0,
    TokenKind.RPAREN: 0,
    TokenKind.PLUS: 1,
    TokenKind.MINUS: 1,
    TokenKind.STAR: 2,
    TokenKind.SLASH: 2,
    TokenKind.NEGATIVE: 3,
}

_BINARY: Dict[TokenKind, Callable[[int, int], int]] = {
    TokenKind.PLUS: operator.add,
    TokenKind.MINUS: operator.sub,
    TokenKind.STAR: operator.mul,
}


def priority(token: Token) -> int:
    try:
        return PRIORITY[token.kind]
    except KeyError:
        raise UnsupportedOperator(token.text, token.position) from None


def is_balanced(tokens: Sequence[Token], p: int, q: int) -> bool:
    """True when every ``(`` in ``tokens[p..q]`` is closed and no ``)`` is stray."""
    depth = 0
    for index in range(p, q + 1):
        kind = tokens[index].kind
        if kind is TokenKind.LPAREN:
            depth += 1
        elif kind is TokenKind.RPAREN:
            depth -= 1
            if depth < 0:
                return False
    return depth == 0


def is_wrapped(tokens: Sequence[Token], p: int, q: int) -> bool:
    """True when ``tokens[p..q]`` is enclosed by a single matching pair."""
    return (
        tokens[p].kind is TokenKind.LPAREN
        and tokens[q].kind is TokenKind.RPAREN
        and is_balanced(tokens, p + 1, q - 1)
    )


def find_main_operator(tokens: Sequence[Token], p: int, q: int) -> Optional[int]:
    """Return the index of the operator evaluated last in ``tokens[p..q]``.

    Operators are scanned left to right on a candidate stack.  A closing
    parenthesis discards every candidate back to its opening partner, so
    parenthesised operators never qualify.  Any other operator supersedes
    candidates of equal or higher priority, which makes binary operators
    left-associative; a unary minus does not supersede another unary minus.
    The bottom of the stack is the main operator.
    """
    stack: List[Tuple[int, Token]] = []
    for index in range(p, q + 1):
        token = tokens[index]
        kind = token.kind
        if kind is TokenKind.NUMBER:
            continue
        if kind is TokenKind.LPAREN:
            stack.append((index, token))
            continue
        if kind is TokenKind.RPAREN:
            while stack and stack[-1][1].kind is not TokenKind.LPAREN:
                stack.pop()
            if stack:
                stack.pop()
            continue
        rank = priority(token)
        while stack:
            top = stack[-1][1]
            if top.kind is TokenKind.LPAREN or rank > priority(top):
                break
            if kind is TokenKind.NEGATIVE and top.kind is TokenKind.NEGATIVE:
                break
            stack.pop()
        stack.append((index, token))
    if not stack:
        return None
    return stack[0][0]


class Evaluator:
    """Evaluates one token list with machine-word wraparound."""

    def __init__(self, tokens: Sequence[Token], settings: Optional[EvalSettings] = None) -> None:
        self.tokens = tokens
        self.settings = settings or DEFAULT_SETTINGS

    def evaluate(self) -> int:
        try:
            return self._eval(0, len(self.tokens) - 1, 1)
        except RecursionError:
            # The recursion limit was lowered after these settings were built.
            LOGGER.debug("recursion limit hit below max_depth %d", self.settings.max_depth)
            raise NestingTooDeep(self.settings.max_depth) from None

    def _eval(self, p: int, q: int, depth: int) -> int:
        if depth > self.settings.max_depth:
            raise NestingTooDeep(self.settings.max_depth)
        if p > q:
            raise EmptyRange()
        if p == q:
            return self._literal(self.tokens[p])
        if is_wrapped(self.tokens, p, q):
            return self._eval(p + 1, q - 1, depth + 1)
        if not is_balanced(self.tokens, p, q):
            raise UnbalancedParentheses()
        main = find_main_operator(self.tokens, p, q)
        if main is None:
            raise NoOperatorFound()
        LOGGER.debug("main operator %r at %d in [%d, %d]", self.tokens[main].text, main, p, q)
        # Operands recurse inline so each nesting level costs one frame.
        kind = self.tokens[main].kind
        if kind is TokenKind.NEGATIVE:
            left = self.settings.mask
            right = self._eval(main + 1, q, depth + 1)
            kind = TokenKind.STAR
        else:
            left = self._eval(p, main - 1, depth + 1)
            right = self._eval(main + 1, q, depth + 1)
        return self._combine(kind, left, right)

    def _combine(self, kind: TokenKind, left: int, right: int) -> int:
        if kind is TokenKind.SLASH:
            if right == 0:
                raise DivisionByZero()
            return left // right
        return _BINARY[kind](left, right) & self.settings.mask

    def _literal(self, token: Token) -> int:
        if not token.is_number:
            raise NotANumber(f"expected a number at position {token.position}, found '{token.text}'")
        digits = token.text.rstrip("u")
        try:
            value = int(digits, 10)
        except ValueError:
            raise NotANumber(f"malformed numeric literal '{token.text}'") from None
        # Out-of-range literals are rejected rather than truncated to the word.
        if value > self.settings.mask:
            raise NotANumber(f"numeric literal {digits} does not fit in a {self.settings.word_bits}-bit word")
        return value


@dataclass(frozen=True)
class ExprResult:
    """Outcome of :func:`evaluate_expression`: a value or the first error."""

    value: Optional[int] = None
    error: Optional[ExprError] = None

    def __post_init__(self) -> None:
        if (self.value is None) == (self.error is None):
            raise ValueError("ExprResult needs exactly one of value or error")

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def reason(self) -> Optional[str]:
        return self.error.reason if self.error else None


def evaluate(text: str, *, settings: Optional[EvalSettings] = None) -> int:
    """Tokenize and evaluate ``text``; raises :class:`ExprError` on failure."""
    settings = settings or DEFAULT_SETTINGS
    tokens = mark_unary_minus(tokenize(text, settings=settings))
    return Evaluator(tokens, settings).evaluate()


def evaluate_expression(text: str, *, settings: Optional[EvalSettings] = None) -> ExprResult:
    try:
        value = evaluate(text, settings=settings)
    except ExprError as exc:
        LOGGER.debug("evaluation of %r failed: %s", text, exc)
        return ExprResult(error=exc)
    return ExprResult(value=value)


__all__ = [
    "PRIORITY",
    "priority",
    "is_balanced",
    "is_wrapped",
    "find_main_operator",
    "Evaluator",
    "ExprResult",
    "evaluate",
    "evaluate_expression",
]
