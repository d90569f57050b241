"""Regex-driven tokenizer for debugger expressions."""

from __future__ import annotations

import logging
import re
import threading
from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional, Pattern, Sequence, Tuple

from .errors import LiteralTooLong, TooManyTokens, UnrecognizedInput
from .settings import DEFAULT_SETTINGS, EvalSettings

LOGGER = logging.getLogger("sdb.expr.lexer")


class TokenKind(Enum):
    NUMBER = "number"
    PLUS = "+"
    MINUS = "-"
    NEGATIVE = "neg"
    STAR = "*"
    SLASH = "/"
    LPAREN = "("
    RPAREN = ")"
    EQ = "=="


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    position: int

    @property
    def is_number(self) -> bool:
        return self.kind is TokenKind.NUMBER


# Order matters: the first rule matching at the scan position wins.
# ``None`` marks input that is consumed without producing a token.
RULES: Sequence[Tuple[str, Optional[TokenKind]]] = (
    (r"\s+", None),
    (r"\+", TokenKind.PLUS),
    (r"==", TokenKind.EQ),
    (r"-", TokenKind.MINUS),
    (r"\(", TokenKind.LPAREN),
    (r"\)", TokenKind.RPAREN),
    (r"\*", TokenKind.STAR),
    (r"/", TokenKind.SLASH),
    (r"0u?|[1-9][0-9]*u?", TokenKind.NUMBER),
)

_compiled: Optional[Tuple[Tuple[Pattern[str], Optional[TokenKind]], ...]] = None
_init_lock = threading.Lock()


def init_lexer() -> None:
    """Compile the lexical rules once; later calls are no-ops."""
    global _compiled
    if _compiled is not None:
        return
    with _init_lock:
        if _compiled is not None:
            return
        table = []
        for pattern, kind in RULES:
            try:
                table.append((re.compile(pattern), kind))
            except re.error as exc:  # pragma: no cover - static table
                raise RuntimeError(f"rule compilation failed for {pattern!r}: {exc}") from exc
        _compiled = tuple(table)
        LOGGER.debug("compiled %d lexical rules", len(table))


def _rules() -> Tuple[Tuple[Pattern[str], Optional[TokenKind]], ...]:
    if _compiled is None:
        init_lexer()
    assert _compiled is not None
    return _compiled


def tokenize(text: str, *, settings: Optional[EvalSettings] = None) -> List[Token]:
    """Split ``text`` into tokens.

    Every position must be matched by one of :data:`RULES`, anchored at that
    position.  Raises :class:`UnrecognizedInput` with the failing offset when
    nothing matches, :class:`LiteralTooLong` for oversized number literals and
    :class:`TooManyTokens` once ``settings.max_tokens`` is exceeded.
    """
    settings = settings or DEFAULT_SETTINGS
    rules = _rules()
    tokens: List[Token] = []
    position = 0
    length = len(text)
    while position < length:
        for index, (regex, kind) in enumerate(rules):
            match = regex.match(text, position)
            if match is None or match.end() == position:
                continue
            lexeme = match.group(0)
            LOGGER.debug(
                "match rules[%d] = %r at position %d with len %d: %s",
                index,
                regex.pattern,
                position,
                len(lexeme),
                lexeme,
            )
            if kind is not None:
                if kind is TokenKind.NUMBER and len(lexeme) > settings.max_literal_len:
                    raise LiteralTooLong(lexeme, settings.max_literal_len)
                if len(tokens) >= settings.max_tokens:
                    raise TooManyTokens(settings.max_tokens)
                tokens.append(Token(kind, lexeme, position))
            position = match.end()
            break
        else:
            LOGGER.debug("no match at position %d in %r", position, text)
            raise UnrecognizedInput(position, text)
    return tokens


def mark_unary_minus(tokens: Sequence[Token]) -> List[Token]:
    """Reclassify prefix ``-`` tokens as :attr:`TokenKind.NEGATIVE`.

    A minus is unary when it opens the sequence or follows anything other
    than a number or a closing parenthesis.
    """
    marked: List[Token] = []
    previous: Optional[Token] = None
    for token in tokens:
        if token.kind is TokenKind.MINUS and (
            previous is None or previous.kind not in (TokenKind.NUMBER, TokenKind.RPAREN)
        ):
            token = replace(token, kind=TokenKind.NEGATIVE)
        marked.append(token)
        previous = token
    return marked


__all__ = ["TokenKind", "Token", "RULES", "init_lexer", "tokenize", "mark_unary_minus"]
