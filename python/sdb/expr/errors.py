"""Expression error hierarchy."""

from __future__ import annotations


class ExprError(ValueError):
    """Base class for every expression failure."""

    @property
    def reason(self) -> str:
        return str(self)


class LexError(ExprError):
    """Raised when the input cannot be split into tokens."""


class UnrecognizedInput(LexError):
    """Raised when no lexical rule matches at a position."""

    def __init__(self, position: int, text: str = "") -> None:
        self.position = position
        self.text = text
        super().__init__(f"invalid token at position {position}")

    def caret(self) -> str:
        """Return the source line with a caret under the failing column."""
        return f"{self.text}\n{' ' * self.position}^"


class LiteralTooLong(LexError):
    """Raised when a number literal exceeds the literal length bound."""

    def __init__(self, text: str, limit: int) -> None:
        self.text = text
        self.limit = limit
        super().__init__(f"numeric literal '{text[:limit]}...' longer than {limit} characters")


class TooManyTokens(LexError):
    """Raised when the token capacity is exhausted."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(f"expression too long (more than {limit} tokens)")


class EvalError(ExprError):
    """Raised when a token range cannot be evaluated."""


class EmptyRange(EvalError):
    def __init__(self) -> None:
        super().__init__("missing operand")


class NotANumber(EvalError):
    pass


class UnbalancedParentheses(EvalError):
    def __init__(self) -> None:
        super().__init__("unbalanced parentheses")


class NoOperatorFound(EvalError):
    def __init__(self) -> None:
        super().__init__("no operator between operands")


class DivisionByZero(EvalError):
    def __init__(self) -> None:
        super().__init__("division by zero")


class UnsupportedOperator(EvalError):
    def __init__(self, text: str, position: int) -> None:
        self.position = position
        super().__init__(f"operator '{text}' at position {position} is not supported")


class NestingTooDeep(EvalError):
    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(f"expression nested deeper than {limit} levels")


__all__ = [
    "ExprError",
    "LexError",
    "UnrecognizedInput",
    "LiteralTooLong",
    "TooManyTokens",
    "EvalError",
    "EmptyRange",
    "NotANumber",
    "UnbalancedParentheses",
    "NoOperatorFound",
    "DivisionByZero",
    "UnsupportedOperator",
    "NestingTooDeep",
]
