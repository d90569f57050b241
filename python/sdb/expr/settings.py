"""Evaluation limits and machine word configuration."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from typing import Mapping, Optional

SUPPORTED_WORD_BITS = (8, 16, 32, 64)
DEFAULT_WORD_BITS = 32
DEFAULT_MAX_TOKENS = 512
DEFAULT_MAX_LITERAL_LEN = 31
# Frames kept free for callers (shell, test runner) below the evaluator.
RECURSION_HEADROOM = 200


@dataclass(frozen=True)
class EvalSettings:
    """Immutable knobs shared by the lexer and the evaluator."""

    word_bits: int = DEFAULT_WORD_BITS
    max_tokens: int = DEFAULT_MAX_TOKENS
    max_literal_len: int = DEFAULT_MAX_LITERAL_LEN
    max_depth: Optional[int] = None
    mask: int = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.word_bits not in SUPPORTED_WORD_BITS:
            raise ValueError(f"unsupported word width {self.word_bits} (expected one of {SUPPORTED_WORD_BITS})")
        if self.max_tokens < 1:
            raise ValueError("max_tokens must be positive")
        if self.max_literal_len < 1:
            raise ValueError("max_literal_len must be positive")
        limit = max_safe_depth()
        if self.max_depth is None:
            object.__setattr__(self, "max_depth", min(self.max_tokens, limit))
        elif self.max_depth < 1:
            raise ValueError("max_depth must be positive")
        elif self.max_depth > limit:
            raise ValueError(f"max_depth {self.max_depth} exceeds the interpreter recursion bound {limit}")
        object.__setattr__(self, "mask", (1 << self.word_bits) - 1)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides: Optional[int]) -> "EvalSettings":
        """Build settings from ``SDB_*`` variables; explicit overrides win."""
        env = os.environ if environ is None else environ
        values = {
            "word_bits": _env_int(env, "SDB_WORD_BITS", DEFAULT_WORD_BITS),
            "max_tokens": _env_int(env, "SDB_MAX_TOKENS", DEFAULT_MAX_TOKENS),
        }
        for key, value in overrides.items():
            if value is not None:
                values[key] = value
        return cls(**values)


def max_safe_depth() -> int:
    """Deepest nesting the recursive evaluator can reach under the current recursion limit."""
    return max(1, sys.getrecursionlimit() - RECURSION_HEADROOM)


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw, 0)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer (got {raw!r})") from exc


DEFAULT_SETTINGS = EvalSettings()

__all__ = ["EvalSettings", "DEFAULT_SETTINGS", "SUPPORTED_WORD_BITS", "max_safe_depth"]
