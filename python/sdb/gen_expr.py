#!/usr/bin/env python3
"""Random expression fixtures with known values.

Each fixture line is ``<expected> <expression>``.  Expected values are computed
while the expression tree is built, using the same machine-word wraparound the
evaluator applies, so the generated files can be replayed with the debugger's
``check`` command or the test suite.
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Tuple, Union

from .expr.settings import DEFAULT_WORD_BITS, SUPPORTED_WORD_BITS

LOGGER = logging.getLogger("sdb.gen_expr")

_ATOM = 4
_UNARY = 3
_PREC = {"+": 1, "-": 1, "*": 2, "/": 2}


@dataclass(frozen=True)
class _Literal:
    value: int
    suffix: str = ""
    prec = _ATOM

    def tokens(self) -> List[str]:
        return [f"{self.value}{self.suffix}"]


@dataclass(frozen=True)
class _Group:
    child: "_Node"
    value: int
    prec = _ATOM

    def tokens(self) -> List[str]:
        return ["(", *self.child.tokens(), ")"]


@dataclass(frozen=True)
class _Negate:
    child: "_Node"
    value: int
    prec = _UNARY

    def tokens(self) -> List[str]:
        return ["-", *_wrap(self.child, self.child.prec < _UNARY)]


@dataclass(frozen=True)
class _Binary:
    op: str
    left: "_Node"
    right: "_Node"
    value: int

    @property
    def prec(self) -> int:
        return _PREC[self.op]

    def tokens(self) -> List[str]:
        # Equal priority on the right needs parentheses: operators are left-associative.
        return [
            *_wrap(self.left, self.left.prec < self.prec),
            self.op,
            *_wrap(self.right, self.right.prec <= self.prec),
        ]


_Node = Union[_Literal, _Group, _Negate, _Binary]


def _wrap(node: _Node, needed: bool) -> List[str]:
    inner = node.tokens()
    return ["(", *inner, ")"] if needed else inner


class ExprGenerator:
    """Builds random ``(value, text)`` pairs for a given word width."""

    def __init__(self, seed: Optional[int] = None, *, word_bits: int = DEFAULT_WORD_BITS, max_depth: int = 5) -> None:
        if word_bits not in SUPPORTED_WORD_BITS:
            raise ValueError(f"unsupported word width {word_bits}")
        if max_depth < 0:
            raise ValueError("max_depth must not be negative")
        self.rng = random.Random(seed)
        self.word_bits = word_bits
        self.mask = (1 << word_bits) - 1
        self.max_depth = max_depth

    def generate(self) -> Tuple[int, str]:
        node = self._node(0)
        return node.value, self._render(node.tokens())

    def iter_fixtures(self, count: int) -> Iterator[Tuple[int, str]]:
        for _ in range(count):
            yield self.generate()

    def _node(self, depth: int) -> _Node:
        if depth >= self.max_depth:
            return self._literal()
        choice = self.rng.randrange(10)
        if choice < 3:
            return self._literal()
        if choice < 4:
            child = self._node(depth + 1)
            return _Group(child, child.value)
        if choice < 5:
            child = self._node(depth + 1)
            return _Negate(child, (self.mask * child.value) & self.mask)
        return self._binary(depth)

    def _binary(self, depth: int) -> _Binary:
        op = self.rng.choice("+-*/")
        left = self._node(depth + 1)
        right = self._node(depth + 1)
        if op == "/":
            attempts = 0
            while right.value == 0:
                attempts += 1
                right = self._node(depth + 1) if attempts < 8 else _Literal(self.rng.randint(1, 9))
            return _Binary(op, left, right, left.value // right.value)
        if op == "+":
            value = left.value + right.value
        elif op == "-":
            value = left.value - right.value
        else:
            value = left.value * right.value
        return _Binary(op, left, right, value & self.mask)

    def _literal(self) -> _Literal:
        roll = self.rng.random()
        if roll < 0.1:
            value = self.rng.randint(0, self.mask)
        elif roll < 0.2:
            value = 0
        else:
            value = self.rng.randint(1, 99)
        suffix = "u" if self.rng.random() < 0.125 else ""
        return _Literal(value, suffix)

    def _render(self, tokens: Sequence[str]) -> str:
        parts: List[str] = []
        for token in tokens:
            if parts and self.rng.random() < 0.3:
                parts.append(" ")
            parts.append(token)
        return "".join(parts)


def format_fixture(value: int, text: str) -> str:
    return f"{value} {text}"


def load_fixtures(path: Union[str, Path]) -> List[Tuple[int, str]]:
    """Read ``<expected> <expression>`` lines, skipping blanks and ``#`` comments."""
    fixtures: List[Tuple[int, str]] = []
    lines = Path(path).read_text(encoding="utf-8").splitlines()
    for lineno, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        parts = line.split(None, 1)
        if len(parts) != 2:
            raise ValueError(f"{path}:{lineno}: expected '<value> <expression>'")
        try:
            expected = int(parts[0], 10)
        except ValueError as exc:
            raise ValueError(f"{path}:{lineno}: bad expected value {parts[0]!r}") from exc
        fixtures.append((expected, parts[1]))
    return fixtures


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate random sdb expression fixtures")
    parser.add_argument("count", type=int, help="Number of expressions to generate")
    parser.add_argument("--seed", type=int, help="Random seed for reproducible output")
    parser.add_argument("--word-bits", type=int, default=DEFAULT_WORD_BITS, choices=SUPPORTED_WORD_BITS)
    parser.add_argument("--max-depth", type=int, default=5, help="Maximum expression tree depth")
    parser.add_argument("-o", "--output", type=Path, help="Write fixtures to a file instead of stdout")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    if args.count < 0:
        print("error: count must not be negative", file=sys.stderr)
        return 1
    generator = ExprGenerator(args.seed, word_bits=args.word_bits, max_depth=args.max_depth)
    lines = [format_fixture(value, text) for value, text in generator.iter_fixtures(args.count)]
    if args.output:
        try:
            args.output.write_text("\n".join(lines) + ("\n" if lines else ""), encoding="utf-8")
        except OSError as exc:
            print(f"error: cannot write {args.output}: {exc}", file=sys.stderr)
            return 2
        LOGGER.info("wrote %d fixtures to %s", len(lines), args.output)
    else:
        for line in lines:
            print(line)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
