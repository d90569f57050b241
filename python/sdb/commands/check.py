"""Fixture replay command (``check FILE``)."""

from __future__ import annotations

import argparse
import logging
from typing import Any, Dict, List

from .base import Command
from ..context import DebuggerContext
from ..expr import evaluate_expression
from ..gen_expr import load_fixtures
from ..output import emit_error, emit_result, render_failures

LOGGER = logging.getLogger("sdb.check")


class CheckCommand(Command):
    def __init__(self) -> None:
        super().__init__(
            "check",
            "Replay '<expected> <expr>' fixture lines against the evaluator",
            usage="check FILE [--verbose] [--fail-fast]",
        )
        parser = argparse.ArgumentParser(prog="check", add_help=False)
        parser.add_argument("path", help="Fixture file produced by sdb-gen-expr")
        parser.add_argument("-v", "--verbose", action="store_true", help="List every mismatch")
        parser.add_argument("--fail-fast", action="store_true", help="Stop at the first mismatch")
        self._parser = parser

    def run(self, ctx: DebuggerContext, argv: List[str]) -> int:
        try:
            args = self._parser.parse_args(argv)
        except SystemExit:
            return 1
        try:
            fixtures = load_fixtures(args.path)
        except OSError as exc:
            emit_error(ctx, message=f"check failed: {exc}")
            return 2
        except ValueError as exc:
            emit_error(ctx, message=str(exc))
            return 1
        failures: List[Dict[str, Any]] = []
        checked = 0
        for index, (expected, text) in enumerate(fixtures, start=1):
            checked += 1
            result = evaluate_expression(text, settings=ctx.settings)
            if result.ok and result.value == expected:
                continue
            actual = result.value if result.ok else f"error: {result.reason}"
            LOGGER.debug("fixture %d mismatch: %r expected %d got %s", index, text, expected, actual)
            failures.append({"index": index, "expr": text, "expected": expected, "actual": actual})
            if args.fail_fast:
                break
        passed = checked - len(failures)
        summary = f"{passed}/{checked} passed, {len(failures)} failed"
        emit_result(
            ctx,
            message=summary,
            data={"checked": checked, "passed": passed, "failed": len(failures), "failures": failures},
        )
        if failures and args.verbose and not ctx.json_output:
            print(render_failures(failures))
        return 0 if not failures else 1
