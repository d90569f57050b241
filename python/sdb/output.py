"""Output helpers for sdb.

Every command reports through :func:`emit_result` / :func:`emit_error`, which
print plain text or, with ``--json``, one JSON document per call.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Mapping, Optional, Sequence

from tabulate import tabulate

from .context import DebuggerContext
from .expr import ExprError, UnrecognizedInput


def _json_dump(payload: Mapping[str, Any]) -> str:
    return json.dumps(payload, indent=2, sort_keys=True)


def emit_result(ctx: DebuggerContext, *, message: str, data: Optional[Mapping[str, Any]] = None) -> None:
    """Emit a successful command result."""
    if not ctx.json_output:
        print(message)
        return
    payload: Dict[str, Any] = {"status": "ok"}
    if data is None:
        payload["message"] = message
    else:
        payload["result"] = dict(data)
    print(_json_dump(payload))


def emit_error(ctx: DebuggerContext, *, message: str, data: Optional[Mapping[str, Any]] = None) -> None:
    if not ctx.json_output:
        print(f"error: {message}")
        return
    payload: Dict[str, Any] = {"status": "error", "error": message}
    if data:
        payload["details"] = dict(data)
    print(_json_dump(payload))


def format_hex(value: int, word_bits: int) -> str:
    return f"0x{value:0{word_bits // 4}X}"


def format_word(value: int, word_bits: int) -> str:
    """``42 (0x0000002A)`` with the hex part padded to the word width."""
    return f"{value} ({format_hex(value, word_bits)})"


def emit_expr_error(ctx: DebuggerContext, text: str, error: ExprError) -> None:
    """Report a rejected expression; lexer failures get a caret under the bad column."""
    details: Dict[str, Any] = {"expr": text, "kind": type(error).__name__}
    if isinstance(error, UnrecognizedInput):
        details["position"] = error.position
        if not ctx.json_output:
            print(error.caret())
    emit_error(ctx, message=error.reason, data=details)


def render_failures(rows: Sequence[Mapping[str, Any]]) -> str:
    """Render fixture mismatches as a github-style table."""
    table = [[row["index"], row["expr"], row["expected"], row["actual"]] for row in rows]
    return tabulate(table, headers=["#", "expression", "expected", "actual"], tablefmt="github")


__all__ = ["emit_result", "emit_error", "emit_expr_error", "format_hex", "format_word", "render_failures"]
