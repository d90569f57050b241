"""``p EXPR``: evaluate and print an expression."""

from __future__ import annotations

from typing import List

from .base import Command
from ..context import DebuggerContext
from ..output import emit_error, emit_expr_error, emit_result, format_hex, format_word


class PrintCommand(Command):
    def __init__(self) -> None:
        super().__init__(
            "p",
            "Evaluate an arithmetic expression",
            aliases=("print",),
            usage="p EXPR",
            raw_args=True,
        )

    def run(self, ctx: DebuggerContext, argv: List[str]) -> int:
        text = " ".join(argv).strip()
        if not text:
            emit_error(ctx, message="p: expression required")
            return 1
        result = ctx.evaluate(text)
        if result.error is not None:
            emit_expr_error(ctx, text, result.error)
            return 1
        bits = ctx.settings.word_bits
        index = ctx.value_count
        emit_result(
            ctx,
            message=f"${index} = {format_word(result.value, bits)}",
            data={"expr": text, "value": result.value, "hex": format_hex(result.value, bits), "index": index},
        )
        return 0
