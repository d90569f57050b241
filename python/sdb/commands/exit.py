"""Exit command."""

from __future__ import annotations

from typing import List

from .base import Command
from ..context import DebuggerContext
from ..output import emit_error


class ExitCommand(Command):
    def __init__(self) -> None:
        super().__init__("exit", "Exit the debugger", aliases=("quit", "q"), usage="exit [CODE]")

    def run(self, ctx: DebuggerContext, argv: List[str]) -> int:
        code = 0
        if argv:
            try:
                code = int(argv[0], 0)
            except ValueError:
                emit_error(ctx, message=f"invalid exit code {argv[0]!r}")
                return 1
        raise SystemExit(code)
