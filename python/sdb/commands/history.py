"""History inspection command."""

from __future__ import annotations

import argparse
from typing import List

from .base import Command
from ..context import DebuggerContext
from ..output import emit_error, emit_result


class HistoryCommand(Command):
    def __init__(self) -> None:
        super().__init__("history", "Show or clear command history", usage="history [COUNT] [--clear]")
        parser = argparse.ArgumentParser(prog="history", add_help=False)
        parser.add_argument("count", nargs="?", type=int, default=20, help="Number of entries to show")
        parser.add_argument("--clear", action="store_true", help="Forget all recorded commands")
        self._parser = parser

    def run(self, ctx: DebuggerContext, argv: List[str]) -> int:
        try:
            args = self._parser.parse_args(argv)
        except SystemExit:
            return 1
        store = ctx.history
        if store is None:
            emit_error(ctx, message="history is not enabled")
            return 1
        if args.clear:
            store.clear()
            emit_result(ctx, message="History cleared", data={"entries": []})
            return 0
        entries = store.tail(args.count)
        if ctx.json_output:
            emit_result(ctx, message="history", data={"entries": entries})
            return 0
        offset = len(store) - len(entries)
        for idx, entry in enumerate(entries, start=offset + 1):
            print(f"{idx:5}  {entry}")
        return 0
