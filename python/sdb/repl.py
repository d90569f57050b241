"""Interactive REPL for sdb."""

from __future__ import annotations

import logging
import sys
from typing import Callable, List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.patch_stdout import patch_stdout

from .commands import CommandRegistry
from .completion import DebuggerCompleter
from .context import DebuggerContext

LOGGER = logging.getLogger("sdb.repl")

PROMPT = "(sdb) "


class DebuggerREPL:
    """prompt_toolkit REPL; reads plain lines when stdin is not a terminal."""

    def __init__(
        self,
        ctx: DebuggerContext,
        registry: CommandRegistry,
        *,
        interactive: Optional[bool] = None,
    ) -> None:
        self.ctx = ctx
        self.registry = registry
        self.interactive = sys.stdin.isatty() if interactive is None else interactive

    def run(self) -> int:
        LOGGER.debug("repl starting (interactive=%s)", self.interactive)
        if not self.interactive:
            return self._loop(input)
        history = InMemoryHistory()
        if self.ctx.history is not None:
            for entry in self.ctx.history.snapshot():
                history.append_string(entry)
        session: PromptSession[str] = PromptSession(
            PROMPT,
            history=history,
            completer=DebuggerCompleter(self.ctx, self.registry),
            complete_while_typing=True,
        )

        def read() -> str:
            with patch_stdout():
                return session.prompt()

        return self._loop(read)

    def _loop(self, read: Callable[[], str]) -> int:
        buffer: List[str] = []
        while True:
            try:
                line = read()
            except (EOFError, KeyboardInterrupt):
                if self.interactive:
                    print()
                return 0
            if self._handle_multiline(buffer, line):
                continue
            payload = " ".join(buffer) if buffer else line
            buffer.clear()
            self._record_history(payload)
            self.registry.dispatch(self.ctx, payload)

    def _handle_multiline(self, buffer: List[str], line: str) -> bool:
        stripped = line.rstrip()
        if stripped.endswith("\\"):
            buffer.append(stripped[:-1])
            return True
        if buffer:
            buffer.append(stripped)
        return False

    def _record_history(self, entry: str) -> None:
        stripped = entry.strip()
        if stripped and self.ctx.history is not None:
            self.ctx.history.append(stripped)
