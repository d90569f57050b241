"""Command base classes for sdb."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

from ..context import DebuggerContext


@dataclass
class Command:
    """Abstract command description.

    Commands with ``raw_args`` receive the argument text untouched as a single
    element instead of shlex-split tokens; expression commands use this so the
    evaluator sees exactly what was typed.
    """

    name: str
    description: str
    aliases: Sequence[str] = field(default_factory=tuple)
    usage: str = ""
    raw_args: bool = False

    def run(self, ctx: DebuggerContext, argv: List[str]) -> int:
        raise NotImplementedError("Command must implement run()")

    def format_help(self) -> str:
        names = ", ".join([self.name, *self.aliases])
        line = f"{names:<16} {self.description}"
        if self.usage:
            line += f"\n{'':<16} usage: {self.usage}"
        return line
