"""Help command."""

from __future__ import annotations

from typing import TYPE_CHECKING, List

from .base import Command
from ..context import DebuggerContext
from ..output import emit_error, emit_result

if TYPE_CHECKING:  # pragma: no cover
    from . import CommandRegistry


class HelpCommand(Command):
    def __init__(self) -> None:
        super().__init__("help", "Show available commands", aliases=("?",), usage="help [COMMAND]")
        self._registry: CommandRegistry | None = None

    def bind(self, registry: "CommandRegistry") -> None:
        self._registry = registry

    def run(self, ctx: DebuggerContext, argv: List[str]) -> int:
        registry = self._registry
        if not registry:
            return 1
        if argv:
            command = registry.get(ctx.resolve_alias(argv[0]))
            if command is None:
                emit_error(ctx, message=f"Unknown command: {argv[0]}")
                return 1
            commands = [command]
        else:
            commands = list(registry.list_commands())
        if ctx.json_output:
            entries = [
                {"name": cmd.name, "aliases": list(cmd.aliases), "description": cmd.description, "usage": cmd.usage}
                for cmd in commands
            ]
            emit_result(ctx, message="help", data={"commands": entries})
            return 0
        for command in commands:
            print(command.format_help())
        return 0
