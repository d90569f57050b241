"""Command registry for sdb."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from .alias import AliasCommand
from .base import Command
from .check import CheckCommand
from .exit import ExitCommand
from .help import HelpCommand
from .history import HistoryCommand
from .print_expr import PrintCommand
from ..context import DebuggerContext
from ..output import emit_error
from ..parser import CommandSyntaxError, split_command, split_head

LOGGER = logging.getLogger("sdb.commands")


class CommandRegistry:
    """Stores the known commands and dispatches command lines."""

    def __init__(self) -> None:
        self._commands: Dict[str, Command] = {}
        self._ordered: List[Command] = []

    def register(self, command: Command) -> None:
        self._ordered.append(command)
        self._commands[command.name] = command
        for alias in command.aliases:
            self._commands[alias] = command

    def get(self, name: str) -> Optional[Command]:
        return self._commands.get(name)

    def list_commands(self) -> Iterable[Command]:
        return self._ordered

    def names(self) -> List[str]:
        return sorted(self._commands)

    def dispatch(self, ctx: DebuggerContext, line: str) -> int:
        """Run one command line; returns the command's exit code.

        Blank lines are a no-op.  ``SystemExit`` from ``exit`` propagates.
        """
        cmd_name, rest = split_head(line)
        if not cmd_name:
            return 0
        cmd_name = ctx.resolve_alias(cmd_name)
        command = self.get(cmd_name)
        if not command:
            emit_error(ctx, message=f"Unknown command: {cmd_name}")
            return 1
        if command.raw_args:
            argv = [rest] if rest else []
        else:
            try:
                argv = split_command(rest)
            except CommandSyntaxError as exc:
                emit_error(ctx, message=f"Parse error: {exc}")
                return 1
        try:
            return command.run(ctx, argv)
        except SystemExit:
            raise
        except Exception as exc:  # pragma: no cover - defensive logging
            LOGGER.exception("command failed")
            emit_error(ctx, message=f"Command '{cmd_name}' failed: {exc}")
            return 1


def build_registry() -> CommandRegistry:
    registry = CommandRegistry()
    commands = [
        HelpCommand(),
        PrintCommand(),
        CheckCommand(),
        AliasCommand(),
        HistoryCommand(),
        ExitCommand(),
    ]
    for command in commands:
        registry.register(command)
        bind = getattr(command, "bind", None)
        if callable(bind):
            bind(registry)
    return registry


__all__ = ["Command", "CommandRegistry", "build_registry"]
