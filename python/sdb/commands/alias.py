"""``alias`` command: short names for shell commands."""

from __future__ import annotations

import argparse
from typing import TYPE_CHECKING, List, Optional

from .base import Command
from ..context import DebuggerContext
from ..output import emit_error, emit_result

if TYPE_CHECKING:  # pragma: no cover
    from . import CommandRegistry


class AliasCommand(Command):
    """Define, show, remove or list aliases.

    Targets must name a registered command and an alias may not shadow one,
    so ``p`` always means ``p``.
    """

    def __init__(self) -> None:
        super().__init__("alias", "Define or list command aliases", usage="alias [NAME [COMMAND]] [--remove] [--clear]")
        parser = argparse.ArgumentParser(prog="alias", add_help=False)
        parser.add_argument("name", nargs="?")
        parser.add_argument("command", nargs="?")
        parser.add_argument("--remove", action="store_true")
        parser.add_argument("--clear", action="store_true")
        self._parser = parser
        self._registry: Optional[CommandRegistry] = None

    def bind(self, registry: "CommandRegistry") -> None:
        self._registry = registry

    def run(self, ctx: DebuggerContext, argv: List[str]) -> int:
        try:
            args = self._parser.parse_args(argv)
        except SystemExit:
            return 1
        if args.clear:
            ctx.aliases.clear()
            emit_result(ctx, message="Aliases cleared", data={"aliases": {}})
            return 0
        if not args.name:
            return self._list(ctx)
        if args.remove:
            if ctx.aliases.pop(args.name, None) is None:
                emit_error(ctx, message=f"alias {args.name} is not defined")
                return 1
            emit_result(ctx, message=f"{args.name} removed", data={"aliases": ctx.list_aliases()})
            return 0
        if not args.command:
            target = ctx.aliases.get(args.name)
            if target is None:
                emit_error(ctx, message=f"alias {args.name} is not defined")
                return 1
            emit_result(ctx, message=f"{args.name} -> {target}", data={"name": args.name, "command": target})
            return 0
        return self._define(ctx, args.name, args.command)

    def _define(self, ctx: DebuggerContext, name: str, target: str) -> int:
        registry = self._registry
        if registry is not None:
            if registry.get(name) is not None:
                emit_error(ctx, message=f"cannot alias {name}: it is a command")
                return 1
            if registry.get(ctx.resolve_alias(target)) is None:
                emit_error(ctx, message=f"cannot alias {name}: unknown command {target}")
                return 1
        target = ctx.resolve_alias(target)
        ctx.set_alias(name, target)
        emit_result(ctx, message=f"{name} -> {target}", data={"aliases": ctx.list_aliases()})
        return 0

    def _list(self, ctx: DebuggerContext) -> int:
        aliases = ctx.list_aliases()
        if ctx.json_output:
            emit_result(ctx, message="aliases", data={"aliases": aliases})
        elif not aliases:
            print("No aliases defined")
        else:
            width = max(len(name) for name in aliases)
            for name, target in sorted(aliases.items()):
                print(f"  {name:<{width}}  {target}")
        return 0
