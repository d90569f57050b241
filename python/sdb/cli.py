"""sdb CLI entry point."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List

from .commands import CommandRegistry, build_registry
from .context import DebuggerContext
from .expr import EvalSettings, init_lexer
from .history import HistoryStore
from .repl import DebuggerREPL

LOG = logging.getLogger("sdb.cli")


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="sdb expression debugger")
    parser.add_argument("--json", action="store_true", help="Emit JSON output when supported")
    parser.add_argument(
        "--log-level",
        default=os.environ.get("SDB_LOG", "WARNING"),
        help="Logging level (default WARNING, env SDB_LOG)",
    )
    parser.add_argument(
        "--word-bits",
        type=int,
        help="Machine word width in bits: 8, 16, 32 or 64 (default 32, env SDB_WORD_BITS)",
    )
    parser.add_argument(
        "--max-tokens",
        type=int,
        help="Token capacity per expression (default 512, env SDB_MAX_TOKENS)",
    )
    parser.add_argument(
        "-c",
        "--command",
        help="Execute a single command non-interactively (quote the command string)",
    )
    parser.add_argument("--script", type=Path, help="Execute commands from a file and exit")
    parser.add_argument(
        "--history",
        type=Path,
        default=Path.home() / ".sdb-history",
        help="Path to command history file",
    )
    parser.add_argument("--no-history", action="store_true", help="Do not read or write the history file")
    return parser


def main(argv: List[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)
    try:
        settings = EvalSettings.from_env(word_bits=args.word_bits, max_tokens=args.max_tokens)
    except ValueError as exc:
        parser.error(str(exc))
    init_lexer()
    ctx = DebuggerContext(settings=settings, json_output=args.json)
    registry = build_registry()
    try:
        if args.command:
            return _run_single_command(ctx, registry, args.command)
        if args.script:
            return _run_script(ctx, registry, str(args.script))
        if not args.no_history:
            ctx.history = HistoryStore(str(args.history))
        return DebuggerREPL(ctx, registry).run()
    except SystemExit as exc:
        return int(exc.code or 0)
    except KeyboardInterrupt:
        print()
        return 0


def _run_single_command(ctx: DebuggerContext, registry: CommandRegistry, command_line: str) -> int:
    return registry.dispatch(ctx, command_line)


def _run_script(ctx: DebuggerContext, registry: CommandRegistry, path: str) -> int:
    """Run each non-comment line of ``path``; stops at the first failing command."""
    try:
        lines = Path(path).read_text(encoding="utf-8").splitlines()
    except OSError as exc:
        print(f"error: cannot read script {path}: {exc}")
        return 2
    for lineno, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        LOG.debug("script %s:%d: %s", path, lineno, line)
        rc = registry.dispatch(ctx, line)
        if rc != 0:
            print(f"error: {path}:{lineno}: '{line}' exited with {rc}")
            return rc
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
