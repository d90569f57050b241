"""Command line splitting helpers for sdb."""

from __future__ import annotations

import shlex
from typing import List, Tuple


class CommandSyntaxError(ValueError):
    """Raised when a command line cannot be split (e.g. unbalanced quotes)."""


def split_head(line: str) -> Tuple[str, str]:
    """Return ``(command, rest)`` where ``rest`` is the untouched argument text."""
    stripped = line.strip()
    if not stripped:
        return "", ""
    parts = stripped.split(None, 1)
    return parts[0], parts[1] if len(parts) > 1 else ""


def split_command(line: str) -> List[str]:
    """Split argument text into argv tokens using shlex rules."""
    if not line:
        return []
    try:
        return shlex.split(line, comments=False, posix=True)
    except ValueError as exc:
        raise CommandSyntaxError(str(exc)) from exc


__all__ = ["CommandSyntaxError", "split_head", "split_command"]
