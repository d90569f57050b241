"""prompt_toolkit completer for sdb."""

from __future__ import annotations

import shlex
from typing import Dict, Iterable, List, Sequence

from prompt_toolkit.completion import CompleteEvent, Completer, Completion, PathCompleter
from prompt_toolkit.document import Document

from .commands import CommandRegistry
from .context import DebuggerContext

# Option words offered once the command name is complete.
COMMAND_FLAGS: Dict[str, Sequence[str]] = {
    "check": ("--verbose", "--fail-fast"),
    "alias": ("--remove", "--clear"),
    "history": ("--clear",),
}


def _split_words(text: str) -> List[str]:
    """Split the text before the cursor; a trailing blank starts an empty word."""
    if not text:
        return []
    try:
        words = shlex.split(text)
    except ValueError:
        words = text.split()
    if text[-1].isspace():
        words.append("")
    return words


def _matching(candidates: Iterable[str], prefix: str) -> List[str]:
    needle = prefix.lower()
    return sorted({c for c in candidates if c.lower().startswith(needle)})


class DebuggerCompleter(Completer):
    """Completes command names, ``help`` topics, option flags and ``check`` paths.

    Expression arguments of ``p`` are left alone.
    """

    def __init__(self, ctx: DebuggerContext, registry: CommandRegistry) -> None:
        self.ctx = ctx
        self.registry = registry
        self._path = PathCompleter(expanduser=True)

    def get_completions(self, document: Document, complete_event: CompleteEvent) -> Iterable[Completion]:
        words = _split_words(document.text_before_cursor)
        prefix = words[-1] if words else ""
        if len(words) <= 1:
            yield from self._words(self._command_names(), prefix)
            return
        command = self.ctx.resolve_alias(words[0])
        if prefix.startswith("-"):
            yield from self._words(COMMAND_FLAGS.get(command, ()), prefix)
        elif command == "help" and len(words) == 2:
            yield from self._words(self._command_names(), prefix)
        elif command == "check":
            # PathCompleter looks at the whole document; hand it the last word only.
            word = Document(prefix, cursor_position=len(prefix))
            yield from self._path.get_completions(word, complete_event)

    def _words(self, candidates: Iterable[str], prefix: str) -> Iterable[Completion]:
        for entry in _matching(candidates, prefix):
            yield Completion(entry, start_position=-len(prefix))

    def _command_names(self) -> List[str]:
        return self.registry.names() + list(self.ctx.aliases)
