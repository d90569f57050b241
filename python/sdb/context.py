"""Debugger context shared by sdb commands."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

from .expr import EvalSettings, ExprResult, evaluate_expression
from .history import HistoryStore

LOGGER = logging.getLogger("sdb.context")


@dataclass
class DebuggerContext:
    """Holds shared CLI debugger state."""

    settings: EvalSettings = field(default_factory=EvalSettings)
    json_output: bool = False
    aliases: Dict[str, str] = field(default_factory=dict)
    history: Optional[HistoryStore] = None
    _value_count: int = field(default=0, init=False, repr=False)

    def evaluate(self, text: str) -> ExprResult:
        """Evaluate ``text`` with the context's word width and limits."""
        result = evaluate_expression(text, settings=self.settings)
        if result.ok:
            self._value_count += 1
        else:
            LOGGER.debug("expression %r rejected: %s", text, result.reason)
        return result

    @property
    def value_count(self) -> int:
        return self._value_count

    def resolve_alias(self, name: str) -> str:
        return self.aliases.get(name, name)

    def set_alias(self, alias: str, command: str) -> None:
        if alias == command:
            self.aliases.pop(alias, None)
            return
        self.aliases[alias] = command

    def list_aliases(self) -> Dict[str, str]:
        return dict(self.aliases)
