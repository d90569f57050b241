"""Persistent command history for the sdb shell."""

from __future__ import annotations

import logging
from collections import deque
from pathlib import Path
from typing import Deque, Iterable, List, Optional

LOGGER = logging.getLogger("sdb.history")


class HistoryStore:
    """Command lines kept in memory and mirrored to a text file.

    At most ``limit`` entries are kept and an entry equal to the previous one is
    dropped.  I/O failures only log a warning; the in-memory history keeps
    working without the file.
    """

    def __init__(self, path: Optional[str], *, limit: int = 1000) -> None:
        self.limit = max(1, int(limit or 1))
        self.path = Path(path).expanduser() if path else None
        self._entries: Deque[str] = deque(maxlen=self.limit)
        if self.path is not None:
            self._entries.extend(self._read(self.path))

    def __len__(self) -> int:
        return len(self._entries)

    @staticmethod
    def _read(path: Path) -> List[str]:
        try:
            data = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except (OSError, UnicodeDecodeError) as exc:
            LOGGER.warning("cannot read history %s: %s", path, exc)
            return []
        return [line.strip() for line in data.splitlines() if line.strip()]

    def append(self, line: str) -> None:
        text = line.strip()
        if not text or (self._entries and self._entries[-1] == text):
            return
        self._entries.append(text)
        self._write()

    def extend(self, lines: Iterable[str]) -> None:
        for line in lines:
            self.append(line)

    def clear(self) -> None:
        self._entries.clear()
        self._write()

    def tail(self, count: int) -> List[str]:
        """Last ``count`` entries, oldest first."""
        if count <= 0:
            return []
        return list(self._entries)[-count:]

    def snapshot(self) -> List[str]:
        return list(self._entries)

    def _write(self) -> None:
        if self.path is None:
            return
        body = "".join(f"{entry}\n" for entry in self._entries)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(body, encoding="utf-8")
        except OSError as exc:
            LOGGER.warning("cannot write history %s: %s", self.path, exc)
