"""Tests for sdb history helpers."""

from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[2]
sys.path.append(str(REPO_ROOT / "python"))

from sdb.history import HistoryStore


def test_history_store_loads_existing_file(tmp_path):
    path = tmp_path / "history.txt"
    path.write_text("p 1\np 2\n", encoding="utf-8")
    store = HistoryStore(str(path), limit=5)
    assert store.snapshot() == ["p 1", "p 2"]
    store.append("p 3")
    assert store.snapshot()[-1] == "p 3"
    assert "p 3" in path.read_text(encoding="utf-8")


def test_history_store_limits_entries(tmp_path):
    path = tmp_path / "history.txt"
    store = HistoryStore(str(path), limit=3)
    for idx in range(5):
        store.append(f"p {idx}")
    assert store.snapshot() == ["p 2", "p 3", "p 4"]
    text = path.read_text(encoding="utf-8").strip().splitlines()
    assert text == ["p 2", "p 3", "p 4"]


def test_history_store_ignores_duplicate_adjacent(tmp_path):
    path = tmp_path / "history.txt"
    store = HistoryStore(str(path), limit=10)
    store.append("p 1+1")
    store.append("p 1+1")
    store.append("   ")
    assert store.snapshot() == ["p 1+1"]


def test_history_store_tail_and_clear(tmp_path):
    path = tmp_path / "nested" / "history.txt"
    store = HistoryStore(str(path))
    store.extend(["p 1", "p 2", "p 3"])
    assert store.tail(2) == ["p 2", "p 3"]
    assert store.tail(0) == []
    assert store.tail(10) == ["p 1", "p 2", "p 3"]
    store.clear()
    assert store.snapshot() == []
    assert path.read_text(encoding="utf-8") == ""


def test_history_store_survives_unwritable_path(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("", encoding="utf-8")
    store = HistoryStore(str(blocker / "history.txt"))
    store.append("p 1")
    assert store.snapshot() == ["p 1"]


def test_history_store_without_path_is_memory_only():
    store = HistoryStore(None, limit=2)
    store.extend(["a", "b", "c"])
    assert store.snapshot() == ["b", "c"]
