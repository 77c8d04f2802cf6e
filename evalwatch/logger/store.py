"""
Store: in-memory retention of every logged row.

Layout:
    suite -> problem_id -> dimension -> instance -> run -> evaluation -> row

Rows are only ever appended, by log() or add(); clear() is the explicit reset.
add() takes its own cursor, so several per-run loggers can feed one shared
Store without going through its lifecycle.
"""

from __future__ import annotations
import copy
import threading
from typing import Any, Dict, Iterable, Optional

from evalwatch.core.config import WatchConfig
from evalwatch.core.cursor import Cursor
from evalwatch.core.info import Info
from .base import Watcher
from .properties import Property
from .triggers import Trigger


class Store(Watcher):
    def __init__(
        self,
        triggers: Iterable[Trigger] = (),
        properties: Iterable[Property] = (),
        config: Optional[WatchConfig] = None,
    ):
        super().__init__(triggers, properties, config)
        self._data: Dict[str, Any] = {}
        self._lock = threading.Lock()

    def log(self, info: Info):
        self.add(self.cursor.at_evaluation(info.evaluation_count), self.sample(info))

    def add(self, cursor: Cursor, row: Dict[str, Any]):
        """Append row under a full cursor (run and evaluation set)."""
        if len(cursor.levels()) != len(Cursor._fields):
            raise ValueError(f"add() needs a full cursor, got {cursor!r}")
        row = dict(row)
        with self._lock:
            node = self._data
            for key in cursor[:-1]:
                node = node.setdefault(key, {})
            node[cursor.evaluation] = row

    def data(self, cursor: Optional[Cursor] = None) -> Dict[Any, Any]:
        """
        Copy of the subtree addressed by cursor (everything if None).

        A full cursor (with evaluation) returns that single row.
        Raises KeyError for an unknown prefix.
        """
        with self._lock:
            node = self._data
            if cursor is not None:
                for key in cursor.levels():
                    if key not in node:
                        raise KeyError(f"nothing stored under {cursor!r}")
                    node = node[key]
            return copy.deepcopy(node)

    def at(self, suite: str, problem_id: int, dimension: int, instance: int, run: int, evaluation: int):
        return self.data(Cursor(suite, problem_id, dimension, instance, run, evaluation))

    def clear(self):
        with self._lock:
            self._data.clear()

    def __repr__(self):
        with self._lock:
            suites = ",".join(self._data)
        return f"<Store (suites: ({suites}),)>"
