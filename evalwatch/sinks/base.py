"""
Sink interface: where FlatFile rows end up.

A row is an ordered dict column -> value (or the no-value marker).
"""

from __future__ import annotations
from typing import Any, Dict, List


class Sink:
    # text sinks get values rendered with each property's format
    formatted = False

    def write(self, row: Dict[str, Any]):
        raise NotImplementedError

    def begin_run(self):
        """Called by the logger whenever a new run opens."""

    def flush(self):
        pass

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


class MemorySink(Sink):
    """Keeps rows in a list."""

    def __init__(self):
        self.rows: List[Dict[str, Any]] = []
        self.runs = 0
        self.closed = False

    def write(self, row: Dict[str, Any]):
        self.rows.append(dict(row))

    def begin_run(self):
        self.runs += 1

    def close(self):
        self.closed = True
