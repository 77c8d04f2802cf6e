"""
JSON Lines sink.

Writes one JSON object per row. Column order is preserved as given by the
logger (identifying columns first, then properties in watch order).
"""

from __future__ import annotations
import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from .base import Sink

logger = logging.getLogger(__name__)


@dataclass
class JSONLSink(Sink):
    """
    Args:
        path: output file path (creates parents).
        flush_every: flush after N writes (default 1 = always).
    """
    path: str
    flush_every: int = 1

    def __post_init__(self):
        if self.flush_every < 1:
            raise ValueError("flush_every must be >= 1.")
        p = Path(self.path)
        p.parent.mkdir(parents=True, exist_ok=True)
        self._fp = open(p, "a", encoding="utf-8")
        self._count = 0
        logger.debug("opened %s", p)

    def write(self, row: Dict[str, Any]):
        if not isinstance(row, dict):
            raise ValueError("row must be a dict.")
        if self._fp.closed:
            return

        self._fp.write(json.dumps(row) + "\n")
        self._count += 1

        if self._count % self.flush_every == 0:
            self.flush()

    def flush(self):
        if self._fp.closed:
            return
        self._fp.flush()
        os.fsync(self._fp.fileno())

    def close(self):
        if self._fp.closed:
            return
        try:
            self.flush()
        finally:
            self._fp.close()
            logger.debug("closed %s", self.path)
