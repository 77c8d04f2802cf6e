"""
Delimited text sink (tab separated by default).

The header is taken from the first row's columns. With repeat_header it is
written again at the start of every run, prefixed by the comment marker
after the first one so readers can split runs.
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Union

from .base import Sink

logger = logging.getLogger(__name__)


class TableSink(Sink):
    formatted = True

    def __init__(
        self,
        path: Union[str, Path],
        separator: str = "\t",
        comment: str = "#",
        end_of_line: str = "\n",
        repeat_header: bool = False,
    ):
        if not separator:
            raise ValueError("separator must be non-empty.")
        self.path = Path(path)
        self.separator = separator
        self.comment = comment
        self.end_of_line = end_of_line
        self.repeat_header = repeat_header
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._fp = open(self.path, "a", encoding="utf-8")
        self._columns: Optional[Sequence[str]] = None
        self._header_due = True
        logger.debug("opened %s", self.path)

    def begin_run(self):
        if self.repeat_header and self._columns is not None:
            self._header_due = True

    def write(self, row: Dict[str, Any]):
        if self._fp.closed:
            return
        if self._columns is None:
            self._columns = list(row)
        elif list(row) != list(self._columns):
            raise ValueError(f"row columns {list(row)} do not match header {list(self._columns)}")
        if self._header_due:
            self._write_header()
        self._fp.write(self.separator.join(str(row[c]) for c in self._columns) + self.end_of_line)

    def _write_header(self):
        line = self.separator.join(self._columns)
        if self._fp.tell() > 0:
            line = self.comment + " " + line if self.repeat_header else None
        if line is not None:
            self._fp.write(line + self.end_of_line)
        self._header_due = False

    def flush(self):
        if not self._fp.closed:
            self._fp.flush()

    def close(self):
        if self._fp.closed:
            return
        try:
            self._fp.flush()
        finally:
            self._fp.close()
            logger.debug("closed %s", self.path)

    def __repr__(self):
        return f"<TableSink {self.path}>"
