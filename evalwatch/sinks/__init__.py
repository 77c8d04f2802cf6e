"""
Row sinks for FlatFile loggers.
"""

from .base import Sink, MemorySink
from .jsonl import JSONLSink
from .table import TableSink

__all__ = ["Sink", "MemorySink", "JSONLSink", "TableSink"]
