"""
evalwatch: instrumentation for repeated stochastic optimization runs.

- core: Info snapshots, problem metadata, cursors, config
- logger: triggers, properties, Store, FlatFile, Combine
- attainment: scales, EAH, EAF
- sinks: row destinations for FlatFile (JSONL, delimited text, memory)
"""

from .core import Info, OptimizationType, ProblemMeta, Cursor, WatchConfig, load_config
from .logger import Logger, Watcher, LifecycleError, Store, Combine, FlatFile
from .attainment import EAH, EAF

__version__ = "0.1.0"
__all__ = [
    "Info",
    "OptimizationType",
    "ProblemMeta",
    "Cursor",
    "WatchConfig",
    "load_config",
    "Logger",
    "Watcher",
    "LifecycleError",
    "Store",
    "Combine",
    "FlatFile",
    "EAH",
    "EAF",
]
