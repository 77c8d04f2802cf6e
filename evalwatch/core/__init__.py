"""
Core value types shared by every logger.
"""

from .info import Info, OptimizationType, ProblemMeta
from .cursor import Cursor
from .config import WatchConfig, load_config

__all__ = ["Info", "OptimizationType", "ProblemMeta", "Cursor", "WatchConfig", "load_config"]
