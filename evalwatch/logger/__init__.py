"""
Loggers: trigger/property dispatch and the in-memory and flat-file watchers.
"""

from .base import Logger, Watcher, LifecycleError
from .triggers import Trigger, Always, OnImprovement, At, Each, During, ALWAYS
from .properties import (
    Property,
    Evaluations,
    RawYBest,
    CurrentY,
    TransformedY,
    TransformedYBest,
    BoundProperty,
    EVALUATIONS,
    RAW_Y_BEST,
    CURRENT_Y,
    TRANSFORMED_Y,
    TRANSFORMED_Y_BEST,
)
from .store import Store
from .combine import Combine
from .flatfile import FlatFile, COMMON_HEADERS

__all__ = [
    "Logger",
    "Watcher",
    "LifecycleError",
    "Trigger",
    "Always",
    "OnImprovement",
    "At",
    "Each",
    "During",
    "ALWAYS",
    "Property",
    "Evaluations",
    "RawYBest",
    "CurrentY",
    "TransformedY",
    "TransformedYBest",
    "BoundProperty",
    "EVALUATIONS",
    "RAW_Y_BEST",
    "CURRENT_Y",
    "TRANSFORMED_Y",
    "TRANSFORMED_Y_BEST",
    "Store",
    "Combine",
    "FlatFile",
    "COMMON_HEADERS",
]
