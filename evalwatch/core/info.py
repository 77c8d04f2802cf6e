"""
Per-evaluation snapshot and problem metadata.

The run loop builds one Info per function evaluation and hands it to a
logger. Nothing in evalwatch mutates an Info after creation.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Sequence


class OptimizationType(Enum):
    MIN = "minimization"
    MAX = "maximization"

    def is_better(self, a: float, b: float) -> bool:
        """True if a is strictly better than b."""
        if self is OptimizationType.MAX:
            return a > b
        return a < b


@dataclass(frozen=True)
class Info:
    evaluation_count: int
    raw_y: Any
    transformed_y: float
    raw_y_best: float
    transformed_y_best: float
    has_improved: bool = False
    x: Optional[Sequence[float]] = None


@dataclass(frozen=True)
class ProblemMeta:
    """
    Identity of the problem a run is attached to.

    Args:
        problem_id: numeric id inside its suite.
        name: human readable problem name.
        dimension: search space dimension (>=1).
        instance: instance id.
        optimization_type: MIN or MAX.
    """
    problem_id: int
    name: str
    dimension: int
    instance: int = 1
    optimization_type: OptimizationType = OptimizationType.MIN

    def __post_init__(self):
        if self.dimension < 1:
            raise ValueError("dimension must be >= 1.")
