"""
EAH: Empirical Attainment Histogram.

Streaming summary of how many runs attained error <= E within at most B
evaluations, on a grid given by two scales, without keeping raw samples.

Grid cell (e, t) counts runs whose best-so-far error fell in error bucket
<= e at an evaluation in bucket <= t. Attainment is monotone on both axes,
so one sample credits the staircase region e' >= eb, t' >= tb.

Per run we keep a frontier: for each error row, the smallest evaluation
bucket already credited. A sample only touches the part of the region
that improves on that frontier, so a run is never counted twice in a cell.
"""

from __future__ import annotations
import threading
from typing import Dict, Iterable, Optional, Tuple

import numpy as np

from evalwatch.core.config import WatchConfig
from evalwatch.core.cursor import Cursor
from evalwatch.core.info import Info
from evalwatch.logger.base import Logger
from evalwatch.logger.triggers import OnImprovement, Trigger
from .scale import LinearScale, Scale


class EAH(Logger):
    """
    Args:
        error_scale: scale over the error (transformed_y_best) axis.
        eval_scale: scale over the evaluation budget axis.
        triggers: defaults to a single OnImprovement.
    """

    def __init__(
        self,
        error_scale: Scale,
        eval_scale: Scale,
        triggers: Optional[Iterable[Trigger]] = None,
        config: Optional[WatchConfig] = None,
    ):
        if triggers is None:
            triggers = [OnImprovement()]
        super().__init__(triggers, config)
        self.error_range = error_scale
        self.eval_range = eval_scale
        self._grid = np.zeros((error_scale.size, eval_scale.size), dtype=np.int64)
        # run cursor -> per error row, smallest credited eval bucket (size = none yet)
        self._frontiers: Dict[Cursor, np.ndarray] = {}
        self._lock = threading.Lock()

    @classmethod
    def linear(
        cls,
        error_min: float,
        error_max: float,
        error_buckets: int,
        evals_min: int,
        evals_max: int,
        evals_buckets: int,
        **kwargs,
    ) -> "EAH":
        return cls(
            LinearScale(error_min, error_max, error_buckets),
            LinearScale(evals_min, evals_max, evals_buckets),
            **kwargs,
        )

    @property
    def size(self) -> Tuple[int, int]:
        return self._grid.shape

    @property
    def runs(self) -> int:
        """Number of distinct runs that contributed at least one sample."""
        with self._lock:
            return len(self._frontiers)

    @property
    def data(self) -> np.ndarray:
        with self._lock:
            return self._grid.copy()

    def at(self, error_bucket: int, eval_bucket: int) -> int:
        with self._lock:
            return int(self._grid[error_bucket, eval_bucket])

    def fraction(self, error_bucket: int, eval_bucket: int) -> float:
        """Attained-run count normalized by the number of runs (0.0 if none)."""
        with self._lock:
            n = len(self._frontiers)
            return float(self._grid[error_bucket, eval_bucket]) / n if n else 0.0

    def log(self, info: Info):
        self.add(self.cursor, info.transformed_y_best, info.evaluation_count)

    def add(self, run: Cursor, error: float, evaluations: int):
        """Credit run with having attained `error` after `evaluations`."""
        eb = self.error_range.index(error)
        tb = self.eval_range.index(evaluations)
        n_err, n_eval = self._grid.shape
        with self._lock:
            frontier = self._frontiers.get(run)
            if frontier is None:
                frontier = np.full(n_err, n_eval, dtype=np.int64)
                self._frontiers[run] = frontier
            for e in range(eb, n_err):
                prev = int(frontier[e])
                if prev <= tb:
                    # frontier is non-increasing in e, nothing left to credit
                    break
                self._grid[e, tb:prev] += 1
                frontier[e] = tb

    def clear(self):
        with self._lock:
            self._grid[:] = 0
            self._frontiers.clear()

    def __repr__(self):
        return f"<EAH {self.size}>"
