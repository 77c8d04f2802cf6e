"""
EAF: Empirical Attainment Function.

Keeps the exact (quality, time) improvement points of every run, grouped by
(suite, problem, dimension, instance). Memory grows with the number of
improvements, not with the number of evaluations.
"""

from __future__ import annotations
import threading
from typing import Dict, Iterable, List, NamedTuple, Optional

from evalwatch.core.config import WatchConfig
from evalwatch.core.cursor import Cursor
from evalwatch.core.info import Info, OptimizationType
from evalwatch.logger.base import Logger
from evalwatch.logger.triggers import OnImprovement, Trigger


class Point(NamedTuple):
    quality: float
    time: int


class RunPoint(NamedTuple):
    quality: float
    time: int
    run: int


class EAF(Logger):
    def __init__(self, triggers: Optional[Iterable[Trigger]] = None, config: Optional[WatchConfig] = None):
        if triggers is None:
            triggers = [OnImprovement()]
        super().__init__(triggers, config)
        self._data: Dict[Cursor, List[RunPoint]] = {}
        self._directions: Dict[Cursor, OptimizationType] = {}
        self._lock = threading.Lock()

    def log(self, info: Info):
        self.add(self.cursor, info.transformed_y_best, info.evaluation_count, self.problem.optimization_type)

    def add(
        self,
        run: Cursor,
        quality: float,
        time: int,
        direction: OptimizationType = OptimizationType.MIN,
    ):
        """Record an improvement point for the run named by `run` (run field required)."""
        if run.run is None:
            raise ValueError(f"add() needs a cursor with a run, got {run!r}")
        point = RunPoint(float(quality), int(time), run.run)
        group = run.group()
        with self._lock:
            self._data.setdefault(group, []).append(point)
            self._directions[group] = direction

    def data(self, cursor: Optional[Cursor] = None):
        """
        Without a cursor: copy of the whole mapping group -> RunPoints.
        With a cursor: the group's RunPoints ordered by (run, time); if the
        cursor names a run, only that run's points.
        """
        with self._lock:
            if cursor is None:
                return {k: sorted(v, key=_order) for k, v in self._data.items()}
            points = list(self._data.get(cursor.group(), []))
        if cursor.run is not None:
            points = [p for p in points if p.run == cursor.run]
        return sorted(points, key=_order)

    def at(self, suite: str, problem_id: int, dimension: int, instance: int, run: int) -> List[RunPoint]:
        return self.data(Cursor(suite, problem_id, dimension, instance, run))

    def attainment(self, cursor: Cursor, quality: float, time: int) -> float:
        """
        Fraction of the group's runs whose best value was at least as good as
        `quality` after at most `time` evaluations.
        """
        points = self.data(cursor.group())
        runs = {p.run for p in points}
        if not runs:
            return 0.0
        with self._lock:
            direction = self._directions[cursor.group()]
        hit = {
            p.run for p in points
            if p.time <= time and not direction.is_better(quality, p.quality)
        }
        return len(hit) / len(runs)

    def clear(self):
        with self._lock:
            self._data.clear()
            self._directions.clear()

    def __repr__(self):
        return f"<EAF groups={len(self._data)}>"


def _order(p: RunPoint):
    return (p.run, p.time)
