"""
Triggers decide whether a logger samples its properties for a given Info.

Variants:
- Always: every evaluation
- OnImprovement: strict improvement of transformed_y
- At: explicit evaluation counts
- Each: fixed interval, optional offset
- During: closed evaluation ranges

A logger ORs its triggers; one event is logged no matter how many fire.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional, Tuple

from evalwatch.core.info import Info, OptimizationType, ProblemMeta


class Trigger:
    """Base class for all triggers."""

    def fire(self, info: Info) -> bool:
        raise NotImplementedError

    def reset(self, problem: Optional[ProblemMeta] = None):
        """Clear internal state. Stateless triggers ignore this."""

    def __call__(self, info: Info) -> bool:
        return self.fire(info)


@dataclass
class Always(Trigger):
    def fire(self, info: Info) -> bool:
        return True


@dataclass
class OnImprovement(Trigger):
    """
    Fires on the first call and whenever transformed_y strictly improves
    on the best value seen since the last reset.
    """
    direction: OptimizationType = OptimizationType.MIN
    best: Optional[float] = None

    def fire(self, info: Info) -> bool:
        y = float(info.transformed_y)
        if self.best is None or self.direction.is_better(y, self.best):
            self.best = y
            return True
        return False

    def reset(self, problem: Optional[ProblemMeta] = None):
        self.best = None
        if problem is not None:
            self.direction = problem.optimization_type


@dataclass
class At(Trigger):
    time_points: FrozenSet[int] = frozenset()

    def __post_init__(self):
        self.time_points = frozenset(int(t) for t in self.time_points)
        if any(t < 0 for t in self.time_points):
            raise ValueError("time_points must be nonnegative.")

    def fire(self, info: Info) -> bool:
        return info.evaluation_count in self.time_points


@dataclass
class Each(Trigger):
    interval: int = 1
    starting_at: int = 0

    def __post_init__(self):
        if self.interval <= 0:
            raise ValueError("interval must be positive.")
        if self.starting_at < 0:
            raise ValueError("starting_at must be nonnegative.")

    def fire(self, info: Info) -> bool:
        n = info.evaluation_count
        return n >= self.starting_at and (n - self.starting_at) % self.interval == 0


@dataclass
class During(Trigger):
    """Fires inside any of the closed ranges [lo, hi]."""
    time_ranges: FrozenSet[Tuple[int, int]] = field(default_factory=frozenset)

    def __post_init__(self):
        ranges = set()
        for r in self.time_ranges:
            lo, hi = (int(v) for v in r)
            if lo > hi:
                raise ValueError(f"malformed range ({lo}, {hi}): lo must be <= hi.")
            ranges.add((lo, hi))
        self.time_ranges = frozenset(ranges)

    def fire(self, info: Info) -> bool:
        n = info.evaluation_count
        return any(lo <= n <= hi for lo, hi in self.time_ranges)


ALWAYS = Always()


def any_fires(triggers: Iterable[Trigger], info: Info) -> bool:
    """
    OR over triggers. Every trigger sees the Info, so stateful ones stay
    in sync even after an earlier trigger already fired.
    """
    fired = False
    for t in triggers:
        if t.fire(info):
            fired = True
    return fired
