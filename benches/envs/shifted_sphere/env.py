"""
ShiftedSphere problem.

- f(x) = sum((x - x_opt)^2) + y_opt
- x_opt drawn uniformly in [-4, 4]^d per instance, y_opt per instance.
- transformed_y is the precision f(x) - y_opt (the error, >= 0).

Every call returns the Info snapshot for that evaluation and tracks the
best-so-far values, so a logger can be fed directly.
"""

from __future__ import annotations
import numpy as np

from evalwatch.core.info import Info, OptimizationType, ProblemMeta


class ShiftedSphere:
    def __init__(self, dimension: int = 5, instance: int = 1, problem_id: int = 1):
        if dimension < 1:
            raise ValueError("dimension must be >= 1.")
        if instance < 1:
            raise ValueError("instance must be >= 1.")

        self.meta = ProblemMeta(
            problem_id=problem_id,
            name="ShiftedSphere",
            dimension=dimension,
            instance=instance,
            optimization_type=OptimizationType.MIN,
        )
        rng = np.random.default_rng(instance)
        self.x_opt = rng.uniform(-4.0, 4.0, size=dimension)
        self.y_opt = float(rng.uniform(-100.0, 100.0))
        self.reset()

    def reset(self):
        self.evaluations = 0
        self.raw_y_best = np.inf
        self.transformed_y_best = np.inf

    def __call__(self, x) -> Info:
        x = np.asarray(x, dtype=np.float64)
        if x.shape != self.x_opt.shape:
            raise ValueError("x shape must be (dimension,)")

        precision = float(np.sum((x - self.x_opt) ** 2))
        raw_y = precision + self.y_opt

        self.evaluations += 1
        improved = precision < self.transformed_y_best
        if improved:
            self.transformed_y_best = precision
            self.raw_y_best = raw_y

        return Info(
            evaluation_count=self.evaluations,
            raw_y=raw_y,
            transformed_y=precision,
            raw_y_best=self.raw_y_best,
            transformed_y_best=self.transformed_y_best,
            has_improved=improved,
            x=tuple(float(v) for v in x),
        )
