"""
Random search on ShiftedSphere, instrumented with evalwatch.

Each run samples `budget` points uniformly in [-5, 5]^d. One Combine fans
the Info stream out to:
- Store (OnImprovement, evaluations + transformed_y)
- EAH (log10 error x linear budget)
- EAF (improvement points)
- FlatFile (every 10th evaluation, optional sink)

Matched budget: same number of evaluations for every run.
"""

from __future__ import annotations
from typing import Iterable, Optional

import numpy as np

from benches.envs.shifted_sphere import ShiftedSphere
from evalwatch.attainment import EAF, EAH, LinearScale, Log10Scale
from evalwatch.logger import (
    EVALUATIONS,
    TRANSFORMED_Y,
    TRANSFORMED_Y_BEST,
    Combine,
    Each,
    FlatFile,
    OnImprovement,
    Store,
)
from evalwatch.sinks.base import Sink


def run_random_search(
    dimensions: Iterable[int] = (2, 5),
    instances: Iterable[int] = (1, 2),
    runs: int = 5,
    budget: int = 200,
    seed: int = 0,
    sink: Optional[Sink] = None,
):
    rng = np.random.default_rng(seed)

    store = Store([OnImprovement()], [EVALUATIONS, TRANSFORMED_Y])
    eah = EAH(Log10Scale(1e-2, 1e2, 8), LinearScale(0, budget, 10))
    eaf = EAF()
    members = [store, eah, eaf]
    if sink is not None:
        members.append(FlatFile([Each(10)], [EVALUATIONS, TRANSFORMED_Y_BEST], sink))

    with Combine(members) as logger:
        logger.attach_suite("random_search_bench")
        for d in dimensions:
            for inst in instances:
                problem = ShiftedSphere(dimension=d, instance=inst)
                logger.attach_problem(problem.meta)
                for r in range(runs):
                    if r > 0:
                        logger.reset()
                    problem.reset()
                    for _ in range(budget):
                        x = rng.uniform(-5.0, 5.0, size=d)
                        logger.call(problem(x))

    return {"store": store, "eah": eah, "eaf": eaf}


def main():
    out = run_random_search()
    eah = out["eah"]
    print("Runs recorded:", eah.runs)
    print("Fraction attained at loosest error, full budget:", eah.fraction(eah.size[0] - 1, eah.size[1] - 1))


if __name__ == "__main__":
    main()
