"""
Cursor: hierarchical address of a logged data series.

(suite, problem_id, dimension, instance, run, evaluation)

Trailing fields may be left as None to address a whole subtree.
"""

from __future__ import annotations
from typing import NamedTuple, Optional, Tuple


class Cursor(NamedTuple):
    suite: str
    problem_id: Optional[int] = None
    dimension: Optional[int] = None
    instance: Optional[int] = None
    run: Optional[int] = None
    evaluation: Optional[int] = None

    def levels(self) -> Tuple:
        """
        The set fields, outermost first.

        Raises ValueError if a field is set after an unset one.
        """
        out = []
        for i, v in enumerate(self):
            if v is None:
                if any(w is not None for w in self[i + 1:]):
                    raise ValueError(f"cursor has a gap at field '{self._fields[i]}': {self!r}")
                break
            out.append(v)
        return tuple(out)

    def group(self) -> "Cursor":
        """Same cursor without run and evaluation."""
        return Cursor(self.suite, self.problem_id, self.dimension, self.instance)

    def at_evaluation(self, evaluation: int) -> "Cursor":
        return self._replace(evaluation=int(evaluation))
