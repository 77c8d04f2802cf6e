"""
Logger and Watcher base classes.

Lifecycle:
    created -> attach_suite -> attach_problem -> active -> (reset -> active)* -> closed

call(info) ORs the triggers and forwards to log(info) at most once.
After close() every method is a silent no-op, so teardown order does not
matter.
"""

from __future__ import annotations
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from evalwatch.core.config import WatchConfig
from evalwatch.core.cursor import Cursor
from evalwatch.core.info import Info, ProblemMeta
from .properties import BoundProperty, Property
from .triggers import Trigger, any_fires

logger = logging.getLogger(__name__)

DEFAULT_SUITE = "unknown_suite"


class LifecycleError(RuntimeError):
    """Logger used out of order, e.g. call() before attach_problem()."""


class Logger:
    """
    Base class for all loggers.

    Args:
        triggers: when to log (ORed).
        config: per-logger WatchConfig.
    """

    def __init__(self, triggers: Iterable[Trigger] = (), config: Optional[WatchConfig] = None):
        self.triggers: List[Trigger] = list(triggers)
        self.config = config or WatchConfig()
        self.suite: str = DEFAULT_SUITE
        self.problem: Optional[ProblemMeta] = None
        self._cursor: Optional[Cursor] = None
        self._run_counts: Dict[Tuple, int] = {}
        self._closed = False

    def _emit(self, level: int, msg: str, *args):
        if self.config.enabled_for(level):
            logger.log(level, msg, *args)

    def _ignored(self, method: str) -> bool:
        if self._closed:
            self._emit(logging.DEBUG, "%s.%s() after close() ignored", type(self).__name__, method)
        return self._closed

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def cursor(self) -> Cursor:
        """Cursor of the current run (without evaluation)."""
        if self._cursor is None:
            raise LifecycleError(f"{type(self).__name__}: no problem attached.")
        return self._cursor

    def add_trigger(self, trigger: Trigger):
        if self._ignored("add_trigger"):
            return
        self.triggers.append(trigger)

    def attach_suite(self, suite_name: str):
        """Set the suite. With a problem attached, this opens a new run under it."""
        if self._ignored("attach_suite"):
            return
        changed = str(suite_name) != self.suite
        self.suite = str(suite_name)
        if changed and self.problem is not None:
            self._start_run()

    def attach_problem(self, problem: ProblemMeta, run: Optional[int] = None):
        """
        Bind a problem and open a run on it.

        run: explicit run id (e.g. assigned by a driver handing out runs to
        workers); by default runs are numbered 1, 2, ... per problem instance.
        """
        if self._ignored("attach_problem"):
            return
        if run is not None and run < 1:
            raise ValueError("run must be >= 1.")
        self.problem = problem
        self._start_run(run)

    def reset(self):
        """Re-arm triggers and open a new run on the same problem."""
        if self._ignored("reset"):
            return
        if self.problem is None:
            for t in self.triggers:
                t.reset()
            return
        self._start_run()

    def _start_run(self, run: Optional[int] = None):
        for t in self.triggers:
            t.reset(self.problem)
        p = self.problem
        key = (self.suite, p.problem_id, p.dimension, p.instance)
        if run is None:
            run = self._run_counts.get(key, 0) + 1
        self._run_counts[key] = max(run, self._run_counts.get(key, 0))
        self._cursor = Cursor(*key, run=run)
        self._emit(logging.INFO, "%s: run %d on %s", type(self).__name__, run, self._cursor.group())
        self.on_run_start(self._cursor)

    def on_run_start(self, cursor: Cursor):
        """Hook for subclasses, called whenever a new run opens."""

    def call(self, info: Info):
        if self._ignored("call"):
            return
        if self.problem is None:
            raise LifecycleError(f"{type(self).__name__}.call() before attach_problem().")
        if any_fires(self.triggers, info):
            self.log(info)

    def log(self, info: Info):
        raise NotImplementedError

    def close(self):
        if self._closed:
            return
        try:
            self.on_close()
        finally:
            self._closed = True

    def on_close(self):
        """Hook for subclasses: flush and release resources."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


class Watcher(Logger):
    """Logger that samples a list of watched properties."""

    def __init__(
        self,
        triggers: Iterable[Trigger] = (),
        properties: Iterable[Property] = (),
        config: Optional[WatchConfig] = None,
    ):
        super().__init__(triggers, config)
        self.properties: List[Property] = []
        for p in properties:
            self.watch(p)

    def watch(self, prop: Union[Property, Any], attributes: Union[str, Sequence[str], None] = None):
        """
        Register a property.

        watch(property)                   -> a Property instance
        watch(container, "attr")          -> BoundProperty on container.attr
        watch(container, ["a", "b"])      -> one BoundProperty per attribute
        """
        if self._ignored("watch"):
            return
        if attributes is None:
            if not isinstance(prop, Property):
                raise TypeError("watch() expects a Property or (container, attribute).")
            self._add(prop)
            return
        if isinstance(attributes, str):
            attributes = [attributes]
        for attr in attributes:
            self._add(BoundProperty.from_attribute(prop, attr))

    def _add(self, prop: Property):
        if any(p.name == prop.name for p in self.properties):
            raise ValueError(f"property {prop.name!r} is already watched.")
        self.properties.append(prop)

    def sample(self, info: Info) -> Dict[str, Optional[float]]:
        """Evaluate every watched property, in watch order."""
        return {p.name: p(info) for p in self.properties}
