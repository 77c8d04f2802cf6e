"""
Combine: fan-out over several loggers.

Every member sees every broadcast, in list order. If a member raises, the
remaining members are still called and the first error is re-raised at the
end.
"""

from __future__ import annotations
import logging
from typing import Iterable, List, Optional, Union

from evalwatch.core.config import WatchConfig
from evalwatch.core.info import Info, ProblemMeta
from .base import Logger


class Combine(Logger):
    def __init__(self, loggers: Union[Logger, Iterable[Logger]] = (), config: Optional[WatchConfig] = None):
        super().__init__((), config)
        if isinstance(loggers, Logger):
            loggers = [loggers]
        self.loggers: List[Logger] = list(loggers)

    def append(self, member: Logger):
        self.loggers.append(member)

    def _broadcast(self, method: str, *args):
        first: Optional[BaseException] = None
        for member in self.loggers:
            try:
                getattr(member, method)(*args)
            except Exception as exc:
                self._emit(logging.WARNING, "%s.%s() failed: %s", type(member).__name__, method, exc)
                if first is None:
                    first = exc
        if first is not None:
            raise first

    def attach_suite(self, suite_name: str):
        if self._ignored("attach_suite"):
            return
        self.suite = str(suite_name)
        self._broadcast("attach_suite", suite_name)

    def attach_problem(self, problem: ProblemMeta, run: Optional[int] = None):
        if self._ignored("attach_problem"):
            return
        self.problem = problem
        self._broadcast("attach_problem", problem, run)

    def call(self, info: Info):
        if self._ignored("call"):
            return
        self._broadcast("call", info)

    def log(self, info: Info):
        if self._ignored("log"):
            return
        self._broadcast("log", info)

    def reset(self):
        if self._ignored("reset"):
            return
        self._broadcast("reset")

    def on_close(self):
        self._broadcast("close")

    def __repr__(self):
        return f"<Combine {[type(m).__name__ for m in self.loggers]}>"
