"""
Properties extract one optional float from an Info (or from an external
object) each time a logger fires.

A missing value is a soft miss: the property returns None and the sink
renders its no-value marker.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from evalwatch.core.info import Info

logger = logging.getLogger(__name__)


@dataclass
class Property:
    """Base class for all properties."""
    name: str
    format: str = "{:.10g}"

    def evaluate(self, info: Info) -> Optional[float]:
        raise NotImplementedError

    def __call__(self, info: Info) -> Optional[float]:
        return self.evaluate(info)

    def to_string(self, value: Optional[float], no_value: str = "None") -> str:
        if value is None:
            return no_value
        return self.format.format(value)

    def call_to_string(self, info: Info, no_value: str = "None") -> str:
        return self.to_string(self.evaluate(info), no_value)


@dataclass
class Evaluations(Property):
    name: str = "evaluations"
    format: str = "{:d}"

    def evaluate(self, info: Info) -> Optional[float]:
        return int(info.evaluation_count)


@dataclass
class RawYBest(Property):
    name: str = "raw_y_best"

    def evaluate(self, info: Info) -> Optional[float]:
        return float(info.raw_y_best)


@dataclass
class CurrentY(Property):
    name: str = "raw_y"

    def evaluate(self, info: Info) -> Optional[float]:
        # multi-objective raw_y has no single scalar
        return as_float(info.raw_y)


@dataclass
class TransformedY(Property):
    name: str = "transformed_y"

    def evaluate(self, info: Info) -> Optional[float]:
        return float(info.transformed_y)


@dataclass
class TransformedYBest(Property):
    name: str = "transformed_y_best"

    def evaluate(self, info: Info) -> Optional[float]:
        return float(info.transformed_y_best)


EVALUATIONS = Evaluations()
RAW_Y_BEST = RawYBest()
CURRENT_Y = CurrentY()
TRANSFORMED_Y = TransformedY()
TRANSFORMED_Y_BEST = TransformedYBest()


def as_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


@dataclass
class BoundProperty(Property):
    """
    Property backed by a callback resolved once, at watch time.

    The callback may return None (or a non-numeric value) on any call;
    that is a soft miss, never an error.
    """
    getter: Optional[Callable[[], Any]] = None

    def __post_init__(self):
        if self.getter is None:
            raise ValueError("BoundProperty needs a getter.")

    def evaluate(self, info: Info) -> Optional[float]:
        value = as_float(self.getter())
        if value is None:
            logger.debug("no value for bound property %r", self.name)
        return value

    @classmethod
    def from_attribute(cls, container: Any, attribute: str, name: Optional[str] = None) -> "BoundProperty":
        """Track `container.<attribute>`; an absent attribute is a soft miss."""
        return cls(name=name or attribute, getter=lambda: getattr(container, attribute, None))
