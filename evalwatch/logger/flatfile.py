"""
FlatFile: Watcher that writes one row per logged event to a Sink.

Row layout:
    identifying columns | experiment attributes | run attributes | properties | x0..x{d-1}

Experiment attributes are fixed values for the whole experiment
(algorithm_name, algorithm_info, hyperparameters). Run attributes are
numbers that may change between runs; those bound to a container are read
again each time a run opens. Attribute sets should be complete before the
first row is written, a table sink rejects a changed header.
"""

from __future__ import annotations
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Union

from evalwatch.core.config import WatchConfig
from evalwatch.core.cursor import Cursor
from evalwatch.core.info import Info
from evalwatch.sinks.base import Sink
from .base import Watcher
from .properties import BoundProperty, Property, as_float
from .triggers import Trigger

COMMON_HEADERS = (
    "suite_name",
    "problem_name",
    "problem_id",
    "problem_instance",
    "optimization_type",
    "dimension",
    "run",
)

NUMBER_FORMAT = "{:.10g}"


class FlatFile(Watcher):
    """
    Args:
        triggers: when to log.
        properties: columns after the identifying ones, in this order.
        sink: destination for rows; closed together with the logger.
        store_positions: append x0..x{d-1} columns from Info.x.
        algorithm_name: experiment attribute, omitted if None.
        algorithm_info: experiment attribute, omitted if None.
        config: WatchConfig (no_value marker, log level).
    """

    def __init__(
        self,
        triggers: Iterable[Trigger],
        properties: Iterable[Property],
        sink: Sink,
        store_positions: bool = False,
        algorithm_name: Optional[str] = None,
        algorithm_info: Optional[str] = None,
        config: Optional[WatchConfig] = None,
    ):
        self.experiment_attributes: Dict[str, Any] = {}
        self.run_attributes: Dict[str, Optional[float]] = {}
        self._run_attribute_sources: Dict[str, BoundProperty] = {}
        super().__init__(triggers, properties, config)
        self.sink = sink
        self.store_positions = store_positions
        if algorithm_name is not None:
            self.add_experiment_attribute("algorithm_name", algorithm_name)
        if algorithm_info is not None:
            self.add_experiment_attribute("algorithm_info", algorithm_info)

    def _taken(self, name: str) -> bool:
        return (
            name in COMMON_HEADERS
            or name in self.experiment_attributes
            or name in self.run_attributes
            or any(p.name == name for p in self.properties)
        )

    def _check_free(self, name: str):
        if self._taken(name):
            raise ValueError(f"column {name!r} is already in use.")

    def _add(self, prop: Property):
        self._check_free(prop.name)
        super()._add(prop)

    # experiment attributes

    def add_experiment_attribute(self, name: str, value: Any):
        self._check_free(name)
        self.experiment_attributes[name] = value

    def set_experiment_attributes(self, attributes: Mapping[str, Any]):
        """Replace every experiment attribute."""
        self.experiment_attributes = {}
        for name, value in attributes.items():
            self.add_experiment_attribute(name, value)

    # run attributes

    def add_run_attribute(self, name: str, value: Optional[float]):
        self._check_free(name)
        self.run_attributes[name] = as_float(value)

    def add_run_attributes(self, container: Any, attributes: Union[str, Sequence[str]]):
        """Bind run attributes to container.<attribute>, re-read at every new run."""
        if isinstance(attributes, str):
            attributes = [attributes]
        for attr in attributes:
            source = BoundProperty.from_attribute(container, attr)
            self.add_run_attribute(attr, source.getter())
            self._run_attribute_sources[attr] = source

    def set_run_attribute(self, name: str, value: Optional[float]):
        if name not in self.run_attributes:
            raise KeyError(f"unknown run attribute {name!r}")
        self.run_attributes[name] = as_float(value)

    def set_run_attributes(self, attributes: Mapping[str, Optional[float]]):
        """Replace every run attribute, dropping container bindings."""
        self.run_attributes = {}
        self._run_attribute_sources = {}
        for name, value in attributes.items():
            self.add_run_attribute(name, value)

    def on_run_start(self, cursor: Cursor):
        for name, source in self._run_attribute_sources.items():
            self.run_attributes[name] = as_float(source.getter())
        self.sink.begin_run()

    def header(self) -> Dict[str, Any]:
        p = self.problem
        c = self.cursor
        return {
            "suite_name": c.suite,
            "problem_name": p.name,
            "problem_id": c.problem_id,
            "problem_instance": c.instance,
            "optimization_type": p.optimization_type.value,
            "dimension": c.dimension,
            "run": c.run,
        }

    def _render(self, value: Any, fmt: str) -> Any:
        if value is None:
            return self.config.no_value
        if self.sink.formatted:
            return fmt.format(value)
        return value

    def log(self, info: Info):
        row = self.header()
        row.update(self.experiment_attributes)
        for name, value in self.run_attributes.items():
            row[name] = self._render(value, NUMBER_FORMAT)
        for prop in self.properties:
            value = prop(info)
            if self.sink.formatted:
                row[prop.name] = prop.to_string(value, self.config.no_value)
            else:
                row[prop.name] = self._render(value, prop.format)
        if self.store_positions:
            x = info.x if info.x is not None else [None] * self.problem.dimension
            for i in range(self.problem.dimension):
                v = x[i] if i < len(x) else None
                row[f"x{i}"] = self._render(None if v is None else float(v), NUMBER_FORMAT)
        self.sink.write(row)

    def on_close(self):
        self.sink.close()

    def __repr__(self):
        return f"<FlatFile {self.sink!r}>"
