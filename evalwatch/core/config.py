"""
WatchConfig

Per-logger configuration. Passed explicitly to each logger and sink at
construction; there is no process-wide log level.
"""

from __future__ import annotations
import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Union


@dataclass
class WatchConfig:
    """
    Args:
        log_level: threshold for records emitted by a logger (int or name).
        no_value: marker written for properties without a value.
    """
    log_level: Union[int, str] = logging.WARNING
    no_value: Any = "None"

    def __post_init__(self):
        if isinstance(self.log_level, str):
            level = logging.getLevelName(self.log_level.upper())
            if not isinstance(level, int):
                raise ValueError(f"unknown log level: {self.log_level!r}")
            self.log_level = level
        if self.log_level < 0:
            raise ValueError("log_level must be nonnegative.")

    def enabled_for(self, level: int) -> bool:
        return level >= self.log_level

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WatchConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"unknown config keys: {sorted(unknown)}")
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return {"log_level": self.log_level, "no_value": self.no_value}


def load_config(path: Union[str, Path]) -> WatchConfig:
    """Load a WatchConfig from a JSON file."""
    return WatchConfig.from_dict(json.loads(Path(path).read_text(encoding="utf-8")))
