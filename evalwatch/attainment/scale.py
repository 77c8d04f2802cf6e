"""
Scales: discretize a numeric axis into `size` buckets.

    LinearScale   equal width on v
    Log2Scale     equal width on log2(v)
    Log10Scale    equal width on log10(v)

index(v) is total, monotone and clamped to [0, size-1]; NaN maps to the
last bucket.
bounds(i) is the half-open interval [lo, hi) bucket i covers; the last
bucket also contains max.
"""

from __future__ import annotations
import math
from typing import Tuple


class Scale:
    """
    Args:
        min: lower end of the axis.
        max: upper end of the axis (> min).
        size: number of buckets (>= 1).
    """

    def __init__(self, min: float, max: float, size: int):
        if not min < max:
            raise ValueError(f"min must be < max, got ({min}, {max}).")
        if size < 1:
            raise ValueError("size must be >= 1.")
        self.min = min
        self.max = max
        self.size = int(size)
        self._tmin = self.transform(min)
        self._tmax = self.transform(max)

    def transform(self, v: float) -> float:
        return float(v)

    def inverse(self, t: float) -> float:
        return float(t)

    @property
    def length(self):
        return self.max - self.min

    @property
    def step(self) -> float:
        """Bucket width on the transformed axis."""
        return (self._tmax - self._tmin) / self.size

    def _lower(self, i: int) -> float:
        if i == 0:
            return float(self.min)
        return self.inverse(self._tmin + i * self.step)

    def bounds(self, i: int) -> Tuple[float, float]:
        if not 0 <= i < self.size:
            raise IndexError(f"bucket {i} out of range [0, {self.size}).")
        hi = float(self.max) if i == self.size - 1 else self._lower(i + 1)
        return self._lower(i), hi

    def index(self, v: float) -> int:
        """NaN goes to the last bucket."""
        if math.isnan(v):
            return self.size - 1
        if v <= self.min:
            return 0
        if v >= self.max:
            return self.size - 1
        i = int(math.floor((self.transform(v) - self._tmin) / self.step))
        i = min(max(i, 0), self.size - 1)
        # floor on the transformed axis can land one bucket off near a boundary
        if i + 1 < self.size and v >= self._lower(i + 1):
            i += 1
        elif i > 0 and v < self._lower(i):
            i -= 1
        return i

    def __repr__(self):
        return f"<{type(self).__name__} (({self.min}, {self.max}), {self.size})>"


class LinearScale(Scale):
    pass


class _LogScale(Scale):
    base = 10.0

    def __init__(self, min: float, max: float, size: int):
        if min <= 0:
            raise ValueError(f"{type(self).__name__} needs min > 0, got {min}.")
        super().__init__(min, max, size)

    def transform(self, v: float) -> float:
        return math.log(v, self.base)

    def inverse(self, t: float) -> float:
        return self.base ** t


class Log2Scale(_LogScale):
    base = 2.0

    def transform(self, v: float) -> float:
        return math.log2(v)


class Log10Scale(_LogScale):
    base = 10.0

    def transform(self, v: float) -> float:
        return math.log10(v)
