"""
Attainment aggregates: scales, EAH (histogram) and EAF (exact points).
"""

from .scale import Scale, LinearScale, Log2Scale, Log10Scale
from .eah import EAH
from .eaf import EAF, Point, RunPoint

__all__ = ["Scale", "LinearScale", "Log2Scale", "Log10Scale", "EAH", "EAF", "Point", "RunPoint"]
