"""
Shifted sphere bench problem.

Continuous minimization with a random optimum per instance.
Produces Info snapshots for evalwatch loggers.
"""
from .env import ShiftedSphere

__all__ = ["ShiftedSphere"]
