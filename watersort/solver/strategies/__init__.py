"""
Strategies Package - Concrete strategy implementations.

Import this module to register all built-in strategies.
"""

from .bfs import BreadthFirstStrategy
from .metrics import MetricsStrategy

__all__ = [
    "BreadthFirstStrategy",
    "MetricsStrategy",
]
