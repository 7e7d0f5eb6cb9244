"""Shortest-path engine and editing workspace."""

from .engine import PathEngine, STRATEGIES
from .workspace import Workspace

__all__ = ["PathEngine", "STRATEGIES", "Workspace"]
