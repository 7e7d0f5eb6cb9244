"""
Core graph domain model (Node, Edge, GraphModel, PathResult).
"""

from .node import Node
from .edge import Edge
from .graph import GraphModel, GraphSnapshot, normalize_weight
from .result import PathResult

__all__ = ["Node", "Edge", "GraphModel", "GraphSnapshot", "PathResult", "normalize_weight"]
