"""Public API exports for the pathfinder graph model."""

from .errors import InvalidEndpointError, PathfinderError, SelectionError
from .model import Node, Edge, GraphModel, GraphSnapshot, PathResult

__all__ = [
    "Node",
    "Edge",
    "GraphModel",
    "GraphSnapshot",
    "PathResult",
    "PathfinderError",
    "InvalidEndpointError",
    "SelectionError",
]
