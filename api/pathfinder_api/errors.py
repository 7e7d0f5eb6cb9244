"""Exceptions raised by the pathfinder core."""

from typing import Iterable


class PathfinderError(Exception):
    """Base class for pathfinder failures."""


class InvalidEndpointError(PathfinderError, ValueError):
    """A start or end node id is not present in the graph."""

    def __init__(self, node_ids: Iterable[str]):
        self.node_ids = tuple(node_ids)
        super().__init__(
            "Start or end node does not exist: " + ", ".join(repr(n) for n in self.node_ids)
        )


class SelectionError(PathfinderError):
    """A computation was requested without both endpoints selected."""
