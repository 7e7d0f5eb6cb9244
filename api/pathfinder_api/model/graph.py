import logging
import math
import threading
from typing import List, NamedTuple, Optional, Tuple

from .node import Node
from .edge import Edge

LOGGER = logging.getLogger(__name__)

DEFAULT_WEIGHT = 1.0


def normalize_weight(value) -> float:
    """Coerce user input to a usable edge weight.

    Anything that does not parse as a number, NaN and zero all fall back to
    ``DEFAULT_WEIGHT``. Negative values pass through untouched.
    """
    try:
        weight = float(value)
    except (TypeError, ValueError):
        return DEFAULT_WEIGHT
    if math.isnan(weight) or weight == 0:
        return DEFAULT_WEIGHT
    return weight


def _parse_weight(value) -> float:
    # zero is a legal weight on add; only unparseable input falls back
    try:
        return float(value)
    except (TypeError, ValueError):
        return DEFAULT_WEIGHT


def _coordinate(value) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


class GraphSnapshot(NamedTuple):
    """Point-in-time copy of a graph's nodes and edges."""

    nodes: Tuple[Node, ...]
    edges: Tuple[Edge, ...]


class GraphModel:
    """
    Authoritative, mutable directed multigraph.

    Nodes and edges keep insertion order. Every mutation runs under one lock
    shared with ``snapshot()``, so a snapshot never sees a half-applied change.
    The model does not track start/end selection.
    """

    def __init__(self):
        self.nodes: List[Node] = []
        self.edges: List[Edge] = []
        self._node_counter = 0
        self._lock = threading.RLock()

    # -----------------
    # NODE OPERATIONS
    # -----------------

    def add_node(self, x: float, y: float, label: Optional[str] = None) -> Node:
        with self._lock:
            self._node_counter += 1
            node = Node(
                node_id=f"node_{self._node_counter}",
                label=label or f"N{self._node_counter}",
                x=_coordinate(x),
                y=_coordinate(y),
            )
            self.nodes.append(node)
        LOGGER.debug("Added node %s (%s)", node.node_id, node.label)
        return node

    def get_node(self, node_id: str) -> Optional[Node]:
        for node in self.nodes:
            if node.node_id == node_id:
                return node
        return None

    def has_node(self, node_id: str) -> bool:
        return self.get_node(node_id) is not None

    def update_node_position(self, node_id: str, x: float, y: float) -> None:
        with self._lock:
            node = self.get_node(node_id)
            if node is None:
                return
            node.x = _coordinate(x)
            node.y = _coordinate(y)

    def delete_node(self, node_id: str) -> None:
        with self._lock:
            self.nodes = [n for n in self.nodes if n.node_id != node_id]
            kept = [e for e in self.edges if e.source != node_id and e.target != node_id]
            removed = len(self.edges) - len(kept)
            self.edges = kept
        LOGGER.debug("Deleted node %s and %d incident edge(s)", node_id, removed)

    # -----------------
    # EDGE OPERATIONS
    # -----------------

    def add_edge(self, from_id: str, to_id: str, weight: float = DEFAULT_WEIGHT) -> Optional[Edge]:
        """Add a directed edge, or return None when the add is dropped.

        An add is dropped silently when an edge with the same ``(from_id, to_id)``
        already exists or when either endpoint is not in the graph.
        """
        with self._lock:
            if not self.has_node(from_id) or not self.has_node(to_id):
                LOGGER.debug("Dropped edge %s -> %s: unknown endpoint", from_id, to_id)
                return None

            if any(e.source == from_id and e.target == to_id for e in self.edges):
                LOGGER.debug("Dropped duplicate edge %s -> %s", from_id, to_id)
                return None

            edge = Edge(
                source=from_id,
                target=to_id,
                edge_id=f"edge_{from_id}_{to_id}",
                weight=_parse_weight(weight),
            )
            self.edges.append(edge)
        LOGGER.debug("Added edge %s (weight=%s)", edge.edge_id, edge.weight)
        return edge

    def get_edge(self, edge_id: str) -> Optional[Edge]:
        for edge in self.edges:
            if edge.edge_id == edge_id:
                return edge
        return None

    def get_edges(self) -> List[Edge]:
        return self.edges

    def update_edge_weight(self, edge_id: str, weight) -> None:
        with self._lock:
            edge = self.get_edge(edge_id)
            if edge is None:
                return
            edge.weight = normalize_weight(weight)

    def delete_edge(self, edge_id: str) -> None:
        with self._lock:
            self.edges = [e for e in self.edges if e.edge_id != edge_id]

    # -----------------
    # WHOLE-GRAPH OPERATIONS
    # -----------------

    def clear(self) -> None:
        with self._lock:
            self.nodes = []
            self.edges = []
            self._node_counter = 0
        LOGGER.debug("Cleared graph")

    def snapshot(self) -> GraphSnapshot:
        with self._lock:
            return GraphSnapshot(
                nodes=tuple(n.copy() for n in self.nodes),
                edges=tuple(e.copy() for e in self.edges),
            )

    def to_dict(self) -> dict:
        with self._lock:
            return {
                "nodes": [node.to_dict() for node in self.nodes],
                "edges": [edge.to_dict() for edge in self.edges],
            }
