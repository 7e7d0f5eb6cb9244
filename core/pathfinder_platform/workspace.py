import logging
from typing import Callable, List, Optional

from api.pathfinder_api.errors import InvalidEndpointError, SelectionError
from api.pathfinder_api.model import Edge, GraphModel, Node, PathResult
from .engine import PathEngine, STRATEGIES

LOGGER = logging.getLogger(__name__)


class Workspace:
    """
    Central editing session state container.

    Responsibilities:
    - Own the current GraphModel
    - Track the start/end selection and the last computed result
    - Clear a selection when its node is deleted
    - Build a PathEngine from a fresh snapshot on demand
    """

    def __init__(self, model: Optional[GraphModel] = None, strategy: str = "scan"):
        if strategy not in STRATEGIES:
            raise ValueError(f"Unknown strategy '{strategy}'. Expected one of: {', '.join(STRATEGIES)}.")
        self._model = model or GraphModel()
        self._strategy = strategy
        self._start_node_id: Optional[str] = None
        self._end_node_id: Optional[str] = None
        self._last_result: Optional[PathResult] = None

    @property
    def model(self) -> GraphModel:
        return self._model

    @property
    def strategy(self) -> str:
        return self._strategy

    @property
    def start_node_id(self) -> Optional[str]:
        return self._start_node_id

    @property
    def end_node_id(self) -> Optional[str]:
        return self._end_node_id

    @property
    def last_result(self) -> Optional[PathResult]:
        return self._last_result

    # ==========================================================
    # NODE OPERATIONS
    # ==========================================================

    def add_node(self, x: float, y: float, label: Optional[str] = None) -> Node:
        return self._model.add_node(x, y, label)

    def update_node_position(self, node_id: str, x: float, y: float) -> None:
        self._model.update_node_position(node_id, x, y)

    def delete_node(self, node_id: str) -> None:
        self._model.delete_node(node_id)
        if self._start_node_id == node_id:
            LOGGER.debug("Cleared start selection %s", node_id)
            self._start_node_id = None
        if self._end_node_id == node_id:
            LOGGER.debug("Cleared end selection %s", node_id)
            self._end_node_id = None

    def list_nodes(self) -> List[Node]:
        return self._model.nodes

    def filter_nodes(self, predicate: Callable[[Node], bool]) -> List[Node]:
        return [node for node in self._model.nodes if predicate(node)]

    def find_nodes_by_label(self, label_substr: str) -> List[Node]:
        """Return nodes whose label contains the given substring."""
        return self.filter_nodes(lambda n: label_substr.lower() in n.label.lower())

    # ==========================================================
    # EDGE OPERATIONS
    # ==========================================================

    def add_edge(self, from_id: str, to_id: str, weight: float = 1.0) -> Optional[Edge]:
        return self._model.add_edge(from_id, to_id, weight)

    def update_edge_weight(self, edge_id: str, weight) -> None:
        self._model.update_edge_weight(edge_id, weight)

    def delete_edge(self, edge_id: str) -> None:
        self._model.delete_edge(edge_id)

    def list_edges(self) -> List[Edge]:
        return self._model.edges

    # ==========================================================
    # SELECTION
    # ==========================================================

    def select_start(self, node_id: str) -> None:
        if not self._model.has_node(node_id):
            raise InvalidEndpointError([node_id])
        self._start_node_id = node_id

    def select_end(self, node_id: str) -> None:
        if not self._model.has_node(node_id):
            raise InvalidEndpointError([node_id])
        self._end_node_id = node_id

    def select_endpoints(self, start_node_id: Optional[str] = None, end_node_id: Optional[str] = None) -> None:
        """Select start and/or end together; nothing changes if either id is unknown."""
        missing = [n for n in (start_node_id, end_node_id) if n and not self._model.has_node(n)]
        if missing:
            raise InvalidEndpointError(missing)
        if start_node_id:
            self._start_node_id = start_node_id
        if end_node_id:
            self._end_node_id = end_node_id

    def clear_results(self) -> None:
        self._last_result = None
        self._start_node_id = None
        self._end_node_id = None

    def clear_graph(self) -> None:
        self._model.clear()
        self.clear_results()

    # ==========================================================
    # COMPUTATION
    # ==========================================================

    def engine(self) -> PathEngine:
        return PathEngine.from_model(self._model, strategy=self._strategy)

    def run_shortest_path(self, start_node_id: Optional[str] = None, end_node_id: Optional[str] = None) -> PathResult:
        """Compute a shortest path; missing arguments fall back to the selection."""
        start = start_node_id or self._start_node_id
        end = end_node_id or self._end_node_id
        if not start or not end:
            raise SelectionError("Select both a start and an end node.")

        result = self.engine().find_shortest_path(start, end)
        LOGGER.info("Shortest path %s -> %s: %s", start, end, result.message)
        self._last_result = result
        return result

    def graph_info(self) -> dict:
        return self.engine().get_graph_info()

    def to_dict(self) -> dict:
        return {
            "graph": self._model.to_dict(),
            "start_node_id": self._start_node_id,
            "end_node_id": self._end_node_id,
            "strategy": self._strategy,
            "last_result": self._last_result.to_dict() if self._last_result else None,
        }
