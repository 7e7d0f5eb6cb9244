import asyncio
import heapq
import logging
import math
from typing import Dict, Iterable, List, Optional, Set, Tuple

from api.pathfinder_api.errors import InvalidEndpointError
from api.pathfinder_api.model import Edge, GraphModel, GraphSnapshot, Node, PathResult

LOGGER = logging.getLogger(__name__)

STRATEGIES = ("scan", "heap")

NO_PATH_MESSAGE = "No path exists between the selected nodes"


class _ScanFrontier:
    """Linear scan over unvisited nodes in node-list order; first minimum wins.

    ``order`` is accepted for a common constructor signature; the unvisited
    dict already iterates in node-list order.
    """

    def __init__(self, node_ids: Iterable[str], distances: Dict[str, float], order: Dict[str, int]):
        self._unvisited = dict.fromkeys(node_ids)
        self._distances = distances

    def push(self, node_id: str, distance: float) -> None:
        """No-op: ``pop`` reads the shared distance table directly."""

    def pop(self) -> Optional[str]:
        current = None
        best = math.inf
        for node_id in self._unvisited:
            if self._distances[node_id] < best:
                best = self._distances[node_id]
                current = node_id
        if current is not None:
            del self._unvisited[current]
        return current


class _HeapFrontier:
    """Binary heap keyed by (distance, node-list position).

    Stale entries are skipped lazily, which makes the settle order identical
    to ``_ScanFrontier``.
    """

    def __init__(self, node_ids: Iterable[str], distances: Dict[str, float], order: Dict[str, int]):
        self._distances = distances
        self._order = order
        self._heap: List[Tuple[float, int, str]] = []
        self._done: Set[str] = set()
        for node_id in node_ids:
            if distances[node_id] < math.inf:
                self.push(node_id, distances[node_id])

    def push(self, node_id: str, distance: float) -> None:
        heapq.heappush(self._heap, (distance, self._order[node_id], node_id))

    def pop(self) -> Optional[str]:
        while self._heap:
            distance, _, node_id = heapq.heappop(self._heap)
            if node_id in self._done or distance > self._distances[node_id]:
                continue
            self._done.add(node_id)
            return node_id
        return None


_FRONTIERS = {"scan": _ScanFrontier, "heap": _HeapFrontier}


class PathEngine:
    """
    Shortest-path computation over one immutable graph snapshot.

    Responsibilities:
    - Build the directed adjacency list (parallel edges kept, in edge order)
    - Run Dijkstra with early exit once the target is settled
    - Reconstruct the path and report distances and visit order
    - Answer reachability and graph-info diagnostics

    Ties between equally distant nodes are broken by node-list order: the node
    added to the graph first is settled first, for both strategies.
    """

    def __init__(self, nodes: Iterable[Node], edges: Iterable[Edge], strategy: str = "scan"):
        if strategy not in _FRONTIERS:
            raise ValueError(f"Unknown strategy '{strategy}'. Expected one of: {', '.join(STRATEGIES)}.")

        self.strategy = strategy
        self.nodes: Tuple[Node, ...] = tuple(n.copy() for n in nodes)
        self.edges: Tuple[Edge, ...] = tuple(e.copy() for e in edges)
        self._order = {node.node_id: index for index, node in enumerate(self.nodes)}
        self.graph = self._build_adjacency_list()

    @classmethod
    def from_snapshot(cls, snapshot: GraphSnapshot, strategy: str = "scan") -> "PathEngine":
        return cls(snapshot.nodes, snapshot.edges, strategy=strategy)

    @classmethod
    def from_model(cls, model: GraphModel, strategy: str = "scan") -> "PathEngine":
        return cls.from_snapshot(model.snapshot(), strategy=strategy)

    def _build_adjacency_list(self) -> Dict[str, List[Tuple[str, float]]]:
        graph: Dict[str, List[Tuple[str, float]]] = {node.node_id: [] for node in self.nodes}
        for edge in self.edges:
            if edge.source in graph and edge.target in graph:
                graph[edge.source].append((edge.target, edge.weight))
        return graph

    def _check_endpoints(self, start_node_id: str, end_node_id: str) -> None:
        missing = [n for n in (start_node_id, end_node_id) if n not in self.graph]
        if missing:
            raise InvalidEndpointError(missing)

    # ==========================================================
    # SHORTEST PATH
    # ==========================================================

    def find_shortest_path(self, start_node_id: str, end_node_id: str) -> PathResult:
        self._check_endpoints(start_node_id, end_node_id)

        distances = {node_id: math.inf for node_id in self.graph}
        previous: Dict[str, Optional[str]] = {node_id: None for node_id in self.graph}
        distances[start_node_id] = 0.0

        frontier = _FRONTIERS[self.strategy](self.graph, distances, self._order)
        visited: List[str] = []
        settled: Set[str] = set()

        while True:
            current = frontier.pop()
            if current is None:
                break

            visited.append(current)
            settled.add(current)

            if current == end_node_id:
                break

            for neighbor, weight in self.graph[current]:
                if neighbor in settled:
                    continue
                candidate = distances[current] + weight
                if candidate < distances[neighbor]:
                    distances[neighbor] = candidate
                    previous[neighbor] = current
                    frontier.push(neighbor, candidate)

        path = self.reconstruct_path(previous, start_node_id, end_node_id)
        distance = distances[end_node_id]

        LOGGER.debug(
            "Dijkstra %s -> %s (%s): visited=%d distance=%s",
            start_node_id, end_node_id, self.strategy, len(visited), distance,
        )

        if not path or distance == math.inf:
            return PathResult(
                success=False,
                message=NO_PATH_MESSAGE,
                distance=math.inf,
                path=(),
                distances=distances,
                visited=visited,
            )

        return PathResult(
            success=True,
            message=f"Shortest path found with distance {distance:g}",
            distance=distance,
            path=path,
            distances=distances,
            visited=visited,
        )

    async def find_shortest_path_async(self, start_node_id: str, end_node_id: str, executor=None) -> PathResult:
        """Run ``find_shortest_path`` in an executor so an event loop stays responsive."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(executor, self.find_shortest_path, start_node_id, end_node_id)

    def find_shortest_path_simple(self, start_node_id: str, end_node_id: str) -> PathResult:
        """
        Queue-based teaching variant of Dijkstra.

        Only nodes discovered from the start appear in ``distances``. Every
        visit and every distance update is logged at DEBUG level.
        """
        self._check_endpoints(start_node_id, end_node_id)
        LOGGER.debug("Simple Dijkstra from %s to %s", start_node_id, end_node_id)

        distances: Dict[str, float] = {start_node_id: 0.0}
        previous: Dict[str, str] = {}
        queue = [start_node_id]
        visited: List[str] = []
        settled: Set[str] = set()

        while queue:
            index = min(range(len(queue)), key=lambda i: distances.get(queue[i], math.inf))
            current = queue.pop(index)

            if current in settled:
                continue
            visited.append(current)
            settled.add(current)
            LOGGER.debug("Visiting %s at distance %s", current, distances[current])

            if current == end_node_id:
                LOGGER.debug("Reached target %s", end_node_id)
                break

            for neighbor, weight in self.graph[current]:
                if neighbor in settled:
                    continue
                candidate = distances[current] + weight
                if neighbor not in distances or candidate < distances[neighbor]:
                    distances[neighbor] = candidate
                    previous[neighbor] = current
                    queue.append(neighbor)
                    LOGGER.debug("  updated %s: distance %s", neighbor, candidate)

        path = self.reconstruct_path(previous, start_node_id, end_node_id)
        distance = distances.get(end_node_id, math.inf)

        return PathResult(
            success=bool(path),
            message=f"Path found with distance {distance:g}" if path else "No path available",
            distance=distance if path else math.inf,
            path=path,
            distances=distances,
            visited=visited,
        )

    @staticmethod
    def reconstruct_path(previous: Dict[str, Optional[str]], start_node_id: str, end_node_id: str) -> Tuple[str, ...]:
        """Walk predecessor links back from the target.

        Returns an empty tuple unless the chain ends at ``start_node_id``.
        """
        if previous.get(end_node_id) is None and end_node_id != start_node_id:
            return ()

        path: List[str] = []
        current: Optional[str] = end_node_id
        while current is not None:
            path.append(current)
            current = previous.get(current)
        path.reverse()

        if path[0] != start_node_id:
            return ()
        return tuple(path)

    # ==========================================================
    # DIAGNOSTICS
    # ==========================================================

    def get_reachable_nodes(self, start_node_id: str) -> Set[str]:
        """Nodes reachable from ``start_node_id`` by following edge direction."""
        if start_node_id not in self.graph:
            raise InvalidEndpointError([start_node_id])

        reachable: Set[str] = set()
        stack = [start_node_id]
        while stack:
            current = stack.pop()
            if current in reachable:
                continue
            reachable.add(current)
            stack.extend(n for n, _ in self.graph[current] if n not in reachable)
        return reachable

    def is_graph_connected(self) -> bool:
        """
        Directional reachability check from the first node only.

        True when every node can be reached from ``nodes[0]`` along directed
        edges. This is not undirected connectivity: reordering the nodes of the
        same graph can change the answer.
        """
        if not self.nodes:
            return True
        return len(self.get_reachable_nodes(self.nodes[0].node_id)) == len(self.nodes)

    def get_graph_info(self) -> dict:
        return {
            "node_count": len(self.nodes),
            "edge_count": len(self.edges),
            "is_connected": self.is_graph_connected(),
            "nodes": [{"id": n.node_id, "label": n.label} for n in self.nodes],
            "edges": [{"from": e.source, "to": e.target, "weight": e.weight} for e in self.edges],
        }
