"""
Shortest-path engine tests.

Covers Dijkstra results, path reconstruction, multigraph handling,
both frontier strategies and the reachability diagnostics.
"""

import asyncio
import math

import pytest

from api.pathfinder_api.errors import InvalidEndpointError
from api.pathfinder_api.model import Edge, GraphModel, Node
from core.pathfinder_platform.engine import PathEngine


def make_graph(node_ids, edges):
    nodes = [Node(node_id, node_id) for node_id in node_ids]
    built = [Edge(s, t, edge_id=f"e{i}", weight=w) for i, (s, t, w) in enumerate(edges)]
    return nodes, built


@pytest.fixture(params=["scan", "heap"])
def strategy(request):
    return request.param


@pytest.fixture
def diamond():
    return make_graph(
        ["A", "B", "C", "D"],
        [("A", "B", 4), ("A", "C", 1), ("C", "B", 1), ("B", "D", 2), ("C", "D", 6)],
    )


def path_cost(edges, path):
    total = 0.0
    for source, target in zip(path, path[1:]):
        total += min(e.weight for e in edges if e.source == source and e.target == target)
    return total


class TestShortestPath:

    def test_example_graph(self, diamond, strategy):
        nodes, edges = diamond
        result = PathEngine(nodes, edges, strategy=strategy).find_shortest_path("A", "D")

        assert result.success is True
        assert result.distance == 4
        assert result.path == ("A", "C", "B", "D")
        assert result.distances["A"] == 0
        assert result.visited[-1] == "D"
        assert "4" in result.message

    def test_path_cost_matches_distance(self, diamond, strategy):
        nodes, edges = diamond
        engine = PathEngine(nodes, edges, strategy=strategy)

        for target in ("B", "C", "D"):
            result = engine.find_shortest_path("A", target)
            assert result.path[0] == "A"
            assert result.path[-1] == target
            assert path_cost(edges, result.path) == result.distance

    def test_start_equals_end(self, diamond, strategy):
        nodes, edges = diamond
        result = PathEngine(nodes, edges, strategy=strategy).find_shortest_path("B", "B")

        assert result.success is True
        assert result.distance == 0
        assert result.path == ("B",)
        assert result.visited == ("B",)

    def test_parallel_edges_use_cheapest(self, strategy):
        nodes, edges = make_graph(["s", "t"], [("s", "t", 5), ("s", "t", 2)])
        engine = PathEngine(nodes, edges, strategy=strategy)

        assert engine.graph["s"] == [("t", 5), ("t", 2)]

        result = engine.find_shortest_path("s", "t")
        assert result.distance == 2
        assert result.path == ("s", "t")

    def test_self_loop_is_harmless(self, strategy):
        nodes, edges = make_graph(["a", "b"], [("a", "a", 1), ("a", "b", 3), ("b", "b", 0)])
        result = PathEngine(nodes, edges, strategy=strategy).find_shortest_path("a", "b")

        assert result.success is True
        assert result.distance == 3
        assert result.path == ("a", "b")

    def test_unreachable_target(self, strategy):
        nodes, edges = make_graph(["a", "b", "c", "d"], [("a", "b", 1), ("c", "d", 1), ("d", "a", 1)])
        result = PathEngine(nodes, edges, strategy=strategy).find_shortest_path("a", "d")

        assert result.success is False
        assert result.distance == math.inf
        assert result.path == ()
        assert result.distances["d"] == math.inf
        assert result.distances["b"] == 1
        assert set(result.visited) == {"a", "b"}

    def test_direction_is_respected(self, strategy):
        nodes, edges = make_graph(["a", "b"], [("b", "a", 1)])
        result = PathEngine(nodes, edges, strategy=strategy).find_shortest_path("a", "b")

        assert result.success is False

    def test_early_exit_leaves_far_nodes_unvisited(self, strategy):
        nodes, edges = make_graph(["a", "b", "c"], [("a", "b", 1), ("a", "c", 10)])
        result = PathEngine(nodes, edges, strategy=strategy).find_shortest_path("a", "b")

        assert result.visited == ("a", "b")
        assert "c" not in result.visited
        assert result.distances["c"] == 10

    def test_ties_follow_node_order(self, strategy):
        nodes, edges = make_graph(
            ["s", "x", "y", "t"],
            [("s", "y", 1), ("s", "x", 1), ("x", "t", 1), ("y", "t", 1)],
        )
        result = PathEngine(nodes, edges, strategy=strategy).find_shortest_path("s", "t")

        assert result.visited == ("s", "x", "y", "t")
        assert result.path == ("s", "x", "t")

    def test_idempotent(self, diamond, strategy):
        nodes, edges = diamond
        engine = PathEngine(nodes, edges, strategy=strategy)

        assert engine.find_shortest_path("A", "D") == engine.find_shortest_path("A", "D")

    def test_strategies_agree(self, diamond):
        nodes, edges = diamond
        scan = PathEngine(nodes, edges, strategy="scan")
        heap = PathEngine(nodes, edges, strategy="heap")

        for start in ("A", "B", "C", "D"):
            for end in ("A", "B", "C", "D"):
                assert scan.find_shortest_path(start, end) == heap.find_shortest_path(start, end)

    def test_unknown_strategy(self, diamond):
        nodes, edges = diamond
        with pytest.raises(ValueError):
            PathEngine(nodes, edges, strategy="bellman-ford")


class TestInvalidEndpoints:

    def test_missing_start(self, diamond):
        nodes, edges = diamond
        with pytest.raises(InvalidEndpointError) as exc_info:
            PathEngine(nodes, edges).find_shortest_path("Z", "D")
        assert exc_info.value.node_ids == ("Z",)

    def test_missing_end(self, diamond):
        nodes, edges = diamond
        with pytest.raises(InvalidEndpointError):
            PathEngine(nodes, edges).find_shortest_path("A", "Z")

    def test_deleted_node_is_invalid(self):
        model = GraphModel()
        a = model.add_node(0, 0)
        b = model.add_node(0, 0)
        model.add_edge(a.node_id, b.node_id, 1)
        model.delete_node(b.node_id)

        engine = PathEngine.from_model(model)

        assert engine.edges == ()
        with pytest.raises(InvalidEndpointError):
            engine.find_shortest_path(a.node_id, b.node_id)


class TestSnapshotIsolation:

    def test_engine_ignores_later_model_changes(self):
        model = GraphModel()
        a = model.add_node(0, 0)
        b = model.add_node(0, 0)
        edge = model.add_edge(a.node_id, b.node_id, 3)

        engine = PathEngine.from_model(model)
        model.update_edge_weight(edge.edge_id, 10)
        model.delete_edge(edge.edge_id)

        result = engine.find_shortest_path(a.node_id, b.node_id)
        assert result.distance == 3

    def test_result_is_read_only(self, diamond):
        nodes, edges = diamond
        result = PathEngine(nodes, edges).find_shortest_path("A", "D")

        with pytest.raises(TypeError):
            result.distances["A"] = 5
        with pytest.raises(AttributeError):
            result.success = False


class TestSimpleVariant:

    def test_matches_main_algorithm(self, diamond):
        nodes, edges = diamond
        result = PathEngine(nodes, edges).find_shortest_path_simple("A", "D")

        assert result.success is True
        assert result.distance == 4
        assert result.path == ("A", "C", "B", "D")

    def test_only_discovered_nodes_have_distances(self):
        nodes, edges = make_graph(["a", "b", "c"], [("a", "b", 2)])
        result = PathEngine(nodes, edges).find_shortest_path_simple("a", "c")

        assert result.success is False
        assert result.distance == math.inf
        assert dict(result.distances) == {"a": 0, "b": 2}

    def test_self_path(self, diamond):
        nodes, edges = diamond
        result = PathEngine(nodes, edges).find_shortest_path_simple("C", "C")

        assert result.success is True
        assert result.distance == 0
        assert result.path == ("C",)


class TestAsync:

    def test_async_matches_sync(self, diamond):
        nodes, edges = diamond
        engine = PathEngine(nodes, edges)

        result = asyncio.run(engine.find_shortest_path_async("A", "D"))

        assert result == engine.find_shortest_path("A", "D")

    def test_async_propagates_invalid_endpoint(self, diamond):
        nodes, edges = diamond
        engine = PathEngine(nodes, edges)

        with pytest.raises(InvalidEndpointError):
            asyncio.run(engine.find_shortest_path_async("A", "nowhere"))


class TestDiagnostics:

    def test_reachable_nodes(self, diamond):
        nodes, edges = diamond
        engine = PathEngine(nodes, edges)

        assert engine.get_reachable_nodes("A") == {"A", "B", "C", "D"}
        assert engine.get_reachable_nodes("B") == {"B", "D"}

    def test_connectivity_is_directional_from_first_node(self):
        nodes, edges = make_graph(["a", "b"], [("a", "b", 1)])
        assert PathEngine(nodes, edges).is_graph_connected() is True

        reversed_nodes = list(reversed(nodes))
        assert PathEngine(reversed_nodes, edges).is_graph_connected() is False

    def test_empty_graph_is_connected(self):
        assert PathEngine([], []).is_graph_connected() is True

    def test_graph_info(self, diamond):
        nodes, edges = diamond
        info = PathEngine(nodes, edges).get_graph_info()

        assert info["node_count"] == 4
        assert info["edge_count"] == 5
        assert info["is_connected"] is True
        assert info["nodes"][0] == {"id": "A", "label": "A"}
        assert info["edges"][0] == {"from": "A", "to": "B", "weight": 4}

    def test_result_to_dict_replaces_infinity(self):
        nodes, edges = make_graph(["a", "b"], [])
        payload = PathEngine(nodes, edges).find_shortest_path("a", "b").to_dict()

        assert payload["success"] is False
        assert payload["distance"] is None
        assert payload["distances"] == {"a": 0, "b": None}
        assert payload["visited"] == ["a"]
