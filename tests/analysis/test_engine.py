import logging
import random

import networkx as nx
import pytest

from dwgraph.algorithms.types import UNREACHABLE
from dwgraph.analysis.engine import GraphAlgorithms
from dwgraph.graph.model import NodeData
from dwgraph.graph.strict_digraph import StrictDiGraph


def path_weight(graph, path):
    return sum(graph.get_edge(a.key, b.key).weight for a, b in zip(path, path[1:]))


class TestBinding:
    def test_init_and_get_graph(self, triangle):
        algo = GraphAlgorithms()
        assert algo.get_graph() is None
        algo.init(triangle)
        assert algo.get_graph() is triangle
        assert algo.graph is triangle

    def test_independent_engines_share_graph(self, triangle):
        a = GraphAlgorithms(triangle)
        b = GraphAlgorithms(triangle)
        a.shortest_path_dist(1, 3)
        b.shortest_path_dist(2, 3)
        assert a.state is not b.state
        assert a.state.source == 1
        assert b.state.source == 2


class TestUnbound:
    def test_queries_return_sentinels(self, tmp_path):
        algo = GraphAlgorithms()
        assert algo.shortest_path_dist(1, 2) == UNREACHABLE
        assert algo.shortest_path(1, 2) is None
        assert algo.shortest_path_keys(1, 1) is None
        assert algo.copy() is None
        assert algo.is_connected() is True
        assert algo.save(tmp_path / "g.json") is False
        assert not (tmp_path / "g.json").exists()


class TestShortestPathDist:
    def test_concrete_triangle(self, triangle):
        algo = GraphAlgorithms(triangle)
        assert algo.shortest_path_dist(1, 3) == 3.0
        assert algo.shortest_path_dist(1, 2) == 1.0
        assert algo.shortest_path_dist(3, 1) == UNREACHABLE

    def test_same_node_is_zero_without_run(self, triangle):
        algo = GraphAlgorithms(triangle)
        assert algo.shortest_path_dist(2, 2) == 0.0
        assert algo.state.source is None

    def test_isolated_node_is_unreachable(self, triangle_with_isolated):
        algo = GraphAlgorithms(triangle_with_isolated)
        assert algo.shortest_path_dist(1, 4) == UNREACHABLE
        assert algo.shortest_path_dist(4, 4) == 0.0

    @pytest.mark.parametrize("src, dest", [(1, 99), (99, 1), (99, 99), ("a", 1), (None, 2)])
    def test_invalid_keys_do_not_raise(self, triangle, src, dest):
        algo = GraphAlgorithms(triangle)
        assert algo.shortest_path_dist(src, dest) == UNREACHABLE
        assert algo.shortest_path(src, dest) is None

    def test_unreachable_is_distinct_from_zero(self, one_way_pair):
        algo = GraphAlgorithms(one_way_pair)
        assert algo.shortest_path_dist(2, 1) != 0.0
        assert algo.shortest_path_dist(2, 1) == float("inf")


class TestShortestPath:
    def test_concrete_triangle(self, triangle):
        algo = GraphAlgorithms(triangle)
        path = algo.shortest_path(1, 3)
        assert [n.key for n in path] == [1, 2, 3]
        assert all(isinstance(n, NodeData) for n in path)
        assert algo.shortest_path_keys(1, 3) == [1, 2, 3]

    def test_same_node(self, single_node):
        algo = GraphAlgorithms(single_node)
        path = algo.shortest_path(7, 7)
        assert path == [single_node.get_node(7)]

    def test_no_path_is_none_not_empty(self, triangle_with_isolated):
        algo = GraphAlgorithms(triangle_with_isolated)
        assert algo.shortest_path(1, 4) is None
        assert algo.shortest_path(3, 1) is None

    def test_empty_graph(self, empty_graph):
        algo = GraphAlgorithms(empty_graph)
        assert algo.shortest_path(1, 1) is None

    def test_late_improvement(self, late_improvement):
        algo = GraphAlgorithms(late_improvement)
        assert algo.shortest_path_keys(1, 5) == [1, 2, 3, 4, 5]
        assert algo.shortest_path_dist(1, 5) == 4.0

    def test_weight_sum_matches_distance_on_random_graphs(self):
        rng = random.Random(11)
        g = StrictDiGraph()
        for key in range(25):
            g.add_node(key)
        for _ in range(80):
            u, v = rng.randrange(25), rng.randrange(25)
            if u != v and not g.has_edge(u, v):
                g.add_edge(u, v, weight=rng.randint(1, 9))

        algo = GraphAlgorithms(g)
        for src in range(0, 25, 4):
            for dest in range(25):
                dist = algo.shortest_path_dist(src, dest)
                path = algo.shortest_path(src, dest)
                if dist == UNREACHABLE:
                    assert path is None
                    assert not nx.has_path(g, src, dest)
                    continue
                assert path[0].key == src and path[-1].key == dest
                assert path_weight(g, path) == pytest.approx(dist)
                assert dist == pytest.approx(nx.dijkstra_path_length(g, src, dest))


class TestIsConnected:
    def test_trivial_graphs(self, empty_graph, single_node):
        assert GraphAlgorithms(empty_graph).is_connected() is True
        assert GraphAlgorithms(single_node).is_connected() is True

    def test_one_way_pair_is_not_connected(self, one_way_pair):
        assert GraphAlgorithms(one_way_pair).is_connected() is False

    def test_ring_is_connected(self, ring):
        assert GraphAlgorithms(ring).is_connected() is True

    def test_breaking_the_ring(self, ring):
        ring.remove_edge(3, 0)
        assert GraphAlgorithms(ring).is_connected() is False

    def test_isolated_node(self, triangle_with_isolated):
        assert GraphAlgorithms(triangle_with_isolated).is_connected() is False

    @pytest.mark.parametrize("seed", range(4))
    def test_matches_networkx(self, seed):
        rng = random.Random(seed)
        g = StrictDiGraph()
        for key in range(8):
            g.add_node(key)
        for _ in range(14):
            u, v = rng.randrange(8), rng.randrange(8)
            if u != v and not g.has_edge(u, v):
                g.add_edge(u, v, weight=1.0)
        assert GraphAlgorithms(g).is_connected() == nx.is_strongly_connected(g)


class TestCopy:
    def test_clone_is_independent(self, triangle):
        algo = GraphAlgorithms(triangle)
        clone = algo.copy()
        assert clone is not triangle
        assert set(clone.nodes) == set(triangle.nodes)

        clone.remove_edge(1, 2)
        clone.connect(1, 3, 0.5)
        assert algo.shortest_path_dist(1, 3) == 3.0
        assert GraphAlgorithms(clone).shortest_path_dist(1, 3) == 0.5


class TestPersistence:
    def test_save_and_load_round_trip(self, tmp_path, triangle_with_isolated):
        path = tmp_path / "graph.json"
        assert GraphAlgorithms(triangle_with_isolated).save(path) is True

        algo = GraphAlgorithms()
        assert algo.load(path) is True
        loaded = algo.get_graph()
        assert set(loaded.nodes) == {1, 2, 3, 4}
        assert {(e.src, e.dest, e.weight) for e in loaded.get_edges()} == {
            (1, 2, 1.0),
            (2, 3, 2.0),
            (1, 3, 5.0),
        }
        assert algo.shortest_path_dist(1, 3) == 3.0

    def test_yaml_round_trip(self, tmp_path, ring):
        path = tmp_path / "graph.yaml"
        algo = GraphAlgorithms(ring)
        assert algo.save(path)
        other = GraphAlgorithms()
        assert other.load(path)
        assert other.is_connected() is True

    def test_save_is_pure(self, tmp_path, triangle):
        algo = GraphAlgorithms(triangle)
        first, second = tmp_path / "a.json", tmp_path / "b.json"
        algo.save(first)
        algo.shortest_path_dist(1, 3)
        algo.save(second)
        assert first.read_text() == second.read_text()

    def test_save_failure_returns_false(self, tmp_path, triangle, caplog):
        algo = GraphAlgorithms(triangle)
        with caplog.at_level(logging.ERROR, logger="dwgraph"):
            assert algo.save(tmp_path / "missing-dir" / "g.json") is False
        assert "Failed to save graph" in caplog.text

    @pytest.mark.parametrize(
        "content",
        [None, "{broken", '{"nodes": [], "edges": [], "bogus": true}'],
    )
    def test_load_failure_keeps_bound_graph(self, tmp_path, triangle, caplog, content):
        path = tmp_path / "bad.json"
        if content is not None:
            path.write_text(content)

        algo = GraphAlgorithms(triangle)
        algo.shortest_path_dist(1, 3)
        with caplog.at_level(logging.ERROR, logger="dwgraph"):
            assert algo.load(path) is False
        assert "Failed to load graph" in caplog.text
        assert algo.get_graph() is triangle
        assert triangle.number_of_nodes() == 3
        assert triangle.number_of_edges() == 3
        assert algo.shortest_path_dist(1, 3) == 3.0

    def test_load_failure_on_partially_valid_document(self, tmp_path, triangle):
        # Valid nodes followed by an edge to a missing node
        path = tmp_path / "partial.json"
        path.write_text(
            '{"nodes": [{"type": "Node", "key": 10}, {"type": "Node", "key": 11}],'
            ' "edges": [{"src": 10, "out": [{"type": "Edge", "dest": 12, "weight": 1}]}]}'
        )
        algo = GraphAlgorithms(triangle)
        assert algo.load(path) is False
        assert algo.get_graph() is triangle
        assert 10 not in triangle

    def test_load_replaces_graph_and_resets_state(self, tmp_path, triangle, ring):
        path = tmp_path / "ring.json"
        GraphAlgorithms(ring).save(path)

        algo = GraphAlgorithms(triangle)
        algo.shortest_path_dist(1, 3)
        assert algo.load(path)
        assert algo.get_graph() is not triangle
        assert algo.state.source is None
        assert len(algo.state) == 0

    @pytest.mark.parametrize("name", ["bad\x00name.json", "bad\x00name.yaml"])
    def test_unusable_file_name_returns_false(self, triangle, caplog, name):
        algo = GraphAlgorithms(triangle)
        with caplog.at_level(logging.ERROR, logger="dwgraph"):
            assert algo.save(name) is False
            assert algo.load(name) is False
        assert "Failed to save graph" in caplog.text
        assert "Failed to load graph" in caplog.text
        assert algo.get_graph() is triangle

    @pytest.mark.parametrize("suffix", [".json", ".yaml"])
    def test_save_unencodable_value_returns_false(
        self, tmp_path, triangle, caplog, suffix
    ):
        triangle.get_node(3).info = object()
        path = tmp_path / f"g{suffix}"
        with caplog.at_level(logging.ERROR, logger="dwgraph"):
            assert GraphAlgorithms(triangle).save(path) is False
        assert "Cannot encode graph" in caplog.text
        assert not path.exists()

    @pytest.mark.parametrize(
        "content",
        [
            # Schema violation: negative weight
            "nodes:\n- {type: Node, key: 10}\n- {type: Node, key: 11}\n"
            "edges:\n- src: 10\n  out:\n  - {type: Edge, dest: 11, weight: -1.5}\n",
            # Model violation: edge to a missing node
            "nodes:\n- {type: Node, key: 10}\n"
            "edges:\n- src: 10\n  out:\n  - {type: Edge, dest: 12, weight: 1.0}\n",
            # Model violation: self loop
            "nodes:\n- {type: Node, key: 10}\n"
            "edges:\n- src: 10\n  out:\n  - {type: Edge, dest: 10, weight: 1.0}\n",
        ],
    )
    def test_invalid_yaml_document_keeps_bound_graph(self, tmp_path, triangle, content):
        path = tmp_path / "bad.yaml"
        path.write_text(content)

        algo = GraphAlgorithms(triangle)
        assert algo.load(path) is False
        assert algo.get_graph() is triangle
        assert 10 not in triangle
        assert algo.shortest_path_dist(1, 3) == 3.0


class TestNetworkxBulkConstruction:
    def test_queries_on_graph_built_with_bulk_api(self):
        g = StrictDiGraph()
        g.add_nodes_from([1, 2, 3])
        g.add_weighted_edges_from([(1, 2, 2.0), (2, 3, 1.0), (3, 1, 4.0)])

        algo = GraphAlgorithms(g)
        assert algo.shortest_path_dist(1, 3) == 3.0
        assert algo.shortest_path_keys(3, 2) == [3, 1, 2]
        assert algo.is_connected() is True

    def test_rejected_bulk_insert_leaves_graph_queryable(self):
        g = StrictDiGraph()
        g.add_nodes_from([1, 2])
        with pytest.raises(ValueError):
            g.add_weighted_edges_from([(1, 2, -5.0), (2, 1, 1.0)])

        algo = GraphAlgorithms(g)
        assert algo.shortest_path_dist(1, 2) == UNREACHABLE
        assert algo.is_connected() is False
