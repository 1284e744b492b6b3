"""Shared graph fixtures."""

from __future__ import annotations

import pytest

from dwgraph.graph.model import GeoLocation, Node
from dwgraph.graph.strict_digraph import StrictDiGraph


def build_graph(nodes, edges) -> StrictDiGraph:
    g = StrictDiGraph()
    for key in nodes:
        g.add_node(key)
    for src, dest, weight in edges:
        g.add_edge(src, dest, weight=weight)
    return g


@pytest.fixture
def empty_graph():
    return StrictDiGraph()


@pytest.fixture
def single_node():
    g = StrictDiGraph()
    g.add_node_data(Node(7, location=GeoLocation(1.0, 2.0, 0.0), info="lonely"))
    return g


@pytest.fixture
def triangle():
    #        [1]        [2]
    #   1 ───────► 2 ───────► 3
    #   │                     ▲
    #   └─────────────────────┘
    #             [5]
    return build_graph([1, 2, 3], [(1, 2, 1.0), (2, 3, 2.0), (1, 3, 5.0)])


@pytest.fixture
def triangle_with_isolated(triangle):
    triangle.add_node(4)
    return triangle


@pytest.fixture
def one_way_pair():
    return build_graph([1, 2], [(1, 2, 1.0)])


@pytest.fixture
def ring():
    # 0 -> 1 -> 2 -> 3 -> 0, each weight 1, plus a shortcut 0 -> 2 of weight 3
    return build_graph(
        [0, 1, 2, 3],
        [(0, 1, 1.0), (1, 2, 1.0), (2, 3, 1.0), (3, 0, 1.0), (0, 2, 3.0)],
    )


@pytest.fixture
def late_improvement():
    # Node 4 is first discovered through 1 (cost 10), then improved to 3 via
    # 2 -> 3 -> 4. Node 5 hangs off 4 and must see the improved distance.
    #
    #        [10]
    #   1 ─────────────► 4 ──[1]──► 5
    #   │                ▲
    #  [1]              [1]
    #   ▼                │
    #   2 ──[1]──► 3 ────┘
    return build_graph(
        [1, 2, 3, 4, 5],
        [(1, 4, 10.0), (1, 2, 1.0), (2, 3, 1.0), (3, 4, 1.0), (4, 5, 1.0)],
    )


@pytest.fixture
def diamond_tie():
    # Two equal-cost routes from 1 to 4.
    return build_graph(
        [1, 2, 3, 4],
        [(1, 2, 1.0), (1, 3, 1.0), (2, 4, 1.0), (3, 4, 1.0)],
    )
