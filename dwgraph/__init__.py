"""DWGraph: directed weighted graph algorithms.

DWGraph computes shortest distances, shortest paths and strong connectivity
over directed graphs with non-negative edge weights, and saves/loads graphs as
JSON or YAML documents.

Primary API:
    StrictDiGraph - Directed weighted graph (a NetworkX DiGraph with strict rules)
    Node, Edge, GeoLocation - Default node/edge implementations
    GraphAlgorithms - Algorithms bound to one graph
    dijkstra() - Single-source SPF run producing a TraversalState

Example:
    from dwgraph import GraphAlgorithms, StrictDiGraph

    graph = StrictDiGraph()
    for key in (1, 2, 3):
        graph.add_node(key)
    graph.add_edge(1, 2, weight=1.0)
    graph.add_edge(2, 3, weight=2.0)
    graph.add_edge(1, 3, weight=5.0)

    algo = GraphAlgorithms(graph)
    algo.shortest_path_dist(1, 3)   # 3.0
    algo.shortest_path_keys(1, 3)   # [1, 2, 3]
"""

from __future__ import annotations

from dwgraph import cli, logging
from dwgraph._version import __version__
from dwgraph.algorithms.spf import dijkstra, resolve_path
from dwgraph.algorithms.types import UNREACHABLE, TraversalRecord, TraversalState
from dwgraph.analysis import GraphAlgorithms
from dwgraph.graph.io import (
    DEFAULT_REGISTRY,
    GraphFormatError,
    TypeRegistry,
    dumps,
    load_graph,
    loads,
    save_graph,
)
from dwgraph.graph.model import Edge, EdgeData, GeoLocation, Node, NodeData
from dwgraph.graph.strict_digraph import StrictDiGraph

__all__ = [
    # Version
    "__version__",
    # Model
    "StrictDiGraph",
    "NodeData",
    "EdgeData",
    "Node",
    "Edge",
    "GeoLocation",
    # Algorithms
    "GraphAlgorithms",
    "dijkstra",
    "resolve_path",
    "TraversalState",
    "TraversalRecord",
    "UNREACHABLE",
    # Persistence
    "TypeRegistry",
    "DEFAULT_REGISTRY",
    "GraphFormatError",
    "dumps",
    "loads",
    "save_graph",
    "load_graph",
    # Utilities
    "cli",
    "logging",
]
