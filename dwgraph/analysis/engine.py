"""GraphAlgorithms: shortest paths, connectivity and persistence for one graph.

Usage:
    from dwgraph import GraphAlgorithms, StrictDiGraph

    graph = StrictDiGraph()
    ...
    algo = GraphAlgorithms(graph)
    algo.shortest_path_dist(1, 3)
    algo.shortest_path(1, 3)
    algo.is_connected()
    algo.save("graph.json")

Expected failures never raise: missing graph, unknown keys and unreachable
targets resolve to ``UNREACHABLE`` or ``None``; save/load failures return
``False`` and log the cause.

An instance is not safe for concurrent use. Its single ``TraversalState`` is
reset by every run, so concurrent callers need separate instances; several
instances may be bound to the same graph.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Union

from dwgraph.algorithms.spf import dijkstra, resolve_path
from dwgraph.algorithms.types import UNREACHABLE, Cost, NodeKey, TraversalState
from dwgraph.graph.io import TypeRegistry, load_graph, save_graph
from dwgraph.graph.model import NodeData
from dwgraph.graph.strict_digraph import StrictDiGraph
from dwgraph.logging import get_logger

LOGGER = get_logger(__name__)


class GraphAlgorithms:
    """Directed weighted graph algorithms bound to a single graph.

    Attributes:
        state: Traversal state of the most recent run. A distance query leaves
            the state of its run here for the path reconstruction that follows.
        registry: Capability registry used by ``load``; None selects the
            default registry.
    """

    def __init__(
        self,
        graph: Optional[StrictDiGraph] = None,
        registry: Optional[TypeRegistry] = None,
    ) -> None:
        self._graph = graph
        self.registry = registry
        self.state = TraversalState()

    def init(self, graph: Optional[StrictDiGraph]) -> None:
        """Bind the graph the algorithms operate on (by reference)."""
        self._graph = graph
        self.state.reset()

    def get_graph(self) -> Optional[StrictDiGraph]:
        """Return the bound graph, or None."""
        return self._graph

    @property
    def graph(self) -> Optional[StrictDiGraph]:
        return self._graph

    def copy(self) -> Optional[StrictDiGraph]:
        """Return a deep copy of the bound graph, or None when nothing is bound."""
        if self._graph is None:
            return None
        return self._graph.copy()

    def _has_node(self, key: NodeKey) -> bool:
        return self._graph is not None and self._graph.get_node(key) is not None

    def is_connected(self) -> bool:
        """Return True if every node reaches every other node.

        Graphs with at most one node, and the unbound case, are connected. Runs
        a full SPF from each node and stops at the first run that misses a node.
        """
        graph = self._graph
        if graph is None or graph.number_of_nodes() <= 1:
            return True

        total = graph.number_of_nodes()
        for node_key in graph:
            dijkstra(graph, node_key, state=self.state)
            if len(self.state) != total:
                LOGGER.debug(
                    "Node %s reaches %d of %d node(s); graph is not strongly connected",
                    node_key,
                    len(self.state),
                    total,
                )
                return False
        return True

    def shortest_path_dist(self, src: NodeKey, dest: NodeKey) -> Cost:
        """Return the shortest distance from ``src`` to ``dest``.

        Returns:
            The distance, ``0.0`` when ``src == dest``, or ``UNREACHABLE`` if no
            graph is bound, either key is missing, or no path exists.
        """
        if not (self._has_node(src) and self._has_node(dest)):
            return UNREACHABLE
        if src == dest:
            return 0.0

        dijkstra(self._graph, src, dest, state=self.state)  # type: ignore[arg-type]
        return self.state.distance(dest)

    def shortest_path(self, src: NodeKey, dest: NodeKey) -> Optional[List[NodeData]]:
        """Return the nodes of a shortest path from ``src`` to ``dest``.

        Returns:
            Nodes from ``src`` to ``dest`` inclusive (``[src]`` when they are
            equal), or None when there is no path. An empty list is never
            returned.
        """
        if self._graph is None or self._graph.number_of_nodes() == 0:
            return None
        if self.shortest_path_dist(src, dest) == UNREACHABLE:
            return None
        if src == dest:
            return [self._graph.get_node(src)]  # type: ignore[list-item]
        return resolve_path(self._graph, self.state, dest)

    def shortest_path_keys(self, src: NodeKey, dest: NodeKey) -> Optional[List[NodeKey]]:
        """Same as ``shortest_path`` but returns node keys."""
        path = self.shortest_path(src, dest)
        if path is None:
            return None
        return [node.key for node in path]

    def save(self, file: Union[str, Path]) -> bool:
        """Save the bound graph to ``file`` (JSON, or YAML for .yaml/.yml).

        Unwritable paths and values the encoder cannot represent are logged
        and reported as False.

        Returns:
            True if and only if the file was written.
        """
        if self._graph is None:
            LOGGER.error("Cannot save to %s: no graph is bound", file)
            return False
        try:
            save_graph(self._graph, file)
        except (OSError, ValueError) as exc:
            LOGGER.error("Failed to save graph to %s: %s", file, exc)
            return False
        LOGGER.info("Saved graph to %s", file)
        return True

    def load(self, file: Union[str, Path]) -> bool:
        """Load a graph from ``file`` and bind it.

        The file is parsed into a new graph first; the bound graph is replaced
        only when that succeeds. Unreadable files, unusable file names and
        invalid documents are logged and reported as False.

        Returns:
            True if and only if the graph was loaded.
        """
        try:
            staged = load_graph(file, self.registry)
        except (OSError, ValueError) as exc:
            LOGGER.error("Failed to load graph from %s: %s", file, exc)
            return False

        self.init(staged)
        LOGGER.info(
            "Loaded graph from %s: %d node(s), %d edge(s)",
            file,
            staged.number_of_nodes(),
            staged.number_of_edges(),
        )
        return True
