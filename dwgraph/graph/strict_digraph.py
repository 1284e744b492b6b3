"""Strict directed weighted graph with validation and convenience APIs.

`StrictDiGraph` extends `networkx.DiGraph` to enforce explicit node
management, integer node keys, a single non-negative weighted edge per ordered
node pair, and predictable error handling. Every node carries its ``NodeData``
under the ``data`` attribute and every edge its ``EdgeData`` under ``data``
plus the plain ``weight`` attribute, so NetworkX algorithms keep working on the
same instance.
"""

from __future__ import annotations

import math
from pickle import dumps, loads
from typing import Any, Dict, Iterable, List, Optional

import networkx as nx

from dwgraph.graph.model import Edge, EdgeData, Node, NodeData

NodeKey = int


def _check_weight(weight: float) -> None:
    if isinstance(weight, bool) or not isinstance(weight, (int, float)):
        raise ValueError(f"Edge weight must be a real number, got {weight!r}.")
    if math.isnan(weight) or math.isinf(weight) or weight < 0:
        raise ValueError(f"Edge weight must be finite and non-negative, got {weight!r}.")


class StrictDiGraph(nx.DiGraph):
    """A directed weighted graph with strict rules.

    This class enforces:
      - Node keys are integers; duplicate nodes raise ValueError.
      - No automatic creation of missing nodes when adding an edge.
      - At most one edge per ordered node pair; duplicates raise ValueError.
      - Self loops and negative, NaN or infinite weights raise ValueError.
      - Removing non-existent nodes or edges raises ValueError.
      - ``copy()`` performs a pickle-based deep copy by default, so node and
        edge objects are not shared with the copy.

    Inherits from:
        networkx.DiGraph
    """

    def copy(self, as_view: bool = False, pickle: bool = True) -> StrictDiGraph:
        """Create a copy of this graph.

        By default, use pickle-based deep copying. If ``pickle=False``,
        call the parent class's copy, which supports views but shares the
        node and edge objects.

        Args:
            as_view: If True, return a view instead of a full copy; only used
                if ``pickle=False``.
            pickle: If True, perform a pickle-based deep copy.

        Returns:
            StrictDiGraph: A new instance (or view) of the graph.
        """
        if not pickle:
            return super().copy(as_view=as_view)  # type: ignore[return-value]
        return loads(dumps(self))

    #
    # Node management
    #
    def add_node(self, node_for_adding: NodeKey, **attr: Any) -> None:
        """Add a single node, disallowing duplicates.

        When no ``data`` attribute is given, a default ``Node`` is created for
        the key.

        Args:
            node_for_adding: Integer key of the node.
            **attr: Node attributes; ``data`` may hold a ``NodeData`` whose key
                equals ``node_for_adding``.

        Raises:
            ValueError: If the key is not an integer, the node already exists,
                or ``data`` does not match the key.
        """
        if isinstance(node_for_adding, bool) or not isinstance(node_for_adding, int):
            raise ValueError(f"Node key must be an integer, got {node_for_adding!r}.")
        if node_for_adding in self:
            raise ValueError(f"Node '{node_for_adding}' already exists in this graph.")

        data = attr.get("data")
        if data is None:
            attr["data"] = Node(node_for_adding)
        elif not isinstance(data, NodeData) or data.key != node_for_adding:
            raise ValueError(
                f"Node data {data!r} does not describe node '{node_for_adding}'."
            )
        super().add_node(node_for_adding, **attr)

    def add_node_data(self, node: NodeData) -> None:
        """Add a node from its ``NodeData`` object."""
        self.add_node(node.key, data=node)

    def add_nodes_from(self, nodes_for_adding: Iterable[Any], **attr: Any) -> None:
        """Add several nodes, each through ``add_node``.

        Accepts keys or ``(key, attr_dict)`` pairs like NetworkX. This also
        backs the inherited ``update()``. Nodes added before a rejected one
        stay in the graph.

        Raises:
            ValueError: Under the same conditions as ``add_node``.
        """
        for item in nodes_for_adding:
            if isinstance(item, tuple) and len(item) == 2 and isinstance(item[1], dict):
                key, node_attr = item
                self.add_node(key, **{**attr, **node_attr})
            else:
                self.add_node(item, **attr)

    def remove_node(self, n: NodeKey) -> None:
        """Remove a single node and all incident edges.

        Raises:
            ValueError: If the node does not exist in the graph.
        """
        if n not in self:
            raise ValueError(f"Node '{n}' does not exist.")
        super().remove_node(n)

    #
    # Edge management
    #
    def add_edge(self, u_of_edge: NodeKey, v_of_edge: NodeKey, **attr: Any) -> None:
        """Add a directed edge from u_of_edge to v_of_edge.

        Either ``weight`` or an ``EdgeData`` under ``data`` must be supplied. The
        ``weight`` attribute is always taken from the edge object.

        Args:
            u_of_edge: The source node. Must exist in the graph.
            v_of_edge: The target node. Must exist in the graph.
            **attr: Edge attributes.

        Raises:
            ValueError: If either node does not exist, the edge is a self loop,
                the edge already exists, or the weight is invalid.
        """
        if u_of_edge not in self:
            raise ValueError(f"Source node '{u_of_edge}' does not exist.")
        if v_of_edge not in self:
            raise ValueError(f"Target node '{v_of_edge}' does not exist.")
        if u_of_edge == v_of_edge:
            raise ValueError(f"Self loop on node '{u_of_edge}' is not allowed.")
        if self.has_edge(u_of_edge, v_of_edge):
            raise ValueError(f"Edge '{u_of_edge}' -> '{v_of_edge}' already exists.")

        data = attr.get("data")
        if data is None:
            if "weight" not in attr:
                raise ValueError(
                    f"Edge '{u_of_edge}' -> '{v_of_edge}' requires a weight."
                )
            _check_weight(attr["weight"])
            data = Edge(u_of_edge, v_of_edge, attr["weight"])
        elif (
            not isinstance(data, EdgeData)
            or data.src != u_of_edge
            or data.dest != v_of_edge
        ):
            raise ValueError(
                f"Edge data {data!r} does not describe '{u_of_edge}' -> '{v_of_edge}'."
            )
        _check_weight(data.weight)

        attr["data"] = data
        attr["weight"] = data.weight
        super().add_edge(u_of_edge, v_of_edge, **attr)

    def add_edge_data(self, edge: EdgeData) -> None:
        """Add an edge from its ``EdgeData`` object."""
        self.add_edge(edge.src, edge.dest, data=edge)

    def add_edges_from(self, ebunch_to_add: Iterable[Any], **attr: Any) -> None:
        """Add several edges, each through ``add_edge``.

        Accepts ``(u, v)`` or ``(u, v, attr_dict)`` tuples like NetworkX, which
        also covers the inherited ``add_weighted_edges_from()`` and
        ``update()``. Edges added before a rejected one stay in the graph.

        Raises:
            ValueError: If a tuple has the wrong length, or under the same
                conditions as ``add_edge``.
        """
        for item in ebunch_to_add:
            if len(item) == 3:
                u, v, edge_attr = item
            elif len(item) == 2:
                u, v = item
                edge_attr = {}
            else:
                raise ValueError(f"Edge tuple {item!r} must be (u, v) or (u, v, attr).")
            self.add_edge(u, v, **{**attr, **edge_attr})

    def connect(self, src: NodeKey, dest: NodeKey, weight: float) -> None:
        """Insert the edge ``src -> dest`` or replace the weight of an existing one."""
        if self.has_edge(src, dest):
            _check_weight(weight)
            super().remove_edge(src, dest)
        self.add_edge(src, dest, weight=weight)

    def remove_edge(self, u: NodeKey, v: NodeKey) -> None:
        """Remove the edge from u to v.

        Raises:
            ValueError: If either node or the edge does not exist.
        """
        if u not in self:
            raise ValueError(f"Source node '{u}' does not exist.")
        if v not in self:
            raise ValueError(f"Target node '{v}' does not exist.")
        if not self.has_edge(u, v):
            raise ValueError(f"No edge from '{u}' to '{v}' to remove.")
        super().remove_edge(u, v)

    #
    # Convenience methods
    #
    def get_node(self, key: NodeKey) -> Optional[NodeData]:
        """Return the node with ``key`` or None when absent."""
        if key not in self:
            return None
        return self._node[key]["data"]

    def get_edge(self, src: NodeKey, dest: NodeKey) -> Optional[EdgeData]:
        """Return the edge ``src -> dest`` or None when absent."""
        if src not in self or dest not in self._succ[src]:
            return None
        return self._succ[src][dest]["data"]

    def get_out_edges(self, key: NodeKey) -> List[EdgeData]:
        """Return the outgoing edges of ``key`` in insertion order.

        Unknown keys yield an empty list.
        """
        if key not in self:
            return []
        return [attr["data"] for attr in self._succ[key].values()]

    def get_nodes(self) -> List[NodeData]:
        """Return all nodes in insertion order."""
        return [attr["data"] for attr in self._node.values()]

    def get_edges(self) -> List[EdgeData]:
        """Return all edges grouped by source node, in insertion order."""
        return [
            attr["data"]
            for neighbors in self._succ.values()
            for attr in neighbors.values()
        ]

    def to_dict(self) -> Dict[str, Any]:
        """Convert the graph to the persisted document layout.

        Returns:
            Dict[str, Any]: Dictionary with ``format_version``, ``nodes`` and
                ``edges`` keys.
        """
        # Import here to avoid circular import
        from dwgraph.graph.io import graph_to_dict

        return graph_to_dict(self)
