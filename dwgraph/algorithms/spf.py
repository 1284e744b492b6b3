"""Shortest-path-first (SPF) algorithm.

Implements Dijkstra over non-negative edge weights using a binary heap with
lazy deletion. An improved tentative distance re-inserts the node; the older,
larger entry stays in the heap and is discarded when popped because the node
is already finalized. The heap order therefore always reflects the distances
recorded in the traversal state.

Notes:
    When a destination node is known, the run terminates as soon as the
    destination is popped from the frontier, i.e. once its minimal distance is
    settled. The destination is not expanded.
"""

from __future__ import annotations

from heapq import heappop, heappush
from itertools import count
from typing import List, Optional, Set, Tuple

from dwgraph.algorithms.types import Cost, NodeKey, TraversalRecord, TraversalState
from dwgraph.graph.model import NodeData
from dwgraph.graph.strict_digraph import StrictDiGraph
from dwgraph.logging import get_logger

LOGGER = get_logger(__name__)


class Frontier:
    """Min-priority queue of discovered, not yet finalized nodes.

    Entries are ``(distance, sequence, key)``; the sequence number keeps pops
    of equal distances in discovery order and avoids comparing keys.
    """

    __slots__ = ("_heap", "_sequence", "_finalized")

    def __init__(self) -> None:
        self._heap: List[Tuple[Cost, int, NodeKey]] = []
        self._sequence = count()
        self._finalized: Set[NodeKey] = set()

    def push(self, key: NodeKey, distance: Cost) -> None:
        """Insert ``key`` with a tentative distance (also serves as decrease-key)."""
        heappush(self._heap, (distance, next(self._sequence), key))

    def pop(self) -> Optional[Tuple[Cost, NodeKey]]:
        """Pop and finalize the closest non-finalized node.

        Returns:
            ``(distance, key)`` or None when only stale entries remained.
        """
        while self._heap:
            distance, _, key = heappop(self._heap)
            if key in self._finalized:
                continue
            self._finalized.add(key)
            return distance, key
        return None

    def is_finalized(self, key: NodeKey) -> bool:
        return key in self._finalized

    def __len__(self) -> int:
        return len(self._heap)


def dijkstra(
    graph: StrictDiGraph,
    src_node: NodeKey,
    dst_node: Optional[NodeKey] = None,
    state: Optional[TraversalState] = None,
) -> TraversalState:
    """Run Dijkstra's SPF from ``src_node``.

    Args:
        graph: Directed graph with non-negative ``weight`` edge attributes.
        src_node: Source node key.
        dst_node: Optional destination key. When given, the run stops once the
            destination is settled.
        state: Optional state to reuse. It is reset before the run.

    Returns:
        The traversal state: every reached node mapped to its distance from
        ``src_node`` and its predecessor. For a full run these are exactly the
        nodes reachable from ``src_node``.

    Raises:
        KeyError: If ``src_node`` is not in the graph.
    """
    outgoing_adjacencies = graph._succ  # type: ignore[attr-defined]
    node_attrs = graph._node  # type: ignore[attr-defined]
    if src_node not in outgoing_adjacencies:
        raise KeyError(f"Source node '{src_node}' is not in the graph.")

    if state is None:
        state = TraversalState()
    state.reset(src_node)
    records = state.records

    frontier = Frontier()
    frontier.push(src_node, 0.0)
    settled = 0

    while True:
        entry = frontier.pop()
        if entry is None:
            break
        node_cost, node_id = entry
        settled += 1

        if dst_node is not None and node_id == dst_node:
            break

        node = node_attrs[node_id]["data"]
        for neighbor_id, edge_attr in outgoing_adjacencies[node_id].items():
            if frontier.is_finalized(neighbor_id):
                continue
            new_cost = node_cost + edge_attr["weight"]
            record = records.get(neighbor_id)
            if record is None or new_cost < record.distance:
                records[neighbor_id] = TraversalRecord(new_cost, node)
                frontier.push(neighbor_id, new_cost)

    LOGGER.debug(
        "SPF from %s (target %s): settled %d node(s), reached %d",
        src_node,
        dst_node,
        settled,
        len(records),
    )
    return state


def resolve_path(
    graph: StrictDiGraph, state: TraversalState, dst_node: NodeKey
) -> Optional[List[NodeData]]:
    """Rebuild the source-to-destination node sequence from a traversal state.

    Args:
        graph: Graph the state was computed on.
        state: State of a run whose source is the path's source.
        dst_node: Destination key.

    Returns:
        Nodes from ``state.source`` to ``dst_node`` (inclusive), or None when
        ``dst_node`` was not reached.
    """
    if dst_node not in state:
        return None

    path: List[NodeData] = [graph._node[dst_node]["data"]]  # type: ignore[attr-defined]
    current = dst_node
    while current != state.source:
        predecessor = state[current].predecessor
        if predecessor is None:
            raise ValueError(f"Broken predecessor chain at node '{current}'.")
        path.append(predecessor)
        current = predecessor.key
    path.reverse()
    return path
