"""Types produced by traversal runs.

A ``TraversalState`` maps every node reached by a run to its distance from the
run's source and the predecessor node on one shortest path.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional

from dwgraph.graph.model import NodeData

NodeKey = int
Cost = float

# Distance reported for targets that no run can reach
UNREACHABLE: Cost = float("inf")


@dataclass
class TraversalRecord:
    """Distance from the run's source and the predecessor on a shortest path.

    Attributes:
        distance: Cumulative weight from the source (0 for the source itself).
        predecessor: Previous node on the path, None for the source.
    """

    distance: Cost
    predecessor: Optional[NodeData] = None


@dataclass
class TraversalState:
    """Per-run mapping from node key to ``TraversalRecord``.

    Presence of a key means the node is reachable from ``source``. The state is
    reinitialised with ``reset`` at the start of every run.
    """

    source: Optional[NodeKey] = None
    records: Dict[NodeKey, TraversalRecord] = field(default_factory=dict)

    def reset(self, source: Optional[NodeKey] = None) -> None:
        """Drop all records; seed the source record when a source is given."""
        self.records.clear()
        self.source = source
        if source is not None:
            self.records[source] = TraversalRecord(0.0, None)

    def distance(self, key: NodeKey) -> Cost:
        """Return the recorded distance of ``key`` or ``UNREACHABLE``."""
        record = self.records.get(key)
        return record.distance if record is not None else UNREACHABLE

    def __contains__(self, key: object) -> bool:
        return key in self.records

    def __getitem__(self, key: NodeKey) -> TraversalRecord:
        return self.records[key]

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[NodeKey]:
        return iter(self.records)
