"""Node and edge capabilities of the directed weighted graph.

``NodeData`` and ``EdgeData`` are the abstract capabilities the algorithms and
the persistence layer work against. ``Node`` and ``Edge`` are the concrete
implementations registered for them by default (see ``dwgraph.graph.io``).
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class GeoLocation:
    """Display position of a node. Not used by any algorithm."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def distance(self, other: GeoLocation) -> float:
        """Return the Euclidean distance to ``other``."""
        return math.dist((self.x, self.y, self.z), (other.x, other.y, other.z))

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "z": self.z}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> GeoLocation:
        return cls(float(data["x"]), float(data["y"]), float(data.get("z", 0.0)))


class NodeData(ABC):
    """Capability of a graph vertex.

    The key is the node identity inside a graph and never changes. Location,
    info and tag are free-form display attributes.
    """

    @property
    @abstractmethod
    def key(self) -> int:
        """Unique integer key of the node."""

    @property
    @abstractmethod
    def location(self) -> Optional[GeoLocation]:
        """Optional display position."""

    @property
    @abstractmethod
    def info(self) -> str:
        """Free-form metadata string."""

    @property
    @abstractmethod
    def tag(self) -> int:
        """Free-form integer marker."""

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-compatible record of this node (without type name)."""


class EdgeData(ABC):
    """Capability of a directed weighted edge ``src -> dest``."""

    @property
    @abstractmethod
    def src(self) -> int:
        """Key of the source node."""

    @property
    @abstractmethod
    def dest(self) -> int:
        """Key of the destination node."""

    @property
    @abstractmethod
    def weight(self) -> float:
        """Non-negative edge weight."""

    @property
    @abstractmethod
    def info(self) -> str:
        """Free-form metadata string."""

    @property
    @abstractmethod
    def tag(self) -> int:
        """Free-form integer marker."""

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-compatible record of this edge (without type name)."""


class Node(NodeData):
    """Default node implementation.

    Attributes:
        key: Unique integer key (read-only).
        location: Optional ``GeoLocation``.
        info: Metadata string.
        tag: Integer marker.
    """

    __slots__ = ("_key", "_location", "_info", "_tag")

    def __init__(
        self,
        key: int,
        location: Optional[GeoLocation] = None,
        info: str = "",
        tag: int = 0,
    ) -> None:
        self._key = int(key)
        self._location = location
        self._info = info
        self._tag = tag

    @property
    def key(self) -> int:
        return self._key

    @property
    def location(self) -> Optional[GeoLocation]:
        return self._location

    @location.setter
    def location(self, value: Optional[GeoLocation]) -> None:
        self._location = value

    @property
    def info(self) -> str:
        return self._info

    @info.setter
    def info(self, value: str) -> None:
        self._info = value

    @property
    def tag(self) -> int:
        return self._tag

    @tag.setter
    def tag(self, value: int) -> None:
        self._tag = value

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self._key,
            "location": self._location.to_dict() if self._location else None,
            "info": self._info,
            "tag": self._tag,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Node:
        location = data.get("location")
        return cls(
            key=data["key"],
            location=GeoLocation.from_dict(location) if location else None,
            info=data.get("info", ""),
            tag=data.get("tag", 0),
        )

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self) -> int:
        return hash(self._key)

    def __repr__(self) -> str:
        return f"Node(key={self._key!r}, location={self._location!r}, info={self._info!r}, tag={self._tag!r})"


class Edge(EdgeData):
    """Default edge implementation.

    Endpoints and weight are fixed at construction; ``info`` and ``tag`` may be
    changed afterwards.
    """

    __slots__ = ("_src", "_dest", "_weight", "_info", "_tag")

    def __init__(
        self, src: int, dest: int, weight: float, info: str = "", tag: int = 0
    ) -> None:
        self._src = int(src)
        self._dest = int(dest)
        self._weight = float(weight)
        self._info = info
        self._tag = tag

    @property
    def src(self) -> int:
        return self._src

    @property
    def dest(self) -> int:
        return self._dest

    @property
    def weight(self) -> float:
        return self._weight

    @property
    def info(self) -> str:
        return self._info

    @info.setter
    def info(self, value: str) -> None:
        self._info = value

    @property
    def tag(self) -> int:
        return self._tag

    @tag.setter
    def tag(self, value: int) -> None:
        self._tag = value

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dest": self._dest,
            "weight": self._weight,
            "info": self._info,
            "tag": self._tag,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], src: int) -> Edge:
        return cls(
            src=src,
            dest=data["dest"],
            weight=data["weight"],
            info=data.get("info", ""),
            tag=data.get("tag", 0),
        )

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Edge):
            return NotImplemented
        return (self._src, self.to_dict()) == (other._src, other.to_dict())

    def __hash__(self) -> int:
        return hash((self._src, self._dest))

    def __repr__(self) -> str:
        return f"Edge(src={self._src!r}, dest={self._dest!r}, weight={self._weight!r})"
