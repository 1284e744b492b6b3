"""Serialization of `StrictDiGraph` to structured text and back.

Documents are plain dicts with the layout::

    {
        "format_version": 1,
        "nodes": [
            {"type": "Node", "key": 1, "location": {...} | null, "info": "", "tag": 0},
            ...
        ],
        "edges": [
            {"src": 1, "out": [{"type": "Edge", "dest": 2, "weight": 1.0, ...}, ...]},
            ...
        ]
    }

Nodes keep graph insertion order and ``edges`` holds one adjacency entry per
node with outgoing edges. Each record stores the concrete type name. On load,
the abstract capability (``NodeData`` or ``EdgeData``) is resolved through a
`TypeRegistry` to exactly one concrete builder, and the stored type name must
match that builder.

Text encodings are pretty-printed JSON (default) or YAML. ``loads`` validates
the document against the packaged schema ``dwgraph/schemas/graph.json``.
"""

from __future__ import annotations

import json
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Type, TypeVar, Union

import jsonschema
import yaml

from dwgraph.config import PERSISTENCE_CONFIG
from dwgraph.graph.model import Edge, EdgeData, Node, NodeData
from dwgraph.graph.strict_digraph import StrictDiGraph
from dwgraph.logging import get_logger

LOGGER = get_logger(__name__)

T = TypeVar("T")

FORMATS = ("json", "yaml")


class GraphFormatError(ValueError):
    """Raised when persisted graph text cannot be turned into a graph."""


class TypeRegistry:
    """Map an abstract node/edge capability to one concrete builder class.

    Builders must subclass the capability and provide a ``from_dict``
    classmethod (edges receive the source key as ``src``).
    """

    def __init__(self) -> None:
        self._builders: Dict[type, type] = {}

    def register(self, capability: Type[T]) -> Callable[[Type[T]], Type[T]]:
        """Return a class decorator that registers the builder for ``capability``.

        A later registration for the same capability replaces the earlier one.

        Raises:
            TypeError: If the decorated class does not implement ``capability``.
        """

        def decorator(cls: Type[T]) -> Type[T]:
            if not (isinstance(cls, type) and issubclass(cls, capability)):
                raise TypeError(
                    f"{cls!r} does not implement {capability.__name__}."
                )
            self._builders[capability] = cls
            return cls

        return decorator

    def resolve(self, capability: type) -> type:
        """Return the builder registered for ``capability``.

        Raises:
            KeyError: If nothing is registered for ``capability``.
        """
        try:
            return self._builders[capability]
        except KeyError:
            raise KeyError(
                f"No type registered for capability '{capability.__name__}'."
            ) from None

    def copy(self) -> TypeRegistry:
        registry = TypeRegistry()
        registry._builders.update(self._builders)
        return registry


DEFAULT_REGISTRY = TypeRegistry()
DEFAULT_REGISTRY.register(NodeData)(Node)
DEFAULT_REGISTRY.register(EdgeData)(Edge)


@lru_cache(maxsize=1)
def _graph_schema() -> Dict[str, Any]:
    with (
        resources.files("dwgraph.schemas")
        .joinpath("graph.json")
        .open("r", encoding="utf-8")
    ) as f:  # type: ignore[attr-defined]
        return json.load(f)


def graph_to_dict(graph: StrictDiGraph) -> Dict[str, Any]:
    """Convert a StrictDiGraph into the persisted document layout.

    Args:
        graph: The graph to convert.

    Returns:
        A JSON-compatible dict with ``format_version``, ``nodes`` and ``edges``.
    """
    adjacency = []
    for node in graph.get_nodes():
        out = graph.get_out_edges(node.key)
        if out:
            adjacency.append(
                {
                    "src": node.key,
                    "out": [{"type": type(e).__name__, **e.to_dict()} for e in out],
                }
            )

    return {
        "format_version": PERSISTENCE_CONFIG.format_version,
        "nodes": [{"type": type(n).__name__, **n.to_dict()} for n in graph.get_nodes()],
        "edges": adjacency,
    }


def _resolve_builder(registry: TypeRegistry, capability: type, record: Dict[str, Any]):
    try:
        builder = registry.resolve(capability)
    except KeyError as exc:
        raise GraphFormatError(str(exc)) from exc
    if record["type"] != builder.__name__:
        raise GraphFormatError(
            f"Record type '{record['type']}' does not match registered "
            f"{capability.__name__} type '{builder.__name__}'."
        )
    return builder


def dict_to_graph(
    data: Dict[str, Any], registry: Optional[TypeRegistry] = None
) -> StrictDiGraph:
    """Build a new StrictDiGraph from its document layout.

    The graph is assembled from scratch; nothing outside the returned object is
    modified.

    Args:
        data: Document as produced by ``graph_to_dict``.
        registry: Capability registry; defaults to ``DEFAULT_REGISTRY``.

    Returns:
        The reconstructed graph.

    Raises:
        GraphFormatError: If the document violates the schema, has an
            unsupported version, or describes an invalid graph.
    """
    registry = registry or DEFAULT_REGISTRY

    try:
        jsonschema.validate(data, _graph_schema())
    except jsonschema.ValidationError as exc:
        raise GraphFormatError(f"Invalid graph document: {exc.message}") from exc

    version = data.get("format_version", PERSISTENCE_CONFIG.format_version)
    if version != PERSISTENCE_CONFIG.format_version:
        raise GraphFormatError(f"Unsupported graph format version: {version}.")

    graph = StrictDiGraph()
    try:
        for record in data["nodes"]:
            builder = _resolve_builder(registry, NodeData, record)
            graph.add_node_data(builder.from_dict(record))

        for adjacency in data["edges"]:
            src = adjacency["src"]
            for record in adjacency["out"]:
                builder = _resolve_builder(registry, EdgeData, record)
                graph.add_edge_data(builder.from_dict(record, src=src))
    except GraphFormatError:
        raise
    except (KeyError, TypeError, ValueError) as exc:
        raise GraphFormatError(f"Invalid graph document: {exc}") from exc

    return graph


def dumps(graph: StrictDiGraph, fmt: str = "json") -> str:
    """Encode a graph as pretty JSON or YAML text.

    Raises:
        ValueError: If ``fmt`` is not a supported format.
        GraphFormatError: If a node or edge holds a value the encoder cannot
            represent.
    """
    if fmt not in FORMATS:
        raise ValueError(f"Unsupported format '{fmt}'. Expected one of {FORMATS}.")
    data = graph_to_dict(graph)
    try:
        if fmt == "json":
            return json.dumps(data, indent=PERSISTENCE_CONFIG.indent) + "\n"
        return yaml.safe_dump(data, sort_keys=False, indent=PERSISTENCE_CONFIG.indent)
    except (TypeError, ValueError, yaml.YAMLError) as exc:
        raise GraphFormatError(f"Cannot encode graph as {fmt}: {exc}") from exc


def loads(
    text: str, fmt: str = "json", registry: Optional[TypeRegistry] = None
) -> StrictDiGraph:
    """Decode JSON or YAML text into a new graph.

    Raises:
        ValueError: If ``fmt`` is not a supported format.
        GraphFormatError: If the text is malformed or describes an invalid graph.
    """
    if fmt not in FORMATS:
        raise ValueError(f"Unsupported format '{fmt}'. Expected one of {FORMATS}.")
    try:
        data = json.loads(text) if fmt == "json" else yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise GraphFormatError(f"Malformed {fmt} graph text: {exc}") from exc
    if not isinstance(data, dict):
        raise GraphFormatError("Graph text must decode to a mapping at top-level.")
    return dict_to_graph(data, registry)


def save_graph(graph: StrictDiGraph, path: Union[str, Path]) -> None:
    """Write a graph to ``path``; the suffix selects JSON or YAML.

    The text is fully encoded before the file is opened, so an encoding
    failure leaves no file behind.

    Raises:
        OSError: If the file cannot be written.
        ValueError: If ``path`` is not a usable file name.
        GraphFormatError: If the graph cannot be encoded.
    """
    path = Path(path)
    fmt = PERSISTENCE_CONFIG.format_for_suffix(path.suffix)
    path.write_text(dumps(graph, fmt), encoding=PERSISTENCE_CONFIG.encoding)
    LOGGER.debug(
        "Wrote %d node(s), %d edge(s) to %s",
        graph.number_of_nodes(),
        graph.number_of_edges(),
        path,
    )


def load_graph(
    path: Union[str, Path], registry: Optional[TypeRegistry] = None
) -> StrictDiGraph:
    """Read a graph from ``path``; the suffix selects JSON or YAML.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If ``path`` is not a usable file name.
        GraphFormatError: If the content is not a valid graph document.
    """
    path = Path(path)
    fmt = PERSISTENCE_CONFIG.format_for_suffix(path.suffix)
    try:
        text = path.read_text(encoding=PERSISTENCE_CONFIG.encoding)
    except UnicodeDecodeError as exc:
        raise GraphFormatError(f"Graph file {path} is not valid text: {exc}") from exc
    return loads(text, fmt, registry)
