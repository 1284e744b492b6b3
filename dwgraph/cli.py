"""Command-line interface for DWGraph."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from dwgraph.algorithms.types import UNREACHABLE
from dwgraph.analysis.engine import GraphAlgorithms
from dwgraph.logging import get_logger, level_for_flags, set_log_level

logger = get_logger(__name__)


def _load_or_exit(path: Path) -> GraphAlgorithms:
    algo = GraphAlgorithms()
    if not algo.load(path):
        print(f"ERROR: Failed to load graph: {path}")
        sys.exit(1)
    return algo


def _inspect(path: Path) -> None:
    algo = _load_or_exit(path)
    graph = algo.get_graph()
    if graph is None:
        return
    print(f"Graph: {path}")
    print(f"  nodes: {graph.number_of_nodes()}")
    print(f"  edges: {graph.number_of_edges()}")
    print(f"  strongly connected: {str(algo.is_connected()).lower()}")


def _dist(path: Path, src: int, dest: int) -> None:
    algo = _load_or_exit(path)
    distance = algo.shortest_path_dist(src, dest)
    print("inf" if distance == UNREACHABLE else f"{distance:g}")


def _path(path: Path, src: int, dest: int) -> None:
    algo = _load_or_exit(path)
    keys = algo.shortest_path_keys(src, dest)
    print("no path" if keys is None else " ".join(str(k) for k in keys))


def _connected(path: Path) -> None:
    algo = _load_or_exit(path)
    print(str(algo.is_connected()).lower())


def _convert(path: Path, out: Path) -> None:
    algo = _load_or_exit(path)
    if not algo.save(out):
        print(f"ERROR: Failed to write graph: {out}")
        sys.exit(1)
    print(f"Wrote {out}")


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``dwgraph`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="dwgraph",
        description="Query shortest paths and connectivity of saved graphs.",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{inspect,dist,path,connected,convert}",
        help="Available commands",
    )

    inspect_parser = subparsers.add_parser("inspect", help="Summarize a graph file")
    inspect_parser.add_argument("graph", type=Path, help="Path to graph JSON/YAML")

    dist_parser = subparsers.add_parser("dist", help="Print the shortest distance")
    path_parser = subparsers.add_parser("path", help="Print a shortest path")
    for p in (dist_parser, path_parser):
        p.add_argument("graph", type=Path, help="Path to graph JSON/YAML")
        p.add_argument("src", type=int, help="Source node key")
        p.add_argument("dest", type=int, help="Destination node key")

    connected_parser = subparsers.add_parser(
        "connected", help="Print whether the graph is strongly connected"
    )
    connected_parser.add_argument("graph", type=Path, help="Path to graph JSON/YAML")

    convert_parser = subparsers.add_parser(
        "convert", help="Re-save a graph; the output suffix selects JSON or YAML"
    )
    convert_parser.add_argument("graph", type=Path, help="Path to graph JSON/YAML")
    convert_parser.add_argument("out", type=Path, help="Output file")

    effective_args = sys.argv[1:] if argv is None else argv

    # If no arguments are provided, show help and exit cleanly
    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    set_log_level(level_for_flags(args.verbose, args.quiet))
    logger.debug("Debug logging enabled")

    if args.command == "inspect":
        _inspect(args.graph)
    elif args.command == "dist":
        _dist(args.graph, args.src, args.dest)
    elif args.command == "path":
        _path(args.graph, args.src, args.dest)
    elif args.command == "connected":
        _connected(args.graph)
    elif args.command == "convert":
        _convert(args.graph, args.out)


if __name__ == "__main__":
    main()
