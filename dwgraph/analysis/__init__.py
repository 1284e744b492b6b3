"""Graph analysis API.

`GraphAlgorithms` binds to one `StrictDiGraph` and answers shortest-distance,
shortest-path and strong-connectivity queries, and saves/loads the bound graph.
"""

from __future__ import annotations

from dwgraph.analysis.engine import GraphAlgorithms

__all__ = ["GraphAlgorithms"]
