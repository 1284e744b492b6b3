"""Traversal algorithms.

This package provides the Dijkstra shortest-path-first run (`spf`) and the
per-run traversal state it produces (`types`).
"""
