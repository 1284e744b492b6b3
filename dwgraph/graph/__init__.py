"""Graph primitives and helpers.

This package provides the node/edge capabilities and their default
implementations (`model`), the strict directed weighted graph type
`StrictDiGraph` (`strict_digraph`), and serialization helpers (`io`).
"""
