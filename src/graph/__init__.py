"""Dependency graph construction for truss."""

from graph.algos import find_cycles
from graph.dependency_graph import (
    DependencyGraph,
    GraphEdge,
    GraphNode,
    build_dependency_edges,
    sort_edges,
)

__all__ = [
    "DependencyGraph",
    "GraphEdge",
    "GraphNode",
    "build_dependency_edges",
    "find_cycles",
    "sort_edges",
]
