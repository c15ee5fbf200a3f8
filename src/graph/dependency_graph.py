"""Dependency edge aggregation and the optional node-indexed graph."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

from graph.algos import find_cycles
from parse.treesitter_imports import extract_edges

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from pathlib import Path

    from contract.models import DependencyEdge

logger = logging.getLogger(__name__)


def sort_edges(edges: Iterable[DependencyEdge]) -> list[DependencyEdge]:
    """Order edges by (from_file, line, to_file) for reproducible output."""
    return sorted(edges, key=lambda edge: edge.sort_key())


def build_dependency_edges(
    root: Path,
    files: Sequence[str],
    *,
    jobs: int = 1,
) -> list[DependencyEdge]:
    """Extract and aggregate dependency edges for every discovered file.

    Args:
        root: Absolute repository root
        files: Repo-relative POSIX paths of the files to analyze
        jobs: Number of worker threads used for per-file extraction

    Returns:
        All edges, sorted by (from_file, line, to_file). The order never
        depends on which worker finished first.
    """
    edges: list[DependencyEdge] = []

    if jobs > 1 and len(files) > 1:
        with ThreadPoolExecutor(max_workers=jobs) as pool:
            for file_edges in pool.map(lambda f: extract_edges(root, f), files):
                edges.extend(file_edges)
    else:
        for file in files:
            edges.extend(extract_edges(root, file))

    logger.debug("Extracted %d edges from %d files", len(edges), len(files))
    return sort_edges(edges)


class GraphNode:
    """One source file with its outgoing and incoming dependency edges."""

    def __init__(self, file: str) -> None:
        self.file = file
        self.outgoing: list[GraphEdge] = []
        self.incoming: list[GraphEdge] = []

    def __repr__(self) -> str:
        return (
            f"GraphNode({self.file!r}, outgoing={len(self.outgoing)}, "
            f"incoming={len(self.incoming)})"
        )


class GraphEdge:
    """A dependency edge linked into its endpoint nodes."""

    def __init__(
        self, source: GraphNode, target: GraphNode, meta: DependencyEdge
    ) -> None:
        self.source = source
        self.target = target
        self.meta = meta
        source.outgoing.append(self)
        target.incoming.append(self)

    def __repr__(self) -> str:
        return f"GraphEdge({self.source.file!r} -> {self.target.file!r})"


class DependencyGraph:
    """Node-indexed adjacency built from the flat edge list.

    Rule evaluation works on the flat list; this structure exists for
    analyses that need adjacency, such as cycle detection.
    """

    def __init__(self) -> None:
        self.nodes: dict[str, GraphNode] = {}
        self.edges: list[GraphEdge] = []

    @classmethod
    def from_edges(cls, edges: Iterable[DependencyEdge]) -> DependencyGraph:
        graph = cls()
        for edge in edges:
            graph.add_edge(edge)
        return graph

    def node(self, file: str) -> GraphNode:
        """Return the node for a file, creating it on first use."""
        existing = self.nodes.get(file)
        if existing is None:
            existing = GraphNode(file)
            self.nodes[file] = existing
        return existing

    def add_edge(self, edge: DependencyEdge) -> GraphEdge:
        graph_edge = GraphEdge(
            self.node(edge.from_file), self.node(edge.to_file), edge
        )
        self.edges.append(graph_edge)
        return graph_edge

    def adjacency(self) -> dict[str, set[str]]:
        return {
            file: {edge.target.file for edge in node.outgoing}
            for file, node in self.nodes.items()
        }

    def find_cycles(self) -> list[list[str]]:
        return find_cycles(self.adjacency())


__all__ = [
    "DependencyGraph",
    "GraphEdge",
    "GraphNode",
    "build_dependency_edges",
    "sort_edges",
]
