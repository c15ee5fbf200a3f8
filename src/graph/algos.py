"""Graph algorithms for truss dependency graphs."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping, Set


class _ComponentSearch:
    """Iterative Tarjan strongly-connected-component search.

    Long import chains are deeper than the interpreter's recursion limit, so
    the depth-first search keeps an explicit frame stack of
    (file, remaining successors).
    """

    def __init__(self, graph: Mapping[str, Set[str]]) -> None:
        self.graph = graph
        self.order: dict[str, int] = {}
        self.low: dict[str, int] = {}
        self.path: list[str] = []
        self.on_path: set[str] = set()
        self.components: list[list[str]] = []

    def _successors(self, file: str) -> Iterator[str]:
        return iter(sorted(self.graph.get(file, ())))

    def _enter(self, file: str, frames: list[tuple[str, Iterator[str]]]) -> None:
        self.order[file] = self.low[file] = len(self.order)
        self.path.append(file)
        self.on_path.add(file)
        frames.append((file, self._successors(file)))

    def _close(self, file: str) -> None:
        component: list[str] = []
        while True:
            member = self.path.pop()
            self.on_path.discard(member)
            component.append(member)
            if member == file:
                break
        self.components.append(component)

    def visit(self, start: str) -> None:
        frames: list[tuple[str, Iterator[str]]] = []
        self._enter(start, frames)

        while frames:
            file, successors = frames[-1]
            for target in successors:
                if target not in self.order:
                    self._enter(target, frames)
                    break
                if target in self.on_path:
                    self.low[file] = min(self.low[file], self.order[target])
            else:
                frames.pop()
                if frames:
                    parent = frames[-1][0]
                    self.low[parent] = min(self.low[parent], self.low[file])
                if self.low[file] == self.order[file]:
                    self._close(file)


def find_cycles(graph: Mapping[str, Set[str]]) -> list[list[str]]:
    """Find import cycles in a directed file graph.

    Args:
        graph: Mapping of file path -> set of file paths it depends on

    Returns:
        Sorted list of cycles, each a sorted list of file paths. A file that
        imports itself is reported as a single-element cycle.
    """
    search = _ComponentSearch(graph)
    for file in sorted(graph):
        if file not in search.order:
            search.visit(file)

    cycles = [
        sorted(component)
        for component in search.components
        if len(component) > 1 or component[0] in graph.get(component[0], ())
    ]
    cycles.sort()
    return cycles


__all__ = ["find_cycles"]
