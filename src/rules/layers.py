"""Layer classification for repo-relative file paths."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

WILDCARD_SUFFIX = "**"


def normalize_pattern(pattern: str) -> str:
    """Strip a trailing ``**`` so the pattern can be used as a literal prefix."""
    if pattern.endswith(WILDCARD_SUFFIX):
        return pattern[: -len(WILDCARD_SUFFIX)]
    return pattern


def classify_layer(path: str, layers: Mapping[str, Sequence[str]]) -> str | None:
    """Classify a file path into an architectural layer.

    Uses first-match-wins semantics: layers are tried in declaration order,
    and within a layer its patterns in declaration order. The first pattern
    whose normalized form is a prefix of the path determines the layer.
    """
    for name, patterns in layers.items():
        for pattern in patterns:
            if path.startswith(normalize_pattern(pattern)):
                return name
    return None


class LayerMatcher:
    """Memoizing wrapper around :func:`classify_layer` scoped to one run.

    Unmatched paths are cached as ``None`` too; the cached value is always
    exactly what :func:`classify_layer` returns for the path.
    """

    def __init__(self, layers: Mapping[str, Sequence[str]]) -> None:
        self._layers = layers
        self._cache: dict[str, str | None] = {}

    def match(self, path: str) -> str | None:
        try:
            return self._cache[path]
        except KeyError:
            layer = classify_layer(path, self._layers)
            self._cache[path] = layer
            return layer

    def __len__(self) -> int:
        return len(self._cache)


__all__ = ["LayerMatcher", "classify_layer", "normalize_pattern"]
