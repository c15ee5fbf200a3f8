"""Source file discovery for truss."""

from __future__ import annotations

import logging
from fnmatch import fnmatch
from typing import TYPE_CHECKING, cast

from gitignore_parser import parse_gitignore  # type: ignore[import-untyped]

from check.results import ErrorKind, Failure, Result, Success

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Sequence
    from pathlib import Path

logger = logging.getLogger(__name__)

SOURCE_EXTENSIONS = frozenset({".ts", ".tsx", ".js", ".jsx"})

ALWAYS_EXCLUDED_DIRS = frozenset({"node_modules", ".git"})


def _should_include_file(
    path: Path,
    directory: Path,
    gitignore_matches: Callable[[str], bool] | None,
    exclude_patterns: Sequence[str],
) -> bool:
    """Check if a file should be included based on all filtering rules."""
    if path.suffix not in SOURCE_EXTENSIONS:
        return False

    if not path.is_file() or path.is_symlink():
        return False

    if not _is_within_root(path, directory):
        return False

    try:
        rel_path = path.relative_to(directory)
    except ValueError:
        return False

    if any(part in ALWAYS_EXCLUDED_DIRS for part in rel_path.parts):
        return False

    if gitignore_matches is not None and gitignore_matches(str(path)):
        return False

    rel_path_str = rel_path.as_posix()
    return not any(fnmatch(rel_path_str, pat) for pat in exclude_patterns)


def _is_within_root(path: Path, root: Path) -> bool:
    """Return True when the resolved path stays within the resolved root."""
    try:
        root_resolved = root.resolve()
        path_resolved = path.resolve()
    except OSError:
        return False

    try:
        path_resolved.relative_to(root_resolved)
    except ValueError:
        return False

    return True


def _iter_gitignore_files(root: Path) -> list[Path]:
    """Return sorted list of .gitignore files under root (including root)."""
    gitignore_paths = [root / ".gitignore"]
    gitignore_paths.extend(
        path
        for path in root.rglob(".gitignore")
        if not ALWAYS_EXCLUDED_DIRS.intersection(path.relative_to(root).parts)
    )
    unique_paths = {
        path for path in gitignore_paths if path.is_file() and not path.is_symlink()
    }
    return sorted(unique_paths, key=lambda p: p.relative_to(root).as_posix())


def _build_gitignore_matcher(
    root: Path,
    *,
    nested_gitignore: bool,
) -> Callable[[str], bool] | None:
    if not nested_gitignore:
        gitignore_path = root / ".gitignore"
        if gitignore_path.is_file():
            return cast("Callable[[str], bool]", parse_gitignore(gitignore_path))
        return None

    gitignore_paths = _iter_gitignore_files(root)
    if not gitignore_paths:
        return None

    matchers = [parse_gitignore(path) for path in gitignore_paths]

    def matches(path_str: str) -> bool:
        for matcher in matchers:
            try:
                if matcher(path_str):
                    return True
            except ValueError:
                # Path outside this .gitignore's base directory.
                continue
        return False

    return matches


def find_source_files(
    directory: Path,
    *,
    extra_ignores: Sequence[str] = (),
    nested_gitignore: bool = False,
) -> Iterator[str]:
    """Find all JavaScript/TypeScript source files, respecting .gitignore.

    Args:
        directory: Repository root to search
        extra_ignores: fnmatch patterns (repo-relative); matching files are
            excluded
        nested_gitignore: Compose every nested .gitignore instead of only
            the root one

    Yields:
        Repo-relative POSIX paths, sorted lexicographically for
        deterministic ordering.
    """
    gitignore_matches = _build_gitignore_matcher(
        directory,
        nested_gitignore=nested_gitignore,
    )

    matched_files = [
        path.relative_to(directory).as_posix()
        for path in directory.rglob("*")
        if _should_include_file(path, directory, gitignore_matches, extra_ignores)
    ]

    matched_files.sort()

    yield from matched_files


def discover_source_files(
    directory: Path,
    *,
    extra_ignores: Sequence[str] = (),
    nested_gitignore: bool = False,
) -> Result[list[str]]:
    """Discover source files, reporting "nothing found" as a config failure."""
    try:
        files = list(
            find_source_files(
                directory,
                extra_ignores=extra_ignores,
                nested_gitignore=nested_gitignore,
            )
        )
    except OSError as exc:
        return Failure(ErrorKind.INTERNAL, f"File discovery failed: {exc}")

    if not files:
        extensions = "/".join(sorted(SOURCE_EXTENSIONS))
        return Failure(
            ErrorKind.CONFIG,
            f"No source files found ({extensions}) under {directory}. "
            "Check the repository root and ignore settings.",
        )

    logger.debug("Discovered %d source files under %s", len(files), directory)
    return Success(files)


__all__ = [
    "SOURCE_EXTENSIONS",
    "_should_include_file",
    "discover_source_files",
    "find_source_files",
]
