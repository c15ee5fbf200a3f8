"""Resolution of local import specifiers to files inside the repository."""

from __future__ import annotations

import os
import stat
from typing import TYPE_CHECKING

from utils import to_repo_relative_posix

if TYPE_CHECKING:
    from pathlib import Path

# Order is significant: the first existing candidate wins.
RESOLVABLE_EXTENSIONS: tuple[str, ...] = (
    ".ts",
    ".tsx",
    ".js",
    ".jsx",
    ".mts",
    ".cts",
    ".mjs",
    ".cjs",
)


def is_local_specifier(specifier: str) -> bool:
    """Return True for relative (`.`, `..`) and root-absolute (`/`) specifiers."""
    return specifier.startswith((".", "/"))


def candidate_paths(unresolved: str) -> list[str]:
    """Build the ordered list of filesystem paths tried for one specifier.

    Examples:
        >>> candidate_paths("/repo/a/b")[:3]
        ['/repo/a/b', '/repo/a/b.ts', '/repo/a/b.tsx']
        >>> candidate_paths("/repo/a/b")[9]
        '/repo/a/b/index.ts'
    """
    return [
        unresolved,
        *(f"{unresolved}{ext}" for ext in RESOLVABLE_EXTENSIONS),
        *(os.path.join(unresolved, f"index{ext}") for ext in RESOLVABLE_EXTENSIONS),
    ]


def _is_regular_file(candidate: str) -> bool:
    """A candidate that cannot be stat-ed counts as missing."""
    try:
        mode = os.stat(candidate).st_mode
    except (OSError, ValueError):
        return False
    return stat.S_ISREG(mode)


def resolve_import(root: Path, from_file: str, specifier: str) -> str | None:
    """Resolve an import specifier to a repo-relative POSIX file path.

    Args:
        root: Absolute repository root
        from_file: Repo-relative path of the importing file
        specifier: Import specifier as written in source (e.g. "../b/repo")

    Returns:
        The repo-relative path of the first existing candidate, or None for
        bare (package) specifiers, unresolvable specifiers, and candidates
        that lie outside the repository root.
    """
    if not is_local_specifier(specifier):
        return None

    root_str = os.fspath(root)
    if specifier.startswith("/"):
        unresolved = os.path.normpath(os.path.join(root_str, specifier[1:]))
    else:
        base_dir = os.path.dirname(os.path.join(root_str, from_file))
        unresolved = os.path.normpath(os.path.join(base_dir, specifier))

    for candidate in candidate_paths(unresolved):
        if _is_regular_file(candidate):
            return to_repo_relative_posix(root_str, candidate)

    return None


__all__ = [
    "RESOLVABLE_EXTENSIONS",
    "candidate_paths",
    "is_local_specifier",
    "resolve_import",
]
