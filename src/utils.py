"""Shared path utilities for truss."""

from __future__ import annotations

import os
from pathlib import Path


def to_repo_relative_posix(root: str | Path, path: str | Path) -> str | None:
    """Convert an absolute path to a repo-relative POSIX path.

    Args:
        root: Absolute repository root
        path: Absolute path, already normalized

    Returns:
        Relative path with "/" separators, or None when the path is outside
        the root.

    Examples:
        >>> to_repo_relative_posix("/repo", "/repo/src/ui/view.ts")
        'src/ui/view.ts'
        >>> to_repo_relative_posix("/repo", "/elsewhere/x.ts") is None
        True
    """
    root_str = os.fspath(root)
    path_str = os.fspath(path)
    try:
        rel = os.path.relpath(path_str, root_str)
    except ValueError:
        # Different drives on Windows.
        return None

    if rel == os.curdir or rel == os.pardir or rel.startswith(os.pardir + os.sep):
        return None
    if os.path.isabs(rel):
        return None

    return Path(rel).as_posix()
