"""Source file discovery for truss."""

from scan.files import discover_source_files, find_source_files

__all__ = ["discover_source_files", "find_source_files"]
