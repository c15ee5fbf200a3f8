"""Import extraction and resolution for JavaScript and TypeScript sources."""

from parse.resolve import RESOLVABLE_EXTENSIONS, is_local_specifier, resolve_import
from parse.treesitter_imports import extract_edges, extract_specifiers

__all__ = [
    "RESOLVABLE_EXTENSIONS",
    "extract_edges",
    "extract_specifiers",
    "is_local_specifier",
    "resolve_import",
]
