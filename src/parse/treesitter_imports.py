"""Tree-sitter based import extraction for JavaScript and TypeScript sources."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from tree_sitter import Language, Node, Parser
from tree_sitter_typescript import language_tsx, language_typescript

from contract.models import DependencyEdge
from parse.resolve import resolve_import

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

logger = logging.getLogger(__name__)

TYPESCRIPT_SUFFIXES = (".ts", ".mts", ".cts")

# tree-sitter parsers are not thread-safe; keep one set per worker thread.
_LOCAL = threading.local()


def _get_parser(dialect: str) -> Parser:
    """Return this thread's parser for the "typescript" or "tsx" grammar."""
    parsers: dict[str, Parser] | None = getattr(_LOCAL, "parsers", None)
    if parsers is None:
        parsers = {}
        _LOCAL.parsers = parsers

    parser = parsers.get(dialect)
    if parser is None:
        raw = language_typescript() if dialect == "typescript" else language_tsx()
        parser = Parser(Language(raw))
        parsers[dialect] = parser

    return parser


def dialect_for(path: str) -> str:
    """Pick the grammar for a file: plain TypeScript, or TSX for everything else.

    TSX is a superset of JavaScript with JSX, so it also covers .js/.jsx/.mjs/.cjs.
    """
    if path.endswith(TYPESCRIPT_SUFFIXES):
        return "typescript"
    return "tsx"


def _string_value(node: Node) -> str | None:
    """Return the literal contents of a ``string`` node, without quotes."""
    if node.type != "string" or node.text is None:
        return None
    return node.text[1:-1].decode("utf-8", errors="replace")


def _single_string_argument(call: Node) -> Node | None:
    arguments = call.child_by_field_name("arguments")
    if arguments is None or arguments.type != "arguments":
        return None
    values = [child for child in arguments.named_children if child.type != "comment"]
    if len(values) != 1 or values[0].type != "string":
        return None
    return values[0]


def _source_field(node: Node) -> Node | None:
    """``import ... from "x"`` and ``export ... from "x"`` both carry ``source``."""
    source = node.child_by_field_name("source")
    if source is None or source.type != "string":
        return None
    return source


def _call_specifier(node: Node) -> Node | None:
    """``require("x")`` and dynamic ``import("x")`` with a single literal argument."""
    function = node.child_by_field_name("function")
    if function is None:
        return None

    is_require = function.type == "identifier" and function.text == b"require"
    is_dynamic_import = function.type == "import"
    if not (is_require or is_dynamic_import):
        return None

    return _single_string_argument(node)


_SPECIFIER_HANDLERS: dict[str, Callable[[Node], Node | None]] = {
    "import_statement": _source_field,
    "export_statement": _source_field,
    "call_expression": _call_specifier,
}


def _match_specifier(node: Node) -> str | None:
    handler = _SPECIFIER_HANDLERS.get(node.type)
    if handler is None:
        return None
    literal = handler(node)
    if literal is None:
        return None
    return _string_value(literal)


def _traverse_node(root: Node, found: list[tuple[Node, str]]) -> None:
    """Collect (carrier node, specifier) pairs in source order.

    Generated and bundled code nests far deeper than the interpreter's
    recursion limit, so the walk keeps its own stack.
    """
    pending = [root]
    while pending:
        node = pending.pop()
        specifier = _match_specifier(node)
        if specifier is not None:
            found.append((node, specifier))
        pending.extend(reversed(node.children))


def extract_specifiers(source: bytes, dialect: str = "tsx") -> list[tuple[Node, str]]:
    """Parse source text and return every import-like node with its specifier."""
    tree = _get_parser(dialect).parse(source)
    if tree.root_node.has_error:
        logger.debug("Source has syntax errors; extracting what parsed")

    found: list[tuple[Node, str]] = []
    _traverse_node(tree.root_node, found)
    return found


def extract_edges(root: Path, relative_path: str) -> list[DependencyEdge]:
    """Extract local dependency edges from one source file.

    Args:
        root: Absolute repository root
        relative_path: Repo-relative POSIX path of the file to analyze

    Returns:
        One edge per import that resolves to a file inside the repository.
        A missing, unreadable or unparseable file yields an empty list.
    """
    file_path = root / relative_path
    try:
        source = file_path.read_bytes()
    except FileNotFoundError:
        return []
    except OSError as exc:
        logger.warning("Skipping unreadable file %s: %s", relative_path, exc)
        return []

    try:
        found = extract_specifiers(source, dialect_for(relative_path))
    except Exception:
        logger.warning(
            "Failed to parse %s; no edges extracted", relative_path, exc_info=True
        )
        return []

    edges: list[DependencyEdge] = []
    for node, specifier in found:
        to_file = resolve_import(root, relative_path, specifier)
        if to_file is None:
            logger.debug("Unresolved specifier %r in %s", specifier, relative_path)
            continue

        import_text = source[node.start_byte : node.end_byte]
        edges.append(
            DependencyEdge(
                from_file=relative_path,
                to_file=to_file,
                import_text=import_text.decode("utf-8", errors="replace").strip(),
                line=node.start_point[0] + 1,
                import_kind="internal",
            )
        )

    return edges


__all__ = ["dialect_for", "extract_edges", "extract_specifiers"]
