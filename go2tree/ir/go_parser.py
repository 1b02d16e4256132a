"""Go frontend adapter — parses Go source with tree-sitter-go.

The rest of go2tree only sees the returned tree's nodes through the small
protocol the dispatcher uses (``type``, ``id``, ``text``, named children and
field accessors, start/end points).
"""

from __future__ import annotations

import logging

import tree_sitter_go
from tree_sitter import Language, Parser, Tree

from go2tree.errors import ParseError

logger = logging.getLogger(__name__)

GO_LANGUAGE = Language(tree_sitter_go.language())


def parse_source(source: bytes, path: str = "<memory>", allow_syntax_errors: bool = False) -> Tree:
    """Parse Go source bytes into a tree-sitter tree.

    Args:
        source: Raw file contents.
        path: Used in error messages only.
        allow_syntax_errors: Keep going on syntax errors; malformed regions
            then show up as ``bad-node`` leaves in the converted tree.
    """
    _check_encoding(source, path)
    parser = Parser(GO_LANGUAGE)
    tree = parser.parse(source)
    root = tree.root_node

    if root.has_error:
        bad = _first_error(root)
        line, column = bad.start_point[0] + 1, bad.start_point[1] + 1
        if not allow_syntax_errors:
            message = f"missing {bad.type!r}" if bad.is_missing else "syntax error"
            raise ParseError(message, path=path, line=line, column=column)
        logger.info("%s:%d:%d: syntax error, continuing with malformed nodes", path, line, column)

    if not any(child.type == "package_clause" for child in root.named_children):
        raise ParseError("expected 'package' clause", path=path, line=1, column=1)

    return tree


def _check_encoding(source: bytes, path: str) -> None:
    """Reject source that is not valid UTF-8, pointing at the first bad byte."""
    try:
        source.decode("utf-8")
    except UnicodeDecodeError as e:
        line = source.count(b"\n", 0, e.start) + 1
        column = e.start - (source.rfind(b"\n", 0, e.start) + 1) + 1
        raise ParseError("illegal UTF-8 encoding", path=path, line=line, column=column) from e


def _first_error(root):
    """Return the first ERROR or missing node in source order."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node
        stack.extend(reversed([child for child in node.children if child.has_error]))
    return root
