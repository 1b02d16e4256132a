"""go2tree — convert Go source files into a generic, serializable syntax tree."""

from __future__ import annotations

__version__ = "0.1.0"


def convert_source(source: bytes | str, path: str = "<memory>", allow_syntax_errors: bool = False):
    """Parse Go source text and return its GenericNode tree."""
    from go2tree.ir.converter import Converter
    from go2tree.ir.go_parser import parse_source

    if isinstance(source, str):
        source = source.encode("utf-8")
    tree = parse_source(source, path, allow_syntax_errors=allow_syntax_errors)
    return Converter().convert(tree.root_node)
