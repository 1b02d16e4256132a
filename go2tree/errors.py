"""Error taxonomy for go2tree.

Every error here is terminal for the source unit it occurs in. The pipeline
records them per unit; anything that is not a ``Go2TreeError`` is a bug and
propagates.
"""

from __future__ import annotations


class Go2TreeError(Exception):
    """Base class for conversion failures."""

    code = "error"

    def __init__(self, message: str, path: str = ""):
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path:
            return f"{self.path}: {self.message}"
        return self.message


class PathError(Go2TreeError):
    """Input path is missing or unreadable."""

    code = "path"


class ParseError(Go2TreeError):
    """The Go frontend rejected the source document."""

    code = "parse"

    def __init__(self, message: str, path: str = "", line: int = 0, column: int = 0):
        super().__init__(message, path)
        self.line = line
        self.column = column

    def __str__(self) -> str:
        return f"{self.path or '<source>'}:{self.line}:{self.column}: {self.message}"


class UnsupportedNodeKind(Go2TreeError):
    """A syntax node kind outside the declared schema was reached."""

    code = "unsupported"

    def __init__(self, kind: str, path: str = "", line: int = 0, column: int = 0):
        super().__init__(f"unsupported node kind: {kind}", path)
        self.kind = kind
        self.line = line
        self.column = column

    def __str__(self) -> str:
        return f"{self.path or '<source>'}:{self.line}:{self.column}: {self.message}"


class WriteError(Go2TreeError):
    """The output document could not be written."""

    code = "write"


class EncodeError(Go2TreeError):
    """A finished tree could not be rendered."""

    code = "encode"


class ConfigError(Go2TreeError):
    """Invalid configuration file or option value."""

    code = "config"
