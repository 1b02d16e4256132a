"""File scanner — discover the Go source units under a path."""

from pathlib import Path

from go2tree.config import ConvertConfig
from go2tree.errors import PathError


def discover_units(path: str | Path, config: ConvertConfig | None = None) -> list[Path]:
    """Return the source files to convert for ``path``.

    A file path is returned as-is, whatever its extension. A directory is
    scanned recursively for files with the configured source suffix, in
    sorted order.
    """
    config = config or ConvertConfig()
    root = Path(path)

    if not root.exists():
        raise PathError("No such file or directory", path=str(root))
    if root.is_file():
        return [root]
    if not root.is_dir():
        raise PathError("Not a regular file or directory", path=str(root))

    try:
        return scan_source_files(root, config.source_suffix, config.skip_dirs)
    except OSError as e:
        raise PathError(f"Cannot scan directory: {e}", path=str(root)) from e


def scan_source_files(root: Path, suffix: str = ".go", skip_dirs: frozenset[str] = frozenset()) -> list[Path]:
    """Recursively scan a directory for source files.

    Skips anything below a directory named in ``skip_dirs``.
    """
    files = []
    for item in root.rglob(f"*{suffix}"):
        if item.is_file() and _should_include(item.relative_to(root), skip_dirs):
            files.append(item)
    return sorted(files)


def _should_include(relative: Path, skip_dirs: frozenset[str]) -> bool:
    """Check if a file lies outside every skipped directory."""
    return not any(part in skip_dirs for part in relative.parts[:-1])


def output_path_for(source: Path, suffix: str) -> Path:
    """Sibling path of ``source`` with its extension replaced by ``suffix``."""
    return source.with_suffix(suffix)
