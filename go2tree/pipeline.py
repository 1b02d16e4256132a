"""Conversion pipeline — parse, convert, render and write each source unit.

Units are independent: each gets its own parse tree, cycle guard and output
document. A failing unit never leaves a partial output file behind.
"""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from go2tree.config import ConvertConfig
from go2tree.errors import Go2TreeError, PathError, WriteError
from go2tree.ir.converter import Converter
from go2tree.ir.dispatcher import Dispatcher
from go2tree.ir.go_parser import parse_source
from go2tree.ir.models import GenericNode
from go2tree.ir.serializer import Serializer
from go2tree.utils.file_scanner import discover_units, output_path_for

logger = logging.getLogger(__name__)


@dataclass
class UnitResult:
    """Outcome of converting one source unit."""

    source: Path
    output: Path | None = None
    node_count: int = 0
    error: Go2TreeError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class ConversionReport:
    """Outcome of a whole run over a file or directory."""

    root: Path
    results: list[UnitResult] = field(default_factory=list)
    aborted: bool = False  # Stopped early because keep_going was off

    @property
    def converted(self) -> list[UnitResult]:
        return [r for r in self.results if r.ok]

    @property
    def failed(self) -> list[UnitResult]:
        return [r for r in self.results if not r.ok]

    @property
    def passed(self) -> bool:
        return not self.failed

    def summary(self) -> str:
        status = "PASS" if self.passed else "FAIL"
        text = f"[{status}] {len(self.converted)} converted, {len(self.failed)} failed"
        if self.aborted:
            text += " (aborted)"
        return text


def build_tree(source: Path, config: ConvertConfig | None = None) -> GenericNode:
    """Parse and convert one Go file without writing anything."""
    config = config or ConvertConfig()
    try:
        data = source.read_bytes()
    except OSError as e:
        raise PathError(f"Cannot read source file: {e}", path=str(source)) from e

    tree = parse_source(data, str(source), allow_syntax_errors=config.allow_syntax_errors)
    converter = Converter(Dispatcher(path=str(source)))
    return converter.convert(tree.root_node)


def convert_file(source: Path, config: ConvertConfig | None = None) -> UnitResult:
    """Convert one Go file and write its document next to it.

    Raises a ``Go2TreeError`` subclass on failure; nothing is written then.
    """
    config = config or ConvertConfig()
    serializer = Serializer(config.format, indent=config.indent)

    tree = build_tree(source, config)
    document = serializer.render(tree)

    output = output_path_for(source, serializer.suffix)
    _write_atomically(output, document)

    count = tree.count()
    logger.info("Wrote %s (%d nodes)", output, count)
    return UnitResult(source=source, output=output, node_count=count)


def _write_atomically(output: Path, document: str) -> None:
    """Write to a sibling temp file, then move it over ``output``."""
    tmp_path = None
    try:
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", dir=output.parent, prefix=f".{output.name}.", suffix=".tmp", delete=False
        ) as tmp:
            tmp_path = Path(tmp.name)
            tmp.write(document)
        os.replace(tmp_path, output)
    except OSError as e:
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)
        raise WriteError(f"Cannot write output document: {e}", path=str(output)) from e


def run(path: str | Path, config: ConvertConfig | None = None) -> ConversionReport:
    """Convert every source unit under ``path``.

    With ``keep_going`` (the default) each failure is recorded and the walk
    continues; otherwise the run stops at the first failure and the report is
    marked as aborted. A missing or unreadable ``path`` raises ``PathError``.
    """
    config = config or ConvertConfig()
    report = ConversionReport(root=Path(path))

    units = discover_units(path, config)
    logger.info("Found %d source unit(s) under %s", len(units), path)

    for source in units:
        try:
            result = convert_file(source, config)
        except Go2TreeError as e:
            logger.warning("%s", e)
            report.results.append(UnitResult(source=source, error=e))
            if not config.keep_going:
                report.aborted = True
                break
            continue
        report.results.append(result)

    return report
