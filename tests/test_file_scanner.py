"""Tests for source unit discovery."""

import tempfile
from pathlib import Path

import pytest

from go2tree.config import DEFAULT_SKIP_DIRS, ConvertConfig
from go2tree.errors import PathError
from go2tree.utils.file_scanner import discover_units, output_path_for, scan_source_files


def test_scan_finds_go_files_recursively():
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        (root / "main.go").write_text("package main")
        (root / "pkg" / "util").mkdir(parents=True)
        (root / "pkg" / "util" / "util.go").write_text("package util")
        (root / "readme.md").write_text("# readme")
        (root / "main.json").write_text("{}")

        files = scan_source_files(root)
        assert [f.relative_to(root).as_posix() for f in files] == ["main.go", "pkg/util/util.go"]


def test_scan_skips_excluded_dirs():
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        (root / ".git").mkdir()
        (root / ".git" / "hook.go").write_text("package hook")
        (root / "vendor").mkdir()
        (root / "vendor" / "dep.go").write_text("package dep")

        files = scan_source_files(root, ".go", DEFAULT_SKIP_DIRS)
        names = {f.name for f in files}
        assert names == {"dep.go"}


def test_skip_dirs_only_apply_below_the_root():
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir) / "node_modules"
        root.mkdir()
        (root / "a.go").write_text("package a")
        assert [f.name for f in scan_source_files(root, ".go", DEFAULT_SKIP_DIRS)] == ["a.go"]


def test_discover_single_file_regardless_of_extension():
    with tempfile.TemporaryDirectory() as tmpdir:
        source = Path(tmpdir) / "script.txt"
        source.write_text("package main")
        assert discover_units(source) == [source]


def test_discover_uses_configured_suffix():
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        (root / "a.go").write_text("package a")
        (root / "b.gox").write_text("package b")
        units = discover_units(root, ConvertConfig(source_suffix=".gox"))
        assert [u.name for u in units] == ["b.gox"]


def test_discover_missing_path_raises():
    with tempfile.TemporaryDirectory() as tmpdir:
        with pytest.raises(PathError):
            discover_units(Path(tmpdir) / "nope")


def test_output_path_replaces_extension():
    assert output_path_for(Path("/src/pkg/main.go"), ".json") == Path("/src/pkg/main.json")
    assert output_path_for(Path("a.test.go"), ".yaml") == Path("a.test.yaml")
