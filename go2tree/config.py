"""Conversion settings — defaults, YAML config files and CLI overrides."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

import yaml

from go2tree.errors import ConfigError
from go2tree.ir.serializer import FORMATS

CONFIG_ENV_VAR = "GO2TREE_CONFIG"

# Directories never descended into during a directory walk
DEFAULT_SKIP_DIRS = frozenset({".git", ".hg", ".svn", ".bzr", "node_modules"})


@dataclass(frozen=True)
class ConvertConfig:
    """Settings for one conversion run."""

    format: str = "json"
    indent: int = 2
    keep_going: bool = True  # Per-unit recovery: record a failure and continue
    allow_syntax_errors: bool = False
    source_suffix: str = ".go"
    skip_dirs: frozenset[str] = field(default=DEFAULT_SKIP_DIRS)

    def __post_init__(self):
        if not isinstance(self.format, str) or self.format not in FORMATS:
            raise ConfigError(f"Invalid format '{self.format}'. Must be one of: {sorted(FORMATS)}")
        if not isinstance(self.indent, int) or isinstance(self.indent, bool) or self.indent < 0:
            raise ConfigError(f"Invalid indent {self.indent!r}: must be a non-negative integer")
        if not isinstance(self.source_suffix, str) or not self.source_suffix.startswith("."):
            raise ConfigError(f"Invalid source_suffix '{self.source_suffix}': must start with '.'")

    @property
    def output_suffix(self) -> str:
        return FORMATS[self.format]

    def with_overrides(self, **overrides: Any) -> ConvertConfig:
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if not changes:
            return self
        return replace(self, **changes)


def load_config(path: str | Path) -> ConvertConfig:
    """Load conversion settings from a YAML file."""
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config file: {e}", path=str(path)) from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML: {e}", path=str(path)) from e

    if data is None:
        return ConvertConfig()
    if not isinstance(data, dict):
        raise ConfigError("Config file must contain a mapping", path=str(path))

    known = {f.name for f in fields(ConvertConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown config key(s): {', '.join(unknown)}", path=str(path))

    if "skip_dirs" in data:
        skip_dirs = data["skip_dirs"] or []
        if not isinstance(skip_dirs, list):
            raise ConfigError("'skip_dirs' must be a list of directory names", path=str(path))
        data["skip_dirs"] = frozenset(str(d) for d in skip_dirs)

    try:
        return ConvertConfig(**data)
    except ConfigError as e:
        e.path = str(path)
        raise
