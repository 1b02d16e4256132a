"""go2tree CLI — the main entry point for converting Go sources."""

import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from go2tree import __version__
from go2tree.config import CONFIG_ENV_VAR, ConvertConfig, load_config
from go2tree.errors import ConfigError, Go2TreeError, PathError
from go2tree.ir.serializer import FORMATS

console = Console()
err_console = Console(stderr=True)

EXIT_FAILED_UNITS = 1
EXIT_BAD_INPUT = 2


def _configure_logging(verbose: int, quiet: bool) -> None:
    if quiet:
        level = logging.ERROR
    elif verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=verbose >= 2, markup=False)],
        force=True,
    )


def _resolve_config(config_path: str | None, **overrides) -> ConvertConfig:
    config = load_config(config_path) if config_path else ConvertConfig()
    return config.with_overrides(**overrides)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", count=True, help="Increase log output (-vv for debug)")
@click.option("--quiet", "-q", is_flag=True, help="Only log errors")
def main(verbose: int, quiet: bool):
    """go2tree — Go syntax trees as generic structured documents.

    Parses Go source files and writes a language-independent tree of
    {name, type, children, value, comments} nodes next to each file.
    """
    _configure_logging(verbose, quiet)


# ── Convert ──────────────────────────────────────────────────────────


@main.command()
@click.argument("path")
@click.option("--format", "fmt", default=None, type=click.Choice(sorted(FORMATS)), help="Output format")
@click.option("--fail-fast", is_flag=True, default=False, help="Stop at the first failing file")
@click.option("--allow-syntax-errors", is_flag=True, default=False, help="Emit bad-node leaves instead of failing")
@click.option("--config", "config_path", default=None, envvar=CONFIG_ENV_VAR, help="YAML config file")
def convert(path: str, fmt: str | None, fail_fast: bool, allow_syntax_errors: bool, config_path: str | None):
    """Convert a Go file, or every Go file under a directory.

    Each FILE.go gets a FILE.json (or FILE.yaml) written alongside it.
    """
    from go2tree.pipeline import run

    try:
        config = _resolve_config(
            config_path,
            format=fmt,
            keep_going=False if fail_fast else None,
            allow_syntax_errors=True if allow_syntax_errors else None,
        )
        console.print(f"\n[bold blue]go2tree[/] — Converting: {escape(path)}\n")
        report = run(path, config)
    except (ConfigError, PathError) as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        sys.exit(EXIT_BAD_INPUT)

    if not report.results:
        console.print("[yellow]No Go source files found.[/]")
        return

    for result in report.results:
        if result.ok:
            console.print(f"  [green]v[/] {escape(str(result.source))} -> {escape(str(result.output))} ({result.node_count} nodes)")
        else:
            console.print(f"  [red]x[/] {escape(str(result.source))}: {escape(f'[{result.error.code}] {result.error}')}")

    console.print(Panel(escape(report.summary()), title="Conversion Result"))

    if not report.passed:
        sys.exit(EXIT_FAILED_UNITS)


# ── Show ─────────────────────────────────────────────────────────────


@main.command()
@click.argument("file")
@click.option("--format", "fmt", default="json", type=click.Choice(sorted(FORMATS)), help="Output format")
@click.option("--allow-syntax-errors", is_flag=True, help="Emit bad-node leaves instead of failing")
def show(file: str, fmt: str, allow_syntax_errors: bool):
    """Print the generic tree of one Go file without writing anything."""
    from pathlib import Path

    from go2tree.ir.serializer import Serializer
    from go2tree.pipeline import build_tree

    config = ConvertConfig(format=fmt, allow_syntax_errors=allow_syntax_errors)
    try:
        tree = build_tree(Path(file), config)
        document = Serializer(config.format, indent=config.indent).render(tree)
    except PathError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        sys.exit(EXIT_BAD_INPUT)
    except Go2TreeError as e:
        err_console.print(f"[red]Error:[/] {escape(f'[{e.code}] {e}')}")
        sys.exit(EXIT_FAILED_UNITS)

    click.echo(document, nl=False)


# ── Kinds ────────────────────────────────────────────────────────────


@main.command()
def kinds():
    """List every grammar node kind the converter accepts."""
    from go2tree.ir.schema import KINDS, Synthetic

    table = Table(title=f"Declared node kinds ({len(KINDS)})")
    table.add_column("Grammar kind", style="cyan")
    table.add_column("Output type", style="green")
    table.add_column("Role")
    table.add_column("Children")

    for kind in sorted(KINDS.values(), key=lambda k: k.grammar):
        children = ", ".join(
            f"{item.tag}({', '.join(item.fields)})" if isinstance(item, Synthetic) else item
            for item in kind.fields
        )
        table.add_row(kind.grammar, kind.tag, kind.role.value, children)

    console.print(table)


if __name__ == "__main__":
    main()
