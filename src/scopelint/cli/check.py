"""CLI command: scopelint check -- check stylesheets and markup."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from scopelint.cli.format import render_json, render_text
from scopelint.config import DEFAULT_CONFIG_FILENAME, ConventionConfig, load_config
from scopelint.engine.runner import (
    SelectorUnit,
    SerialDispatcher,
    ThreadPoolDispatcher,
    Unit,
    run_analysis,
)
from scopelint.errors import ConfigError, ParseError
from scopelint.markup import element_units
from scopelint.model.location import SourceLocation
from scopelint.model.selector import UnparsedSelector
from scopelint.stylesheet import flatten, parse_stylesheet

logger = logging.getLogger(__name__)

STYLESHEET_SUFFIXES = frozenset({".css", ".scss"})
MARKUP_SUFFIXES = frozenset({".html", ".htm"})


def discover(paths: tuple[str, ...]) -> list[Path]:
    """Expand directories into the stylesheet and markup files they contain."""
    suffixes = STYLESHEET_SUFFIXES | MARKUP_SUFFIXES
    found: list[Path] = []
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            found.extend(
                sorted(p for p in path.rglob("*") if p.is_file() and p.suffix.lower() in suffixes)
            )
        else:
            found.append(path)
    return found


def stylesheet_units(path: Path) -> list[Unit]:
    """Read one stylesheet into units; a parse failure becomes one unanalyzable unit."""
    source = path.read_text(encoding="utf-8")
    try:
        stylesheet = parse_stylesheet(source)
    except ParseError as exc:
        logger.debug("Cannot parse %s: %s", path, exc)
        return [
            SelectorUnit(
                selector=UnparsedSelector(text=str(path), reason=f"parse error: {exc}"),
                location=SourceLocation(str(path), exc.line or 0),
            )
        ]
    return list(flatten(stylesheet, str(path)))


def collect_units(files: list[Path]) -> list[Unit]:
    units: list[Unit] = []
    for path in files:
        if path.suffix.lower() in MARKUP_SUFFIXES:
            units.extend(element_units(path.read_text(encoding="utf-8"), str(path)))
        else:
            units.extend(stylesheet_units(path))
    return units


def resolve_config(config_path: str | None) -> ConventionConfig:
    if config_path:
        return load_config(Path(config_path))
    default = Path(DEFAULT_CONFIG_FILENAME)
    if default.is_file():
        return load_config(default)
    return ConventionConfig()


@click.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True))
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False),
              help=f"JSON convention config (default: ./{DEFAULT_CONFIG_FILENAME} if present).")
@click.option("--jobs", "-j", default=1, type=click.IntRange(min=1),
              help="Number of worker threads.")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]),
              default="text", help="Output format.")
def check(paths: tuple[str, ...], config_path: str | None, jobs: int, output_format: str) -> None:
    """Check stylesheets and markup against the scoping convention.

    Exits with code 0 if the run passes, 1 if there are errors or inputs
    that could not be analyzed, and 2 if the configuration is invalid.
    """
    try:
        config = resolve_config(config_path)
    except ConfigError as exc:
        click.echo(f"Config error: {exc}", err=True)
        sys.exit(2)

    files = discover(paths)
    units = collect_units(files)
    dispatcher = ThreadPoolDispatcher(max_workers=jobs) if jobs > 1 else SerialDispatcher()
    report = run_analysis(units, config, dispatcher)

    if output_format == "json":
        click.echo(render_json(report))
    else:
        click.echo(render_text(report))

    sys.exit(0 if report.passed else 1)
