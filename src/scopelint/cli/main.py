"""scopelint CLI entry point: Click group with subcommands."""

import logging

import click

from scopelint import __version__


@click.group()
@click.version_option(version=__version__, prog_name="scopelint")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """scopelint - check CSS Container/Modifier/Private scoping conventions."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Import and register subcommands
from scopelint.cli.check import check  # noqa: E402

cli.add_command(check)
