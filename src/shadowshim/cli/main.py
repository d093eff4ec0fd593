"""shadowshim CLI entry point: Click group with subcommands."""

import click

from shadowshim import __version__


@click.group()
@click.version_option(version=__version__, prog_name="shadowshim")
def cli() -> None:
    """shadowshim - scope component stylesheets with attribute markers."""


# Import and register subcommands
from shadowshim.cli.shim import shim  # noqa: E402
from shadowshim.cli.validate import validate  # noqa: E402
from shadowshim.cli.inspect import inspect  # noqa: E402

cli.add_command(shim)
cli.add_command(validate)
cli.add_command(inspect)
