"""
Main CLI entry point.

This module is part of AUTOCRUD_ENGINE.
"""

import logging

import click

from .. import __version__
from .commands.check import check
from .commands.example import example
from .commands.validate import validate


@click.group()
@click.version_option(version=__version__, prog_name="autocrud")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def cli(debug: bool) -> None:
    """AutoCRUD engine: validate model definitions and try authorization rules."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


cli.add_command(validate)
cli.add_command(check)
cli.add_command(example)


if __name__ == "__main__":
    cli()
