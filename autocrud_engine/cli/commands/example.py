"""
Example command for CLI.

Prints one of the built-in example model definitions.

This module is part of AUTOCRUD_ENGINE.
"""

import json
from pathlib import Path
from typing import Optional

import click

from ...core.examples import EXAMPLE_MODELS, list_examples
from ..utils import save_model_file


@click.command()
@click.argument("name", type=click.Choice(list_examples(), case_sensitive=False))
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the example to a file instead of stdout",
)
def example(name: str, output: Optional[Path]) -> None:
    """
    Print a built-in example model definition.

    Examples:
        autocrud example employee
        autocrud example project -o project.json
    """
    model = EXAMPLE_MODELS[name.lower()]
    if output is not None:
        save_model_file(output, model)
        click.echo(click.style(f"✅ Wrote example '{name}' to {output}", fg="green"))
        return
    click.echo(json.dumps(model, indent=2, ensure_ascii=False))
