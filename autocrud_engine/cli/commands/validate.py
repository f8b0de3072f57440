"""
Validate command for CLI.

Validates one model definition, or a batch of them, against the schema.

This module is part of AUTOCRUD_ENGINE.
"""

import json
import sys
from pathlib import Path

import click

from ...core.relations import validate_model_definitions
from ...core.validator import validate_model_definition
from ..utils import format_issues, load_model_file


@click.command()
@click.argument("model_file", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Print the normalized definition(s) of a valid file",
)
def validate(model_file: Path, verbose: bool) -> None:
    """
    Validate a model definition file.

    MODEL_FILE: JSON file with one model object, or a list of models that
    is checked as a batch (duplicate names and relation targets included)

    Examples:
        autocrud validate employee.json
        autocrud validate models.json --verbose
    """
    document = load_model_file(model_file)

    if isinstance(document, list):
        result = validate_model_definitions(document)
        normalized = [model.to_dict() for model in result.data]
    elif isinstance(document, dict):
        result = validate_model_definition(document)
        normalized = result.data.to_dict() if result.data is not None else None
    else:
        raise click.ClickException(
            "Model file must contain a model object or a list of model objects"
        )

    if result.success:
        click.echo(click.style(f"✅ Model file '{model_file}' is valid!", fg="green"))
        if verbose:
            click.echo(json.dumps(normalized, indent=2, ensure_ascii=False))
        sys.exit(0)

    click.echo(click.style(f"❌ Model file '{model_file}' is invalid!", fg="red"))
    click.echo(f"\n{len(result.errors)} issue(s):")
    for line in format_issues(result.errors):
        click.echo(f"  - {line}")
    sys.exit(1)
