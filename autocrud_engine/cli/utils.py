"""
Utility functions for CLI commands.

This module provides shared utilities for CLI operations.

This module is part of AUTOCRUD_ENGINE.
"""

import json
from pathlib import Path
from typing import Any, Iterable

import click

from ..core.validator import ValidationIssue


def load_model_file(file_path: Path) -> Any:
    """
    Load a model definition JSON file.

    Args:
        file_path: Path to a JSON file holding one model object or a list of models

    Returns:
        The parsed JSON document

    Raises:
        click.ClickException: If file doesn't exist or is invalid JSON
    """
    if not file_path.exists():
        raise click.ClickException(f"Model file not found: {file_path}")

    try:
        with open(file_path, encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Invalid JSON in model file: {e}") from e


def save_model_file(file_path: Path, model: dict[str, Any]) -> None:
    """
    Save a model definition to a JSON file.

    Raises:
        click.ClickException: If file cannot be written
    """
    try:
        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(model, f, indent=2, ensure_ascii=False)
            f.write("\n")
    except OSError as e:
        raise click.ClickException(f"Failed to write model file: {e}") from e


def format_issues(issues: Iterable[ValidationIssue]) -> list[str]:
    """Render issues as ``path: message`` lines."""
    return [f"{issue.path or '<root>'}: {issue.message}" for issue in issues]
