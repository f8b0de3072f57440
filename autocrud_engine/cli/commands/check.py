"""
Check command for CLI.

Runs one authorization check against a model definition file, so RBAC
and ownership rules can be tried before the model is deployed.

This module is part of AUTOCRUD_ENGINE.
"""

import asyncio
import json
import sys
from pathlib import Path
from typing import Optional

import click

from ...auth.decisions import Identity
from ...auth.pipeline import AuthorizationPipeline
from ...constants import ACTION_PERMISSIONS
from ...core.validator import validate_model_definition
from ...stores.memory import InMemoryModelStore, InMemoryRecordStore
from ..utils import format_issues, load_model_file


async def _run_check(
    model_document: dict, role: str, user_id: int, action: str, owner: Optional[int]
):
    result = validate_model_definition(model_document)
    if not result.success:
        lines = "\n".join(f"  - {line}" for line in format_issues(result.errors))
        raise click.ClickException(f"Model definition is invalid:\n{lines}")

    model = result.data
    records = InMemoryRecordStore()
    record_id = None
    if owner is not None:
        record = {model.owner_field: owner} if model.owner_field else {}
        record_id = records.insert(model.name, record)

    pipeline = AuthorizationPipeline(InMemoryModelStore([model]), records)
    return await pipeline.check(
        Identity(user_id=user_id, role=role), model.name, action, record_id=record_id
    )


@click.command()
@click.argument("model_file", type=click.Path(exists=True, path_type=Path))
@click.option("--role", "-r", required=True, help="Role of the acting user")
@click.option(
    "--action",
    "-a",
    required=True,
    type=click.Choice(sorted(ACTION_PERMISSIONS)),
    help="Action to authorize",
)
@click.option("--user-id", "-u", type=int, default=1, show_default=True, help="Acting user id")
@click.option(
    "--owner",
    type=int,
    default=None,
    help="Check against an existing record owned by this user id",
)
def check(model_file: Path, role: str, action: str, user_id: int, owner: Optional[int]) -> None:
    """
    Evaluate an authorization check against a model file.

    MODEL_FILE: JSON file with one model definition

    Exits 0 when the action is allowed, 1 when it is denied.

    Examples:
        autocrud check employee.json --role Viewer --action delete
        autocrud check employee.json --role Manager --action update --user-id 7 --owner 9
    """
    document = load_model_file(model_file)
    if not isinstance(document, dict):
        raise click.ClickException("Model file must contain a single model object")

    decision = asyncio.run(_run_check(document, role, user_id, action, owner))

    if decision.allow:
        click.echo(click.style(f"✅ ALLOW {role} {action} on {decision.model_name}", fg="green"))
    else:
        click.echo(
            click.style(
                f"❌ DENY {role} {action} on {document.get('name')}: {decision.reason.value}",
                fg="red",
            )
        )
    click.echo(json.dumps(decision.to_dict(), indent=2))
    sys.exit(0 if decision.allow else 1)
