"""
Cross-model relation checking and batch validation.

Used when several model definitions are validated together, such as
startup reconciliation or a multi-model import. Relations only need to
point at a model present in the batch; reciprocal fields are not required.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Tuple

from .models import ModelDefinition
from .validator import ValidationIssue, validate_model_definition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchValidationResult:
    """Outcome of validating a batch of model definitions."""

    success: bool
    data: Tuple[ModelDefinition, ...] = ()
    errors: Tuple[ValidationIssue, ...] = ()

    @property
    def error_paths(self) -> List[str]:
        return [issue.path for issue in self.errors]


def check_relations(models: Sequence[ModelDefinition]) -> List[ValidationIssue]:
    """
    Check that every relation field targets a model in ``models``.

    Args:
        models: Already-validated definitions making up the batch

    Returns:
        Every dangling relation (empty list when all targets exist)
    """
    names = {model.name for model in models}
    issues: List[ValidationIssue] = []

    for model_index, model in enumerate(models):
        for field_index, field in enumerate(model.fields):
            if not field.is_relation or field.relation is None:
                continue
            if field.relation.model not in names:
                issues.append(
                    ValidationIssue(
                        f"models[{model_index}].fields[{field_index}].relation.model",
                        f"Relation '{model.name}.{field.name}' references unknown model: "
                        f"{field.relation.model}",
                    )
                )

    if issues:
        logger.debug(f"Relation check found {len(issues)} dangling relation(s)")
    return issues


def validate_model_definitions(candidates: Sequence[Any]) -> BatchValidationResult:
    """
    Validate a batch of model definitions, including relation integrity.

    Each candidate is validated on its own first; duplicate model names
    within the batch are reported on the later occurrence. The relation
    check only runs once every candidate is individually valid.

    Args:
        candidates: Submitted definitions

    Returns:
        BatchValidationResult with all normalized definitions or every violation
    """
    issues: List[ValidationIssue] = []
    validated: List[ModelDefinition] = []
    first_seen: Dict[str, int] = {}

    for index, candidate in enumerate(candidates):
        prefix = f"models[{index}]"
        result = validate_model_definition(candidate)
        if not result.success:
            issues.extend(issue.with_prefix(prefix) for issue in result.errors)
            continue

        model = result.data
        if model.name in first_seen:
            issues.append(
                ValidationIssue(
                    f"{prefix}.name",
                    f"Duplicate model name '{model.name}' "
                    f"(already defined at models[{first_seen[model.name]}])",
                )
            )
            continue
        first_seen[model.name] = index
        validated.append(model)

    if issues:
        return BatchValidationResult(success=False, errors=tuple(issues))

    relation_issues = check_relations(validated)
    if relation_issues:
        return BatchValidationResult(success=False, errors=tuple(relation_issues))

    return BatchValidationResult(success=True, data=tuple(validated))
