"""
Model definition validation.

This module provides:
- Structural validation against the model JSON Schema (all errors collected)
- Cross-field checks: duplicate field names, relation payload presence,
  owner-field references, duplicate model names
- Normalization of a valid submission into a ``ModelDefinition``

Every violation is reported with the field-access path of the offending
value (``fields[2].name``), so a client can fix all problems in one round
trip. Validation is a pure function of its input.

This module is part of AUTOCRUD_ENGINE.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from jsonschema import Draft7Validator
from jsonschema import ValidationError as SchemaValidationError

from ..constants import FIELD_TYPE_RELATION, SUPPORTED_FIELD_TYPES
from ..exceptions import ModelValidationError
from .models import ModelDefinition
from .schema import MODEL_DEFINITION_SCHEMA

logger = logging.getLogger(__name__)

_schema_validator = Draft7Validator(MODEL_DEFINITION_SCHEMA)


@dataclass(frozen=True)
class ValidationIssue:
    """A single path-tagged violation."""

    path: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"path": self.path, "message": self.message}

    def with_prefix(self, prefix: str) -> "ValidationIssue":
        """Return the same issue nested under ``prefix`` (e.g. ``models[1]``)."""
        if not self.path:
            return ValidationIssue(prefix, self.message)
        separator = "" if self.path.startswith("[") else "."
        return ValidationIssue(f"{prefix}{separator}{self.path}", self.message)


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of validating one model definition.

    Attributes:
        success: True when no violation was found
        data: The normalized definition (None on failure)
        errors: Every violation found (empty on success)
    """

    success: bool
    data: Optional[ModelDefinition] = None
    errors: Tuple[ValidationIssue, ...] = ()

    @property
    def error_paths(self) -> List[str]:
        return [issue.path for issue in self.errors]

    def raise_for_errors(self) -> ModelDefinition:
        """
        Return the normalized definition or raise.

        Raises:
            ModelValidationError: If validation failed
        """
        if self.success and self.data is not None:
            return self.data
        message = "; ".join(
            f"{issue.path or '<root>'}: {issue.message}" for issue in self.errors
        )
        raise ModelValidationError(
            f"Model definition validation failed: {message}",
            error_paths=self.error_paths,
            issues=self.errors,
        )


def format_path(parts: Iterable[Any]) -> str:
    """
    Render a JSON path as a field-access chain.

    Example:
        >>> format_path(["fields", 2, "name"])
        'fields[2].name'
    """
    rendered = ""
    for part in parts:
        if isinstance(part, int):
            rendered += f"[{part}]"
        elif rendered:
            rendered += f".{part}"
        else:
            rendered = str(part)
    return rendered


def _issues_from_schema_error(error: SchemaValidationError) -> List[ValidationIssue]:
    schema = error.schema if isinstance(error.schema, Mapping) else {}
    messages = schema.get("messages", {})
    parts = list(error.absolute_path)

    if error.validator == "required":
        # One issue per missing property, placed on the property itself
        instance = error.instance if isinstance(error.instance, Mapping) else {}
        missing_messages = messages.get("required", {})
        return [
            ValidationIssue(
                format_path(parts + [prop]),
                missing_messages.get(prop, f"'{prop}' is required"),
            )
            for prop in error.validator_value
            if prop not in instance
        ]

    if error.validator == "pattern" and error.instance == "":
        # Already reported by minLength
        return []

    return [ValidationIssue(format_path(parts), messages.get(error.validator, error.message))]


def _schema_issues(candidate: Any) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    for error in _schema_validator.iter_errors(candidate):
        for issue in _issues_from_schema_error(error):
            if issue not in issues:
                issues.append(issue)
    return issues


def _semantic_issues(
    candidate: Mapping, existing_names: Optional[Iterable[str]] = None
) -> List[ValidationIssue]:
    """Checks that look across fields. Tolerates malformed parts."""
    issues: List[ValidationIssue] = []

    name = candidate.get("name")
    if existing_names is not None and isinstance(name, str) and name in set(existing_names):
        issues.append(ValidationIssue("name", f"Model '{name}' already exists"))

    fields = candidate.get("fields")
    if not isinstance(fields, list):
        return issues

    first_seen: Dict[str, int] = {}
    for index, field in enumerate(fields):
        if not isinstance(field, Mapping):
            continue

        field_name = field.get("name")
        if isinstance(field_name, str) and field_name:
            if field_name in first_seen:
                issues.append(
                    ValidationIssue(
                        f"fields[{index}].name",
                        f"Duplicate field name '{field_name}' "
                        f"(already defined at fields[{first_seen[field_name]}])",
                    )
                )
            else:
                first_seen[field_name] = index

        field_type = field.get("type")
        if field_type not in SUPPORTED_FIELD_TYPES:
            continue
        has_relation = field.get("relation") is not None
        if field_type == FIELD_TYPE_RELATION and not has_relation:
            issues.append(
                ValidationIssue(
                    f"fields[{index}].relation",
                    "Relation type fields must have relation config",
                )
            )
        elif field_type != FIELD_TYPE_RELATION and has_relation:
            issues.append(
                ValidationIssue(
                    f"fields[{index}].relation",
                    f"Only relation type fields may have relation config (type is '{field_type}')",
                )
            )

    owner_field = candidate.get("ownerField")
    if owner_field and isinstance(owner_field, str) and owner_field not in first_seen:
        issues.append(
            ValidationIssue(
                "ownerField",
                f"ownerField '{owner_field}' must reference an existing field",
            )
        )

    return issues


def normalize_model_definition(candidate: Mapping) -> ModelDefinition:
    """
    Build a ``ModelDefinition`` with defaults applied.

    The candidate must already be valid. Unknown keys are dropped.
    """
    fields = []
    for field in candidate["fields"]:
        normalized: Dict[str, Any] = {
            "name": field["name"],
            "type": field["type"],
            "required": field.get("required", False),
            "unique": field.get("unique", False),
        }
        if "default" in field:
            normalized["default"] = field["default"]
        relation = field.get("relation")
        if relation is not None:
            normalized["relation"] = {
                key: relation[key]
                for key in ("model", "type", "foreignKey", "references")
                if key in relation
            }
        fields.append(normalized)

    data: Dict[str, Any] = {
        "name": candidate["name"],
        "fields": fields,
        "timestamps": candidate.get("timestamps", True),
    }
    if candidate.get("ownerField"):
        data["ownerField"] = candidate["ownerField"]
    if "rbac" in candidate:
        data["rbac"] = {role: list(grants) for role, grants in candidate["rbac"].items()}

    return ModelDefinition.model_validate(data)


def validate_model_definition(
    candidate: Any, existing_names: Optional[Iterable[str]] = None
) -> ValidationResult:
    """
    Validate a candidate model definition.

    Args:
        candidate: Submitted definition (mapping, or an existing ``ModelDefinition``)
        existing_names: Model names that the candidate must not duplicate
            (multi-model validation). None skips the check.

    Returns:
        ValidationResult with the normalized definition or every violation
    """
    if isinstance(candidate, ModelDefinition):
        candidate = candidate.to_dict()

    issues = _schema_issues(candidate)
    if isinstance(candidate, Mapping):
        for issue in _semantic_issues(candidate, existing_names):
            if issue not in issues:
                issues.append(issue)

    if issues:
        logger.debug(
            f"Model definition rejected with {len(issues)} issue(s): "
            f"{[issue.path for issue in issues]}"
        )
        return ValidationResult(success=False, errors=tuple(issues))

    return ValidationResult(success=True, data=normalize_model_definition(candidate))


class ModelValidator:
    """
    Class-based API for model definition validation.

    Holds the set of model names already known to the caller so that
    submissions of new models can be checked for name collisions.
    """

    def __init__(self, existing_names: Optional[Iterable[str]] = None):
        self.existing_names = set(existing_names) if existing_names is not None else None

    def validate(self, candidate: Any) -> ValidationResult:
        return validate_model_definition(candidate, existing_names=self.existing_names)

    @staticmethod
    def normalize(candidate: Mapping) -> ModelDefinition:
        return normalize_model_definition(candidate)
