"""
Core model definition components.

Provides the model definition types, schema validation, relation
checking, typed record values and the versioned model registry.

This module is part of AUTOCRUD_ENGINE.
"""

from .examples import EXAMPLE_MODELS, list_examples
from .models import FieldDefinition, ModelDefinition, RelationConfig
from .records import as_user_id, coerce_record, coerce_value, is_owned_by
from .relations import (BatchValidationResult, check_relations,
                        validate_model_definitions)
from .schema import MODEL_DEFINITION_SCHEMA
from .validator import (ModelValidator, ValidationIssue, ValidationResult,
                        normalize_model_definition, validate_model_definition)
# Registry last: it depends on stores and versioning, which import .models
from .registry import ModelRegistry, SaveResult

__all__ = [
    # Definitions
    "FieldDefinition",
    "ModelDefinition",
    "RelationConfig",
    "MODEL_DEFINITION_SCHEMA",
    # Validation
    "ModelValidator",
    "ValidationIssue",
    "ValidationResult",
    "normalize_model_definition",
    "validate_model_definition",
    "BatchValidationResult",
    "check_relations",
    "validate_model_definitions",
    # Records
    "as_user_id",
    "coerce_record",
    "coerce_value",
    "is_owned_by",
    # Registry
    "ModelRegistry",
    "SaveResult",
    # Examples
    "EXAMPLE_MODELS",
    "list_examples",
]
