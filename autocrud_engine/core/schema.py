"""
JSON Schema for dynamic model definitions.

The schema covers the structural rules of a model definition. Rules that
need to look across fields (duplicate names, relation payload presence,
owner-field references) live in ``validator.py``.

Each subschema may carry a non-standard ``messages`` mapping from JSON
Schema keyword to a human-readable message (for ``required``, a mapping
from the missing property to its message). Draft 7 validators ignore
unknown keywords, so the mapping only affects error reporting.
"""

from typing import Any, Dict

from ..constants import (FIELD_NAME_PATTERN, MODEL_NAME_PATTERN,
                         SUPPORTED_FIELD_TYPES, SUPPORTED_PERMISSIONS,
                         SUPPORTED_RELATION_KINDS)

RELATION_CONFIG_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["model", "type"],
    "messages": {
        "type": "Relation config must be an object",
        "required": {
            "model": "Related model name is required",
            "type": "Relation type is required",
        },
    },
    "properties": {
        "model": {
            "type": "string",
            "minLength": 1,
            "messages": {
                "type": "Related model name must be a string",
                "minLength": "Related model name is required",
            },
        },
        "type": {
            "enum": list(SUPPORTED_RELATION_KINDS),
            "messages": {
                "enum": "Relation type must be one of: " + ", ".join(SUPPORTED_RELATION_KINDS),
            },
        },
        "foreignKey": {
            "type": "string",
            "messages": {"type": "foreignKey must be a string"},
        },
        "references": {
            "type": "string",
            "messages": {"type": "references must be a string"},
        },
    },
}

FIELD_DEFINITION_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["name", "type"],
    "messages": {
        "type": "Field definition must be an object",
        "required": {
            "name": "Field name is required",
            "type": "Field type is required",
        },
    },
    "properties": {
        "name": {
            "type": "string",
            "minLength": 1,
            "pattern": FIELD_NAME_PATTERN,
            "messages": {
                "type": "Field name must be a string",
                "minLength": "Field name is required",
                "pattern": "Field name must be a valid identifier",
            },
        },
        "type": {
            "enum": list(SUPPORTED_FIELD_TYPES),
            "messages": {
                "enum": "Field type must be one of: " + ", ".join(SUPPORTED_FIELD_TYPES),
            },
        },
        "required": {
            "type": "boolean",
            "messages": {"type": "required must be a boolean"},
        },
        "unique": {
            "type": "boolean",
            "messages": {"type": "unique must be a boolean"},
        },
        "default": {
            "type": ["string", "number", "boolean", "null"],
            "messages": {"type": "default must be a string, number, boolean or null"},
        },
        "relation": RELATION_CONFIG_SCHEMA,
    },
}

RBAC_RULES_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "messages": {"type": "rbac must map role names to permission lists"},
    "propertyNames": {
        "minLength": 1,
        "messages": {"minLength": "Role name is required"},
    },
    "additionalProperties": {
        "type": "array",
        "minItems": 1,
        "messages": {
            "type": "Role permissions must be a list",
            "minItems": "At least one permission is required",
        },
        "items": {
            "enum": list(SUPPORTED_PERMISSIONS),
            "messages": {
                "enum": "Permission must be one of: " + ", ".join(SUPPORTED_PERMISSIONS),
            },
        },
    },
}

MODEL_DEFINITION_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "AutoCRUD model definition",
    "type": "object",
    "required": ["name", "fields"],
    "messages": {
        "type": "Model definition must be an object",
        "required": {
            "name": "Model name is required",
            "fields": "At least one field is required",
        },
    },
    "properties": {
        "name": {
            "type": "string",
            "minLength": 1,
            "pattern": MODEL_NAME_PATTERN,
            "messages": {
                "type": "Model name must be a string",
                "minLength": "Model name is required",
                "pattern": "Model name must be PascalCase",
            },
        },
        "fields": {
            "type": "array",
            "minItems": 1,
            "items": FIELD_DEFINITION_SCHEMA,
            "messages": {
                "type": "fields must be a list",
                "minItems": "At least one field is required",
            },
        },
        "ownerField": {
            "type": "string",
            "messages": {"type": "ownerField must be a string"},
        },
        "rbac": RBAC_RULES_SCHEMA,
        "timestamps": {
            "type": "boolean",
            "messages": {"type": "timestamps must be a boolean"},
        },
    },
}
