"""
Constants for AUTOCRUD_ENGINE.

This module contains all shared constants used across the codebase to avoid
magic strings and improve maintainability.
"""

from typing import Final

# ============================================================================
# NAMING CONSTANTS
# ============================================================================

MODEL_NAME_PATTERN: Final[str] = r"^[A-Z][a-zA-Z0-9]*\Z"
"""Model names are PascalCase identifiers."""

FIELD_NAME_PATTERN: Final[str] = r"^[a-zA-Z_][a-zA-Z0-9_]*\Z"
"""Field names are plain identifiers."""

# ============================================================================
# FIELD TYPE CONSTANTS
# ============================================================================

FIELD_TYPE_STRING: Final[str] = "string"
FIELD_TYPE_NUMBER: Final[str] = "number"
FIELD_TYPE_BOOLEAN: Final[str] = "boolean"
FIELD_TYPE_DATE: Final[str] = "date"
FIELD_TYPE_JSON: Final[str] = "json"
FIELD_TYPE_RELATION: Final[str] = "relation"

SUPPORTED_FIELD_TYPES: Final[tuple[str, ...]] = (
    FIELD_TYPE_STRING,
    FIELD_TYPE_NUMBER,
    FIELD_TYPE_BOOLEAN,
    FIELD_TYPE_DATE,
    FIELD_TYPE_JSON,
    FIELD_TYPE_RELATION,
)

RELATION_ONE_TO_ONE: Final[str] = "one-to-one"
RELATION_ONE_TO_MANY: Final[str] = "one-to-many"
RELATION_MANY_TO_MANY: Final[str] = "many-to-many"

SUPPORTED_RELATION_KINDS: Final[tuple[str, ...]] = (
    RELATION_ONE_TO_ONE,
    RELATION_ONE_TO_MANY,
    RELATION_MANY_TO_MANY,
)

# ============================================================================
# RBAC CONSTANTS
# ============================================================================

PERMISSION_CREATE: Final[str] = "create"
PERMISSION_READ: Final[str] = "read"
PERMISSION_UPDATE: Final[str] = "update"
PERMISSION_DELETE: Final[str] = "delete"
PERMISSION_ALL: Final[str] = "all"

CRUD_PERMISSIONS: Final[frozenset[str]] = frozenset(
    {PERMISSION_CREATE, PERMISSION_READ, PERMISSION_UPDATE, PERMISSION_DELETE}
)
"""The set the ``all`` shorthand expands to."""

SUPPORTED_PERMISSIONS: Final[tuple[str, ...]] = (
    PERMISSION_CREATE,
    PERMISSION_READ,
    PERMISSION_UPDATE,
    PERMISSION_DELETE,
    PERMISSION_ALL,
)

ADMIN_ROLE: Final[str] = "Admin"
"""The single reserved system role. Bypasses RBAC maps and ownership."""

# Transport verbs accepted by the authorization pipeline
ACTION_PERMISSIONS: Final[dict[str, str]] = {
    "create": PERMISSION_CREATE,
    "read": PERMISSION_READ,
    "update": PERMISSION_UPDATE,
    "delete": PERMISSION_DELETE,
}

HTTP_METHOD_ACTIONS: Final[dict[str, str]] = {
    "POST": "create",
    "GET": "read",
    "PUT": "update",
    "PATCH": "update",
    "DELETE": "delete",
}

# ============================================================================
# STORAGE CONSTANTS
# ============================================================================

DEFAULT_MODELS_COLLECTION: Final[str] = "autocrud_models"
DEFAULT_RECORDS_COLLECTION: Final[str] = "autocrud_records"
DEFAULT_VERSIONS_COLLECTION: Final[str] = "autocrud_model_versions"

MAX_VERSION_ATTEMPTS: Final[int] = 10
"""Retries when a concurrent save of the same model takes the next version number."""

DEFAULT_SERVER_SELECTION_TIMEOUT_MS: Final[int] = 5000
"""How long the engine waits for a reachable MongoDB server on startup."""
