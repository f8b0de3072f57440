"""
Authorization Module

Role-based permission resolution, record ownership gating and the
FastAPI dependencies that put them in front of routes.

This module is part of AUTOCRUD_ENGINE.
"""

from .decisions import AuthorizationContext, Decision, DenyReason, Identity
from .dependencies import (decision_to_http_exception, get_authz_pipeline,
                           get_identity, require_model_access)
from .permissions import (Permission, expand_permissions, has_permission,
                          resolve_role_permissions)
from .pipeline import AuthorizationPipeline, is_admin, map_action

__all__ = [
    # Permissions
    "Permission",
    "expand_permissions",
    "has_permission",
    "resolve_role_permissions",
    # Decisions
    "AuthorizationContext",
    "Decision",
    "DenyReason",
    "Identity",
    # Pipeline
    "AuthorizationPipeline",
    "is_admin",
    "map_action",
    # FastAPI
    "decision_to_http_exception",
    "get_authz_pipeline",
    "get_identity",
    "require_model_access",
]
