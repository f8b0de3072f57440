"""
Permission resolution for per-model RBAC maps.

Roles are plain strings so operators can define custom roles per model.
No role gains permissions from its name; the reserved admin role is
handled by the authorization pipeline and never reaches this resolver.

This module is part of AUTOCRUD_ENGINE.
"""

from collections.abc import Iterable, Mapping
from enum import Enum
from typing import FrozenSet, Optional, Union

from ..constants import (CRUD_PERMISSIONS, PERMISSION_ALL, PERMISSION_CREATE,
                         PERMISSION_DELETE, PERMISSION_READ, PERMISSION_UPDATE)

RBACRules = Mapping[str, Iterable[str]]


class Permission(str, Enum):
    """Permission literals. ``ALL`` is shorthand for the four CRUD permissions."""

    CREATE = PERMISSION_CREATE
    READ = PERMISSION_READ
    UPDATE = PERMISSION_UPDATE
    DELETE = PERMISSION_DELETE
    ALL = PERMISSION_ALL


def _literal(permission: Union[str, Permission]) -> str:
    return permission.value if isinstance(permission, Permission) else str(permission)


def expand_permissions(grants: Iterable[Union[str, Permission]]) -> FrozenSet[str]:
    """
    Expand a role's grants into concrete permissions.

    If ``all`` is among the grants the result is exactly the four CRUD
    permissions, whatever else is listed. Otherwise the grants are returned
    as given, unknown literals included, with any ``all`` removed.

    Example:
        >>> sorted(expand_permissions(["all"]))
        ['create', 'delete', 'read', 'update']
        >>> expand_permissions(["read"])
        frozenset({'read'})
    """
    literals = {_literal(grant) for grant in grants}
    if PERMISSION_ALL in literals:
        return frozenset(CRUD_PERMISSIONS)
    return frozenset(literals - {PERMISSION_ALL})


def resolve_role_permissions(rbac: Optional[RBACRules], role: str) -> FrozenSet[str]:
    """Return the expanded permissions of ``role`` (empty when it has no entry)."""
    if not rbac or role not in rbac:
        return frozenset()
    return expand_permissions(rbac[role] or ())


def has_permission(
    rbac: Optional[RBACRules], role: str, permission: Union[str, Permission]
) -> bool:
    """
    Check whether ``role`` holds ``permission`` under ``rbac``.

    Default-deny: a missing map or a role without an entry holds nothing.
    Asking for ``all`` succeeds only when the role holds every CRUD
    permission.
    """
    granted = resolve_role_permissions(rbac, role)
    literal = _literal(permission)
    if literal == PERMISSION_ALL:
        return CRUD_PERMISSIONS <= granted
    return literal in granted
