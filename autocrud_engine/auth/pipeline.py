"""
Authorization pipeline.

Evaluates one ``AuthorizationContext`` through a fixed sequence of checks,
stopping at the first terminal outcome:

1. Identity present, else DENY(unauthenticated)
2. Admin bypass, ALLOW with no RBAC or ownership restriction (creates and
   updates on owned models still force or protect the owner field)
3. Model lookup, else DENY(model_not_found)
4. Verb to permission mapping, else DENY(invalid_action)
5. RBAC resolution, else DENY(insufficient_permission)
6. Ownership gate (single-record read/update/delete, collection read filter)
7. Create-time owner assignment

Model and owner lookups are injected collaborators and may be synchronous
or asynchronous. A failing or timed-out lookup yields DENY(lookup_failed),
never an implicit allow.

This module is part of AUTOCRUD_ENGINE.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Mapping
from typing import Any, Callable, Optional, Protocol, Union

from ..constants import (ACTION_PERMISSIONS, ADMIN_ROLE, PERMISSION_CREATE,
                         PERMISSION_READ, PERMISSION_UPDATE)
from ..core.models import ModelDefinition
from ..core.records import as_user_id, coerce_record, is_owned_by
from ..exceptions import CollaboratorError, ConfigurationError
from ..observability.logging import (get_logger, reset_authz_context,
                                     set_authz_context)
from .decisions import AuthorizationContext, Decision, DenyReason, Identity
from .permissions import has_permission

logger = get_logger(__name__)

MaybeAwaitable = Union[Any, Awaitable[Any]]


class ModelLookup(Protocol):
    """Collaborator returning the current definition of a model, or None."""

    def get(self, name: str) -> MaybeAwaitable:
        ...


class OwnerLookup(Protocol):
    """Collaborator returning a record's owner value, or None if the record is absent."""

    def get_owner(self, model_name: str, record_id: Any, owner_field: str) -> MaybeAwaitable:
        ...


def is_admin(role: Optional[str]) -> bool:
    """Check for the single reserved system role."""
    return role == ADMIN_ROLE


def map_action(action: Any) -> Optional[str]:
    """Map a transport verb to a permission literal (None when unmapped)."""
    if not isinstance(action, str):
        return None
    return ACTION_PERMISSIONS.get(action.strip().lower())


class AuthorizationPipeline:
    """
    Allow/deny decisions for actions against dynamic models.

    Example:
        pipeline = AuthorizationPipeline(model_store, record_store)
        decision = await pipeline.check(
            Identity(user_id=7, role="Manager"), "Employee", "update", record_id=12
        )
        if not decision.allow:
            raise HTTPException(decision.status_code, decision.to_dict())
    """

    def __init__(
        self,
        model_store: ModelLookup,
        record_store: Optional[OwnerLookup] = None,
        lookup_timeout: Optional[float] = None,
    ):
        """
        Args:
            model_store: Source of current model definitions
            record_store: Source of record owner values. Required once an
                owned model receives a single-record action.
            lookup_timeout: Seconds to wait on an asynchronous lookup
        """
        self._model_store = model_store
        self._record_store = record_store
        self._lookup_timeout = lookup_timeout

    async def check(
        self,
        identity: Optional[Identity],
        model_name: str,
        action: str,
        record_id: Any = None,
    ) -> Decision:
        """Shortcut for ``authorize`` with the context built from arguments."""
        return await self.authorize(
            AuthorizationContext(
                identity=identity, model_name=model_name, action=action, record_id=record_id
            )
        )

    async def authorize(self, context: AuthorizationContext) -> Decision:
        identity = context.identity
        if identity is None:
            return self._deny(
                DenyReason.UNAUTHENTICATED, context, message="Authentication required"
            )

        token = set_authz_context(
            model_name=context.model_name,
            user_id=identity.user_id,
            role=identity.role,
            action=context.action,
        )
        try:
            return await self._authorize_identity(context, identity)
        finally:
            reset_authz_context(token)

    async def _authorize_identity(
        self, context: AuthorizationContext, identity: Identity
    ) -> Decision:
        if is_admin(identity.role):
            return await self._authorize_admin(context, identity)

        try:
            model = await self._get_model(context.model_name)
        except CollaboratorError as e:
            return self._lookup_failed(context, e)
        if model is None:
            return self._deny(
                DenyReason.MODEL_NOT_FOUND,
                context,
                message=f"Model '{context.model_name}' not found",
            )

        permission = map_action(context.action)
        if permission is None:
            return self._deny(
                DenyReason.INVALID_ACTION,
                context,
                message=f"Unsupported action: {context.action!r}",
            )

        if not has_permission(model.rbac, identity.role, permission):
            return self._deny(
                DenyReason.INSUFFICIENT_PERMISSION,
                context,
                required_permission=permission,
                message="Insufficient permissions",
            )

        owner_field = model.owner_field
        common = dict(
            model_name=model.name,
            role=identity.role,
            user_id=identity.user_id,
            required_permission=permission,
        )
        if not owner_field:
            return Decision.allowed(**common)

        if permission == PERMISSION_CREATE:
            return Decision.allowed(
                owner_field=owner_field, forced_owner_assignment=owner_field, **common
            )

        if permission == PERMISSION_READ and not context.is_single_record:
            return Decision.allowed(
                owner_field=owner_field,
                row_filter=_owner_row_filter(model, owner_field, identity.user_id),
                **common,
            )

        if not context.is_single_record:
            return self._deny(
                DenyReason.INVALID_ACTION,
                context,
                required_permission=permission,
                owner_field=owner_field,
                message=f"Action '{permission}' on an owned model requires a record id",
            )

        try:
            owner = await self._get_owner(model.name, context.record_id, owner_field)
        except CollaboratorError as e:
            return self._lookup_failed(context, e, owner_field=owner_field)
        if owner is None:
            return self._deny(
                DenyReason.NOT_FOUND,
                context,
                required_permission=permission,
                owner_field=owner_field,
                message="Record not found",
            )
        if as_user_id(owner) != identity.user_id:
            return self._deny(
                DenyReason.NOT_OWNER,
                context,
                required_permission=permission,
                owner_field=owner_field,
                message=f"Access denied: you can only {permission} your own records",
            )

        protected = (owner_field,) if permission == PERMISSION_UPDATE else ()
        return Decision.allowed(owner_field=owner_field, protected_fields=protected, **common)

    async def _authorize_admin(
        self, context: AuthorizationContext, identity: Identity
    ) -> Decision:
        """
        Admin skips RBAC and ownership checks, but writes still keep the
        owner field: creates are stamped with the admin's id and updates
        cannot change the stored owner.
        """
        logger.debug(f"Admin bypass for '{context.action}' on '{context.model_name}'")
        common = dict(model_name=context.model_name, role=identity.role, user_id=identity.user_id)

        permission = map_action(context.action)
        if permission not in (PERMISSION_CREATE, PERMISSION_UPDATE):
            return Decision.allowed(**common)

        try:
            model = await self._get_model(context.model_name)
        except CollaboratorError as e:
            return self._lookup_failed(context, e)
        if model is None or not model.owner_field:
            return Decision.allowed(required_permission=permission, **common)

        owner_field = model.owner_field
        if permission == PERMISSION_CREATE:
            return Decision.allowed(
                required_permission=permission,
                owner_field=owner_field,
                forced_owner_assignment=owner_field,
                **common,
            )
        return Decision.allowed(
            required_permission=permission,
            owner_field=owner_field,
            protected_fields=(owner_field,),
            **common,
        )

    async def _call(self, collaborator: str, func: Callable[..., Any], *args: Any) -> Any:
        try:
            result = func(*args)
            if inspect.isawaitable(result):
                if self._lookup_timeout is not None:
                    result = await asyncio.wait_for(result, timeout=self._lookup_timeout)
                else:
                    result = await result
            return result
        except asyncio.TimeoutError as e:
            raise CollaboratorError(
                f"{collaborator} lookup timed out after {self._lookup_timeout}s",
                collaborator=collaborator,
            ) from e
        except Exception as e:
            raise CollaboratorError(
                f"{collaborator} lookup failed: {e}", collaborator=collaborator
            ) from e

    async def _get_model(self, name: str) -> Optional[ModelDefinition]:
        model = await self._call("model_store", self._model_store.get, name)
        if model is None or isinstance(model, ModelDefinition):
            return model
        if isinstance(model, Mapping):
            try:
                return ModelDefinition.model_validate(model)
            except ValueError as e:
                raise CollaboratorError(
                    f"model_store returned a malformed definition for '{name}': {e}",
                    collaborator="model_store",
                ) from e
        raise CollaboratorError(
            f"model_store returned {type(model).__name__} for '{name}'",
            collaborator="model_store",
        )

    async def _get_owner(self, model_name: str, record_id: Any, owner_field: str) -> Any:
        if self._record_store is None:
            raise ConfigurationError(
                "A record store is required to check ownership of single records",
                config_key="record_store",
            )
        return await self._call(
            "record_store", self._record_store.get_owner, model_name, record_id, owner_field
        )

    def _deny(self, reason: DenyReason, context: AuthorizationContext, **kwargs: Any) -> Decision:
        identity = context.identity
        decision = Decision.denied(
            reason,
            model_name=context.model_name,
            role=identity.role if identity else None,
            user_id=identity.user_id if identity else None,
            **kwargs,
        )
        logger.info(
            f"Authorization DENIED ({reason.value}) for '{context.action}' "
            f"on '{context.model_name}'"
        )
        return decision

    def _lookup_failed(
        self, context: AuthorizationContext, error: CollaboratorError, **kwargs: Any
    ) -> Decision:
        logger.error(
            f"Authorization lookup failed for '{context.action}' on "
            f"'{context.model_name}': {error}",
            exc_info=True,
        )
        return Decision.denied(
            DenyReason.LOOKUP_FAILED,
            model_name=context.model_name,
            role=context.identity.role if context.identity else None,
            user_id=context.identity.user_id if context.identity else None,
            message=str(error.message),
            **kwargs,
        )


def _owner_row_filter(model: ModelDefinition, owner_field: str, user_id: int):
    def keep(record: Mapping) -> bool:
        return is_owned_by(coerce_record(model, record), owner_field, user_id)

    return keep
