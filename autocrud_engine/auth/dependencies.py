"""
FastAPI Authorization Dependencies

Thin transport adapter around the authorization pipeline: reads the
identity an upstream authentication step attached to ``request.state``,
maps the HTTP method to an action, and turns a denial into an
``HTTPException`` with the decision as detail. Each check runs under the
request's correlation id (``X-Correlation-ID`` header, generated when
absent), which denials echo back in the same header.

This module is part of AUTOCRUD_ENGINE.
"""

from collections.abc import Mapping
from typing import Any

from fastapi import Depends, HTTPException, Request, status

from ..constants import HTTP_METHOD_ACTIONS
from ..exceptions import InvalidActionError
from ..observability import (CORRELATION_ID_HEADER, get_correlation_id,
                             get_logger, reset_correlation_id,
                             set_correlation_id)
from .decisions import Decision, Identity
from .pipeline import AuthorizationPipeline

logger = get_logger(__name__)


async def get_authz_pipeline(request: Request) -> AuthorizationPipeline:
    """
    FastAPI Dependency: Retrieves the shared authorization pipeline
    from app.state.
    """
    pipeline = getattr(request.app.state, "authz_pipeline", None)
    if not pipeline:
        logger.critical("get_authz_pipeline: Authorization pipeline not found on app.state!")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server configuration error: Authorization engine not loaded.",
        )
    return pipeline


async def get_identity(request: Request) -> Identity | None:
    """
    FastAPI Dependency: Returns the identity attached by the authentication
    step, or None when the request is anonymous.
    """
    user = getattr(request.state, "user", None)
    if user is None or isinstance(user, Identity):
        return user
    if not isinstance(user, Mapping):
        logger.warning(f"get_identity: Unsupported user object {type(user).__name__}")
        return None
    try:
        return Identity.from_mapping(user)
    except ValueError as e:
        logger.warning(f"get_identity: Ignoring malformed identity: {e}")
        return None


def action_for_method(method: str) -> str:
    """
    Map an HTTP method to an action.

    Raises:
        InvalidActionError: If the method has no CRUD counterpart
    """
    action = HTTP_METHOD_ACTIONS.get(method.upper())
    if action is None:
        raise InvalidActionError(method)
    return action


def _coerce_record_id(raw: Any) -> Any:
    if isinstance(raw, str) and raw.isdigit():
        return int(raw)
    return raw


def decision_to_http_exception(
    decision: Decision, correlation_id: str | None = None
) -> HTTPException:
    headers = {}
    if decision.status_code == status.HTTP_401_UNAUTHORIZED:
        headers["WWW-Authenticate"] = "Bearer"
    if correlation_id:
        headers[CORRELATION_ID_HEADER] = correlation_id
    return HTTPException(
        status_code=decision.status_code, detail=decision.to_dict(), headers=headers or None
    )


def require_model_access(
    model_name: str | None = None,
    model_param: str = "model_name",
    record_param: str = "record_id",
):
    """
    Dependency Factory: Authorizes the current request against a dynamic model.

    Args:
        model_name: Fixed model name. When None, read from the ``model_param``
            path parameter.
        model_param: Path parameter holding the model name
        record_param: Path parameter holding the record id (absent for
            create and collection reads)

    Returns:
        A dependency that returns the ALLOW ``Decision`` or raises
        ``HTTPException`` on DENY
    """

    async def _check_access(
        request: Request,
        identity: Identity | None = Depends(get_identity),
        pipeline: AuthorizationPipeline = Depends(get_authz_pipeline),
    ) -> Decision:
        target = model_name or request.path_params.get(model_param)
        if not target:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="Model name is required"
            )

        try:
            action = action_for_method(request.method)
        except InvalidActionError as e:
            raise HTTPException(
                status_code=status.HTTP_405_METHOD_NOT_ALLOWED, detail=e.message
            ) from e

        token = set_correlation_id(request.headers.get(CORRELATION_ID_HEADER))
        try:
            decision = await pipeline.check(
                identity,
                target,
                action,
                record_id=_coerce_record_id(request.path_params.get(record_param)),
            )
            if not decision.allow:
                logger.info(
                    f"{request.method} {request.url.path} denied: {decision.reason.value}"
                )
                raise decision_to_http_exception(decision, get_correlation_id())
            return decision
        finally:
            reset_correlation_id(token)

    return _check_access
