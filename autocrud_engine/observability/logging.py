"""
Contextual logging for AUTOCRUD_ENGINE.

Two context variables travel with every log record emitted through
``get_logger``:

- the correlation id of the current request, bound by the FastAPI
  dependency (taken from the ``X-Correlation-ID`` header or generated)
- the authorization context of the check in progress (model, user, role,
  action), bound by the authorization pipeline

Both setters return a ``contextvars.Token``; callers reset with that token
so nested scopes restore the outer value.
"""

import contextvars
import logging
import uuid
from typing import Any

CORRELATION_ID_HEADER = "X-Correlation-ID"

_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "autocrud_correlation_id", default=None
)

_authz_context: contextvars.ContextVar[dict[str, Any]] = contextvars.ContextVar(
    "autocrud_authz_context", default={}
)


def get_correlation_id() -> str | None:
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> contextvars.Token:
    """
    Bind a correlation id to the current context.

    Args:
        correlation_id: Incoming id; a new UUID4 is generated when empty

    Returns:
        Token for ``reset_correlation_id``
    """
    return _correlation_id.set(correlation_id or str(uuid.uuid4()))


def reset_correlation_id(token: contextvars.Token) -> None:
    _correlation_id.reset(token)


def set_authz_context(
    model_name: str | None = None,
    user_id: int | None = None,
    role: str | None = None,
    **kwargs: Any,
) -> contextvars.Token:
    """Bind the authorization context of one check. None values are left out."""
    values = {"model_name": model_name, "user_id": user_id, "role": role, **kwargs}
    return _authz_context.set({k: v for k, v in values.items() if v is not None})


def reset_authz_context(token: contextvars.Token) -> None:
    _authz_context.reset(token)


def get_logging_context() -> dict[str, Any]:
    """Return the correlation id (when bound) merged with the authorization context."""
    context: dict[str, Any] = dict(_authz_context.get())
    correlation_id = _correlation_id.get()
    if correlation_id:
        context["correlation_id"] = correlation_id
    return context


class ContextualLoggerAdapter(logging.LoggerAdapter):
    """Adds the logging context to the ``extra`` of every record."""

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        kwargs["extra"] = {**get_logging_context(), **kwargs.get("extra", {})}
        return msg, kwargs


def get_logger(name: str) -> ContextualLoggerAdapter:
    return ContextualLoggerAdapter(logging.getLogger(name), {})


def log_operation(
    logger: logging.Logger | logging.LoggerAdapter,
    operation: str,
    level: int = logging.INFO,
    success: bool = True,
    duration_ms: float | None = None,
    **context: Any,
) -> None:
    """
    Log an operation with structured context.

    The record carries ``operation``, ``success``, an optional rounded
    ``duration_ms`` and any extra keyword context. Keys must not collide
    with ``logging.LogRecord`` attributes.

    Args:
        logger: Logger or adapter to emit through
        operation: Operation name, e.g. ``model_save``
        level: Log level
        success: Whether the operation succeeded
        duration_ms: Operation duration in milliseconds
        **context: Additional structured fields
    """
    extra = {**get_logging_context(), "operation": operation, "success": success, **context}
    message = f"Operation: {operation}" if success else f"Operation failed: {operation}"
    if duration_ms is not None:
        extra["duration_ms"] = round(duration_ms, 2)
        message += f" (duration: {duration_ms:.2f}ms)"

    logger.log(level, message, extra=extra)
