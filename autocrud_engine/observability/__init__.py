"""
Observability components.

Provides structured logging with correlation IDs and authorization context.
"""

from .logging import (CORRELATION_ID_HEADER, ContextualLoggerAdapter,
                      get_correlation_id, get_logger, get_logging_context,
                      log_operation, reset_authz_context,
                      reset_correlation_id, set_authz_context,
                      set_correlation_id)

__all__ = [
    "CORRELATION_ID_HEADER",
    "ContextualLoggerAdapter",
    "get_correlation_id",
    "get_logger",
    "get_logging_context",
    "log_operation",
    "reset_authz_context",
    "reset_correlation_id",
    "set_authz_context",
    "set_correlation_id",
]
