"""
Custom exceptions for AUTOCRUD_ENGINE.

These exceptions provide more specific error types while maintaining
backward compatibility with RuntimeError. Authorization denials are not
exceptions; they are returned as ``Decision`` values.
"""

from typing import Any, Dict, List, Optional, Sequence


class AutoCrudEngineError(RuntimeError):
    """
    Base exception for AutoCRUD engine errors.

    Attributes:
        message: Error message
        context: Optional dictionary with additional context (model_name,
                 role, etc.)
    """

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            context: Optional dictionary with additional context information
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """Return formatted error message with context if available."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (context: {context_str})"
        return self.message


class ModelValidationError(AutoCrudEngineError):
    """
    Raised when a submitted model definition is invalid.

    Always recoverable by the submitter. Carries the complete list of
    violations, not just the first one.

    Attributes:
        message: Error message
        error_paths: Field-access paths of the offending values
        issues: The full list of ``ValidationIssue`` objects
        model_name: Model name from the submission (if available)
        context: Additional context information
    """

    def __init__(
        self,
        message: str,
        error_paths: Optional[List[str]] = None,
        issues: Optional[Sequence[Any]] = None,
        model_name: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        context = context or {}
        if error_paths:
            context["error_paths"] = error_paths
        if model_name:
            context["model_name"] = model_name
        super().__init__(message, context=context)
        self.error_paths = error_paths or []
        self.issues = list(issues or [])
        self.model_name = model_name


class InvalidActionError(AutoCrudEngineError):
    """
    Raised when a transport verb has no mapping to a permission.

    This is a hard input error, not a security decision.
    """

    def __init__(self, action: Any, context: Optional[Dict[str, Any]] = None) -> None:
        context = context or {}
        context["action"] = action
        super().__init__(f"Unsupported action: {action!r}", context=context)
        self.action = action


class CollaboratorError(AutoCrudEngineError):
    """
    Raised when an injected lookup (model fetch, owner fetch) fails or times out.

    Attributes:
        collaborator: Name of the collaborator that failed
        context: Additional context information
    """

    def __init__(
        self,
        message: str,
        collaborator: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        context = context or {}
        if collaborator:
            context["collaborator"] = collaborator
        super().__init__(message, context=context)
        self.collaborator = collaborator


class ConfigurationError(AutoCrudEngineError):
    """
    Raised when configuration is invalid or missing.

    Attributes:
        message: Error message
        config_key: Configuration key that caused the error (if available)
        config_value: Configuration value that caused the error (if available)
        context: Additional context information
    """

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        context = context or {}
        if config_key:
            context["config_key"] = config_key
        if config_value is not None:
            context["config_value"] = config_value
        super().__init__(message, context=context)
        self.config_key = config_key
        self.config_value = config_value
