"""
AUTOCRUD_ENGINE - Dynamic Model Engine

Schema validation, role-based access control and version history for
models defined at runtime.
"""

# Authorization
from .auth import (AuthorizationPipeline, Decision, DenyReason, Identity,
                   require_model_access)
from .config import EngineConfig
# Core
from .core import (ModelDefinition, ModelRegistry, ModelValidator,
                   validate_model_definition, validate_model_definitions)
# Wiring
from .engine import AutoCrudEngine
from .exceptions import (AutoCrudEngineError, CollaboratorError,
                         ConfigurationError, InvalidActionError,
                         ModelValidationError)
# Storage
from .stores import (InMemoryModelStore, InMemoryRecordStore, MongoModelStore,
                     MongoRecordStore)
# Versioning
from .versioning import MongoVersionLedger, VersionLedger

__version__ = "0.1.0"

__all__ = [
    # Core
    "ModelDefinition",
    "ModelRegistry",
    "ModelValidator",
    "validate_model_definition",
    "validate_model_definitions",
    # Authorization
    "AuthorizationPipeline",
    "Decision",
    "DenyReason",
    "Identity",
    "require_model_access",
    # Storage
    "InMemoryModelStore",
    "InMemoryRecordStore",
    "MongoModelStore",
    "MongoRecordStore",
    # Versioning
    "VersionLedger",
    "MongoVersionLedger",
    # Config and errors
    "AutoCrudEngine",
    "EngineConfig",
    "AutoCrudEngineError",
    "CollaboratorError",
    "ConfigurationError",
    "InvalidActionError",
    "ModelValidationError",
]
