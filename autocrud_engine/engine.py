"""
MongoDB-backed engine wiring.

Builds the Motor stores, the version ledger, the model registry and the
authorization pipeline from one validated ``EngineConfig``.

This module is part of AUTOCRUD_ENGINE.
"""

import logging
import time

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import ConnectionFailure, ServerSelectionTimeoutError

from .auth.pipeline import AuthorizationPipeline
from .config import EngineConfig
from .constants import DEFAULT_SERVER_SELECTION_TIMEOUT_MS
from .core.registry import ModelRegistry
from .exceptions import CollaboratorError, ConfigurationError
from .observability import get_logger, log_operation
from .stores.mongo import MongoModelStore, MongoRecordStore
from .versioning.mongo import MongoVersionLedger

logger = get_logger(__name__)


class AutoCrudEngine:
    """
    Registry and authorization pipeline over one MongoDB database.

    Example:
        engine = AutoCrudEngine(EngineConfig())
        await engine.initialize()
        app.state.authz_pipeline = engine.pipeline
        await engine.registry.save(EMPLOYEE_MODEL)
    """

    def __init__(self, config: EngineConfig | None = None, mongo_client=None):
        """
        Args:
            config: Engine configuration (read from the environment when None)
            mongo_client: Existing Motor client. The engine creates and owns
                one when None.
        """
        self.config = config or EngineConfig()
        self._client = mongo_client
        self._owns_client = mongo_client is None
        self._db: AsyncIOMotorDatabase | None = None
        self._registry: ModelRegistry | None = None
        self._pipeline: AuthorizationPipeline | None = None
        self._record_store: MongoRecordStore | None = None

    async def initialize(self) -> None:
        """
        Validate configuration, connect and build the components.

        Raises:
            ConfigurationError: If the configuration is invalid
            CollaboratorError: If MongoDB cannot be reached
        """
        if self._db is not None:
            logger.warning("AutoCrudEngine already initialized. Skipping re-initialization.")
            return

        start = time.time()
        self.config.validate()

        if self._client is None:
            self._client = AsyncIOMotorClient(
                self.config.mongo_uri,
                serverSelectionTimeoutMS=DEFAULT_SERVER_SELECTION_TIMEOUT_MS,
                appname="AUTOCRUD_ENGINE",
            )
        try:
            await self._client.admin.command("ping")
        except (ConnectionFailure, ServerSelectionTimeoutError) as e:
            log_operation(
                logger,
                "engine_initialize",
                level=logging.CRITICAL,
                success=False,
                duration_ms=(time.time() - start) * 1000,
            )
            raise CollaboratorError(
                f"Failed to connect to MongoDB: {e}", collaborator="mongodb"
            ) from e

        db = self._client[self.config.db_name]
        ledger = MongoVersionLedger(db, self.config.versions_collection)
        await ledger.ensure_indexes()

        model_store = MongoModelStore(db, self.config.models_collection)
        self._record_store = MongoRecordStore(db, self.config.records_collection)
        self._registry = ModelRegistry(model_store, ledger)
        self._pipeline = AuthorizationPipeline(
            model_store, self._record_store, lookup_timeout=self.config.lookup_timeout
        )
        self._db = db

        log_operation(
            logger,
            "engine_initialize",
            duration_ms=(time.time() - start) * 1000,
            db_name=self.config.db_name,
        )

    async def shutdown(self) -> None:
        if self._client is not None and self._owns_client:
            self._client.close()
            self._client = None
        self._db = None
        self._registry = None
        self._pipeline = None
        self._record_store = None

    def _require(self, component, name: str):
        if component is None:
            raise ConfigurationError(
                f"AutoCrudEngine is not initialized; call initialize() before using {name}",
                config_key=name,
            )
        return component

    @property
    def registry(self) -> ModelRegistry:
        return self._require(self._registry, "registry")

    @property
    def pipeline(self) -> AuthorizationPipeline:
        return self._require(self._pipeline, "pipeline")

    @property
    def record_store(self) -> MongoRecordStore:
        return self._require(self._record_store, "record_store")
