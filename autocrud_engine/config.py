"""
Configuration management for AUTOCRUD_ENGINE.

Configuration is optional: every component can be built with direct
parameters. ``EngineConfig`` gathers the values from the environment and
feeds ``AutoCrudEngine``, which wires the Motor-backed stores, ledger and
pipeline from it.
"""

import os

from .constants import (DEFAULT_MODELS_COLLECTION, DEFAULT_RECORDS_COLLECTION,
                        DEFAULT_VERSIONS_COLLECTION)
from .exceptions import ConfigurationError


class EngineConfig:
    """
    AutoCRUD engine configuration.

    Example:
        # Using environment variables
        config = EngineConfig()
        config.validate()

        # Or using direct parameters
        config = EngineConfig(
            mongo_uri="mongodb://localhost:27017",
            db_name="autocrud",
        )
    """

    def __init__(
        self,
        mongo_uri: str | None = None,
        db_name: str | None = None,
        models_collection: str | None = None,
        records_collection: str | None = None,
        versions_collection: str | None = None,
        lookup_timeout: float | None = None,
    ):
        """
        Initialize configuration.

        Args:
            mongo_uri: MongoDB connection URI (defaults to MONGO_URI env var)
            db_name: Database name (defaults to DB_NAME env var)
            models_collection: Collection holding current model definitions
            records_collection: Collection holding records
            versions_collection: Collection holding version snapshots
            lookup_timeout: Seconds to wait on collaborator lookups
                (defaults to AUTOCRUD_LOOKUP_TIMEOUT, unset means no timeout)
        """
        self.mongo_uri = mongo_uri or os.getenv("MONGO_URI", "")
        self.db_name = db_name or os.getenv("DB_NAME", "")
        self.models_collection = models_collection or os.getenv(
            "AUTOCRUD_MODELS_COLLECTION", DEFAULT_MODELS_COLLECTION
        )
        self.records_collection = records_collection or os.getenv(
            "AUTOCRUD_RECORDS_COLLECTION", DEFAULT_RECORDS_COLLECTION
        )
        self.versions_collection = versions_collection or os.getenv(
            "AUTOCRUD_VERSIONS_COLLECTION", DEFAULT_VERSIONS_COLLECTION
        )
        if lookup_timeout is None:
            raw_timeout = os.getenv("AUTOCRUD_LOOKUP_TIMEOUT", "")
            try:
                lookup_timeout = float(raw_timeout) if raw_timeout else None
            except ValueError as e:
                raise ConfigurationError(
                    "AUTOCRUD_LOOKUP_TIMEOUT must be a number of seconds",
                    config_key="AUTOCRUD_LOOKUP_TIMEOUT",
                    config_value=raw_timeout,
                ) from e
        self.lookup_timeout = lookup_timeout

    def validate(self) -> None:
        """
        Validate configuration values.

        Raises:
            ConfigurationError: If required configuration is missing or invalid
        """
        if not self.mongo_uri:
            raise ConfigurationError(
                "mongo_uri is required (set MONGO_URI environment variable or pass directly)",
                config_key="MONGO_URI",
            )

        if not self.db_name:
            raise ConfigurationError(
                "db_name is required (set DB_NAME environment variable or pass directly)",
                config_key="DB_NAME",
            )

        collections = {
            "models_collection": self.models_collection,
            "records_collection": self.records_collection,
            "versions_collection": self.versions_collection,
        }
        for key, value in collections.items():
            if not value:
                raise ConfigurationError(f"{key} must not be empty", config_key=key)
        if len(set(collections.values())) != len(collections):
            raise ConfigurationError(
                "Collection names must be distinct",
                config_value=sorted(collections.values()),
            )

        if self.lookup_timeout is not None and self.lookup_timeout <= 0:
            raise ConfigurationError(
                f"lookup_timeout must be > 0, got {self.lookup_timeout}",
                config_key="lookup_timeout",
                config_value=self.lookup_timeout,
            )
