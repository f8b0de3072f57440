"""
MongoDB Version Ledger

Stores snapshots in MongoDB. A unique index on (model_name, version)
serializes number assignment per model: a save reads the latest version,
inserts latest + 1, and retries on a duplicate-key error when a concurrent
save of the same model won the number. Saves of different models never
conflict. A number is only consumed by a stored snapshot, so the sequence
has no gaps.

Snapshot document:
    {
        "model_name": str,
        "version": int,
        "timestamp": datetime,
        "definition": dict (camelCase wire form)
    }
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import DuplicateKeyError, OperationFailure

from ..constants import DEFAULT_VERSIONS_COLLECTION, MAX_VERSION_ATTEMPTS
from ..core.models import ModelDefinition
from ..exceptions import CollaboratorError
from .ledger import ModelVersionSnapshot, VersionHistory

logger = logging.getLogger(__name__)


class MongoVersionLedger:
    """
    Version ledger backed by a MongoDB collection.

    Example:
        ledger = MongoVersionLedger(db)
        snapshot = await ledger.record_version("Employee", definition)
    """

    def __init__(
        self,
        mongo_db: AsyncIOMotorDatabase,
        versions_collection: str = DEFAULT_VERSIONS_COLLECTION,
        max_attempts: int = MAX_VERSION_ATTEMPTS,
    ):
        """
        Initialize the ledger.

        Args:
            mongo_db: MongoDB database instance
            versions_collection: Collection holding snapshots
            max_attempts: How many times a save retries after losing a
                version number to a concurrent save of the same model
        """
        self._versions = mongo_db[versions_collection]
        self._max_attempts = max_attempts
        self._indexes_created = False

    async def ensure_indexes(self) -> None:
        """Create the unique (model_name, version) index if needed."""
        if self._indexes_created:
            return
        try:
            await self._versions.create_index(
                [("model_name", ASCENDING), ("version", DESCENDING)],
                unique=True,
                name="model_version_unique",
            )
            self._indexes_created = True
        except OperationFailure as e:
            raise CollaboratorError(
                f"Failed to create version ledger index: {e}", collaborator="version_ledger"
            ) from e

    async def record_version(
        self, model_name: str, definition: ModelDefinition
    ) -> ModelVersionSnapshot:
        await self.ensure_indexes()
        for attempt in range(1, self._max_attempts + 1):
            version = await self.latest_version(model_name) + 1
            snapshot = ModelVersionSnapshot(
                model_name=model_name,
                version=version,
                timestamp=datetime.now(timezone.utc),
                definition=definition,
            )
            try:
                await self._versions.insert_one(self._to_document(snapshot))
            except DuplicateKeyError:
                logger.debug(
                    f"Version {version} of '{model_name}' taken concurrently "
                    f"(attempt {attempt}/{self._max_attempts})"
                )
                continue
            logger.info(f"Recorded version {version} of model '{model_name}'")
            return snapshot

        raise CollaboratorError(
            f"Could not assign a version to '{model_name}' after "
            f"{self._max_attempts} attempts",
            collaborator="version_ledger",
            context={"model_name": model_name},
        )

    async def get_version(self, model_name: str, version: int) -> Optional[ModelVersionSnapshot]:
        doc = await self._versions.find_one({"model_name": model_name, "version": version})
        return self._from_document(doc) if doc else None

    async def latest_version(self, model_name: str) -> int:
        doc = await self._versions.find_one(
            {"model_name": model_name},
            projection={"version": 1},
            sort=[("version", DESCENDING)],
        )
        return int(doc["version"]) if doc else 0

    async def list_versions(self, model_name: str) -> VersionHistory:
        cursor = self._versions.find({"model_name": model_name}).sort("version", DESCENDING)
        docs = await cursor.to_list(length=None)
        return VersionHistory(model_name, [self._from_document(doc) for doc in docs])

    @staticmethod
    def _to_document(snapshot: ModelVersionSnapshot) -> Dict[str, Any]:
        return {
            "model_name": snapshot.model_name,
            "version": snapshot.version,
            "timestamp": snapshot.timestamp,
            "definition": snapshot.definition.to_dict(),
        }

    @staticmethod
    def _from_document(doc: Dict[str, Any]) -> ModelVersionSnapshot:
        return ModelVersionSnapshot(
            model_name=doc["model_name"],
            version=int(doc["version"]),
            timestamp=doc["timestamp"],
            definition=ModelDefinition.model_validate(doc["definition"]),
        )
