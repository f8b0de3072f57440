"""
MongoDB Store Implementations

Implements the store interfaces with Motor.

Model document:
    {"_id": <model name>, "definition": dict (camelCase wire form),
     "updated_at": datetime}

Record document:
    {"_id": <record id>, "model_name": str, "data": dict,
     "created_at": datetime, "updated_at": datetime}
"""

import logging
from datetime import datetime, timezone
from typing import Any, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from ..constants import DEFAULT_MODELS_COLLECTION, DEFAULT_RECORDS_COLLECTION
from ..core.models import ModelDefinition
from .base import ModelStore, RecordStore

logger = logging.getLogger(__name__)


class MongoModelStore(ModelStore):
    """
    Current model definitions in a MongoDB collection, keyed by name.

    Example:
        store = MongoModelStore(db)
        await store.put("Employee", definition)
        definition = await store.get("Employee")
    """

    def __init__(
        self, mongo_db: AsyncIOMotorDatabase, collection: str = DEFAULT_MODELS_COLLECTION
    ):
        self._collection = mongo_db[collection]

    async def get(self, name: str) -> Optional[ModelDefinition]:
        doc = await self._collection.find_one({"_id": name})
        if doc is None:
            return None
        return ModelDefinition.model_validate(doc["definition"])

    async def put(self, name: str, definition: ModelDefinition) -> None:
        await self._collection.replace_one(
            {"_id": name},
            {
                "_id": name,
                "definition": definition.to_dict(),
                "updated_at": datetime.now(timezone.utc),
            },
            upsert=True,
        )
        logger.debug(f"Stored current definition of model '{name}'")

    async def delete(self, name: str) -> None:
        await self._collection.delete_one({"_id": name})

    async def list_names(self) -> List[str]:
        cursor = self._collection.find({}, projection={"_id": 1})
        docs = await cursor.to_list(length=None)
        return sorted(doc["_id"] for doc in docs)


class MongoRecordStore(RecordStore):
    """Owner lookups against records stored in a MongoDB collection."""

    def __init__(
        self, mongo_db: AsyncIOMotorDatabase, collection: str = DEFAULT_RECORDS_COLLECTION
    ):
        self._collection = mongo_db[collection]

    async def get_owner(self, model_name: str, record_id: Any, owner_field: str) -> Any:
        doc = await self._collection.find_one(
            {"_id": record_id, "model_name": model_name},
            projection={f"data.{owner_field}": 1},
        )
        if doc is None:
            return None
        return (doc.get("data") or {}).get(owner_field)
