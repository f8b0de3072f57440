"""
In-memory store implementations.

Used by the CLI and tests, and as a reference for other backends.
"""

import copy
import itertools
from collections.abc import Mapping
from typing import Any, Dict, List, Optional

from ..core.models import ModelDefinition
from .base import ModelStore, RecordStore


class InMemoryModelStore(ModelStore):
    """Model definitions held in a dict."""

    def __init__(self, models: Optional[List[ModelDefinition]] = None):
        self._models: Dict[str, ModelDefinition] = {}
        for model in models or []:
            self._models[model.name] = model

    async def get(self, name: str) -> Optional[ModelDefinition]:
        return self._models.get(name)

    async def put(self, name: str, definition: ModelDefinition) -> None:
        self._models[name] = definition

    async def delete(self, name: str) -> None:
        self._models.pop(name, None)

    async def list_names(self) -> List[str]:
        return sorted(self._models)


class InMemoryRecordStore(RecordStore):
    """Records held per model, with auto-incrementing integer ids."""

    def __init__(self) -> None:
        self._records: Dict[str, Dict[int, Dict[str, Any]]] = {}
        self._ids = itertools.count(1)

    def insert(self, model_name: str, data: Mapping) -> int:
        record_id = next(self._ids)
        self._records.setdefault(model_name, {})[record_id] = dict(data)
        return record_id

    def get(self, model_name: str, record_id: Any) -> Optional[Dict[str, Any]]:
        record = self._records.get(model_name, {}).get(record_id)
        if record is None:
            return None
        return {"id": record_id, **copy.deepcopy(record)}

    def list_records(self, model_name: str) -> List[Dict[str, Any]]:
        return [
            {"id": record_id, **copy.deepcopy(record)}
            for record_id, record in self._records.get(model_name, {}).items()
        ]

    async def get_owner(self, model_name: str, record_id: Any, owner_field: str) -> Any:
        record = self._records.get(model_name, {}).get(record_id)
        if record is None:
            return None
        return record.get(owner_field)
