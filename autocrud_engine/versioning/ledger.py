"""
Model Version Ledger

Append-only history of model definitions. Every save of a model appends
an immutable snapshot numbered 1, 2, 3, ... per model name.

Number assignment is serialized per model name: concurrent saves of the
same model queue behind one lock, while saves of different models never
wait on each other.

This module is part of AUTOCRUD_ENGINE.
"""

import asyncio
import logging
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..core.models import ModelDefinition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModelVersionSnapshot:
    """An immutable, numbered copy of a model definition."""

    model_name: str
    version: int
    timestamp: datetime
    definition: ModelDefinition

    def to_dict(self) -> Dict[str, Any]:
        return {
            "modelName": self.model_name,
            "version": self.version,
            "timestamp": self.timestamp.isoformat(),
            "definition": self.definition.to_dict(),
        }


class VersionHistory:
    """
    Snapshots of one model, newest first.

    Iteration is lazy and restartable: each ``iter()`` walks the same
    stored tuple from the start.
    """

    def __init__(self, model_name: str, snapshots: Sequence[ModelVersionSnapshot]):
        self.model_name = model_name
        self._snapshots: Tuple[ModelVersionSnapshot, ...] = tuple(
            sorted(snapshots, key=lambda snapshot: snapshot.version, reverse=True)
        )

    def __iter__(self) -> Iterator[ModelVersionSnapshot]:
        for snapshot in self._snapshots:
            yield snapshot

    def __len__(self) -> int:
        return len(self._snapshots)

    @property
    def latest(self) -> Optional[ModelVersionSnapshot]:
        return self._snapshots[0] if self._snapshots else None


class VersionLedger:
    """
    In-memory version ledger.

    Example:
        ledger = VersionLedger()
        snapshot = await ledger.record_version("Employee", definition)
        assert snapshot.version == 1
    """

    def __init__(self) -> None:
        self._snapshots: Dict[str, List[ModelVersionSnapshot]] = {}
        self._locks: Dict[str, asyncio.Lock] = {}

    def _lock_for(self, model_name: str) -> asyncio.Lock:
        # setdefault runs without yielding to the event loop
        return self._locks.setdefault(model_name, asyncio.Lock())

    async def record_version(
        self, model_name: str, definition: ModelDefinition
    ) -> ModelVersionSnapshot:
        """
        Append a snapshot of ``definition`` and return it.

        Args:
            model_name: Model the snapshot belongs to
            definition: Definition as saved

        Returns:
            The new snapshot; ``snapshot.version`` is the assigned number
        """
        async with self._lock_for(model_name):
            history = self._snapshots.setdefault(model_name, [])
            snapshot = ModelVersionSnapshot(
                model_name=model_name,
                version=len(history) + 1,
                timestamp=datetime.now(timezone.utc),
                definition=definition,
            )
            history.append(snapshot)

        logger.info(f"Recorded version {snapshot.version} of model '{model_name}'")
        return snapshot

    async def get_version(self, model_name: str, version: int) -> Optional[ModelVersionSnapshot]:
        history = self._snapshots.get(model_name, [])
        if 1 <= version <= len(history):
            return history[version - 1]
        return None

    async def latest_version(self, model_name: str) -> int:
        return len(self._snapshots.get(model_name, []))

    async def list_versions(self, model_name: str) -> VersionHistory:
        return VersionHistory(model_name, list(self._snapshots.get(model_name, [])))
