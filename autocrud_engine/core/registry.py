"""
Model registry.

Ties validation, the model store and the version ledger together. Saving
a model validates it, makes it the current definition and appends a
version snapshot. Saves of the same model are serialized so the order of
stored definitions always matches version order. When recording the
version fails, the previous definition is put back before the error
propagates, so the current definition always has a snapshot.

This module is part of AUTOCRUD_ENGINE.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Union

from ..exceptions import ModelValidationError
from ..observability import get_logger, log_operation
from ..stores.base import ModelStore
from ..versioning import (ModelVersionSnapshot, MongoVersionLedger, VersionHistory,
                          VersionLedger)
from .models import ModelDefinition
from .relations import validate_model_definitions
from .validator import validate_model_definition

logger = get_logger(__name__)


@dataclass(frozen=True)
class SaveResult:
    """Outcome of a successful save."""

    definition: ModelDefinition
    snapshot: ModelVersionSnapshot
    created: bool

    @property
    def version(self) -> int:
        return self.snapshot.version


class ModelRegistry:
    """
    Validated, versioned model definitions.

    Example:
        registry = ModelRegistry(InMemoryModelStore(), VersionLedger())
        result = await registry.save(EMPLOYEE_MODEL)
        assert result.version == 1
    """

    def __init__(
        self,
        model_store: ModelStore,
        ledger: Optional[Union[VersionLedger, MongoVersionLedger]] = None,
    ):
        self.model_store = model_store
        self.ledger = ledger if ledger is not None else VersionLedger()
        self._locks: Dict[str, asyncio.Lock] = {}

    def _lock_for(self, name: str) -> asyncio.Lock:
        return self._locks.setdefault(name, asyncio.Lock())

    async def get(self, name: str) -> Optional[ModelDefinition]:
        return await self.model_store.get(name)

    async def list_names(self) -> List[str]:
        return await self.model_store.list_names()

    async def save(self, candidate: Any) -> SaveResult:
        """
        Validate and save a model definition.

        Args:
            candidate: Submitted definition (mapping or ``ModelDefinition``)

        Returns:
            SaveResult with the normalized definition and its new snapshot

        Raises:
            ModelValidationError: If the definition is invalid
        """
        definition = validate_model_definition(candidate).raise_for_errors()
        return await self._store(definition)

    async def _store(self, definition: ModelDefinition) -> SaveResult:
        start = time.time()
        name = definition.name
        async with self._lock_for(name):
            previous = await self.model_store.get(name)
            created = previous is None
            await self.model_store.put(name, definition)
            try:
                snapshot = await self.ledger.record_version(name, definition)
            except Exception:
                logger.error(
                    f"Recording a version of '{name}' failed; restoring the previous definition",
                    exc_info=True,
                )
                if created:
                    await self.model_store.delete(name)
                else:
                    await self.model_store.put(name, previous)
                raise

        log_operation(
            logger,
            "model_save",
            duration_ms=(time.time() - start) * 1000,
            model_name=name,
            version=snapshot.version,
            new_model=created,
        )
        return SaveResult(definition=definition, snapshot=snapshot, created=created)

    async def reconcile(self, candidates: Sequence[Any]) -> List[SaveResult]:
        """
        Validate a batch of definitions and save them together.

        Nothing is saved unless every definition is valid and every
        relation targets a model in the batch.

        Raises:
            ModelValidationError: With every issue found across the batch
        """
        result = validate_model_definitions(candidates)
        if not result.success:
            log_operation(
                logger,
                "model_reconcile",
                level=logging.WARNING,
                success=False,
                issue_count=len(result.errors),
            )
            raise ModelValidationError(
                f"Batch of {len(candidates)} model definition(s) is invalid",
                error_paths=result.error_paths,
                issues=result.errors,
            )

        saved = [await self._store(definition) for definition in result.data]
        log_operation(logger, "model_reconcile", model_count=len(saved))
        return saved

    async def get_version(self, name: str, version: int) -> Optional[ModelVersionSnapshot]:
        return await self.ledger.get_version(name, version)

    async def list_versions(self, name: str) -> VersionHistory:
        return await self.ledger.list_versions(name)
