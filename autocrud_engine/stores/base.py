"""
Abstract Store Interfaces

Define the storage collaborators the engine consumes. The engine owns the
decisions over models and records; persistence stays behind these
interfaces so any data store (MongoDB, in-memory, files) can back it.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional

from ..core.models import ModelDefinition


class ModelStore(ABC):
    """
    Current definition of each model.

    ``get`` always returns the latest saved definition; history lives in
    the version ledger.
    """

    @abstractmethod
    async def get(self, name: str) -> Optional[ModelDefinition]:
        """
        Get the current definition of a model.

        Args:
            name: Model name

        Returns:
            The definition if the model exists, None otherwise
        """
        pass

    @abstractmethod
    async def put(self, name: str, definition: ModelDefinition) -> None:
        """
        Store ``definition`` as the current definition of ``name``.

        Args:
            name: Model name
            definition: Validated definition
        """
        pass

    @abstractmethod
    async def delete(self, name: str) -> None:
        """Remove the current definition of ``name``, if any."""
        pass

    @abstractmethod
    async def list_names(self) -> List[str]:
        """Return the names of all stored models, sorted."""
        pass


class RecordStore(ABC):
    """Record access needed by the ownership gate."""

    @abstractmethod
    async def get_owner(self, model_name: str, record_id: Any, owner_field: str) -> Any:
        """
        Get the owner value of one record.

        Args:
            model_name: Model the record belongs to
            record_id: Record identifier
            owner_field: Name of the model's owner field

        Returns:
            The stored owner value, or None when the record does not exist
            or has no owner value
        """
        pass
