"""
Pytest configuration and shared fixtures for AUTOCRUD_ENGINE tests.

This module provides:
- Model definition fixtures built from the bundled examples
- In-memory store and pipeline fixtures
- Mock Motor database fixtures
"""

import copy
from typing import Any, Dict
from unittest.mock import AsyncMock, MagicMock

import pytest
from motor.motor_asyncio import AsyncIOMotorCollection

from autocrud_engine.auth.pipeline import AuthorizationPipeline
from autocrud_engine.core.examples import EMPLOYEE_MODEL
from autocrud_engine.core.models import ModelDefinition
from autocrud_engine.core.validator import validate_model_definition
from autocrud_engine.stores.memory import InMemoryModelStore, InMemoryRecordStore

# ============================================================================
# MODEL DEFINITION FIXTURES
# ============================================================================


@pytest.fixture
def employee_payload() -> Dict[str, Any]:
    """A fresh, mutable copy of the Employee example."""
    return copy.deepcopy(EMPLOYEE_MODEL)


@pytest.fixture
def employee_model(employee_payload) -> ModelDefinition:
    """Normalized Employee definition (owner field ``ownerId``)."""
    return validate_model_definition(employee_payload).raise_for_errors()


@pytest.fixture
def unowned_model() -> ModelDefinition:
    """A model without an owner field."""
    return validate_model_definition(
        {
            "name": "Note",
            "fields": [{"name": "body", "type": "string"}],
            "rbac": {"Viewer": ["read"], "Editor": ["all"]},
        }
    ).raise_for_errors()


@pytest.fixture
def unrestricted_model() -> ModelDefinition:
    """A model without any RBAC rules."""
    return validate_model_definition(
        {"name": "Audit", "fields": [{"name": "event", "type": "string"}]}
    ).raise_for_errors()


# ============================================================================
# STORE AND PIPELINE FIXTURES
# ============================================================================


@pytest.fixture
def model_store(employee_model, unowned_model, unrestricted_model) -> InMemoryModelStore:
    return InMemoryModelStore([employee_model, unowned_model, unrestricted_model])


@pytest.fixture
def record_store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def pipeline(model_store, record_store) -> AuthorizationPipeline:
    return AuthorizationPipeline(model_store, record_store)


# ============================================================================
# MOCK MONGODB FIXTURES
# ============================================================================


def make_mock_collection(name: str) -> MagicMock:
    """Create a mock Motor collection with async CRUD methods."""
    collection = MagicMock(spec=AsyncIOMotorCollection)
    collection.name = name
    collection.find_one = AsyncMock(return_value=None)
    collection.insert_one = AsyncMock(return_value=MagicMock(inserted_id="test_id"))
    collection.replace_one = AsyncMock(
        return_value=MagicMock(modified_count=1, upserted_id="test_id")
    )
    collection.delete_one = AsyncMock(return_value=MagicMock(deleted_count=1))
    collection.create_index = AsyncMock(return_value="test_index")

    # find() is synchronous in Motor and returns a cursor
    cursor = MagicMock()
    cursor.sort = MagicMock(return_value=cursor)
    cursor.to_list = AsyncMock(return_value=[])
    collection.find = MagicMock(return_value=cursor)
    collection.cursor = cursor
    return collection


@pytest.fixture
def mock_mongo_database() -> MagicMock:
    """Create a mock MongoDB database returning one mock collection per name."""
    collections: Dict[str, MagicMock] = {}

    def get_collection(name: str) -> MagicMock:
        if name not in collections:
            collections[name] = make_mock_collection(name)
        return collections[name]

    db = MagicMock()
    db.name = "test_db"
    db.__getitem__.side_effect = get_collection
    return db
