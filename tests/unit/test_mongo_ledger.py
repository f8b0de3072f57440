"""
Unit tests for the MongoDB-backed version ledger.

Uses mocked Motor collections.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from pymongo.errors import DuplicateKeyError, OperationFailure

from autocrud_engine.constants import DEFAULT_VERSIONS_COLLECTION
from autocrud_engine.exceptions import CollaboratorError
from autocrud_engine.versioning.mongo import MongoVersionLedger


def _doc(version, definition):
    return {
        "model_name": "Employee",
        "version": version,
        "timestamp": datetime(2024, 1, version, tzinfo=timezone.utc),
        "definition": definition.to_dict(),
    }


@pytest.fixture
def versions(mock_mongo_database):
    return mock_mongo_database[DEFAULT_VERSIONS_COLLECTION]


@pytest.fixture
def ledger(mock_mongo_database):
    return MongoVersionLedger(mock_mongo_database)


class TestRecordVersion:
    """Test version assignment against the unique index."""

    @pytest.mark.asyncio
    async def test_first_version(self, ledger, versions, employee_model):
        snapshot = await ledger.record_version("Employee", employee_model)

        assert snapshot.version == 1
        document = versions.insert_one.call_args[0][0]
        assert document["model_name"] == "Employee"
        assert document["version"] == 1
        assert document["definition"]["ownerField"] == "ownerId"

    @pytest.mark.asyncio
    async def test_next_version_follows_latest(self, ledger, versions, employee_model):
        versions.find_one = AsyncMock(return_value={"version": 4})

        snapshot = await ledger.record_version("Employee", employee_model)

        assert snapshot.version == 5

    @pytest.mark.asyncio
    async def test_retries_after_duplicate_key(self, ledger, versions, employee_model):
        versions.find_one = AsyncMock(side_effect=[{"version": 1}, {"version": 2}])
        versions.insert_one = AsyncMock(
            side_effect=[DuplicateKeyError("taken"), MagicMock(inserted_id="x")]
        )

        snapshot = await ledger.record_version("Employee", employee_model)

        assert snapshot.version == 3
        assert versions.insert_one.await_count == 2

    @pytest.mark.asyncio
    async def test_gives_up_after_max_attempts(self, mock_mongo_database, versions, employee_model):
        ledger = MongoVersionLedger(mock_mongo_database, max_attempts=3)
        versions.insert_one = AsyncMock(side_effect=DuplicateKeyError("taken"))

        with pytest.raises(CollaboratorError) as exc_info:
            await ledger.record_version("Employee", employee_model)

        assert exc_info.value.collaborator == "version_ledger"
        assert versions.insert_one.await_count == 3

    @pytest.mark.asyncio
    async def test_index_created_once(self, ledger, versions, employee_model):
        await ledger.record_version("Employee", employee_model)
        await ledger.record_version("Employee", employee_model)

        versions.create_index.assert_awaited_once()
        assert versions.create_index.call_args.kwargs["unique"] is True

    @pytest.mark.asyncio
    async def test_index_failure(self, ledger, versions, employee_model):
        versions.create_index = AsyncMock(side_effect=OperationFailure("not authorized"))

        with pytest.raises(CollaboratorError):
            await ledger.record_version("Employee", employee_model)


class TestReads:
    """Test snapshot lookups."""

    @pytest.mark.asyncio
    async def test_get_version(self, ledger, versions, employee_model):
        versions.find_one = AsyncMock(return_value=_doc(2, employee_model))

        snapshot = await ledger.get_version("Employee", 2)

        assert snapshot.version == 2
        assert snapshot.definition == employee_model
        versions.find_one.assert_awaited_once_with({"model_name": "Employee", "version": 2})

    @pytest.mark.asyncio
    async def test_get_missing_version(self, ledger):
        assert await ledger.get_version("Employee", 9) is None

    @pytest.mark.asyncio
    async def test_latest_version_without_history(self, ledger):
        assert await ledger.latest_version("Employee") == 0

    @pytest.mark.asyncio
    async def test_list_versions(self, ledger, versions, employee_model):
        versions.cursor.to_list = AsyncMock(
            return_value=[_doc(2, employee_model), _doc(1, employee_model)]
        )

        history = await ledger.list_versions("Employee")

        assert [s.version for s in history] == [2, 1]
        versions.find.assert_called_once_with({"model_name": "Employee"})
