"""
Unit tests for the MongoDB-backed engine wiring.

Uses a mock Motor client whose database is the shared mock database.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from autocrud_engine.auth.decisions import DenyReason, Identity
from autocrud_engine.config import EngineConfig
from autocrud_engine.engine import AutoCrudEngine
from autocrud_engine.exceptions import CollaboratorError, ConfigurationError


@pytest.fixture
def config():
    return EngineConfig(
        mongo_uri="mongodb://localhost:27017",
        db_name="crud",
        models_collection="schemas",
        records_collection="rows",
        versions_collection="schema_versions",
        lookup_timeout=2.0,
    )


@pytest.fixture
def mock_client(mock_mongo_database):
    client = MagicMock()
    client.admin.command = AsyncMock(return_value={"ok": 1})
    client.__getitem__.return_value = mock_mongo_database
    return client


class TestInitialize:
    """Test building components from configuration."""

    @pytest.mark.asyncio
    async def test_components_use_configured_collections(
        self, config, mock_client, mock_mongo_database
    ):
        engine = AutoCrudEngine(config, mongo_client=mock_client)

        await engine.initialize()

        mock_client.__getitem__.assert_called_with("crud")
        opened = {call.args[0] for call in mock_mongo_database.__getitem__.call_args_list}
        assert opened == {"schemas", "rows", "schema_versions"}
        mock_mongo_database["schema_versions"].create_index.assert_awaited_once()
        assert engine.pipeline._lookup_timeout == 2.0

    @pytest.mark.asyncio
    async def test_pipeline_reads_models_collection(
        self, config, mock_client, mock_mongo_database, employee_model
    ):
        mock_mongo_database["schemas"].find_one = AsyncMock(
            return_value={"_id": "Employee", "definition": employee_model.to_dict()}
        )
        engine = AutoCrudEngine(config, mongo_client=mock_client)
        await engine.initialize()

        viewer = Identity(user_id=3, role="Viewer")
        allowed = await engine.pipeline.check(viewer, "Employee", "read")
        denied = await engine.pipeline.check(viewer, "Employee", "delete", record_id=1)

        assert allowed.allow is True
        assert denied.reason == DenyReason.INSUFFICIENT_PERMISSION

    @pytest.mark.asyncio
    async def test_invalid_config_rejected_before_connecting(self, mock_client, monkeypatch):
        monkeypatch.delenv("MONGO_URI", raising=False)
        config = EngineConfig(mongo_uri="", db_name="crud")
        engine = AutoCrudEngine(config, mongo_client=mock_client)

        with pytest.raises(ConfigurationError):
            await engine.initialize()

        mock_client.admin.command.assert_not_called()

    @pytest.mark.asyncio
    async def test_unreachable_server(self, config, mock_client):
        mock_client.admin.command = AsyncMock(side_effect=ServerSelectionTimeoutError("no servers"))
        engine = AutoCrudEngine(config, mongo_client=mock_client)

        with pytest.raises(CollaboratorError, match="Failed to connect"):
            await engine.initialize()


class TestLifecycle:
    """Test access before initialization and shutdown."""

    def test_components_require_initialize(self, config):
        engine = AutoCrudEngine(config, mongo_client=MagicMock())

        with pytest.raises(ConfigurationError, match="not initialized"):
            engine.registry

    @pytest.mark.asyncio
    async def test_shutdown_keeps_injected_client_open(self, config, mock_client):
        engine = AutoCrudEngine(config, mongo_client=mock_client)
        await engine.initialize()

        await engine.shutdown()

        mock_client.close.assert_not_called()
        with pytest.raises(ConfigurationError):
            engine.pipeline
