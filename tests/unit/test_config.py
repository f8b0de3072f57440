"""
Unit tests for engine configuration.
"""

import pytest

from autocrud_engine.config import EngineConfig
from autocrud_engine.constants import (DEFAULT_MODELS_COLLECTION,
                                       DEFAULT_VERSIONS_COLLECTION)
from autocrud_engine.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in (
        "MONGO_URI",
        "DB_NAME",
        "AUTOCRUD_MODELS_COLLECTION",
        "AUTOCRUD_RECORDS_COLLECTION",
        "AUTOCRUD_VERSIONS_COLLECTION",
        "AUTOCRUD_LOOKUP_TIMEOUT",
    ):
        monkeypatch.delenv(key, raising=False)


class TestEngineConfig:
    """Test environment loading and validation."""

    def test_defaults(self):
        config = EngineConfig()

        assert config.models_collection == DEFAULT_MODELS_COLLECTION
        assert config.versions_collection == DEFAULT_VERSIONS_COLLECTION
        assert config.lookup_timeout is None

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("MONGO_URI", "mongodb://db:27017")
        monkeypatch.setenv("DB_NAME", "crud")
        monkeypatch.setenv("AUTOCRUD_MODELS_COLLECTION", "schemas")
        monkeypatch.setenv("AUTOCRUD_LOOKUP_TIMEOUT", "2.5")

        config = EngineConfig()
        config.validate()

        assert config.mongo_uri == "mongodb://db:27017"
        assert config.db_name == "crud"
        assert config.models_collection == "schemas"
        assert config.lookup_timeout == 2.5

    def test_arguments_override_environment(self, monkeypatch):
        monkeypatch.setenv("DB_NAME", "from_env")
        assert EngineConfig(db_name="explicit").db_name == "explicit"

    def test_bad_timeout_in_environment(self, monkeypatch):
        monkeypatch.setenv("AUTOCRUD_LOOKUP_TIMEOUT", "soon")

        with pytest.raises(ConfigurationError) as exc_info:
            EngineConfig()

        assert exc_info.value.config_key == "AUTOCRUD_LOOKUP_TIMEOUT"

    def test_missing_uri(self):
        with pytest.raises(ConfigurationError) as exc_info:
            EngineConfig(db_name="crud").validate()
        assert exc_info.value.config_key == "MONGO_URI"

    def test_missing_db_name(self):
        with pytest.raises(ConfigurationError):
            EngineConfig(mongo_uri="mongodb://localhost").validate()

    def test_collections_must_differ(self):
        config = EngineConfig(
            mongo_uri="mongodb://localhost",
            db_name="crud",
            models_collection="shared",
            versions_collection="shared",
        )

        with pytest.raises(ConfigurationError, match="distinct"):
            config.validate()

    def test_non_positive_timeout(self):
        config = EngineConfig(mongo_uri="mongodb://localhost", db_name="crud", lookup_timeout=0)

        with pytest.raises(ConfigurationError, match="lookup_timeout"):
            config.validate()
