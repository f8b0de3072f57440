"""
Unit tests for contextual logging.
"""

import logging

from autocrud_engine.observability import (get_correlation_id, get_logger,
                                           get_logging_context,
                                           log_operation, reset_authz_context,
                                           reset_correlation_id,
                                           set_authz_context,
                                           set_correlation_id)


class TestLoggingContext:
    """Test context variables feeding log records."""

    def test_correlation_id_generated(self):
        token = set_correlation_id()
        try:
            correlation_id = get_correlation_id()
            assert correlation_id
            assert get_logging_context()["correlation_id"] == correlation_id
        finally:
            reset_correlation_id(token)

        assert get_correlation_id() is None

    def test_incoming_correlation_id_kept(self):
        token = set_correlation_id("req-42")
        try:
            assert get_correlation_id() == "req-42"
        finally:
            reset_correlation_id(token)

    def test_authz_context_drops_none(self):
        token = set_authz_context(model_name="Employee", user_id=7, role=None, action="read")
        try:
            context = get_logging_context()
        finally:
            reset_authz_context(token)

        assert context["model_name"] == "Employee"
        assert context["action"] == "read"
        assert "role" not in context
        assert "model_name" not in get_logging_context()

    def test_nested_reset_restores_outer_context(self):
        outer = set_authz_context(model_name="Employee", role="Manager")
        inner = set_authz_context(model_name="Department", role="Manager")
        assert get_logging_context()["model_name"] == "Department"

        reset_authz_context(inner)
        assert get_logging_context()["model_name"] == "Employee"

        reset_authz_context(outer)
        assert get_logging_context() == {}


class TestContextualLogger:
    """Test that context reaches log records."""

    def test_records_carry_context(self, caplog):
        logger = get_logger("autocrud_engine.tests")
        token = set_authz_context(model_name="Employee", role="Viewer")

        try:
            with caplog.at_level(logging.INFO, logger="autocrud_engine.tests"):
                logger.info("checked")
        finally:
            reset_authz_context(token)

        record = caplog.records[-1]
        assert record.model_name == "Employee"
        assert record.role == "Viewer"

    def test_explicit_extra_wins(self, caplog):
        logger = get_logger("autocrud_engine.tests")
        token = set_authz_context(model_name="Employee")

        try:
            with caplog.at_level(logging.INFO, logger="autocrud_engine.tests"):
                logger.info("checked", extra={"model_name": "Project"})
        finally:
            reset_authz_context(token)

        assert caplog.records[-1].model_name == "Project"

    def test_log_operation(self, caplog):
        logger = get_logger("autocrud_engine.tests")

        with caplog.at_level(logging.INFO, logger="autocrud_engine.tests"):
            log_operation(logger, "model_save", duration_ms=1.234, version=2)

        record = caplog.records[-1]
        assert record.getMessage() == "Operation: model_save (duration: 1.23ms)"
        assert record.operation == "model_save"
        assert record.version == 2
        assert record.duration_ms == 1.23

    def test_failed_operation(self, caplog):
        logger = logging.getLogger("autocrud_engine.tests")

        with caplog.at_level(logging.WARNING, logger="autocrud_engine.tests"):
            log_operation(logger, "model_reconcile", level=logging.WARNING, success=False)

        assert caplog.records[-1].getMessage() == "Operation failed: model_reconcile"
