"""
Tests for check command.

Tests evaluating authorization decisions from the CLI.
"""

import json

import pytest
from click.testing import CliRunner

from autocrud_engine.cli.main import cli
from autocrud_engine.core.examples import EMPLOYEE_MODEL, PRODUCT_MODEL


@pytest.fixture
def employee_file(tmp_path):
    path = tmp_path / "employee.json"
    path.write_text(json.dumps(EMPLOYEE_MODEL), encoding="utf-8")
    return path


def _decision(output):
    return json.loads(output[output.index("{"):])


class TestCheckCommand:
    """Test the check command."""

    def test_viewer_delete_denied(self, employee_file):
        result = CliRunner().invoke(
            cli, ["check", str(employee_file), "--role", "Viewer", "--action", "delete"]
        )

        assert result.exit_code == 1
        assert "DENY" in result.output
        decision = _decision(result.output)
        assert decision["reason"] == "insufficient_permission"
        assert decision["required"] == "delete"

    def test_manager_updating_other_users_record(self, employee_file):
        result = CliRunner().invoke(
            cli,
            ["check", str(employee_file), "-r", "Manager", "-a", "update", "-u", "7",
             "--owner", "9"],
        )

        assert result.exit_code == 1
        assert _decision(result.output)["reason"] == "not_owner"

    def test_manager_updating_own_record(self, employee_file):
        result = CliRunner().invoke(
            cli,
            ["check", str(employee_file), "-r", "Manager", "-a", "update", "-u", "7",
             "--owner", "7"],
        )

        assert result.exit_code == 0
        assert "ALLOW" in result.output

    def test_create_reports_forced_owner(self, employee_file):
        result = CliRunner().invoke(
            cli, ["check", str(employee_file), "--role", "Manager", "--action", "create"]
        )

        assert result.exit_code == 0
        assert _decision(result.output)["forcedOwnerAssignment"] == "ownerId"

    def test_admin_on_unowned_model(self, tmp_path):
        path = tmp_path / "product.json"
        path.write_text(json.dumps(PRODUCT_MODEL), encoding="utf-8")

        result = CliRunner().invoke(
            cli, ["check", str(path), "--role", "Admin", "--action", "delete", "--owner", "3"]
        )

        assert result.exit_code == 0

    def test_unknown_action_rejected_by_click(self, employee_file):
        result = CliRunner().invoke(
            cli, ["check", str(employee_file), "--role", "Viewer", "--action", "archive"]
        )
        assert result.exit_code == 2

    def test_invalid_model_file(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"name": "bad", "fields": []}), encoding="utf-8")

        result = CliRunner().invoke(cli, ["check", str(path), "--role", "Viewer", "-a", "read"])

        assert result.exit_code == 1
        assert "Model definition is invalid" in result.output
