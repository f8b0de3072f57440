"""
Tests for example command.
"""

import json

from click.testing import CliRunner

from autocrud_engine import __version__
from autocrud_engine.cli.main import cli
from autocrud_engine.core.examples import EMPLOYEE_MODEL


class TestExampleCommand:
    """Test the example command."""

    def test_prints_example(self):
        result = CliRunner().invoke(cli, ["example", "employee"])

        assert result.exit_code == 0
        assert json.loads(result.output) == EMPLOYEE_MODEL

    def test_name_is_case_insensitive(self):
        result = CliRunner().invoke(cli, ["example", "Employee"])
        assert result.exit_code == 0

    def test_writes_file(self, tmp_path):
        output = tmp_path / "employee.json"

        result = CliRunner().invoke(cli, ["example", "employee", "-o", str(output)])

        assert result.exit_code == 0
        assert json.loads(output.read_text(encoding="utf-8")) == EMPLOYEE_MODEL

    def test_unknown_example(self):
        result = CliRunner().invoke(cli, ["example", "invoice"])
        assert result.exit_code == 2


def test_version_option():
    result = CliRunner().invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output
