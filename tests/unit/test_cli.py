"""Unit tests for the fieldcheck CLI."""

import json
import re
from dataclasses import dataclass
from typing import ClassVar

import pytest
from typer.testing import CliRunner

from fieldcheck import __version__
from fieldcheck.cli import _format_rule_data, app
from fieldcheck.validation import RULE_TYPES, ValidationRule, register_rule_type

runner = CliRunner()


@dataclass(frozen=True)
class MaxLengthRule(ValidationRule[str, str]):
    error_message: str
    priority: int = 0

    value_type: ClassVar[type] = str

    @property
    def name(self) -> str:
        return "max_length"

    def is_valid(self, value: str, rule_data: str) -> bool:
        return len(value) <= int(rule_data)


@pytest.fixture
def restore_rule_types():
    """Undo registry changes made by a test."""
    saved = dict(RULE_TYPES)
    yield
    RULE_TYPES.clear()
    RULE_TYPES.update(saved)


@pytest.fixture
def config_file(tmp_path):
    """Configuration with the bundled example rule set."""
    path = tmp_path / ".fieldcheck.json"
    path.write_text(json.dumps({
        "rules": [
            {"kind": "non_empty", "priority": 2, "errorMessage": "Vazio"},
            {"kind": "pattern_match", "priority": 1, "errorMessage": "Regex inválido", "pattern": "^[A-Za-z]+$"}
        ],
        "output": {"validText": "Validação bem-sucedida!"}
    }), encoding="utf-8")
    return path


class TestCheckCommand:
    """Test check command."""

    def test_valid_value(self, config_file):
        result = runner.invoke(app, ["check", "abc", "--config", str(config_file)])
        assert result.exit_code == 0
        assert "SUCCESS" in result.stdout
        assert "Validação bem-sucedida!" in result.stdout

    def test_invalid_value(self, config_file):
        result = runner.invoke(app, ["check", "", "--config", str(config_file)])
        assert result.exit_code == 1
        assert "FAILURE" in result.stdout
        assert "Regex inválido" in result.stdout
        assert "Vazio" not in result.stdout

    def test_json_format(self, config_file):
        result = runner.invoke(app, ["check", "abc1", "--config", str(config_file), "--format", "json"])
        assert result.exit_code == 1
        assert json.loads(result.stdout) == {
            "status": "failure",
            "exit_code": 1,
            "message": "Regex inválido"
        }

    def test_invalid_format(self, config_file):
        result = runner.invoke(app, ["check", "abc", "--config", str(config_file), "--format", "xml"])
        assert result.exit_code == 1
        assert "Invalid format" in result.stdout

    def test_no_rules_is_valid(self, tmp_path, monkeypatch):
        """Test that an empty rule set without a config file accepts any value."""
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["check", ""])
        assert result.exit_code == 0
        assert "valid" in result.stdout

    def test_missing_config_file(self, tmp_path):
        """Test that a mistyped --config path is an error, not an empty rule set."""
        result = runner.invoke(app, ["check", "", "--config", str(tmp_path / "typo.json")])
        assert result.exit_code == 1
        assert "Config file not found" in result.stdout
        assert "SUCCESS" not in result.stdout

    def test_config_path_is_directory(self, tmp_path):
        """Test that an unreadable config path is reported as an error."""
        config_dir = tmp_path / "conf"
        config_dir.mkdir()

        result = runner.invoke(app, ["check", "abc", "--config", str(config_dir)])
        assert result.exit_code == 1
        assert "Error:" in result.stdout
        assert "Cannot read config file" in result.stdout

    def test_invalid_config(self, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps({
            "rules": [{"kind": "pattern_match", "errorMessage": "bad", "pattern": "[a-z"}]
        }), encoding="utf-8")

        result = runner.invoke(app, ["check", "abc", "--config", str(bad)])
        assert result.exit_code == 1
        assert "Error:" in result.stdout


class TestRulesCommand:
    """Test rules command."""

    def test_lists_rules_in_evaluation_order(self, config_file):
        result = runner.invoke(app, ["rules", "--config", str(config_file)])
        assert result.exit_code == 0
        assert result.stdout.index("pattern_match") < result.stdout.index("non_empty")
        assert "Vazio" in result.stdout

    def test_no_rules(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["rules"])
        assert result.exit_code == 0
        assert "No rules configured" in result.stdout

    def test_custom_kind_rule_data_shown(self, tmp_path, restore_rule_types):
        """Test that rule data of a registered kind appears in the table."""
        register_rule_type("max_length", MaxLengthRule)
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({
            "rules": [{"kind": "max_length", "errorMessage": "Muito longo", "pattern": "12"}]
        }), encoding="utf-8")

        result = runner.invoke(app, ["rules", "--config", str(path)])
        assert result.exit_code == 0
        assert "max_length" in result.stdout
        assert "12" in result.stdout

    def test_format_rule_data(self):
        """Test rendering of compiled patterns, plain values and missing data."""
        assert _format_rule_data(re.compile("^[a-z]+$")) == "^[a-z]+$"
        assert _format_rule_data(7) == "7"
        assert _format_rule_data("abc") == "abc"
        assert _format_rule_data(None) == ""


class TestDemoCommand:
    """Test demo command."""

    def test_demo_reports_each_value_once(self):
        result = runner.invoke(app, ["demo"])
        assert result.exit_code == 0
        assert result.stdout.count("Regex inválido") == 1
        assert result.stdout.count("Validação bem-sucedida!") == 1
        assert result.stdout.index("Regex inválido") < result.stdout.index("Validação bem-sucedida!")


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert f"fieldcheck version {__version__}" in result.stdout
