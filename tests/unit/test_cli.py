"""Tests for the dicexpr CLI."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from dicexpr._version import get_version
from dicexpr.cli import app
from dicexpr.core.config import DICEXPR_SEED_VAR

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every command in an empty directory without a seed in the environment."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(DICEXPR_SEED_VAR, raising=False)


# ── roll ─────────────────────────────────────────────────────────────


class TestRollCommand:
    def test_literal_arithmetic(self) -> None:
        result = runner.invoke(app, ["roll", "1 + 2 * 3"])
        assert result.exit_code == 0
        assert result.output.strip() == "9"

    def test_variable_option(self) -> None:
        result = runner.invoke(app, ["roll", "strength.mod + 1", "--var", "strength.mod=4"])
        assert result.exit_code == 0
        assert result.output.strip() == "5"

    def test_seeded_rolls_repeat(self) -> None:
        args = ["roll", "1d6", "--seed", "3", "--times", "5"]
        first = runner.invoke(app, args)
        second = runner.invoke(app, args)
        assert first.exit_code == 0
        values = [int(line) for line in first.output.split()]
        assert len(values) == 5
        assert all(1 <= v <= 6 for v in values)
        assert first.output == second.output

    def test_config_file(self, tmp_path: Path) -> None:
        config = tmp_path / "custom.toml"
        config.write_text("[roll]\ntimes = 2\n\n[variables]\nlevel = 4\n", encoding="utf-8")
        result = runner.invoke(app, ["roll", "level * 2", "--config", str(config)])
        assert result.exit_code == 0
        assert result.output.split() == ["8", "8"]

    def test_var_overrides_config(self, tmp_path: Path) -> None:
        (tmp_path / "dicexpr.toml").write_text("[variables]\nlevel = 4\n", encoding="utf-8")
        result = runner.invoke(app, ["roll", "level", "--var", "level=9"])
        assert result.exit_code == 0
        assert result.output.strip() == "9"

    def test_syntax_error(self) -> None:
        result = runner.invoke(app, ["roll", "1 +"])
        assert result.exit_code == 1
        assert "Syntax error" in result.output
        assert "position 3" in result.output

    def test_division_by_zero(self) -> None:
        result = runner.invoke(app, ["roll", "10 / 0"])
        assert result.exit_code == 1
        assert "Division by zero" in result.output

    def test_unknown_identifier(self) -> None:
        result = runner.invoke(app, ["roll", "hp"])
        assert result.exit_code == 1
        assert "Unknown identifier" in result.output

    def test_bad_config(self, tmp_path: Path) -> None:
        (tmp_path / "dicexpr.toml").write_text("[roll]\ntimes = 0\n", encoding="utf-8")
        result = runner.invoke(app, ["roll", "1"])
        assert result.exit_code == 1
        assert "Config error" in result.output

    def test_malformed_var_is_usage_error(self) -> None:
        result = runner.invoke(app, ["roll", "1", "--var", "level"])
        assert result.exit_code == 2

    def test_non_integer_var_is_usage_error(self) -> None:
        result = runner.invoke(app, ["roll", "1", "--var", "level=high"])
        assert result.exit_code == 2


# ── parse ────────────────────────────────────────────────────────────


class TestParseCommand:
    def test_table(self) -> None:
        result = runner.invoke(app, ["parse", "3d6 + strength.mod"])
        assert result.exit_code == 0
        assert "roll" in result.output
        assert "identifier" in result.output
        assert "Identifiers: strength.mod" in result.output
        assert "Deterministic: no" in result.output

    def test_json(self) -> None:
        result = runner.invoke(app, ["parse", "2d6 + 1", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data == {"terms": [{"count": 2, "faces": 6}, {"value": 1}], "operators": ["+"]}

    def test_syntax_error_shows_marker(self) -> None:
        result = runner.invoke(app, ["parse", "1  + 2"])
        assert result.exit_code == 1
        assert "expected operator at position 2" in result.output
        assert "  | 1  + 2" in result.output


class TestRootOptions:
    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert result.output.startswith("dicexpr ")

    def test_version_matches_package(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.output.splitlines()[0] == f"dicexpr {get_version()}"
