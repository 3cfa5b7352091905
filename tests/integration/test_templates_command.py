"""Integration tests for the templates and hardware CLI commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from caissons.application.templates import TemplateManager
from caissons.cli.main import app

pytestmark = pytest.mark.cli


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI runner for testing."""
    return CliRunner()


class TestTemplatesList:
    """Tests for the templates list command."""

    def test_lists_all_templates(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["templates", "list"])

        assert result.exit_code == 0
        assert "Available templates:" in result.output
        for name, description in TemplateManager().list_templates():
            assert name in result.output
            assert description in result.output


class TestTemplatesInit:
    """Tests for the templates init command."""

    def test_init_to_output_path(self, runner: CliRunner, tmp_path: Path) -> None:
        target = tmp_path / "kitchen.json"
        result = runner.invoke(app, ["templates", "init", "base-600", "-o", str(target)])

        assert result.exit_code == 0, result.output
        assert f"Created: {target}" in result.output
        assert json.loads(target.read_text(encoding="utf-8"))["cabinet"]["name"] == "base-600"

    def test_existing_file_needs_force(self, runner: CliRunner, tmp_path: Path) -> None:
        target = tmp_path / "kitchen.json"
        target.write_text("{}", encoding="utf-8")

        result = runner.invoke(app, ["templates", "init", "wall-800", "-o", str(target)])
        assert result.exit_code == 1
        assert "already exists" in result.output
        assert target.read_text(encoding="utf-8") == "{}"

        result = runner.invoke(app, ["templates", "init", "wall-800", "-o", str(target), "--force"])
        assert result.exit_code == 0
        assert "wall-800" in target.read_text(encoding="utf-8")

    def test_unknown_template(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(
            app, ["templates", "init", "island", "-o", str(tmp_path / "island.json")]
        )

        assert result.exit_code == 1
        assert "Template not found: island" in result.output
        assert "available: base-600" in result.output
        assert not (tmp_path / "island.json").exists()

    def test_initialized_template_builds(self, runner: CliRunner, tmp_path: Path) -> None:
        target = tmp_path / "column.json"
        runner.invoke(app, ["templates", "init", "column-600", "-o", str(target)])
        result = runner.invoke(app, ["build", str(target), "-o", str(tmp_path / "out")])

        assert result.exit_code == 0, result.output
        assert "hinge Y: 100, 574.5, 1049, 1523.5, 1998" in result.output

    def test_init_resized(self, runner: CliRunner, tmp_path: Path) -> None:
        target = tmp_path / "base-800.json"
        result = runner.invoke(
            app,
            ["templates", "init", "base-600", "--name", "base-800", "--width", "800", "-o", str(target)],
        )

        assert result.exit_code == 0, result.output
        cabinet = json.loads(target.read_text(encoding="utf-8"))["cabinet"]
        assert (cabinet["name"], cabinet["width"]) == ("base-800", 800.0)

    def test_init_rejected_by_engine(self, runner: CliRunner, tmp_path: Path) -> None:
        target = tmp_path / "shallow.json"
        result = runner.invoke(
            app, ["templates", "init", "drawer-unit-500", "--depth", "250", "-o", str(target)]
        )

        assert result.exit_code == 1
        assert "cabinet.depth" in result.output
        assert "Nothing written" in result.output
        assert not target.exists()

    def test_init_warnings_shown(self, runner: CliRunner, tmp_path: Path) -> None:
        target = tmp_path / "wall.json"
        result = runner.invoke(app, ["templates", "init", "wall-800", "-o", str(target)])

        assert result.exit_code == 0, result.output
        assert "Warnings:" in result.output
        assert f"Created: {target}" in result.output


class TestHardwareCommand:
    """Tests for the hardware catalog listing."""

    def test_lists_hinges_and_plates(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["hardware"])

        assert result.exit_code == 0
        assert "HINGES" in result.output
        assert "71B3550" in result.output
        assert "MOUNTING PLATES" in result.output
        assert "expando_0mm" in result.output
        assert "DRAWER RUNNERS" in result.output
        assert "tandem" in result.output
