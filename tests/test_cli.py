"""Tests for the CLI interface."""
import json
import subprocess
import sys
from pathlib import Path

import pytest

CLI = [sys.executable, "-m", "shell_builder"]
ROOT = Path(__file__).parent.parent


def run_cli(*args: str) -> dict:
    """Run CLI command and return parsed JSON output."""
    result = subprocess.run(
        [*CLI, *args],
        capture_output=True, text=True, cwd=str(ROOT),
    )
    assert result.returncode == 0, f"CLI failed: {result.stderr}\n{result.stdout}"
    return json.loads(result.stdout)


def run_cli_expect_fail(*args: str) -> dict:
    """Run CLI command expecting failure, return parsed JSON output."""
    result = subprocess.run(
        [*CLI, *args],
        capture_output=True, text=True, cwd=str(ROOT),
    )
    assert result.returncode != 0
    return json.loads(result.stdout)


class TestPlan:
    def test_default_plan(self):
        data = run_cli("plan")
        assert data["ok"] is True
        plan = data["plan"]
        assert len(plan["footprint"]["points"]) == 5
        assert len(plan["walls"]) == 4
        kinds = [o["kind"] for o in plan["openings"]]
        assert kinds == ["door", "window", "window", "window"]
        assert plan["roof"]["strategy"] == "extrusion"

    def test_footprint_roof(self):
        data = run_cli("plan", "--roof", "footprint", "--slope", "0.3")
        assert data["plan"]["roof"]["strategy"] == "footprint"
        assert data["plan"]["roof"]["slope"] == 0.3

    def test_zero_width_fails(self):
        data = run_cli_expect_fail("plan", "--width", "0")
        assert data["ok"] is False
        assert data["kind"] == "invalid_input"


class TestBuild:
    def test_build_default(self):
        data = run_cli("build")
        assert data["ok"] is True
        assert data["walls"] == 4
        assert data["doors"] == 1
        assert data["windows"] == 3
        assert data["roof"]["strategy"] == "extrusion"

    def test_build_with_outputs(self, tmp_path):
        ifc = tmp_path / "shell.ifc"
        png = tmp_path / "shell.png"
        data = run_cli("build", "--ifc", str(ifc), "--render", str(png))
        assert data["ok"] is True
        assert ifc.exists()
        assert png.exists()

    def test_build_from_config(self, tmp_path):
        config = tmp_path / "shell.json"
        config.write_text(json.dumps({"roof_strategy": "footprint"}))
        data = run_cli("build", "--config", str(config))
        assert data["roof"]["strategy"] == "footprint"

    def test_missing_level(self, tmp_path):
        config = tmp_path / "shell.json"
        config.write_text(json.dumps({"top_level": "Attic"}))
        data = run_cli_expect_fail("build", "--config", str(config))
        assert data["kind"] == "not_found"
        assert "Attic" in data["error"]

    def test_missing_config_file(self, tmp_path):
        data = run_cli_expect_fail("build", "--config", str(tmp_path / "nope.json"))
        assert data["ok"] is False


class TestConfigAndVersion:
    def test_write_default_config(self, tmp_path):
        path = tmp_path / "shell.json"
        data = run_cli("config", str(path))
        assert data["ok"] is True
        written = json.loads(path.read_text())
        assert written["base_level"] == "Level 1"

    def test_version(self):
        data = run_cli("version")
        assert data["version"] == "0.1.0"
