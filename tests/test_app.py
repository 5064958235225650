"""Tests for the application lifecycle and command-line entry points."""

from __future__ import annotations

from pathlib import Path

import pytest

from config.controller import ConfigController
from config.profile import BudgetProfile
from core.app import EXIT_FINDINGS, EXIT_OK, EXIT_SETUP_ERROR, DiagnosticsApp
from core.logging import disable_file_logging
from diagnostics import run as diagnostics_run
from diagnostics.base import Diagnostic
from diagnostics.models import Finding, Severity
from diagnostics.reporter import CollectingReporter
from diagnostics.runner import DIAGNOSTIC_TYPES, DiagnosticRunner
import main as host_main
from scene.query import MaterialResource, SceneSnapshot


SCENE_YAML = """
meshes:
  - {name: Rock, triangle_index_count: 300}
textures:
  - {name: Rock_albedo, width: 4096, height: 1024}
materials:
  - {name: Stone}
renderables:
  - {name: Rock_01, meshes: [Rock], materials: [Stone], textures: [Rock_albedo]}
"""


class _ExplodingDiagnostic(Diagnostic):
    name = "exploding"

    def run(self, profile: BudgetProfile) -> list[Finding]:
        raise RuntimeError("scene query failed")


@pytest.fixture(autouse=True)
def _reset_singleton():
    ConfigController.reset_instance()
    yield
    ConfigController.reset_instance()
    disable_file_logging()


def _write_config(config_dir: Path, extra: list[str] | None = None) -> None:
    config_dir.mkdir(parents=True, exist_ok=True)
    lines = [
        "profiles:",
        "  default:",
        "    max_polygon_count: 50000",
        "    max_texture_size: 2048",
        "    max_material_count: 10",
    ]
    (config_dir / "default.yaml").write_text(
        "\n".join(lines + (extra or [])), encoding="utf-8"
    )


def _write_scene(tmp_path: Path) -> Path:
    scene_path = tmp_path / "level.yaml"
    scene_path.write_text(SCENE_YAML, encoding="utf-8")
    return scene_path


def test_start_respects_run_on_start() -> None:
    """start() should run only when the flag is set."""

    reporter = CollectingReporter()
    scene = SceneSnapshot(materials=[MaterialResource("Stone")])
    config = {
        "run_on_start": False,
        "diagnostics": ["material_count"],
        "profiles": {
            "default": {
                "max_polygon_count": 1,
                "max_texture_size": 1,
                "max_material_count": 1,
            }
        },
    }

    app = DiagnosticsApp.from_config(scene, config, reporter=reporter)
    assert app.start() == []
    assert reporter.findings == []

    findings = app.run()
    assert [finding.severity for finding in findings] == [Severity.INFO]
    assert reporter.findings == findings

    app.run_on_start = True
    assert app.start() == findings


def test_app_wraps_runner() -> None:
    """The app should expose the runner it was built with."""

    runner = DiagnosticRunner(BudgetProfile(), reporter=CollectingReporter())
    app = DiagnosticsApp(runner)
    assert app.runner is runner
    assert app.run_on_start is True
    assert app.start() == []


def test_cli_reports_and_exits_ok(tmp_path: Path, capsys) -> None:
    """A budget violation alone should not fail the run."""

    config_dir = tmp_path / "config"
    _write_config(config_dir)
    scene_path = _write_scene(tmp_path)

    code = diagnostics_run.main(["--scene", str(scene_path), "--config-dir", str(config_dir)])

    assert code == EXIT_OK
    out = capsys.readouterr().out
    assert "[WARNING] texture_size: Texture size exceeds the limit: Rock_albedo" in out
    assert "[INFO] polygon_count: Polygon count: 100 (limit 50000)" in out


def test_cli_strict_fails_on_violation(tmp_path: Path) -> None:
    """--strict should turn budget violations into a failing exit code."""

    config_dir = tmp_path / "config"
    _write_config(config_dir)
    scene_path = _write_scene(tmp_path)

    code = diagnostics_run.main(
        ["--scene", str(scene_path), "--config-dir", str(config_dir), "--strict"]
    )
    assert code == EXIT_FINDINGS


def test_cli_fails_when_a_diagnostic_errors(tmp_path: Path, monkeypatch, capsys) -> None:
    """An Error finding should fail the run while other diagnostics still report."""

    monkeypatch.setitem(DIAGNOSTIC_TYPES, "exploding", _ExplodingDiagnostic)
    config_dir = tmp_path / "config"
    _write_config(
        config_dir,
        ["diagnostics: [exploding, material_count]"],
    )
    scene_path = _write_scene(tmp_path)

    code = diagnostics_run.main(["--scene", str(scene_path), "--config-dir", str(config_dir)])

    assert code == EXIT_FINDINGS
    out = capsys.readouterr().out
    assert "[ERROR] exploding: Diagnostic 'exploding' failed: scene query failed" in out
    assert "[INFO] material_count: Material count: 1 (limit 10)" in out


def test_cli_unknown_profile_is_setup_error(tmp_path: Path) -> None:
    """An unknown profile should stop before any diagnostic runs."""

    config_dir = tmp_path / "config"
    _write_config(config_dir)
    scene_path = _write_scene(tmp_path)

    code = diagnostics_run.main(
        ["--scene", str(scene_path), "--config-dir", str(config_dir), "--profile", "console"]
    )
    assert code == EXIT_SETUP_ERROR


def test_cli_missing_scene_is_setup_error(tmp_path: Path) -> None:
    """A missing scene file should be a setup error."""

    config_dir = tmp_path / "config"
    _write_config(config_dir)

    code = diagnostics_run.main(
        ["--scene", str(tmp_path / "missing.yaml"), "--config-dir", str(config_dir)]
    )
    assert code == EXIT_SETUP_ERROR


def test_cli_missing_config_is_setup_error(tmp_path: Path) -> None:
    """A config directory without default.yaml should be a setup error."""

    scene_path = _write_scene(tmp_path)

    code = diagnostics_run.main(
        ["--scene", str(scene_path), "--config-dir", str(tmp_path / "nowhere")]
    )
    assert code == EXIT_SETUP_ERROR


def test_cli_log_file(tmp_path: Path) -> None:
    """--log-file should capture the findings."""

    config_dir = tmp_path / "config"
    _write_config(config_dir)
    scene_path = _write_scene(tmp_path)
    log_path = tmp_path / "run.log"

    diagnostics_run.main(
        [
            "--scene",
            str(scene_path),
            "--config-dir",
            str(config_dir),
            "--log-file",
            str(log_path),
        ]
    )
    disable_file_logging()

    assert "Rock_albedo" in log_path.read_text(encoding="utf-8")


def test_host_main_runs_on_start(tmp_path: Path, monkeypatch, capsys) -> None:
    """The host entry point should run diagnostics at start-up by default."""

    _write_config(tmp_path / "config")
    scene_path = _write_scene(tmp_path)
    monkeypatch.chdir(tmp_path)

    assert host_main.main([str(scene_path)]) == 0
    assert "Scene budget report" in capsys.readouterr().out


def test_host_main_without_run_on_start(tmp_path: Path, monkeypatch, capsys) -> None:
    """--no-run-on-start should skip the start-up pass."""

    _write_config(tmp_path / "config")
    scene_path = _write_scene(tmp_path)
    monkeypatch.chdir(tmp_path)

    assert host_main.main([str(scene_path), "--no-run-on-start"]) == 0
    assert "Scene budget report" not in capsys.readouterr().out


def test_host_main_missing_scene_is_setup_error(tmp_path: Path, monkeypatch) -> None:
    """A missing scene file should exit with a setup error, not a traceback."""

    _write_config(tmp_path / "config")
    monkeypatch.chdir(tmp_path)

    assert host_main.main([str(tmp_path / "missing.yaml")]) == EXIT_SETUP_ERROR


def test_host_main_unknown_profile_is_setup_error(tmp_path: Path, monkeypatch) -> None:
    """An unknown profile should exit with a setup error."""

    _write_config(tmp_path / "config")
    scene_path = _write_scene(tmp_path)
    monkeypatch.chdir(tmp_path)

    assert host_main.main([str(scene_path), "--profile", "console"]) == EXIT_SETUP_ERROR


def test_host_main_fails_when_a_diagnostic_errors(tmp_path: Path, monkeypatch, capsys) -> None:
    """An Error finding at start-up should give a failing exit code."""

    monkeypatch.setitem(DIAGNOSTIC_TYPES, "exploding", _ExplodingDiagnostic)
    config_dir = tmp_path / "settings"
    _write_config(config_dir, ["diagnostics: [exploding, material_count]"])
    scene_path = _write_scene(tmp_path)

    code = host_main.main([str(scene_path), "--config-dir", str(config_dir)])

    assert code == EXIT_FINDINGS
    out = capsys.readouterr().out
    assert "[ERROR] exploding" in out
    assert "[INFO] material_count" in out


def test_host_main_uses_installed_config_outside_repo(tmp_path: Path, monkeypatch) -> None:
    """Without ./config the shipped default.yaml should be used."""

    scene_path = _write_scene(tmp_path)
    monkeypatch.chdir(tmp_path)

    assert host_main.main([str(scene_path)]) == EXIT_OK


def test_cli_malformed_profiles_is_setup_error(tmp_path: Path) -> None:
    """A config whose profiles is a list should exit with a setup error."""

    config_dir = tmp_path / "config"
    config_dir.mkdir()
    (config_dir / "default.yaml").write_text("profiles:\n  - default\n", encoding="utf-8")
    scene_path = _write_scene(tmp_path)

    code = diagnostics_run.main(["--scene", str(scene_path), "--config-dir", str(config_dir)])
    assert code == EXIT_SETUP_ERROR
