"""Application runtime entry points and lifecycle helpers."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from config.controller import ConfigController
from config.profile import BudgetConfigurationError, load_profile
from core.logging import enable_file_logging, log_error, logger as LOGGER, set_level
from diagnostics.models import Finding, Severity
from diagnostics.reporter import Reporter
from diagnostics.runner import DiagnosticRunner, build_diagnostics, format_findings
from scene.loader import SceneLoadError, load_scene
from scene.query import SceneQuery


EXIT_OK = 0
EXIT_FINDINGS = 1
EXIT_SETUP_ERROR = 2


@dataclass(frozen=True)
class AppConfig:
    """Configuration for a command-line diagnostics run.

    Attributes:
        scene_path: YAML scene description to inspect.
        profile_name: Budget profile to use instead of ``active_profile``.
        config_dir: Directory holding ``default.yaml`` and ``override.yaml``.
        log_file: Optional file receiving a copy of the log output.
        strict: Treat budget violations as failures for the exit code.
    """

    scene_path: Path
    profile_name: str | None = None
    config_dir: Path | None = None
    log_file: Path | None = None
    strict: bool = False


class DiagnosticsApp:
    """Host-side wrapper owning the runner and the run-on-start flag."""

    def __init__(self, runner: DiagnosticRunner, run_on_start: bool = True) -> None:
        self.runner = runner
        self.run_on_start = run_on_start

    @classmethod
    def from_config(
        cls,
        scene: SceneQuery,
        config: Mapping[str, Any],
        profile_name: str | None = None,
        reporter: Reporter | None = None,
    ) -> "DiagnosticsApp":
        """Build the app from a loaded configuration mapping."""

        profile = load_profile(config, profile_name)
        diagnostics = build_diagnostics(config.get("diagnostics") or [], scene)
        runner = DiagnosticRunner(profile, reporter=reporter, diagnostics=diagnostics)
        return cls(runner, run_on_start=bool(config.get("run_on_start", True)))

    def start(self) -> list[Finding]:
        """Host start hook: run diagnostics only when ``run_on_start`` is set."""

        if not self.run_on_start:
            LOGGER.debug("run_on_start disabled; waiting for an explicit run")
            return []
        return self.run()

    def run(self) -> list[Finding]:
        """Run a full diagnostic pass."""

        LOGGER.info(
            "Running %d diagnostics with profile '%s'",
            len(self.runner),
            self.runner.profile.name,
        )
        return self.runner.run_all()


def default_config_dir() -> Path:
    """Return ``./config`` when it holds a default.yaml, else the installed one."""

    local = Path("config")
    if (local / "default.yaml").exists():
        return local
    return Path(__file__).resolve().parents[1] / "config"


def build_app(config: AppConfig) -> DiagnosticsApp | None:
    """Load configuration and the scene, then build the app.

    Setup failures are logged and reported as ``None`` so entry points can
    exit with ``EXIT_SETUP_ERROR`` instead of a traceback.
    """

    try:
        controller = ConfigController.get_instance(
            config_dir=config.config_dir or default_config_dir()
        )
        settings = controller.get_config()
    except (OSError, ValueError, yaml.YAMLError) as exc:
        log_error(f"Cannot load configuration: {exc}")
        return None

    set_level(settings["logging_level"])
    log_file = config.log_file or settings.get("log_file")
    if log_file:
        enable_file_logging(Path(log_file))

    try:
        scene = load_scene(config.scene_path)
        return DiagnosticsApp.from_config(scene, settings, profile_name=config.profile_name)
    except (BudgetConfigurationError, SceneLoadError, KeyError) as exc:
        log_error(str(exc.args[0]) if exc.args else str(exc))
        return None


def exit_code(findings: list[Finding], strict: bool = False) -> int:
    """Map run findings to a process exit code."""

    if any(finding.severity is Severity.ERROR for finding in findings):
        return EXIT_FINDINGS
    if strict and any(finding.is_violation for finding in findings):
        return EXIT_FINDINGS
    return EXIT_OK


def run(config: AppConfig) -> int:
    """Run diagnostics for a scene file and return a process exit code.

    Args:
        config: Command-line run configuration.

    Returns:
        ``EXIT_OK`` on success, ``EXIT_FINDINGS`` when a diagnostic failed (or
        any budget was exceeded in strict mode), ``EXIT_SETUP_ERROR`` when the
        configuration or scene could not be loaded.
    """

    app = build_app(config)
    if app is None:
        return EXIT_SETUP_ERROR

    findings = app.run()
    print(format_findings(findings))
    return exit_code(findings, strict=config.strict)
