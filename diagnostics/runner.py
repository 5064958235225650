"""Diagnostics registry and runner."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
import threading

from config.profile import BudgetProfile
from core.logging import logger as LOGGER
from diagnostics.base import Diagnostic
from diagnostics.material_count import MaterialCountDiagnostic
from diagnostics.models import DiagnosticOutcome, Finding, Severity
from diagnostics.polygon_count import PolygonCountDiagnostic
from diagnostics.reporter import LoggingReporter, Reporter
from diagnostics.texture_size import TextureSizeDiagnostic
from scene.query import SceneQuery


DIAGNOSTIC_TYPES: dict[str, type[Diagnostic]] = {
    PolygonCountDiagnostic.name: PolygonCountDiagnostic,
    TextureSizeDiagnostic.name: TextureSizeDiagnostic,
    MaterialCountDiagnostic.name: MaterialCountDiagnostic,
}


def build_diagnostics(names: Iterable[str], scene: SceneQuery) -> list[Diagnostic]:
    """Instantiate diagnostics by name, in the given order."""

    diagnostics: list[Diagnostic] = []
    for name in names:
        try:
            diagnostic_type = DIAGNOSTIC_TYPES[name]
        except KeyError:
            known = ", ".join(sorted(DIAGNOSTIC_TYPES))
            raise KeyError(f"Unknown diagnostic '{name}' (known: {known})") from None
        diagnostics.append(diagnostic_type(scene))
    return diagnostics


def format_findings(findings: Iterable[Finding]) -> str:
    """Return a human-friendly diagnostics report."""

    lines = ["Scene budget report", "-" * 60]
    for finding in findings:
        lines.append(f"[{finding.severity.value}] {finding.diagnostic}: {finding.message}")
    lines.append("-" * 60)
    return "\n".join(lines)


def summarize(findings: Iterable[Finding]) -> dict[Severity, int]:
    """Count findings per severity."""

    counts = Counter(finding.severity for finding in findings)
    return {severity: counts.get(severity, 0) for severity in Severity}


def _collect_findings(result: Finding | Iterable[Finding] | None) -> tuple[Finding, ...]:
    """Materialize a diagnostic result, accepting one finding or none."""

    if result is None:
        return ()
    if isinstance(result, Finding):
        return (result,)
    findings = tuple(result)
    for finding in findings:
        if not isinstance(finding, Finding):
            raise TypeError(f"Expected Finding, got {type(finding).__name__}")
    return findings


class DiagnosticRunner:
    """Ordered set of diagnostics run against one budget profile.

    Diagnostics run in registration order. A diagnostic that raises is
    reported as an Error finding and the run moves on to the next one.
    """

    def __init__(
        self,
        profile: BudgetProfile,
        reporter: Reporter | None = None,
        diagnostics: Sequence[Diagnostic] = (),
    ) -> None:
        self._profile = profile
        self._reporter: Reporter = reporter if reporter is not None else LoggingReporter()
        self._diagnostics: list[Diagnostic] = []
        self._run_lock = threading.Lock()
        self._cancel_requested = threading.Event()
        for diagnostic in diagnostics:
            self.add(diagnostic)

    @property
    def profile(self) -> BudgetProfile:
        return self._profile

    @property
    def reporter(self) -> Reporter:
        return self._reporter

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        return tuple(self._diagnostics)

    @property
    def is_running(self) -> bool:
        return self._run_lock.locked()

    def __len__(self) -> int:
        return len(self._diagnostics)

    def add(self, diagnostic: Diagnostic) -> bool:
        """Register ``diagnostic`` unless that same instance is already registered."""

        if any(existing is diagnostic for existing in self._diagnostics):
            return False
        self._diagnostics.append(diagnostic)
        return True

    def remove(self, diagnostic: Diagnostic) -> bool:
        """Unregister ``diagnostic`` if present."""

        for index, existing in enumerate(self._diagnostics):
            if existing is diagnostic:
                del self._diagnostics[index]
                return True
        return False

    def set_profile(self, profile: BudgetProfile) -> None:
        """Use ``profile`` for subsequent runs."""

        self._profile = profile

    def cancel(self) -> None:
        """Stop the in-flight run before its next diagnostic starts."""

        self._cancel_requested.set()

    def execute(self, diagnostic: Diagnostic, profile: BudgetProfile) -> DiagnosticOutcome:
        """Run one diagnostic, capturing any failure in the outcome."""

        name = getattr(diagnostic, "name", type(diagnostic).__name__)
        try:
            findings = _collect_findings(diagnostic.run(profile))
        except Exception as exc:  # noqa: BLE001 - diagnostics must keep running
            LOGGER.exception("Diagnostic failed: %s", name)
            return DiagnosticOutcome(diagnostic=name, error=str(exc) or type(exc).__name__)
        return DiagnosticOutcome(diagnostic=name, findings=findings)

    def run_all(self) -> list[Finding]:
        """Run every registered diagnostic once and report the findings."""

        if not self._run_lock.acquire(blocking=False):
            LOGGER.warning("Diagnostic run already in progress; ignoring request")
            return []

        try:
            self._cancel_requested.clear()
            profile = self._profile
            diagnostics = list(self._diagnostics)
            LOGGER.debug(
                "Running %d diagnostics with profile %s", len(diagnostics), profile.name
            )

            results: list[Finding] = []
            for index, diagnostic in enumerate(diagnostics):
                if self._cancel_requested.is_set():
                    LOGGER.warning(
                        "Diagnostic run cancelled; skipped %d diagnostics",
                        len(diagnostics) - index,
                    )
                    break
                outcome = self.execute(diagnostic, profile)
                for finding in outcome.to_findings():
                    self._reporter.emit(finding)
                    results.append(finding)
            return results
        finally:
            self._cancel_requested.clear()
            self._run_lock.release()
