"""Models for diagnostics findings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Severity(str, Enum):
    """Severity of a diagnostic finding."""

    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


@dataclass(frozen=True)
class Finding:
    """Single structured result emitted by a diagnostic.

    ``observed`` and ``limit`` are set for metric comparisons; ``subject``
    names the offending resource when the finding is about one.
    """

    diagnostic: str
    severity: Severity
    message: str
    metric: str | None = None
    observed: int | None = None
    limit: int | None = None
    subject: str | None = None

    @property
    def is_violation(self) -> bool:
        return self.severity is Severity.WARNING


@dataclass(frozen=True)
class DiagnosticOutcome:
    """Result of executing one diagnostic: its findings or its failure."""

    diagnostic: str
    findings: tuple[Finding, ...] = ()
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_findings(self) -> list[Finding]:
        """Return the findings to report, turning a failure into an Error finding."""

        if self.ok:
            return list(self.findings)
        return [
            Finding(
                diagnostic=self.diagnostic,
                severity=Severity.ERROR,
                message=f"Diagnostic '{self.diagnostic}' failed: {self.error}",
            )
        ]
