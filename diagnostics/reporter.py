"""Sinks for diagnostic findings."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from core.logging import log_error, log_info, log_warning
from diagnostics.models import Finding, Severity


class Reporter(Protocol):
    """Receives every finding produced by a diagnostic run."""

    def emit(self, finding: Finding) -> None:
        """Handle one finding."""


class LoggingReporter:
    """Write findings to the project logger at their severity."""

    def emit(self, finding: Finding) -> None:
        message = f"[{finding.diagnostic}] {finding.message}"
        if finding.severity is Severity.ERROR:
            log_error(message)
        elif finding.severity is Severity.WARNING:
            log_warning(message)
        else:
            log_info(message)


@dataclass
class CollectingReporter:
    """Keep findings in memory, optionally forwarding them to another reporter."""

    forward_to: Reporter | None = None
    findings: list[Finding] = field(default_factory=list)

    def emit(self, finding: Finding) -> None:
        self.findings.append(finding)
        if self.forward_to is not None:
            self.forward_to.emit(finding)

    def clear(self) -> None:
        self.findings.clear()
