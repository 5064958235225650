"""Base class for scene budget diagnostics."""

from __future__ import annotations

from abc import ABC, abstractmethod

from config.profile import BudgetProfile
from diagnostics.models import Finding, Severity
from scene.query import SceneQuery


class Diagnostic(ABC):
    """One budget check over the scene.

    Subclasses aggregate a metric from the injected scene query on every call
    to :meth:`run` and keep no state between runs.
    """

    name: str = "diagnostic"

    def __init__(self, scene: SceneQuery) -> None:
        self.scene = scene

    @abstractmethod
    def run(self, profile: BudgetProfile) -> list[Finding]:
        """Check the scene against ``profile`` and return the findings."""

    def compare(self, metric: str, observed: int, limit: int, label: str) -> Finding:
        """Build the Warning or Info finding for a scene-wide metric."""

        if observed > limit:
            return Finding(
                diagnostic=self.name,
                severity=Severity.WARNING,
                message=f"{label} exceeds the limit: {observed} > {limit}",
                metric=metric,
                observed=observed,
                limit=limit,
            )
        return Finding(
            diagnostic=self.name,
            severity=Severity.INFO,
            message=f"{label}: {observed} (limit {limit})",
            metric=metric,
            observed=observed,
            limit=limit,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
