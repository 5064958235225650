"""Scene budget diagnostics."""

from diagnostics.base import Diagnostic
from diagnostics.material_count import MaterialCountDiagnostic
from diagnostics.models import DiagnosticOutcome, Finding, Severity
from diagnostics.polygon_count import PolygonCountDiagnostic
from diagnostics.reporter import CollectingReporter, LoggingReporter, Reporter
from diagnostics.runner import (
    DIAGNOSTIC_TYPES,
    DiagnosticRunner,
    build_diagnostics,
    format_findings,
    summarize,
)
from diagnostics.texture_size import TextureSizeDiagnostic

__all__ = [
    "CollectingReporter",
    "DIAGNOSTIC_TYPES",
    "Diagnostic",
    "DiagnosticOutcome",
    "DiagnosticRunner",
    "Finding",
    "LoggingReporter",
    "MaterialCountDiagnostic",
    "PolygonCountDiagnostic",
    "Reporter",
    "Severity",
    "TextureSizeDiagnostic",
    "build_diagnostics",
    "format_findings",
    "summarize",
]
