"""Distinct material count diagnostic."""

from __future__ import annotations

from config.profile import BudgetProfile
from diagnostics.base import Diagnostic
from diagnostics.models import Finding


class MaterialCountDiagnostic(Diagnostic):
    """Count distinct material resources, not per-renderer material slots."""

    name = "material_count"

    def run(self, profile: BudgetProfile) -> list[Finding]:
        distinct = {
            id(material)
            for material in self.scene.iter_materials()
            if material is not None
        }
        return [
            self.compare(
                "material_count",
                len(distinct),
                profile.max_material_count,
                "Material count",
            )
        ]
