"""Scene-wide polygon count diagnostic."""

from __future__ import annotations

from config.profile import BudgetProfile
from core.logging import logger as LOGGER
from diagnostics.base import Diagnostic
from diagnostics.models import Finding


class PolygonCountDiagnostic(Diagnostic):
    """Sum triangles over every renderable in the scene.

    Disabled and hidden renderables are counted too, so the total is the
    worst case for the scene rather than what is currently on screen.
    """

    name = "polygon_count"

    def run(self, profile: BudgetProfile) -> list[Finding]:
        total = self.total_polygon_count()
        return [
            self.compare(
                "polygon_count",
                total,
                profile.max_polygon_count,
                "Polygon count",
            )
        ]

    def total_polygon_count(self) -> int:
        total = 0
        for renderable in self.scene.iter_renderables():
            if renderable is None:
                LOGGER.debug("Skipping missing renderable reference")
                continue
            for mesh in renderable.meshes:
                if mesh is None:
                    LOGGER.debug("Skipping missing mesh on renderable %s", renderable.name)
                    continue
                if mesh.triangle_index_count < 0:
                    LOGGER.debug(
                        "Skipping mesh %s with negative index count %d",
                        mesh.name,
                        mesh.triangle_index_count,
                    )
                    continue
                # Index counts that are not a multiple of 3 truncate.
                total += mesh.triangle_index_count // 3
        return total
