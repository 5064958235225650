"""Per-texture dimension diagnostic."""

from __future__ import annotations

from config.profile import BudgetProfile
from diagnostics.base import Diagnostic
from diagnostics.models import Finding, Severity


class TextureSizeDiagnostic(Diagnostic):
    """Flag every texture whose width or height exceeds the size limit.

    Each axis is checked on its own, so a 4096x16 texture exceeds a 2048
    limit. A closing Info finding is always emitted.
    """

    name = "texture_size"

    def run(self, profile: BudgetProfile) -> list[Finding]:
        limit = profile.max_texture_size
        findings: list[Finding] = []
        seen: set[int] = set()
        checked = 0

        for texture in self.scene.iter_textures():
            if texture is None or id(texture) in seen:
                continue
            seen.add(id(texture))
            checked += 1
            if texture.width > limit or texture.height > limit:
                findings.append(
                    Finding(
                        diagnostic=self.name,
                        severity=Severity.WARNING,
                        message=(
                            f"Texture size exceeds the limit: {texture.name} "
                            f"({texture.width}x{texture.height}, limit {limit})"
                        ),
                        metric="texture_size",
                        observed=max(texture.width, texture.height),
                        limit=limit,
                        subject=texture.name,
                    )
                )

        findings.append(
            Finding(
                diagnostic=self.name,
                severity=Severity.INFO,
                message=(
                    f"Texture size diagnostic completed: {checked} textures checked, "
                    f"{len(findings)} over {limit}px"
                ),
                metric="texture_count",
                observed=checked,
            )
        )
        return findings
