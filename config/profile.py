"""Budget profiles for scene resource diagnostics."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


DEFAULT_PROFILE_NAME = "default"

BUDGET_KEYS = (
    "max_polygon_count",
    "max_texture_size",
    "max_material_count",
)


class BudgetConfigurationError(ValueError):
    """Raised when a budget profile cannot be built from configuration."""


@dataclass(frozen=True)
class BudgetProfile:
    """Numeric thresholds shared by every diagnostic in a run.

    Attributes:
        max_polygon_count: Maximum scene-wide triangle count.
        max_texture_size: Maximum texture edge length in pixels, per axis.
        max_material_count: Maximum number of distinct materials.
        name: Profile name, used in log output only.
    """

    max_polygon_count: int = 50000
    max_texture_size: int = 2048
    max_material_count: int = 10
    name: str = DEFAULT_PROFILE_NAME

    def __post_init__(self) -> None:
        for key in BUDGET_KEYS:
            value = getattr(self, key)
            if isinstance(value, bool) or not isinstance(value, int):
                raise BudgetConfigurationError(
                    f"Profile '{self.name}': {key} must be an integer, got {value!r}"
                )
            if value <= 0:
                raise BudgetConfigurationError(
                    f"Profile '{self.name}': {key} must be positive, got {value}"
                )

    @classmethod
    def from_mapping(
        cls, data: Mapping[str, Any], name: str = DEFAULT_PROFILE_NAME
    ) -> "BudgetProfile":
        """Build a profile from a configuration mapping.

        Args:
            data: Mapping holding every key in ``BUDGET_KEYS``.
            name: Profile name.

        Returns:
            Validated budget profile.
        """

        if not isinstance(data, Mapping):
            raise BudgetConfigurationError(
                f"Profile '{name}' must be a mapping, got {type(data).__name__}"
            )
        missing = [key for key in BUDGET_KEYS if data.get(key) is None]
        if missing:
            raise BudgetConfigurationError(
                f"Profile '{name}' is missing budget values: {', '.join(missing)}"
            )
        return cls(
            max_polygon_count=data["max_polygon_count"],
            max_texture_size=data["max_texture_size"],
            max_material_count=data["max_material_count"],
            name=name,
        )

    def as_dict(self) -> dict[str, int]:
        return {key: getattr(self, key) for key in BUDGET_KEYS}


def load_profile(config: Mapping[str, Any], name: str | None = None) -> BudgetProfile:
    """Resolve a named budget profile from the loaded configuration.

    Args:
        config: Configuration returned by ``ConfigController.get_config``.
        name: Profile to resolve. Defaults to ``active_profile``.

    Returns:
        Validated budget profile.
    """

    profile_name = name or config.get("active_profile") or DEFAULT_PROFILE_NAME
    profiles = config.get("profiles") or {}
    if profile_name not in profiles:
        known = ", ".join(sorted(profiles)) or "none"
        raise BudgetConfigurationError(
            f"Unknown budget profile '{profile_name}' (known: {known})"
        )
    return BudgetProfile.from_mapping(profiles[profile_name], name=profile_name)
