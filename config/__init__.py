"""Configuration package utilities."""

__all__ = [
    "BudgetConfigurationError",
    "BudgetProfile",
    "ConfigController",
    "load_profile",
]


def __getattr__(name: str):
    if name == "ConfigController":
        from config.controller import ConfigController

        return ConfigController
    if name in {"BudgetConfigurationError", "BudgetProfile", "load_profile"}:
        from config import profile

        return getattr(profile, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
