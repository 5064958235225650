"""Command-line entry point for running scene budget diagnostics."""

from __future__ import annotations

import argparse
from pathlib import Path

from core.app import AppConfig, run


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""

    parser = argparse.ArgumentParser(description="Check a scene against resource budgets.")
    parser.add_argument(
        "--scene",
        type=Path,
        required=True,
        help="YAML scene description to inspect.",
    )
    parser.add_argument(
        "--profile",
        type=str,
        default=None,
        help="Budget profile name (defaults to active_profile from config).",
    )
    parser.add_argument(
        "--config-dir",
        type=Path,
        default=None,
        help="Directory holding default.yaml and override.yaml.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log output to this file.",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit non-zero when any budget is exceeded.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run diagnostics and return an exit code."""

    args = parse_args(argv)
    return run(
        AppConfig(
            scene_path=args.scene,
            profile_name=args.profile,
            config_dir=args.config_dir,
            log_file=args.log_file,
            strict=args.strict,
        )
    )


if __name__ == "__main__":
    raise SystemExit(main())
