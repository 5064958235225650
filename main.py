"""Command-line entry point for the scene budget host."""

from __future__ import annotations

import argparse
from pathlib import Path
import sys

from core.app import EXIT_SETUP_ERROR, AppConfig, build_app, exit_code
from core.logging import log_info
from diagnostics.runner import format_findings


def parse_args(argv: list[str]) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Raw command-line arguments.

    Returns:
        Parsed arguments namespace.
    """

    parser = argparse.ArgumentParser(
        description="Load a scene and run budget diagnostics on start."
    )
    parser.add_argument("scene", type=Path, help="YAML scene description.")
    parser.add_argument(
        "--profile",
        type=str,
        help="Override the active budget profile for this session.",
    )
    parser.add_argument(
        "--config-dir",
        type=Path,
        default=None,
        help="Directory holding default.yaml and override.yaml.",
    )
    parser.add_argument(
        "--no-run-on-start",
        action="store_true",
        help="Skip the start-up diagnostic pass.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Application entry point.

    Args:
        argv: Optional list of command-line arguments.

    Returns:
        Process exit code.
    """

    if argv is None:
        argv = sys.argv[1:]

    args = parse_args(argv)
    app = build_app(
        AppConfig(
            scene_path=args.scene,
            profile_name=args.profile,
            config_dir=args.config_dir,
        )
    )
    if app is None:
        return EXIT_SETUP_ERROR
    if args.no_run_on_start:
        app.run_on_start = False

    findings = app.start()
    if findings:
        print(format_findings(findings))
    else:
        log_info("No diagnostics were run")
    return exit_code(findings)


if __name__ == "__main__":
    raise SystemExit(main())
