"""obsgrid command-line entry point."""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from obsgrid.config import load_settings
from obsgrid.core.errors import main_with_error_handling
from obsgrid.dashboards.layout import OverflowPolicy
from obsgrid.logging import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="obsgrid", description="obsgrid CLI")
    subparsers = parser.add_subparsers(dest="command")

    layout_parser = subparsers.add_parser(
        "layout", help="Compute grid positions for a dashboard declaration"
    )
    layout_parser.add_argument("dashboard_file", help="Path to dashboard YAML file")
    layout_parser.add_argument(
        "--policy",
        choices=[p.value for p in OverflowPolicy],
        help="How to treat panels wider than the grid (default: OBSGRID_OVERFLOW_POLICY)",
    )
    layout_parser.add_argument(
        "--output",
        choices=["text", "json", "grafana"],
        default="text",
        help="Output format",
    )

    return parser


@main_with_error_handling()
def run(args: argparse.Namespace) -> int:
    settings = load_settings()
    configure_logging(settings.log_level, settings.log_format)

    if args.command == "layout":
        from obsgrid.cli.layout import layout_command

        return layout_command(args.dashboard_file, policy=args.policy, output=args.output)

    build_parser().print_help()
    return 1


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    sys.exit(run(args))


if __name__ == "__main__":
    main()
