"""Command-line entry for hastatus."""

from __future__ import annotations

import argparse
import sys
from typing import NoReturn, Optional, Sequence

from . import run_server
from .config_loader import ConfigError


def _create_parser() -> argparse.ArgumentParser:
    """Create argument parser for the hastatus CLI.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="hastatus",
        description="hastatus - Home Assistant status image server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  HA_TOKEN=... python -m hastatus               # Serve on 0.0.0.0:3000
  python -m hastatus --port 8080 --host 127.0.0.1
  python -m hastatus --config hastatus.yaml
        """,
    )

    parser.add_argument(
        "--port",
        type=int,
        metavar="PORT",
        help="Port number for the web server (default: 3000, or from PORT / HASTATUS_SERVER_PORT)",
    )
    parser.add_argument(
        "--host",
        metavar="HOST",
        help="Address to bind (default: 0.0.0.0, or from HASTATUS_SERVER_BIND)",
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        help="Optional YAML file overriding environment configuration",
    )

    return parser


def main(argv: Optional[Sequence[str]] = None) -> NoReturn:
    """Run the hastatus CLI."""
    args = _create_parser().parse_args(argv)

    try:
        run_server(args)
    except ConfigError as exc:
        print(f"hastatus: configuration error: {exc}", file=sys.stderr)
        sys.exit(2)
    sys.exit(0)


if __name__ == "__main__":
    main()
