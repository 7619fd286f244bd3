"""Command-line interface for the waverover bridge.

Usage::

    waverover            # listen on the configured port (default 3000)
    waverover 4000       # listen on port 4000
    waverover -c config/waverover.yaml -v
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def port_number(value: str) -> int:
    """argparse type for a TCP port (1-65535)."""
    try:
        port = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port: {value!r}") from None
    if not 1 <= port <= 65535:
        raise argparse.ArgumentTypeError(f"port must be between 1 and 65535, got {port}")
    return port


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="waverover",
        description="MCP server bridging tool calls to Wave Rover robots",
    )
    parser.add_argument(
        "port",
        type=port_number,
        nargs="?",
        default=None,
        help="Port to listen on (default: server.port from config, 3000)",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: config/waverover.yaml)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the waverover CLI."""
    args = parse_args(argv)

    from waverover.config.settings import load_settings
    from waverover.server.app import main as run_server
    from waverover.utils.logging import setup_logging

    settings = load_settings(args.config)

    if args.port is not None:
        settings.server.port = args.port
    if args.verbose:
        settings.logging.level = "DEBUG"

    setup_logging(settings.logging)

    logger.info("Starting Wave Rover bridge on port %d", settings.server.port)
    run_server(settings)


if __name__ == "__main__":
    main()
