"""Command-line interface for terminal wayfinding.

Usage:
    wayfinder route FROM TO [--layout PATH] [--config PATH]
    wayfinder locations [--layout PATH] [--config PATH]
    wayfinder serve [--layout PATH] [--config PATH] [--port PORT]
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from wayfinder.layout.graph import LayoutError
from wayfinder.layout.loader import load_layout
from wayfinder.navigation.pathfinder import PathFinder
from wayfinder.service.config import load_config, setup_logging
from wayfinder.service.protocol import ROUTE_NOT_FOUND_ERROR
from wayfinder.service.service import serve_forever
from wayfinder.version import get_version

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_BAD_LAYOUT = 2
EXIT_BAD_CONFIG = 2


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level argument parser."""
    parser = argparse.ArgumentParser(prog="wayfinder", description="Airport indoor wayfinding")
    parser.add_argument("--version", action="version", version=f"%(prog)s {get_version()}")
    parser.add_argument("--config", type=Path, help="Path to configuration YAML file")
    parser.add_argument("--layout", type=Path, help="Override layout file path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    route_parser = subparsers.add_parser("route", help="Find a route between two locations")
    route_parser.add_argument("from_id", metavar="FROM", help="Starting location id")
    route_parser.add_argument("to_id", metavar="TO", help="Destination location id")

    subparsers.add_parser("locations", help="List all locations")

    serve_parser = subparsers.add_parser("serve", help="Run the navigation service")
    serve_parser.add_argument("--port", type=int, help="Override WebSocket port")

    return parser


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2))


def main(argv: list[str] | None = None) -> int:
    """Run the CLI.

    Args:
        argv: Arguments, defaulting to sys.argv.

    Returns:
        Exit status.
    """
    args = build_parser().parse_args(argv)

    config = load_config(args.config)
    if args.layout:
        config["layout"]["path"] = str(args.layout)
    if args.verbose:
        config["logging"]["level"] = "DEBUG"

    if args.command == "serve":
        if args.port:
            config["server"]["port"] = args.port
        setup_logging(config)
        return serve_forever(config)

    setup_logging(config, log_to_file=False)

    try:
        graph = load_layout(config["layout"]["path"])
    except (FileNotFoundError, LayoutError) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_BAD_LAYOUT

    if args.command == "locations":
        _print_json([node.to_dict() for node in graph.locations()])
        return EXIT_OK

    path_config = config["pathfinding"]
    try:
        finder = PathFinder(
            graph,
            heuristic=path_config.get("heuristic", "auto"),
            max_expansions=path_config.get("max_expansions"),
        )
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_BAD_CONFIG

    result = finder.find_path(args.from_id, args.to_id)
    if not result:
        _print_json({"error": ROUTE_NOT_FOUND_ERROR, "reason": result.reason.value})
        return EXIT_NOT_FOUND

    _print_json({"route": result.to_list(), "cost": result.total_cost})
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
