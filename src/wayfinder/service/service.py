"""Navigation service - WebSocket server for route queries.

Serves route and location queries against one layout graph that is loaded
at startup and shared, read-only, by every connection.

Usage:
    python -m wayfinder.service.service [--config path/to/config.yaml]
"""

import argparse
import asyncio
import json
import logging
import signal
import sys
import time
from pathlib import Path
from typing import Any

import websockets
from websockets.asyncio.server import serve

from wayfinder.layout.graph import LayoutError, LayoutGraph
from wayfinder.layout.loader import load_layout
from wayfinder.navigation.pathfinder import PathFinder
from wayfinder.service.config import load_config, setup_logging
from wayfinder.service.protocol import (
    MISSING_ENDPOINTS_ERROR,
    ROUTE_NOT_FOUND_ERROR,
    STATUS_BAD_REQUEST,
    STATUS_INTERNAL_ERROR,
    STATUS_NOT_FOUND,
    LocationsRequest,
    LocationsResponse,
    PingRequest,
    PingResponse,
    Response,
    RouteRequest,
    RouteResponse,
    parse_request,
)

logger = logging.getLogger(__name__)


class NavigationService:
    """WebSocket-based navigation service.

    Answers route and location queries from a single LayoutGraph handed in
    at construction.
    """

    def __init__(self, graph: LayoutGraph, config: dict[str, Any]) -> None:
        """Initialize service.

        Args:
            graph: Validated layout graph, never modified by the service.
            config: Configuration dictionary from YAML.
        """
        self.graph = graph
        self.config = config
        self.start_time = time.time()

        server_config = config.get("server", {})
        self.host = server_config.get("host", "127.0.0.1")
        self.port = server_config.get("port", 51180)

        path_config = config.get("pathfinding", {})
        self.finder = PathFinder(
            graph,
            heuristic=path_config.get("heuristic", "auto"),
            max_expansions=path_config.get("max_expansions"),
        )

        self._shutdown_event = asyncio.Event()

        logger.info(
            "NavigationService initialized: %s:%d (%d locations)",
            self.host,
            self.port,
            len(graph),
        )

    async def handle_request(self, request_data: dict[str, Any]) -> dict[str, Any]:
        """Handle incoming request.

        Args:
            request_data: Parsed JSON request.

        Returns:
            Response dictionary.
        """
        request = parse_request(request_data)
        if not request:
            return Response(
                id=str(request_data.get("id", "")),
                ok=False,
                status=STATUS_BAD_REQUEST,
                error=f"Unknown command: {request_data.get('cmd')}",
            ).to_dict()

        try:
            if isinstance(request, RouteRequest):
                return self._handle_route(request)
            elif isinstance(request, LocationsRequest):
                return self._handle_locations(request)
            elif isinstance(request, PingRequest):
                return self._handle_ping(request)
            else:
                return Response(
                    id=request.id,
                    ok=False,
                    status=STATUS_BAD_REQUEST,
                    error=f"Unhandled command: {request.cmd}",
                ).to_dict()

        except Exception as e:
            logger.exception("Error handling request: %s", e)
            return Response(
                id=request.id,
                ok=False,
                status=STATUS_INTERNAL_ERROR,
                error=str(e),
            ).to_dict()

    def _handle_route(self, request: RouteRequest) -> dict[str, Any]:
        if not request.from_id or not request.to_id:
            return RouteResponse(
                id=request.id,
                ok=False,
                status=STATUS_BAD_REQUEST,
                error=MISSING_ENDPOINTS_ERROR,
            ).to_dict()

        result = self.finder.find_path(request.from_id, request.to_id)
        if not result:
            logger.info(
                "Route not found: %s -> %s (%s)",
                request.from_id,
                request.to_id,
                result.reason.value,
            )
            return RouteResponse(
                id=request.id,
                ok=False,
                status=STATUS_NOT_FOUND,
                error=ROUTE_NOT_FOUND_ERROR,
                reason=result.reason.value,
            ).to_dict()

        return RouteResponse(
            id=request.id,
            ok=True,
            route=result.to_list(),
            cost=result.total_cost,
        ).to_dict()

    def _handle_locations(self, request: LocationsRequest) -> dict[str, Any]:
        return LocationsResponse(
            id=request.id,
            ok=True,
            locations=[node.to_dict() for node in self.graph.locations()],
        ).to_dict()

    def _handle_ping(self, request: PingRequest) -> dict[str, Any]:
        return PingResponse(
            id=request.id,
            ok=True,
            uptime_s=time.time() - self.start_time,
            node_count=len(self.graph),
            edge_count=len(self.graph.edges),
        ).to_dict()

    async def handle_message(self, message: str | bytes) -> dict[str, Any]:
        """Decode one raw message and answer it.

        Args:
            message: Raw JSON text received from a client.

        Returns:
            Response dictionary.
        """
        try:
            request_data = json.loads(message)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return Response(
                id="",
                ok=False,
                status=STATUS_BAD_REQUEST,
                error=f"Invalid JSON: {e}",
            ).to_dict()

        if not isinstance(request_data, dict):
            return Response(
                id="",
                ok=False,
                status=STATUS_BAD_REQUEST,
                error="Request must be a JSON object",
            ).to_dict()

        return await self.handle_request(request_data)

    async def websocket_handler(self, websocket: Any) -> None:
        """Handle WebSocket connection."""
        client_addr = websocket.remote_address
        logger.info("Client connected: %s", client_addr)

        try:
            async for message in websocket:
                response = await self.handle_message(message)
                await websocket.send(json.dumps(response))

        except websockets.exceptions.ConnectionClosed:
            pass

        logger.info("Client disconnected: %s", client_addr)

    def shutdown(self) -> None:
        """Ask a running service to stop."""
        self._shutdown_event.set()

    async def run(self) -> None:
        """Run the service until shutdown is requested."""
        logger.info("Starting WebSocket server on %s:%d", self.host, self.port)

        try:
            async with serve(self.websocket_handler, self.host, self.port):
                logger.info("Navigation service ready")
                await self._shutdown_event.wait()

        except Exception as e:
            logger.error("Server error: %s", e)
            raise

        finally:
            logger.info("Navigation service stopped")


def build_parser() -> argparse.ArgumentParser:
    """Build the service argument parser."""
    parser = argparse.ArgumentParser(description="Navigation Service")
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration YAML file",
    )
    parser.add_argument(
        "--layout",
        type=Path,
        help="Override layout file path",
    )
    parser.add_argument(
        "--port",
        type=int,
        help="Override WebSocket port",
    )
    return parser


def serve_forever(config: dict[str, Any]) -> int:
    """Load the layout and run the service.

    Args:
        config: Configuration dictionary.

    Returns:
        Process exit status.
    """
    layout_path = Path(config["layout"]["path"])
    try:
        graph = load_layout(layout_path)
    except (FileNotFoundError, LayoutError) as e:
        logger.error("Cannot load layout %s: %s", layout_path, e)
        return 1

    async def _run() -> None:
        service = NavigationService(graph, config)
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, service.shutdown)
        await service.run()

    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        logger.info("Interrupted")
    except Exception as e:
        logger.exception("Fatal error: %s", e)
        return 1
    return 0


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    config = load_config(args.config)
    if args.layout:
        config["layout"]["path"] = str(args.layout)
    if args.port:
        config["server"]["port"] = args.port

    setup_logging(config)
    logger.info("Navigation service starting...")

    sys.exit(serve_forever(config))


if __name__ == "__main__":
    main()
