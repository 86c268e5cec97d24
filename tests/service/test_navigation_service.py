"""Tests for the navigation service request handling."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from wayfinder.layout.graph import Edge, LayoutGraph, Node
from wayfinder.service.config import DEFAULT_CONFIG
from wayfinder.service.service import NavigationService, serve_forever


@pytest.fixture
def graph() -> LayoutGraph:
    """Create the A-B-C-D test layout plus an isolated node."""
    return LayoutGraph(
        [
            Node("A", "Check-in", 0, 0),
            Node("B", "Security", 1, 0),
            Node("C", "Gate C", 2, 0),
            Node("D", "Lounge", 0, 1),
            Node("E", "Closed Wing", 9, 9),
        ],
        [
            Edge("A", "B", 1),
            Edge("B", "C", 1),
            Edge("A", "D", 5),
            Edge("D", "C", 1),
        ],
    )


@pytest.fixture
def service(graph: LayoutGraph) -> NavigationService:
    """Create navigation service fixture."""
    return NavigationService(graph, DEFAULT_CONFIG)


class TestNavigationService:
    """Tests for NavigationService request handling."""

    def test_initialization(self, service: NavigationService) -> None:
        """Test service reads server settings from config."""
        assert service.host == "127.0.0.1"
        assert service.port == 51180

    @pytest.mark.asyncio
    async def test_route_found(self, service: NavigationService) -> None:
        """Test a successful route query."""
        response = await service.handle_request({"cmd": "route", "id": "r1", "from": "A", "to": "C"})

        assert response["ok"] is True
        assert response["status"] == 200
        assert [node["id"] for node in response["route"]] == ["A", "B", "C"]
        assert response["route"][0] == {"id": "A", "name": "Check-in", "x": 0, "y": 0}
        assert response["cost"] == pytest.approx(2.0)

    @pytest.mark.asyncio
    async def test_route_unknown_node(self, service: NavigationService) -> None:
        """Test querying an unknown location."""
        response = await service.handle_request({"cmd": "route", "id": "r2", "from": "A", "to": "Z"})

        assert response["ok"] is False
        assert response["status"] == 404
        assert response["error"] == "Route not found."
        assert response["reason"] == "unknown_goal"

    @pytest.mark.asyncio
    async def test_route_unreachable(self, service: NavigationService) -> None:
        """Test querying a disconnected location."""
        response = await service.handle_request({"cmd": "route", "id": "r3", "from": "A", "to": "E"})

        assert response["status"] == 404
        assert response["reason"] == "unreachable"

    @pytest.mark.asyncio
    async def test_route_missing_endpoint(self, service: NavigationService) -> None:
        """Test a route request without a destination."""
        response = await service.handle_request({"cmd": "route", "id": "r4", "from": "A"})

        assert response["ok"] is False
        assert response["status"] == 400
        assert response["error"] == 'Missing "from" or "to" query parameters.'

    @pytest.mark.asyncio
    async def test_route_same_start_and_goal(self, service: NavigationService) -> None:
        """Test the trivial route."""
        response = await service.handle_request({"cmd": "route", "id": "r5", "from": "B", "to": "B"})

        assert [node["id"] for node in response["route"]] == ["B"]
        assert response["cost"] == 0.0

    @pytest.mark.asyncio
    async def test_locations(self, service: NavigationService) -> None:
        """Test listing all locations."""
        response = await service.handle_request({"cmd": "locations", "id": "l1"})

        assert response["ok"] is True
        assert [loc["id"] for loc in response["locations"]] == ["A", "B", "C", "D", "E"]
        assert response["locations"][3] == {"id": "D", "name": "Lounge", "x": 0, "y": 1}

    @pytest.mark.asyncio
    async def test_ping(self, service: NavigationService) -> None:
        """Test health check."""
        response = await service.handle_request({"cmd": "ping", "id": "p1"})

        assert response["ok"] is True
        assert response["node_count"] == 5
        assert response["edge_count"] == 4
        assert response["uptime_s"] >= 0

    @pytest.mark.asyncio
    async def test_unknown_command(self, service: NavigationService) -> None:
        """Test an unknown command."""
        response = await service.handle_request({"cmd": "teleport", "id": "x1"})

        assert response["ok"] is False
        assert response["status"] == 400
        assert "Unknown command" in response["error"]

    @pytest.mark.asyncio
    async def test_internal_error(self, service: NavigationService) -> None:
        """Test that handler failures become 500 responses."""
        with patch.object(service.finder, "find_path", side_effect=RuntimeError("boom")):
            response = await service.handle_request(
                {"cmd": "route", "id": "r6", "from": "A", "to": "C"}
            )

        assert response["status"] == 500
        assert response["error"] == "boom"

    @pytest.mark.asyncio
    async def test_handle_message(self, service: NavigationService) -> None:
        """Test decoding a raw JSON message."""
        message = json.dumps({"cmd": "route", "id": "m1", "from": "C", "to": "A"})

        response = await service.handle_message(message)

        assert [node["id"] for node in response["route"]] == ["C", "B", "A"]

    @pytest.mark.asyncio
    async def test_handle_invalid_json(self, service: NavigationService) -> None:
        """Test a message that is not JSON."""
        response = await service.handle_message("{oops")

        assert response["status"] == 400
        assert response["error"].startswith("Invalid JSON")

    @pytest.mark.asyncio
    async def test_handle_invalid_utf8(self, service: NavigationService) -> None:
        """Test a binary frame that is not valid UTF-8."""
        response = await service.handle_message(b'{"cmd": "ping", "id": "\xff"}')

        assert response["ok"] is False
        assert response["status"] == 400
        assert response["error"].startswith("Invalid JSON")

    @pytest.mark.asyncio
    async def test_handle_utf8_bytes(self, service: NavigationService) -> None:
        """Test that valid binary frames are decoded."""
        response = await service.handle_message(b'{"cmd": "ping", "id": "p2"}')
        assert response["ok"] is True

    @pytest.mark.asyncio
    async def test_handle_non_object_json(self, service: NavigationService) -> None:
        """Test a JSON message that is not an object."""
        response = await service.handle_message("[1, 2]")
        assert response["status"] == 400

    def test_pathfinding_config(self, graph: LayoutGraph) -> None:
        """Test that pathfinding settings reach the finder."""
        config = {"pathfinding": {"heuristic": "zero", "max_expansions": 3}}

        service = NavigationService(graph, config)

        assert service.finder.max_expansions == 3


class TestServeForever:
    """Test service startup failures."""

    def test_missing_layout_exits_nonzero(self, tmp_path: Path) -> None:
        """Test startup with a missing layout file."""
        config = {**DEFAULT_CONFIG, "layout": {"path": str(tmp_path / "missing.json")}}
        assert serve_forever(config) == 1

    def test_invalid_layout_exits_nonzero(self, tmp_path: Path) -> None:
        """Test startup with a malformed layout file."""
        path = tmp_path / "layout.json"
        path.write_text(
            json.dumps({"nodes": {"A": {"x": 0, "y": 0}}, "edges": [{"from": "A", "to": "B"}]}),
            encoding="utf-8",
        )
        config = {**DEFAULT_CONFIG, "layout": {"path": str(path)}}

        assert serve_forever(config) == 1
