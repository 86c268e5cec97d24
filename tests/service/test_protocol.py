"""Tests for navigation service protocol messages."""

from wayfinder.service.protocol import (
    STATUS_NOT_FOUND,
    LocationsRequest,
    LocationsResponse,
    PingRequest,
    Response,
    RouteRequest,
    RouteResponse,
    parse_request,
)


class TestParseRequest:
    """Test request parsing."""

    def test_route_request(self) -> None:
        """Test parsing a route request."""
        request = parse_request({"cmd": "route", "id": "r1", "from": "A", "to": "C"})

        assert request == RouteRequest(id="r1", from_id="A", to_id="C")
        assert request.cmd == "route"

    def test_route_request_missing_fields(self) -> None:
        """Test that missing endpoints parse as empty strings."""
        request = parse_request({"cmd": "route", "id": "r2", "from": "A", "to": None})

        assert isinstance(request, RouteRequest)
        assert request.from_id == "A"
        assert request.to_id == ""

    def test_locations_request(self) -> None:
        """Test parsing a locations request."""
        assert parse_request({"cmd": "locations", "id": "l1"}) == LocationsRequest(id="l1")

    def test_ping_request(self) -> None:
        """Test parsing a ping request."""
        assert isinstance(parse_request({"cmd": "ping"}), PingRequest)

    def test_unknown_command(self) -> None:
        """Test that unknown commands are not parsed."""
        assert parse_request({"cmd": "teleport", "id": "x"}) is None

    def test_request_to_dict(self) -> None:
        """Test request serialization uses wire field names."""
        request = RouteRequest(id="r1", from_id="A", to_id="C")
        assert request.to_dict() == {"cmd": "route", "id": "r1", "from": "A", "to": "C"}


class TestResponses:
    """Test response serialization."""

    def test_base_response_omits_empty_error(self) -> None:
        """Test that successful responses carry no error key."""
        assert Response(id="x", ok=True).to_dict() == {"id": "x", "ok": True, "status": 200}

    def test_route_response_success(self) -> None:
        """Test a successful route response."""
        route = [{"id": "A", "name": "A", "x": 0, "y": 0}]
        response = RouteResponse(id="r1", ok=True, route=route, cost=0.0)

        assert response.to_dict() == {
            "id": "r1",
            "ok": True,
            "status": 200,
            "route": route,
            "cost": 0.0,
        }

    def test_route_response_not_found(self) -> None:
        """Test a not-found route response."""
        response = RouteResponse(
            id="r1",
            ok=False,
            status=STATUS_NOT_FOUND,
            error="Route not found.",
            reason="unreachable",
        )

        assert response.to_dict() == {
            "id": "r1",
            "ok": False,
            "status": 404,
            "error": "Route not found.",
            "reason": "unreachable",
        }

    def test_locations_response(self) -> None:
        """Test a locations response."""
        response = LocationsResponse(id="l1", ok=True, locations=[])
        assert response.to_dict()["locations"] == []
