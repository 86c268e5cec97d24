"""JSON protocol definitions for the navigation service.

This module defines the request/response message types exchanged with the
navigation service over WebSocket.

Protocol:
    - All messages are JSON
    - Request format: {"cmd": "...", "id": "...", ...}
    - Response format: {"id": "...", "ok": true/false, "status": <code>, ...}
    - Status codes follow HTTP meaning: 200 found, 400 bad request,
      404 route not found, 500 internal error

WebSocket endpoint: ws://127.0.0.1:51180 (configurable)

Example exchange:
    >>> {"cmd": "route", "id": "r1", "from": "checkin", "to": "gateA3"}
    <<< {"id": "r1", "ok": true, "status": 200, "route": [...], "cost": 42.0}
"""

from dataclasses import dataclass, field
from typing import Any

STATUS_OK = 200
STATUS_BAD_REQUEST = 400
STATUS_NOT_FOUND = 404
STATUS_INTERNAL_ERROR = 500

MISSING_ENDPOINTS_ERROR = 'Missing "from" or "to" query parameters.'
ROUTE_NOT_FOUND_ERROR = "Route not found."


@dataclass
class Request:
    """Base request message."""

    cmd: str
    id: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"cmd": self.cmd, "id": self.id}


@dataclass
class RouteRequest(Request):
    """Request a route between two locations.

    Attributes:
        from_id: Starting node id ("from" on the wire).
        to_id: Destination node id ("to" on the wire).
    """

    from_id: str = ""
    to_id: str = ""
    cmd: str = field(default="route", init=False)

    def to_dict(self) -> dict[str, Any]:
        return {"cmd": self.cmd, "id": self.id, "from": self.from_id, "to": self.to_id}


@dataclass
class LocationsRequest(Request):
    """Request the list of all locations."""

    cmd: str = field(default="locations", init=False)


@dataclass
class PingRequest(Request):
    """Health check ping request."""

    cmd: str = field(default="ping", init=False)


@dataclass
class Response:
    """Base response message.

    Attributes:
        id: Id of the request being answered.
        ok: Whether the request succeeded.
        status: HTTP-style status code.
        error: Error message when not ok.
    """

    id: str
    ok: bool
    status: int = STATUS_OK
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        d: dict[str, Any] = {"id": self.id, "ok": self.ok, "status": self.status}
        if self.error:
            d["error"] = self.error
        return d


@dataclass
class RouteResponse(Response):
    """Response to a route request.

    Attributes:
        route: Node records ``{id, name, x, y}`` from start to goal.
        cost: Total route cost.
        reason: Why no route was found (not-found responses only).
    """

    route: list[dict[str, Any]] = field(default_factory=list)
    cost: float = 0.0
    reason: str | None = None

    def to_dict(self) -> dict[str, Any]:
        d = super().to_dict()
        if self.ok:
            d["route"] = self.route
            d["cost"] = self.cost
        elif self.reason:
            d["reason"] = self.reason
        return d


@dataclass
class LocationsResponse(Response):
    """Response to a locations request.

    Attributes:
        locations: Node records ``{id, name, x, y}``.
    """

    locations: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        d = super().to_dict()
        d["locations"] = self.locations
        return d


@dataclass
class PingResponse(Response):
    """Response to a ping.

    Attributes:
        uptime_s: Seconds since the service started.
        node_count: Nodes in the loaded layout.
        edge_count: Edges in the loaded layout.
    """

    uptime_s: float = 0.0
    node_count: int = 0
    edge_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        d = super().to_dict()
        d["uptime_s"] = self.uptime_s
        d["node_count"] = self.node_count
        d["edge_count"] = self.edge_count
        return d


def parse_request(data: dict[str, Any]) -> Request | None:
    """Parse a request dictionary into a Request object.

    Args:
        data: Dictionary from JSON parsing.

    Returns:
        Request object or None if the command is unknown.
    """
    cmd = data.get("cmd")
    req_id = str(data.get("id", ""))

    if cmd == "route":
        return RouteRequest(
            id=req_id,
            from_id=str(data.get("from") or ""),
            to_id=str(data.get("to") or ""),
        )
    elif cmd == "locations":
        return LocationsRequest(id=req_id)
    elif cmd == "ping":
        return PingRequest(id=req_id)
    else:
        return None
