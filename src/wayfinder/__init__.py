"""Wayfinder: indoor route finding for airport terminals.

Typical usage:
    from wayfinder import PathFinder, load_layout

    graph = load_layout("data/airport_layout.json")
    route = PathFinder(graph).find_path("checkin", "gateA3")
"""

from wayfinder.layout import Edge, LayoutError, LayoutGraph, Node, load_layout
from wayfinder.navigation import NotFoundReason, PathFinder, Route, RouteNotFound, find_path
from wayfinder.version import __version__

__all__ = [
    "Edge",
    "LayoutError",
    "LayoutGraph",
    "Node",
    "NotFoundReason",
    "PathFinder",
    "Route",
    "RouteNotFound",
    "__version__",
    "find_path",
    "load_layout",
]
