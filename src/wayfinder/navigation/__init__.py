"""Indoor route search.

Typical usage:
    from wayfinder.navigation import PathFinder

    finder = PathFinder(graph)
    route = finder.find_path("checkin", "gateA3")
"""

from wayfinder.navigation.pathfinder import (
    HEURISTIC_AUTO,
    HEURISTIC_MANHATTAN,
    HEURISTIC_ZERO,
    NotFoundReason,
    PathFinder,
    Route,
    RouteNotFound,
    find_path,
    route_cost,
    select_heuristic,
    zero_heuristic,
)
from wayfinder.navigation.priority_queue import PriorityQueue

__all__ = [
    "HEURISTIC_AUTO",
    "HEURISTIC_MANHATTAN",
    "HEURISTIC_ZERO",
    "NotFoundReason",
    "PathFinder",
    "PriorityQueue",
    "Route",
    "RouteNotFound",
    "find_path",
    "route_cost",
    "select_heuristic",
    "zero_heuristic",
]
