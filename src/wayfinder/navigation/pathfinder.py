"""A* route search over a terminal layout graph.

Finds the lowest-cost walking route between two named locations. Failed
queries are ordinary results (RouteNotFound), not exceptions, so callers
can map them straight to a "route not found" response.

Typical usage:
    from wayfinder.navigation.pathfinder import PathFinder

    finder = PathFinder(graph)
    result = finder.find_path("checkin", "gateA3")
    if result:
        print([node.id for node in result.nodes], result.total_cost)
    else:
        print(result.reason.value)
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from wayfinder.layout.graph import LayoutGraph, Node, manhattan_distance
from wayfinder.navigation.priority_queue import PriorityQueue

logger = logging.getLogger(__name__)

Heuristic = Callable[[Node, Node], float]

HEURISTIC_AUTO = "auto"
HEURISTIC_MANHATTAN = "manhattan"
HEURISTIC_ZERO = "zero"


def zero_heuristic(node: Node, goal: Node) -> float:
    """Heuristic that reduces A* to Dijkstra's algorithm."""
    return 0.0


HEURISTICS: dict[str, Heuristic] = {
    HEURISTIC_MANHATTAN: manhattan_distance,
    HEURISTIC_ZERO: zero_heuristic,
}


class NotFoundReason(Enum):
    """Why a route query produced no route."""

    UNKNOWN_START = "unknown_start"
    UNKNOWN_GOAL = "unknown_goal"
    UNREACHABLE = "unreachable"
    EXPANSION_LIMIT = "expansion_limit"


@dataclass(frozen=True)
class Route:
    """A route between two locations.

    Attributes:
        nodes: Locations from start to goal, inclusive.
        total_cost: Sum of edge weights along the route.
    """

    nodes: list[Node]
    total_cost: float

    @property
    def node_ids(self) -> list[str]:
        """Node identifiers in route order."""
        return [node.id for node in self.nodes]

    def to_list(self) -> list[dict[str, Any]]:
        """Convert to the list of ``{id, name, x, y}`` wire records."""
        return [node.to_dict() for node in self.nodes]

    def __len__(self) -> int:
        return len(self.nodes)


@dataclass(frozen=True)
class RouteNotFound:
    """Result of a route query that found no route.

    Always falsy, so ``if not result`` covers every failure.

    Attributes:
        reason: What prevented a route from being found.
    """

    reason: NotFoundReason

    def __bool__(self) -> bool:
        return False


def select_heuristic(graph: LayoutGraph, name: str = HEURISTIC_AUTO) -> Heuristic:
    """Pick the heuristic for a graph.

    Args:
        graph: Graph the heuristic will run on.
        name: "auto", "manhattan" or "zero". "auto" uses Manhattan distance
            only when no edge is cheaper than the distance it spans.

    Returns:
        Heuristic callable.

    Raises:
        ValueError: If the name is not recognised.
    """
    if name == HEURISTIC_AUTO:
        if graph.heuristic_is_admissible:
            return manhattan_distance
        return zero_heuristic
    try:
        return HEURISTICS[name]
    except KeyError:
        raise ValueError(f"Unknown heuristic: {name!r}") from None


def find_path(
    graph: LayoutGraph,
    start_id: str,
    goal_id: str,
    heuristic: Heuristic | None = None,
    max_expansions: int | None = None,
) -> Route | RouteNotFound:
    """Find the minimum-cost route between two nodes using A*.

    Args:
        graph: Layout graph to search. Never modified.
        start_id: Starting node id.
        goal_id: Destination node id.
        heuristic: Remaining-cost estimate. Defaults to the "auto" choice
            of select_heuristic.
        max_expansions: Optional cap on expanded nodes; exceeding it ends
            the search with EXPANSION_LIMIT.

    Returns:
        Route on success, RouteNotFound otherwise.

    Examples:
        >>> result = find_path(graph, "A", "C")
        >>> result.node_ids
        ['A', 'B', 'C']
    """
    start = graph.get_node(start_id)
    goal = graph.get_node(goal_id)
    if start is None:
        logger.debug("Unknown start node %r", start_id)
        return RouteNotFound(NotFoundReason.UNKNOWN_START)
    if goal is None:
        logger.debug("Unknown goal node %r", goal_id)
        return RouteNotFound(NotFoundReason.UNKNOWN_GOAL)

    if start_id == goal_id:
        return Route(nodes=[start], total_cost=0.0)

    if heuristic is None:
        heuristic = select_heuristic(graph)

    frontier: PriorityQueue[str] = PriorityQueue()
    frontier.push(start_id, 0.0)
    came_from: dict[str, str] = {}
    cost_so_far: dict[str, float] = {start_id: 0.0}
    estimates: dict[str, float] = {start_id: heuristic(start, goal)}
    expansions = 0

    while frontier:
        current_id, priority = frontier.pop()

        # Superseded by a cheaper entry pushed later
        if priority > cost_so_far[current_id] + estimates[current_id]:
            continue

        if current_id == goal_id:
            nodes = _reconstruct_path(graph, came_from, start_id, goal_id)
            return Route(nodes=nodes, total_cost=cost_so_far[goal_id])

        if max_expansions is not None and expansions >= max_expansions:
            logger.debug(
                "Expansion limit %d reached searching %s -> %s",
                max_expansions,
                start_id,
                goal_id,
            )
            return RouteNotFound(NotFoundReason.EXPANSION_LIMIT)
        expansions += 1

        for next_id, weight in graph.neighbors(current_id):
            new_cost = cost_so_far[current_id] + weight
            if next_id not in cost_so_far or new_cost < cost_so_far[next_id]:
                cost_so_far[next_id] = new_cost
                came_from[next_id] = current_id
                if next_id not in estimates:
                    estimates[next_id] = heuristic(graph.get_node(next_id), goal)
                frontier.push(next_id, new_cost + estimates[next_id])

    logger.debug("No route from %s to %s", start_id, goal_id)
    return RouteNotFound(NotFoundReason.UNREACHABLE)


def _reconstruct_path(
    graph: LayoutGraph, came_from: dict[str, str], start_id: str, goal_id: str
) -> list[Node]:
    path = [goal_id]
    current = goal_id
    while current != start_id:
        current = came_from[current]
        path.append(current)
    path.reverse()
    return [graph.get_node(node_id) for node_id in path]


def route_cost(graph: LayoutGraph, node_ids: Sequence[str]) -> float:
    """Total cost of walking a node sequence over its cheapest edges.

    Args:
        graph: Layout graph.
        node_ids: Consecutive node ids.

    Returns:
        Sum of the cheapest edge weight between each consecutive pair.

    Raises:
        ValueError: If two consecutive nodes are not connected.
    """
    total = 0.0
    for a, b in zip(node_ids, node_ids[1:]):
        weights = [weight for other, weight in graph.neighbors(a) if other == b]
        if not weights:
            raise ValueError(f"No edge between {a!r} and {b!r}")
        total += min(weights)
    return total


class PathFinder:
    """Route search bound to one layout graph.

    Holds no per-query state, so one instance can serve concurrent
    queries.

    Examples:
        >>> finder = PathFinder(graph, heuristic="zero")
        >>> finder.find_path("A", "A").node_ids
        ['A']
    """

    def __init__(
        self,
        graph: LayoutGraph,
        heuristic: str = HEURISTIC_AUTO,
        max_expansions: int | None = None,
    ) -> None:
        """Initialize path finder.

        Args:
            graph: Layout graph to search.
            heuristic: "auto", "manhattan" or "zero".
            max_expansions: Optional node-expansion budget per query.

        Raises:
            ValueError: If the heuristic name is unknown.
        """
        self.graph = graph
        self.max_expansions = max_expansions
        self.heuristic = select_heuristic(graph, heuristic)

        if heuristic == HEURISTIC_AUTO and not graph.heuristic_is_admissible:
            logger.warning(
                "Layout has edges cheaper than their Manhattan span, "
                "searching without a distance heuristic"
            )
        elif heuristic == HEURISTIC_MANHATTAN and not graph.heuristic_is_admissible:
            logger.warning("Manhattan heuristic is not admissible for this layout")

    def find_path(self, start_id: str, goal_id: str) -> Route | RouteNotFound:
        """Find the minimum-cost route between two nodes.

        Args:
            start_id: Starting node id.
            goal_id: Destination node id.

        Returns:
            Route on success, RouteNotFound otherwise.
        """
        return find_path(
            self.graph,
            start_id,
            goal_id,
            heuristic=self.heuristic,
            max_expansions=self.max_expansions,
        )
