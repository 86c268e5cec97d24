"""Terminal layout graph for indoor wayfinding.

Holds the named locations of one airport facility and the weighted,
undirected connections between them. The graph is validated once when it
is built and is read-only afterwards, so a single instance can be shared
by any number of concurrent route queries.

Typical usage:
    from wayfinder.layout.graph import LayoutGraph

    graph = LayoutGraph.from_dict(layout_data)
    node = graph.get_node("gateA3")
    for neighbor_id, weight in graph.neighbors("gateA3"):
        print(neighbor_id, weight)
"""

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


class LayoutError(ValueError):
    """Raised when layout data cannot form a valid graph."""


@dataclass(frozen=True)
class Node:
    """A named location in the terminal.

    Attributes:
        id: Unique node identifier (e.g., "gateA3").
        name: Human-readable label.
        x: Planar x coordinate, used only by the search heuristic.
        y: Planar y coordinate, used only by the search heuristic.
    """

    id: str
    name: str
    x: float
    y: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire record ``{id, name, x, y}``."""
        return {"id": self.id, "name": self.name, "x": self.x, "y": self.y}


@dataclass(frozen=True)
class Edge:
    """An undirected, weighted connection between two nodes.

    Attributes:
        from_id: One endpoint.
        to_id: The other endpoint.
        weight: Traversal cost (walking distance or time), always > 0.
    """

    from_id: str
    to_id: str
    weight: float

    def other(self, node_id: str) -> str:
        """Return the endpoint opposite ``node_id``."""
        return self.to_id if self.from_id == node_id else self.from_id


def manhattan_distance(a: Node, b: Node) -> float:
    """Manhattan distance between two nodes' coordinates."""
    return abs(a.x - b.x) + abs(a.y - b.y)


def _as_number(value: Any, what: str) -> float:
    # bool is an int subclass but never a meaningful coordinate or weight
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise LayoutError(f"{what} must be a number, got {value!r}")
    number = float(value)
    if not math.isfinite(number):
        raise LayoutError(f"{what} must be finite, got {value!r}")
    return number


class LayoutGraph:
    """Immutable graph of terminal locations.

    Nodes keep their declaration order, and each node's adjacency list keeps
    edge declaration order, so repeated queries explore the graph in the
    same order.

    Examples:
        >>> graph = LayoutGraph(
        ...     [Node("A", "Check-in", 0, 0), Node("B", "Security", 1, 0)],
        ...     [Edge("A", "B", 1.0)],
        ... )
        >>> graph.neighbors("B")
        [('A', 1.0)]
    """

    def __init__(self, nodes: Iterable[Node], edges: Iterable[Edge]) -> None:
        """Build and validate the graph.

        Args:
            nodes: Node records; ids must be unique.
            edges: Edge records; endpoints must exist and weights be > 0.

        Raises:
            LayoutError: If any node or edge is invalid.
        """
        self._nodes: dict[str, Node] = {}
        for node in nodes:
            _as_number(node.x, f"Node {node.id!r} x")
            _as_number(node.y, f"Node {node.id!r} y")
            if node.id in self._nodes:
                raise LayoutError(f"Duplicate node id: {node.id!r}")
            self._nodes[node.id] = node

        self._edges: tuple[Edge, ...] = tuple(edges)
        adjacency: dict[str, list[tuple[str, float]]] = {node_id: [] for node_id in self._nodes}
        admissible = True

        for index, edge in enumerate(self._edges):
            for endpoint in (edge.from_id, edge.to_id):
                if endpoint not in self._nodes:
                    raise LayoutError(f"Edge {index} references unknown node {endpoint!r}")
            _as_number(edge.weight, f"Edge {index} weight")
            if not edge.weight > 0:
                raise LayoutError(
                    f"Edge {index} ({edge.from_id} - {edge.to_id}) has non-positive "
                    f"weight {edge.weight!r}"
                )

            adjacency[edge.from_id].append((edge.to_id, edge.weight))
            if edge.to_id != edge.from_id:
                adjacency[edge.to_id].append((edge.from_id, edge.weight))

            span = manhattan_distance(self._nodes[edge.from_id], self._nodes[edge.to_id])
            if edge.weight < span:
                admissible = False

        self._adjacency: dict[str, tuple[tuple[str, float], ...]] = {
            node_id: tuple(links) for node_id, links in adjacency.items()
        }
        self._heuristic_is_admissible = admissible

        logger.info(
            "Built layout graph: %d nodes, %d edges",
            len(self._nodes),
            len(self._edges),
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LayoutGraph":
        """Build a graph from a layout document.

        The document shape is ``{"nodes": {id: {"name", "x", "y"}},
        "edges": [{"from", "to", "weight"}]}``.

        Args:
            data: Parsed layout document.

        Returns:
            Validated LayoutGraph.

        Raises:
            LayoutError: If the document is malformed.
        """
        if not isinstance(data, Mapping):
            raise LayoutError("Layout document must be a mapping")

        raw_nodes = data.get("nodes")
        raw_edges = data.get("edges", [])
        if not isinstance(raw_nodes, Mapping):
            raise LayoutError("Layout 'nodes' must be a mapping of id to node")
        if not isinstance(raw_edges, list):
            raise LayoutError("Layout 'edges' must be a list")

        nodes = []
        for node_id, fields in raw_nodes.items():
            if not isinstance(fields, Mapping):
                raise LayoutError(f"Node {node_id!r} must be a mapping")
            nodes.append(
                Node(
                    id=str(node_id),
                    name=str(fields.get("name", node_id)),
                    x=_as_number(fields.get("x"), f"Node {node_id!r} x"),
                    y=_as_number(fields.get("y"), f"Node {node_id!r} y"),
                )
            )

        edges = []
        for index, fields in enumerate(raw_edges):
            if not isinstance(fields, Mapping):
                raise LayoutError(f"Edge {index} must be a mapping")
            if "from" not in fields or "to" not in fields:
                raise LayoutError(f"Edge {index} must have 'from' and 'to'")
            edges.append(
                Edge(
                    from_id=str(fields["from"]),
                    to_id=str(fields["to"]),
                    weight=_as_number(fields.get("weight"), f"Edge {index} weight"),
                )
            )

        return cls(nodes, edges)

    def get_node(self, node_id: str) -> Node | None:
        """Look up a node.

        Args:
            node_id: Node identifier.

        Returns:
            The Node, or None if the id is unknown.
        """
        return self._nodes.get(node_id)

    def neighbors(self, node_id: str) -> list[tuple[str, float]]:
        """List every edge incident to a node as ``(other_id, weight)``.

        Parallel edges appear once each. Unknown ids have no neighbors.
        """
        return list(self._adjacency.get(node_id, ()))

    def locations(self) -> list[Node]:
        """Return all nodes in declaration order."""
        return list(self._nodes.values())

    @property
    def edges(self) -> tuple[Edge, ...]:
        """All edges in declaration order."""
        return self._edges

    @property
    def heuristic_is_admissible(self) -> bool:
        """Whether no edge is cheaper than the Manhattan distance it spans."""
        return self._heuristic_is_admissible

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)
