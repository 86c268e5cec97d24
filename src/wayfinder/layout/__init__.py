"""Terminal layout data: locations, connections and file loading."""

from wayfinder.layout.graph import (
    Edge,
    LayoutError,
    LayoutGraph,
    Node,
    manhattan_distance,
)
from wayfinder.layout.loader import load_layout, read_layout_document

__all__ = [
    "Edge",
    "LayoutError",
    "LayoutGraph",
    "Node",
    "load_layout",
    "manhattan_distance",
    "read_layout_document",
]
