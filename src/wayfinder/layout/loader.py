"""Layout file loading.

Reads a terminal layout document from disk and builds a LayoutGraph from
it. JSON is the native format; YAML files with the same shape are
accepted too.

Typical usage:
    from wayfinder.layout.loader import load_layout

    graph = load_layout("data/airport_layout.json")
"""

import json
import logging
from collections.abc import Hashable
from pathlib import Path
from typing import Any

import yaml

from wayfinder.layout.graph import LayoutError, LayoutGraph

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


def _reject_duplicate_keys(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    data: dict[str, Any] = {}
    for key, value in pairs:
        if key in data:
            raise LayoutError(f"Duplicate key in layout file: {key!r}")
        data[key] = value
    return data


class UniqueKeyLoader(yaml.SafeLoader):
    """Safe YAML loader that rejects repeated mapping keys."""

    def construct_mapping(self, node: yaml.MappingNode, deep: bool = False) -> dict[Any, Any]:
        seen: set[Any] = set()
        for key_node, _ in node.value:
            key = self.construct_object(key_node, deep=deep)
            # unhashable keys are reported by SafeLoader itself
            if not isinstance(key, Hashable):
                continue
            if key in seen:
                raise LayoutError(
                    f"Duplicate key in layout file: {key!r} (line {key_node.start_mark.line + 1})"
                )
            seen.add(key)
        return super().construct_mapping(node, deep=deep)


def read_layout_document(path: Path | str) -> dict[str, Any]:
    """Parse a layout file without validating it.

    Args:
        path: Path to a .json, .yaml or .yml file.

    Returns:
        The parsed document.

    Raises:
        FileNotFoundError: If the file does not exist.
        LayoutError: If the file cannot be parsed or repeats a key.
    """
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        try:
            if path.suffix.lower() in YAML_SUFFIXES:
                data = yaml.load(f, Loader=UniqueKeyLoader)
            else:
                data = json.load(f, object_pairs_hook=_reject_duplicate_keys)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise LayoutError(f"Cannot parse layout file {path}: {e}") from e

    if not isinstance(data, dict):
        raise LayoutError(f"Layout file {path} does not contain a mapping")
    return data


def load_layout(path: Path | str) -> LayoutGraph:
    """Load and validate a layout file.

    Args:
        path: Path to the layout file.

    Returns:
        Validated LayoutGraph.

    Raises:
        FileNotFoundError: If the file does not exist.
        LayoutError: If the document is malformed.
    """
    data = read_layout_document(path)
    graph = LayoutGraph.from_dict(data)
    logger.info("Loaded layout from %s", path)
    return graph
