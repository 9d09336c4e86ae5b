"""
Shared helpers for layout algorithms.

Layouts consume positions either as ``NodePosition`` records or as a mapping
from node id to an ``(x, y)`` pair, and always return ``NodePosition``
records in graph order.
"""

# Standard library imports
from typing import Dict, List, Mapping, Optional

# Third-party imports
import numpy as np

# Local imports
from ...analysis.centrality import degrees
from ...core.config import SORT_CHOICES
from ...core.types import Graph, Node, NodePosition, PositionDict, PositionInput
from ...utils.validation import validate_choice


def as_position_dict(positions: PositionInput) -> PositionDict:
    """
    Convert position input into a mapping of node id to float arrays.

    Raises:
        ValueError: If a coordinate is not numeric
    """
    if isinstance(positions, Mapping):
        items = positions.items()
    else:
        items = ((record.id, (record.x, record.y)) for record in positions)

    return {node_id: np.asarray(xy, dtype=float).reshape(2) for node_id, xy in items}


def resolve_positions(graph: Graph, positions: Optional[PositionInput] = None) -> PositionDict:
    """Positions for every node, falling back to each node's own coordinates."""
    given = as_position_dict(positions) if positions is not None else {}
    return {
        node.id: given[node.id] if node.id in given else np.array([node.x, node.y], dtype=float)
        for node in graph.nodes
    }


def to_position_records(graph: Graph, positions: PositionDict) -> List[NodePosition]:
    return [
        NodePosition(id=node_id, x=float(positions[node_id][0]), y=float(positions[node_id][1]))
        for node_id in graph.node_ids
        if node_id in positions
    ]


def order_nodes(graph: Graph, sort_by: Optional[str] = "degree") -> List[Node]:
    """
    Nodes in layout order.

    ``"degree"`` sorts by descending degree, ``"name"`` by label and None
    keeps graph order. Both sorts are stable, so ties keep graph order.

    Raises:
        ValueError: If ``sort_by`` is not a known ordering
    """
    validate_choice(sort_by, "sort_by", list(SORT_CHOICES))

    if sort_by == "degree":
        degree_map = degrees(graph)
        return sorted(graph.nodes, key=lambda node: degree_map[node.id], reverse=True)
    if sort_by == "name":
        return sorted(graph.nodes, key=lambda node: node.label)
    return list(graph.nodes)


def graph_bounds(positions: PositionInput) -> Dict[str, float]:
    """
    Bounding box of a set of positions.

    Returns:
        Dictionary with min_x, max_x, min_y and max_y; all zeros when empty
    """
    position_dict = as_position_dict(positions)
    if not position_dict:
        return {"min_x": 0.0, "max_x": 0.0, "min_y": 0.0, "max_y": 0.0}

    coords = np.vstack(list(position_dict.values()))
    min_x, min_y = coords.min(axis=0)
    max_x, max_y = coords.max(axis=0)
    return {
        "min_x": float(min_x),
        "max_x": float(max_x),
        "min_y": float(min_y),
        "max_y": float(max_y),
    }


__all__ = [
    "as_position_dict",
    "resolve_positions",
    "to_position_records",
    "order_nodes",
    "graph_bounds",
]
