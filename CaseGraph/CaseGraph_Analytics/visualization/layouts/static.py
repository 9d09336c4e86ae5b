"""
One-shot placement layouts.

Circular, grid, hierarchical and community layouts place every node in a
single pass with no iteration. Ordering is deterministic: the same graph
and options always produce the same positions.
"""

# Standard library imports
import math
from typing import Dict, List, Optional, Sequence

# Third-party imports
import numpy as np

# Local imports
from ...core.types import Graph, Node, NodeId, NodePosition
from ...utils.validation import validate_positive_integer
from .base import order_nodes, to_position_records


def _type_groups(nodes: Sequence[Node]) -> List[List[Node]]:
    # Types in order of first appearance, members keep the given order
    groups: Dict[Optional[str], List[Node]] = {}
    for node in nodes:
        groups.setdefault(node.type, []).append(node)
    return list(groups.values())


def _ring_positions(
    nodes: Sequence[Node], radius: float, center_x: float, center_y: float
) -> Dict[NodeId, np.ndarray]:
    positions = {}
    for index, node in enumerate(nodes):
        angle = 2 * math.pi * index / len(nodes)
        positions[node.id] = np.array(
            [center_x + radius * math.cos(angle), center_y + radius * math.sin(angle)]
        )
    return positions


def circular_layout(
    graph: Graph,
    radius: float = 200.0,
    center_x: float = 400.0,
    center_y: float = 300.0,
    sort_by: Optional[str] = "degree",
    group_by_type: bool = False,
) -> List[NodePosition]:
    """
    Place nodes evenly around a circle.

    The first node in layout order sits at angle 0 (to the right of the
    centre) and the rest follow counter-clockwise in the plane. With
    ``group_by_type`` each node type gets its own concentric ring: the
    i-th type (in order of first appearance in layout order, None counting
    as a type) sits on radius ``(i + 1) * radius / type_count``, so the
    last type lies on the outer circle.

    Args:
        graph: Normalized graph snapshot
        radius: Circle radius
        center_x: Horizontal centre
        center_y: Vertical centre
        sort_by: ``"degree"`` (descending), ``"name"`` or None for graph order
        group_by_type: Put each node type on its own ring

    Returns:
        List[NodePosition]: One record per node, in graph order
    """
    ordered = order_nodes(graph, sort_by)

    if not group_by_type:
        return to_position_records(graph, _ring_positions(ordered, radius, center_x, center_y))

    groups = _type_groups(ordered)
    positions: Dict[NodeId, np.ndarray] = {}
    for index, group in enumerate(groups):
        ring_radius = (index + 1) * radius / len(groups)
        positions.update(_ring_positions(group, ring_radius, center_x, center_y))

    return to_position_records(graph, positions)


def grid_layout(
    graph: Graph,
    spacing: float = 80.0,
    start_x: float = 0.0,
    start_y: float = 0.0,
    sort_by: Optional[str] = "degree",
    group_by_type: bool = False,
) -> List[NodePosition]:
    """
    Place nodes row-major on a grid of ``ceil(sqrt(N))`` columns.

    ``group_by_type`` sorts nodes by type name first (untyped nodes lead),
    keeping ``sort_by`` order inside each type.
    """
    ordered = order_nodes(graph, sort_by)
    if not ordered:
        return []

    if group_by_type:
        ordered = sorted(ordered, key=lambda node: "" if node.type is None else str(node.type))

    columns = math.ceil(math.sqrt(len(ordered)))

    positions = {}
    for index, node in enumerate(ordered):
        row, column = divmod(index, columns)
        positions[node.id] = np.array([start_x + column * spacing, start_y + row * spacing])

    return to_position_records(graph, positions)


def hierarchical_layout(
    graph: Graph,
    levels: int = 3,
    level_height: float = 100.0,
    node_spacing: float = 100.0,
    start_y: float = 0.0,
) -> List[NodePosition]:
    """
    Place degree-sorted nodes on horizontal bands.

    Nodes are split into bands of ``ceil(N / levels)``, highest degree first;
    each band is a row centred at x = 0, ``level_height`` below the previous
    one. Fewer than ``levels`` bands are used when N is small.

    Args:
        graph: Normalized graph snapshot
        levels: Number of bands
        level_height: Vertical distance between bands
        node_spacing: Horizontal distance between nodes of a band
        start_y: Vertical position of the first band

    Returns:
        List[NodePosition]: One record per node, in graph order
    """
    validate_positive_integer(levels, "levels")

    ordered = order_nodes(graph, "degree")
    if not ordered:
        return []

    per_level = math.ceil(len(ordered) / levels)

    positions = {}
    for band_start in range(0, len(ordered), per_level):
        band = ordered[band_start:band_start + per_level]
        level = band_start // per_level
        offset = (len(band) - 1) / 2
        for slot, node in enumerate(band):
            positions[node.id] = np.array(
                [(slot - offset) * node_spacing, start_y + level * level_height]
            )

    return to_position_records(graph, positions)


def community_layout(
    graph: Graph,
    communities: Sequence[Sequence[NodeId]],
    radius: float = 200.0,
    member_radius: float = 40.0,
    center_x: float = 400.0,
    center_y: float = 300.0,
) -> List[NodePosition]:
    """
    Cluster each community around its own centre.

    Community centres sit evenly on a circle of ``radius``; members sit
    evenly on a circle of ``member_radius`` around their centre, and a
    single-member community sits on its centre. Nodes missing from
    ``communities`` are treated as single-member communities after the
    given ones.
    """
    groups: List[List[NodeId]] = []
    assigned = set()
    for members in communities:
        group = [node_id for node_id in members if graph.has_node(node_id) and node_id not in assigned]
        assigned.update(group)
        if group:
            groups.append(group)
    groups.extend([node_id] for node_id in graph.node_ids if node_id not in assigned)

    positions: Dict[NodeId, np.ndarray] = {}
    for index, group in enumerate(groups):
        angle = 2 * math.pi * index / len(groups)
        group_center = np.array(
            [center_x + radius * math.cos(angle), center_y + radius * math.sin(angle)]
        )

        if len(group) == 1:
            positions[group[0]] = group_center
            continue

        for slot, node_id in enumerate(group):
            member_angle = 2 * math.pi * slot / len(group)
            positions[node_id] = group_center + member_radius * np.array(
                [math.cos(member_angle), math.sin(member_angle)]
            )

    return to_position_records(graph, positions)


__all__ = [
    "circular_layout",
    "grid_layout",
    "hierarchical_layout",
    "community_layout",
]
