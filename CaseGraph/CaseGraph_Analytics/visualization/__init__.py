"""
Visualization layer for CaseGraph analytics.

This module computes node coordinates and sizes for the rendering layer;
it draws nothing itself.
"""

from .layout_engine import LAYOUT_NAMES, compute_layout
from .layouts import (
    ForceSimulation,
    circular_layout,
    community_layout,
    count_edge_crossings,
    do_edges_intersect,
    force_layout,
    graph_bounds,
    grid_layout,
    hierarchical_layout,
    node_sizes,
    optimize_layout,
)

__all__ = [
    "ForceSimulation",
    "force_layout",
    "circular_layout",
    "grid_layout",
    "hierarchical_layout",
    "community_layout",
    "optimize_layout",
    "count_edge_crossings",
    "do_edges_intersect",
    "graph_bounds",
    "node_sizes",
    "compute_layout",
    "LAYOUT_NAMES",
]
