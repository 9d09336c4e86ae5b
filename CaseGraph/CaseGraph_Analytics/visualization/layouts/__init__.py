"""
Layout algorithms for CaseGraph analytics.

Modules:
    base: Position conversion, node ordering and bounds
    force: Force-directed simulation
    static: Circular, grid, hierarchical and community placement
    optimization: Crossing counting and simulated-annealing reduction
    sizing: Metric-driven node sizes
"""

from .base import as_position_dict, graph_bounds, order_nodes
from .force import ForceSimulation, force_layout
from .optimization import count_edge_crossings, do_edges_intersect, layout_cost, optimize_layout
from .sizing import node_sizes
from .static import circular_layout, community_layout, grid_layout, hierarchical_layout

__all__ = [
    # Force-directed
    "ForceSimulation",
    "force_layout",
    # One-shot placement
    "circular_layout",
    "grid_layout",
    "hierarchical_layout",
    "community_layout",
    # Crossing reduction
    "optimize_layout",
    "count_edge_crossings",
    "do_edges_intersect",
    "layout_cost",
    # Helpers
    "as_position_dict",
    "graph_bounds",
    "order_nodes",
    "node_sizes",
]
