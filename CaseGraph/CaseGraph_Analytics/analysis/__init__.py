"""
Analysis layer for CaseGraph analytics.

This module provides the graph algorithms run over a normalized snapshot:
shortest paths, centrality metrics, structural analysis, community
detection and network health scoring.
"""

from .centrality import (
    approximate_betweenness_centrality,
    attach_metrics,
    betweenness_centrality,
    calculate_centrality_metrics,
    closeness_centrality,
    degree_centrality,
    degrees,
    log_centrality_summary,
    top_central_nodes,
)
from .communities import calculate_modularity, community_summary, detect_communities
from .connectivity import (
    average_path_length,
    basic_metrics,
    calculate_connectivity_metrics,
    clustering_coefficient,
    connected_components,
    find_articulation_points,
    find_bridges,
    small_world_metrics,
)
from .health import generate_recommendations, health_grade, network_health_score
from .paths import all_shortest_paths, iter_path_lengths, shortest_path, shortest_paths_from

__all__ = [
    # Paths
    "shortest_paths_from",
    "iter_path_lengths",
    "all_shortest_paths",
    "shortest_path",
    # Centrality
    "degrees",
    "degree_centrality",
    "closeness_centrality",
    "betweenness_centrality",
    "approximate_betweenness_centrality",
    "top_central_nodes",
    "calculate_centrality_metrics",
    "attach_metrics",
    "log_centrality_summary",
    # Structure
    "connected_components",
    "basic_metrics",
    "clustering_coefficient",
    "average_path_length",
    "find_bridges",
    "find_articulation_points",
    "small_world_metrics",
    "calculate_connectivity_metrics",
    # Communities
    "detect_communities",
    "calculate_modularity",
    "community_summary",
    # Health
    "network_health_score",
    "generate_recommendations",
    "health_grade",
]
