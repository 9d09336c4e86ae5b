"""
CaseGraph Analytics Package

Graph analytics and layout engine for investigation graphs: given the
entities of a case and the relationships between them, it computes
structural metrics, shortest paths, centrality, communities and network
health, and produces 2-D node coordinates under several layout strategies.

This package provides:
- Normalization of raw entity/relationship records into graph snapshots
- Degree, closeness and (exact or sampled) betweenness centrality
- Components, bridges, articulation points, clustering and small-world metrics
- Seeded community detection and modularity scoring
- Force-directed, circular, grid, hierarchical and community layouts
- Simulated-annealing edge-crossing reduction

Modules:
    core: Types, configuration dataclasses and exceptions
    data: Normalization and adjacency structures
    analysis: Graph algorithms and health scoring
    visualization: Layout algorithms and node sizing
    report: Full-graph analysis reports
    utils: Shared utilities and progress tracking

Example:
    >>> from CaseGraph_Analytics import analyze_graph, load_config_from_dict
    >>>
    >>> config = load_config_from_dict({"analysis": {"mode": "fast"}})
    >>> report = analyze_graph(entities, relationships, config=config)
    >>> report["network_health_score"]["grade"]
"""

__version__ = "1.0.0"

from .analysis import (
    all_shortest_paths,
    approximate_betweenness_centrality,
    attach_metrics,
    average_path_length,
    basic_metrics,
    betweenness_centrality,
    calculate_centrality_metrics,
    calculate_connectivity_metrics,
    calculate_modularity,
    closeness_centrality,
    clustering_coefficient,
    community_summary,
    connected_components,
    degree_centrality,
    degrees,
    detect_communities,
    find_articulation_points,
    find_bridges,
    generate_recommendations,
    network_health_score,
    shortest_paths_from,
    small_world_metrics,
    top_central_nodes,
)
from .core import (
    AnalysisConfig,
    AnalysisMode,
    CaseGraphError,
    ComplexityBudgetExceeded,
    ConfigurationError,
    EngineConfig,
    Graph,
    Link,
    Node,
    NodePosition,
    load_config_from_dict,
)
from .data import build_adjacency, normalize, validate_graph
from .report import GraphAnalyzer, analyze_graph, empty_graph_analysis, export_analysis
from .utils import ProgressTracker
from .visualization import (
    ForceSimulation,
    circular_layout,
    community_layout,
    compute_layout,
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
    # Package metadata
    "__version__",
    # Types and configuration
    "Graph",
    "Node",
    "Link",
    "NodePosition",
    "EngineConfig",
    "AnalysisConfig",
    "AnalysisMode",
    "load_config_from_dict",
    # Exceptions
    "CaseGraphError",
    "ConfigurationError",
    "ComplexityBudgetExceeded",
    # Graph model
    "normalize",
    "build_adjacency",
    "validate_graph",
    # Paths
    "shortest_paths_from",
    "all_shortest_paths",
    # Metrics
    "degrees",
    "degree_centrality",
    "closeness_centrality",
    "betweenness_centrality",
    "approximate_betweenness_centrality",
    "calculate_centrality_metrics",
    "top_central_nodes",
    "attach_metrics",
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
    # Layouts
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
    # Reports
    "GraphAnalyzer",
    "analyze_graph",
    "empty_graph_analysis",
    "export_analysis",
    # Utilities
    "ProgressTracker",
]
