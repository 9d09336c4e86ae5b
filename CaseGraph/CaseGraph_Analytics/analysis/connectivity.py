"""
Structural analysis module for graph connectivity metrics.

This module provides functions for connected components, basic graph
statistics, clustering coefficients, path-length statistics, bridges and
articulation points, and the small-world comparison against a random
baseline graph.

Bridges and articulation points use the linear-time chain decomposition
from networkx rather than removing each link or node in turn; both report
exactly the links and nodes whose removal increases the component count.
"""

# Standard library imports
import logging
from collections import Counter
from typing import Any, Dict, List, Optional

# Third-party imports
import networkx as nx

# Local imports
from ..core.types import Graph, Link, Node, NodeId
from ..data.normalization import build_adjacency
from ..utils.math import safe_divide
from ..utils.progress import ProgressTracker
from .centrality import degrees
from .paths import iter_path_lengths

UNKNOWN_TYPE = "unknown"


def _simple_adjacency(graph: Graph) -> nx.Graph:
    # Self-loops never affect connectivity or triangles
    adjacency = build_adjacency(graph)
    adjacency.remove_edges_from(list(nx.selfloop_edges(adjacency)))
    return adjacency


def connected_components(graph: Graph) -> List[List[NodeId]]:
    """
    Partition node ids into connected components.

    Components are sorted largest first; ties keep the order in which their
    first node appears in the graph, and members keep graph order.

    Args:
        graph: Normalized graph snapshot

    Returns:
        List[List[NodeId]]: Components as node id lists
    """
    order = {node_id: index for index, node_id in enumerate(graph.node_ids)}
    components = [
        sorted(component, key=order.__getitem__)
        for component in nx.connected_components(build_adjacency(graph))
    ]
    components.sort(key=lambda component: (-len(component), order[component[0]]))
    return components


def basic_metrics(graph: Graph) -> Dict[str, Any]:
    """
    Size, density and degree statistics for a graph.

    Density is ``links / (N(N-1)/2)`` and 0 when N <= 1. Isolated nodes are
    nodes of degree 0; a node with only a self-loop is not isolated.

    Returns:
        Dictionary containing node_count, link_count, density, avg_degree,
        max_degree, min_degree, isolated_node_count, isolated_nodes,
        node_type_distribution and link_type_distribution
    """
    node_count = graph.number_of_nodes()
    link_count = graph.number_of_links()
    degree_map = degrees(graph)
    degree_values = list(degree_map.values())

    isolated_nodes = [node_id for node_id, degree in degree_map.items() if degree == 0]

    node_types = Counter(node.type or UNKNOWN_TYPE for node in graph.nodes)
    link_types = Counter(link.type or UNKNOWN_TYPE for link in graph.links)

    return {
        "node_count": node_count,
        "link_count": link_count,
        "density": safe_divide(link_count, node_count * (node_count - 1) / 2),
        "avg_degree": safe_divide(sum(degree_values), node_count),
        "max_degree": max(degree_values, default=0),
        "min_degree": min(degree_values, default=0),
        "isolated_node_count": len(isolated_nodes),
        "isolated_nodes": isolated_nodes,
        "node_type_distribution": dict(node_types),
        "link_type_distribution": dict(link_types),
    }


def _mean_local_clustering(adjacency: nx.Graph) -> float:
    local = nx.clustering(adjacency)
    return safe_divide(sum(local.values()), len(local))


def clustering_coefficient(graph: Graph) -> Dict[str, Any]:
    """
    Local and global clustering coefficients.

    A node of degree below 2 scores 0; otherwise its score is the number of
    links among its neighbours over ``k(k-1)/2``. The global coefficient is
    the unweighted mean of every local value, including zeros.

    Returns:
        Dictionary containing:
            - local (dict): Coefficient per node id
            - global (float): Mean of the local coefficients
            - triangle_count (int): Distinct triangles in the graph
            - transitivity (float): Closed triplets over all triplets
    """
    adjacency = _simple_adjacency(graph)
    if adjacency.number_of_nodes() == 0:
        return {"local": {}, "global": 0.0, "triangle_count": 0, "transitivity": 0.0}

    local = {node: float(value) for node, value in nx.clustering(adjacency).items()}

    return {
        "local": local,
        "global": safe_divide(sum(local.values()), len(local)),
        "triangle_count": sum(nx.triangles(adjacency).values()) // 3,
        "transitivity": float(nx.transitivity(adjacency)),
    }


def _path_length_stats(adjacency: nx.Graph, weighted: bool = False) -> Dict[str, Any]:
    distribution: Counter = Counter()
    visited = set()

    for source, lengths in iter_path_lengths(adjacency, weighted=weighted):
        visited.add(source)
        for target, length in lengths.items():
            # Each unordered pair once
            if target not in visited:
                distribution[length] += 1

    total_paths = sum(distribution.values())
    total_length = sum(length * count for length, count in distribution.items())

    return {
        "average": safe_divide(total_length, total_paths),
        "diameter": max(distribution, default=0),
        "distribution": dict(sorted(distribution.items())),
        "total_paths": total_paths,
    }


def average_path_length(graph: Graph, weighted: bool = False) -> Dict[str, Any]:
    """
    Mean and maximum finite distance over unordered node pairs.

    Unreachable pairs are excluded from the mean, the diameter and the
    distribution. A graph with no reachable pair reports zeros.

    Args:
        graph: Normalized graph snapshot
        weighted: Measure distances with link weights

    Returns:
        Dictionary containing:
            - average (float): Mean finite distance
            - diameter (float): Largest finite distance
            - distribution (dict): Pair count per distance
            - total_paths (int): Number of reachable pairs
    """
    return _path_length_stats(build_adjacency(graph), weighted=weighted)


def find_bridges(graph: Graph, logger: Optional[logging.Logger] = None) -> List[Link]:
    """
    Links whose removal increases the number of connected components.

    Self-loops and links with a parallel twin are never bridges.

    Args:
        graph: Normalized graph snapshot
        logger: Optional logger instance

    Returns:
        List[Link]: Bridge links in graph order
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    if graph.number_of_links() == 0:
        return []

    multiplicity = Counter(
        frozenset(link.endpoints()) for link in graph.links if not link.is_self_loop
    )

    with ProgressTracker(
        total=1,
        title=f"Searching bridges among {graph.number_of_links()} links",
        logger=logger,
    ) as tracker:
        bridge_pairs = {frozenset(edge) for edge in nx.bridges(_simple_adjacency(graph))}
        tracker.update(1)

    bridges = [
        link
        for link in graph.links
        if not link.is_self_loop
        and frozenset(link.endpoints()) in bridge_pairs
        and multiplicity[frozenset(link.endpoints())] == 1
    ]

    logger.debug(f"Found {len(bridges)} bridge link(s)")
    return bridges


def find_articulation_points(graph: Graph) -> List[Node]:
    """Nodes whose removal increases the number of connected components, in graph order."""
    if graph.number_of_nodes() < 3:
        return []

    cut_nodes = set(nx.articulation_points(_simple_adjacency(graph)))
    return [node for node in graph.nodes if node.id in cut_nodes]


def small_world_metrics(graph: Graph, seed: Optional[int] = None) -> Dict[str, Any]:
    """
    Compare clustering and path length against an Erdos-Renyi baseline.

    The baseline is a G(n, m) random graph with the same node count and the
    same number of distinct non-loop node pairs. ``sigma`` is
    ``clustering_ratio / path_length_ratio``; a zero baseline value gives a
    ratio of 0. The small-world thresholds are heuristic.

    Args:
        graph: Normalized graph snapshot
        seed: Seed for the random baseline

    Returns:
        Dictionary containing clustering, path_length, random_clustering,
        random_path_length, clustering_ratio, path_length_ratio, sigma and
        is_small_world
    """
    adjacency = _simple_adjacency(graph)
    node_count = adjacency.number_of_nodes()
    edge_count = adjacency.number_of_edges()

    clustering = _mean_local_clustering(adjacency)
    path_length = _path_length_stats(adjacency)["average"]

    if node_count < 3 or edge_count == 0:
        random_clustering = random_path_length = 0.0
    else:
        baseline = nx.gnm_random_graph(node_count, edge_count, seed=seed)
        random_clustering = _mean_local_clustering(baseline)
        random_path_length = _path_length_stats(baseline)["average"]

    clustering_ratio = safe_divide(clustering, random_clustering)
    path_length_ratio = safe_divide(path_length, random_path_length)
    sigma = safe_divide(clustering_ratio, path_length_ratio)

    return {
        "clustering": clustering,
        "path_length": path_length,
        "random_clustering": random_clustering,
        "random_path_length": random_path_length,
        "clustering_ratio": clustering_ratio,
        "path_length_ratio": path_length_ratio,
        "sigma": sigma,
        "is_small_world": sigma > 1 and clustering_ratio > 1 and path_length_ratio <= 2,
    }


def calculate_connectivity_metrics(
    graph: Graph, logger: Optional[logging.Logger] = None
) -> Dict[str, Any]:
    """
    Summarize how well a case graph holds together.

    Returns ``component_count``, ``largest_component_size``,
    ``largest_component_percent`` (share of all nodes, 0-100),
    ``isolated_count``, ``clustering`` (global coefficient), ``density`` and
    ``is_connected``. An empty graph yields zeros and logs a warning.
    """
    logger = logger or logging.getLogger(__name__)
    total = graph.number_of_nodes()

    if not total:
        logger.warning("Empty graph given, connectivity summary is all zeros")
        return {
            "component_count": 0,
            "largest_component_size": 0,
            "largest_component_percent": 0.0,
            "isolated_count": 0,
            "clustering": 0.0,
            "density": 0.0,
            "is_connected": False,
        }

    components = connected_components(graph)
    basic = basic_metrics(graph)
    summary = {
        "component_count": len(components),
        "largest_component_size": len(components[0]),
        "largest_component_percent": 100.0 * len(components[0]) / total,
        "isolated_count": basic["isolated_node_count"],
        "clustering": clustering_coefficient(graph)["global"],
        "density": basic["density"],
        "is_connected": len(components) == 1,
    }
    logger.debug(
        f"Connectivity: {len(components)} components, largest holds "
        f"{summary['largest_component_percent']:.1f}% of {total} nodes"
    )
    return summary


__all__ = [
    "connected_components",
    "basic_metrics",
    "clustering_coefficient",
    "average_path_length",
    "find_bridges",
    "find_articulation_points",
    "small_world_metrics",
    "calculate_connectivity_metrics",
]
