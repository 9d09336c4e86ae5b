"""
Path analysis module for shortest-path queries.

All queries run on the undirected adjacency structure produced by
:func:`~CaseGraph_Analytics.data.normalization.build_adjacency`. Edges cost
one unit unless a caller explicitly asks for weighted distances.

Enumerating every shortest path between two nodes can be exponential in
dense or regular graphs; pairwise callers such as betweenness centrality
should expect this to dominate their runtime.
"""

# Standard library imports
import math
from itertools import islice
from typing import Dict, Iterator, List, Optional, Tuple

# Third-party imports
import networkx as nx

# Local imports
from ..core.types import NodeId


def shortest_paths_from(
    adjacency: nx.Graph, source: NodeId, weighted: bool = False
) -> Dict[NodeId, float]:
    """
    Single-source shortest-path distances.

    Args:
        adjacency: Undirected adjacency structure
        source: Node to measure from
        weighted: Use each adjacency edge's ``weight`` instead of unit cost

    Returns:
        Dict[NodeId, float]: Distance to every node of the adjacency structure;
        0 for the source itself and ``math.inf`` for unreachable nodes
    """
    distances = dict.fromkeys(adjacency.nodes, math.inf)
    if source not in adjacency:
        return distances

    if weighted:
        lengths = nx.single_source_dijkstra_path_length(adjacency, source, weight="weight")
    else:
        lengths = nx.single_source_shortest_path_length(adjacency, source)

    for node, length in lengths.items():
        distances[node] = float(length)

    return distances


def iter_path_lengths(
    adjacency: nx.Graph, weighted: bool = False
) -> Iterator[Tuple[NodeId, Dict[NodeId, float]]]:
    """Yield ``(source, finite distances)`` for every node of the adjacency structure."""
    if weighted:
        yield from nx.all_pairs_dijkstra_path_length(adjacency, weight="weight")
    else:
        yield from nx.all_pairs_shortest_path_length(adjacency)


def all_shortest_paths(
    adjacency: nx.Graph,
    source: NodeId,
    target: NodeId,
    max_paths: Optional[int] = None,
) -> List[List[NodeId]]:
    """
    Enumerate every minimum-length path between two nodes.

    Paths are simple (no node repeats within one path).

    Args:
        adjacency: Undirected adjacency structure
        source: Path start
        target: Path end
        max_paths: Stop after this many paths (all paths when None)

    Returns:
        List[List[NodeId]]: Node-id sequences from source to target; empty when
        the nodes are unreachable, identical, or unknown
    """
    if source == target or source not in adjacency or target not in adjacency:
        return []

    try:
        paths = nx.all_shortest_paths(adjacency, source, target)
        return [list(path) for path in islice(paths, max_paths)]
    except nx.NetworkXNoPath:
        return []


def shortest_path(adjacency: nx.Graph, source: NodeId, target: NodeId) -> List[NodeId]:
    """
    One shortest path between two nodes, e.g. a contact path between entities.

    Returns:
        List[NodeId]: The path including both endpoints, ``[source]`` when
        source equals target, empty when unreachable or unknown
    """
    if source not in adjacency or target not in adjacency:
        return []

    try:
        return nx.shortest_path(adjacency, source, target)
    except nx.NetworkXNoPath:
        return []


__all__ = [
    "shortest_paths_from",
    "iter_path_lengths",
    "all_shortest_paths",
    "shortest_path",
]
