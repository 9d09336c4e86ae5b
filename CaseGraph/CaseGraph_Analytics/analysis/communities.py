"""
Community detection module for partitioning entities into groups.

Two methods are available. ``seed_grow`` walks the nodes in graph order;
each unassigned node seeds a community and absorbs each still-unassigned
direct neighbour with a fixed probability. ``louvain`` runs the networkx
modularity-optimising Louvain pass. Both are reproducible for a fixed seed
and always return a partition of the node ids.
"""

# Standard library imports
import logging
import random
from typing import Any, Dict, List, Optional, Sequence

# Third-party imports
from networkx.algorithms import community

# Local imports
from ..core.config import COMMUNITY_METHODS
from ..core.types import Graph, NodeId
from ..data.normalization import build_adjacency
from ..utils.validation import validate_choice, validate_range
from .centrality import degrees

logger = logging.getLogger(__name__)


def _seed_grow(graph: Graph, rng: random.Random, absorb_probability: float) -> List[List[NodeId]]:
    adjacency = build_adjacency(graph)
    assigned = set()
    communities = []

    for node_id in graph.node_ids:
        if node_id in assigned:
            continue

        members = [node_id]
        assigned.add(node_id)
        for neighbor in adjacency[node_id]:
            if neighbor in assigned:
                continue
            if rng.random() < absorb_probability:
                members.append(neighbor)
                assigned.add(neighbor)

        communities.append(members)

    return communities


def _louvain(graph: Graph, seed: Optional[int]) -> List[List[NodeId]]:
    order = {node_id: index for index, node_id in enumerate(graph.node_ids)}
    partition = community.louvain_communities(build_adjacency(graph), seed=seed)

    communities = [sorted(members, key=order.__getitem__) for members in partition]
    communities.sort(key=lambda members: order[members[0]])
    return communities


def detect_communities(
    graph: Graph,
    seed: Optional[int] = None,
    absorb_probability: float = 0.7,
    method: str = "seed_grow",
) -> List[List[NodeId]]:
    """
    Partition node ids into communities.

    Args:
        graph: Normalized graph snapshot
        seed: Seed for the random generator; None draws fresh entropy
        absorb_probability: Chance that a seed absorbs each free neighbour (seed_grow only)
        method: ``"seed_grow"`` or ``"louvain"``

    Returns:
        List[List[NodeId]]: Communities; every node id appears in exactly one

    Raises:
        ValueError: If the method is unknown or the probability is outside [0, 1]
    """
    validate_choice(method, "method", list(COMMUNITY_METHODS))
    validate_range(absorb_probability, "absorb_probability", 0.0, 1.0)

    if graph.number_of_nodes() == 0:
        return []

    if method == "louvain":
        communities = _louvain(graph, seed)
    else:
        communities = _seed_grow(graph, random.Random(seed), absorb_probability)

    logger.debug(f"Detected {len(communities)} communities using {method}")
    return communities


def calculate_modularity(graph: Graph, communities: Sequence[Sequence[NodeId]]) -> float:
    """
    Modularity of a partition.

    ``sum over c of L_c / m - d_c^2 / (4 m^2)`` where ``m`` is the number of
    links, ``L_c`` the links with both endpoints in community c and ``d_c``
    the summed degree of its members. Returns 0 for a graph without links.
    """
    link_count = graph.number_of_links()
    if link_count == 0:
        return 0.0

    degree_map = degrees(graph)
    community_of = {}
    for index, members in enumerate(communities):
        for node_id in members:
            community_of[node_id] = index

    internal = [0] * len(communities)
    for link in graph.links:
        source_community = community_of.get(link.source)
        if source_community is not None and source_community == community_of.get(link.target):
            internal[source_community] += 1

    modularity = 0.0
    for index, members in enumerate(communities):
        total_degree = sum(degree_map.get(node_id, 0) for node_id in members)
        modularity += internal[index] / link_count - (total_degree ** 2) / (4 * link_count ** 2)

    return modularity


def community_summary(graph: Graph, communities: Sequence[Sequence[NodeId]]) -> Dict[str, Any]:
    """
    Describe a partition for reports.

    Returns:
        Dictionary containing:
            - communities (list): The partition as given
            - community_count (int): Number of communities
            - modularity (float): Modularity rounded to three decimals
            - community_stats (list): ``{id, size, nodes: [{id, name}]}`` per community
    """
    stats = []
    for index, members in enumerate(communities):
        nodes = []
        for node_id in members:
            node = graph.get_node(node_id)
            nodes.append({"id": node_id, "name": node.name if node is not None else None})
        stats.append({"id": index, "size": len(members), "nodes": nodes})

    return {
        "communities": [list(members) for members in communities],
        "community_count": len(communities),
        "modularity": round(calculate_modularity(graph, communities), 3),
        "community_stats": stats,
    }


__all__ = [
    "detect_communities",
    "calculate_modularity",
    "community_summary",
]
