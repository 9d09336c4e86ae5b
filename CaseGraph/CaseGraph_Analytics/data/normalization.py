"""
Graph normalization module for CaseGraph analytics.

This module turns raw entity/relationship records into a consistent
:class:`~CaseGraph_Analytics.core.types.Graph` snapshot and builds the
adjacency structures every analysis algorithm traverses.

Raw records may be mappings (as loaded from a database row or JSON payload)
or ``Node``/``Link`` instances. Links whose endpoints are missing from the
node set are dropped rather than reported as errors, because a live
investigation graph may transiently hold such references.
"""

# Standard library imports
import logging
import math
import random
from dataclasses import replace
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

# Third-party imports
import networkx as nx

# Local imports
from ..core.types import Graph, Link, Node, NodeId

RawNode = Union[Node, Mapping[str, Any]]
RawLink = Union[Link, Mapping[str, Any]]

_NODE_FIELDS = {"id", "x", "y", "type", "name", "attributes"}

# Relationship strength labels stored by the case-management layer
STRENGTH_WEIGHTS = {"weak": 1.0, "medium": 2.0, "strong": 3.0}


def _coordinate(value: Any, rng: random.Random, coordinate_box: float) -> float:
    if value is None:
        return rng.uniform(0.0, coordinate_box)
    number = float(value)
    return number if math.isfinite(number) else rng.uniform(0.0, coordinate_box)


def _endpoint_id(endpoint: Any) -> NodeId:
    # Simulations replace link endpoints with the node objects themselves
    if isinstance(endpoint, Node):
        return endpoint.id
    if isinstance(endpoint, Mapping):
        return endpoint["id"]
    return endpoint


def _coerce_node(raw: RawNode, rng: random.Random, coordinate_box: float) -> Node:
    if isinstance(raw, Node):
        return replace(
            raw,
            x=_coordinate(raw.x, rng, coordinate_box),
            y=_coordinate(raw.y, rng, coordinate_box),
            attributes=dict(raw.attributes),
        )

    if "id" not in raw:
        raise ValueError(f"Node record has no 'id': {dict(raw)!r}")

    attributes = dict(raw.get("attributes") or {})
    attributes.update({k: v for k, v in raw.items() if k not in _NODE_FIELDS})

    return Node(
        id=raw["id"],
        x=_coordinate(raw.get("x"), rng, coordinate_box),
        y=_coordinate(raw.get("y"), rng, coordinate_box),
        type=raw.get("type"),
        name=raw.get("name"),
        attributes=attributes,
    )


def _coerce_link(raw: RawLink) -> Link:
    if isinstance(raw, Link):
        return replace(
            raw, source=_endpoint_id(raw.source), target=_endpoint_id(raw.target)
        )

    source = raw.get("source", raw.get("from_entity"))
    target = raw.get("target", raw.get("to_entity"))

    weight = raw.get("weight")
    if weight is None:
        weight = STRENGTH_WEIGHTS.get(raw.get("strength"), 1.0)

    return Link(
        source=_endpoint_id(source),
        target=_endpoint_id(target),
        type=raw.get("type"),
        weight=float(weight),
        id=raw.get("id"),
    )


def _pair_key(link: Link) -> Tuple[str, str]:
    # Undirected key that also works for mixed str/int ids
    return tuple(sorted((repr(link.source), repr(link.target))))


def normalize(
    raw_nodes: Iterable[RawNode],
    raw_links: Iterable[RawLink],
    *,
    drop_self_loops: bool = False,
    merge_parallel_edges: bool = False,
    seed: Optional[int] = None,
    coordinate_box: float = 100.0,
    logger: Optional[logging.Logger] = None,
) -> Graph:
    """
    Normalize raw node and link records into a Graph snapshot.

    Nodes lacking finite ``x``/``y`` coordinates receive uniform-random
    coordinates in ``[0, coordinate_box)``. Links referencing unknown node
    ids are dropped. Input records are never mutated.

    Args:
        raw_nodes: Node records (mappings with at least an ``id``, or Node)
        raw_links: Link records (mappings with ``source``/``target``, or Link)
        drop_self_loops: Discard links whose source equals their target
        merge_parallel_edges: Keep only the first link between any node pair
        seed: Seed for the default-coordinate generator
        coordinate_box: Upper bound of generated coordinates
        logger: Optional logger instance

    Returns:
        Graph: Normalized snapshot with unique node ids and resolvable links

    Raises:
        ValueError: If a node record has no id or a coordinate is not numeric
        TypeError: If a coordinate has a non-numeric type

    Example:
        >>> graph = normalize([{"id": "A"}, {"id": "B"}], [{"source": "A", "target": "B"}])
        >>> graph.number_of_links()
        1
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    rng = random.Random(seed)

    nodes: List[Node] = []
    seen_ids = set()
    duplicate_ids = 0
    for raw in raw_nodes:
        node = _coerce_node(raw, rng, coordinate_box)
        if node.id in seen_ids:
            duplicate_ids += 1
            continue
        seen_ids.add(node.id)
        nodes.append(node)

    if duplicate_ids:
        logger.warning(f"Ignored {duplicate_ids} node record(s) with duplicate ids")

    links: List[Link] = []
    seen_pairs = set()
    dangling = self_loops = parallel = 0
    for raw in raw_links:
        link = _coerce_link(raw)

        if link.source not in seen_ids or link.target not in seen_ids:
            dangling += 1
            continue

        if drop_self_loops and link.is_self_loop:
            self_loops += 1
            continue

        if merge_parallel_edges:
            key = _pair_key(link)
            if key in seen_pairs:
                parallel += 1
                continue
            seen_pairs.add(key)

        links.append(link)

    if dangling:
        logger.debug(f"Dropped {dangling} link(s) referencing unknown nodes")
    if self_loops:
        logger.debug(f"Dropped {self_loops} self-loop link(s)")
    if parallel:
        logger.debug(f"Merged {parallel} parallel link(s)")

    logger.debug(f"Normalized graph: {len(nodes)} nodes, {len(links)} links")

    return Graph(nodes=nodes, links=links)


def build_adjacency(graph: Graph) -> nx.Graph:
    """
    Build the undirected adjacency structure for a graph.

    Each link adds both endpoints to each other's neighbour set. Parallel
    links collapse onto one adjacency edge carrying the smallest ``weight``;
    a self-loop makes a node its own neighbour.

    Args:
        graph: Normalized graph snapshot

    Returns:
        nx.Graph: Simple undirected graph; ``adjacency[u]`` iterates u's neighbours
    """
    adjacency = nx.Graph()
    adjacency.add_nodes_from(graph.node_ids)

    for link in graph.links:
        u, v = link.source, link.target
        if adjacency.has_edge(u, v):
            data = adjacency[u][v]
            data["weight"] = min(data["weight"], link.weight)
        else:
            adjacency.add_edge(u, v, weight=link.weight)

    return adjacency


def to_multigraph(graph: Graph) -> nx.MultiGraph:
    """
    Build an undirected multigraph keeping every link.

    Node attributes carry ``type`` and ``name``; each edge carries the link
    ``id``, ``type`` and ``weight``. Used where link multiplicity matters
    (degree counting, modularity).

    Args:
        graph: Normalized graph snapshot

    Returns:
        nx.MultiGraph: One edge per link
    """
    multigraph = nx.MultiGraph()
    for node in graph.nodes:
        multigraph.add_node(node.id, type=node.type, name=node.name)

    for link in graph.links:
        multigraph.add_edge(
            link.source, link.target, link_id=link.id, type=link.type, weight=link.weight
        )

    return multigraph


def validate_graph(
    raw_nodes: Iterable[RawNode], raw_links: Iterable[RawLink]
) -> Dict[str, Any]:
    """
    Inspect raw records without normalizing them.

    Dangling references are reported as errors; duplicate node ids,
    self-loops and duplicate links (same node pair and type) as warnings.

    Args:
        raw_nodes: Node records
        raw_links: Link records

    Returns:
        Dictionary containing:
            - is_valid (bool): True when there are no errors
            - errors (list[str]): Dangling reference messages
            - warnings (list[str]): Self-loop and duplicate summaries
            - stats (dict): node_count, link_count, self_loops, duplicates
    """
    node_ids = []
    for raw in raw_nodes:
        node_ids.append(raw.id if isinstance(raw, Node) else raw.get("id"))
    id_set = set(node_ids)

    links = [_coerce_link(raw) for raw in raw_links]

    errors = []
    warnings = []

    for link in links:
        if link.source not in id_set:
            errors.append(f"Link {link.id} references non-existent source node {link.source}")
        if link.target not in id_set:
            errors.append(f"Link {link.id} references non-existent target node {link.target}")

    duplicate_node_ids = len(node_ids) - len(id_set)
    if duplicate_node_ids:
        warnings.append(f"{duplicate_node_ids} duplicate node id(s) detected")

    self_loops = sum(1 for link in links if link.is_self_loop)
    if self_loops:
        warnings.append(f"{self_loops} self-referencing link(s) detected")

    seen = set()
    duplicates = 0
    for link in links:
        key = (_pair_key(link), link.type)
        if key in seen:
            duplicates += 1
        else:
            seen.add(key)
    if duplicates:
        warnings.append(f"{duplicates} duplicate link(s) detected")

    return {
        "is_valid": not errors,
        "errors": errors,
        "warnings": warnings,
        "stats": {
            "node_count": len(node_ids),
            "link_count": len(links),
            "self_loops": self_loops,
            "duplicates": duplicates,
        },
    }


__all__ = [
    "normalize",
    "build_adjacency",
    "to_multigraph",
    "validate_graph",
    "STRENGTH_WEIGHTS",
]
