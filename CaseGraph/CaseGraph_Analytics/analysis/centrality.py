"""
Centrality calculation algorithms for network analysis.

This module provides functions for calculating degree, closeness and
betweenness centrality on a normalized graph, ranking the most central
entities, and attaching computed metrics back onto node records.

Every centrality map is keyed by every node id of the graph (a score of 0
is explicit), except degree and closeness centrality on graphs of at most
one node, which return an empty map.
"""

# Standard library imports
import logging
from dataclasses import replace
from typing import Any, Dict, Iterable, List, Mapping, Optional

# Third-party imports
import networkx as nx
import pandas as pd

# Local imports
from ..core.config import AnalysisConfig
from ..core.exceptions import ComplexityBudgetExceeded
from ..core.types import Graph, NodeId
from ..data.normalization import build_adjacency, to_multigraph
from ..utils.progress import ProgressTracker
from ..utils.validation import validate_positive_integer
from .paths import iter_path_lengths

CENTRALITY_METRICS = ("degree", "closeness", "betweenness")


def degrees(graph: Graph) -> Dict[NodeId, int]:
    """
    Count incident links per node.

    Both endpoints of every link are incremented, so a self-loop adds 2 to
    its node and parallel links are each counted.
    """
    return dict(to_multigraph(graph).degree())


def degree_centrality(graph: Graph) -> Dict[NodeId, float]:
    """Degree normalized by ``N - 1``; empty for graphs of at most one node."""
    node_count = graph.number_of_nodes()
    if node_count <= 1:
        return {}

    return {node: degree / (node_count - 1) for node, degree in degrees(graph).items()}


def closeness_centrality(graph: Graph, weighted: bool = False) -> Dict[NodeId, float]:
    """
    Closeness centrality per node.

    A node scores ``reachable / sum(finite distances)`` over the other nodes
    it can reach; nodes that reach nothing score 0. Disconnected graphs are
    handled per component rather than treated as infinitely distant.

    Args:
        graph: Normalized graph snapshot
        weighted: Measure distances with link weights

    Returns:
        Dict[NodeId, float]: Closeness per node, empty for graphs of at most one node
    """
    if graph.number_of_nodes() <= 1:
        return {}

    adjacency = build_adjacency(graph)
    centrality = dict.fromkeys(graph.node_ids, 0.0)

    for source, lengths in iter_path_lengths(adjacency, weighted=weighted):
        reachable = len(lengths) - 1
        total = sum(lengths.values())
        if reachable > 0 and total > 0:
            centrality[source] = reachable / total

    return centrality


def _guard_exact(graph: Graph, max_nodes: Optional[int], operation: str) -> None:
    if max_nodes is not None and graph.number_of_nodes() > max_nodes:
        raise ComplexityBudgetExceeded(operation, graph.number_of_nodes(), max_nodes)


def betweenness_centrality(
    graph: Graph,
    max_nodes: Optional[int] = None,
    logger: Optional[logging.Logger] = None,
) -> Dict[NodeId, float]:
    """
    Exact betweenness centrality.

    For every unordered pair (s, t) each shortest path contributes
    ``1 / |paths(s, t)|`` to every strictly intermediate node; totals are
    normalized by ``(N-1)(N-2)/2``.

    Args:
        graph: Normalized graph snapshot
        max_nodes: Node budget; exceeding it raises instead of running
        logger: Optional logger instance

    Returns:
        Dict[NodeId, float]: Betweenness for every node id

    Raises:
        ComplexityBudgetExceeded: If ``max_nodes`` is set and exceeded
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    _guard_exact(graph, max_nodes, "Exact betweenness centrality")

    if graph.number_of_nodes() < 3:
        return dict.fromkeys(graph.node_ids, 0.0)

    adjacency = build_adjacency(graph)

    with ProgressTracker(
        total=1,
        title=f"Calculating betweenness centrality on {graph.number_of_nodes()} nodes",
        logger=logger,
    ) as tracker:
        logger.debug("Using exact betweenness centrality calculation")
        betweenness = nx.betweenness_centrality(adjacency, normalized=True)
        tracker.update(1)

    return {node: betweenness[node] for node in graph.node_ids}


def approximate_betweenness_centrality(
    graph: Graph,
    sample_size: int,
    seed: Optional[int] = 123,
    logger: Optional[logging.Logger] = None,
) -> Dict[NodeId, float]:
    """
    Sampled betweenness centrality for large graphs.

    Shortest paths are accumulated from ``sample_size`` randomly chosen pivot
    sources and rescaled to the exact normalization. With ``sample_size``
    of at least N the result equals the exact computation.

    Args:
        graph: Normalized graph snapshot
        sample_size: Number of pivot sources
        seed: Seed for pivot selection
        logger: Optional logger instance

    Returns:
        Dict[NodeId, float]: Estimated betweenness for every node id
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    validate_positive_integer(sample_size, "sample_size")

    node_count = graph.number_of_nodes()
    if node_count < 3:
        return dict.fromkeys(graph.node_ids, 0.0)

    k_sample = min(sample_size, node_count)
    logger.debug(f"Using approximate betweenness centrality with k={k_sample} samples")

    with ProgressTracker(
        total=1,
        title=f"Calculating sampled betweenness centrality on {node_count} nodes",
        logger=logger,
    ) as tracker:
        betweenness = nx.betweenness_centrality(
            build_adjacency(graph), k=k_sample, normalized=True, seed=seed
        )
        tracker.update(1)

    return {node: betweenness[node] for node in graph.node_ids}


def top_central_nodes(
    graph: Graph, centralities: Mapping[str, Mapping[NodeId, float]], top_n: int = 5
) -> Dict[str, List[Dict[str, Any]]]:
    """
    Rank the most central nodes per metric and overall.

    The overall ranking gives each node ``(len - rank) / len`` points per
    metric list it appears in and sorts by the summed score.

    Args:
        graph: Normalized graph snapshot
        centralities: Maps keyed by metric name (degree, closeness, betweenness)
        top_n: Length of each ranking

    Returns:
        Dictionary with ``by_degree``, ``by_closeness``, ``by_betweenness``
        and ``overall`` lists of ``{id, name, value, metric}`` /
        ``{id, name, combined_score}`` records
    """
    df = pd.DataFrame(
        {
            metric: pd.Series(dict(centralities.get(metric, {})), dtype=float)
            for metric in CENTRALITY_METRICS
        }
    )
    df = df.reindex(graph.node_ids).fillna(0.0)

    def _name(node_id: NodeId) -> str:
        node = graph.get_node(node_id)
        return node.label if node is not None else str(node_id)

    rankings: Dict[str, List[Dict[str, Any]]] = {}
    for metric in CENTRALITY_METRICS:
        top = df.sort_values(metric, ascending=False, kind="mergesort").head(top_n)
        rankings[f"by_{metric}"] = [
            {"id": node_id, "name": _name(node_id), "value": float(value), "metric": metric}
            for node_id, value in top[metric].items()
        ]

    scores: Dict[NodeId, float] = {}
    for metric in CENTRALITY_METRICS:
        ranked = rankings[f"by_{metric}"]
        for index, entry in enumerate(ranked):
            scores[entry["id"]] = scores.get(entry["id"], 0.0) + (len(ranked) - index) / len(ranked)

    overall = sorted(scores.items(), key=lambda item: item[1], reverse=True)[:top_n]
    rankings["overall"] = [
        {"id": node_id, "name": _name(node_id), "combined_score": round(score, 3)}
        for node_id, score in overall
    ]

    return rankings


def calculate_centrality_metrics(
    graph: Graph,
    config: Optional[AnalysisConfig] = None,
    logger: Optional[logging.Logger] = None,
) -> Dict[str, Any]:
    """
    Calculate degree, closeness and betweenness centrality with rankings.

    Betweenness switches to the sampled variant when the analysis mode asks
    for it (always in fast mode, above ``sampling_threshold`` in medium mode).

    Args:
        graph: Normalized graph snapshot
        config: Analysis configuration, defaults to full mode
        logger: Optional logger instance

    Returns:
        Dictionary containing:
            - degree_centrality, closeness_centrality, betweenness_centrality
            - betweenness_sampled (bool): Whether betweenness was estimated
            - top_central_nodes (dict): Rankings from :func:`top_central_nodes`
    """
    if logger is None:
        logger = logging.getLogger(__name__)
    if config is None:
        config = AnalysisConfig()

    sampled = config.should_sample(graph.number_of_nodes())
    if sampled:
        betweenness = approximate_betweenness_centrality(
            graph, config.sample_size, seed=config.sample_seed, logger=logger
        )
    else:
        betweenness = betweenness_centrality(
            graph, max_nodes=config.max_exact_nodes, logger=logger
        )

    centralities = {
        "degree": degree_centrality(graph),
        "closeness": closeness_centrality(graph),
        "betweenness": betweenness,
    }

    return {
        "degree_centrality": centralities["degree"],
        "closeness_centrality": centralities["closeness"],
        "betweenness_centrality": betweenness,
        "betweenness_sampled": sampled,
        "top_central_nodes": top_central_nodes(graph, centralities, config.top_n),
    }


def attach_metrics(
    graph: Graph,
    communities: Optional[Iterable[Iterable[NodeId]]] = None,
    **metric_maps: Mapping[NodeId, Any],
) -> Graph:
    """
    Return a copy of the graph whose nodes carry computed metrics.

    Each keyword becomes a node attribute (``degree=degrees(graph)`` sets
    ``attributes["degree"]``); ``communities`` sets ``attributes["community"]``
    to the index of the node's community. The input graph is not modified.
    """
    community_of: Dict[NodeId, int] = {}
    for index, members in enumerate(communities or []):
        for node_id in members:
            community_of[node_id] = index

    nodes = []
    for node in graph.nodes:
        attributes = dict(node.attributes)
        for name, values in metric_maps.items():
            if node.id in values:
                attributes[name] = values[node.id]
        if node.id in community_of:
            attributes["community"] = community_of[node.id]
        nodes.append(replace(node, attributes=attributes))

    return Graph(nodes=nodes, links=list(graph.links))


def log_centrality_summary(
    centralities: Mapping[str, Mapping[NodeId, float]], logger: logging.Logger
) -> None:
    """Log the ten most central nodes for each metric."""
    logger.info("---- Top 10 Nodes by Centrality ----")
    df = pd.DataFrame(
        {metric: pd.Series(dict(values), dtype=float) for metric, values in centralities.items()}
    ).fillna(0.0)

    if df.empty:
        logger.info("No nodes remaining to analyze.")
        return

    for metric in df.columns:
        logger.info(f"# By {metric.capitalize()}:")
        logger.info(f"{df.sort_values(metric, ascending=False).head(10)}")


__all__ = [
    "degrees",
    "degree_centrality",
    "closeness_centrality",
    "betweenness_centrality",
    "approximate_betweenness_centrality",
    "top_central_nodes",
    "calculate_centrality_metrics",
    "attach_metrics",
    "log_centrality_summary",
]
