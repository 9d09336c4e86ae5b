"""
Full-graph analysis reports.

This module composes normalization, metrics, structure, communities,
health scoring and node sizing into a single report for an investigation
graph, and wraps reports in a timestamped export envelope.

Example:
    >>> from CaseGraph_Analytics.report import analyze_graph
    >>> report = analyze_graph(
    ...     [{"id": "A", "type": "person"}, {"id": "B", "type": "company"}],
    ...     [{"source": "A", "target": "B", "type": "owns"}],
    ... )
    >>> report["basic_metrics"]["density"]
    1.0
"""

# Standard library imports
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional

# Local imports
from .analysis.centrality import calculate_centrality_metrics, degrees, log_centrality_summary
from .analysis.communities import community_summary, detect_communities
from .analysis.connectivity import (
    average_path_length,
    basic_metrics,
    clustering_coefficient,
    connected_components,
    find_articulation_points,
    find_bridges,
    small_world_metrics,
)
from .analysis.health import generate_recommendations, network_health_score
from .core.config import EngineConfig
from .core.types import Graph
from .data.normalization import RawLink, RawNode, normalize, validate_graph
from .visualization.layouts.sizing import node_sizes

# Version of the export envelope layout
EXPORT_VERSION = "1.0.0"


class GraphAnalyzer:
    """
    Runs every analysis over one graph snapshot.

    The analyzer holds configuration only; each call to :meth:`analyze`
    normalizes its input afresh and shares nothing with previous calls.
    """

    def __init__(
        self, config: Optional[EngineConfig] = None, logger: Optional[logging.Logger] = None
    ) -> None:
        self.config = config or EngineConfig()
        self.logger = logger or logging.getLogger(__name__)

    def analyze(self, raw_nodes: Iterable[RawNode], raw_links: Iterable[RawLink]) -> Dict[str, Any]:
        """
        Analyze raw node and link records.

        Args:
            raw_nodes: Node records
            raw_links: Link records

        Returns:
            Dictionary with basic_metrics, centrality_metrics,
            clustering_metrics, community_detection, path_analysis,
            structural_analysis, network_health_score, recommendations,
            visualization_data and validation sections
        """
        raw_nodes = list(raw_nodes)
        raw_links = list(raw_links)

        validation = validate_graph(raw_nodes, raw_links)

        graph = normalize(raw_nodes, raw_links, logger=self.logger)
        if graph.number_of_nodes() == 0:
            self.logger.warning("Empty graph provided for analysis")
            analysis = empty_graph_analysis()
            analysis["validation"] = validation
            return analysis

        self.logger.info(
            f"Analyzing graph with {graph.number_of_nodes():,} nodes "
            f"and {graph.number_of_links():,} links"
        )

        community_config = self.config.community
        communities = detect_communities(
            graph,
            seed=community_config.seed,
            absorb_probability=community_config.absorb_probability,
            method=community_config.method,
        )

        centrality = calculate_centrality_metrics(graph, self.config.analysis, logger=self.logger)
        log_centrality_summary(
            {
                "degree": centrality["degree_centrality"],
                "closeness": centrality["closeness_centrality"],
                "betweenness": centrality["betweenness_centrality"],
            },
            self.logger,
        )

        health = network_health_score(graph)

        analysis = {
            "basic_metrics": basic_metrics(graph),
            "centrality_metrics": centrality,
            "clustering_metrics": clustering_coefficient(graph),
            "community_detection": community_summary(graph, communities),
            "path_analysis": self._path_analysis(graph),
            "structural_analysis": self._structural_analysis(graph),
            "network_health_score": health,
            "recommendations": generate_recommendations(graph, top_n=self.config.analysis.top_n),
            "visualization_data": self._visualization_data(graph, communities),
            "validation": validation,
        }

        self.logger.info(
            f"Graph analysis completed: health score {health['score']}/{health['max_score']} "
            f"(grade {health['grade']})"
        )

        return analysis

    def _path_analysis(self, graph: Graph) -> Dict[str, Any]:
        paths = average_path_length(graph)
        components = connected_components(graph)
        return {
            "avg_path_length": paths["average"],
            "diameter": paths["diameter"],
            "distribution": paths["distribution"],
            "total_paths": paths["total_paths"],
            "is_connected": len(components) == 1,
            "component_count": len(components),
            "largest_component_size": len(components[0]) if components else 0,
            "components": components,
        }

    def _structural_analysis(self, graph: Graph) -> Dict[str, Any]:
        return {
            "bridges": [link.id for link in find_bridges(graph, logger=self.logger)],
            "articulation_points": [node.id for node in find_articulation_points(graph)],
            "small_world": small_world_metrics(graph, seed=self.config.community.seed),
        }

    def _visualization_data(self, graph: Graph, communities) -> Dict[str, Any]:
        degree_map = degrees(graph)
        sizes = node_sizes(degree_map)
        community_of = {
            node_id: index for index, members in enumerate(communities) for node_id in members
        }

        nodes = [
            {
                "id": node.id,
                "name": node.name,
                "type": node.type,
                "degree": degree_map[node.id],
                "size": sizes[node.id],
                "community": community_of.get(node.id),
                "x": node.x,
                "y": node.y,
            }
            for node in graph.nodes
        ]
        links = [
            {
                "id": link.id,
                "source": link.source,
                "target": link.target,
                "type": link.type,
                "weight": link.weight,
            }
            for link in graph.links
        ]

        metrics = basic_metrics(graph)
        return {
            "nodes": nodes,
            "links": links,
            "metadata": {
                "node_count": len(nodes),
                "link_count": len(links),
                "node_types": list(metrics["node_type_distribution"]),
                "link_types": list(metrics["link_type_distribution"]),
            },
        }


def analyze_graph(
    raw_nodes: Iterable[RawNode],
    raw_links: Iterable[RawLink],
    config: Optional[EngineConfig] = None,
    logger: Optional[logging.Logger] = None,
) -> Dict[str, Any]:
    """Analyze raw records with a one-off :class:`GraphAnalyzer`."""
    return GraphAnalyzer(config=config, logger=logger).analyze(raw_nodes, raw_links)


def empty_graph_analysis() -> Dict[str, Any]:
    """Report returned for a graph without nodes."""
    return {
        "basic_metrics": {
            "node_count": 0,
            "link_count": 0,
            "density": 0.0,
            "avg_degree": 0.0,
            "max_degree": 0,
            "min_degree": 0,
            "isolated_node_count": 0,
            "isolated_nodes": [],
            "node_type_distribution": {},
            "link_type_distribution": {},
        },
        "centrality_metrics": {
            "degree_centrality": {},
            "closeness_centrality": {},
            "betweenness_centrality": {},
            "betweenness_sampled": False,
            "top_central_nodes": {
                "by_degree": [],
                "by_closeness": [],
                "by_betweenness": [],
                "overall": [],
            },
        },
        "clustering_metrics": {
            "local": {},
            "global": 0.0,
            "triangle_count": 0,
            "transitivity": 0.0,
        },
        "community_detection": {
            "communities": [],
            "community_count": 0,
            "modularity": 0.0,
            "community_stats": [],
        },
        "path_analysis": {
            "avg_path_length": 0.0,
            "diameter": 0,
            "distribution": {},
            "total_paths": 0,
            "is_connected": False,
            "component_count": 0,
            "largest_component_size": 0,
            "components": [],
        },
        "structural_analysis": {
            "bridges": [],
            "articulation_points": [],
            "small_world": small_world_metrics(Graph()),
        },
        "network_health_score": network_health_score(Graph()),
        "recommendations": [
            {
                "type": "empty_graph",
                "priority": "high",
                "title": "Empty graph",
                "description": "No entities to analyze",
                "action": "Start by adding entities to analyze",
            }
        ],
        "visualization_data": {
            "nodes": [],
            "links": [],
            "metadata": {"node_count": 0, "link_count": 0, "node_types": [], "link_types": []},
        },
    }


def export_analysis(analysis: Dict[str, Any]) -> Dict[str, Any]:
    """
    Wrap a report in a timestamped export envelope.

    Args:
        analysis: Output of :func:`analyze_graph`

    Returns:
        Dictionary with an ISO-8601 UTC ``timestamp``, the envelope
        ``version`` and an ``analysis`` section holding a summary, the full
        metrics and the recommendations
    """
    basic = analysis["basic_metrics"]
    health = analysis["network_health_score"]

    return {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": EXPORT_VERSION,
        "analysis": {
            "summary": {
                "node_count": basic["node_count"],
                "link_count": basic["link_count"],
                "density": basic["density"],
                "health_score": health["score"],
                "health_grade": health["grade"],
            },
            "metrics": analysis,
            "recommendations": analysis["recommendations"],
        },
    }


__all__ = [
    "GraphAnalyzer",
    "analyze_graph",
    "empty_graph_analysis",
    "export_analysis",
    "EXPORT_VERSION",
]
