"""
Network health scoring and improvement recommendations.

The health score rates how much an investigation graph can reveal: four
factors (size, density, connectivity, type diversity) each contribute up to
25 points, and the total maps onto a letter grade.
"""

# Standard library imports
from typing import Any, Dict, List

# Local imports
from ..core.types import Graph
from .centrality import degrees
from .connectivity import basic_metrics, connected_components

FACTOR_MAX_SCORE = 25
MAX_SCORE = 4 * FACTOR_MAX_SCORE

# (minimum score, grade), checked in order
HEALTH_GRADES = [
    (90, "A+"),
    (80, "A"),
    (70, "B+"),
    (60, "B"),
    (50, "C+"),
    (40, "C"),
    (30, "D"),
]

# A factor scoring below its threshold produces a health recommendation
_FACTOR_THRESHOLDS = {
    "size": (20, "Add more entities to enrich the network", "Improves the depth of the analysis"),
    "density": (15, "Record more relationships between existing entities", "Reveals hidden connections"),
    "connectivity": (20, "Connect the isolated groups of entities", "Unifies the investigation network"),
    "diversity": (20, "Diversify entity and relationship types", "Allows a more complete analysis"),
}

# Hubs are nodes whose degree exceeds this share of the node count
HUB_DEGREE_SHARE = 0.2


def health_grade(score: float) -> str:
    """Letter grade for a health score out of 100."""
    for minimum, grade in HEALTH_GRADES:
        if score >= minimum:
            return grade
    return "F"


def _size_factor(node_count: int) -> int:
    if node_count >= 20:
        return 25
    if node_count >= 10:
        return 20
    if node_count >= 5:
        return 15
    if node_count >= 2:
        return 10
    return 0


def _density_factor(density: float) -> int:
    if density >= 0.3:
        return 25
    if density >= 0.2:
        return 20
    if density >= 0.1:
        return 15
    if density >= 0.05:
        return 10
    return 0


def _connectivity_factor(component_count: int, node_count: int) -> int:
    if component_count == 1:
        return 25
    if component_count <= 2:
        return 15
    if component_count <= node_count * 0.3:
        return 10
    return 0


def _diversity_factor(node_types: int, link_types: int) -> int:
    if node_types >= 5 and link_types >= 3:
        return 25
    if node_types >= 3 and link_types >= 2:
        return 20
    if node_types >= 2:
        return 15
    return 10


def network_health_score(graph: Graph) -> Dict[str, Any]:
    """
    Score a graph out of 100 across four factors.

    Args:
        graph: Normalized graph snapshot

    Returns:
        Dictionary containing:
            - score (int): Sum of the factor scores
            - max_score (int): Always 100
            - percentage (float): Score as a percentage of max_score
            - grade (str): Letter grade, A+ through F
            - factors (dict): size, density, connectivity and diversity points
            - recommendations (list): ``{factor, message, impact}`` for weak factors
    """
    if graph.number_of_nodes() == 0:
        factors = dict.fromkeys(_FACTOR_THRESHOLDS, 0)
        return {
            "score": 0,
            "max_score": MAX_SCORE,
            "percentage": 0.0,
            "grade": health_grade(0),
            "factors": factors,
            "recommendations": [],
        }

    metrics = basic_metrics(graph)
    component_count = len(connected_components(graph))

    factors = {
        "size": _size_factor(metrics["node_count"]),
        "density": _density_factor(metrics["density"]),
        "connectivity": _connectivity_factor(component_count, metrics["node_count"]),
        "diversity": _diversity_factor(
            len(metrics["node_type_distribution"]), len(metrics["link_type_distribution"])
        ),
    }
    score = sum(factors.values())

    recommendations = [
        {"factor": factor, "message": message, "impact": impact}
        for factor, (threshold, message, impact) in _FACTOR_THRESHOLDS.items()
        if factors[factor] < threshold
    ]

    return {
        "score": score,
        "max_score": MAX_SCORE,
        "percentage": score / MAX_SCORE * 100,
        "grade": health_grade(score),
        "factors": factors,
        "recommendations": recommendations,
    }


def generate_recommendations(graph: Graph, top_n: int = 5) -> List[Dict[str, Any]]:
    """
    Suggest investigation follow-ups from the graph structure.

    Flags isolated entities (high priority), a sparse network of more than
    five nodes with density below 0.1 (medium), disconnected components
    (medium) and hubs whose degree exceeds a fifth of the node count (info,
    at most ``top_n`` listed).
    """
    recommendations = []
    metrics = basic_metrics(graph)
    node_count = metrics["node_count"]

    if metrics["isolated_nodes"]:
        recommendations.append(
            {
                "type": "isolated_nodes",
                "priority": "high",
                "title": "Isolated entities detected",
                "description": f"{metrics['isolated_node_count']} entity(ies) without any relationship",
                "action": "Record relationships connecting these entities to the network",
                "affected_nodes": [
                    {"id": node_id, "name": graph.get_node(node_id).name}
                    for node_id in metrics["isolated_nodes"]
                ],
            }
        )

    if metrics["density"] < 0.1 and node_count > 5:
        recommendations.append(
            {
                "type": "low_density",
                "priority": "medium",
                "title": "Sparse network",
                "description": "The network may hide further connections",
                "action": "Look for additional relationships between entities",
                "current_density": round(metrics["density"], 3),
            }
        )

    component_count = len(connected_components(graph))
    if component_count > 1:
        recommendations.append(
            {
                "type": "disconnected_components",
                "priority": "medium",
                "title": "Disconnected components",
                "description": f"{component_count} separate groups of entities",
                "action": "Identify links between the separate groups",
                "component_count": component_count,
            }
        )

    degree_map = degrees(graph)
    hubs = sorted(
        (node for node in graph.nodes if degree_map[node.id] > node_count * HUB_DEGREE_SHARE),
        key=lambda node: degree_map[node.id],
        reverse=True,
    )
    if hubs:
        recommendations.append(
            {
                "type": "high_degree_nodes",
                "priority": "info",
                "title": "Central entities identified",
                "description": "Highly connected entities (key points)",
                "action": "Check the importance of these entities to the investigation",
                "nodes": [
                    {"id": node.id, "name": node.name, "degree": degree_map[node.id]}
                    for node in hubs[:top_n]
                ],
            }
        )

    return recommendations


__all__ = [
    "network_health_score",
    "generate_recommendations",
    "health_grade",
]
