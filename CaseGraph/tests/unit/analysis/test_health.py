"""
Unit tests for network health scoring and recommendations.
"""

import pytest

from CaseGraph_Analytics.analysis.health import (
    generate_recommendations,
    health_grade,
    network_health_score,
)
from CaseGraph_Analytics.data.normalization import normalize
from conftest import graph_from_edges

pytestmark = [pytest.mark.unit, pytest.mark.analysis]


class TestHealthScore:
    """Test the four-factor health score."""

    @pytest.mark.parametrize(
        "score,grade",
        [(100, "A+"), (90, "A+"), (85, "A"), (70, "B+"), (65, "B"), (50, "C+"), (45, "C"), (30, "D"), (29, "F"), (0, "F")],
    )
    def test_grades(self, score, grade):
        assert health_grade(score) == grade

    def test_path_graph_score(self, path_graph):
        health = network_health_score(path_graph)

        assert health["factors"] == {"size": 10, "density": 25, "connectivity": 25, "diversity": 10}
        assert health["score"] == 70
        assert health["percentage"] == pytest.approx(70.0)
        assert health["grade"] == "B+"
        assert [rec["factor"] for rec in health["recommendations"]] == ["size", "diversity"]

    def test_diverse_connected_graph_scores_full_marks(self):
        types = ["person", "organization", "address", "phone", "vehicle"]
        nodes = [{"id": i, "type": types[i % 5]} for i in range(20)]
        links = [
            {"source": i, "target": j, "type": ["knows", "owns", "calls"][(i + j) % 3]}
            for i in range(20)
            for j in range(i + 1, 20)
            if (j - i) <= 4
        ]

        health = network_health_score(normalize(nodes, links))

        assert health["score"] == 100
        assert health["grade"] == "A+"
        assert health["recommendations"] == []

    def test_fragmented_graph_loses_connectivity_points(self):
        graph = graph_from_edges(list(range(10)), [])

        health = network_health_score(graph)

        assert health["factors"]["connectivity"] == 0
        assert health["factors"]["density"] == 0

    def test_empty_graph_scores_zero(self, empty_graph):
        health = network_health_score(empty_graph)

        assert health["score"] == 0
        assert health["max_score"] == 100
        assert health["grade"] == "F"
        assert set(health["factors"].values()) == {0}


class TestRecommendations:
    """Test structural follow-up recommendations."""

    def test_isolate_components_and_hubs(self, triangle_with_isolate):
        recommendations = generate_recommendations(triangle_with_isolate)

        assert [rec["type"] for rec in recommendations] == [
            "isolated_nodes",
            "disconnected_components",
            "high_degree_nodes",
        ]
        assert recommendations[0]["priority"] == "high"
        assert recommendations[0]["affected_nodes"] == [{"id": "D", "name": None}]
        assert recommendations[1]["component_count"] == 2

    def test_sparse_network_is_flagged(self):
        graph = graph_from_edges(list(range(20)), [(0, 1)])

        types = [rec["type"] for rec in generate_recommendations(graph)]

        assert "low_density" in types

    def test_hub_list_is_limited_and_sorted(self, star_graph):
        recommendations = generate_recommendations(star_graph, top_n=1)

        hubs = [rec for rec in recommendations if rec["type"] == "high_degree_nodes"][0]
        assert hubs["nodes"] == [{"id": "X", "name": None, "degree": 5}]

    def test_healthy_small_graph_has_no_structural_warnings(self, path_graph):
        types = [rec["type"] for rec in generate_recommendations(path_graph)]

        assert "isolated_nodes" not in types
        assert "disconnected_components" not in types

    def test_empty_graph_has_no_recommendations(self, empty_graph):
        assert generate_recommendations(empty_graph) == []
