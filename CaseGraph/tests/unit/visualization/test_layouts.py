"""
Unit tests for one-shot layouts, bounds, node sizing and layout selection.
"""

import math

import pytest

from CaseGraph_Analytics.core.config import load_config_from_dict
from CaseGraph_Analytics.core.types import NodePosition
from CaseGraph_Analytics.visualization import LAYOUT_NAMES, compute_layout
from CaseGraph_Analytics.visualization.layouts import (
    circular_layout,
    community_layout,
    graph_bounds,
    grid_layout,
    hierarchical_layout,
    node_sizes,
    order_nodes,
)
from CaseGraph_Analytics.data.normalization import normalize

pytestmark = [pytest.mark.unit, pytest.mark.visualization]


def as_xy(positions):
    return {record.id: (pytest.approx(record.x), pytest.approx(record.y)) for record in positions}


class TestOrdering:
    """Test node ordering used by the placement layouts."""

    def test_degree_order_is_stable(self, path_graph):
        assert [node.id for node in order_nodes(path_graph, "degree")] == ["B", "C", "A", "D"]

    def test_name_order_uses_label(self):
        graph = normalize([{"id": 1, "name": "Zoe"}, {"id": 2, "name": "Adam"}, {"id": 3}], [])

        assert [node.id for node in order_nodes(graph, "name")] == [3, 2, 1]

    def test_name_order_mixes_numeric_and_text_names(self):
        graph = normalize([{"id": 1, "name": "Bob"}, {"id": 2, "name": 5551234}], [])

        assert [node.id for node in order_nodes(graph, "name")] == [2, 1]
        assert len(circular_layout(graph, sort_by="name")) == 2
        assert len(grid_layout(graph, sort_by="name")) == 2

    def test_unknown_order_raises(self, path_graph):
        with pytest.raises(ValueError):
            order_nodes(path_graph, "risk")


class TestCircularAndGrid:
    """Test circular and grid placement."""

    def test_circular_positions(self, path_graph):
        positions = circular_layout(path_graph)

        assert [record.id for record in positions] == ["A", "B", "C", "D"]
        assert as_xy(positions) == {
            "B": (600.0, 300.0),
            "C": (400.0, 500.0),
            "A": (200.0, 300.0),
            "D": (400.0, 100.0),
        }

    def test_circular_nodes_sit_on_the_circle(self, star_graph):
        for record in circular_layout(star_graph, radius=50, center_x=0, center_y=0):
            assert math.hypot(record.x, record.y) == pytest.approx(50)

    def test_circular_is_deterministic(self, star_graph):
        assert circular_layout(star_graph, sort_by="name") == circular_layout(star_graph, sort_by="name")

    def test_single_node_sits_at_angle_zero(self, single_node_graph):
        assert circular_layout(single_node_graph) == [NodePosition(id="solo", x=600.0, y=300.0)]

    def test_grid_rows_and_columns(self, path_graph):
        positions = grid_layout(path_graph, spacing=80, sort_by=None)

        assert as_xy(positions) == {
            "A": (0.0, 0.0),
            "B": (80.0, 0.0),
            "C": (0.0, 80.0),
            "D": (80.0, 80.0),
        }

    def test_grid_uses_ceil_sqrt_columns(self, star_graph):
        positions = grid_layout(star_graph, spacing=10, start_x=5, start_y=5, sort_by=None)

        xs = sorted({record.x for record in positions})
        assert xs == [5.0, 15.0, 25.0]
        assert max(record.y for record in positions) == 15.0

    def test_empty_graph_layouts(self, empty_graph):
        assert circular_layout(empty_graph) == []
        assert grid_layout(empty_graph) == []
        assert circular_layout(empty_graph, group_by_type=True) == []
        assert grid_layout(empty_graph, group_by_type=True) == []
        assert hierarchical_layout(empty_graph) == []
        assert community_layout(empty_graph, []) == []


class TestGroupByType:
    """Test type-grouped circular and grid placement."""

    @pytest.fixture
    def typed_graph(self):
        return normalize(
            [
                {"id": "P1", "type": "person"},
                {"id": "O1", "type": "organization"},
                {"id": "P2", "type": "person"},
                {"id": "U"},
            ],
            [],
        )

    def test_each_type_gets_its_own_ring(self, typed_graph):
        positions = circular_layout(
            typed_graph, radius=300, center_x=0, center_y=0, sort_by=None, group_by_type=True
        )

        assert as_xy(positions) == {
            "P1": (100.0, 0.0),
            "O1": (200.0, 0.0),
            "P2": (-100.0, 0.0),
            "U": (300.0, 0.0),
        }

    def test_single_type_uses_the_full_radius(self, star_graph):
        for record in circular_layout(star_graph, radius=50, center_x=0, center_y=0, group_by_type=True):
            assert math.hypot(record.x, record.y) == pytest.approx(50)

    def test_grid_sorts_by_type_first(self, typed_graph):
        positions = grid_layout(typed_graph, spacing=10, sort_by=None, group_by_type=True)

        assert as_xy(positions) == {
            "U": (0.0, 0.0),
            "O1": (10.0, 0.0),
            "P1": (0.0, 10.0),
            "P2": (10.0, 10.0),
        }

    def test_grid_keeps_degree_order_within_a_type(self):
        graph = normalize(
            [{"id": "A", "type": "person"}, {"id": "B", "type": "person"}, {"id": "C", "type": "phone"}],
            [{"source": "B", "target": "C"}],
        )

        positions = grid_layout(graph, spacing=10, group_by_type=True)

        assert as_xy(positions) == {"B": (0.0, 0.0), "A": (10.0, 0.0), "C": (0.0, 10.0)}

    def test_grouping_is_read_from_config(self, typed_graph):
        config = load_config_from_dict(
            {"grid_layout": {"spacing": 10, "sort_by": None, "group_by_type": True}}
        )

        positions = compute_layout(typed_graph, "grid", config=config)

        assert [(record.id, record.x, record.y) for record in positions] == [
            ("P1", 0.0, 10.0),
            ("O1", 10.0, 0.0),
            ("P2", 10.0, 10.0),
            ("U", 0.0, 0.0),
        ]


class TestHierarchicalAndCommunity:
    """Test banded and community-clustered placement."""

    def test_star_bands(self, star_graph):
        positions = hierarchical_layout(star_graph, levels=3)

        assert as_xy(positions) == {
            "X": (-50.0, 0.0),
            "L1": (50.0, 0.0),
            "L2": (-50.0, 100.0),
            "L3": (50.0, 100.0),
            "L4": (-50.0, 200.0),
            "L5": (50.0, 200.0),
        }

    def test_fewer_nodes_than_levels(self, two_disjoint_edges):
        positions = hierarchical_layout(two_disjoint_edges, levels=10, start_y=20)

        assert {record.y for record in positions} == {20.0, 120.0, 220.0, 320.0}
        assert all(record.x == 0.0 for record in positions)

    def test_levels_must_be_positive(self, path_graph):
        with pytest.raises(ValueError):
            hierarchical_layout(path_graph, levels=0)

    def test_community_members_surround_their_centre(self, path_graph):
        positions = community_layout(path_graph, [["A", "B"]])

        assert as_xy(positions) == {
            "A": (640.0, 300.0),
            "B": (560.0, 300.0),
            "C": (400 + 200 * math.cos(2 * math.pi / 3), 300 + 200 * math.sin(2 * math.pi / 3)),
            "D": (400 + 200 * math.cos(4 * math.pi / 3), 300 + 200 * math.sin(4 * math.pi / 3)),
        }

    def test_unknown_and_repeated_members_are_ignored(self, path_graph):
        positions = community_layout(path_graph, [["A", "ghost"], ["A", "B", "C", "D"]])

        assert [record.id for record in positions] == ["A", "B", "C", "D"]


class TestBoundsAndSizes:
    """Test bounding boxes and node sizing."""

    def test_bounds(self):
        positions = [NodePosition(id="A", x=-5, y=2), NodePosition(id="B", x=10, y=-3)]

        assert graph_bounds(positions) == {"min_x": -5.0, "max_x": 10.0, "min_y": -3.0, "max_y": 2.0}

    def test_bounds_accept_mappings(self):
        assert graph_bounds({"A": (1, 2)}) == {"min_x": 1.0, "max_x": 1.0, "min_y": 2.0, "max_y": 2.0}

    def test_empty_bounds(self):
        assert graph_bounds([]) == {"min_x": 0.0, "max_x": 0.0, "min_y": 0.0, "max_y": 0.0}

    def test_sizes_scale_linearly(self):
        assert node_sizes({"A": 0, "B": 2, "C": 4}) == {"A": 6.0, "B": 12.0, "C": 18.0}

    def test_uniform_degree_one_sizes_at_maximum(self):
        assert node_sizes({"A": 1, "B": 1}, min_size=4, max_size=10) == {"A": 10.0, "B": 10.0}

    def test_all_isolated_sizes_at_minimum(self):
        assert node_sizes({"A": 0, "B": 0}) == {"A": 6.0, "B": 6.0}

    def test_empty_sizes(self):
        assert node_sizes({}) == {}


class TestComputeLayout:
    """Test configuration-driven layout selection."""

    def test_every_layout_places_every_node(self, two_triangles):
        config = load_config_from_dict({"force_layout": {"iterations": 5}})

        for name in LAYOUT_NAMES:
            positions = compute_layout(two_triangles, name, config=config, seed=3)
            assert [record.id for record in positions] == two_triangles.node_ids

    def test_config_section_is_applied(self, path_graph):
        config = load_config_from_dict({"circular_layout": {"radius": 10, "center_x": 0, "center_y": 0}})

        positions = compute_layout(path_graph, "circular", config=config)

        assert all(math.hypot(r.x, r.y) == pytest.approx(10) for r in positions)

    def test_explicit_communities_are_used(self, path_graph):
        explicit = compute_layout(path_graph, "community", communities=[["A", "B"]])

        assert explicit == community_layout(path_graph, [["A", "B"]])

    def test_seeded_force_layout_is_reproducible(self, two_triangles):
        config = load_config_from_dict({"force_layout": {"iterations": 20}})

        first = compute_layout(two_triangles, "force", config=config, seed=9)
        second = compute_layout(two_triangles, "force", config=config, seed=9)

        assert first == second

    def test_optimize_runs_annealing(self, two_triangles):
        config = load_config_from_dict({"annealing": {"iterations": 30}})

        positions = compute_layout(two_triangles, "grid", config=config, seed=1, optimize=True)

        assert len(positions) == 6

    def test_unknown_layout_raises(self, path_graph):
        with pytest.raises(ValueError):
            compute_layout(path_graph, "spiral")
