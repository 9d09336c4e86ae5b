"""
Unit tests for the force-directed simulation.
"""

import logging

import numpy as np
import pytest

from CaseGraph_Analytics.core.config import ForceLayoutConfig
from CaseGraph_Analytics.core.types import NodePosition
from CaseGraph_Analytics.data.normalization import normalize
from CaseGraph_Analytics.visualization.layouts import ForceSimulation, force_layout

pytestmark = [pytest.mark.unit, pytest.mark.visualization]


class TestForceSimulation:
    """Test stepping, running and reproducibility of the simulation."""

    def test_stepping_matches_run(self, two_triangles):
        stepped = ForceSimulation(two_triangles, seed=5)
        for _ in range(25):
            stepped.step()

        ran = ForceSimulation(two_triangles, seed=5)
        positions = ran.run(25)

        assert stepped.iteration == ran.iteration == 25
        assert positions == stepped.positions()

    def test_seeded_layout_is_reproducible(self, star_graph):
        config = ForceLayoutConfig(iterations=40)

        assert force_layout(star_graph, config, seed=2) == force_layout(star_graph, config, seed=2)

    def test_seeded_start_is_inside_box_around_centre(self, star_graph):
        simulation = ForceSimulation(star_graph, seed=8)

        assert np.all(simulation.positions_array[:, 0] >= 350.0)
        assert np.all(simulation.positions_array[:, 0] < 450.0)
        assert np.all(simulation.positions_array[:, 1] >= 250.0)
        assert np.all(simulation.positions_array[:, 1] < 350.0)

    def test_initial_positions_are_honoured(self, path_graph):
        start = {"A": (0, 0), "B": (10, 0), "C": (20, 0), "D": (30, 0)}

        positions = ForceSimulation(path_graph, seed=1, initial_positions=start).run(0)

        assert positions[3] == NodePosition(id="D", x=30.0, y=0.0)

    def test_node_coordinates_are_default_start(self, path_graph):
        simulation = ForceSimulation(path_graph)

        assert np.all(simulation.positions_array == 0.0)

    def test_coincident_nodes_are_separated(self, path_graph):
        simulation = ForceSimulation(path_graph, seed=4)
        simulation.positions_array[:] = 0.0

        simulation.step()

        assert len({(round(r.x, 6), round(r.y, 6)) for r in simulation.positions()}) == 4
        assert np.all(np.isfinite(simulation.positions_array))

    def test_velocity_is_capped(self, star_graph):
        config = ForceLayoutConfig(max_displacement=3.0)
        simulation = ForceSimulation(star_graph, config=config, seed=6)

        for _ in range(10):
            simulation.step()
            assert np.all(np.linalg.norm(simulation.velocities, axis=1) <= 3.0 + 1e-9)

    def test_self_loops_exert_no_force(self, single_node_graph):
        looped = normalize([{"id": "solo", "x": 0, "y": 0}], [{"source": "solo", "target": "solo"}])
        start = {"solo": (100.0, 100.0)}

        plain = ForceSimulation(single_node_graph, initial_positions=start).run(5)
        with_loop = ForceSimulation(looped, initial_positions=start).run(5)

        assert plain[0].x == pytest.approx(with_loop[0].x)
        assert plain[0].y == pytest.approx(with_loop[0].y)

    def test_empty_graph(self, empty_graph):
        simulation = ForceSimulation(empty_graph, seed=1)

        assert simulation.run(3) == []
        assert simulation.iteration == 3

    def test_negative_iterations_raise(self, path_graph):
        with pytest.raises(ValueError):
            ForceSimulation(path_graph, seed=1).run(-1)

    def test_run_logs_progress(self, path_graph, mock_logger, caplog):
        simulation = ForceSimulation(path_graph, seed=1, logger=mock_logger)

        with caplog.at_level(logging.INFO):
            simulation.run(2)

        assert "Running force simulation on 4 nodes" in caplog.text
