"""
Force-directed layout simulation.

The simulation keeps explicit state (positions, velocities and an iteration
counter) so that callers can animate or cancel a layout by driving
:meth:`ForceSimulation.step` themselves; :func:`force_layout` runs it to
completion.

Each tick applies three forces:
- every node pair repels with ``repulsion_strength / d**2``
- every link pulls its endpoints together with ``attraction_strength * d``
- every node is pulled toward ``(center_x, center_y)`` with ``centering_strength``

Velocities accumulate the forces, are multiplied by ``damping`` and, capped
at ``max_displacement``, are added to the positions.
"""

# Standard library imports
import logging
from typing import List, Optional

# Third-party imports
import numpy as np

# Local imports
from ...core.config import ForceLayoutConfig
from ...core.types import Graph, NodePosition, PositionDict, PositionInput
from ...utils.progress import ProgressTracker
from ...utils.validation import validate_non_negative_integer
from .base import resolve_positions, to_position_records

# Distances are floored here to avoid division by zero
MIN_DISTANCE = 1e-6


class ForceSimulation:
    """
    Spring-repulsion simulation over a graph snapshot.

    Initial positions come from ``initial_positions`` when given, else from
    the nodes' own coordinates; with a ``seed`` and no explicit positions,
    nodes start uniformly at random in a 100 x 100 box around the centre.
    The seed also drives the jitter that separates coincident nodes, so a
    seeded simulation is fully reproducible.

    Attributes:
        config: Force parameters
        iteration: Number of completed ticks
        positions_array: ``(N, 2)`` node positions, rows in graph order
        velocities: ``(N, 2)`` node velocities
    """

    def __init__(
        self,
        graph: Graph,
        config: Optional[ForceLayoutConfig] = None,
        seed: Optional[int] = None,
        initial_positions: Optional[PositionInput] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.graph = graph
        self.config = config or ForceLayoutConfig()
        self.logger = logger or logging.getLogger(__name__)
        self.iteration = 0

        self._ids = graph.node_ids
        index = {node_id: i for i, node_id in enumerate(self._ids)}
        self._rng = np.random.default_rng(seed)

        node_count = len(self._ids)
        if initial_positions is None and seed is not None:
            center = np.array([self.config.center_x, self.config.center_y])
            self.positions_array = center - 50.0 + self._rng.uniform(0.0, 100.0, (node_count, 2))
        else:
            start = resolve_positions(graph, initial_positions)
            self.positions_array = np.array(
                [start[node_id] for node_id in self._ids], dtype=float
            ).reshape(node_count, 2)

        self.velocities = np.zeros((node_count, 2))

        links = [link for link in graph.links if not link.is_self_loop]
        self._sources = np.array([index[link.source] for link in links], dtype=int)
        self._targets = np.array([index[link.target] for link in links], dtype=int)

    def _repulsion(self) -> np.ndarray:
        delta = self.positions_array[:, None, :] - self.positions_array[None, :, :]
        distance = np.linalg.norm(delta, axis=2)

        coincident = np.triu(distance < MIN_DISTANCE, k=1)
        for i, j in zip(*np.nonzero(coincident)):
            angle = self._rng.uniform(0.0, 2 * np.pi)
            direction = MIN_DISTANCE * np.array([np.cos(angle), np.sin(angle)])
            delta[i, j] = direction
            delta[j, i] = -direction

        distance = np.maximum(np.linalg.norm(delta, axis=2), MIN_DISTANCE)
        np.fill_diagonal(distance, np.inf)

        magnitude = self.config.repulsion_strength / distance ** 2
        return ((delta / distance[:, :, None]) * magnitude[:, :, None]).sum(axis=1)

    def _attraction(self) -> np.ndarray:
        forces = np.zeros_like(self.positions_array)
        if self._sources.size == 0:
            return forces

        # Magnitude attraction * d along the unit vector: d cancels
        pull = self.config.attraction_strength * (
            self.positions_array[self._targets] - self.positions_array[self._sources]
        )
        np.add.at(forces, self._sources, pull)
        np.add.at(forces, self._targets, -pull)
        return forces

    def _centering(self) -> np.ndarray:
        center = np.array([self.config.center_x, self.config.center_y])
        return self.config.centering_strength * (center - self.positions_array)

    def step(self) -> None:
        """Advance the simulation by one tick."""
        self.iteration += 1
        if not self._ids:
            return

        forces = self._repulsion() + self._attraction() + self._centering()
        self.velocities = (self.velocities + forces) * self.config.damping

        speed = np.linalg.norm(self.velocities, axis=1)
        too_fast = speed > self.config.max_displacement
        if too_fast.any():
            self.velocities[too_fast] *= (self.config.max_displacement / speed[too_fast])[:, None]

        self.positions_array = self.positions_array + self.velocities

    def run(self, iterations: Optional[int] = None) -> List[NodePosition]:
        """
        Advance the simulation ``iterations`` ticks (``config.iterations`` by default).

        Returns:
            List[NodePosition]: Positions after the last tick
        """
        if iterations is None:
            iterations = self.config.iterations
        validate_non_negative_integer(iterations, "iterations")

        with ProgressTracker(
            total=iterations,
            title=f"Running force simulation on {len(self._ids)} nodes",
            logger=self.logger,
        ) as tracker:
            for i in range(1, iterations + 1):
                self.step()
                tracker.update(i)

        return self.positions()

    def position_dict(self) -> PositionDict:
        return {node_id: self.positions_array[i].copy() for i, node_id in enumerate(self._ids)}

    def positions(self) -> List[NodePosition]:
        """Current ``{id, x, y}`` records in graph order."""
        return to_position_records(self.graph, self.position_dict())


def force_layout(
    graph: Graph,
    config: Optional[ForceLayoutConfig] = None,
    seed: Optional[int] = None,
    logger: Optional[logging.Logger] = None,
) -> List[NodePosition]:
    """
    Run a force simulation to completion.

    Args:
        graph: Normalized graph snapshot
        config: Force parameters, defaults to :class:`ForceLayoutConfig`
        seed: Seed for initial positions and jitter
        logger: Optional logger instance

    Returns:
        List[NodePosition]: Final positions in graph order
    """
    return ForceSimulation(graph, config=config, seed=seed, logger=logger).run()


__all__ = ["ForceSimulation", "force_layout", "MIN_DISTANCE"]
