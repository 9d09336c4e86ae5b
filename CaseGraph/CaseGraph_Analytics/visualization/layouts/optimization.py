"""
Edge-crossing reduction by simulated annealing.

The cost of a layout is ``crossings * crossing_penalty + total link length``.
Each iteration moves one random node by a random offset and keeps the move
when it lowers the cost, or with Metropolis probability
``exp(-delta / temperature)`` when it does not. The temperature cools
linearly to zero, and the best configuration seen is returned.
"""

# Standard library imports
import logging
import math
import random
from typing import List, Optional, Sequence, Tuple

# Third-party imports
import numpy as np

# Local imports
from ...core.types import Graph, Link, NodePosition, PositionDict, PositionInput
from ...utils.progress import ProgressTracker
from ...utils.validation import validate_non_negative_integer
from .base import as_position_dict, resolve_positions, to_position_records

# Determinants below this magnitude are treated as parallel segments
PARALLEL_EPSILON = 1e-10

Point = Sequence[float]


def do_edges_intersect(p1: Point, p2: Point, p3: Point, p4: Point) -> bool:
    """
    Whether segment p1-p2 intersects segment p3-p4.

    Uses the 2x2 determinant method; parallel and near-parallel segments
    never intersect. Touching at an end point counts as an intersection.
    """
    (ax, ay), (bx, by), (cx, cy), (dx, dy) = p1, p2, p3, p4

    det = (bx - ax) * (dy - cy) - (dx - cx) * (by - ay)
    if abs(det) < PARALLEL_EPSILON:
        return False

    u = ((cx - ax) * (dy - cy) - (dx - cx) * (cy - ay)) / det
    v = ((cx - ax) * (by - ay) - (bx - ax) * (cy - ay)) / det
    return 0.0 <= u <= 1.0 and 0.0 <= v <= 1.0


def _segments(graph: Graph, positions: PositionDict) -> List[Link]:
    return [
        link
        for link in graph.links
        if not link.is_self_loop and link.source in positions and link.target in positions
    ]


def _crossings(links: List[Link], positions: PositionDict) -> int:
    crossings = 0
    for i, first in enumerate(links):
        for second in links[i + 1:]:
            if {first.source, first.target} & {second.source, second.target}:
                continue
            if do_edges_intersect(
                positions[first.source],
                positions[first.target],
                positions[second.source],
                positions[second.target],
            ):
                crossings += 1
    return crossings


def count_edge_crossings(graph: Graph, positions: PositionInput) -> int:
    """
    Number of crossing link pairs.

    Pairs of links sharing an endpoint are skipped, as are self-loops and
    links with an endpoint missing from ``positions``.
    """
    position_dict = as_position_dict(positions)
    return _crossings(_segments(graph, position_dict), position_dict)


def _total_length(links: List[Link], positions: PositionDict) -> float:
    return float(
        sum(np.linalg.norm(positions[link.target] - positions[link.source]) for link in links)
    )


def layout_cost(
    graph: Graph, positions: PositionInput, crossing_penalty: float = 1000.0
) -> Tuple[float, int]:
    """Annealing cost of a layout together with its crossing count."""
    position_dict = resolve_positions(graph, positions)
    links = _segments(graph, position_dict)
    crossings = _crossings(links, position_dict)
    return crossings * crossing_penalty + _total_length(links, position_dict), crossings


def optimize_layout(
    graph: Graph,
    positions: Optional[PositionInput] = None,
    iterations: int = 1000,
    temperature: float = 100.0,
    seed: Optional[int] = None,
    step_size: float = 50.0,
    crossing_penalty: float = 1000.0,
    logger: Optional[logging.Logger] = None,
) -> List[NodePosition]:
    """
    Reduce link crossings with simulated annealing.

    Args:
        graph: Normalized graph snapshot
        positions: Starting layout; nodes missing from it use their own coordinates
        iterations: Number of perturbations
        temperature: Starting temperature, cooled linearly to zero
        seed: Seed for node choice, offsets and acceptance draws
        step_size: Largest offset per coordinate of a single move
        crossing_penalty: Cost of one crossing in length units
        logger: Optional logger instance

    Returns:
        List[NodePosition]: The lowest-cost layout seen, never costlier than the input
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    validate_non_negative_integer(iterations, "iterations")

    current = resolve_positions(graph, positions)
    node_ids = graph.node_ids
    if not node_ids or iterations == 0:
        return to_position_records(graph, current)

    rng = random.Random(seed)
    links = _segments(graph, current)

    def cost(layout: PositionDict) -> float:
        return _crossings(links, layout) * crossing_penalty + _total_length(links, layout)

    current_cost = cost(current)
    best = {node_id: xy.copy() for node_id, xy in current.items()}
    best_cost = initial_cost = current_cost

    with ProgressTracker(
        total=iterations,
        title=f"Optimizing layout of {len(node_ids)} nodes",
        logger=logger,
    ) as tracker:
        for i in range(iterations):
            current_temperature = temperature * (1 - i / iterations)

            node_id = rng.choice(node_ids)
            previous = current[node_id]
            current[node_id] = previous + np.array(
                [rng.uniform(-step_size, step_size), rng.uniform(-step_size, step_size)]
            )

            new_cost = cost(current)
            delta = new_cost - current_cost
            if delta < 0 or (
                current_temperature > 0 and rng.random() < math.exp(-delta / current_temperature)
            ):
                current_cost = new_cost
                if current_cost < best_cost:
                    best_cost = current_cost
                    best = {key: xy.copy() for key, xy in current.items()}
            else:
                current[node_id] = previous

            tracker.update(i + 1)

    logger.debug(f"Layout cost reduced from {initial_cost:.1f} to {best_cost:.1f}")
    return to_position_records(graph, best)


__all__ = [
    "do_edges_intersect",
    "count_edge_crossings",
    "layout_cost",
    "optimize_layout",
]
