"""
Layout selection driven by engine configuration.

Maps a layout name onto its algorithm, feeding it the matching
:class:`~CaseGraph_Analytics.core.config.EngineConfig` section, and
optionally post-processes the result with crossing reduction.
"""

# Standard library imports
import logging
from dataclasses import asdict
from typing import List, Optional, Sequence

# Local imports
from ..analysis.communities import detect_communities
from ..core.config import EngineConfig
from ..core.types import Graph, NodeId, NodePosition
from ..utils.validation import validate_choice
from .layouts import (
    circular_layout,
    community_layout,
    force_layout,
    grid_layout,
    hierarchical_layout,
    optimize_layout,
)

LAYOUT_NAMES = ["force", "circular", "grid", "hierarchical", "community"]


def compute_layout(
    graph: Graph,
    layout: str = "force",
    config: Optional[EngineConfig] = None,
    communities: Optional[Sequence[Sequence[NodeId]]] = None,
    seed: Optional[int] = None,
    optimize: bool = False,
    logger: Optional[logging.Logger] = None,
) -> List[NodePosition]:
    """
    Compute node positions with a named layout.

    Args:
        graph: Normalized graph snapshot
        layout: One of ``LAYOUT_NAMES``
        config: Engine configuration, defaults to :class:`EngineConfig`
        communities: Partition for the community layout; detected when omitted
        seed: Seed for the force simulation, community detection and annealing
        optimize: Run crossing reduction on the result
        logger: Optional logger instance

    Returns:
        List[NodePosition]: Positions in graph order

    Raises:
        ValueError: If the layout name is unknown
    """
    if logger is None:
        logger = logging.getLogger(__name__)
    if config is None:
        config = EngineConfig()

    validate_choice(layout, "layout", LAYOUT_NAMES)
    logger.debug(f"Computing {layout} layout for {graph.number_of_nodes()} nodes")

    if layout == "force":
        positions = force_layout(graph, config.force_layout, seed=seed, logger=logger)
    elif layout == "circular":
        positions = circular_layout(graph, **asdict(config.circular_layout))
    elif layout == "grid":
        positions = grid_layout(graph, **asdict(config.grid_layout))
    elif layout == "hierarchical":
        positions = hierarchical_layout(graph, **asdict(config.hierarchical_layout))
    else:
        if communities is None:
            communities = detect_communities(
                graph,
                seed=seed if seed is not None else config.community.seed,
                absorb_probability=config.community.absorb_probability,
                method=config.community.method,
            )
        positions = community_layout(graph, communities, **asdict(config.community_layout))

    if optimize:
        positions = optimize_layout(
            graph, positions, seed=seed, logger=logger, **asdict(config.annealing)
        )

    return positions


__all__ = ["LAYOUT_NAMES", "compute_layout"]
