"""
Data layer for CaseGraph analytics.

This module turns raw entity/relationship records into normalized graph
snapshots and the adjacency structures used by every algorithm.
"""

from .normalization import (
    STRENGTH_WEIGHTS,
    build_adjacency,
    normalize,
    to_multigraph,
    validate_graph,
)

__all__ = [
    "normalize",
    "build_adjacency",
    "to_multigraph",
    "validate_graph",
    "STRENGTH_WEIGHTS",
]
