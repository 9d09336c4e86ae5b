"""
Node sizing from computed metrics.
"""

# Standard library imports
from typing import Dict, Mapping

# Local imports
from ...core.types import NodeId
from ...utils.math import scale_value


def node_sizes(
    metric_map: Mapping[NodeId, float], min_size: float = 6.0, max_size: float = 18.0
) -> Dict[NodeId, float]:
    """
    Scale a metric linearly onto a node size range.

    The input range always includes 0 and spans at least 1, so degree maps
    keep absolute proportions: a graph where every node has degree 1 sizes
    all nodes at ``max_size``, and degree 0 maps onto ``min_size``.

    Args:
        metric_map: Metric value per node id, e.g. :func:`degrees` output
        min_size: Size of the smallest value
        max_size: Size of the largest value

    Returns:
        Dict[NodeId, float]: Size per node id

    Example:
        >>> node_sizes({"A": 0, "B": 2, "C": 4})
        {'A': 6.0, 'B': 12.0, 'C': 18.0}
    """
    if not metric_map:
        return {}

    low = min(min(metric_map.values()), 0)
    high = max(max(metric_map.values()), 1)
    span = max(1, high - low)

    return {
        node_id: scale_value(value, low, low + span, min_size, max_size)
        for node_id, value in metric_map.items()
    }


__all__ = ["node_sizes"]
