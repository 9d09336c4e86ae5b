"""
Custom exception hierarchy for CaseGraph analytics.

Degenerate graphs (empty, isolated nodes, unreachable pairs) never raise;
these exceptions cover invalid options and explicitly requested guards.
"""


class CaseGraphError(Exception):
    """Base exception for all CaseGraph analytics errors."""


class ConfigurationError(CaseGraphError, ValueError):
    """Raised when an option dataclass receives an invalid value."""


class ComplexityBudgetExceeded(CaseGraphError):
    """
    Raised when an exact algorithm is asked to run above its node budget.

    Attributes:
        operation: Name of the guarded operation
        node_count: Number of nodes in the graph
        max_nodes: Configured node budget
    """

    def __init__(self, operation: str, node_count: int, max_nodes: int) -> None:
        self.operation = operation
        self.node_count = node_count
        self.max_nodes = max_nodes
        super().__init__(
            f"{operation} on {node_count} nodes exceeds the exact-computation "
            f"budget of {max_nodes} nodes; use the sampled variant instead"
        )
