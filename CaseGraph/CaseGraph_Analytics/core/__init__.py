"""
Core foundation components for CaseGraph analytics.

This module contains essential functionality required for basic package operation:
- Custom exception classes and error hierarchy
- Type definitions and data structures
- Configuration dataclasses and validation

Modules:
    exceptions: Custom exception classes (CaseGraphError hierarchy)
    types: Type definitions (Node, Link, Graph, NodePosition, etc.)
    config: Option dataclasses (EngineConfig and related classes)
"""

from .config import (
    AnalysisConfig,
    AnalysisMode,
    AnnealingConfig,
    CircularLayoutConfig,
    CommunityConfig,
    CommunityLayoutConfig,
    EngineConfig,
    ForceLayoutConfig,
    GridLayoutConfig,
    HierarchicalLayoutConfig,
    load_config_from_dict,
)
from .exceptions import (
    CaseGraphError,
    ComplexityBudgetExceeded,
    ConfigurationError,
)
from .types import (
    Graph,
    Link,
    Node,
    NodeId,
    NodePosition,
    PositionArray,
    PositionDict,
)

__all__ = [
    # Exceptions
    "CaseGraphError",
    "ConfigurationError",
    "ComplexityBudgetExceeded",
    # Types
    "Graph",
    "Link",
    "Node",
    "NodeId",
    "NodePosition",
    "PositionArray",
    "PositionDict",
    # Config classes
    "AnalysisMode",
    "AnalysisConfig",
    "AnnealingConfig",
    "CircularLayoutConfig",
    "CommunityConfig",
    "CommunityLayoutConfig",
    "EngineConfig",
    "ForceLayoutConfig",
    "GridLayoutConfig",
    "HierarchicalLayoutConfig",
    "load_config_from_dict",
]
