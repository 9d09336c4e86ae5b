"""
Pytest configuration and shared fixtures for CaseGraph tests.

This module provides the reference graphs used across the test suite and
helpers for building graphs from networkx generators.
"""

import logging
from typing import Any

import networkx as nx
import pytest

from CaseGraph_Analytics.core.types import Graph
from CaseGraph_Analytics.data.normalization import normalize


def graph_from_edges(node_ids: list[Any], edges: list[tuple[Any, Any]], **kwargs) -> Graph:
    """Build a normalized graph with fixed coordinates from id lists."""
    nodes = [{"id": node_id, "x": 0.0, "y": 0.0} for node_id in node_ids]
    links = [{"source": source, "target": target} for source, target in edges]
    return normalize(nodes, links, **kwargs)


def graph_from_networkx(nx_graph: nx.Graph) -> Graph:
    """Build a normalized graph mirroring a networkx graph, seeded coordinates."""
    nodes = [{"id": node} for node in nx_graph.nodes]
    links = [{"source": u, "target": v} for u, v in nx_graph.edges]
    return normalize(nodes, links, seed=7)


def pytest_configure(config):
    """Register the custom markers used across the suite."""
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "core: configuration and type tests")
    config.addinivalue_line("markers", "data: normalization and adjacency tests")
    config.addinivalue_line("markers", "analysis: graph algorithm tests")
    config.addinivalue_line("markers", "visualization: layout tests")
    config.addinivalue_line("markers", "utils: utility tests")


def pytest_collection_modifyitems(config, items):
    """Mark integration tests by location."""
    for item in items:
        if "integration" in item.nodeid:
            item.add_marker(pytest.mark.integration)


@pytest.fixture
def mock_logger() -> logging.Logger:
    """Logger routed through pytest's log capture."""
    return logging.getLogger("CaseGraph_Analytics.tests")


@pytest.fixture
def path_graph() -> Graph:
    """Path A-B-C-D."""
    return graph_from_edges(["A", "B", "C", "D"], [("A", "B"), ("B", "C"), ("C", "D")])


@pytest.fixture
def triangle_with_isolate() -> Graph:
    """Triangle A-B-C plus the isolated node D."""
    return graph_from_edges(["A", "B", "C", "D"], [("A", "B"), ("B", "C"), ("C", "A")])


@pytest.fixture
def star_graph() -> Graph:
    """Star with centre X and leaves L1..L5."""
    leaves = [f"L{i}" for i in range(1, 6)]
    return graph_from_edges(["X"] + leaves, [("X", leaf) for leaf in leaves])


@pytest.fixture
def two_disjoint_edges() -> Graph:
    """Edges A-B and C-D with no connection between them."""
    return graph_from_edges(["A", "B", "C", "D"], [("A", "B"), ("C", "D")])


@pytest.fixture
def two_triangles() -> Graph:
    """Two triangles joined by the single link C-D."""
    return graph_from_edges(
        ["A", "B", "C", "D", "E", "F"],
        [("A", "B"), ("B", "C"), ("C", "A"), ("C", "D"), ("D", "E"), ("E", "F"), ("F", "D")],
    )


@pytest.fixture
def empty_graph() -> Graph:
    return Graph()


@pytest.fixture
def single_node_graph() -> Graph:
    return graph_from_edges(["solo"], [])


@pytest.fixture
def case_records() -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
    """Raw entity/relationship records shaped like the case-management layer's rows."""
    entities = [
        {"id": 1, "name": "Alice", "type": "person"},
        {"id": 2, "name": "Bob", "type": "person"},
        {"id": 3, "name": "Acme Ltd", "type": "organization"},
        {"id": 4, "name": "Harbor Street 12", "type": "address"},
        {"id": 5, "name": "+33 1 23 45 67 89", "type": "phone"},
        {"id": 6, "name": "Carol", "type": "person"},
        {"id": 7, "name": "Unlinked vehicle", "type": "vehicle"},
    ]
    relationships = [
        {"from_entity": 1, "to_entity": 2, "type": "knows", "strength": "strong"},
        {"from_entity": 1, "to_entity": 3, "type": "works_for", "strength": "medium"},
        {"from_entity": 2, "to_entity": 3, "type": "works_for"},
        {"from_entity": 3, "to_entity": 4, "type": "located_at", "strength": "weak"},
        {"from_entity": 2, "to_entity": 5, "type": "uses"},
        {"from_entity": 5, "to_entity": 6, "type": "calls"},
        {"from_entity": 6, "to_entity": 99, "type": "knows"},
    ]
    return entities, relationships
