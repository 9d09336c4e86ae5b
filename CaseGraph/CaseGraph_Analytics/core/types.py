"""
Type definitions and data structures for CaseGraph graph analytics.

This module contains the dataclasses describing a normalized graph snapshot
(nodes, links) and the position records produced by the layout engine.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

import numpy as np
from numpy.typing import NDArray
from typing_extensions import TypeAlias

# Node identifiers are caller-defined: database integer keys or string ids
NodeId: TypeAlias = Union[str, int]

# Type alias for position coordinates (numpy arrays of shape (2,))
PositionArray: TypeAlias = NDArray[np.floating]
PositionDict: TypeAlias = Dict[NodeId, PositionArray]


@dataclass
class Node:
    """
    A single entity of the investigation graph.

    Attributes:
        id: Stable identifier, unique within a graph
        x: Horizontal plane coordinate
        y: Vertical plane coordinate
        type: Free-form category tag (person, organization, ...)
        name: Optional display name, used for name ordering and reports
        attributes: Passthrough fields and computed metrics
    """

    id: NodeId
    x: float = 0.0
    y: float = 0.0
    type: Optional[str] = None
    name: Optional[str] = None
    attributes: Dict[str, Any] = field(default_factory=dict)

    @property
    def label(self) -> str:
        """Name as text when present, otherwise the id as text."""
        return str(self.name) if self.name is not None else str(self.id)


@dataclass
class Link:
    """
    A relationship between two nodes.

    Direction (source -> target) is metadata only; every algorithm in this
    package treats the graph as undirected.

    Attributes:
        source: Source node id
        target: Target node id
        type: Free-form relationship tag, never interpreted
        weight: Edge weight, only consulted by weighted path queries
        id: Link identifier, defaults to "source-target-type"
    """

    source: NodeId
    target: NodeId
    type: Optional[str] = None
    weight: float = 1.0
    id: Optional[str] = None

    def __post_init__(self) -> None:
        if self.id is None:
            self.id = f"{self.source}-{self.target}-{self.type or ''}"

    @property
    def is_self_loop(self) -> bool:
        return self.source == self.target

    def endpoints(self) -> Tuple[NodeId, NodeId]:
        return self.source, self.target


@dataclass
class Graph:
    """
    Normalized graph snapshot.

    Built by :func:`~CaseGraph_Analytics.data.normalization.normalize`; every
    link references a node present in ``nodes``.

    Attributes:
        nodes: Nodes with unique ids, in caller order
        links: Links in caller order
    """

    nodes: List[Node] = field(default_factory=list)
    links: List[Link] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._index: Dict[NodeId, Node] = {node.id: node for node in self.nodes}

    @property
    def node_ids(self) -> List[NodeId]:
        return [node.id for node in self.nodes]

    def get_node(self, node_id: NodeId) -> Optional[Node]:
        return self._index.get(node_id)

    def has_node(self, node_id: NodeId) -> bool:
        return node_id in self._index

    def number_of_nodes(self) -> int:
        return len(self.nodes)

    def number_of_links(self) -> int:
        return len(self.links)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)


@dataclass
class NodePosition:
    """
    Layout output record for a single node.

    Attributes:
        id: Node identifier
        x: Horizontal coordinate
        y: Vertical coordinate
    """

    id: NodeId
    x: float
    y: float

    def as_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "x": self.x, "y": self.y}


PositionInput: TypeAlias = Union[
    Iterable[NodePosition], Mapping[NodeId, Union[Tuple[float, float], PositionArray]]
]
