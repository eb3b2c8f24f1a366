"""
TinyGraph - Graph Model
Node and edge collections and the mutations that keep them consistent.

Node ids are always the dense sequence 1..N in collection order. Deleting a
node renumbers every node after it, and edges (stored as id pairs) are
remapped to match. Labels are not touched, so a label such as "node 3" can
outlive the id it was derived from.
"""

import logging
from enum import Enum
from typing import Optional

from config import EditorConfig
from models import Edge, GraphSnapshot, Node

logger = logging.getLogger(__name__)


class ConnectResult(Enum):
    CONNECTED = "connected"
    DUPLICATE = "duplicate"
    SELF_LOOP = "self-loop"


class GraphModel:
    """Owns the node and edge collections."""

    def __init__(self, config: Optional[EditorConfig] = None):
        self.config = config or EditorConfig()
        self.nodes: list[Node] = []
        self.edges: list[Edge] = []

        # Coefficients given to new nodes (adjustable from the UI)
        self.default_speed = self.config.default_speed
        self.default_friction = self.config.default_friction

    def __len__(self) -> int:
        return len(self.nodes)

    # --- Mutations ---
    def create_node(self, x: float, y: float, label_visible: bool = False) -> Node:
        """Append a node at a world position. Existing ids are unaffected."""
        node = Node(
            id=len(self.nodes) + 1,
            x=x,
            y=y,
            label_visible=label_visible,
            radius=self.config.node_radius,
            speed=self.default_speed,
            friction=self.default_friction,
        )
        self.nodes.append(node)
        return node

    def delete_node(self, node: Node) -> None:
        """Remove a node and every edge touching it, then renumber ids."""
        index = self.nodes.index(node)
        removed_id = node.id
        del self.nodes[index]

        remaining = [e for e in self.edges if not e.touches(removed_id)]
        self.edges = [Edge(_shift(e.a, removed_id), _shift(e.b, removed_id)) for e in remaining]
        self._renumber()

    def connect(self, a: Node, b: Node) -> ConnectResult:
        """Add an undirected edge unless it is a self-loop or already exists."""
        if a is b:
            return ConnectResult.SELF_LOOP
        if self.are_connected(a, b):
            return ConnectResult.DUPLICATE
        self.edges.append(Edge(a.id, b.id))
        return ConnectResult.CONNECTED

    # --- Queries ---
    def are_connected(self, a: Node, b: Node) -> bool:
        return any(e.joins(a.id, b.id) for e in self.edges)

    def node_at(self, x: float, y: float) -> Optional[Node]:
        """First node (in collection order) under a world point."""
        for node in self.nodes:
            if node.is_hovered(x, y):
                return node
        return None

    def endpoints(self, edge: Edge) -> tuple[Node, Node]:
        return self.nodes[edge.a - 1], self.nodes[edge.b - 1]

    # --- Snapshots ---
    def snapshot(self) -> GraphSnapshot:
        return GraphSnapshot(
            nodes=tuple(n.to_record() for n in self.nodes),
            edges=tuple((e.a, e.b) for e in self.edges),
        )

    def load_snapshot(self, snapshot: GraphSnapshot, label_visible: bool = False) -> int:
        """
        Replace the graph with fresh nodes built from a snapshot.

        Edges are resolved against the stored ids; an edge whose endpoint
        cannot be resolved (or that would be a self-loop or duplicate) is
        dropped. Returns the number of dropped edges.
        """
        nodes: list[Node] = []
        by_stored_id: dict[int, Node] = {}
        for record in snapshot.nodes:
            node = Node.from_record(record, radius=self.config.node_radius, label_visible=label_visible)
            nodes.append(node)
            by_stored_id.setdefault(record.id, node)

        self.nodes = nodes
        self.edges = []
        self._renumber()

        dropped = 0
        for stored_a, stored_b in snapshot.edges:
            a = by_stored_id.get(stored_a)
            b = by_stored_id.get(stored_b)
            if a is None or b is None:
                logger.debug(f"Dropping edge {stored_a}-{stored_b}: unknown endpoint")
                dropped += 1
                continue
            if self.connect(a, b) is not ConnectResult.CONNECTED:
                logger.debug(f"Dropping edge {stored_a}-{stored_b}: self-loop or duplicate")
                dropped += 1
        return dropped

    def _renumber(self) -> None:
        for i, node in enumerate(self.nodes):
            node.id = i + 1


def _shift(node_id: int, removed_id: int) -> int:
    return node_id - 1 if node_id > removed_id else node_id
