"""
TinyGraph - Data Models
Live node/edge records and the detached snapshot used for history and files.
"""

from dataclasses import dataclass, field
from typing import Optional
import json
import math

from config import EditorConfig
from errors import ImportFormatError

_DEFAULTS = EditorConfig()


def node_label(node_id: int) -> str:
    """Default display label for a node id."""
    return f"node {node_id}"


@dataclass(eq=False)
class Node:
    """
    A simulated node. Identity is the object itself; `id` is its 1-based
    position in the graph and changes when earlier nodes are deleted.
    """
    id: int
    x: float
    y: float
    label: str = ""
    label_visible: bool = False
    radius: float = _DEFAULTS.node_radius
    speed: float = _DEFAULTS.default_speed
    friction: float = _DEFAULTS.default_friction
    tx: Optional[float] = None
    ty: Optional[float] = None
    vx: float = 0.0
    vy: float = 0.0

    def __post_init__(self):
        if self.tx is None:
            self.tx = self.x
        if self.ty is None:
            self.ty = self.y
        if not self.label:
            self.label = node_label(self.id)

    def move_to(self, x: float, y: float) -> None:
        """Set the spring target."""
        self.tx = x
        self.ty = y

    def distance_to(self, x: float, y: float) -> float:
        return math.hypot(self.x - x, self.y - y)

    def is_hovered(self, x: float, y: float) -> bool:
        """True if the world point lies strictly inside the node."""
        return self.distance_to(x, y) < self.radius

    def to_record(self) -> "NodeRecord":
        return NodeRecord(
            id=self.id,
            x=self.x,
            y=self.y,
            label=self.label,
            speed=self.speed,
            friction=self.friction,
            tx=self.tx,
            ty=self.ty,
        )

    @classmethod
    def from_record(cls, record: "NodeRecord", radius: float = _DEFAULTS.node_radius,
                    label_visible: bool = False) -> "Node":
        return cls(
            id=record.id,
            x=record.x,
            y=record.y,
            label=record.label,
            label_visible=label_visible,
            radius=radius,
            speed=record.speed,
            friction=record.friction,
            tx=record.tx,
            ty=record.ty,
        )


@dataclass(frozen=True)
class Edge:
    """Undirected connection between two node ids."""
    a: int
    b: int

    @property
    def key(self) -> tuple[int, int]:
        """Orientation-independent identity of the edge."""
        return (self.a, self.b) if self.a <= self.b else (self.b, self.a)

    def touches(self, node_id: int) -> bool:
        return self.a == node_id or self.b == node_id

    def joins(self, a: int, b: int) -> bool:
        return (self.a == a and self.b == b) or (self.a == b and self.b == a)


# ============================================================================
# Snapshot (history entries and persisted documents)
# ============================================================================
@dataclass(frozen=True)
class NodeRecord:
    """Persisted fields of a node."""
    id: int
    x: float
    y: float
    label: str
    speed: float = _DEFAULTS.default_speed
    friction: float = _DEFAULTS.default_friction
    tx: Optional[float] = None
    ty: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            "x": self.x,
            "y": self.y,
            "id": self.id,
            "label": self.label,
            "speed": self.speed,
            "friction": self.friction,
            "tx": self.x if self.tx is None else self.tx,
            "ty": self.y if self.ty is None else self.ty,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "NodeRecord":
        if not isinstance(data, dict):
            raise ImportFormatError(f"Node entry must be an object, got {type(data).__name__}")

        node_id = data.get("id")
        if not _is_int(node_id):
            raise ImportFormatError(f"Node id must be an integer, got {node_id!r}")

        x = _number(data, "x")
        y = _number(data, "y")
        label = data.get("label", node_label(node_id))
        if not isinstance(label, str):
            raise ImportFormatError(f"Label of node {node_id} must be a string")

        return cls(
            id=node_id,
            x=x,
            y=y,
            label=label,
            speed=_number(data, "speed", _DEFAULTS.default_speed),
            friction=_number(data, "friction", _DEFAULTS.default_friction),
            tx=_number(data, "tx", x),
            ty=_number(data, "ty", y),
        )


@dataclass(frozen=True)
class GraphSnapshot:
    """
    Fully detached copy of the graph. Edges are stored as id pairs so the
    snapshot survives serialization.
    """
    nodes: tuple[NodeRecord, ...] = ()
    edges: tuple[tuple[int, int], ...] = ()

    def to_dict(self) -> dict:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [[a, b] for a, b in self.edges],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "GraphSnapshot":
        if not isinstance(data, dict):
            raise ImportFormatError("Graph document must be an object")

        nodes = data.get("nodes")
        edges = data.get("edges", [])
        if not isinstance(nodes, list):
            raise ImportFormatError("'nodes' must be a list")
        if not isinstance(edges, list):
            raise ImportFormatError("'edges' must be a list")

        pairs = []
        for entry in edges:
            if not isinstance(entry, (list, tuple)) or len(entry) != 2 \
                    or not all(_is_int(v) for v in entry):
                raise ImportFormatError(f"Edge entry must be a pair of integer ids, got {entry!r}")
            pairs.append((entry[0], entry[1]))

        return cls(
            nodes=tuple(NodeRecord.from_dict(n) for n in nodes),
            edges=tuple(pairs),
        )

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_json(cls, json_str: str) -> "GraphSnapshot":
        """Deserialize from JSON string."""
        try:
            data = json.loads(json_str)
        except (ValueError, TypeError, RecursionError) as e:
            raise ImportFormatError(f"Invalid JSON: {e}") from e
        return cls.from_dict(data)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _number(data: dict, key: str, default: Optional[float] = None) -> float:
    if key not in data:
        if default is None:
            raise ImportFormatError(f"Missing numeric field '{key}'")
        return default
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ImportFormatError(f"Field '{key}' must be a finite number, got {value!r}")
    try:
        number = float(value)
    except OverflowError as e:
        raise ImportFormatError(f"Field '{key}' is out of range") from e
    if not math.isfinite(number):
        raise ImportFormatError(f"Field '{key}' must be a finite number, got {value!r}")
    return number
