"""
TinyGraph - Physics
Per-frame force integration for nodes.

Each frame every node sums three contributions into its velocity:
pairwise repulsion, boundary containment and a spring toward its target.
Friction and the velocity clamp are then applied once, followed by the
position update. Repulsion is O(N^2); the editor targets tens of nodes.
"""

import math
from typing import Optional, Sequence

from camera import WorldBounds
from config import EditorConfig
from models import Node

_DEFAULTS = EditorConfig()


def repulsion_force(node: Node, others: Sequence[Node],
                    strength: float = _DEFAULTS.repulsion_strength,
                    min_separation: float = _DEFAULTS.min_separation) -> tuple[float, float]:
    """Push away from every node closer than two radii."""
    fx = fy = 0.0
    reach = node.radius * 2
    for other in others:
        if other is node:
            continue
        dx = node.x - other.x
        dy = node.y - other.y
        d = math.hypot(dx, dy)
        if min_separation < d < reach:
            force = (reach - d) * strength
            fx += dx / d * force
            fy += dy / d * force
    return fx, fy


def boundary_force(node: Node, bounds: WorldBounds,
                   strength: float = _DEFAULTS.boundary_strength) -> tuple[float, float]:
    """Restoring force proportional to how far the node pokes out of bounds."""
    fx = fy = 0.0
    r = node.radius
    if node.x - r < bounds.left:
        fx += (bounds.left - (node.x - r)) * strength
    if node.x + r > bounds.right:
        fx -= (node.x + r - bounds.right) * strength
    if node.y - r < bounds.top:
        fy += (bounds.top - (node.y - r)) * strength
    if node.y + r > bounds.bottom:
        fy -= (node.y + r - bounds.bottom) * strength
    return fx, fy


def spring_force(node: Node) -> tuple[float, float]:
    return (node.tx - node.x) * node.speed, (node.ty - node.y) * node.speed


def _clamp(value: float, limit: float) -> float:
    return max(-limit, min(limit, value))


class PhysicsStepper:
    """Advances every node by one frame."""

    def __init__(self, config: Optional[EditorConfig] = None):
        self.config = config or EditorConfig()

    def step(self, nodes: Sequence[Node], bounds: WorldBounds,
             allow_overlap: bool = False, dragged: Optional[Node] = None) -> None:
        cfg = self.config

        # Undragged nodes rest where they are
        for node in nodes:
            if node is not dragged:
                node.move_to(node.x, node.y)

        # Accumulate against positions from the start of the frame
        forces = []
        for node in nodes:
            fx, fy = 0.0, 0.0
            if not allow_overlap:
                rx, ry = repulsion_force(node, nodes, cfg.repulsion_strength, cfg.min_separation)
                fx += rx
                fy += ry
            bx, by = boundary_force(node, bounds, cfg.boundary_strength)
            sx, sy = spring_force(node)
            forces.append((fx + bx + sx, fy + by + sy))

        for node, (fx, fy) in zip(nodes, forces):
            vx = (node.vx + fx) * node.friction
            vy = (node.vy + fy) * node.friction
            node.vx = _clamp(vx, cfg.max_velocity)
            node.vy = _clamp(vy, cfg.max_velocity)
            node.x += node.vx
            node.y += node.vy

    def clamp_targets(self, nodes: Sequence[Node], bounds: WorldBounds) -> None:
        """Pull every target back inside the bounds (used after a resize)."""
        for node in nodes:
            node.tx, node.ty = bounds.clamp(node.tx, node.ty, inset=node.radius)
