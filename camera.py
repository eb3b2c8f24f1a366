"""
TinyGraph - Camera
Screen <-> world mapping: screen = world * zoom + offset.
"""

from dataclasses import dataclass

from config import EditorConfig


@dataclass(frozen=True)
class WorldBounds:
    """World-space rectangle used for boundary containment."""
    left: float
    top: float
    right: float
    bottom: float

    def clamp(self, x: float, y: float, inset: float = 0.0) -> tuple[float, float]:
        """Clamp a point into the bounds shrunk by `inset` on every side."""
        left, right = self.left + inset, self.right - inset
        top, bottom = self.top + inset, self.bottom - inset
        # A viewport smaller than the inset collapses to its centre
        if left > right:
            left = right = (self.left + self.right) / 2
        if top > bottom:
            top = bottom = (self.top + self.bottom) / 2
        return max(left, min(right, x)), max(top, min(bottom, y))


class Camera:
    """Zoom and pan state shared by input handling, physics and rendering."""

    def __init__(self, min_zoom: float = 0.1, max_zoom: float = 5.0, zoom_step: float = 1.15):
        self.min_zoom = min_zoom
        self.max_zoom = max_zoom
        self.zoom_step = zoom_step
        self.zoom = 1.0
        self.offset_x = 0.0
        self.offset_y = 0.0

    @classmethod
    def from_config(cls, config: EditorConfig) -> "Camera":
        return cls(config.min_zoom, config.max_zoom, config.zoom_step)

    def screen_to_world(self, sx: float, sy: float) -> tuple[float, float]:
        return (sx - self.offset_x) / self.zoom, (sy - self.offset_y) / self.zoom

    def world_to_screen(self, wx: float, wy: float) -> tuple[float, float]:
        return wx * self.zoom + self.offset_x, wy * self.zoom + self.offset_y

    def clamp_zoom(self, zoom: float) -> float:
        return max(self.min_zoom, min(self.max_zoom, zoom))

    def apply_zoom(self, delta: float, pivot_x: float, pivot_y: float) -> None:
        """
        Zoom by `delta` wheel notches (positive zooms in), keeping the world
        point under the pivot fixed on screen.
        """
        world_x, world_y = self.screen_to_world(pivot_x, pivot_y)
        self.zoom = self.clamp_zoom(self.zoom * self.zoom_step ** delta)
        self.offset_x = pivot_x - world_x * self.zoom
        self.offset_y = pivot_y - world_y * self.zoom

    def pan(self, dx: float, dy: float) -> None:
        """Shift the view by a screen-space delta."""
        self.offset_x += dx
        self.offset_y += dy

    def reset(self) -> None:
        self.zoom = 1.0
        self.offset_x = 0.0
        self.offset_y = 0.0

    def visible_bounds(self, width: float, height: float) -> WorldBounds:
        """The viewport rectangle projected into world space."""
        left, top = self.screen_to_world(0, 0)
        right, bottom = self.screen_to_world(width, height)
        return WorldBounds(left, top, right, bottom)
