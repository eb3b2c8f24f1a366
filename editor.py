"""
TinyGraph - Editor
The simulation context: graph, camera, interaction state, display toggles,
history and toasts, plus the per-frame tick.

All state is mutated from the GUI thread only. A frame runs input handling
(Qt events delivered between ticks), then `tick()` (hover, physics), then
rendering.
"""

import logging
from typing import Callable, Iterable, Optional

from camera import Camera, WorldBounds
from commands import Command, Gesture, HotkeyMap, PointerButton, resolve_press
from config import EditorConfig
from errors import ImportFormatError
from graph import ConnectResult, GraphModel
from models import GraphSnapshot, Node
from notifications import NotificationQueue
from physics import PhysicsStepper
from undo import HistoryManager

logger = logging.getLogger(__name__)

PAN_MODIFIER = "shift"


class GraphEditor:
    """Owns every piece of scene state and the rules for changing it."""

    def __init__(self, config: Optional[EditorConfig] = None,
                 clock: Optional[Callable[[], float]] = None,
                 width: Optional[float] = None, height: Optional[float] = None):
        self.config = config or EditorConfig()
        self.graph = GraphModel(self.config)
        self.camera = Camera.from_config(self.config)
        self.physics = PhysicsStepper(self.config)
        self.history = HistoryManager(self.graph.snapshot(), self.config.history_capacity)
        self.toasts = NotificationQueue(self.config.toast_duration, self.config.toast_fade, clock)
        self.hotkeys = HotkeyMap.defaults()

        self.width = float(self.config.canvas_width if width is None else width)
        self.height = float(self.config.canvas_height if height is None else height)

        # Transient interaction state
        self.selected: Optional[Node] = None
        self.hovered: Optional[Node] = None
        self.dragged: Optional[Node] = None
        self.connecting = False

        # Display toggles
        self.labels_always_visible = False
        self.allow_overlap = False
        self.static_boundary = False

        # Pointer (screen space)
        self.pointer_x = 0.0
        self.pointer_y = 0.0
        self._panning = False

        # Hooks for the window (file dialogs, widget labels)
        self.export_handler: Optional[Callable[[], None]] = None
        self.import_handler: Optional[Callable[[], None]] = None
        self._listeners: list[Callable[[], None]] = []

        self._actions: dict[Command, Callable[[], object]] = {
            Command.CONNECT: self.toggle_connect_mode,
            Command.CANCEL: self.cancel,
            Command.TOGGLE_LABELS: self.toggle_labels,
            Command.TOGGLE_SELECTED_LABEL: self.toggle_selected_label,
            Command.TOGGLE_OVERLAP: self.toggle_overlap,
            Command.TOGGLE_BOUNDARY: self.toggle_boundary,
            Command.RESET_CAMERA: self.reset_camera,
            Command.UNDO: self.undo,
            Command.REDO: self.redo,
            Command.EXPORT: self.request_export,
            Command.IMPORT: self.request_import,
            Command.DUMP: self.dump,
        }

    # --- Listeners ---
    def add_listener(self, callback: Callable[[], None]) -> None:
        """Called whenever a toggle or mode changes."""
        self._listeners.append(callback)

    def _notify(self) -> None:
        for callback in self._listeners:
            callback()

    # --- Geometry ---
    @property
    def pointer_world(self) -> tuple[float, float]:
        return self.camera.screen_to_world(self.pointer_x, self.pointer_y)

    def world_bounds(self) -> WorldBounds:
        if self.static_boundary:
            return WorldBounds(0.0, 0.0, self.width, self.height)
        return self.camera.visible_bounds(self.width, self.height)

    def resize(self, width: float, height: float) -> None:
        self.width = float(width)
        self.height = float(height)
        self.physics.clamp_targets(self.graph.nodes, self.world_bounds())

    # --- Frame ---
    def update_hover(self) -> None:
        self.hovered = self.graph.node_at(*self.pointer_world)

    def tick(self) -> None:
        """Advance one frame."""
        self.toasts.expire()
        self.update_hover()
        if self.dragged is not None:
            self.dragged.move_to(*self.pointer_world)
        self.physics.step(self.graph.nodes, self.world_bounds(),
                          allow_overlap=self.allow_overlap, dragged=self.dragged)

    def connection_preview(self) -> Optional[tuple[float, float, float, float]]:
        """World-space line from the selected node to the pointer while connecting."""
        if self.connecting and self.selected is not None:
            wx, wy = self.pointer_world
            return self.selected.x, self.selected.y, wx, wy
        return None

    # --- Pointer Input ---
    def pointer_moved(self, sx: float, sy: float) -> None:
        dx, dy = sx - self.pointer_x, sy - self.pointer_y
        self.pointer_x, self.pointer_y = sx, sy
        if self._panning:
            self.camera.pan(dx, dy)
        if self.dragged is not None:
            self.dragged.move_to(*self.pointer_world)

    def pointer_pressed(self, button: PointerButton, sx: float, sy: float,
                        modifiers: Iterable[str] = ()) -> Gesture:
        self.pointer_x, self.pointer_y = sx, sy
        self.update_hover()
        gesture = resolve_press(button, self.hovered, self.selected, self.connecting,
                                pan_modifier=PAN_MODIFIER in set(modifiers))
        wx, wy = self.pointer_world

        if gesture is Gesture.DELETE:
            self.delete_node(self.hovered)
        elif gesture is Gesture.CREATE:
            self.create_node(wx, wy)
        elif gesture is Gesture.SELECT:
            self.select(self.hovered)
        elif gesture is Gesture.CONNECT:
            self.connect_to(self.hovered)
        elif gesture is Gesture.BEGIN_DRAG:
            self.begin_drag(self.hovered)
        elif gesture is Gesture.PAN:
            self._panning = True
        return gesture

    def pointer_released(self, button: PointerButton, sx: float, sy: float) -> None:
        self.pointer_moved(sx, sy)
        if button is PointerButton.PRIMARY and self.dragged is not None:
            self.end_drag()
        if button in (PointerButton.PRIMARY, PointerButton.MIDDLE):
            self._panning = False

    def wheel(self, notches: float, sx: float, sy: float) -> None:
        self.camera.apply_zoom(notches, sx, sy)

    # --- Keyboard ---
    def key_pressed(self, modifiers: Iterable[str], key: str) -> bool:
        """Run the bound command. Returns False for unbound combos."""
        command = self.hotkeys.resolve(modifiers, key)
        if command is None:
            return False
        self.execute(command)
        return True

    def execute(self, command: Command) -> None:
        logger.debug(f"Command: {command.value}")
        self._actions[command]()

    # --- Graph Mutations ---
    def create_node(self, wx: float, wy: float) -> Node:
        node = self.graph.create_node(wx, wy, label_visible=self.labels_always_visible)
        self.selected = None
        self.connecting = False
        self.record()
        self._notify()
        return node

    def delete_node(self, node: Node) -> None:
        label = node.label
        self.graph.delete_node(node)
        if self.selected is node:
            self.selected = None
            self.connecting = False
        if self.hovered is node:
            self.hovered = None
        if self.dragged is node:
            self.dragged = None
        self.record()
        self.toasts.push(f"Removed {label}")
        self._notify()

    def select(self, node: Optional[Node]) -> None:
        self.selected = node

    def connect_to(self, target: Optional[Node]) -> Optional[ConnectResult]:
        """Try to connect the selected node to `target` (connect mode click)."""
        if self.selected is None:
            self.toasts.push("Please select a starting node first.")
            return None
        if target is None:
            self.toasts.push("Click a node to connect to.")
            return None

        source = self.selected
        result = self.graph.connect(source, target)
        if result is ConnectResult.SELF_LOOP:
            self.toasts.push("A node cannot be connected to itself.")
            return result

        if result is ConnectResult.CONNECTED:
            self.record()
            self.toasts.push(f"Connected {source.label} → {target.label}")
        else:
            self.toasts.push("These nodes are already connected.")

        self.connecting = False
        self.selected = None
        self._notify()
        return result

    def begin_drag(self, node: Node) -> None:
        self.dragged = node
        node.move_to(*self.pointer_world)

    def end_drag(self) -> None:
        self.dragged = None
        self.record()

    # --- Modes and Toggles ---
    def toggle_connect_mode(self) -> bool:
        if self.selected is None:
            self.toasts.push("Please select a starting node first.")
            return False
        self.connecting = not self.connecting
        self._notify()
        return True

    def cancel(self) -> None:
        self.connecting = False
        self.selected = None
        self._notify()

    def toggle_labels(self) -> None:
        self.labels_always_visible = not self.labels_always_visible
        for node in self.graph.nodes:
            node.label_visible = self.labels_always_visible
        self._notify()

    def toggle_selected_label(self) -> None:
        if self.selected is not None:
            self.selected.label_visible = not self.selected.label_visible

    def toggle_overlap(self) -> None:
        self.allow_overlap = not self.allow_overlap
        self._notify()

    def toggle_boundary(self) -> None:
        self.static_boundary = not self.static_boundary
        self._notify()

    def reset_camera(self) -> None:
        self.camera.reset()

    def set_speed(self, speed: float) -> None:
        self.graph.default_speed = speed
        for node in self.graph.nodes:
            node.speed = speed
        self._notify()

    def set_friction(self, friction: float) -> None:
        self.graph.default_friction = friction
        for node in self.graph.nodes:
            node.friction = friction
        self._notify()

    # --- History ---
    def record(self) -> None:
        self.history.record(self.graph.snapshot())

    def undo(self) -> bool:
        snapshot = self.history.undo()
        if snapshot is None:
            self.toasts.push("Nothing to undo.")
            return False
        self.restore(snapshot)
        self.toasts.push("Undo")
        return True

    def redo(self) -> bool:
        snapshot = self.history.redo()
        if snapshot is None:
            self.toasts.push("Nothing to redo.")
            return False
        self.restore(snapshot)
        self.toasts.push("Redo")
        return True

    def restore(self, snapshot: GraphSnapshot) -> None:
        """Rebuild the graph from a snapshot and drop references to old nodes."""
        dropped = self.graph.load_snapshot(snapshot, label_visible=self.labels_always_visible)
        if dropped:
            logger.debug(f"Dropped {dropped} unresolved edge(s) while restoring")
        self.selected = None
        self.hovered = None
        self.dragged = None
        self.connecting = False
        self._notify()

    # --- Persistence ---
    def snapshot(self) -> GraphSnapshot:
        return self.graph.snapshot()

    def export_json(self) -> str:
        return self.graph.snapshot().to_json()

    def load_json(self, text: str) -> bool:
        """Replace the scene with a graph document. Leaves the scene untouched on error."""
        try:
            snapshot = GraphSnapshot.from_json(text)
        except ImportFormatError as e:
            logger.warning(f"Could not load graph: {e}")
            self.toasts.push(f"Could not load graph: {e}")
            return False
        self.load_snapshot(snapshot)
        return True

    def load_snapshot(self, snapshot: GraphSnapshot) -> None:
        self.restore(snapshot)
        self.camera.reset()
        self.history.reset(self.graph.snapshot())
        self.toasts.push(f"Loaded {len(self.graph)} nodes, {len(self.graph.edges)} edges")

    def request_export(self) -> None:
        if self.export_handler is None:
            self.toasts.push("Export is not available.")
            return
        self.export_handler()

    def request_import(self) -> None:
        if self.import_handler is None:
            self.toasts.push("Import is not available.")
            return
        self.import_handler()

    def dump(self) -> None:
        logger.info(f"Graph snapshot:\n{self.export_json()}")
