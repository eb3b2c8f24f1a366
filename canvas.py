"""
TinyGraph - Canvas
QGraphicsScene/QGraphicsView pair that drives the frame loop, shows the
editor's scene through its camera and translates Qt input events for the
editor.
"""

from typing import Optional

from PyQt6.QtWidgets import QFrame, QGraphicsScene, QGraphicsView
from PyQt6.QtCore import Qt, QRectF, QTimer
from PyQt6.QtGui import (
    QPainter, QPen, QBrush, QColor, QFont, QTransform, QMouseEvent, QWheelEvent, QKeyEvent
)

from commands import PointerButton
from editor import GraphEditor
from graphics_items import ConnectionLineItem, EdgeItem, NodeItem
from models import Node
from utils import Theme


# Qt key codes -> key names used in hotkey combos
QT_KEY_NAMES = {
    Qt.Key.Key_Return.value: "enter",
    Qt.Key.Key_Enter.value: "enter",
    Qt.Key.Key_Escape.value: "escape",
    Qt.Key.Key_Up.value: "up",
    Qt.Key.Key_Down.value: "down",
    Qt.Key.Key_Left.value: "left",
    Qt.Key.Key_Right.value: "right",
    Qt.Key.Key_Space.value: "space",
    Qt.Key.Key_Tab.value: "tab",
    Qt.Key.Key_Backspace.value: "backspace",
    Qt.Key.Key_Delete.value: "delete",
    Qt.Key.Key_PageUp.value: "pageup",
    Qt.Key.Key_PageDown.value: "pagedown",
    Qt.Key.Key_Home.value: "home",
    Qt.Key.Key_End.value: "end",
}

MODIFIER_NAMES = (
    (Qt.KeyboardModifier.ControlModifier, "ctrl"),
    (Qt.KeyboardModifier.ShiftModifier, "shift"),
    (Qt.KeyboardModifier.AltModifier, "alt"),
)

MOUSE_BUTTONS = {
    Qt.MouseButton.LeftButton: PointerButton.PRIMARY,
    Qt.MouseButton.RightButton: PointerButton.SECONDARY,
    Qt.MouseButton.MiddleButton: PointerButton.MIDDLE,
}

WHEEL_NOTCH = 120


def _key_value(key) -> int:
    return key.value if isinstance(key, Qt.Key) else int(key)


def key_name_for(key, text: str = "") -> Optional[str]:
    """Key name for a Qt key code, or None for keys with no name (e.g. bare modifiers)."""
    value = _key_value(key)
    if value in QT_KEY_NAMES:
        return QT_KEY_NAMES[value]
    # Letters and digits by code: with ctrl held, text() is a control character
    if Qt.Key.Key_A.value <= value <= Qt.Key.Key_Z.value or Qt.Key.Key_0.value <= value <= Qt.Key.Key_9.value:
        return chr(value).lower()
    if len(text) == 1 and text.isprintable():
        return text.lower()
    return None


def modifier_names(modifiers) -> list[str]:
    return [name for flag, name in MODIFIER_NAMES if modifiers & flag]


def pointer_button_for(button) -> Optional[PointerButton]:
    return MOUSE_BUTTONS.get(button)


# ============================================================================
# Graph Scene
# ============================================================================
class GraphScene(QGraphicsScene):
    """
    Keeps one graphics item per live node and edge, synced from the editor
    once per frame. Nodes are matched by object identity, so items survive
    id renumbering but not a history restore.
    """

    def __init__(self, editor: GraphEditor, parent=None):
        super().__init__(parent)
        self.editor = editor
        self._bg_color = QColor(Theme.BACKGROUND)

        self._node_items: dict[Node, NodeItem] = {}
        self._edge_items: list[EdgeItem] = []
        self._connection_line = ConnectionLineItem()
        self.addItem(self._connection_line)

    def drawBackground(self, painter: QPainter, rect: QRectF) -> None:
        painter.fillRect(rect, self._bg_color)

    @property
    def node_items(self) -> dict[Node, NodeItem]:
        return self._node_items

    @property
    def edge_items(self) -> list[EdgeItem]:
        return self._edge_items

    @property
    def connection_line(self) -> ConnectionLineItem:
        return self._connection_line

    def sync(self) -> None:
        """Match the items to the editor's current graph and interaction state."""
        editor = self.editor
        graph = editor.graph

        live = set(graph.nodes)
        for node in [n for n in self._node_items if n not in live]:
            self.removeItem(self._node_items.pop(node))
        for node in graph.nodes:
            item = self._node_items.get(node)
            if item is None:
                item = NodeItem(node)
                self._node_items[node] = item
                self.addItem(item)
            item.sync()
            item.set_state(node is editor.hovered, node is editor.selected, node is editor.dragged)

        while len(self._edge_items) > len(graph.edges):
            self.removeItem(self._edge_items.pop())
        while len(self._edge_items) < len(graph.edges):
            item = EdgeItem()
            self._edge_items.append(item)
            self.addItem(item)
        for item, edge in zip(self._edge_items, graph.edges):
            item.set_endpoints(*graph.endpoints(edge))

        self._connection_line.show_preview(editor.connection_preview())


# ============================================================================
# Graph Canvas (view)
# ============================================================================
class GraphCanvas(QGraphicsView):
    """
    Drives the frame loop and shows the scene through the editor's camera.
    The view transform is set from the camera each frame; toasts are drawn
    in viewport space over the scene.
    """

    TOAST_WIDTH = 300
    TOAST_HEIGHT = 30
    TOAST_SPACING = 40

    def __init__(self, editor: GraphEditor, parent=None):
        scene = GraphScene(editor)
        super().__init__(scene, parent)
        scene.setParent(self)
        self.graph_scene = scene
        self.editor = editor

        # View settings
        self.setRenderHint(QPainter.RenderHint.Antialiasing)
        self.setViewportUpdateMode(QGraphicsView.ViewportUpdateMode.FullViewportUpdate)
        self.setTransformationAnchor(QGraphicsView.ViewportAnchor.NoAnchor)
        self.setResizeAnchor(QGraphicsView.ViewportAnchor.NoAnchor)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setFrameShape(QFrame.Shape.NoFrame)
        self.setMouseTracking(True)
        self.viewport().setMouseTracking(True)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setMinimumSize(200, 150)
        self.resize(editor.config.canvas_width, editor.config.canvas_height)

        self._timer = QTimer(self)
        self._timer.setInterval(editor.config.frame_interval)
        self._timer.timeout.connect(self._on_frame)

    def start(self) -> None:
        self._timer.start()

    def stop(self) -> None:
        self._timer.stop()

    def _on_frame(self) -> None:
        self.editor.tick()
        self.refresh()

    def refresh(self) -> None:
        """Sync items and the camera transform, then repaint."""
        self.graph_scene.sync()
        self._apply_camera()
        self.viewport().update()

    def _apply_camera(self) -> None:
        camera = self.editor.camera
        bounds = camera.visible_bounds(self.viewport().width(), self.viewport().height())
        self.setTransform(QTransform.fromScale(camera.zoom, camera.zoom))
        self.setSceneRect(QRectF(bounds.left, bounds.top, bounds.right - bounds.left, bounds.bottom - bounds.top))

    # --- Toasts ---
    def drawForeground(self, painter: QPainter, rect: QRectF) -> None:
        queue = self.editor.toasts
        painter.save()
        painter.resetTransform()
        painter.setFont(QFont("Segoe UI", 9))
        y = 20
        for toast in queue.active():
            alpha = queue.alpha(toast)

            bg = QColor(Theme.TOAST_BG)
            bg.setAlpha(alpha)
            border = QColor(Theme.TOAST_TEXT)
            border.setAlpha(alpha)
            painter.setPen(QPen(border, 1))
            painter.setBrush(QBrush(bg))
            painter.drawRoundedRect(QRectF(20, y, self.TOAST_WIDTH, self.TOAST_HEIGHT), 5, 5)

            painter.setPen(border)
            painter.drawText(
                QRectF(30, y, self.TOAST_WIDTH - 20, self.TOAST_HEIGHT),
                Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignVCenter,
                toast.message,
            )
            y += self.TOAST_SPACING
        painter.restore()

    # --- Input ---
    def mousePressEvent(self, event: QMouseEvent) -> None:
        button = pointer_button_for(event.button())
        if button is None:
            super().mousePressEvent(event)
            return
        pos = event.position()
        self.editor.pointer_pressed(button, pos.x(), pos.y(), modifier_names(event.modifiers()))
        event.accept()

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        pos = event.position()
        self.editor.pointer_moved(pos.x(), pos.y())
        event.accept()

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        button = pointer_button_for(event.button())
        if button is None:
            super().mouseReleaseEvent(event)
            return
        pos = event.position()
        self.editor.pointer_released(button, pos.x(), pos.y())
        event.accept()

    def mouseDoubleClickEvent(self, event: QMouseEvent) -> None:
        # Second click of a double click counts as a press
        self.mousePressEvent(event)

    def wheelEvent(self, event: QWheelEvent) -> None:
        notches = event.angleDelta().y() / WHEEL_NOTCH
        if notches:
            pos = event.position()
            self.editor.wheel(notches, pos.x(), pos.y())
        event.accept()

    def keyPressEvent(self, event: QKeyEvent) -> None:
        name = key_name_for(event.key(), event.text())
        if name is not None and self.editor.key_pressed(modifier_names(event.modifiers()), name):
            event.accept()
            return
        super().keyPressEvent(event)

    def contextMenuEvent(self, event) -> None:
        # Secondary click deletes; no context menu
        event.accept()

    def resizeEvent(self, event) -> None:
        super().resizeEvent(event)
        self.editor.resize(self.viewport().width(), self.viewport().height())
        self._apply_camera()
