"""
TinyGraph - Graphics Items
QGraphicsItem subclasses that mirror the editor's nodes and edges.
Items are display-only: input goes through the view to the editor.
"""

from PyQt6.QtWidgets import (
    QGraphicsEllipseItem, QGraphicsLineItem,
    QStyleOptionGraphicsItem, QWidget
)
from PyQt6.QtCore import Qt, QRectF, QLineF
from PyQt6.QtGui import QPainter, QPen, QBrush, QColor, QFont

from models import Node
from utils import Theme


# ============================================================================
# Node Item
# ============================================================================
class NodeItem(QGraphicsEllipseItem):
    """
    A circle following one live Node.
    Hover, selection and drag are drawn as rings just outside the outline;
    the label sits below the circle when visible or when a ring is shown.
    """

    RING_GROWTH = 7
    LABEL_OFFSET = 7
    LABEL_WIDTH = 120
    LABEL_HEIGHT = 16

    def __init__(self, node: Node):
        super().__init__()
        self.node = node
        self.hovered = False
        self.selected = False
        self.dragged = False

        self.setAcceptedMouseButtons(Qt.MouseButton.NoButton)
        self.setZValue(5)
        self.sync()

    def sync(self) -> None:
        """Copy position and radius from the node."""
        r = self.node.radius
        if self.rect().width() != 2 * r:
            self.prepareGeometryChange()
            self.setRect(-r, -r, 2 * r, 2 * r)
        self.setPos(self.node.x, self.node.y)

    def set_state(self, hovered: bool, selected: bool, dragged: bool) -> None:
        if (hovered, selected, dragged) != (self.hovered, self.selected, self.dragged):
            self.hovered, self.selected, self.dragged = hovered, selected, dragged
            self.update()

    def _rings(self) -> list[str]:
        rings = []
        if self.hovered:
            rings.append(Theme.HOVER_RING)
        if self.selected:
            rings.append(Theme.SELECT_RING)
        if self.dragged:
            rings.append(Theme.DRAG_RING)
        return rings

    def boundingRect(self) -> QRectF:
        r = self.node.radius + self.RING_GROWTH
        bottom = self.node.radius + self.LABEL_OFFSET + self.LABEL_HEIGHT
        half = max(r, self.LABEL_WIDTH / 2)
        return QRectF(-half, -r, 2 * half, r + bottom)

    def paint(self, painter: QPainter, option: QStyleOptionGraphicsItem, widget: QWidget = None) -> None:
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.setPen(QPen(QColor(Theme.NODE_OUTLINE), 1))
        painter.setBrush(QBrush(QColor(Theme.NODE_FILL)))
        painter.drawEllipse(self.rect())

        rings = self._rings()
        painter.setBrush(Qt.BrushStyle.NoBrush)
        ring_rect = self.rect().adjusted(
            -self.RING_GROWTH / 2, -self.RING_GROWTH / 2, self.RING_GROWTH / 2, self.RING_GROWTH / 2
        )
        for color in rings:
            painter.setPen(QPen(QColor(color), 1))
            painter.drawEllipse(ring_rect)

        if self.node.label_visible or rings:
            painter.setPen(QColor(Theme.LABEL))
            painter.setFont(QFont("Segoe UI", 9))
            top = self.node.radius + self.LABEL_OFFSET - self.LABEL_HEIGHT / 2
            label_rect = QRectF(-self.LABEL_WIDTH / 2, top, self.LABEL_WIDTH, self.LABEL_HEIGHT)
            painter.drawText(label_rect, Qt.AlignmentFlag.AlignCenter, self.node.label)


# ============================================================================
# Edge Item
# ============================================================================
class EdgeItem(QGraphicsLineItem):
    """A straight line between two node centres, drawn behind the nodes."""

    def __init__(self):
        super().__init__()
        self.setPen(QPen(QColor(Theme.EDGE), 1))
        self.setAcceptedMouseButtons(Qt.MouseButton.NoButton)
        self.setZValue(-1)

    def set_endpoints(self, a: Node, b: Node) -> None:
        line = QLineF(a.x, a.y, b.x, b.y)
        if line != self.line():
            self.setLine(line)


# ============================================================================
# Connection Line (connect mode preview)
# ============================================================================
class ConnectionLineItem(QGraphicsLineItem):
    """Line from the selected node to the pointer while connect mode is on."""

    def __init__(self):
        super().__init__()
        self.setPen(QPen(QColor(Theme.CONNECTION_LINE), 2))
        self.setAcceptedMouseButtons(Qt.MouseButton.NoButton)
        self.setZValue(100)
        self.setVisible(False)

    def show_preview(self, preview) -> None:
        """`preview` is (x1, y1, x2, y2) in world space, or None to hide."""
        if preview is None:
            self.setVisible(False)
            return
        self.setLine(QLineF(*preview))
        self.setVisible(True)
