"""
TinyGraph - Custom Widgets
Control panel dock with mode toggles and physics sliders.
"""

from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QLabel, QPushButton, QDockWidget, QGroupBox,
    QFormLayout, QSlider
)
from PyQt6.QtCore import Qt

from editor import GraphEditor


def toggle_text(title: str, enabled: bool) -> str:
    """Button caption in the form 'Title | ON'."""
    return f"{title} | {'ON' if enabled else 'OFF'}"


# Sliders work in integer steps; values are step / SLIDER_SCALE
SLIDER_SCALE = 100


class ControlPanel(QDockWidget):
    """
    Buttons call the editor's toggles; every label is refreshed from the
    editor whenever its state changes.
    """

    def __init__(self, editor: GraphEditor, parent=None):
        super().__init__("Controls", parent)
        self.editor = editor
        self.setAllowedAreas(Qt.DockWidgetArea.LeftDockWidgetArea | Qt.DockWidgetArea.RightDockWidgetArea)
        self.setFeatures(QDockWidget.DockWidgetFeature.NoDockWidgetFeatures)
        self.setMinimumWidth(220)
        # Keep keyboard focus on the canvas
        self.setFocusPolicy(Qt.FocusPolicy.NoFocus)

        self._setup_ui()
        editor.add_listener(self.refresh)
        self.refresh()

    def _setup_ui(self) -> None:
        wrapper = QWidget()
        layout = QVBoxLayout(wrapper)
        layout.setContentsMargins(10, 10, 10, 10)

        # --- Modes ---
        modes_group = QGroupBox("Modes")
        modes_layout = QVBoxLayout(modes_group)
        modes_layout.setContentsMargins(10, 15, 10, 10)

        self.connect_button = self._make_toggle(self.editor.toggle_connect_mode)
        self.label_button = self._make_toggle(self.editor.toggle_labels)
        self.overlap_button = self._make_toggle(self.editor.toggle_overlap)
        self.boundary_button = self._make_toggle(self.editor.toggle_boundary)
        for button in (self.connect_button, self.label_button,
                       self.overlap_button, self.boundary_button):
            modes_layout.addWidget(button)

        reset_button = QPushButton("Reset camera")
        reset_button.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        reset_button.clicked.connect(self.editor.reset_camera)
        modes_layout.addWidget(reset_button)
        layout.addWidget(modes_group)

        # --- Physics ---
        physics_group = QGroupBox("Physics")
        physics_layout = QFormLayout(physics_group)
        physics_layout.setContentsMargins(10, 15, 10, 10)

        self.speed_label = QLabel()
        self.speed_slider = self._make_slider(1, 50, self.graph_speed_steps(), self._on_speed_changed)
        physics_layout.addRow(self.speed_label)
        physics_layout.addRow(self.speed_slider)

        self.friction_label = QLabel()
        self.friction_slider = self._make_slider(10, 95, self.graph_friction_steps(), self._on_friction_changed)
        physics_layout.addRow(self.friction_label)
        physics_layout.addRow(self.friction_slider)
        layout.addWidget(physics_group)

        # --- Help ---
        help_label = QLabel(
            "Left click: add / select node\n"
            "Left drag selected node: move\n"
            "Right click: remove node\n"
            "Shift/middle drag: pan, wheel: zoom\n"
            "C connect, Esc cancel, L labels\n"
            "Ctrl+Z / Ctrl+Y: undo / redo"
        )
        help_label.setWordWrap(True)
        layout.addWidget(help_label)

        layout.addStretch()
        self.setWidget(wrapper)

    def _make_toggle(self, slot) -> QPushButton:
        button = QPushButton()
        button.setCheckable(True)
        button.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        button.clicked.connect(lambda _checked: self._trigger(slot))
        return button

    def _make_slider(self, minimum: int, maximum: int, value: int, slot) -> QSlider:
        slider = QSlider(Qt.Orientation.Horizontal)
        slider.setRange(minimum, maximum)
        slider.setValue(value)
        slider.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        slider.valueChanged.connect(slot)
        return slider

    def _trigger(self, slot) -> None:
        slot()
        # A rejected toggle (e.g. connect without selection) must not stay checked
        self.refresh()

    def graph_speed_steps(self) -> int:
        return round(self.editor.graph.default_speed * SLIDER_SCALE)

    def graph_friction_steps(self) -> int:
        return round(self.editor.graph.default_friction * SLIDER_SCALE)

    def _on_speed_changed(self, value: int) -> None:
        self.editor.set_speed(value / SLIDER_SCALE)

    def _on_friction_changed(self, value: int) -> None:
        self.editor.set_friction(value / SLIDER_SCALE)

    def refresh(self) -> None:
        """Reflect the editor's toggles and coefficients in the widgets."""
        editor = self.editor
        for button, title, enabled in (
            (self.connect_button, "Connect Node", editor.connecting),
            (self.label_button, "Always show labels", editor.labels_always_visible),
            (self.overlap_button, "Allow overlap", editor.allow_overlap),
            (self.boundary_button, "Static boundary", editor.static_boundary),
        ):
            button.setText(toggle_text(title, enabled))
            button.setChecked(enabled)

        self.speed_label.setText(f"Speed: {editor.graph.default_speed:.2f}")
        self.friction_label.setText(f"Friction: {editor.graph.default_friction:.2f}")
