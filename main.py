"""
TinyGraph - Main Application
Interactive graph editor: place, connect, drag and delete nodes on a
pannable, zoomable canvas with light physics.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from PyQt6.QtWidgets import (
    QApplication, QMainWindow, QStatusBar, QFileDialog
)
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction

from canvas import GraphCanvas
from commands import Command
from config import EditorConfig, load_config
from editor import GraphEditor
from errors import ImportFormatError
from logging_config import setup_logging
from utils import (
    DEFAULT_GRAPH_FILENAME, GRAPH_FILE_FILTER, Theme, read_graph_file, write_graph_file
)
from widgets import ControlPanel

logger = logging.getLogger(__name__)


# ============================================================================
# Main Window
# ============================================================================
class MainWindow(QMainWindow):
    """
    Main application window.
    """

    def __init__(self, config: Optional[EditorConfig] = None):
        super().__init__()
        self.setWindowTitle("TinyGraph")

        self.editor = GraphEditor(config)
        self.editor.export_handler = self._export_graph
        self.editor.import_handler = self._import_graph
        self._last_dir = Path.home()

        self._setup_ui()
        self._setup_menu()
        self._setup_statusbar()
        self.resize(self.editor.config.canvas_width + 240, self.editor.config.canvas_height + 60)

    def _setup_ui(self) -> None:
        """Setup the canvas and the control dock."""
        self.canvas = GraphCanvas(self.editor, self)
        self.setCentralWidget(self.canvas)

        self.control_panel = ControlPanel(self.editor, self)
        self.addDockWidget(Qt.DockWidgetArea.LeftDockWidgetArea, self.control_panel)

    def _setup_menu(self) -> None:
        """Setup the menu bar. Shortcuts are shown but handled by the canvas hotkeys."""
        menubar = self.menuBar()

        file_menu = menubar.addMenu("&File")
        self._add_action(file_menu, "&Import Graph...", Command.IMPORT)
        self._add_action(file_menu, "&Export Graph...", Command.EXPORT)
        file_menu.addSeparator()
        self._add_action(file_menu, "Dump to &Log", Command.DUMP)
        file_menu.addSeparator()
        exit_action = QAction("E&xit", self)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        edit_menu = menubar.addMenu("&Edit")
        self._add_action(edit_menu, "&Undo", Command.UNDO)
        self._add_action(edit_menu, "&Redo", Command.REDO)
        edit_menu.addSeparator()
        self._add_action(edit_menu, "&Connect Selected", Command.CONNECT)
        self._add_action(edit_menu, "C&ancel", Command.CANCEL)

        view_menu = menubar.addMenu("&View")
        self._add_action(view_menu, "Toggle &Labels", Command.TOGGLE_LABELS)
        self._add_action(view_menu, "Toggle Selected Label", Command.TOGGLE_SELECTED_LABEL)
        self._add_action(view_menu, "Toggle &Overlap", Command.TOGGLE_OVERLAP)
        self._add_action(view_menu, "Toggle Static &Boundary", Command.TOGGLE_BOUNDARY)
        view_menu.addSeparator()
        self._add_action(view_menu, "&Reset Camera", Command.RESET_CAMERA)

    def _add_action(self, menu, title: str, command: Command) -> QAction:
        combos = self.editor.hotkeys.combos_for(command)
        text = f"{title}\t{combos[0].title()}" if combos else title
        action = QAction(text, self)
        action.triggered.connect(lambda _checked=False: self.editor.execute(command))
        menu.addAction(action)
        return action

    def _setup_statusbar(self) -> None:
        self.statusbar = QStatusBar()
        self.setStatusBar(self.statusbar)
        self.statusbar.showMessage("Left click to add a node, right click to remove one")

    def showEvent(self, event) -> None:
        super().showEvent(event)
        self.canvas.start()
        self.canvas.setFocus()

    def closeEvent(self, event) -> None:
        self.canvas.stop()
        event.accept()

    # --- File I/O ---
    def _export_graph(self) -> None:
        path, _ = QFileDialog.getSaveFileName(
            self, "Export Graph", str(self._last_dir / DEFAULT_GRAPH_FILENAME), GRAPH_FILE_FILTER
        )
        if not path:
            return
        try:
            saved = write_graph_file(Path(path), self.editor.snapshot())
        except OSError as e:
            logger.error(f"Error saving graph: {e}")
            self.editor.toasts.push(f"Could not save: {e}")
            self.statusbar.showMessage(f"Could not save {path}", 5000)
            return
        self._last_dir = saved.parent
        self.editor.toasts.push(f"Exported to {saved.name}")
        self.statusbar.showMessage(f"Saved {saved}", 3000)

    def _import_graph(self) -> None:
        path, _ = QFileDialog.getOpenFileName(self, "Import Graph", str(self._last_dir), GRAPH_FILE_FILTER)
        if not path:
            return
        try:
            text = read_graph_file(Path(path))
        except OSError as e:
            logger.error(f"Error reading graph: {e}")
            self.editor.toasts.push(f"Could not open: {e}")
            return
        except ImportFormatError as e:
            logger.warning(f"Could not load graph: {e}")
            self.editor.toasts.push(f"Could not load graph: {e}")
            return
        self._last_dir = Path(path).parent
        if self.editor.load_json(text):
            self.statusbar.showMessage(f"Loaded {path}", 3000)


# ============================================================================
# Application Entry Point
# ============================================================================
def main():
    setup_logging()
    config = load_config()

    app = QApplication(sys.argv)
    app.setStyleSheet(Theme.get_stylesheet())

    window = MainWindow(config)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
