"""
TinyGraph - Utility Functions
Paths, graph file I/O and the application stylesheet.
"""

import logging
from pathlib import Path

from errors import ImportFormatError
from models import GraphSnapshot

logger = logging.getLogger(__name__)

GRAPH_FILE_FILTER = "Graph files (*.json);;All files (*)"
DEFAULT_GRAPH_FILENAME = "graph.json"


def ensure_json_suffix(path: Path) -> Path:
    return path if path.suffix else path.with_suffix(".json")


def write_graph_file(path: Path, snapshot: GraphSnapshot) -> Path:
    """Write a snapshot as a graph document. OSError propagates."""
    path = ensure_json_suffix(Path(path))
    with open(path, "w", encoding="utf-8") as f:
        f.write(snapshot.to_json(indent=2))
    logger.info(f"Saved graph to {path} ({len(snapshot.nodes)} nodes)")
    return path


def read_graph_file(path: Path) -> str:
    """
    Read a graph document's text. Parsing is left to the editor.
    OSError propagates; undecodable bytes raise ImportFormatError.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except UnicodeDecodeError as e:
        raise ImportFormatError(f"{Path(path).name} is not a UTF-8 text file") from e
    logger.info(f"Read graph file {path}")
    return text


class Theme:
    """Dark canvas palette (hex strings) and the widget stylesheet."""
    BACKGROUND = "#323232"
    NODE_FILL = "#FFFFFF"
    NODE_OUTLINE = "#000000"
    EDGE = "#FAFAFA"
    HOVER_RING = "#787878"
    SELECT_RING = "#FFFFFF"
    DRAG_RING = "#00BCD4"
    LABEL = "#FFFFFF"
    CONNECTION_LINE = "#FFFFFF"
    TOAST_BG = "#FFFFFF"
    TOAST_TEXT = "#000000"

    @staticmethod
    def get_stylesheet() -> str:
        return """
            QMainWindow { background-color: #2B2B2B; }
            QDockWidget { color: #EEEEEE; }
            QGroupBox {
                color: #EEEEEE;
                border: 1px solid #555555;
                border-radius: 4px;
                margin-top: 12px;
            }
            QGroupBox::title { subcontrol-origin: margin; left: 8px; }
            QLabel { color: #DDDDDD; }
            QPushButton {
                background-color: #3C3F41;
                color: #EEEEEE;
                border: 1px solid #555555;
                border-radius: 4px;
                padding: 5px 10px;
                text-align: left;
            }
            QPushButton:checked { background-color: #00838F; }
            QPushButton:hover { border-color: #00BCD4; }
        """
