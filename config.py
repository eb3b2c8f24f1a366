"""
TinyGraph - Configuration
Tuning constants for the simulation and editor.

Values come from, in increasing priority:
1. The defaults on EditorConfig
2. config.json in the application root
3. TINYGRAPH_<FIELD> environment variables (e.g. TINYGRAPH_NODE_RADIUS=25)
"""

import json
import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.json"
ENV_PREFIX = "TINYGRAPH_"


@dataclass(frozen=True)
class EditorConfig:
    """All numeric tuning for the scene. Shared, read-only."""
    # Nodes
    node_radius: float = 20.0
    default_speed: float = 0.1
    default_friction: float = 0.5

    # Physics
    repulsion_strength: float = 0.5
    min_separation: float = 0.1
    boundary_strength: float = 0.1
    max_velocity: float = 5.0

    # Camera
    min_zoom: float = 0.1
    max_zoom: float = 5.0
    zoom_step: float = 1.15  # per wheel notch

    # History
    history_capacity: int = 100

    # Toasts (milliseconds)
    toast_duration: int = 3000
    toast_fade: int = 800

    # Canvas
    frame_interval: int = 16
    canvas_width: int = 800
    canvas_height: int = 600


def get_config_path() -> Path:
    """Get the path of config.json next to the application."""
    return Path(__file__).parent.resolve() / CONFIG_FILENAME


def _coerce(field_type, raw):
    if field_type in (int, "int"):
        return int(raw)
    return float(raw)


def load_config(path: Optional[Path] = None, environ: Optional[dict] = None) -> EditorConfig:
    """Load configuration, falling back to defaults for anything missing or invalid."""
    config_path = path or get_config_path()
    environ = os.environ if environ is None else environ
    values: dict = {}

    if config_path.exists():
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            if isinstance(data, dict):
                values.update(data)
            else:
                logger.warning(f"Ignoring {config_path}: top level is not an object")
        except (json.JSONDecodeError, IOError) as e:
            logger.warning(f"Could not read config {config_path}: {e}")

    for f in fields(EditorConfig):
        env_key = ENV_PREFIX + f.name.upper()
        if env_key in environ:
            values[f.name] = environ[env_key]

    config = EditorConfig()
    overrides = {}
    for f in fields(EditorConfig):
        if f.name not in values:
            continue
        try:
            overrides[f.name] = _coerce(f.type, values[f.name])
        except (TypeError, ValueError):
            logger.warning(f"Invalid value for {f.name}: {values[f.name]!r}, using default")

    if overrides:
        config = replace(config, **overrides)
    return config
