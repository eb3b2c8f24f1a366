"""
TinyGraph - Command Dispatch
Hotkey combos mapped to a fixed command set, and pointer-press interpretation.

Combos are canonical strings: lowercase modifiers in the order ctrl, shift,
alt followed by one key name, joined with '+' (e.g. "ctrl+shift+z").
"""

from enum import Enum
from typing import Iterable, Optional

from models import Node

MODIFIER_ORDER = ("ctrl", "shift", "alt")

MODIFIER_ALIASES = {
    "control": "ctrl",
    "ctl": "ctrl",
    "option": "alt",
}

# Names for keys that have no printable character
SPECIAL_KEYS = frozenset({
    "enter", "escape", "up", "down", "left", "right", "space", "tab",
    "backspace", "delete", "pageup", "pagedown", "home", "end",
})

KEY_ALIASES = {
    "return": "enter",
    "esc": "escape",
    "del": "delete",
    "pgup": "pageup",
    "pgdown": "pagedown",
    " ": "space",
}


class Command(Enum):
    CONNECT = "connect"
    CANCEL = "cancel"
    TOGGLE_LABELS = "toggle_labels"
    TOGGLE_SELECTED_LABEL = "toggle_selected_label"
    TOGGLE_OVERLAP = "toggle_overlap"
    TOGGLE_BOUNDARY = "toggle_boundary"
    RESET_CAMERA = "reset_camera"
    UNDO = "undo"
    REDO = "redo"
    EXPORT = "export"
    IMPORT = "import"
    DUMP = "dump"


DEFAULT_HOTKEYS = {
    "c": Command.CONNECT,
    "escape": Command.CANCEL,
    "l": Command.TOGGLE_LABELS,
    "shift+l": Command.TOGGLE_SELECTED_LABEL,
    "o": Command.TOGGLE_OVERLAP,
    "b": Command.TOGGLE_BOUNDARY,
    "home": Command.RESET_CAMERA,
    "ctrl+z": Command.UNDO,
    "ctrl+y": Command.REDO,
    "ctrl+shift+z": Command.REDO,
    "ctrl+s": Command.EXPORT,
    "ctrl+o": Command.IMPORT,
    "z": Command.DUMP,
}


def normalize_key(key: str) -> str:
    """Key name for a special key, or the lowercase character otherwise."""
    if key == " ":
        return "space"
    name = key.strip().lower()
    name = KEY_ALIASES.get(name, name)
    if name in SPECIAL_KEYS or len(name) == 1:
        return name
    raise ValueError(f"Unknown key: {key!r}")


def combo(modifiers: Iterable[str], key: str) -> str:
    """Canonical combo string for a set of held modifiers and a key."""
    held = set()
    for modifier in modifiers:
        name = modifier.strip().lower()
        name = MODIFIER_ALIASES.get(name, name)
        if name not in MODIFIER_ORDER:
            raise ValueError(f"Unknown modifier: {modifier!r}")
        held.add(name)
    parts = [m for m in MODIFIER_ORDER if m in held]
    parts.append(normalize_key(key))
    return "+".join(parts)


def parse_combo(text: str) -> str:
    """Canonicalize a written combo such as 'Shift+Ctrl+Z'."""
    parts = text.split("+")
    if any(p.strip() == "" for p in parts):
        raise ValueError(f"Malformed combo: {text!r}")
    *modifiers, key = parts
    return combo(modifiers, key)


class HotkeyMap:
    """Combo -> Command registry."""

    def __init__(self, bindings: Optional[dict] = None):
        self._bindings: dict[str, Command] = {}
        for text, command in (bindings or {}).items():
            self.bind(text, command)

    @classmethod
    def defaults(cls) -> "HotkeyMap":
        return cls(DEFAULT_HOTKEYS)

    def bind(self, text: str, command: Command) -> str:
        key = parse_combo(text)
        self._bindings[key] = command
        return key

    def unbind(self, text: str) -> None:
        self._bindings.pop(parse_combo(text), None)

    def resolve(self, modifiers: Iterable[str], key: str) -> Optional[Command]:
        """Command bound to the held modifiers + key, or None."""
        try:
            return self._bindings.get(combo(modifiers, key))
        except ValueError:
            return None

    def combos_for(self, command: Command) -> list[str]:
        return [c for c, cmd in self._bindings.items() if cmd is command]


# ============================================================================
# Pointer Gestures
# ============================================================================
class PointerButton(Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"
    MIDDLE = "middle"


class Gesture(Enum):
    NONE = "none"
    CREATE = "create"
    DELETE = "delete"
    SELECT = "select"
    CONNECT = "connect"
    BEGIN_DRAG = "begin_drag"
    PAN = "pan"


def resolve_press(button: PointerButton, hovered: Optional[Node], selected: Optional[Node],
                  connecting: bool, pan_modifier: bool = False) -> Gesture:
    """Decide what a pointer press does given the current interaction state."""
    if button is PointerButton.MIDDLE:
        return Gesture.PAN
    if button is PointerButton.SECONDARY:
        return Gesture.DELETE if hovered is not None else Gesture.NONE

    if hovered is None and pan_modifier:
        return Gesture.PAN
    if connecting:
        return Gesture.CONNECT
    if hovered is None:
        return Gesture.CREATE
    if hovered is selected:
        return Gesture.BEGIN_DRAG
    return Gesture.SELECT
