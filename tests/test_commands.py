import pytest

from commands import (
    Command, Gesture, HotkeyMap, PointerButton, combo, normalize_key, parse_combo, resolve_press
)
from models import Node


@pytest.mark.parametrize("modifiers, key, expected", [
    ([], "Z", "z"),
    (["ctrl"], "z", "ctrl+z"),
    (["shift", "ctrl"], "Z", "ctrl+shift+z"),
    (["alt", "shift", "ctrl"], "escape", "ctrl+shift+alt+escape"),
    (["Control", "ctrl"], "Return", "ctrl+enter"),
    ([], " ", "space"),
])
def test_combo_is_canonical(modifiers, key, expected):
    assert combo(modifiers, key) == expected


def test_parse_combo_normalizes_order_and_case():
    assert parse_combo("Shift+Ctrl+Z") == "ctrl+shift+z"
    assert parse_combo("PageUp") == "pageup"


@pytest.mark.parametrize("text", ["", "ctrl+", "meta+z", "ctrl+banana"])
def test_parse_combo_rejects_garbage(text):
    with pytest.raises(ValueError):
        parse_combo(text)


def test_normalize_key_rejects_unknown_names():
    with pytest.raises(ValueError):
        normalize_key("f13")


def test_default_hotkeys_resolve():
    hotkeys = HotkeyMap.defaults()
    assert hotkeys.resolve(["ctrl"], "z") is Command.UNDO
    assert hotkeys.resolve(["shift", "ctrl"], "z") is Command.REDO
    assert hotkeys.resolve([], "z") is Command.DUMP
    assert hotkeys.resolve([], "escape") is Command.CANCEL
    assert hotkeys.resolve(["alt"], "z") is None
    assert hotkeys.resolve(["hyper"], "z") is None


def test_bind_and_unbind():
    hotkeys = HotkeyMap()
    assert hotkeys.bind("Alt+Ctrl+C", Command.CONNECT) == "ctrl+alt+c"
    assert hotkeys.resolve(["alt", "ctrl"], "C") is Command.CONNECT
    assert hotkeys.combos_for(Command.CONNECT) == ["ctrl+alt+c"]
    hotkeys.unbind("ctrl+alt+c")
    assert hotkeys.resolve(["alt", "ctrl"], "c") is None


def test_press_resolution():
    a, b = Node(1, 0, 0), Node(2, 100, 0)
    P, S, M = PointerButton.PRIMARY, PointerButton.SECONDARY, PointerButton.MIDDLE

    assert resolve_press(S, a, None, False) is Gesture.DELETE
    assert resolve_press(S, None, a, True) is Gesture.NONE
    assert resolve_press(P, None, None, False) is Gesture.CREATE
    assert resolve_press(P, None, None, False, pan_modifier=True) is Gesture.PAN
    assert resolve_press(P, a, None, False) is Gesture.SELECT
    assert resolve_press(P, a, b, False) is Gesture.SELECT
    assert resolve_press(P, a, a, False) is Gesture.BEGIN_DRAG
    assert resolve_press(P, b, a, True) is Gesture.CONNECT
    assert resolve_press(P, None, a, True) is Gesture.CONNECT
    assert resolve_press(M, a, a, False) is Gesture.PAN
