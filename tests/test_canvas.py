import os

import pytest

QtCore = pytest.importorskip("PyQt6.QtCore")
canvas = pytest.importorskip("canvas")

from commands import PointerButton  # noqa: E402

Qt = QtCore.Qt


@pytest.mark.parametrize("key, text, expected", [
    (Qt.Key.Key_Z, "\x1a", "z"),       # ctrl+z delivers a control character
    (Qt.Key.Key_L, "L", "l"),
    (Qt.Key.Key_5, "5", "5"),
    (Qt.Key.Key_Escape, "\x1b", "escape"),
    (Qt.Key.Key_Return, "\r", "enter"),
    (Qt.Key.Key_PageDown, "", "pagedown"),
    (Qt.Key.Key_Plus, "+", "+"),
    (Qt.Key.Key_Shift, "", None),
])
def test_key_name_for(key, text, expected):
    assert canvas.key_name_for(key.value, text) == expected


def test_modifier_names():
    mods = Qt.KeyboardModifier.ShiftModifier | Qt.KeyboardModifier.ControlModifier
    assert canvas.modifier_names(mods) == ["ctrl", "shift"]
    assert canvas.modifier_names(Qt.KeyboardModifier.NoModifier) == []


def test_pointer_buttons():
    assert canvas.pointer_button_for(Qt.MouseButton.LeftButton) is PointerButton.PRIMARY
    assert canvas.pointer_button_for(Qt.MouseButton.RightButton) is PointerButton.SECONDARY
    assert canvas.pointer_button_for(Qt.MouseButton.BackButton) is None


@pytest.fixture(scope="module")
def qapp():
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    QtWidgets = pytest.importorskip("PyQt6.QtWidgets")
    return QtWidgets.QApplication.instance() or QtWidgets.QApplication([])


def test_scene_tracks_nodes_and_edges(qapp, editor):
    scene = canvas.GraphScene(editor)
    a = editor.create_node(100, 100)
    b = editor.create_node(200, 100)
    editor.graph.connect(a, b)
    scene.sync()
    assert set(scene.node_items) == {a, b}
    assert len(scene.edge_items) == 1
    assert scene.edge_items[0].line().x2() == 200

    editor.delete_node(a)
    scene.sync()
    assert list(scene.node_items) == [b]
    assert scene.edge_items == []


def test_scene_reflects_selection_and_connect_preview(qapp, editor):
    scene = canvas.GraphScene(editor)
    a = editor.create_node(100, 100)
    editor.select(a)
    editor.toggle_connect_mode()
    scene.sync()
    assert scene.node_items[a].selected
    assert scene.connection_line.isVisible()

    editor.cancel()
    scene.sync()
    assert not scene.node_items[a].selected
    assert not scene.connection_line.isVisible()


def test_view_transform_follows_camera(qapp, editor):
    view = canvas.GraphCanvas(editor)
    editor.wheel(1, 0, 0)
    view.refresh()
    assert view.transform().m11() == pytest.approx(1.15)
    view.stop()
