import json

import pytest

from errors import ImportFormatError
from models import Edge, GraphSnapshot, Node, NodeRecord


def test_edge_is_unordered():
    assert Edge(3, 1).key == (1, 3)
    assert Edge(1, 3).joins(3, 1)
    assert Edge(1, 3).touches(3) and not Edge(1, 3).touches(2)


def test_node_defaults_target_and_label():
    node = Node(4, 10.0, 20.0)
    assert (node.tx, node.ty) == (10.0, 20.0)
    assert node.label == "node 4"


def test_document_shape():
    snap = GraphSnapshot(
        nodes=(NodeRecord(id=1, x=1.5, y=2.0, label="a", speed=0.2, friction=0.4, tx=3.0, ty=4.0),),
        edges=((1, 1),),
    )
    data = json.loads(snap.to_json())
    assert data == {
        "nodes": [{"x": 1.5, "y": 2.0, "id": 1, "label": "a", "speed": 0.2,
                   "friction": 0.4, "tx": 3.0, "ty": 4.0}],
        "edges": [[1, 1]],
    }


def test_minimal_document_gets_defaults():
    snap = GraphSnapshot.from_json('{"nodes": [{"x": 1, "y": 2, "id": 1}], "edges": []}')
    record = snap.nodes[0]
    assert (record.label, record.tx, record.ty) == ("node 1", 1.0, 2.0)
    assert record.speed == 0.1 and record.friction == 0.5


@pytest.mark.parametrize("text", [
    "not json",
    "[]",
    '{"edges": []}',
    '{"nodes": {}, "edges": []}',
    '{"nodes": [], "edges": {}}',
    '{"nodes": [{"x": "1", "y": 0, "id": 1}]}',
    '{"nodes": [{"x": 1, "y": 0, "id": 1.5}]}',
    '{"nodes": [{"x": 1, "y": 0, "id": true}]}',
    '{"nodes": [{"x": 1, "y": 0, "id": 1, "label": 7}]}',
    '{"nodes": [5]}',
    '{"nodes": [], "edges": [[1]]}',
    '{"nodes": [], "edges": [[1, "2"]]}',
])
def test_malformed_documents_raise(text):
    with pytest.raises(ImportFormatError):
        GraphSnapshot.from_json(text)


@pytest.mark.parametrize("text", [
    '{"nodes": [{"x": 1' + "0" * 400 + ', "y": 0, "id": 1}]}',
    '{"nodes": [{"x": 0, "y": 0, "id": 1, "tx": -1' + "0" * 400 + '}]}',
    '{"nodes": ' + "[" * 100000 + "]" * 100000 + "}",
])
def test_oversized_documents_raise(text):
    with pytest.raises(ImportFormatError):
        GraphSnapshot.from_json(text)
