import random

import pytest

from graph import ConnectResult, GraphModel
from models import GraphSnapshot, NodeRecord


def _ids(graph):
    return [n.id for n in graph.nodes]


def _pairs(graph):
    """Edges as unordered pairs of node objects."""
    return {frozenset(graph.endpoints(e)) for e in graph.edges}


@pytest.fixture
def graph():
    return GraphModel()


def test_create_assigns_next_id_and_label(graph):
    a = graph.create_node(10, 20)
    b = graph.create_node(30, 40, label_visible=True)
    assert (a.id, a.label, a.label_visible) == (1, "node 1", False)
    assert (b.id, b.label, b.label_visible) == (2, "node 2", True)
    assert (b.tx, b.ty) == (30, 40)
    assert b.speed == graph.default_speed
    assert b.friction == graph.default_friction


def test_ids_stay_dense_after_random_deletes(graph):
    rng = random.Random(7)
    for i in range(12):
        graph.create_node(i * 50, 0)
    while graph.nodes:
        graph.delete_node(rng.choice(graph.nodes))
        assert _ids(graph) == list(range(1, len(graph) + 1))


def test_delete_keeps_labels(graph):
    for i in range(3):
        graph.create_node(i * 50, 0)
    graph.delete_node(graph.nodes[0])
    assert [(n.id, n.label) for n in graph.nodes] == [(1, "node 2"), (2, "node 3")]


def test_connect_rejects_duplicates_in_both_orientations(graph):
    a = graph.create_node(0, 0)
    b = graph.create_node(100, 0)
    assert graph.connect(a, b) is ConnectResult.CONNECTED
    assert graph.connect(b, a) is ConnectResult.DUPLICATE
    assert graph.connect(a, b) is ConnectResult.DUPLICATE
    assert len(graph.edges) == 1


def test_connect_rejects_self_loop(graph):
    a = graph.create_node(0, 0)
    assert graph.connect(a, a) is ConnectResult.SELF_LOOP
    assert graph.edges == []


def test_delete_cascades_only_incident_edges(graph):
    nodes = [graph.create_node(i * 50, 0) for i in range(5)]
    a, b, c, d, e = nodes
    for x, y in [(a, b), (b, c), (c, d), (d, e), (a, e), (b, d)]:
        graph.connect(x, y)

    before = _pairs(graph)
    graph.delete_node(c)

    expected = {p for p in before if c not in p}
    assert _pairs(graph) == expected
    assert _ids(graph) == [1, 2, 3, 4]
    # Stored id pairs track the renumbering
    assert {e.key for e in graph.edges} == {(1, 2), (3, 4), (1, 4), (2, 3)}


def test_node_at_uses_strict_radius_and_first_match(graph):
    first = graph.create_node(0, 0)
    second = graph.create_node(5, 0)
    assert graph.node_at(2, 0) is first
    # Exactly one radius away is outside
    assert graph.node_at(first.radius, 0) is second
    assert graph.node_at(500, 500) is None


def test_snapshot_round_trip_through_load(graph):
    a = graph.create_node(10, 20)
    b = graph.create_node(70, 20)
    graph.create_node(200, 300)
    graph.connect(a, b)
    snap = graph.snapshot()

    other = GraphModel()
    assert other.load_snapshot(snap) == 0
    assert other.snapshot() == snap
    assert other.nodes[0] is not a


def test_load_drops_unresolved_edges():
    snap = GraphSnapshot(
        nodes=(NodeRecord(id=1, x=0, y=0, label="a"), NodeRecord(id=2, x=50, y=0, label="b")),
        edges=((1, 2), (2, 9), (1, 1), (2, 1)),
    )
    graph = GraphModel()
    assert graph.load_snapshot(snap) == 3
    assert [e.key for e in graph.edges] == [(1, 2)]


def test_load_renumbers_sparse_ids():
    snap = GraphSnapshot(
        nodes=(NodeRecord(id=4, x=0, y=0, label="x"), NodeRecord(id=9, x=50, y=0, label="y")),
        edges=((9, 4),),
    )
    graph = GraphModel()
    graph.load_snapshot(snap)
    assert _ids(graph) == [1, 2]
    assert [(e.a, e.b) for e in graph.edges] == [(2, 1)]
