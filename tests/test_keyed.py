"""
Unit tests for the vertex-keyed collections.
"""

import math

import pytest

from pathgraph import Direction, DistanceMap, Graph, VertexMap, VertexSet


@pytest.fixture
def graph():
    g = Graph(Direction.DIRECTED)
    g.add_edge("A", "B", 1)
    g.add_vertex("C")
    return g


def test_vertex_map_defaults_and_updates(graph):
    a, b, c = graph.get_all_vertices()
    m = VertexMap(graph, None)

    assert len(m) == 3
    assert m[a] is None

    m[b] = a
    assert m[b] is a
    assert dict(m.items()) == {a: None, b: a, c: None}

    del m[b]
    assert m[b] is None
    assert len(m) == 3


def test_vertex_map_rejects_foreign_vertices(graph):
    other = Graph()
    stranger = other.add_vertex("A")
    m = VertexMap(graph, 0)

    with pytest.raises(KeyError):
        m[stranger]
    with pytest.raises(KeyError):
        m["A"]
    assert m.get(stranger, -1) == -1
    assert stranger not in m


def test_vertex_map_ignores_vertices_added_later(graph):
    m = VertexMap(graph, 0)
    late = graph.add_vertex("D")

    assert late not in m
    assert m.get(late) is None
    assert len(m) == 3


def test_distance_map_uses_infinity_default(graph):
    a, b, _ = graph.get_all_vertices()
    d = DistanceMap(graph)

    assert math.isinf(d[a])
    d[b] = 4
    assert d[b] == 4.0
    assert isinstance(d[b], float)
    assert d.as_array().shape == (3,)


def test_frozen_view_is_read_only_and_live(graph):
    a = graph.get_vertex("A")
    d = DistanceMap(graph)
    frozen = d.freeze()

    with pytest.raises(TypeError):
        frozen[a] = 1.0  # type: ignore[index]

    d[a] = 0.0
    assert frozen[a] == 0.0
    assert len(frozen) == 3


def test_vertex_set_membership(graph):
    a, b, c = graph.get_all_vertices()
    s = VertexSet(graph)

    assert len(s) == 0
    s.add(a)
    s.add(a)
    s.add(c)

    assert a in s
    assert b not in s
    assert len(s) == 2
    assert [v.value for v in s] == ["A", "C"]

    s.discard(a)
    s.discard(b)
    assert a not in s
    assert len(s) == 1


def test_vertex_set_foreign_vertex(graph):
    stranger = Graph().add_vertex("A")
    s = VertexSet(graph)

    assert stranger not in s
    with pytest.raises(KeyError):
        s.add(stranger)
    s.discard(stranger)
