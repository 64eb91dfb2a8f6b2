"""Vertex-keyed collections backed by dense arrays.

A :class:`~pathgraph.graph.Graph` stores its vertices in an arena, so a
per-vertex table is just an array indexed by ``Vertex.index``. The
collections below wrap such arrays behind the standard mapping and set
interfaces. Membership is always checked against the owning graph: a vertex
of another graph, or one that has been removed, is never a key.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping, MutableSet
from typing import Any, Generic, Iterator, List, TypeVar

import numpy as np
import numpy.typing as npt

from .graph import Float, Graph, Vertex

V = TypeVar("V")


class VertexMap(MutableMapping, Generic[V]):
    """Mapping ``Vertex -> V`` with a value slot for every vertex of ``graph``.

    Every live vertex starts out mapped to ``default``, so ``len`` equals the
    number of vertices and deletion resets a slot rather than dropping it.
    """

    def __init__(self, graph: Graph, default: V) -> None:
        self._graph = graph
        self._default = default
        self._values: List[V] = [default] * graph.capacity

    def _slot(self, vertex: object) -> int:
        if not isinstance(vertex, Vertex) or not self._graph.owns(vertex):
            raise KeyError(vertex)
        if vertex.index >= len(self._values):
            # vertex added to the graph after this map was allocated
            raise KeyError(vertex)
        return vertex.index

    def __getitem__(self, vertex: Vertex) -> V:
        return self._values[self._slot(vertex)]

    def __setitem__(self, vertex: Vertex, value: V) -> None:
        self._values[self._slot(vertex)] = value

    def __delitem__(self, vertex: Vertex) -> None:
        self._values[self._slot(vertex)] = self._default

    def __iter__(self) -> Iterator[Vertex]:
        for v in self._graph.get_all_vertices():
            if v.index < len(self._values):
                yield v

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def freeze(self) -> "FrozenVertexMap[V]":
        """Return a read-only view sharing this map's storage."""
        return FrozenVertexMap(self)

    def __repr__(self) -> str:
        body = ", ".join(f"{k.value!r}: {v!r}" for k, v in self.items())
        return f"{type(self).__name__}({{{body}}})"


class DistanceMap(VertexMap[Float]):
    """:class:`VertexMap` of floats stored in a NumPy array, ``inf`` by default."""

    def __init__(self, graph: Graph, default: Float = float("inf")) -> None:
        self._graph = graph
        self._default = float(default)
        self._values: npt.NDArray[np.float64] = np.full(  # type: ignore[assignment]
            graph.capacity, self._default, dtype=np.float64
        )

    def __getitem__(self, vertex: Vertex) -> Float:
        return float(self._values[self._slot(vertex)])

    def __setitem__(self, vertex: Vertex, value: Float) -> None:
        self._values[self._slot(vertex)] = value

    def as_array(self) -> npt.NDArray[np.float64]:
        """Return a copy of the raw arena-indexed distance array."""
        return self._values.copy()


class FrozenVertexMap(Mapping, Generic[V]):
    """Read-only view over a :class:`VertexMap`."""

    def __init__(self, source: VertexMap[V]) -> None:
        self._source = source

    def __getitem__(self, vertex: Vertex) -> V:
        return self._source[vertex]

    def __iter__(self) -> Iterator[Vertex]:
        return iter(self._source)

    def __len__(self) -> int:
        return len(self._source)

    def __repr__(self) -> str:
        return repr(self._source)


class VertexSet(MutableSet):
    """Set of vertices of one graph, stored as a NumPy boolean mask."""

    def __init__(self, graph: Graph) -> None:
        self._graph = graph
        self._mask: npt.NDArray[np.bool_] = np.zeros(graph.capacity, dtype=np.bool_)
        self._size = 0

    def _valid(self, vertex: Any) -> bool:
        return (
            isinstance(vertex, Vertex)
            and self._graph.owns(vertex)
            and vertex.index < self._mask.shape[0]
        )

    def __contains__(self, vertex: object) -> bool:
        return self._valid(vertex) and bool(self._mask[vertex.index])  # type: ignore[union-attr]

    def add(self, vertex: Vertex) -> None:
        if not self._valid(vertex):
            raise KeyError(vertex)
        if not self._mask[vertex.index]:
            self._mask[vertex.index] = True
            self._size += 1

    def discard(self, vertex: Vertex) -> None:
        if self._valid(vertex) and self._mask[vertex.index]:
            self._mask[vertex.index] = False
            self._size -= 1

    def __iter__(self) -> Iterator[Vertex]:
        for idx in np.flatnonzero(self._mask):
            v = self._graph.vertex_at(int(idx))
            if v is not None:
                yield v

    def __len__(self) -> int:
        return self._size

    def __repr__(self) -> str:
        return f"VertexSet({[v.value for v in self]!r})"


__all__ = ["DistanceMap", "FrozenVertexMap", "VertexMap", "VertexSet"]
