"""Weighted graph with value-keyed vertices stored in an index arena."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Hashable, Iterable, Iterator, List, Optional, Tuple

Float = float
Edge = Tuple[Hashable, Hashable, Float]


class Direction(str, Enum):
    """Edge policy of a :class:`Graph`, fixed at construction."""

    DIRECTED = "directed"
    UNDIRECTED = "undirected"


@dataclass(eq=False)
class Vertex:
    """A graph node: the caller's value plus its outgoing adjacency.

    Vertices are compared by identity. A :class:`Graph` hands out exactly one
    ``Vertex`` per distinct value, so identity matches value equality within
    one graph.

    Attributes:
        index: Slot of this vertex in the owning graph's arena.
        value: Caller-supplied value (must be hashable).
        adj: Neighbor index -> edge weight.
    """

    index: int
    value: Hashable
    adj: Dict[int, Float] = field(default_factory=dict, repr=False)

    @property
    def degree(self) -> int:
        """Number of outgoing edges (a self-loop counts once)."""
        return len(self.adj)

    def neighbor_indices(self) -> List[int]:
        return list(self.adj)

    def is_adjacent(self, other: "Vertex") -> bool:
        return other.index in self.adj

    def weight_to(self, other: "Vertex") -> Optional[Float]:
        """Return the weight of the edge to ``other`` or ``None``."""
        return self.adj.get(other.index)

    def __repr__(self) -> str:
        return f"Vertex({self.value!r})"


class Graph:
    """Directed or undirected weighted graph.

    Vertices live in a dense arena (``list``) and refer to their neighbors by
    arena index, so there are no reference cycles between vertex objects.
    A side ``dict`` maps each value to its index. Removing a vertex leaves a
    ``None`` tombstone so the indices of the remaining vertices never change.

    Edge weights are not validated: zero weights are fine, negative weights
    are accepted but make shortest-path results meaningless.

    Examples:
        ```python
        >>> g = Graph(Direction.DIRECTED)
        >>> _ = g.add_edge("A", "B", 4)
        >>> g.get_vertex("A").weight_to(g.get_vertex("B"))
        4
        ```
    """

    def __init__(self, direction: Direction = Direction.UNDIRECTED) -> None:
        self.direction = Direction(direction)
        self._arena: List[Optional[Vertex]] = []
        self._index: Dict[Hashable, int] = {}

    @classmethod
    def from_edges(
        cls, edges: Iterable[Edge], direction: Direction = Direction.UNDIRECTED
    ) -> "Graph":
        """Create a graph from an iterable of ``(source, destination, weight)``."""
        g = cls(direction)
        for u, v, w in edges:
            g.add_edge(u, v, w)
        return g

    # ---- vertices -----------------------------------------------------

    @property
    def is_directed(self) -> bool:
        return self.direction is Direction.DIRECTED

    @property
    def capacity(self) -> int:
        """Length of the arena, including tombstones."""
        return len(self._arena)

    def add_vertex(self, value: Hashable) -> Vertex:
        """Return the vertex for ``value``, creating it on first use."""
        idx = self._index.get(value)
        if idx is not None:
            return self._arena[idx]  # type: ignore[return-value]
        vertex = Vertex(len(self._arena), value)
        self._arena.append(vertex)
        self._index[value] = vertex.index
        return vertex

    def get_vertex(self, value: Hashable) -> Optional[Vertex]:
        """Return the vertex for ``value`` or ``None`` if it was never added.

        Unhashable values can never be vertices, so they also give ``None``.
        """
        try:
            idx = self._index.get(value)
        except TypeError:
            return None
        return None if idx is None else self._arena[idx]

    def vertex_at(self, index: int) -> Optional[Vertex]:
        """Return the live vertex stored at arena slot ``index``."""
        if 0 <= index < len(self._arena):
            return self._arena[index]
        return None

    def owns(self, vertex: Vertex) -> bool:
        """Return ``True`` if ``vertex`` is a live vertex of this graph."""
        return self.vertex_at(vertex.index) is vertex

    def get_all_vertices(self) -> List[Vertex]:
        """Return every vertex in order of first appearance."""
        return [v for v in self._arena if v is not None]

    def remove_vertex(self, value: Hashable) -> bool:
        """Remove the vertex for ``value`` and every edge touching it.

        Returns:
            ``True`` if a vertex was removed, ``False`` if none existed.
        """
        idx = self._index.pop(value, None)
        if idx is None:
            return False
        self._arena[idx] = None
        for other in self._arena:
            if other is not None:
                other.adj.pop(idx, None)
        return True

    # ---- edges --------------------------------------------------------

    def _set_edge(self, u: Vertex, v: Vertex, w: Optional[Float], mirror: bool) -> None:
        """Set (``w`` given) or clear (``w is None``) the edge ``u -> v``.

        With ``mirror`` the reverse edge ``v -> u`` is updated identically,
        which keeps undirected adjacency symmetric.
        """
        pairs = [(u, v), (v, u)] if mirror else [(u, v)]
        for a, b in pairs:
            if w is None:
                a.adj.pop(b.index, None)
            else:
                a.adj[b.index] = w

    def add_edge(
        self, source: Hashable, destination: Hashable, weight: Float = 0
    ) -> Tuple[Vertex, Vertex]:
        """Add or overwrite the edge ``source -> destination``.

        Missing vertices are created. In undirected mode the reverse edge
        gets the same weight.

        Args:
            source: Tail value.
            destination: Head value.
            weight: Edge weight. The last declaration wins.

        Returns:
            The ``(source, destination)`` vertices.
        """
        u = self.add_vertex(source)
        v = self.add_vertex(destination)
        self._set_edge(u, v, weight, mirror=not self.is_directed)
        return u, v

    def remove_edge(self, source: Hashable, destination: Hashable) -> None:
        """Remove the edge ``source -> destination`` if it exists."""
        u = self.get_vertex(source)
        v = self.get_vertex(destination)
        if u is None or v is None:
            return
        self._set_edge(u, v, None, mirror=not self.is_directed)

    def are_adjacent(self, source: Hashable, destination: Hashable) -> bool:
        u = self.get_vertex(source)
        v = self.get_vertex(destination)
        return u is not None and v is not None and u.is_adjacent(v)

    def neighbors(self, vertex: Vertex) -> Iterator[Tuple[Vertex, Float]]:
        """Yield ``(neighbor, weight)`` for each outgoing edge of ``vertex``."""
        for idx, w in vertex.adj.items():
            nb = self._arena[idx]
            if nb is not None:
                yield nb, w

    def edges(self) -> Iterator[Tuple[Vertex, Vertex, Float]]:
        """Yield every stored adjacency as ``(u, v, w)``.

        Undirected edges are stored twice and therefore appear twice.
        """
        for u in self._arena:
            if u is None:
                continue
            for v, w in self.neighbors(u):
                yield u, v, w

    @property
    def edge_count(self) -> int:
        return sum(1 for _ in self.edges())

    # ---- traversal ----------------------------------------------------

    def _search(self, start_value: Hashable, breadth_first: bool) -> Iterator[Vertex]:
        start = self.get_vertex(start_value)
        if start is None:
            return
        explored: set = set()
        pending: deque = deque([start])
        while pending:
            vertex = pending.popleft() if breadth_first else pending.pop()
            if vertex.index in explored:
                continue
            explored.add(vertex.index)
            yield vertex
            for nb, _ in self.neighbors(vertex):
                if nb.index not in explored:
                    pending.append(nb)

    def dfs(self, start_value: Hashable) -> Iterator[Vertex]:
        """Yield vertices reachable from ``start_value`` in depth-first order."""
        return self._search(start_value, breadth_first=False)

    def bfs(self, start_value: Hashable) -> Iterator[Vertex]:
        """Yield vertices reachable from ``start_value`` in breadth-first order."""
        return self._search(start_value, breadth_first=True)

    def are_connected(self, source: Hashable, destination: Hashable) -> bool:
        """Return ``True`` if ``destination`` is reachable from ``source``."""
        target = self.get_vertex(destination)
        if target is None:
            return False
        return any(v is target for v in self.bfs(source))

    def find_path(self, source: Hashable, destination: Hashable) -> List[Vertex]:
        """Return the first simple path found by depth-first search, or ``[]``.

        The path ignores weights; use :func:`pathgraph.dijkstra` for the
        cheapest one.
        """
        for path in self._simple_paths(source, destination):
            return path
        return []

    def find_all_paths(self, source: Hashable, destination: Hashable) -> List[List[Vertex]]:
        """Return every simple path from ``source`` to ``destination``.

        Exponential in the worst case; meant for small graphs.
        """
        return list(self._simple_paths(source, destination))

    def _simple_paths(self, source: Hashable, destination: Hashable) -> Iterator[List[Vertex]]:
        start = self.get_vertex(source)
        goal = self.get_vertex(destination)
        if start is None or goal is None:
            return
        if start is goal:
            yield [start]
            return
        # iterative DFS over (vertex, neighbor iterator) frames
        path: List[Vertex] = [start]
        on_path = {start.index}
        stack = [iter(list(self.neighbors(start)))]
        while stack:
            nxt = next(stack[-1], None)
            if nxt is None:
                stack.pop()
                on_path.discard(path.pop().index)
                continue
            nb = nxt[0]
            if nb.index in on_path:
                continue
            if nb is goal:
                yield path + [nb]
                continue
            path.append(nb)
            on_path.add(nb.index)
            stack.append(iter(list(self.neighbors(nb))))

    # ---- container protocol -------------------------------------------

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, value: object) -> bool:
        try:
            return value in self._index
        except TypeError:
            return False

    def __iter__(self) -> Iterator[Vertex]:
        return iter(self.get_all_vertices())

    def __repr__(self) -> str:
        return f"Graph(direction={self.direction.value!r}, vertices={len(self)})"


__all__ = ["Direction", "Edge", "Float", "Graph", "Vertex"]
