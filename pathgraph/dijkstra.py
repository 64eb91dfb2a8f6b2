"""Single-source shortest paths with Dijkstra's algorithm."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Hashable, List, Optional

from .exceptions import AlgorithmError, ConfigError, InputError, VertexNotFoundError
from .frontier import FrontierProtocol, LazyPriorityQueue, PriorityQueue
from .graph import Float, Graph, Vertex
from .keyed import DistanceMap, FrozenVertexMap, VertexMap, VertexSet
from .logger import Logger, NoopLogger
from .path import reconstruct_path

FRONTIERS = ("indexed", "lazy")


@dataclass(frozen=True)
class SolverConfig:
    """Configuration knobs for :class:`DijkstraSolver`.

    Attributes:
        frontier: ``"indexed"`` (decrease-key heap) or ``"lazy"`` (``heapq``
            with stale-entry skipping).
        reject_negative_weights: If ``True``, refuse to run on a graph that
            has a negative edge. By default negative weights are not checked
            and the distances returned are only upper bounds.
    """

    frontier: str = "indexed"
    reject_negative_weights: bool = False


@dataclass(frozen=True)
class SolverMetrics:
    """Performance metrics collected from a solver run."""

    n: int
    m: int
    frontier: str
    counters: Dict[str, int]
    wall_ms: float
    peak_mib: float | None = None


@dataclass(frozen=True, eq=False)
class DijkstraResult:
    """Distances and predecessors from one run, read-only after creation.

    The result is tied to the graph state at the time of the run. Mutating
    the graph afterwards makes it stale; nothing detects that.

    Attributes:
        source: Vertex the run started from.
        distances: Shortest distance per vertex, ``inf`` if unreachable.
        previous: Predecessor on a shortest path, ``None`` for the source and
            for unreachable vertices.
    """

    source: Vertex
    distances: FrozenVertexMap[Float]
    previous: FrozenVertexMap[Optional[Vertex]]

    def distance_to(self, vertex: Vertex) -> Float:
        return get_shortest_distance(self, vertex)

    def path_to(self, vertex: Vertex) -> List[Vertex]:
        return get_shortest_path(self, vertex)


class DijkstraSolver:
    """Dijkstra over a :class:`Graph` from one start value.

    The graph is only read. Every call to :meth:`solve` allocates its own
    frontier, visited set and result maps.

    Args:
        graph: Graph to search.
        start_value: Value of the source vertex.
        config: Optional solver configuration.
        logger: Optional event logger.

    Raises:
        VertexNotFoundError: If ``start_value`` has no vertex in ``graph``.
        ConfigError: If ``config.frontier`` is unknown.
    """

    def __init__(
        self,
        graph: Graph,
        start_value: Hashable,
        config: Optional[SolverConfig] = None,
        logger: Logger | None = None,
    ) -> None:
        start = graph.get_vertex(start_value)
        if start is None:
            raise VertexNotFoundError(start_value)
        self.cfg = config or SolverConfig()
        if self.cfg.frontier not in FRONTIERS:
            raise ConfigError(f"unknown frontier '{self.cfg.frontier}'")
        self.G = graph
        self.source = start
        self.logger = logger or NoopLogger()
        self.counters: Dict[str, int] = {}
        self._result: Optional[DijkstraResult] = None

    def _make_frontier(self) -> FrontierProtocol[Vertex]:
        if self.cfg.frontier == "lazy":
            return LazyPriorityQueue()
        return PriorityQueue()

    def _check_weights(self) -> None:
        for u, v, w in self.G.edges():
            if w < 0:
                raise InputError(f"negative weight {w} on edge ({u.value!r}, {v.value!r})")

    def solve(self) -> DijkstraResult:
        """Run Dijkstra and return the distances and predecessors."""
        if self.cfg.reject_negative_weights:
            self._check_weights()

        counters = {"pops": 0, "stale_pops": 0, "edges_relaxed": 0, "improvements": 0}
        self.counters = counters
        self.logger.info(
            "dijkstra.start",
            source=self.source.value,
            n=len(self.G),
            frontier=self.cfg.frontier,
        )

        source = self.source
        distance = DistanceMap(self.G)
        previous: VertexMap[Optional[Vertex]] = VertexMap(self.G, None)
        visited = VertexSet(self.G)
        frontier = self._make_frontier()

        for v in self.G.get_all_vertices():
            d = 0.0 if v is source else math.inf
            distance[v] = d
            frontier.offer(v, d)

        warned_negative = False
        while not frontier.is_empty():
            u = frontier.poll()
            counters["pops"] += 1
            if u is None or u in visited:
                counters["stale_pops"] += 1
                continue
            visited.add(u)
            du = distance[u]

            for w, e in self.G.neighbors(u):
                counters["edges_relaxed"] += 1
                if e < 0 and not warned_negative:
                    warned_negative = True
                    self.logger.warning(
                        "dijkstra.negative_weight", edge=(u.value, w.value), weight=e
                    )
                if w in visited:
                    continue
                candidate = du + e
                if candidate < distance[w]:
                    distance[w] = candidate
                    previous[w] = u
                    frontier.change_priority(w, candidate)
                    counters["improvements"] += 1

        result = DijkstraResult(
            source=source,
            distances=distance.freeze(),
            previous=previous.freeze(),
        )
        reached = sum(1 for v in visited if distance[v] < math.inf)
        self.logger.info("dijkstra.done", source=source.value, reached=reached, **counters)
        self._result = result
        return result

    # ---------- value-based queries ---------------------------------------

    def _require_result(self) -> DijkstraResult:
        if self._result is None:
            raise AlgorithmError("Call solve() before requesting distances or paths.")
        return self._result

    def distance(self, value: Hashable) -> Float:
        """Return the shortest distance to ``value`` (``inf`` if unknown)."""
        result = self._require_result()
        vertex = self.G.get_vertex(value)
        return math.inf if vertex is None else get_shortest_distance(result, vertex)

    def path(self, value: Hashable) -> List[Hashable]:
        """Return the values along a shortest path to ``value`` (``[]`` if none)."""
        result = self._require_result()
        vertex = self.G.get_vertex(value)
        if vertex is None:
            return []
        return [v.value for v in get_shortest_path(result, vertex)]

    # ---------- counters --------------------------------------------------

    def summary(self) -> Dict[str, int]:
        """Return a copy of the counters of the most recent run."""
        return dict(self.counters)

    def metrics(self, wall_ms: float, peak_mib: float | None = None) -> SolverMetrics:
        """Return performance metrics for the most recent run."""
        return SolverMetrics(
            n=len(self.G),
            m=self.G.edge_count,
            frontier=self.cfg.frontier,
            counters=self.summary(),
            wall_ms=wall_ms,
            peak_mib=peak_mib,
        )


def dijkstra(
    graph: Graph,
    start_value: Hashable,
    config: Optional[SolverConfig] = None,
    logger: Logger | None = None,
) -> DijkstraResult:
    """Compute shortest distances and predecessors from ``start_value``.

    Args:
        graph: Graph with non-negative edge weights.
        start_value: Value of the source vertex.
        config: Optional solver configuration.
        logger: Optional event logger.

    Returns:
        The immutable result of the run.

    Raises:
        VertexNotFoundError: If ``start_value`` has no vertex in ``graph``.

    Examples:
        ```python
        >>> g = Graph(Direction.DIRECTED)
        >>> _ = g.add_edge("A", "B", 4)
        >>> _ = g.add_edge("A", "C", 2)
        >>> _ = g.add_edge("B", "D", 5)
        >>> res = dijkstra(g, "A")
        >>> [v.value for v in get_shortest_path(res, g.get_vertex("D"))]
        ['A', 'B', 'D']
        ```
    """
    return DijkstraSolver(graph, start_value, config=config, logger=logger).solve()


def get_shortest_distance(result: DijkstraResult, vertex: Vertex) -> Float:
    """Return the distance to ``vertex``, ``inf`` if unreached or unknown."""
    return result.distances.get(vertex, math.inf)


def get_shortest_path(result: DijkstraResult, vertex: Vertex) -> List[Vertex]:
    """Return the vertices from the source to ``vertex`` inclusive.

    Returns an empty list when ``vertex`` is unreachable or not part of the
    result; ``[source]`` when ``vertex`` is the source.
    """
    if get_shortest_distance(result, vertex) == math.inf:
        return []
    return reconstruct_path(result.previous, vertex)


__all__ = [
    "DijkstraResult",
    "DijkstraSolver",
    "SolverConfig",
    "SolverMetrics",
    "dijkstra",
    "get_shortest_distance",
    "get_shortest_path",
]
