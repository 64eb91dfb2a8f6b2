"""Public package exports for :mod:`pathgraph`."""

from __future__ import annotations

from .dijkstra import (
    DijkstraResult,
    DijkstraSolver,
    SolverConfig,
    SolverMetrics,
    dijkstra,
    get_shortest_distance,
    get_shortest_path,
)
from .exceptions import (
    AlgorithmError,
    ConfigError,
    GraphFormatError,
    InputError,
    PathgraphError,
    VertexNotFoundError,
)
from .frontier import FrontierProtocol, LazyPriorityQueue, PriorityQueue
from .graph import Direction, Graph, Vertex
from .io import read_edges, read_graph
from .keyed import DistanceMap, FrozenVertexMap, VertexMap, VertexSet
from .logger import Logger, NoopLogger, StdLogger

__version__ = "0.1.0"

__all__ = [
    "Direction",
    "Graph",
    "Vertex",
    "PriorityQueue",
    "LazyPriorityQueue",
    "FrontierProtocol",
    "VertexMap",
    "DistanceMap",
    "FrozenVertexMap",
    "VertexSet",
    "DijkstraSolver",
    "DijkstraResult",
    "SolverConfig",
    "SolverMetrics",
    "dijkstra",
    "get_shortest_distance",
    "get_shortest_path",
    "read_edges",
    "read_graph",
    "Logger",
    "NoopLogger",
    "StdLogger",
    "PathgraphError",
    "InputError",
    "VertexNotFoundError",
    "GraphFormatError",
    "ConfigError",
    "AlgorithmError",
]
