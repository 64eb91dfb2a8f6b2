"""Custom exception types used across :mod:`pathgraph`."""

from __future__ import annotations

from typing import Any


class PathgraphError(Exception):
    """Base class for all package-specific errors."""


class InputError(PathgraphError, ValueError):
    """Raised for invalid user input such as a bad edge or a missing vertex."""


class VertexNotFoundError(InputError, KeyError):
    """Raised when a computation is started from a value that has no vertex.

    Attributes:
        value: The value that was looked up.
    """

    def __init__(self, value: Any, message: str | None = None) -> None:
        self.value = value
        self.message = message or f"Start vertex {value} not found in graph"
        super().__init__(self.message)

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.message


class GraphFormatError(InputError):
    """Raised when parsing an edge-list file fails."""


class ConfigError(PathgraphError, ValueError):
    """Raised for invalid configuration options."""


class AlgorithmError(PathgraphError, RuntimeError):
    """Raised when algorithm or data-structure invariants are violated."""


__all__ = [
    "PathgraphError",
    "InputError",
    "VertexNotFoundError",
    "GraphFormatError",
    "ConfigError",
    "AlgorithmError",
]
