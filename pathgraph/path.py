"""Utilities for reconstructing paths from predecessor mappings."""

from __future__ import annotations

from typing import List, Mapping, Optional, Set

from .exceptions import AlgorithmError
from .graph import Vertex


def reconstruct_path(
    previous: Mapping[Vertex, Optional[Vertex]],
    target: Vertex,
) -> List[Vertex]:
    """Return the chain ``root ... target`` by following ``previous``.

    The walk starts at ``target`` and stops at the first vertex whose
    predecessor is ``None`` (or that is missing from ``previous``); that vertex
    is the root and is included.

    Args:
        previous: Predecessor of each vertex, ``None`` for the root and for
            unreached vertices.
        target: Vertex to walk back from.

    Returns:
        Vertices from the root to ``target`` inclusive.

    Raises:
        AlgorithmError: If the predecessors form a cycle.
    """
    chain: List[Vertex] = []
    seen: Set[int] = set()
    cur: Optional[Vertex] = target
    while cur is not None:
        if cur.index in seen:
            raise AlgorithmError(f"predecessor cycle through {cur!r}")
        seen.add(cur.index)
        chain.append(cur)
        cur = previous.get(cur)
    chain.reverse()
    return chain


__all__ = ["reconstruct_path"]
