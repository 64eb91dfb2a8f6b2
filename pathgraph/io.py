"""Edge-list readers for building a :class:`Graph` from a file."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Hashable, List, Optional, Tuple

from .exceptions import GraphFormatError
from .graph import Direction, Float, Graph

EdgeList = List[Tuple[Hashable, Hashable, Float]]


def _read_csv(path: Path) -> EdgeList:
    """Read ``u,v,w`` rows from a comma or tab separated file.

    Blank lines and lines starting with ``#`` are skipped. Vertex labels are
    kept as stripped strings.

    Raises:
        GraphFormatError: If a row is short or its weight is not numeric.
    """
    edges: EdgeList = []
    with path.open("r", encoding="utf-8") as fh:
        for lineno, raw in enumerate(fh, start=1):
            row = raw.strip()
            if not row or row.startswith("#"):
                continue
            parts = [p.strip() for p in row.replace("\t", ",").split(",")]
            if len(parts) < 3:
                raise GraphFormatError(f"{path}:{lineno}: expected 'u,v,w', got {row!r}")
            try:
                w = float(parts[2])
            except ValueError as exc:
                raise GraphFormatError(
                    f"{path}:{lineno}: non-numeric weight {parts[2]!r}"
                ) from exc
            edges.append((parts[0], parts[1], w))
    return edges


def _read_jsonl(path: Path) -> EdgeList:
    """Read one ``{"u": .., "v": .., "w": ..}`` object per line.

    Labels keep their JSON type (strings or numbers).
    """
    edges: EdgeList = []
    with path.open("r", encoding="utf-8") as fh:
        for lineno, raw in enumerate(fh, start=1):
            row = raw.strip()
            if not row:
                continue
            try:
                obj = json.loads(row)
                edges.append((obj["u"], obj["v"], float(obj["w"])))
            except (ValueError, KeyError, TypeError) as exc:
                raise GraphFormatError(f"{path}:{lineno}: bad edge record {row!r}") from exc
    return edges


_FMT_READERS = {
    "csv": _read_csv,
    "jsonl": _read_jsonl,
}


def _detect_format(path: Path) -> Optional[str]:
    ext = path.suffix.lower()
    if ext in {".csv", ".tsv", ".txt"}:
        return "csv"
    if ext in {".jsonl", ".ndjson"}:
        return "jsonl"
    return None


def read_edges(path: str, fmt: Optional[str] = None) -> EdgeList:
    """Parse an edge-list file into ``(u, v, w)`` tuples.

    Args:
        path: File to read.
        fmt: ``"csv"`` or ``"jsonl"``; detected from the extension if omitted.

    Raises:
        GraphFormatError: If the format is unknown or no edge was parsed.
    """
    p = Path(path)
    fmt = fmt or _detect_format(p)
    if fmt is None or fmt not in _FMT_READERS:
        raise GraphFormatError(f"unknown graph format for {path}")
    edges = _FMT_READERS[fmt](p)
    if not edges:
        raise GraphFormatError(f"no edges parsed from {path}")
    return edges


def read_graph(
    path: str,
    fmt: Optional[str] = None,
    direction: Direction = Direction.DIRECTED,
) -> Graph:
    """Build a graph from an edge-list file.

    Args:
        path: File to read.
        fmt: ``"csv"`` or ``"jsonl"``; detected from the extension if omitted.
        direction: Edge policy of the resulting graph.

    Returns:
        A graph holding every edge in file order. Repeated edges keep the
        weight of their last occurrence.
    """
    return Graph.from_edges(read_edges(path, fmt), direction=direction)


__all__ = ["read_edges", "read_graph"]
