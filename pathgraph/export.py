"""Export utilities for shortest-path trees."""

from __future__ import annotations

import json
import math
from typing import Dict, List, Tuple
from xml.sax.saxutils import escape

from .dijkstra import DijkstraResult
from .graph import Graph, Vertex


def shortest_path_tree(result: DijkstraResult) -> List[Tuple[Vertex, Vertex]]:
    """Return the tree edges ``(previous[v], v)`` for every reached vertex."""
    return [(p, v) for v, p in result.previous.items() if p is not None]


def export_tree_json(G: Graph, result: DijkstraResult) -> str:
    """Return a JSON string with node distances and tree edges.

    Unreachable vertices get ``"distance": null``.
    """
    ids: Dict[int, int] = {v.index: i for i, v in enumerate(G.get_all_vertices())}
    nodes = []
    for v in G.get_all_vertices():
        d = result.distances.get(v, math.inf)
        nodes.append(
            {
                "id": ids[v.index],
                "value": v.value,
                "distance": None if math.isinf(d) else d,
            }
        )
    data = {
        "source": result.source.value,
        "nodes": nodes,
        "edges": [
            {"source": ids[p.index], "target": ids[v.index], "weight": p.weight_to(v)}
            for p, v in shortest_path_tree(result)
        ],
    }
    return json.dumps(data, default=str)


def export_tree_graphml(G: Graph, result: DijkstraResult) -> str:
    """Return a minimal GraphML string for the shortest-path tree."""
    lines: List[str] = []
    lines.append('<?xml version="1.0" encoding="UTF-8"?>')
    lines.append('<graphml xmlns="http://graphml.graphdrawing.org/xmlns">')
    lines.append('  <key id="label" for="node" attr.name="label" attr.type="string"/>')
    lines.append('  <key id="d" for="node" attr.name="distance" attr.type="double"/>')
    lines.append('  <graph id="T" edgedefault="directed">')
    for v in G.get_all_vertices():
        d = result.distances.get(v, math.inf)
        lines.append(f'    <node id="n{v.index}">')
        lines.append(f'      <data key="label">{escape(str(v.value))}</data>')
        if not math.isinf(d):
            lines.append(f'      <data key="d">{d}</data>')
        lines.append("    </node>")
    for p, v in shortest_path_tree(result):
        lines.append(f'    <edge source="n{p.index}" target="n{v.index}"/>')
    lines.append("  </graph>")
    lines.append("</graphml>")
    return "\n".join(lines)


__all__ = ["export_tree_graphml", "export_tree_json", "shortest_path_tree"]
