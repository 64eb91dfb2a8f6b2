"""Command-line interface for running shortest-path queries on edge files."""

from __future__ import annotations

import argparse
import json
import math
import sys
import time
import traceback
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Hashable, List, Optional

from .dijkstra import DijkstraSolver, SolverConfig
from .exceptions import ConfigError, InputError, PathgraphError
from .export import export_tree_graphml, export_tree_json
from .graph import Direction, Graph
from .io import read_graph
from .logger import StdLogger

EXAMPLE_CSV = """# u,v,w
A,B,4
A,C,2
B,C,1
B,D,5
C,D,8
C,E,10
D,E,2
"""


def _build_graph_from_file(path: str, fmt: Optional[str], undirected: bool) -> Graph:
    """Build a :class:`Graph` from an edges file."""
    if not Path(path).exists():
        raise InputError(f"edges file not found: {path}")
    direction = Direction.UNDIRECTED if undirected else Direction.DIRECTED
    return read_graph(path, fmt, direction=direction)


def _resolve_value(G: Graph, raw: str) -> Hashable:
    """Map a command-line label onto a vertex value.

    CSV graphs use string labels; JSONL graphs may use numbers, so a label that
    is not a vertex as-is is retried as an ``int`` and then a ``float``.
    """
    if raw in G:
        return raw
    for cast in (int, float):
        try:
            value = cast(raw)
        except ValueError:
            continue
        if value in G:
            return value
    return raw


def _jsonable(d: float) -> Optional[float]:
    return None if math.isinf(d) else d


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the ``pathgraph`` command-line tool."""
    examples = (
        "Examples:\n"
        "  pathgraph --edges graph.csv --source A\n"
        "  pathgraph --edges graph.csv --source A --target E\n"
        "  pathgraph --edges roads.jsonl --source 0 --undirected --export-json tree.json\n"
    )
    p = argparse.ArgumentParser(
        prog="pathgraph",
        description="Dijkstra shortest paths over a weighted edge list",
        epilog=examples,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    p.add_argument("--verbose", action="store_true", help="Show full tracebacks")
    p.add_argument("--log-json", action="store_true", help="Emit structured log lines")
    p.add_argument(
        "--log-level",
        choices=["debug", "info", "warning"],
        default="warning",
        help="Log verbosity",
    )
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--edges", type=str, help="Path to edges file")
    src.add_argument(
        "--example",
        action="store_true",
        help="Print a sample edges CSV to stdout and exit",
    )
    p.add_argument(
        "--format",
        choices=["csv", "jsonl"],
        default=None,
        help="Edge file format (auto-detected from extension)",
    )
    p.add_argument("--undirected", action="store_true", help="Treat every edge as two-way")
    p.add_argument("--source", type=str, help="Source vertex label")
    p.add_argument("--target", type=str, default=None, help="Target vertex label for path output")
    p.add_argument("--frontier", choices=["indexed", "lazy"], default="indexed")
    p.add_argument(
        "--reject-negative",
        action="store_true",
        help="Fail instead of running on negative edge weights",
    )
    p.add_argument("--export-json", type=str, default=None, help="Write shortest-path tree as JSON")
    p.add_argument(
        "--export-graphml",
        type=str,
        default=None,
        help="Write shortest-path tree as GraphML",
    )
    p.add_argument(
        "--metrics-out",
        type=str,
        default=None,
        help="Write run metrics to this JSON file",
    )

    args = p.parse_args(argv)

    if args.example:
        sys.stdout.write(EXAMPLE_CSV)
        return 0

    try:
        if args.source is None:
            raise InputError("--source is required with --edges")
        G = _build_graph_from_file(args.edges, args.format, args.undirected)

        cfg = SolverConfig(frontier=args.frontier, reject_negative_weights=args.reject_negative)
        level = "info" if args.log_json and args.log_level == "warning" else args.log_level
        logger = StdLogger(level=level, json_fmt=args.log_json, stream=sys.stderr)

        if args.verbose:
            sys.stderr.write(
                f"config: n={len(G)} m={G.edge_count} frontier={args.frontier} "
                f"undirected={args.undirected} source={args.source}\n"
            )

        source = _resolve_value(G, args.source)
        solver = DijkstraSolver(G, source, config=cfg, logger=logger)
        t0 = time.perf_counter()
        res = solver.solve()
        wall_ms = (time.perf_counter() - t0) * 1000.0

        out: Dict[str, Any] = {
            "source": source,
            "frontier": args.frontier,
            "distances": {
                str(v.value): _jsonable(res.distances[v]) for v in G.get_all_vertices()
            },
        }
        if args.target is not None:
            target = _resolve_value(G, args.target)
            out["target"] = target
            out["distance"] = _jsonable(solver.distance(target))
            out["path"] = solver.path(target)

        if args.export_json:
            with open(args.export_json, "w", encoding="utf-8") as fh:
                fh.write(export_tree_json(G, res))
        if args.export_graphml:
            with open(args.export_graphml, "w", encoding="utf-8") as fh:
                fh.write(export_tree_graphml(G, res))
        if args.metrics_out:
            with open(args.metrics_out, "w", encoding="utf-8") as fh:
                json.dump(asdict(solver.metrics(wall_ms=wall_ms)), fh)

        print(json.dumps(out, default=str))
        return 0

    except (InputError, ConfigError) as exc:
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"error: {exc}\n")
        return 64
    except PathgraphError as exc:
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"internal error: {exc}\n")
        return 70
    except Exception as exc:
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"internal error: {exc.__class__.__name__}: {exc}\n")
        return 70


if __name__ == "__main__":
    sys.exit(main())
