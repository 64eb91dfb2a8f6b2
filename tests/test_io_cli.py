"""
Tests for edge-list reading, shortest-path tree export and the CLI.
"""

import json
import xml.etree.ElementTree as ET

import pytest

from pathgraph import Direction, GraphFormatError, dijkstra, read_graph
from pathgraph.cli import EXAMPLE_CSV, main
from pathgraph.export import export_tree_graphml, export_tree_json, shortest_path_tree


@pytest.fixture
def chain_csv(tmp_path):
    path = tmp_path / "chain.csv"
    path.write_text(EXAMPLE_CSV, encoding="utf-8")
    return path


def test_read_csv_keeps_string_labels(chain_csv):
    g = read_graph(str(chain_csv))

    assert g.direction is Direction.DIRECTED
    assert [v.value for v in g] == ["A", "B", "C", "D", "E"]
    assert g.edge_count == 7
    assert g.get_vertex("A").weight_to(g.get_vertex("B")) == 4.0


def test_read_tsv_undirected(tmp_path):
    path = tmp_path / "g.tsv"
    path.write_text("# comment\nx\ty\t1.5\n\ny\tz\t2\n", encoding="utf-8")

    g = read_graph(str(path), direction=Direction.UNDIRECTED)

    assert g.are_adjacent("y", "x")
    assert g.edge_count == 4


def test_read_jsonl_keeps_numeric_labels(tmp_path):
    path = tmp_path / "g.jsonl"
    rows = [{"u": 0, "v": 1, "w": 2}, {"u": 1, "v": 2, "w": 3}]
    path.write_text("\n".join(json.dumps(r) for r in rows) + "\n", encoding="utf-8")

    g = read_graph(str(path))

    assert [v.value for v in g] == [0, 1, 2]


@pytest.mark.parametrize(
    "name, body",
    [
        ("bad.csv", "A,B\n"),
        ("bad.csv", "A,B,heavy\n"),
        ("empty.csv", "# nothing here\n"),
        ("bad.jsonl", '{"u": 1}\n'),
        ("graph.xyz", "A,B,1\n"),
    ],
)
def test_read_errors_are_graph_format_errors(tmp_path, name, body):
    path = tmp_path / name
    path.write_text(body, encoding="utf-8")

    with pytest.raises(GraphFormatError):
        read_graph(str(path))


def test_tree_exports(chain_csv):
    g = read_graph(str(chain_csv))
    g.add_vertex("lonely")
    res = dijkstra(g, "A")

    tree = {(p.value, v.value) for p, v in shortest_path_tree(res)}
    assert tree == {("A", "B"), ("A", "C"), ("B", "D"), ("D", "E")}

    data = json.loads(export_tree_json(g, res))
    assert data["source"] == "A"
    by_value = {n["value"]: n for n in data["nodes"]}
    assert by_value["E"]["distance"] == 11
    assert by_value["lonely"]["distance"] is None
    assert len(data["edges"]) == 4

    root = ET.fromstring(export_tree_graphml(g, res))
    ns = "{http://graphml.graphdrawing.org/xmlns}"
    assert len(root.findall(f".//{ns}node")) == 6
    assert len(root.findall(f".//{ns}edge")) == 4


def test_cli_prints_distances_and_path(chain_csv, capsys):
    code = main(["--edges", str(chain_csv), "--source", "A", "--target", "D"])

    assert code == 0
    out = json.loads(capsys.readouterr().out)
    assert out["distances"] == {"A": 0, "B": 4, "C": 2, "D": 9, "E": 11}
    assert out["distance"] == 9
    assert out["path"] == ["A", "B", "D"]


def test_cli_unreachable_is_null(tmp_path, capsys):
    path = tmp_path / "g.csv"
    path.write_text("A,B,1\nC,D,1\n", encoding="utf-8")

    code = main(["--edges", str(path), "--source", "A", "--target", "C", "--frontier", "lazy"])

    assert code == 0
    out = json.loads(capsys.readouterr().out)
    assert out["distances"]["C"] is None
    assert out["distance"] is None
    assert out["path"] == []


def test_cli_numeric_labels_and_undirected(tmp_path, capsys):
    path = tmp_path / "g.jsonl"
    rows = [{"u": 0, "v": 1, "w": 1}, {"u": 1, "v": 2, "w": 2}]
    path.write_text("\n".join(json.dumps(r) for r in rows), encoding="utf-8")

    code = main(["--edges", str(path), "--source", "2", "--target", "0", "--undirected"])

    assert code == 0
    out = json.loads(capsys.readouterr().out)
    assert out["source"] == 2
    assert out["path"] == [2, 1, 0]


def test_cli_missing_source_vertex(chain_csv, capsys):
    code = main(["--edges", str(chain_csv), "--source", "Z"])

    assert code == 64
    assert "Start vertex Z not found" in capsys.readouterr().err


def test_cli_missing_file(tmp_path, capsys):
    code = main(["--edges", str(tmp_path / "nope.csv"), "--source", "A"])

    assert code == 64
    assert "edges file not found" in capsys.readouterr().err


def test_cli_reject_negative(tmp_path, capsys):
    path = tmp_path / "g.csv"
    path.write_text("A,B,-1\n", encoding="utf-8")

    assert main(["--edges", str(path), "--source", "A", "--reject-negative"]) == 64
    assert "negative weight" in capsys.readouterr().err


def test_cli_example(capsys):
    assert main(["--example"]) == 0
    assert capsys.readouterr().out == EXAMPLE_CSV


def test_cli_writes_exports_and_metrics(chain_csv, tmp_path, capsys):
    tree_json = tmp_path / "tree.json"
    tree_graphml = tmp_path / "tree.graphml"
    metrics = tmp_path / "metrics.json"

    code = main(
        [
            "--edges",
            str(chain_csv),
            "--source",
            "A",
            "--export-json",
            str(tree_json),
            "--export-graphml",
            str(tree_graphml),
            "--metrics-out",
            str(metrics),
            "--log-json",
        ]
    )

    assert code == 0
    captured = capsys.readouterr()
    events = [json.loads(line)["event"] for line in captured.err.splitlines()]
    assert events == ["dijkstra.start", "dijkstra.done"]
    assert json.loads(tree_json.read_text(encoding="utf-8"))["source"] == "A"
    assert tree_graphml.read_text(encoding="utf-8").startswith("<?xml")
    m = json.loads(metrics.read_text(encoding="utf-8"))
    assert m["n"] == 5 and m["m"] == 7 and m["counters"]["pops"] == 5


def test_cli_unwritable_export_is_internal_error(chain_csv, tmp_path, capsys):
    target = tmp_path / "no_such_dir" / "tree.json"

    code = main(["--edges", str(chain_csv), "--source", "A", "--export-json", str(target)])

    assert code == 70
    err = capsys.readouterr().err
    assert err.startswith("internal error: FileNotFoundError")


def test_cli_internal_error_verbose_prints_traceback(chain_csv, tmp_path, capsys):
    target = tmp_path / "no_such_dir" / "metrics.json"

    code = main(
        ["--edges", str(chain_csv), "--source", "A", "--metrics-out", str(target), "--verbose"]
    )

    assert code == 70
    assert "Traceback" in capsys.readouterr().err
