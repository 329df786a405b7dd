"""Tests for the full analysis run."""

from pathlib import Path

import pytest

from goraph.errors import RootUnreachable
from goraph.models import AnalyzerConfig, NodeKind
from goraph.pipeline import analyze_project

FIXTURES = Path(__file__).parent / "fixtures"
SAMPLE = FIXTURES / "sample_project"


def test_sample_project_nodes():
    graph = analyze_project(SAMPLE)
    assert graph.node_ids() == {
        "example.com/app",
        "pkg:root",
        "pkg:util",
        "import:example.com/app/util",
        "github.com/gorilla/websocket",
        "golang.org/x/mod",
        "import:golang.org/x/mod/modfile",
        "golang.org/x/net",
        "import:golang.org/x/net/html",
    }
    kinds = {n.id: n.kind for n in graph.nodes}
    assert kinds["example.com/app"] is NodeKind.MAIN
    assert kinds["pkg:util"] is NodeKind.PACKAGE
    assert kinds["import:example.com/app/util"] is NodeKind.INTERNAL
    assert kinds["golang.org/x/net"] is NodeKind.EXTERNAL


def test_sample_project_edges():
    graph = analyze_project(SAMPLE)
    assert graph.edge_pairs() == {
        ("pkg:root", "import:example.com/app/util"),
        ("pkg:root", "github.com/gorilla/websocket"),
        ("pkg:root", "import:golang.org/x/mod/modfile"),
        ("import:golang.org/x/mod/modfile", "golang.org/x/mod"),
        ("pkg:util", "import:golang.org/x/net/html"),
        ("import:golang.org/x/net/html", "golang.org/x/net"),
        ("example.com/app", "github.com/gorilla/websocket"),
        ("example.com/app", "golang.org/x/mod"),
        ("golang.org/x/mod", "golang.org/x/net"),
    }


def test_skipped_and_broken_files_leave_no_trace():
    graph = analyze_project(SAMPLE)
    ids = graph.node_ids()
    assert "pkg:broken" not in ids
    assert "pkg:vendor/github.com/gorilla/websocket" not in ids
    assert "pkg:testdata" not in ids
    assert not any("unknown.org" in node_id for node_id in ids)
    assert "github.com/unused/lib" not in ids


def test_every_edge_endpoint_exists():
    graph = analyze_project(SAMPLE)
    for source, target in graph.edge_pairs():
        assert graph.has_node(source)
        assert graph.has_node(target)


def test_idempotent():
    first = analyze_project(SAMPLE)
    second = analyze_project(SAMPLE)
    assert first.node_ids() == second.node_ids()
    assert first.edge_pairs() == second.edge_pairs()
    assert first is not second


def test_no_duplicates():
    graph = analyze_project(SAMPLE)
    ids = [n.id for n in graph.nodes]
    pairs = [(e.source_id, e.target_id) for e in graph.edges]
    assert len(ids) == len(set(ids))
    assert len(pairs) == len(set(pairs))


def test_project_without_manifest(tmp_path):
    (tmp_path / "main.go").write_text(
        'package main\n\nimport (\n\t"fmt"\n\t"github.com/a/b"\n)\n'
    )
    graph = analyze_project(tmp_path)
    assert graph.node_ids() == {"pkg:root"}
    assert graph.edges == []


def test_config_source_dir_and_skip_dirs(tmp_path):
    (tmp_path / "go.mod").write_text("module example.com/app\n")
    (tmp_path / "gen").mkdir()
    (tmp_path / "gen" / "g.go").write_text('package gen\n\nimport "example.com/app/x"\n')
    config = AnalyzerConfig(source_dir=tmp_path, skip_dirs=["gen"])
    graph = analyze_project(config=config)
    assert graph.node_ids() == {"example.com/app"}


def test_progress_callback():
    stages = []
    analyze_project(SAMPLE, progress=lambda stage, cur, total: stages.append(stage))
    assert stages[0] == "Reading manifest"
    assert "Scanning" in stages
    assert stages[-1] == "Repairing"


def test_missing_root():
    with pytest.raises(RootUnreachable):
        analyze_project(FIXTURES / "does-not-exist")


def test_file_root(tmp_path):
    path = tmp_path / "file.go"
    path.write_text("package main\n")
    with pytest.raises(RootUnreachable):
        analyze_project(path)
