"""Tests for the command line interface."""

import json
from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from goraph.cli import FALLBACK_PORT, cli, resolve_port, resolve_target

FIXTURES = Path(__file__).parent / "fixtures"
SAMPLE = FIXTURES / "sample_project"


def test_resolve_target_defaults():
    assert resolve_target(".", None) == Path(".")


def test_resolve_target_positional_overrides_option():
    assert resolve_target("/flag/path", "/positional/path") == Path("/positional/path")


def test_resolve_target_keeps_spaces():
    assert resolve_target(".", "/path/with spaces/and-dashes") == Path("/path/with spaces/and-dashes")


def test_resolve_target_empty():
    assert resolve_target("", None) == Path(".")


def test_resolve_port():
    assert resolve_port("9000") == 9000
    assert resolve_port("0") == FALLBACK_PORT
    assert resolve_port("70000") == FALLBACK_PORT
    assert resolve_port("abc") == FALLBACK_PORT


def test_graph_command():
    runner = CliRunner()
    result = runner.invoke(cli, ["graph", str(SAMPLE)])
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    ids = {n["id"] for n in data["nodes"]}
    assert "github.com/gorilla/websocket" in ids


def test_graph_command_output_file(tmp_path):
    out = tmp_path / "graph.json"
    runner = CliRunner()
    result = runner.invoke(cli, ["graph", str(SAMPLE), "-o", str(out)])
    assert result.exit_code == 0, result.output
    assert "Wrote" in result.output
    assert json.loads(out.read_text())["edges"]


def test_graph_command_missing_root():
    runner = CliRunner()
    result = runner.invoke(cli, ["graph", str(FIXTURES / "nope")])
    assert result.exit_code == 1
    assert "does not exist" in result.output


def test_summary_command():
    runner = CliRunner()
    result = runner.invoke(cli, ["summary", str(SAMPLE)])
    assert result.exit_code == 0, result.output
    assert "example.com/app ->" in result.output
    assert "golang.org/x/mod -> golang.org/x/net" in result.output


def test_serve_missing_path():
    runner = CliRunner()
    result = runner.invoke(cli, ["serve", str(FIXTURES / "nope")])
    assert result.exit_code == 1
    assert "does not exist" in result.output


def test_serve_invalid_port():
    runner = CliRunner()
    with patch("uvicorn.run") as run:
        result = runner.invoke(cli, ["serve", "--path", str(SAMPLE), "--port", "abc"])
    assert result.exit_code == 0, result.output
    assert f"defaulting to {FALLBACK_PORT}" in result.output
    assert run.call_args.kwargs["port"] == FALLBACK_PORT


def test_serve_positional_path():
    runner = CliRunner()
    with patch("uvicorn.run") as run:
        result = runner.invoke(cli, ["serve", str(SAMPLE), "--port", "9000"])
    assert result.exit_code == 0, result.output
    assert f"Analyzing: {SAMPLE}" in result.output
    app = run.call_args.args[0]
    assert app.state.target_path == SAMPLE
    assert run.call_args.kwargs["port"] == 9000
