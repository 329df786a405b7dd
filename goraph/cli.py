"""Click CLI with serve, graph, and summary subcommands."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from goraph import __version__
from goraph.errors import RootUnreachable
from goraph.pipeline import analyze_project

DEFAULT_PORT = "8080"
FALLBACK_PORT = 8084

_KIND_COLORS = {
    "main": "yellow",
    "package": "blue",
    "internal": "green",
    "external": "magenta",
}


def resolve_target(path_option: str | None, path_argument: str | None) -> Path:
    """A positional path overrides --path; an empty path means the current directory."""
    target = path_argument if path_argument is not None else path_option
    if not target:
        click.echo(click.style("Empty path provided, defaulting to current directory", fg="yellow"))
        target = "."
    return Path(target)


def resolve_port(port: str) -> int:
    try:
        value = int(port)
    except ValueError:
        value = 0
    if not 1 <= value <= 65535:
        click.echo(click.style(f"Invalid port '{port}', defaulting to {FALLBACK_PORT}", fg="yellow"))
        return FALLBACK_PORT
    return value


def _analyze(target: Path):
    try:
        return analyze_project(target)
    except RootUnreachable as e:
        raise click.ClickException(str(e))


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """goraph: visualize the dependency graph of a Go project."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument("path_argument", metavar="[PATH]", required=False)
@click.option("--path", "path_option", default=".", help="Path to analyze")
@click.option("--port", "-p", default=DEFAULT_PORT, help="Server port")
@click.option("--host", default="127.0.0.1", help="Host address")
@click.option("--open/--no-open", default=False, help="Open browser automatically")
def serve(path_argument: str | None, path_option: str, port: str, host: str, open: bool):
    """Start the visualizer server."""
    import uvicorn

    from goraph.web import create_app

    target = resolve_target(path_option, path_argument)
    port_number = resolve_port(port)
    if not target.exists():
        raise click.ClickException(f"Path '{target}' does not exist")

    url = f"http://{'localhost' if host in ('127.0.0.1', '0.0.0.0') else host}:{port_number}"
    click.echo(f"Analyzing: {target}")
    click.echo(f"Visualizer: {url}")

    if open:
        import threading
        import webbrowser
        threading.Timer(1.0, lambda: webbrowser.open(url)).start()

    uvicorn.run(create_app(target), host=host, port=port_number, log_level="info")


@cli.command()
@click.argument("source_dir", type=click.Path(file_okay=False, path_type=Path), default=".")
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path), help="Write JSON to a file")
@click.option("--indent", default=2, show_default=True, help="JSON indentation")
def graph(source_dir: Path, output: Path | None, indent: int):
    """Print the dependency graph as JSON."""
    result = _analyze(source_dir)
    payload = json.dumps(result.to_dict(), indent=indent or None)
    if output:
        output.write_text(payload + "\n", encoding="utf-8")
        click.echo(f"Wrote {len(result.nodes)} node(s), {len(result.edges)} edge(s) to {output}")
    else:
        click.echo(payload)


@cli.command()
@click.argument("source_dir", type=click.Path(file_okay=False, path_type=Path), default=".")
def summary(source_dir: Path):
    """Print node kinds and edge connections."""
    result = _analyze(source_dir)

    click.echo(f"\nNodes: {len(result.nodes)}, Edges: {len(result.edges)}\n")

    by_kind: dict[str, list[str]] = {}
    for node in result.nodes:
        by_kind.setdefault(node.kind.value, []).append(node.id)

    click.echo("Node kinds:")
    for kind, ids in by_kind.items():
        click.echo(f"  {click.style(kind, fg=_KIND_COLORS.get(kind, 'white'))} ({len(ids)})")
        for node_id in ids:
            click.echo(f"    {node_id}")

    targets: dict[str, list[str]] = {}
    for edge in result.edges:
        targets.setdefault(edge.source_id, []).append(edge.target_id)

    click.echo("\nEdges:")
    for source, dests in targets.items():
        click.echo(f"  {source} -> {', '.join(dests)}")


if __name__ == "__main__":
    cli()
