"""Analysis run orchestrator: manifest -> scan -> resolve -> repair."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from goraph.analysis.dependency_graph import DependencyGraphBuilder
from goraph.analysis.graph_models import DependencyGraph
from goraph.errors import RootUnreachable
from goraph.manifest import read_manifest
from goraph.models import AnalyzerConfig
from goraph.scanner import scan_imports

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int, int], None]


def analyze_project(
    project_root: Path | str | None = None,
    config: AnalyzerConfig | None = None,
    progress: ProgressCallback | None = None,
) -> DependencyGraph:
    """Build a fresh dependency graph for the Go project at ``project_root``.

    Every call allocates its own graph, so concurrent calls are independent.
    Raises RootUnreachable if the root is missing or not a directory; every
    other problem degrades the graph instead of failing the run.
    """
    config = config or AnalyzerConfig()
    root = Path(project_root) if project_root is not None else config.source_dir
    if not root.is_dir():
        raise RootUnreachable(root)

    if progress:
        progress("Reading manifest", 0, 1)
    manifest = read_manifest(root, config.manifest_name)
    if progress:
        progress("Reading manifest", 1, 1)

    builder = DependencyGraphBuilder(label_max_length=config.label_max_length)
    run = builder.start(manifest)

    files: set[Path] = set()
    if progress:
        progress("Scanning", 0, 0)
    for fact in scan_imports(root, skip_dirs=config.skip_dirs):
        builder.add_fact(run, fact)
        if fact.file_path is not None and fact.file_path not in files:
            files.add(fact.file_path)
            if progress:
                progress("Scanning", len(files), 0)

    if progress:
        progress("Repairing", 0, 1)
    builder.repair(run)
    if progress:
        progress("Repairing", 1, 1)

    graph = run.graph
    logger.info(
        "Analyzed %s: %d file(s), %d node(s), %d edge(s)",
        root, len(files), len(graph.nodes), len(graph.edges),
    )
    return graph
