"""Dependency graph builder: turns a manifest and a stream of import facts
into a deduplicated graph, then repairs it.

The repair pass attaches every used indirect module to a direct module that
probably pulled it in. go.mod does not record which direct requirement owns
an indirect one, so the parent is guessed from a shared first path element
(``golang.org/x/net`` goes under any direct ``golang.org/...`` module). The
guess is a heuristic; indirect modules with no candidate parent are removed
rather than rendered as floating nodes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from goraph.analysis.graph_models import DependencyGraph
from goraph.analysis.resolver import (
    ImportClass,
    ImportResolver,
    base_name,
    shorten_label,
)
from goraph.models import (
    DEPTH_DIRECT,
    DEPTH_IMPORT,
    DEPTH_INDIRECT,
    DEPTH_LOCAL,
    ImportFact,
    Manifest,
    NodeKind,
)

logger = logging.getLogger(__name__)


@dataclass
class _Run:
    """State owned by a single build; never shared between builds."""
    graph: DependencyGraph
    manifest: Manifest
    resolver: ImportResolver
    direct: set[str]
    used: set[str] = field(default_factory=set)


class DependencyGraphBuilder:
    """Build a dependency graph for one Go project."""

    def __init__(self, label_max_length: int = 40):
        self.label_max_length = label_max_length

    def build(self, manifest: Manifest, facts: Iterable[ImportFact]) -> DependencyGraph:
        run = self.start(manifest)
        for fact in facts:
            self.add_fact(run, fact)
        self.repair(run)
        return run.graph

    def start(self, manifest: Manifest) -> _Run:
        graph = DependencyGraph()
        if manifest.main_module:
            graph.add_node(manifest.main_module, manifest.main_module, NodeKind.MAIN, DEPTH_LOCAL)
        return _Run(
            graph=graph,
            manifest=manifest,
            resolver=ImportResolver(manifest.main_module, manifest.available_modules),
            direct=manifest.direct_modules,
        )

    def add_fact(self, run: _Run, fact: ImportFact) -> None:
        graph = run.graph
        graph.add_node(fact.package_id, fact.label, NodeKind.PACKAGE, DEPTH_LOCAL)
        if fact.import_path is None:
            return

        resolution = run.resolver.resolve(fact.import_path)
        import_path = fact.import_path

        if resolution.import_class is ImportClass.INTERNAL:
            import_id = f"import:{import_path}"
            graph.add_node(import_id, base_name(import_path), NodeKind.INTERNAL, DEPTH_LOCAL)
            graph.add_edge(fact.package_id, import_id)
            return

        if resolution.import_class is not ImportClass.EXTERNAL:
            # stdlib, or an external path no declared module owns
            return

        module = resolution.module
        run.used.add(module)
        graph.add_node(module, module, NodeKind.EXTERNAL, DEPTH_DIRECT)

        if resolution.is_module_root:
            graph.add_edge(fact.package_id, module)
            return

        import_id = f"import:{import_path}"
        label = shorten_label(import_path, self.label_max_length)
        graph.add_node(import_id, label, NodeKind.EXTERNAL, DEPTH_IMPORT)
        graph.add_edge(fact.package_id, import_id)
        graph.add_edge(import_id, module)

    def repair(self, run: _Run) -> None:
        """Connect used modules to the main module or a likely direct parent."""
        graph = run.graph
        main_module = run.manifest.main_module
        parents = sorted(m for m in run.used if m in run.direct)
        orphans: list[str] = []

        for module in sorted(run.used):
            if module in run.direct:
                if main_module:
                    graph.add_edge(main_module, module)
                continue

            parent = self._likely_parent(module, parents)
            if parent is None:
                orphans.append(module)
                continue
            graph.add_edge(parent, module)
            node = graph.get_node(module)
            if node is not None:
                node.depth = DEPTH_INDIRECT

        if orphans:
            logger.debug("Dropping %d unparented indirect module(s): %s", len(orphans), orphans)
            graph.remove_nodes(orphans + self._sub_imports_of(graph, set(orphans)))

    @staticmethod
    def _sub_imports_of(graph: DependencyGraph, modules: set[str]) -> list[str]:
        """Import sub-nodes whose outgoing edges all lead into ``modules``."""
        targets: dict[str, set[str]] = {}
        for edge in graph.edges:
            if edge.source_id.startswith("import:"):
                targets.setdefault(edge.source_id, set()).add(edge.target_id)
        return [
            node_id for node_id, owners in targets.items()
            if owners and owners <= modules
        ]

    @staticmethod
    def _likely_parent(module: str, parents: list[str]) -> str | None:
        for parent in parents:
            if parent.split("/", 1)[0] in module:
                return parent
        return None
