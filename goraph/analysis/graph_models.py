"""Data models for the dependency graph."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from goraph.models import NodeKind


@dataclass
class GraphNode:
    id: str
    label: str
    kind: NodeKind
    depth: int = 0
    # Render-only state owned by the visualizer
    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "x": self.x,
            "y": self.y,
            "vx": self.vx,
            "vy": self.vy,
            "type": self.kind.value,
            "depth": self.depth,
        }


@dataclass(frozen=True)
class GraphEdge:
    source_id: str
    target_id: str

    def to_dict(self) -> dict[str, str]:
        return {"source": self.source_id, "target": self.target_id}


@dataclass
class DependencyGraph:
    """Append-only node/edge set with id and pair deduplication."""
    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)
    _index: dict[str, GraphNode] = field(default_factory=dict, repr=False)
    _pairs: set[tuple[str, str]] = field(default_factory=set, repr=False)

    def add_node(self, node_id: str, label: str, kind: NodeKind, depth: int = 0) -> GraphNode:
        """Add a node unless the id exists; the first insertion wins."""
        existing = self._index.get(node_id)
        if existing is not None:
            return existing
        node = GraphNode(id=node_id, label=label, kind=kind, depth=depth)
        self.nodes.append(node)
        self._index[node_id] = node
        return node

    def add_edge(self, source_id: str, target_id: str) -> bool:
        pair = (source_id, target_id)
        if pair in self._pairs:
            return False
        self._pairs.add(pair)
        self.edges.append(GraphEdge(source_id, target_id))
        return True

    def remove_nodes(self, node_ids: Iterable[str]) -> None:
        """Drop nodes and every edge touching them by rebuilding both lists."""
        doomed = set(node_ids)
        if not doomed:
            return
        self.nodes = [n for n in self.nodes if n.id not in doomed]
        self.edges = [
            e for e in self.edges
            if e.source_id not in doomed and e.target_id not in doomed
        ]
        for node_id in doomed:
            self._index.pop(node_id, None)
        self._pairs = {(e.source_id, e.target_id) for e in self.edges}

    def get_node(self, node_id: str) -> GraphNode | None:
        return self._index.get(node_id)

    def has_node(self, node_id: str) -> bool:
        return node_id in self._index

    def node_ids(self) -> set[str]:
        return set(self._index)

    def edge_pairs(self) -> set[tuple[str, str]]:
        return set(self._pairs)

    def incoming(self, node_id: str) -> list[str]:
        return [e.source_id for e in self.edges if e.target_id == node_id]

    def summary(self) -> dict[str, int]:
        counts = {kind.value: 0 for kind in NodeKind}
        for node in self.nodes:
            counts[node.kind.value] += 1
        counts["edges"] = len(self.edges)
        return counts

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }
