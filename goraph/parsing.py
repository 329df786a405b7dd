"""Shared tree-sitter parser cache for Go sources and go.mod manifests."""

from __future__ import annotations

import threading

from tree_sitter_language_pack import get_parser

GO_GRAMMAR = "go"
GOMOD_GRAMMAR = "gomod"

# Parsers are not safe to share between threads, so each thread keeps its own.
_local = threading.local()


def parser_for(grammar_name: str):
    cache: dict[str, object] | None = getattr(_local, "parsers", None)
    if cache is None:
        cache = _local.parsers = {}
    if grammar_name not in cache:
        cache[grammar_name] = get_parser(grammar_name)
    return cache[grammar_name]


def node_text(node) -> str:
    return node.text.decode("utf-8", errors="replace") if node.text else ""


def iter_nodes(root):
    """Depth-first walk over every node below (and including) ``root``."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))
