"""Read a project's go.mod with the tree-sitter ``gomod`` grammar.

A missing or malformed manifest never aborts a run: ``read_manifest`` logs
the problem and returns an empty :class:`Manifest`.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from goraph.errors import ManifestUnavailable
from goraph.models import Manifest, Requirement
from goraph.parsing import GOMOD_GRAMMAR, iter_nodes, node_text, parser_for

logger = logging.getLogger(__name__)

_INDIRECT_RE = re.compile(r"^//\s*indirect(?:;|\s*$)")


def read_manifest(project_root: Path, manifest_name: str = "go.mod") -> Manifest:
    """Return the manifest of ``project_root``, or an empty one."""
    path = Path(project_root) / manifest_name
    try:
        data = path.read_bytes()
    except FileNotFoundError:
        logger.debug("No manifest at %s", path)
        return Manifest.empty()
    except OSError as e:
        logger.warning("Cannot read manifest %s: %s", path, e)
        return Manifest.empty()

    try:
        manifest = parse_manifest(data, filename=path)
    except ManifestUnavailable as e:
        logger.warning("Ignoring malformed manifest %s", e)
        return Manifest.empty()

    logger.debug(
        "Manifest %s: module=%s, %d requirement(s)",
        path, manifest.main_module, len(manifest.requirements),
    )
    return manifest


def parse_manifest(data: bytes, filename: Path | str = "go.mod") -> Manifest:
    """Parse raw go.mod bytes.

    Raises ManifestUnavailable when the bytes are not UTF-8 or no
    ``module`` directive can be found.
    """
    try:
        data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ManifestUnavailable(filename, f"not valid UTF-8 ({e.reason})") from e

    tree = parser_for(GOMOD_GRAMMAR).parse(data)
    nodes = list(iter_nodes(tree.root_node))

    main_module = ""
    for node in nodes:
        if node.type == "module_directive":
            path_node = _first_of_type(node, "module_path")
            if path_node is not None:
                main_module = _unquote(node_text(path_node))
            break
    if not main_module:
        raise ManifestUnavailable(filename, "no module directive")

    indirect_rows = {
        node.start_point[0]
        for node in nodes
        if node.type == "comment" and _INDIRECT_RE.match(node_text(node).strip())
    }

    requirements: list[Requirement] = []
    for node in nodes:
        if node.type != "require_spec":
            continue
        path_node = _first_of_type(node, "module_path")
        if path_node is None:
            continue
        version_node = _first_of_type(node, "version")
        requirements.append(Requirement(
            path=_unquote(node_text(path_node)),
            version=node_text(version_node) if version_node is not None else "",
            indirect=path_node.start_point[0] in indirect_rows,
        ))

    return Manifest(main_module=main_module, requirements=requirements)


def _first_of_type(node, node_type: str):
    for child in node.children:
        if child.type == node_type:
            return child
    return None


def _unquote(text: str) -> str:
    text = text.strip()
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "\"`":
        return text[1:-1]
    return text
