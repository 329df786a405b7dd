"""Go import scanner using tree-sitter on the file header only."""

from __future__ import annotations

import re
from pathlib import Path

from goraph.errors import SourceUnparsable
from goraph.parsing import GO_GRAMMAR, node_text, parser_for
from goraph.scanner.base import BaseScanner

# Imports must precede every top-level declaration, so the header ends here.
_DECL_RE = re.compile(rb"^(?:func|type|var|const)\b", re.MULTILINE)


class GoImportScanner(BaseScanner):
    extensions = (".go",)

    def scan_file(self, file_path: Path) -> list[str]:
        try:
            source = file_path.read_bytes()
        except OSError as e:
            raise SourceUnparsable(file_path, str(e)) from e
        return parse_imports(source, file_path)


def header_of(source: bytes) -> bytes:
    """Cut ``source`` before its first top-level declaration."""
    for m in _DECL_RE.finditer(source):
        # cgo preambles can hold C declarations inside a block comment
        if source.rfind(b"/*", 0, m.start()) > source.rfind(b"*/", 0, m.start()):
            continue
        return source[:m.start()]
    return source


def parse_imports(source: bytes, file_path: Path | str = "<source>") -> list[str]:
    """Return the import paths of a Go file, in declaration order."""
    tree = parser_for(GO_GRAMMAR).parse(header_of(source))
    root = tree.root_node
    if root.has_error:
        raise SourceUnparsable(file_path, "syntax error in package or import section")
    if not any(child.type == "package_clause" for child in root.children):
        raise SourceUnparsable(file_path, "missing package clause")

    imports: list[str] = []
    for child in root.children:
        if child.type != "import_declaration":
            continue
        for spec in _import_specs(child):
            path_node = spec.child_by_field_name("path")
            if path_node is None:
                continue
            imports.append(_unquote(node_text(path_node)))
    return imports


def _import_specs(declaration):
    for child in declaration.named_children:
        if child.type == "import_spec":
            yield child
        elif child.type == "import_spec_list":
            for spec in child.named_children:
                if spec.type == "import_spec":
                    yield spec


def _unquote(literal: str) -> str:
    if len(literal) >= 2 and literal[0] == literal[-1] and literal[0] in "\"`":
        return literal[1:-1]
    return literal
