"""Source import scanner."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

from goraph.models import ImportFact
from goraph.scanner.base import BaseScanner, package_identity
from goraph.scanner.go_scanner import GoImportScanner, parse_imports


def scan_imports(
    directory: Path,
    skip_dirs: list[str] | None = None,
) -> Iterator[ImportFact]:
    """Lazily yield every import fact under ``directory``."""
    return GoImportScanner(skip_dirs=skip_dirs).scan_directory(directory)


__all__ = [
    "BaseScanner",
    "GoImportScanner",
    "package_identity",
    "parse_imports",
    "scan_imports",
]
