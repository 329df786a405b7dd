"""Abstract base scanner."""

from __future__ import annotations

import abc
import fnmatch
import logging
from pathlib import Path
from typing import Iterator

from goraph.errors import SourceUnparsable
from goraph.models import ROOT_LABEL, ROOT_PACKAGE, ImportFact

logger = logging.getLogger(__name__)


class BaseScanner(abc.ABC):
    """Base class for language-specific import scanners."""

    extensions: tuple[str, ...]

    def __init__(self, skip_dirs: list[str] | None = None):
        self.skip_dirs = skip_dirs if skip_dirs is not None else [
            "vendor", "testdata", ".git", "node_modules",
        ]

    @abc.abstractmethod
    def scan_file(self, file_path: Path) -> list[str]:
        """Return the import paths declared by one file.

        Raises SourceUnparsable when the file cannot be read or parsed.
        """

    def scan_directory(self, directory: Path) -> Iterator[ImportFact]:
        """Recursively scan ``directory``, yielding one fact per import.

        Files that cannot be parsed are skipped. A file without imports
        still yields a fact announcing its package.
        """
        directory = Path(directory)
        for path in sorted(directory.rglob("*")):
            if path.suffix not in self.extensions or not path.is_file():
                continue
            rel = path.relative_to(directory)
            if self._should_skip(rel):
                continue
            try:
                imports = self.scan_file(path)
            except SourceUnparsable as e:
                logger.debug("Skipping %s", e)
                continue

            package_id, label = package_identity(rel.parent)
            if not imports:
                yield ImportFact(package_id, label, None, path)
            for import_path in imports:
                yield ImportFact(package_id, label, import_path, path)

    def _should_skip(self, rel_path: Path) -> bool:
        for part in rel_path.parts:
            for pattern in self.skip_dirs:
                if fnmatch.fnmatch(part, pattern):
                    return True
        return False


def package_identity(rel_dir: Path) -> tuple[str, str]:
    """Map a directory relative to the project root to (package id, label)."""
    rel = rel_dir.as_posix()
    if rel in ("", "."):
        return f"pkg:{ROOT_PACKAGE}", ROOT_LABEL
    return f"pkg:{rel}", rel_dir.name
