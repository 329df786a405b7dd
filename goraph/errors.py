"""Exceptions raised while building a dependency graph."""

from __future__ import annotations

from pathlib import Path


class GoraphError(Exception):
    """Base class for all goraph errors."""


class ManifestUnavailable(GoraphError):
    """The go.mod file is missing or cannot be parsed.

    Recovered by the manifest reader: the run continues without a module
    identity or declared dependencies.
    """

    def __init__(self, path: Path | str, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


class SourceUnparsable(GoraphError):
    """A single source file could not be read or its header could not be parsed."""

    def __init__(self, path: Path | str, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


class RootUnreachable(GoraphError):
    """The project root does not exist or is not a directory.

    This is the only error an analysis run reports to its caller.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)
        super().__init__(f"Path '{self.path}' does not exist or is not a directory")
