"""Data models for the goraph analysis run."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path


class NodeKind(enum.Enum):
    MAIN = "main"
    PACKAGE = "package"
    INTERNAL = "internal"
    EXTERNAL = "external"


# Layout hints carried on every node; the renderer decides what they mean.
DEPTH_LOCAL = 0
DEPTH_IMPORT = 1
DEPTH_DIRECT = 2
DEPTH_INDIRECT = 3

ROOT_PACKAGE = "root"
ROOT_LABEL = "main"


@dataclass
class Requirement:
    """One `require` line of a go.mod file."""
    path: str
    version: str = ""
    indirect: bool = False


@dataclass
class Manifest:
    """Result from the manifest reader stage."""
    main_module: str = ""
    requirements: list[Requirement] = field(default_factory=list)

    @classmethod
    def empty(cls) -> Manifest:
        return cls()

    @property
    def available_modules(self) -> set[str]:
        return {req.path for req in self.requirements}

    @property
    def direct_modules(self) -> set[str]:
        flags: dict[str, bool] = {}
        for req in self.requirements:
            flags[req.path] = not req.indirect
        return {path for path, direct in flags.items() if direct}


@dataclass
class ImportFact:
    """Result from the scanner stage: one import observed in one package.

    ``import_path`` is None for a source file that declares no imports; the
    fact then only announces the package.
    """
    package_id: str
    label: str
    import_path: str | None = None
    file_path: Path | None = None


@dataclass
class AnalyzerConfig:
    """Configuration for one analysis run."""
    source_dir: Path = field(default_factory=lambda: Path("."))
    manifest_name: str = "go.mod"
    extensions: tuple[str, ...] = (".go",)
    label_max_length: int = 40
    skip_dirs: list[str] = field(default_factory=lambda: [
        "vendor", "testdata", ".git", "node_modules",
    ])
