"""Import classification and longest-prefix module resolution."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class ImportClass(enum.Enum):
    STDLIB = "stdlib"
    INTERNAL = "internal"
    EXTERNAL = "external"
    UNRESOLVED = "unresolved"


@dataclass(frozen=True)
class Resolution:
    import_path: str
    import_class: ImportClass
    module: str | None = None

    @property
    def is_module_root(self) -> bool:
        return self.module is not None and self.import_path == self.module


def is_stdlib(import_path: str) -> bool:
    """Standard library paths have no dot in their first element."""
    return "." not in import_path.split("/", 1)[0]


def longest_prefix_match(import_path: str, modules) -> str | None:
    """Return the longest module path that is a textual prefix of ``import_path``.

    Among equal-length candidates the first one in iteration order wins.
    """
    best: str | None = None
    for module in modules:
        if import_path.startswith(module) and (best is None or len(module) > len(best)):
            best = module
    return best


def shorten_label(import_path: str, max_length: int = 40) -> str:
    """Abbreviate long paths to ``first/.../last``."""
    if len(import_path) <= max_length:
        return import_path
    parts = import_path.split("/")
    if len(parts) > 2:
        return f"{parts[0]}/.../{parts[-1]}"
    return import_path


def base_name(import_path: str) -> str:
    return import_path.rstrip("/").rsplit("/", 1)[-1]


class ImportResolver:
    """Decide what an import path refers to, relative to one manifest."""

    def __init__(self, main_module: str, available_modules: set[str]):
        self.main_module = main_module
        self._candidates = tuple(sorted(set(available_modules)))

    def resolve(self, import_path: str) -> Resolution:
        if is_stdlib(import_path):
            return Resolution(import_path, ImportClass.STDLIB)
        if self.main_module and import_path.startswith(self.main_module):
            return Resolution(import_path, ImportClass.INTERNAL, self.main_module)
        module = longest_prefix_match(import_path, self._candidates)
        if module is None:
            return Resolution(import_path, ImportClass.UNRESOLVED)
        return Resolution(import_path, ImportClass.EXTERNAL, module)
