"""go.mod manifest reader."""

from __future__ import annotations

from goraph.manifest.gomod_reader import parse_manifest, read_manifest

__all__ = ["parse_manifest", "read_manifest"]
