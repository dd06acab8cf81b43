"""Parse a VPM package.json into a PackageManifest."""

from __future__ import annotations

from pathlib import Path

from ..models.package_manifest import PackageManifest


def parse(path: Path) -> PackageManifest:
    """Return the manifest stored at ``path``.

    Raises ValueError when the document is not a JSON object.
    """
    import json

    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"package.json must contain a JSON object: {path}")
    return PackageManifest.from_mapping(data)
