from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest


def _manifest(name: str, version: str, deps: dict[str, str] | None = None) -> dict[str, Any]:
    data: dict[str, Any] = {"name": name, "displayName": name, "version": version}
    if deps:
        data["vpmDependencies"] = deps
    return data


@pytest.fixture
def index_document() -> dict[str, Any]:
    return {
        "name": "Example listing",
        "packages": {
            "com.vrchat.base": {
                "versions": {
                    v: _manifest("com.vrchat.base", v)
                    for v in ("3.4.0", "3.5.0", "3.5.2", "3.6.0-beta.1")
                }
            },
            "com.example.tool": {
                "versions": {
                    "1.0.0": _manifest("com.example.tool", "1.0.0", {"com.vrchat.base": "^3.4.0"}),
                    "1.1.0": _manifest("com.example.tool", "1.1.0", {"com.vrchat.base": "^3.5.0"}),
                }
            },
        },
    }


@pytest.fixture
def index_file(tmp_path: Path, index_document: dict[str, Any]) -> Path:
    path = tmp_path / "index.json"
    path.write_text(json.dumps(index_document), encoding="utf-8")
    return path


def write_manifest(root: Path, relative: str, data: dict[str, Any]) -> Path:
    path = root / relative / "package.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")
    return path
