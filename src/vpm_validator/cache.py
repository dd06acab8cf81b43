"""On-disk cache of the merged version catalog."""

from __future__ import annotations

import json
import os
from pathlib import Path

from .models.version_catalog import VersionCatalog

DEFAULT_CACHE_PATH = Path(".vpm-validator") / "index-cache.json"
CACHE_PATH_ENV_VAR = "VPM_VALIDATOR_CACHE"


def resolve_cache_path(path: Path | str | None = None) -> Path:
    """Explicit path, then VPM_VALIDATOR_CACHE, then the default location."""
    if path is not None:
        return Path(path)
    env_path = os.environ.get(CACHE_PATH_ENV_VAR)
    if env_path:
        return Path(env_path)
    return DEFAULT_CACHE_PATH


def load_catalog(path: Path | str | None = None) -> VersionCatalog | None:
    """Return the cached catalog, or None when missing or unreadable."""
    p = resolve_cache_path(path)
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return None
    if not isinstance(data, dict):
        return None
    return VersionCatalog.from_dict(data)


def save_catalog(catalog: VersionCatalog, path: Path | str | None = None) -> Path:
    p = resolve_cache_path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(catalog.to_dict(), indent=2) + "\n", encoding="utf-8")
    return p
