"""Core scanning entrypoints.

This module MUST NOT contain GitHub-specific dependencies so it can be used by
both CI workflows and the standalone CLI.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

from . import cache
from .discovery import discover_manifests
from .ingestion.index_config import IndexSourceConfig, load_settings_or_default
from .ingestion.index_feed import load_index
from .models.validation_issue import ValidationIssue
from .models.version_catalog import VersionCatalog
from .parsers.package_json import parse as parse_package_json
from .report import aggregate
from .validators.manifest import collect_issues


def build_catalog(sources: Iterable[IndexSourceConfig]) -> VersionCatalog:
    """Fetch every source and merge the documents into one catalog.

    Raises IndexFeedError when any source cannot be loaded.
    """
    documents = [load_index(source.url, source.token) for source in sources]
    return VersionCatalog.from_indices(documents)


def resolve_catalog(
    index_sources: Sequence[str] | None = None,
    *,
    settings_path: Path | str | None = None,
    cache_path: Path | str | None = None,
    refresh: bool = False,
) -> VersionCatalog:
    """Return the catalog used for dependency checks.

    Explicit ``index_sources`` (URLs or paths) are always loaded. Otherwise
    the on-disk cache is used unless ``refresh`` is set, in which case the
    configured indices are fetched. Freshly loaded catalogs are written to
    the cache. Without sources, cache or refresh the catalog is empty and
    catalog checks are skipped.
    """
    if index_sources:
        sources = [
            IndexSourceConfig(
                id=f"source-{n}", url=url, enabled=True, description="", token_env=""
            )
            for n, url in enumerate(index_sources, start=1)
        ]
    elif refresh:
        sources = load_settings_or_default(settings_path).get_enabled_indices()
    else:
        return cache.load_catalog(cache_path) or VersionCatalog()

    catalog = build_catalog(sources)
    cache.save_catalog(catalog, cache_path)
    return catalog


def scan_manifest(path: Path, catalog: VersionCatalog | None = None) -> dict[str, Any]:
    """Validate one package.json and return its report entry."""
    try:
        manifest = parse_package_json(path)
    except (OSError, ValueError) as exc:
        issue = ValidationIssue.error(f"Failed to read package.json: {exc}")
        return {"name": "", "version": "", "issues": [issue.to_dict()]}

    issues = collect_issues(manifest, catalog)
    return {
        "name": manifest.name.strip(),
        "version": manifest.version.strip(),
        "issues": [issue.to_dict() for issue in issues],
    }


def scan_repository(
    root: Path,
    index_sources: Sequence[str] | None = None,
    *,
    settings_path: Path | str | None = None,
    cache_path: Path | str | None = None,
    refresh: bool = False,
) -> dict[str, Any]:
    """Validate every VPM manifest under ``root``.

    Params:
        root: repository root to scan
        index_sources: optional URLs or filesystem paths of VPM index
            documents; see :func:`resolve_catalog` for the fallbacks
        settings_path: settings file listing index sources (used on refresh)
        cache_path: catalog cache location
        refresh: re-fetch configured indices instead of using the cache

    Returns: dict report (see report.aggregate)
    """
    root = root.resolve()

    catalog = resolve_catalog(
        index_sources,
        settings_path=settings_path,
        cache_path=cache_path,
        refresh=refresh,
    )

    projects: list[dict[str, Any]] = []
    for path in discover_manifests(root):
        entry = scan_manifest(path, catalog)
        projects.append({"path": str(path.relative_to(root)), **entry})

    return aggregate(projects, catalog.summary() if catalog else None)
