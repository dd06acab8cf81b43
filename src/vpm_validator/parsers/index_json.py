"""Merge VPM repository index documents into one package catalog.

Index shape::

    {"packages": {"<name>": {"versions": {"<version>": {...manifest...}}}}}
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class IndexAggregation:
    """Package -> version -> manifest mapping merged from index documents."""

    packages: dict[str, dict[str, dict[str, Any]]] = field(default_factory=dict)
    total_records: int = 0
    skipped_records: list[str] = field(default_factory=list)


def merge_index(aggregation: IndexAggregation, document: Mapping[str, Any]) -> None:
    """Merge one index document into ``aggregation``; later versions win."""
    packages = document.get("packages")
    if not isinstance(packages, Mapping):
        aggregation.skipped_records.append("document: missing 'packages' object")
        return

    for raw_name, info in packages.items():
        name = str(raw_name or "").strip()
        if not name:
            aggregation.skipped_records.append("package with empty name")
            continue
        versions = info.get("versions") if isinstance(info, Mapping) else None
        if not isinstance(versions, Mapping):
            aggregation.skipped_records.append(f"{name}: missing 'versions' object")
            continue

        for raw_version, manifest in versions.items():
            aggregation.total_records += 1
            version = str(raw_version or "").strip()
            if not version:
                aggregation.skipped_records.append(f"{name}: empty version key")
                continue
            if not isinstance(manifest, Mapping):
                aggregation.skipped_records.append(f"{name}@{version}: manifest is not an object")
                continue
            aggregation.packages.setdefault(name, {})[version] = dict(manifest)


def aggregate_indices(documents: Iterable[Mapping[str, Any]]) -> IndexAggregation:
    aggregation = IndexAggregation()
    for document in documents:
        merge_index(aggregation, document)
    return aggregation
