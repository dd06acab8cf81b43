"""Catalog of released package versions built from VPM indices."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from ..parsers.index_json import aggregate_indices
from ..parsers.semver import pick_latest, sort_descending
from ..parsers.semver_range import max_satisfying


@dataclass(frozen=True)
class VersionCatalog:
    """Known versions (and their manifests) keyed by package name."""

    packages: dict[str, dict[str, dict[str, Any]]] = field(default_factory=dict)
    last_updated: datetime | None = None
    skipped_records: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.last_updated is not None and self.last_updated.tzinfo is None:
            raise ValueError("last_updated must be timezone-aware")

    def __bool__(self) -> bool:
        return bool(self.packages)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.strip() in self.packages

    def versions_for(self, name: str) -> list[str]:
        """Return the known versions of ``name``, newest first."""
        by_version = self.packages.get((name or "").strip())
        if not by_version:
            return []
        return sort_descending(by_version.keys())

    def has_version(self, name: str, version: str) -> bool:
        return self.manifest_for(name, version) is not None

    def manifest_for(self, name: str, version: str) -> dict[str, Any] | None:
        by_version = self.packages.get((name or "").strip())
        if not by_version:
            return None
        return by_version.get((version or "").strip())

    def latest(self, name: str) -> str | None:
        return pick_latest(self.versions_for(name))

    def latest_satisfying(self, name: str, range_: str) -> str | None:
        return max_satisfying(self.versions_for(name), range_)

    @property
    def totals(self) -> dict[str, int]:
        return {
            "packages": len(self.packages),
            "versions": sum(len(v) for v in self.packages.values()),
        }

    def summary(self) -> dict[str, Any]:
        """Totals plus the index entries dropped while merging, for reports."""
        return {**self.totals, "skipped": list(self.skipped_records)}

    def to_dict(self) -> dict[str, object]:
        """Return the cache document form of the catalog."""
        stamp = self.last_updated or datetime.now(timezone.utc)
        return {
            "lastUpdatedUtc": stamp.isoformat().replace("+00:00", "Z"),
            "packages": {
                name: dict(by_version) for name, by_version in sorted(self.packages.items())
            },
            "skippedRecords": list(self.skipped_records),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> VersionCatalog:
        """Rebuild a catalog from :meth:`to_dict` output; bad entries are dropped."""
        last_updated = None
        stamp = data.get("lastUpdatedUtc")
        if isinstance(stamp, str) and stamp:
            try:
                last_updated = datetime.fromisoformat(stamp.replace("Z", "+00:00"))
            except ValueError:
                last_updated = None
            if last_updated is not None and last_updated.tzinfo is None:
                last_updated = last_updated.replace(tzinfo=timezone.utc)

        packages: dict[str, dict[str, dict[str, Any]]] = {}
        raw_packages = data.get("packages")
        if isinstance(raw_packages, Mapping):
            for raw_name, by_version in raw_packages.items():
                name = str(raw_name or "").strip()
                if not name or not isinstance(by_version, Mapping):
                    continue
                packages[name] = {
                    str(ver).strip(): dict(manifest)
                    for ver, manifest in by_version.items()
                    if str(ver or "").strip() and isinstance(manifest, Mapping)
                }

        raw_skipped = data.get("skippedRecords")
        skipped: tuple[str, ...] = ()
        if isinstance(raw_skipped, list):
            skipped = tuple(str(s) for s in raw_skipped if s)

        return cls(packages=packages, last_updated=last_updated, skipped_records=skipped)

    @classmethod
    def from_indices(
        cls,
        documents: Iterable[Mapping[str, Any]],
        *,
        retrieved_at: datetime | None = None,
    ) -> VersionCatalog:
        aggregation = aggregate_indices(documents)
        return cls(
            packages=aggregation.packages,
            last_updated=retrieved_at or datetime.now(timezone.utc),
            skipped_records=tuple(aggregation.skipped_records),
        )
