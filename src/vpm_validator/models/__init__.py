"""Data models for manifest validation."""

from __future__ import annotations

from .package_manifest import Author, PackageManifest
from .validation_issue import ValidationIssue
from .version_catalog import VersionCatalog

__all__ = [
    "Author",
    "PackageManifest",
    "ValidationIssue",
    "VersionCatalog",
]
