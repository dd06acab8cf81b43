"""Validation rules for VPM package manifests.

Issues are advisory: a manifest with warnings is still usable, only errors
should block a release.
"""

from __future__ import annotations

from collections.abc import Iterator

from ..models.package_manifest import PackageManifest
from ..models.validation_issue import ValidationIssue
from ..models.version_catalog import VersionCatalog
from ..parsers.semver_range import TokenKind, any_satisfies, classify, validate_range

_ANY_RANGES = {"", "*", "x"}


def is_strict_semver(version: str) -> bool:
    """Return True for ``MAJOR.MINOR.PATCH[-pre][+build]`` strings."""
    return classify(version).kind is TokenKind.EXACT


def validate_manifest(manifest: PackageManifest) -> Iterator[ValidationIssue]:
    """Yield issues found in the manifest fields alone."""
    name = manifest.name.strip()
    version = manifest.version.strip()

    if not name:
        yield ValidationIssue.error("`name` is required.")
    if not manifest.display_name.strip():
        yield ValidationIssue.error("`displayName` is required.")

    if not version:
        yield ValidationIssue.error("`version` is required.")
    elif not is_strict_semver(version):
        yield ValidationIssue.warning("`version` does not look like SemVer (e.g. 1.2.3).")

    email = manifest.author.email.strip()
    if email and "@" not in email:
        yield ValidationIssue.info("`author.email` does not look like an email address.")

    # VPM packages in the wild vary, so reverse-domain naming is only a hint.
    if name and "." not in name:
        yield ValidationIssue.info(
            "`name` usually contains at least one '.' (e.g. com.example.package)."
        )

    for dep_name, dep_range in manifest.vpm_dependencies.items():
        if not dep_name.strip():
            yield ValidationIssue.warning("A `vpmDependencies` entry has an empty package name.")
        if not dep_range.strip():
            yield ValidationIssue.warning(f"`vpmDependencies.{dep_name}` has an empty version/range.")
        elif validate_range(dep_range) is not None:
            yield ValidationIssue.warning(
                f"`vpmDependencies.{dep_name}` does not look like a valid SemVer range: "
                f'"{dep_range.strip()}".'
            )


def dependency_issues(
    manifest: PackageManifest, catalog: VersionCatalog
) -> Iterator[ValidationIssue]:
    """Yield warnings for dependencies the catalog cannot satisfy.

    Nothing is reported against an empty catalog.
    """
    if not catalog:
        return

    for raw_name, raw_range in manifest.vpm_dependencies.items():
        dep_name = raw_name.strip()
        dep_range = raw_range.strip()
        if not dep_name:
            continue

        versions = catalog.versions_for(dep_name)
        if not versions:
            yield ValidationIssue.warning(f"Dependency package not found in index: {dep_name}")
            continue

        if dep_range.lower() in _ANY_RANGES:
            continue
        if not any_satisfies(dep_range, versions):
            yield ValidationIssue.warning(
                f'No versions match range for {dep_name}: "{dep_range}"'
            )


def release_issues(manifest: PackageManifest, catalog: VersionCatalog) -> Iterator[ValidationIssue]:
    """Warn when the manifest version has already been published."""
    if not catalog:
        return
    name = manifest.name.strip()
    version = manifest.version.strip()
    if name and version and catalog.has_version(name, version):
        yield ValidationIssue.warning(
            f"{name} {version} already exists in the index (already released)."
        )


def collect_issues(
    manifest: PackageManifest, catalog: VersionCatalog | None = None
) -> list[ValidationIssue]:
    issues = list(validate_manifest(manifest))
    if catalog is not None:
        issues.extend(dependency_issues(manifest, catalog))
        issues.extend(release_issues(manifest, catalog))
    return issues
