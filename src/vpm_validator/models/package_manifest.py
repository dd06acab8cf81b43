"""VPM package manifest model."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


def _get_str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    return str(value)


def _get_str_map(data: Mapping[str, Any], key: str) -> dict[str, str]:
    value = data.get(key)
    if not isinstance(value, Mapping):
        return {}
    return {str(k): str(v) for k, v in value.items() if v is not None}


def _get_str_list(data: Mapping[str, Any], key: str) -> tuple[str, ...]:
    value = data.get(key)
    if not isinstance(value, list):
        return ()
    return tuple(str(v) for v in value if v is not None)


def _sorted_map(mapping: Mapping[str, str]) -> dict[str, str]:
    # ordinal key order keeps written documents stable
    return {k.strip(): v.strip() for k, v in sorted(mapping.items()) if k.strip()}


@dataclass(frozen=True)
class Author:
    name: str = ""
    email: str = ""
    url: str = ""


@dataclass(frozen=True)
class PackageManifest:
    """Fields of a VPM ``package.json`` relevant to validation.

    ``raw`` keeps the full decoded document so unknown fields survive a
    round trip through :meth:`to_dict`.
    """

    name: str = ""
    display_name: str = ""
    version: str = ""
    description: str = ""
    unity: str = ""
    license: str = ""
    changelog_url: str = ""
    author: Author = field(default_factory=Author)
    vpm_dependencies: dict[str, str] = field(default_factory=dict)
    legacy_folders: dict[str, str] = field(default_factory=dict)
    legacy_files: dict[str, str] = field(default_factory=dict)
    legacy_packages: tuple[str, ...] = ()
    raw: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> PackageManifest:
        data = data or {}
        author_data = data.get("author")
        author = Author()
        if isinstance(author_data, Mapping):
            author = Author(
                name=_get_str(author_data, "name"),
                email=_get_str(author_data, "email"),
                url=_get_str(author_data, "url"),
            )

        return cls(
            name=_get_str(data, "name"),
            display_name=_get_str(data, "displayName"),
            version=_get_str(data, "version"),
            description=_get_str(data, "description"),
            unity=_get_str(data, "unity"),
            license=_get_str(data, "license"),
            changelog_url=_get_str(data, "changelogUrl"),
            author=author,
            vpm_dependencies=_get_str_map(data, "vpmDependencies"),
            legacy_folders=_get_str_map(data, "legacyFolders"),
            legacy_files=_get_str_map(data, "legacyFiles"),
            legacy_packages=_get_str_list(data, "legacyPackages"),
            raw=dict(data),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the manifest as a ``package.json`` document.

        Unknown fields from ``raw`` are preserved. Blank optional fields are
        removed and ``url`` is never written.
        """
        data: dict[str, Any] = dict(self.raw)
        data["name"] = self.name
        data["displayName"] = self.display_name
        data["version"] = self.version
        data.pop("url", None)

        optional = {
            "description": self.description,
            "unity": self.unity,
            "license": self.license,
            "changelogUrl": self.changelog_url,
        }
        for key, value in optional.items():
            if value.strip():
                data[key] = value.strip()
            else:
                data.pop(key, None)

        author_fields = (
            ("name", self.author.name),
            ("email", self.author.email),
            ("url", self.author.url),
        )
        author = {k: v.strip() for k, v in author_fields if v.strip()}
        if author:
            data["author"] = author
        else:
            data.pop("author", None)

        mappings = {
            "vpmDependencies": self.vpm_dependencies,
            "legacyFolders": self.legacy_folders,
            "legacyFiles": self.legacy_files,
        }
        for key, mapping in mappings.items():
            cleaned = _sorted_map(mapping)
            if cleaned:
                data[key] = cleaned
            else:
                data.pop(key, None)

        packages = [p.strip() for p in self.legacy_packages if p.strip()]
        if packages:
            data["legacyPackages"] = packages
        else:
            data.pop("legacyPackages", None)

        return data
