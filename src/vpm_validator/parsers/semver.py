"""Version ordering for dotted version strings.

Used to sort catalog versions and pick the "latest" one. This is not a full
semver implementation: ``major.minor.patch`` is compared numerically, build
metadata is ignored and a prerelease ranks below the release of the same core.
Strings that do not parse are ordered by plain ordinal comparison.
"""

from __future__ import annotations

import functools
import re
from collections.abc import Iterable
from dataclasses import dataclass

_DIGITS = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class Version:
    """Parsed version core plus prerelease identifiers."""

    major: int
    minor: int
    patch: int
    prerelease: tuple[str, ...] = ()

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    def __str__(self) -> str:
        core = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            return f"{core}-{'.'.join(self.prerelease)}"
        return core


def _normalise(value: object) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip()


def _to_int(text: str) -> int | None:
    if _DIGITS.fullmatch(text) is None:
        return None
    return int(text)


def parse_version(text: str) -> Version | None:
    """Parse ``text`` permissively; return None when it is not a version.

    One to three numeric segments are accepted, missing minor/patch default
    to 0. Everything after the first ``+`` is dropped, everything after the
    first ``-`` is the prerelease tail.
    """
    s = _normalise(text)
    if not s:
        return None

    s = s.split("+", 1)[0]
    core, _, tail = s.partition("-")

    parts = core.split(".")
    if not 1 <= len(parts) <= 3:
        return None
    numbers = [_to_int(p) for p in parts]
    if any(n is None for n in numbers):
        return None
    numbers += [0] * (3 - len(numbers))

    prerelease: tuple[str, ...] = ()
    if tail.strip():
        prerelease = tuple(p.strip() for p in tail.split("."))

    return Version(numbers[0], numbers[1], numbers[2], prerelease)


def _cmp(a: object, b: object) -> int:
    return (a > b) - (a < b)  # type: ignore[operator]


def compare_identifiers(a: str, b: str) -> int:
    """Compare two prerelease identifiers at the same position.

    Numeric identifiers compare numerically and rank below alphanumeric ones.
    """
    an = _to_int(a)
    bn = _to_int(b)
    if an is not None and bn is not None:
        return _cmp(an, bn)
    if an is not None:
        return -1
    if bn is not None:
        return 1
    return _cmp(a, b)


def _compare_prerelease(a: tuple[str, ...], b: tuple[str, ...]) -> int:
    # release (no prerelease) outranks any prerelease of the same core
    if not a and not b:
        return 0
    if not a:
        return 1
    if not b:
        return -1

    for ai, bi in zip(a, b):
        c = compare_identifiers(ai, bi)
        if c != 0:
            return c
    return _cmp(len(a), len(b))


def compare(a: str, b: str) -> int:
    """Return -1, 0 or 1 ordering ``a`` relative to ``b``."""
    if a is b:
        return 0
    a = _normalise(a)
    b = _normalise(b)
    if not a and not b:
        return 0
    if not a:
        return -1
    if not b:
        return 1

    va = parse_version(a)
    vb = parse_version(b)
    if va is None or vb is None:
        return _cmp(a, b)

    c = _cmp((va.major, va.minor, va.patch), (vb.major, vb.minor, vb.patch))
    if c != 0:
        return c
    return _compare_prerelease(va.prerelease, vb.prerelease)


version_key = functools.cmp_to_key(compare)


def sort_descending(versions: Iterable[str] | None) -> list[str]:
    """Return non-blank versions (trimmed) newest first; ties keep input order."""
    cleaned = [_normalise(v) for v in versions or ()]
    return sorted((v for v in cleaned if v), key=version_key, reverse=True)


def pick_latest(versions: Iterable[str] | None) -> str | None:
    ordered = sort_descending(versions)
    return ordered[0] if ordered else None
