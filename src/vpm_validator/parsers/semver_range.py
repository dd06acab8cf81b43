"""Range expressions for VPM dependency constraints.

Supported clause forms, joined with ``||``:
- ``*`` / ``x`` (anything)
- partial or wildcard versions: ``3``, ``3.5``, ``3.5.x``
- exact versions: ``1.2.3``, ``1.2.3-beta.1+build.5``
- caret / tilde: ``^1.2.3``, ``~1.2``, ``^ 1.2.3``
- comparator sets: ``>=1.0.0 <2.0.0``, ``>= 1.0.0 < 2.0.0``
- hyphen ranges: ``1.2.3 - 2.0.0``

Every form is normalised into half-open ``[lower, upper)`` intervals or a
conjunction of comparators evaluated with :func:`semver.compare`. Nothing in
this module raises on malformed input; the public functions answer with
booleans or an error message.
"""

from __future__ import annotations

import operator
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias

from .semver import compare, parse_version, sort_descending

UPPER_SENTINEL = "999999.0.0"

# Longest operators first so ">=" is not read as ">".
COMPARATOR_OPERATORS = (">=", "<=", ">", "<", "=")

_NUMERIC = re.compile(r"0|[1-9][0-9]*")
_IDENTIFIER = re.compile(r"[0-9A-Za-z-]+")

_OPERATOR_TESTS: dict[str, Callable[[int, int], bool]] = {
    "=": operator.eq,
    ">": operator.gt,
    ">=": operator.ge,
    "<": operator.lt,
    "<=": operator.le,
}


class TokenKind(Enum):
    EXACT = "exact"
    PARTIAL = "partial"
    INVALID = "invalid"


@dataclass(frozen=True)
class VersionToken:
    """A classified version-or-spec token.

    ``parts`` holds the numeric segments in order; ``None`` marks a wildcard
    segment. Exact versions always carry three numbers.
    """

    kind: TokenKind
    text: str
    parts: tuple[int | None, ...] = ()

    @property
    def is_valid(self) -> bool:
        return self.kind is not TokenKind.INVALID


def _normalise(value: object) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip()


def _is_wildcard(text: str) -> bool:
    return text == "*" or text.lower() == "x"


def _identifiers_valid(text: str, *, prerelease: bool) -> bool:
    for ident in text.split("."):
        if _IDENTIFIER.fullmatch(ident) is None:
            return False
        # numeric prerelease identifiers must not carry leading zeros
        if prerelease and ident.isdigit() and len(ident) > 1 and ident[0] == "0":
            return False
    return True


def _strict_parts(text: str) -> tuple[int, int, int] | None:
    core, plus, build = text.partition("+")
    if plus and (not build or not _identifiers_valid(build, prerelease=False)):
        return None

    core, dash, pre = core.partition("-")
    if dash and (not pre or not _identifiers_valid(pre, prerelease=True)):
        return None

    parts = core.split(".")
    if len(parts) != 3 or any(_NUMERIC.fullmatch(p) is None for p in parts):
        return None
    return int(parts[0]), int(parts[1]), int(parts[2])


def _wildcard_parts(text: str) -> tuple[int | None, ...] | None:
    if _is_wildcard(text):
        return (None,)
    if "-" in text or "+" in text:
        return None

    parts = text.split(".")
    if len(parts) > 3:
        return None

    out: list[int | None] = []
    wildcard_seen = False
    for part in parts:
        if _is_wildcard(part):
            wildcard_seen = True
            out.append(None)
            continue
        # "1.x.3" style specs are rejected
        if wildcard_seen or _NUMERIC.fullmatch(part) is None:
            return None
        out.append(int(part))
    return tuple(out)


def classify(token: str) -> VersionToken:
    """Classify ``token`` as an exact version, a partial spec or invalid."""
    text = _normalise(token)
    if not text:
        return VersionToken(TokenKind.INVALID, text)

    strict = _strict_parts(text)
    if strict is not None:
        return VersionToken(TokenKind.EXACT, text, strict)

    # prerelease/build markers are only allowed on full versions
    if "-" in text or "+" in text:
        return VersionToken(TokenKind.INVALID, text)

    partial = _wildcard_parts(text)
    if partial is not None:
        return VersionToken(TokenKind.PARTIAL, text, partial)
    return VersionToken(TokenKind.INVALID, text)


def is_version_spec(token: str) -> bool:
    return classify(token).is_valid


# ---- Bound expansion -------------------------------------------------------------------


def expand_lower(spec: str) -> str:
    """Return the inclusive lower bound of ``spec`` as a full version string."""
    text = _normalise(spec)
    if _is_wildcard(text):
        return "0.0.0"
    if "-" in text or "+" in text:
        return text

    parts = text.split(".")
    if len(parts) > 3:
        return text
    parts = ["0" if _is_wildcard(p) else p for p in parts]
    parts += ["0"] * (3 - len(parts))
    return ".".join(parts)


def expand_upper_exclusive(spec: str) -> str:
    """Return the exclusive upper bound of ``spec``.

    The segment left of the first wildcard (or of the first missing segment)
    is bumped; a fully concrete version bumps its patch.
    """
    token = classify(spec)
    parts = token.parts
    if not token.is_valid or parts[0] is None:
        return UPPER_SENTINEL

    major = parts[0]
    if len(parts) == 1:
        return f"{major + 1}.0.0"

    minor = parts[1]
    if minor is None:
        return f"{major + 1}.0.0"
    if len(parts) == 2 or parts[2] is None:
        return f"{major}.{minor + 1}.0"
    return f"{major}.{minor}.{parts[2] + 1}"


def expand_caret_upper_exclusive(lower: str) -> str:
    """Bump the left-most non-zero component of ``lower``."""
    v = parse_version(expand_lower(lower))
    if v is None:
        return UPPER_SENTINEL
    if v.major > 0:
        return f"{v.major + 1}.0.0"
    if v.minor > 0:
        return f"0.{v.minor + 1}.0"
    return f"0.0.{v.patch + 1}"


def expand_tilde_upper_exclusive(lower: str) -> str:
    v = parse_version(expand_lower(lower))
    if v is None:
        return UPPER_SENTINEL
    return f"{v.major}.{v.minor + 1}.0"


def _within(version: str, lower: str, upper: str) -> bool:
    return compare(version, lower) >= 0 and compare(version, upper) < 0


# ---- Clauses ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AnyVersion:
    def matches(self, version: str) -> bool:
        return True


@dataclass(frozen=True)
class Interval:
    """``[expand_lower(lower), expand_upper_exclusive(upper))``.

    Used for hyphen ranges and for a bare partial spec (lower is upper).
    """

    lower: VersionToken
    upper: VersionToken

    def bounds(self) -> tuple[str, str]:
        return expand_lower(self.lower.text), expand_upper_exclusive(self.upper.text)

    def matches(self, version: str) -> bool:
        return _within(version, *self.bounds())


@dataclass(frozen=True)
class CaretTilde:
    operator: str
    base: VersionToken

    def bounds(self) -> tuple[str, str]:
        lower = expand_lower(self.base.text)
        # ^1.x / ~1.x behave like the partial spec itself
        if self.base.kind is TokenKind.PARTIAL:
            return lower, expand_upper_exclusive(self.base.text)
        if self.operator == "^":
            return lower, expand_caret_upper_exclusive(lower)
        return lower, expand_tilde_upper_exclusive(lower)

    def matches(self, version: str) -> bool:
        return _within(version, *self.bounds())


@dataclass(frozen=True)
class Exact:
    version: VersionToken

    def matches(self, version: str) -> bool:
        return compare(version, self.version.text) == 0


@dataclass(frozen=True)
class Comparator:
    operator: str
    operand: VersionToken

    def matches(self, version: str) -> bool:
        text = self.operand.text
        if _is_wildcard(text):
            return True

        if self.operand.kind is TokenKind.PARTIAL:
            lower = expand_lower(text)
            upper = expand_upper_exclusive(text)
            if self.operator == "=":
                return _within(version, lower, upper)
            if self.operator == ">=":
                return compare(version, lower) >= 0
            if self.operator == ">":
                return compare(version, upper) >= 0
            # "<=" shares the "<" bound: below the first version of the spec
            return compare(version, lower) < 0

        test = _OPERATOR_TESTS[self.operator]
        return test(compare(version, expand_lower(text)), 0)


@dataclass(frozen=True)
class ComparatorSet:
    comparators: tuple[Comparator, ...]

    def matches(self, version: str) -> bool:
        return all(c.matches(version) for c in self.comparators)


Clause: TypeAlias = AnyVersion | Interval | CaretTilde | Exact | ComparatorSet


@dataclass(frozen=True)
class Range:
    """OR of clauses."""

    clauses: tuple[Clause, ...]

    def matches(self, version: str) -> bool:
        version = _normalise(version)
        return any(clause.matches(version) for clause in self.clauses)


# ---- Parsing ---------------------------------------------------------------------------


def _split_comparator(token: str) -> tuple[str, str] | None:
    for op in COMPARATOR_OPERATORS:
        if token.startswith(op):
            rest = token[len(op) :].strip()
            return (op, rest) if rest else None
    return None


def _caret_tilde(op: str, base: str) -> CaretTilde | None:
    token = classify(base)
    if not token.is_valid:
        return None
    return CaretTilde(op, token)


def _single_token(token: str) -> Clause | None:
    if token[0] in "^~":
        return _caret_tilde(token[0], token[1:])

    split = _split_comparator(token)
    if split is not None:
        op, text = split
        operand = classify(text)
        if not operand.is_valid:
            return None
        return ComparatorSet((Comparator(op, operand),))

    spec = classify(token)
    if spec.kind is TokenKind.EXACT:
        return Exact(spec)
    if spec.kind is TokenKind.PARTIAL:
        return Interval(spec, spec)
    return None


def _comparator_set(tokens: list[str]) -> ComparatorSet | None:
    comparators: list[Comparator] = []
    i = 0
    while i < len(tokens):
        token = tokens[i]
        split = _split_comparator(token)
        if split is not None:
            op, text = split
            i += 1
        elif token in COMPARATOR_OPERATORS:
            if i + 1 >= len(tokens):
                return None
            op, text = token, tokens[i + 1]
            i += 2
        else:
            return None

        operand = classify(text)
        if not operand.is_valid:
            return None
        comparators.append(Comparator(op, operand))

    return ComparatorSet(tuple(comparators))


def parse_clause(clause: str) -> Clause | None:
    """Parse one ``||`` alternative; return None when it is not valid."""
    clause = _normalise(clause)
    if not clause:
        return None

    if _is_wildcard(clause):
        return AnyVersion()

    if " - " in clause:
        sides = clause.split(" - ")
        if len(sides) != 2:
            return None
        lower, upper = classify(sides[0]), classify(sides[1])
        if not lower.is_valid or not upper.is_valid:
            return None
        return Interval(lower, upper)

    tokens = clause.split()
    if tokens[0] in ("^", "~"):
        if len(tokens) != 2:
            return None
        return _caret_tilde(tokens[0], tokens[1])

    if len(tokens) == 1:
        return _single_token(tokens[0])
    return _comparator_set(tokens)


def _split_clauses(text: str) -> list[str]:
    return [c.strip() for c in text.split("||")]


def validate_range(range_: str) -> str | None:
    """Return None when ``range_`` is grammatically valid, else a message."""
    text = _normalise(range_)
    if not text:
        return "Empty range."

    for clause in _split_clauses(text):
        if not clause:
            return "Empty range clause."
        if parse_clause(clause) is None:
            return f'Invalid range clause: "{clause}"'
    return None


def is_valid(range_: str) -> bool:
    return validate_range(range_) is None


def parse_range(range_: str) -> Range | None:
    """Parse a full range; None unless every clause is valid."""
    text = _normalise(range_)
    if not text:
        return None

    clauses: list[Clause] = []
    for clause in _split_clauses(text):
        parsed = parse_clause(clause)
        if parsed is None:
            return None
        clauses.append(parsed)
    return Range(tuple(clauses))


def _lenient_range(range_: str) -> Range:
    # empty or unparseable clauses are skipped; they never match
    text = _normalise(range_)
    if not text:
        return Range(())
    parsed = (parse_clause(c) for c in _split_clauses(text))
    return Range(tuple(c for c in parsed if c is not None))


def satisfies(range_: str, version: str) -> bool:
    """True when ``version`` matches at least one clause of ``range_``."""
    return _lenient_range(range_).matches(version)


def any_satisfies(range_: str, versions: Iterable[str] | None) -> bool:
    """True when any non-blank candidate in ``versions`` satisfies ``range_``."""
    rng = _lenient_range(range_)
    if not rng.clauses or not versions:
        return False

    for v in versions:
        v = _normalise(v)
        if v and rng.matches(v):
            return True
    return False


def max_satisfying(versions: Iterable[str] | None, range_: str) -> str | None:
    """Return the latest candidate that satisfies ``range_``."""
    rng = _lenient_range(range_)
    for v in sort_descending(versions):
        if rng.matches(v):
            return v
    return None
