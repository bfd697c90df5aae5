"""Semver-style range handling built atop ``packaging.version``.

Supported expressions (npm semver flavour, pre-releases always included):

- exact versions: ``17.0.2``, ``=17.0.2``, ``21.0.1+12``
- partial / X-ranges: ``17``, ``17.0``, ``17.x``, ``17.0.*``, ``*``
- tilde ranges: ``~17.0.1`` -> ``>=17.0.1 <17.1.0``
- caret ranges: ``^17.0.1`` -> ``>=17.0.1 <18.0.0``
- comparators: ``>=17``, ``<21.0.2``, ``>11 <=17.0.4`` (space means AND)
- hyphen ranges: ``11 - 17`` -> ``>=11.0.0 <18.0.0``
- unions: ``11 || ^21``

Build metadata (``+12``) is ignored when comparing, as semver does.
Upper bounds use ``.dev0`` so ``<18`` also excludes ``18`` pre-releases.
"""

from __future__ import annotations

import operator
import re
from dataclasses import dataclass
from typing import Callable, Optional

from packaging.version import InvalidVersion, Version

_OPERATORS: dict[str, Callable[[Version, Version], bool]] = {
    ">=": operator.ge,
    ">": operator.gt,
    "<=": operator.le,
    "<": operator.lt,
    "=": operator.eq,
}

_PARTIAL_RE = re.compile(
    r"^v?(?P<major>\d+|[xX*])"
    r"(?:\.(?P<minor>\d+|[xX*])"
    r"(?:\.(?P<patch>\d+|[xX*]))?)?"
    r"(?P<rest>[.\-+].*)?$"
)
_OP_SPACING_RE = re.compile(r"(>=|<=|>|<|=|~|\^)\s+")
_HYPHEN_RE = re.compile(r"^\s*(?P<low>\S+)\s+-\s+(?P<high>\S+)\s*$")
_PRIMITIVE_RE = re.compile(r"^(?P<op>>=|<=|>|<|=)?(?P<partial>.+)$")
_JAVA_EA_RE = re.compile(r"-ea(?=$|[+.])", re.IGNORECASE)


class InvalidRangeError(ValueError):
    """Raised when a range expression cannot be parsed."""


def parse_version(text: str) -> Optional[Version]:
    """Parse a build's version portion, or return None if it is not a version.

    Java early-access suffixes (``21-ea+35``) are read as alpha pre-releases.
    """
    text = text.strip()
    if text[:1] in ("v", "V"):
        text = text[1:]
    text = _JAVA_EA_RE.sub("a0", text)
    try:
        return Version(text)
    except InvalidVersion:
        return None


def _public(version: Version) -> Version:
    return Version(version.public)


def _floor(major: int, minor: int = 0, patch: int = 0) -> Version:
    """Smallest version of the given line, below any of its pre-releases."""
    return Version(f"{major}.{minor}.{patch}.dev0")


@dataclass(frozen=True)
class _Partial:
    text: str
    major: Optional[int]
    minor: Optional[int]
    patch: Optional[int]
    rest: str

    @property
    def is_full(self) -> bool:
        return self.patch is not None or (self.minor is not None and bool(self.rest))

    def exact(self) -> Version:
        version = parse_version(self.text)
        if version is None:
            raise InvalidRangeError(f"Invalid version '{self.text}'")
        return _public(version)

    def lower(self) -> Version:
        """Inclusive lower bound; partials start below their pre-releases."""
        if self.major is None:
            return Version("0.dev0")
        if self.is_full or self.rest:
            return self.exact()
        return _floor(self.major, self.minor or 0)


def _wildcard(value: Optional[str]) -> Optional[int]:
    if value is None or value in ("x", "X", "*"):
        return None
    return int(value)


def _parse_partial(text: str) -> _Partial:
    match = _PARTIAL_RE.match(text)
    if match is None:
        raise InvalidRangeError(f"Invalid version '{text}'")
    major = _wildcard(match.group("major"))
    minor = _wildcard(match.group("minor")) if major is not None else None
    patch = _wildcard(match.group("patch")) if minor is not None else None
    rest = match.group("rest") or ""
    if patch is None:
        rest = "" if rest.startswith(".") else rest
    return _Partial(text=text, major=major, minor=minor, patch=patch, rest=rest)


Comparator = tuple[str, Version]


def _x_range(partial: _Partial) -> list[Comparator]:
    """Comparators for a bare partial such as ``17``, ``17.0`` or ``17.0.2``."""
    if partial.major is None:
        return []
    if partial.is_full or partial.rest:
        return [("=", partial.exact())]
    if partial.minor is None:
        return [(">=", partial.lower()), ("<", _floor(partial.major + 1))]
    return [(">=", partial.lower()), ("<", _floor(partial.major, partial.minor + 1))]


def _tilde(partial: _Partial) -> list[Comparator]:
    if partial.major is None:
        return []
    if partial.minor is None:
        return [(">=", partial.lower()), ("<", _floor(partial.major + 1))]
    return [(">=", partial.lower()), ("<", _floor(partial.major, partial.minor + 1))]


def _caret(partial: _Partial) -> list[Comparator]:
    if partial.major is None:
        return []
    lower = partial.lower()
    if partial.major > 0 or partial.minor is None:
        return [(">=", lower), ("<", _floor(partial.major + 1))]
    if partial.minor > 0 or partial.patch is None:
        return [(">=", lower), ("<", _floor(0, partial.minor + 1))]
    return [(">=", lower), ("<", _floor(0, 0, partial.patch + 1))]


def _primitive(op: str, partial: _Partial) -> list[Comparator]:
    if op == "=":
        return _x_range(partial)
    if partial.major is None:
        # "<*" and ">*" match nothing, the inclusive forms match everything.
        return [("<", Version("0.dev0"))] if op in ("<", ">") else []
    if partial.is_full or partial.rest:
        return [(op, partial.exact())]
    if op == ">=":
        return [(">=", partial.lower())]
    if op == "<":
        return [("<", _floor(partial.major, partial.minor or 0))]
    if partial.minor is None:
        next_line = _floor(partial.major + 1)
    else:
        next_line = _floor(partial.major, partial.minor + 1)
    # ">17" means ">=18", "<=17" means "<18".
    return [(">=", next_line)] if op == ">" else [("<", next_line)]


def _hyphen(low: _Partial, high: _Partial) -> list[Comparator]:
    comparators: list[Comparator] = []
    if low.major is not None:
        comparators.append((">=", low.lower()))
    if high.major is None:
        return comparators
    if high.is_full or high.rest:
        comparators.append(("<=", high.exact()))
    elif high.minor is None:
        comparators.append(("<", _floor(high.major + 1)))
    else:
        comparators.append(("<", _floor(high.major, high.minor + 1)))
    return comparators


def _parse_simple(token: str) -> list[Comparator]:
    if token.startswith("~"):
        return _tilde(_parse_partial(token.lstrip("~>").strip()))
    if token.startswith("^"):
        return _caret(_parse_partial(token[1:]))
    match = _PRIMITIVE_RE.match(token)
    if match is None:
        raise InvalidRangeError(f"Invalid comparator '{token}'")
    return _primitive(match.group("op") or "=", _parse_partial(match.group("partial")))


def _parse_conjunction(text: str) -> list[Comparator]:
    text = text.strip()
    if text in ("", "*", "x", "X", "latest"):
        return []
    hyphen = _HYPHEN_RE.match(text)
    if hyphen:
        return _hyphen(_parse_partial(hyphen.group("low")), _parse_partial(hyphen.group("high")))
    text = _OP_SPACING_RE.sub(r"\1", text)
    comparators: list[Comparator] = []
    for token in text.split():
        comparators.extend(_parse_simple(token))
    return comparators


class VersionRange:
    """A parsed range expression: a union of comparator conjunctions."""

    def __init__(self, expression: str, alternatives: list[list[Comparator]]):
        self.expression = expression
        self.alternatives = alternatives

    @classmethod
    def parse(cls, expression: str) -> "VersionRange":
        """Parse *expression*.

        Raises:
            InvalidRangeError: If any part of the expression is malformed.
        """
        alternatives = [_parse_conjunction(part) for part in expression.split("||")]
        return cls(expression, alternatives)

    def contains(self, version: Version) -> bool:
        candidate = _public(version)
        return any(
            all(_OPERATORS[op](candidate, bound) for op, bound in comparators)
            for comparators in self.alternatives
        )

    def __repr__(self) -> str:
        return f"VersionRange({self.expression!r})"


def satisfies(version: str, expression: str) -> bool:
    """Return True if *version* parses and lies within *expression*."""
    parsed = parse_version(version)
    if parsed is None:
        return False
    try:
        return VersionRange.parse(expression).contains(parsed)
    except InvalidRangeError:
        return False


__all__ = ["InvalidRangeError", "VersionRange", "parse_version", "satisfies"]
