"""Build identifiers: the directory names under ``versions/``."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from jvm_cli.core.constants import FAMILY, FAMILY_PREFIX

_IDENTIFIER_RE = re.compile(
    r"^(?P<family>[A-Za-z][A-Za-z0-9]*)-(?P<version>[^\s()]+)"
    r"(?:\s*\((?P<vendor>[^()]+)\))?$"
)


@dataclass(frozen=True, order=True)
class BuildIdentifier:
    """One installed build, e.g. ``jdk-21.0.0 (temurin)``.

    ``name`` is the directory name and the only field that takes part in
    equality and ordering; the other fields are parsed from it.
    """

    name: str
    family: str = field(default="", compare=False)
    version: str = field(default="", compare=False)
    vendor: str | None = field(default=None, compare=False)

    @classmethod
    def parse(cls, name: str) -> "BuildIdentifier":
        """Split a directory name into family, version and vendor.

        Names that do not follow ``<family>-<version>[ (<vendor>)]`` keep the
        whole name as their version so they can still be listed and removed.
        """
        match = _IDENTIFIER_RE.match(name)
        if match is None:
            return cls(name=name, family="", version=name, vendor=None)
        vendor = match.group("vendor")
        return cls(
            name=name,
            family=match.group("family"),
            version=match.group("version"),
            vendor=vendor.strip().lower() if vendor else None,
        )

    @classmethod
    def compose(cls, version: str, vendor: str | None = None) -> "BuildIdentifier":
        """Build the identifier the installer publishes for *version*."""
        version = strip_family(version)
        name = f"{FAMILY_PREFIX}{version}"
        if vendor:
            name = f"{name} ({vendor})"
        return cls(name=name, family=FAMILY, version=version, vendor=vendor)

    def __str__(self) -> str:
        return self.name


def strip_family(value: str) -> str:
    """Drop a leading ``jdk-`` from *value* if present."""
    if value.startswith(FAMILY_PREFIX):
        return value[len(FAMILY_PREFIX):]
    return value


def version_extends(candidate: str, requested: str) -> bool:
    """Return True if *candidate* equals *requested* or refines it.

    ``21.0.1`` and ``21.0.1+12`` refine ``21``; ``210`` does not.

    Examples::

        >>> version_extends("21.0.1", "21")
        True
        >>> version_extends("210", "21")
        False
    """
    if candidate == requested:
        return True
    if not candidate.startswith(requested):
        return False
    return candidate[len(requested)] in ".+-_"


__all__ = ["BuildIdentifier", "strip_family", "version_extends"]
