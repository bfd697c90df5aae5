"""Version specifier resolution against installed builds."""

from .matcher import (
    find_by_prefix,
    find_exact,
    find_max_satisfying,
    resolve,
    resolve_for_uninstall,
)
from .ranges import InvalidRangeError, VersionRange, parse_version, satisfies

__all__ = [
    "InvalidRangeError",
    "VersionRange",
    "find_by_prefix",
    "find_exact",
    "find_max_satisfying",
    "parse_version",
    "resolve",
    "resolve_for_uninstall",
    "satisfies",
]
