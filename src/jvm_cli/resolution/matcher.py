"""Map a loosely written version specifier to one installed build.

Rules are tried in order and the first that yields exactly one build wins:

1. exact: the specifier is a build name (``jdk-17.0.1``)
2. prefix: exactly one build starts with ``jdk-<specifier>`` (``17`` ->
   ``jdk-17.0.1``); several matches skip to rule 3
3. range: the highest build version inside the specifier read as a semver
   range (``^17``, ``>=17 <21``); equal versions from different vendors are
   broken by the smallest build name

These functions are pure: callers pass the list from
:meth:`jvm_cli.registry.RegistryStore.list_builds`.
"""

from __future__ import annotations

import logging
from typing import Sequence

from packaging.version import Version

from jvm_cli.core.constants import FAMILY_PREFIX
from jvm_cli.errors import AmbiguousMatchError, BuildNotFoundError
from jvm_cli.registry.models import BuildIdentifier
from jvm_cli.resolution.ranges import InvalidRangeError, VersionRange, parse_version

logger = logging.getLogger(__name__)


def find_exact(builds: Sequence[BuildIdentifier], specifier: str) -> BuildIdentifier | None:
    for build in builds:
        if build.name == specifier:
            return build
    return None


def find_by_prefix(builds: Sequence[BuildIdentifier], prefix: str) -> list[BuildIdentifier]:
    return [build for build in builds if build.name.startswith(prefix)]


def find_max_satisfying(
    builds: Sequence[BuildIdentifier], specifier: str
) -> BuildIdentifier | None:
    """Return the highest build inside *specifier*, or None.

    Builds whose version portion is not a version are ignored, as is a
    specifier that is not a valid range.
    """
    try:
        version_range = VersionRange.parse(specifier)
    except InvalidRangeError:
        logger.debug("'%s' is not a version range", specifier)
        return None

    matches: list[tuple[Version, BuildIdentifier]] = []
    for build in builds:
        version = parse_version(build.version)
        if version is not None and version_range.contains(version):
            matches.append((version, build))
    if not matches:
        return None

    best = max(version for version, _ in matches)
    tied = sorted(build.name for version, build in matches if version == best)
    if len(tied) > 1:
        logger.debug("Range '%s' tied between %s; taking %s", specifier, tied, tied[0])
    return next(build for version, build in matches if build.name == tied[0])


def _resolve(
    builds: Sequence[BuildIdentifier], specifier: str, prefix: str
) -> BuildIdentifier:
    specifier = specifier.strip()
    if not specifier:
        raise BuildNotFoundError(specifier, "No version given")

    exact = find_exact(builds, specifier)
    if exact is not None:
        logger.debug("'%s' matched exactly", specifier)
        return exact

    prefixed = find_by_prefix(builds, prefix)
    if len(prefixed) == 1:
        logger.debug("'%s' matched %s by prefix", specifier, prefixed[0].name)
        return prefixed[0]

    ranged = find_max_satisfying(builds, specifier)
    if ranged is not None:
        logger.debug("'%s' matched %s by range", specifier, ranged.name)
        return ranged

    if len(prefixed) > 1:
        raise AmbiguousMatchError(specifier, [build.name for build in prefixed])
    raise BuildNotFoundError(specifier)


def resolve(builds: Sequence[BuildIdentifier], specifier: str) -> BuildIdentifier:
    """Resolve *specifier* for ``jvm use``.

    Raises:
        BuildNotFoundError: If no rule yields exactly one build.
        AmbiguousMatchError: If the prefix was shared and no range matched.
    """
    return _resolve(builds, specifier, FAMILY_PREFIX + specifier.strip())


def resolve_for_uninstall(builds: Sequence[BuildIdentifier], specifier: str) -> BuildIdentifier:
    """Resolve *specifier* for ``jvm uninstall``.

    Same rules as :func:`resolve`, except that the prefix rule also accepts
    specifiers that already carry the family tag (``jdk-17``).
    """
    stripped = specifier.strip()
    prefix = stripped if stripped.startswith(FAMILY_PREFIX) else FAMILY_PREFIX + stripped
    return _resolve(builds, specifier, prefix)


__all__ = [
    "find_by_prefix",
    "find_exact",
    "find_max_satisfying",
    "resolve",
    "resolve_for_uninstall",
]
