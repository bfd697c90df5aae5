"""Common vendor capability, artifact descriptors and the host platform table."""

from __future__ import annotations

import platform
import posixpath
import sys
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar
from urllib.parse import unquote, urlparse

import httpx

from jvm_cli.core.constants import FAMILY
from jvm_cli.errors import UnsupportedPlatformError
from jvm_cli.registry.models import BuildIdentifier, strip_family, version_extends

USER_AGENT = "jvm-cli"


class ArchiveKind(str, Enum):
    """Archive formats vendors publish JDKs in."""

    TARBALL = "tar.gz"
    ZIP = "zip"

    @property
    def suffix(self) -> str:
        return f".{self.value}"


# sys.platform -> (platform tag, archive kind)
_OS_TABLE: dict[str, tuple[str, ArchiveKind]] = {
    "linux": ("linux", ArchiveKind.TARBALL),
    "darwin": ("macos", ArchiveKind.TARBALL),
    "win32": ("windows", ArchiveKind.ZIP),
}

# platform.machine() (lowercased) -> architecture tag
_ARCH_TABLE: dict[str, str] = {
    "x86_64": "x64",
    "amd64": "x64",
    "x64": "x64",
    "arm64": "aarch64",
    "aarch64": "aarch64",
}


@dataclass(frozen=True)
class HostPlatform:
    """OS, CPU architecture and preferred archive kind of this machine."""

    os: str
    arch: str
    archive_kind: ArchiveKind

    @classmethod
    def detect(cls, system: str | None = None, machine: str | None = None) -> "HostPlatform":
        """Map the running interpreter's platform onto the closed table.

        Raises:
            UnsupportedPlatformError: For hosts outside the table.
        """
        system = system or sys.platform
        machine = (machine or platform.machine()).lower()
        if system.startswith("linux"):
            system = "linux"
        if system not in _OS_TABLE:
            raise UnsupportedPlatformError(f"Unsupported operating system: {system}")
        if machine not in _ARCH_TABLE:
            raise UnsupportedPlatformError(f"Unsupported CPU architecture: {machine}")
        os_tag, archive_kind = _OS_TABLE[system]
        return cls(os=os_tag, arch=_ARCH_TABLE[machine], archive_kind=archive_kind)


@dataclass(frozen=True)
class ArtifactDescriptor:
    """Where to fetch one vendor build and how to unpack it."""

    vendor: str
    version: str
    url: str
    archive_kind: ArchiveKind
    headers: Mapping[str, str] = field(default_factory=dict)
    notices: tuple[str, ...] = ()

    @property
    def filename(self) -> str:
        name = posixpath.basename(unquote(urlparse(self.url).path))
        return name or f"{FAMILY}-{self.version}{self.archive_kind.suffix}"


class Vendor(ABC):
    """One upstream JDK distributor.

    Subclasses set ``name`` (the CLI spelling) and ``build_tag`` (the
    ``(<vendor>)`` suffix on published build names, None for the default
    vendor) and implement :meth:`describe`.
    """

    name: ClassVar[str]
    label: ClassVar[str]
    build_tag: ClassVar[str | None] = None

    def __init__(self, client: httpx.Client, host: HostPlatform, *, timeout: float = 30.0):
        self.client = client
        self.host = host
        self.timeout = timeout

    @abstractmethod
    def describe(self, version: str) -> ArtifactDescriptor:
        """Resolve *version* to a downloadable artifact. Never writes to disk."""

    def build_for(self, descriptor: ArtifactDescriptor) -> BuildIdentifier:
        """Name under which *descriptor* is published in ``versions/``."""
        return BuildIdentifier.compose(descriptor.version, self.build_tag)

    def find_installed(
        self, builds: Sequence[BuildIdentifier], version: str
    ) -> BuildIdentifier | None:
        """Return an installed build of ours that already satisfies *version*.

        Works offline, so a repeated install does no network activity.
        """
        requested = strip_family(version.strip())
        for build in builds:
            if build.family != FAMILY or build.vendor != self.build_tag:
                continue
            if version_extends(build.version, requested):
                return build
        return None


__all__ = [
    "ArchiveKind",
    "ArtifactDescriptor",
    "HostPlatform",
    "USER_AGENT",
    "Vendor",
]
