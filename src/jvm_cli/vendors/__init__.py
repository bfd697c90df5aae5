"""Vendor resolution: map (vendor, version) to a downloadable artifact.

Vendors form a closed set; adding one means adding a :class:`Vendor`
subclass and registering it in :data:`VENDORS`.
"""

from __future__ import annotations

import httpx

from jvm_cli.errors import UnsupportedVendorError

from .base import ArchiveKind, ArtifactDescriptor, HostPlatform, Vendor
from .oracle import OracleVendor
from .temurin import TemurinVendor

VENDORS: dict[str, type[Vendor]] = {
    OracleVendor.name: OracleVendor,
    TemurinVendor.name: TemurinVendor,
}

SUPPORTED_VENDORS: tuple[str, ...] = tuple(VENDORS)

_VENDOR_ALIASES = {
    "adoptium": "temurin",
    "eclipse": "temurin",
}


def normalize_vendor(vendor: str) -> str:
    key = vendor.strip().lower()
    return _VENDOR_ALIASES.get(key, key)


def get_vendor(
    name: str,
    client: httpx.Client,
    host: HostPlatform | None = None,
    *,
    timeout: float = 30.0,
) -> Vendor:
    """Instantiate the vendor called *name*.

    Raises:
        UnsupportedVendorError: If *name* is not a known vendor.
        UnsupportedPlatformError: If *host* is None and this machine is not
            in the platform table.
    """
    key = normalize_vendor(name)
    if key not in VENDORS:
        raise UnsupportedVendorError(name, SUPPORTED_VENDORS)
    return VENDORS[key](client, host or HostPlatform.detect(), timeout=timeout)


__all__ = [
    "ArchiveKind",
    "ArtifactDescriptor",
    "HostPlatform",
    "OracleVendor",
    "SUPPORTED_VENDORS",
    "TemurinVendor",
    "VENDORS",
    "Vendor",
    "get_vendor",
    "normalize_vendor",
]
