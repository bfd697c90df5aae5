"""Exception hierarchy for the jvm CLI.

Every failure the command layer knows how to report derives from
:class:`JvmError`.  Commands catch it, print the message and exit non-zero.
"""

from __future__ import annotations

from typing import Sequence


class JvmError(RuntimeError):
    """Base exception for jvm errors."""


class ConfigError(JvmError):
    """Raised when config.toml or an environment override is invalid."""


class BuildNotFoundError(JvmError):
    """No installed build matches a version specifier."""

    def __init__(self, specifier: str, message: str | None = None):
        self.specifier = specifier
        super().__init__(message or f"Version not found: {specifier}")


class AmbiguousMatchError(BuildNotFoundError):
    """Several builds share a prefix and no range match could break the tie."""

    def __init__(self, specifier: str, candidates: Sequence[str]):
        self.candidates = list(candidates)
        listed = ", ".join(self.candidates)
        super().__init__(
            specifier,
            f"Version '{specifier}' is ambiguous; it matches: {listed}. "
            f"Use the full build name.",
        )


class NetworkError(JvmError):
    """A download, availability check or catalog query failed."""


class VendorError(JvmError):
    """Base exception for vendor resolution errors."""


class UnsupportedVendorError(VendorError):
    """The requested vendor is not one of the known variants."""

    def __init__(self, vendor: str, supported: Sequence[str]):
        self.vendor = vendor
        self.supported = list(supported)
        super().__init__(
            f"Unsupported vendor '{vendor}'. Supported vendors: {', '.join(self.supported)}"
        )


class UnsupportedPlatformError(VendorError):
    """The host OS or CPU architecture has no entry in the platform table."""


class AssetNotFoundError(VendorError):
    """A release catalog lists no asset for this host."""

    def __init__(self, message: str, available: Sequence[str] = ()):
        self.available = list(available)
        super().__init__(message)


class ExtractionError(JvmError):
    """An archive could not be unpacked."""


class RegistryFilesystemError(JvmError):
    """A registry directory or pointer could not be read or written."""


class ActivationError(RegistryFilesystemError):
    """The active pointer could not be replaced."""


class PrivilegedOperationError(JvmError):
    """The elevated environment-variable update was denied or failed."""


__all__ = [
    "JvmError",
    "ConfigError",
    "BuildNotFoundError",
    "AmbiguousMatchError",
    "NetworkError",
    "VendorError",
    "UnsupportedVendorError",
    "UnsupportedPlatformError",
    "AssetNotFoundError",
    "ExtractionError",
    "RegistryFilesystemError",
    "ActivationError",
    "PrivilegedOperationError",
]
