"""Oracle JDK: deterministic download URLs behind a license cookie."""

from __future__ import annotations

import logging
import re

import httpx

from jvm_cli.errors import VendorError
from jvm_cli.registry.models import strip_family
from jvm_cli.vendors.base import USER_AGENT, ArtifactDescriptor, Vendor

logger = logging.getLogger(__name__)

ORACLE_DOWNLOAD_BASE = "https://download.oracle.com/java"
ORACLE_LICENSE_COOKIE = "oraclelicense=accept-securebackup-cookie"

_ORACLE_VERSION_RE = re.compile(r"^\d+(?:\.\d+)*$")


class OracleVendor(Vendor):
    """Builds ``latest``/``archive`` URLs from version and host platform.

    The ``latest`` location only serves the newest update of a feature
    release; older updates live under ``archive``.  The ``latest`` URL is
    checked first and the ``archive`` URL is used when the check fails, which
    is an expected outcome rather than an error.
    """

    name = "oracle"
    label = "Oracle JDK"
    build_tag = None

    @property
    def headers(self) -> dict[str, str]:
        return {"Cookie": ORACLE_LICENSE_COOKIE, "User-Agent": USER_AGENT}

    def candidate_urls(self, version: str) -> tuple[str, str]:
        """Return the ``(latest, archive)`` URLs for *version*."""
        filename = (
            f"jdk-{version}_{self.host.os}-{self.host.arch}_bin{self.host.archive_kind.suffix}"
        )
        return (
            f"{ORACLE_DOWNLOAD_BASE}/{version}/latest/{filename}",
            f"{ORACLE_DOWNLOAD_BASE}/{version}/archive/{filename}",
        )

    def is_available(self, url: str) -> bool:
        """Return True if *url* answers a HEAD request with a non-error status."""
        try:
            response = self.client.head(
                url,
                headers=self.headers,
                follow_redirects=True,
                timeout=self.timeout,
            )
        except httpx.HTTPError as exc:
            logger.debug("HEAD %s failed: %s", url, exc)
            return False
        logger.debug("HEAD %s returned %s", url, response.status_code)
        return response.status_code < 400

    def describe(self, version: str) -> ArtifactDescriptor:
        version = strip_family(version.strip())
        if not _ORACLE_VERSION_RE.match(version):
            raise VendorError(
                f"Oracle builds are addressed by version number (e.g. 21 or 21.0.2), got '{version}'"
            )

        latest_url, archive_url = self.candidate_urls(version)
        notices: tuple[str, ...] = ()
        url = latest_url
        if not self.is_available(latest_url):
            url = archive_url
            logger.info("latest not found for %s; using archive URL %s", version, archive_url)
            notices = (f"'latest' not found; using 'archive' instead:\n  {archive_url}",)

        return ArtifactDescriptor(
            vendor=self.name,
            version=version,
            url=url,
            archive_kind=self.host.archive_kind,
            headers=self.headers,
            notices=notices,
        )


__all__ = ["ORACLE_DOWNLOAD_BASE", "ORACLE_LICENSE_COOKIE", "OracleVendor"]
