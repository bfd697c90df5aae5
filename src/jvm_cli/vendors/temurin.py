"""Eclipse Temurin: GitHub release catalog of ``adoptium/temurin<N>-binaries``."""

from __future__ import annotations

import logging
import os
import re
from typing import Any
from urllib.parse import quote

import httpx

from jvm_cli.errors import AssetNotFoundError, NetworkError, VendorError
from jvm_cli.registry.models import strip_family, version_extends
from jvm_cli.vendors.base import USER_AGENT, ArtifactDescriptor, HostPlatform, Vendor

logger = logging.getLogger(__name__)

TEMURIN_RELEASES_API = "https://api.github.com/repos/adoptium/temurin{major}-binaries/releases"
RELEASES_PER_PAGE = 100

# HostPlatform.os -> keyword Adoptium uses in asset names
_OS_KEYWORDS = {"linux": "linux", "macos": "mac", "windows": "windows"}

_MAJOR_RE = re.compile(r"^(\d+)")


def _github_token() -> str | None:
    """Return sanitized GitHub token from the environment or None."""
    return ((os.getenv("GH_TOKEN") or os.getenv("GITHUB_TOKEN") or "").strip()) or None


def _github_headers() -> dict[str, str]:
    headers = {"Accept": "application/vnd.github+json", "User-Agent": USER_AGENT}
    if token := _github_token():
        headers["Authorization"] = f"Bearer {token}"
    return headers


def release_version(tag_name: str) -> str:
    """``jdk-21.0.1+12`` -> ``21.0.1``; ``jdk-21+35`` -> ``21``."""
    return strip_family(tag_name.strip()).split("+", 1)[0]


def select_asset(assets: list[dict[str, Any]], host: HostPlatform) -> dict[str, Any] | None:
    """Return the first JDK asset built for *host*, or None.

    Asset names look like ``OpenJDK21U-jdk_x64_linux_hotspot_21.0.1_12.tar.gz``.
    The OS keyword must be a whole ``_``-separated token so ``alpine-linux``
    builds are not picked for glibc Linux.
    """
    os_keyword = _OS_KEYWORDS[host.os]
    suffix = host.archive_kind.suffix
    for asset in assets:
        name = str(asset.get("name", ""))
        if not name.endswith(suffix):
            continue
        tokens = name[: -len(suffix)].split("_")
        if not tokens[0].endswith("-jdk"):
            continue
        if os_keyword in tokens and host.arch in tokens:
            return asset
    return None


class TemurinVendor(Vendor):
    """Queries the release listing for a feature release and picks an asset."""

    name = "temurin"
    label = "Eclipse Temurin"
    build_tag = "temurin"

    def release_url(self, version: str) -> str:
        """URL of the release listing or of a single release for *version*.

        A bare major version maps to ``/releases/latest`` and a version with
        build metadata (``21.0.1+12``) to its tag.  Anything in between
        (``21.0.1``) maps to the listing of that feature release, because
        Adoptium tags always carry the build number.
        """
        match = _MAJOR_RE.match(version)
        if match is None:
            raise VendorError(
                f"Temurin builds are addressed by version number (e.g. 21 or 21.0.1+12), got '{version}'"
            )
        major = match.group(1)
        base = TEMURIN_RELEASES_API.format(major=major)
        if version == major:
            return f"{base}/latest"
        if "+" in version:
            return f"{base}/tags/{quote('jdk-' + version, safe='')}"
        return f"{base}?per_page={RELEASES_PER_PAGE}"

    def _get_json(self, url: str) -> Any:
        try:
            response = self.client.get(
                url,
                headers=_github_headers(),
                follow_redirects=True,
                timeout=self.timeout,
            )
        except httpx.HTTPError as exc:
            raise NetworkError(f"Cannot reach the Temurin release catalog: {exc}") from exc

        if response.status_code != 200:
            raise NetworkError(
                f"GitHub API returned {response.status_code} for {url}"
                + (" (release not found)" if response.status_code == 404 else "")
            )
        try:
            data = response.json()
        except ValueError as exc:
            raise NetworkError(
                f"Failed to parse release JSON: {exc}\nRaw (truncated 400): {response.text[:400]}"
            ) from exc
        return data

    def fetch_release(self, url: str) -> dict[str, Any]:
        data = self._get_json(url)
        if not isinstance(data, dict):
            raise NetworkError(f"Unexpected release payload from {url}")
        return data

    def find_release(self, version: str) -> dict[str, Any]:
        """Return the release that provides *version*.

        Raises:
            VendorError: If the listing has no release for *version*.
            NetworkError: If the catalog cannot be queried.
        """
        url = self.release_url(version)
        if url.endswith("/latest") or "/tags/" in url:
            return self.fetch_release(url)

        releases = self._get_json(url)
        if not isinstance(releases, list):
            raise NetworkError(f"Unexpected release listing from {url}")
        # The listing is newest first.
        for release in releases:
            if not isinstance(release, dict):
                continue
            tag = str(release.get("tag_name", ""))
            if tag and version_extends(release_version(tag), version):
                logger.debug("Release %s provides %s", tag, version)
                return release
        tags = [str(r.get("tag_name", "?")) for r in releases if isinstance(r, dict)]
        raise VendorError(
            f"No Temurin release matches {version}"
            + (f"; recent releases: {', '.join(tags[:5])}" if tags else "")
        )

    def describe(self, version: str) -> ArtifactDescriptor:
        version = strip_family(version.strip())
        release = self.find_release(version)

        tag = str(release.get("tag_name", ""))
        assets = release.get("assets") or []
        asset = select_asset(assets, self.host)
        if asset is None:
            available = [str(a.get("name", "?")) for a in assets]
            raise AssetNotFoundError(
                f"No Temurin asset for {self.host.os}/{self.host.arch} "
                f"({self.host.archive_kind.suffix}) in release {tag or version}",
                available,
            )

        logger.debug("Selected %s from release %s", asset.get("name"), tag)
        return ArtifactDescriptor(
            vendor=self.name,
            version=release_version(tag) if tag else version,
            url=str(asset["browser_download_url"]),
            archive_kind=self.host.archive_kind,
            headers={"User-Agent": USER_AGENT},
        )


__all__ = ["TEMURIN_RELEASES_API", "TemurinVendor", "release_version", "select_asset"]
