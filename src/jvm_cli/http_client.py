"""HTTP client construction shared by vendors and the downloader."""

from __future__ import annotations

import ssl

import httpx
import truststore

from jvm_cli.vendors.base import USER_AGENT


def build_client(timeout: float = 30.0) -> httpx.Client:
    """Return an ``httpx.Client`` that trusts the operating system's CA store."""
    ssl_context = truststore.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    return httpx.Client(
        verify=ssl_context,
        timeout=timeout,
        follow_redirects=True,
        headers={"User-Agent": USER_AGENT},
    )


__all__ = ["build_client"]
