"""Streaming artifact download into a staging directory."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Optional

import httpx

from jvm_cli.errors import NetworkError, RegistryFilesystemError
from jvm_cli.vendors.base import ArtifactDescriptor

logger = logging.getLogger(__name__)

CHUNK_SIZE = 8192
DOWNLOAD_TIMEOUT = 60.0

ProgressCallback = Callable[[int, int], None]
"""Called with ``(bytes_downloaded, total_bytes)``; total is 0 when unknown."""


def download_artifact(
    client: httpx.Client,
    descriptor: ArtifactDescriptor,
    dest_dir: Path,
    *,
    timeout: float = DOWNLOAD_TIMEOUT,
    on_progress: Optional[ProgressCallback] = None,
) -> Path:
    """Download *descriptor* into *dest_dir* and return the archive path.

    Bytes are written to ``<name>.part`` and renamed to ``<name>`` only after
    the stream has ended and, when the server announced a length, all bytes
    have arrived.  A path returned from here is always a complete download.

    Raises:
        NetworkError: On transport errors, non-200 responses or a short read.
        RegistryFilesystemError: If the staging file cannot be written.
    """
    final_path = dest_dir / descriptor.filename
    part_path = final_path.with_name(final_path.name + ".part")

    logger.info("Downloading %s", descriptor.url)
    try:
        with client.stream(
            "GET",
            descriptor.url,
            headers=dict(descriptor.headers),
            timeout=timeout,
            follow_redirects=True,
        ) as response:
            if response.status_code != 200:
                raise NetworkError(
                    f"Download failed with {response.status_code} for {descriptor.url}"
                )
            total_size = int(response.headers.get("content-length", 0) or 0)
            with open(part_path, "wb") as f:
                for chunk in response.iter_bytes(chunk_size=CHUNK_SIZE):
                    f.write(chunk)
                    if on_progress is not None:
                        on_progress(response.num_bytes_downloaded, total_size)
            received = response.num_bytes_downloaded
    except httpx.HTTPError as exc:
        part_path.unlink(missing_ok=True)
        raise NetworkError(f"Error downloading {descriptor.url}: {exc}") from exc
    except NetworkError:
        part_path.unlink(missing_ok=True)
        raise
    except OSError as exc:
        part_path.unlink(missing_ok=True)
        raise RegistryFilesystemError(f"Cannot write {part_path}: {exc}") from exc

    if total_size and received != total_size:
        part_path.unlink(missing_ok=True)
        raise NetworkError(
            f"Download of {descriptor.url} ended early ({received:,} of {total_size:,} bytes)"
        )

    try:
        os.replace(part_path, final_path)
    except OSError as exc:
        part_path.unlink(missing_ok=True)
        raise RegistryFilesystemError(f"Cannot move {part_path.name} into place: {exc}") from exc
    logger.info("Downloaded %s (%s bytes)", final_path.name, f"{received:,}")
    return final_path


__all__ = ["CHUNK_SIZE", "DOWNLOAD_TIMEOUT", "ProgressCallback", "download_artifact"]
