"""Archive extraction and layout normalization."""

from __future__ import annotations

import logging
import os
import tarfile
import zipfile
from pathlib import Path

from jvm_cli.errors import ExtractionError
from jvm_cli.vendors.base import ArchiveKind

logger = logging.getLogger(__name__)


def _is_within(base: Path, candidate: Path) -> bool:
    try:
        candidate.resolve().relative_to(base.resolve())
    except ValueError:
        return False
    return True


def _extract_tar(archive: Path, dest: Path) -> None:
    with tarfile.open(archive, "r:*") as tar:
        if hasattr(tarfile, "data_filter"):
            tar.extractall(dest, filter="data")
            return
        for member in tar.getmembers():
            if not _is_within(dest, dest / member.name):
                raise ExtractionError(f"Refusing to extract {member.name!r} outside {dest}")
        tar.extractall(dest)


def _extract_zip(archive: Path, dest: Path) -> None:
    with zipfile.ZipFile(archive, "r") as zip_ref:
        zip_ref.extractall(dest)
        # zipfile drops unix permissions; restore them so bin/java stays executable.
        if os.name == "nt":
            return
        for info in zip_ref.infolist():
            mode = (info.external_attr >> 16) & 0o777
            if mode:
                extracted = dest / info.filename
                if extracted.exists() and not extracted.is_symlink():
                    os.chmod(extracted, mode)


def extract_archive(archive: Path, kind: ArchiveKind, dest: Path) -> Path:
    """Unpack *archive* into *dest* (created if needed) and return *dest*.

    Raises:
        ExtractionError: If the archive is corrupt, unsafe or unreadable.
    """
    logger.info("Extracting %s", archive.name)
    try:
        dest.mkdir(parents=True, exist_ok=True)
        if kind is ArchiveKind.ZIP:
            _extract_zip(archive, dest)
        else:
            _extract_tar(archive, dest)
    except ExtractionError:
        raise
    except (tarfile.TarError, zipfile.BadZipFile, OSError, EOFError) as exc:
        raise ExtractionError(f"Error extracting {archive.name}: {exc}") from exc
    return dest


def content_root(extract_dir: Path) -> Path:
    """Return the directory whose contents make up the build.

    Vendor archives usually wrap everything in one folder
    (``jdk-21.0.1/bin/...``); that folder is the root.  Anything else is
    taken as a flat archive and the extraction directory itself is the root.
    """
    entries = list(extract_dir.iterdir())
    if len(entries) == 1 and entries[0].is_dir() and not entries[0].is_symlink():
        logger.debug("Flattening single top-level directory %s", entries[0].name)
        return entries[0]
    logger.debug("Archive is flat (%d top-level entries)", len(entries))
    return extract_dir


__all__ = ["content_root", "extract_archive"]
