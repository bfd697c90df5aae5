"""Download, unpack and publish vendor archives."""

from .download import download_artifact
from .extract import content_root, extract_archive
from .installer import (
    ArchiveInstaller,
    InstallResult,
    InstallStatus,
    install_build,
    publish,
)

__all__ = [
    "ArchiveInstaller",
    "InstallResult",
    "InstallStatus",
    "content_root",
    "download_artifact",
    "extract_archive",
    "install_build",
    "publish",
]
