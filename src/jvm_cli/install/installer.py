"""Turn an artifact descriptor into a published build directory.

Pipeline for one install::

    staging = ~/.jvm/.staging/install-XXXX/
      1. download   -> staging/<archive>          (via <archive>.part)
      2. extract    -> staging/extract/
      3. normalize  -> strip a single wrapping folder
      4. publish    -> rename into ~/.jvm/versions/<build>
      5. cleanup    -> remove staging, always

Until step 4 nothing exists under the final build name, so a failed or
killed install never leaves a usable-looking build behind.
"""

from __future__ import annotations

import errno
import logging
import os
import shutil
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

import httpx

from jvm_cli.errors import RegistryFilesystemError
from jvm_cli.install.download import DOWNLOAD_TIMEOUT, ProgressCallback, download_artifact
from jvm_cli.install.extract import content_root, extract_archive
from jvm_cli.registry.models import BuildIdentifier
from jvm_cli.registry.store import RegistryStore
from jvm_cli.vendors.base import ArtifactDescriptor, Vendor

logger = logging.getLogger(__name__)

StepCallback = Callable[[str, str], None]
"""Called with ``(step, detail)`` as the pipeline advances."""


class InstallStatus(str, Enum):
    INSTALLED = "installed"
    ALREADY_INSTALLED = "already-installed"


@dataclass(frozen=True)
class InstallResult:
    status: InstallStatus
    build: BuildIdentifier
    path: Path
    descriptor: Optional[ArtifactDescriptor] = None

    @property
    def already_installed(self) -> bool:
        return self.status is InstallStatus.ALREADY_INSTALLED


def publish(source: Path, target: Path) -> Path:
    """Move the normalized build at *source* to *target* in one rename.

    When *source* and *target* are on different filesystems, entries are
    moved into a hidden ``.<name>.partial`` sibling first and that directory
    is renamed into place, so *target* still appears fully populated.

    Raises:
        RegistryFilesystemError: If *target* exists or a move fails.
    """
    if target.exists():
        raise RegistryFilesystemError(f"{target} already exists")
    try:
        os.rename(source, target)
        return target
    except OSError as exc:
        if exc.errno != errno.EXDEV:
            raise RegistryFilesystemError(f"Cannot publish {target.name}: {exc}") from exc
        logger.debug("Staging and versions/ are on different devices; moving entries")

    partial = target.with_name(f".{target.name}.partial")
    shutil.rmtree(partial, ignore_errors=True)
    try:
        partial.mkdir(parents=True)
        for entry in source.iterdir():
            shutil.move(str(entry), str(partial / entry.name))
        os.rename(partial, target)
    except OSError as exc:
        shutil.rmtree(partial, ignore_errors=True)
        raise RegistryFilesystemError(f"Cannot publish {target.name}: {exc}") from exc
    return target


class ArchiveInstaller:
    """Downloads, unpacks and publishes one artifact at a time."""

    def __init__(
        self,
        store: RegistryStore,
        client: httpx.Client,
        *,
        timeout: float = DOWNLOAD_TIMEOUT,
        on_progress: Optional[ProgressCallback] = None,
        on_step: Optional[StepCallback] = None,
    ) -> None:
        self.store = store
        self.client = client
        self.timeout = timeout
        self.on_progress = on_progress
        self.on_step = on_step

    def _step(self, step: str, detail: str = "") -> None:
        if self.on_step is not None:
            self.on_step(step, detail)

    def install(self, descriptor: ArtifactDescriptor, target: BuildIdentifier) -> InstallResult:
        """Install *descriptor* as *target*; a no-op if *target* exists."""
        final_path = self.store.build_path(target.name)
        if final_path.exists():
            logger.info("%s is already installed", target.name)
            return InstallResult(InstallStatus.ALREADY_INSTALLED, target, final_path, descriptor)

        self.store.ensure_layout()
        staging = self.store.create_staging_dir()
        try:
            self._step("download", descriptor.url)
            archive = download_artifact(
                self.client,
                descriptor,
                staging,
                timeout=self.timeout,
                on_progress=self.on_progress,
            )

            self._step("extract", archive.name)
            extract_dir = extract_archive(archive, descriptor.archive_kind, staging / "extract")

            root = content_root(extract_dir)
            self._step("publish", str(final_path))
            publish(root, final_path)
        finally:
            self._step("cleanup", str(staging))
            shutil.rmtree(staging, ignore_errors=True)
            if staging.exists():
                logger.warning("Could not remove staging directory %s", staging)

        logger.info("Installed %s into %s", target.name, final_path)
        return InstallResult(InstallStatus.INSTALLED, target, final_path, descriptor)


def install_build(
    store: RegistryStore,
    vendor: Vendor,
    version: str,
    installer: ArchiveInstaller,
) -> InstallResult:
    """Resolve *version* with *vendor* and install it unless already present.

    The already-installed check runs against the local registry before any
    network call.  Runs under the registry lock and sweeps staging left by
    interrupted installs first.
    """
    with store.locked():
        store.sweep_staging()

        existing = vendor.find_installed(store.list_builds(), version)
        if existing is not None:
            logger.info("%s already satisfies %s %s", existing.name, vendor.name, version)
            return InstallResult(
                InstallStatus.ALREADY_INSTALLED, existing, store.build_path(existing.name)
            )

        descriptor = vendor.describe(version)
        target = vendor.build_for(descriptor)
        return installer.install(descriptor, target)


__all__ = [
    "ArchiveInstaller",
    "InstallResult",
    "InstallStatus",
    "StepCallback",
    "install_build",
    "publish",
]
