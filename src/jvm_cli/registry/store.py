"""On-disk registry of installed builds and the active pointer.

Layout under the jvm home::

    ~/.jvm/
        versions/<build>/     one directory per installed build
        current -> versions/<build>
        .staging/             install scratch space, same filesystem
        .jvm.lock             inter-process lock for mutating commands

Readers never take the lock.  Mutating commands (install, use, uninstall)
wrap their work in :meth:`RegistryStore.locked`.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from filelock import FileLock, Timeout

from jvm_cli.core.constants import CURRENT_LINK, LOCK_FILE, STAGING_DIR, VERSIONS_DIR
from jvm_cli.errors import ActivationError, BuildNotFoundError, RegistryFilesystemError
from jvm_cli.registry.models import BuildIdentifier

logger = logging.getLogger(__name__)

LOCK_TIMEOUT_SECONDS = 10


def _is_windows() -> bool:
    """Return True when running on Windows."""
    return os.name == "nt"


@dataclass(frozen=True)
class RemovalResult:
    """Outcome of :meth:`RegistryStore.remove_build`."""

    build: BuildIdentifier
    path: Path
    pointer_cleared: bool


class RegistryStore:
    """Reads and mutates the builds and active pointer under one jvm home."""

    def __init__(self, home: Path) -> None:
        self.home = home
        self.versions_dir = home / VERSIONS_DIR
        self.current_link = home / CURRENT_LINK
        self.staging_root = home / STAGING_DIR
        self.lock_path = home / LOCK_FILE

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def ensure_layout(self) -> None:
        """Create ``versions/`` (and the home) if missing."""
        try:
            self.versions_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise RegistryFilesystemError(f"Cannot create {self.versions_dir}: {exc}") from exc

    @contextmanager
    def locked(self) -> Iterator[None]:
        """Hold the registry lock for the duration of the block."""
        self.ensure_layout()
        lock = FileLock(self.lock_path, timeout=LOCK_TIMEOUT_SECONDS)
        try:
            with lock:
                yield
        except Timeout as exc:
            raise RegistryFilesystemError(
                "Cannot acquire the jvm registry lock. Another jvm process may be running."
            ) from exc

    # ------------------------------------------------------------------
    # Builds
    # ------------------------------------------------------------------

    def build_path(self, name: str) -> Path:
        return self.versions_dir / name

    def exists(self, name: str) -> bool:
        return self.build_path(name).is_dir()

    def list_builds(self) -> list[BuildIdentifier]:
        """Return installed builds sorted by directory name.

        Dot-prefixed entries (in-progress publishes) and plain files are
        skipped.
        """
        if not self.versions_dir.is_dir():
            return []
        try:
            entries = list(self.versions_dir.iterdir())
        except OSError as exc:
            raise RegistryFilesystemError(f"Cannot read {self.versions_dir}: {exc}") from exc
        names = sorted(
            entry.name
            for entry in entries
            if entry.is_dir() and not entry.name.startswith(".")
        )
        return [BuildIdentifier.parse(name) for name in names]

    def remove_build(self, name: str) -> RemovalResult:
        """Delete a build, clearing the active pointer if it targets it.

        The build directory is renamed into staging before deletion so a
        failed ``rmtree`` never leaves a half-deleted build under its name.
        The pointer is cleared only after that rename succeeds; a failed
        removal leaves both the build and the pointer untouched.
        """
        path = self.build_path(name)
        if not path.is_dir():
            raise BuildNotFoundError(name)

        build = BuildIdentifier.parse(name)
        active = self.get_active()

        trash = self.create_staging_dir(prefix="remove-")
        doomed = trash / "build"
        try:
            os.replace(path, doomed)
        except OSError as exc:
            shutil.rmtree(trash, ignore_errors=True)
            raise RegistryFilesystemError(f"Cannot remove {path}: {exc}") from exc

        pointer_cleared = False
        if active is not None and active.name == name:
            self.clear_active()
            pointer_cleared = True

        try:
            shutil.rmtree(trash)
        except OSError as exc:
            logger.warning("Leaving %s for the next cleanup pass: %s", trash, exc)

        logger.info("Removed build %s", name)
        return RemovalResult(build=build, path=path, pointer_cleared=pointer_cleared)

    # ------------------------------------------------------------------
    # Active pointer
    # ------------------------------------------------------------------

    def _pointer_present(self) -> bool:
        link = self.current_link
        if link.is_symlink():
            return True
        is_junction = getattr(link, "is_junction", None)
        return bool(is_junction and is_junction())

    def get_active(self) -> BuildIdentifier | None:
        """Return the build the active pointer resolves to, if any.

        A pointer that dangles or points outside ``versions/`` reads as no
        active build.
        """
        if not self._pointer_present():
            return None
        try:
            resolved = Path(os.path.realpath(self.current_link))
            versions = Path(os.path.realpath(self.versions_dir))
        except OSError as exc:
            raise RegistryFilesystemError(f"Cannot read {self.current_link}: {exc}") from exc

        if resolved.parent != versions or not resolved.is_dir():
            logger.warning("Active pointer %s does not name an installed build", self.current_link)
            return None
        return BuildIdentifier.parse(resolved.name)

    def set_active(self, name: str) -> Path:
        """Point ``current`` at *name* and return the build directory.

        On POSIX the new link is created under a temporary name and renamed
        over the old one, so readers see either the old or the new build.
        """
        target = self.build_path(name)
        if not target.is_dir():
            raise BuildNotFoundError(name)
        if self.current_link.exists() and not self._pointer_present():
            raise ActivationError(
                f"{self.current_link} exists and is not a link; remove it and retry."
            )

        if _is_windows():
            self._replace_pointer_windows(target)
        else:
            self._replace_pointer_posix(target)
        logger.info("Active pointer now targets %s", name)
        return target

    def _replace_pointer_posix(self, target: Path) -> None:
        tmp_link = self.home / f".{CURRENT_LINK}.{os.getpid()}.tmp"
        try:
            if tmp_link.is_symlink():
                tmp_link.unlink()
            os.symlink(target, tmp_link, target_is_directory=True)
            os.replace(tmp_link, self.current_link)
        except OSError as exc:
            if tmp_link.is_symlink():
                tmp_link.unlink()
            raise ActivationError(f"Cannot update {self.current_link}: {exc}") from exc

    def _replace_pointer_windows(self, target: Path) -> None:
        # Directory links cannot be renamed over each other on Windows.
        import _winapi

        had_pointer = self._pointer_present()
        try:
            if had_pointer:
                os.rmdir(self.current_link)
        except OSError as exc:
            raise ActivationError(f"Cannot remove {self.current_link}: {exc}") from exc
        try:
            _winapi.CreateJunction(str(target), str(self.current_link))
        except OSError as exc:
            raise ActivationError(
                f"Removed {self.current_link} but could not recreate it: {exc}. "
                f"No build is active until 'jvm use' succeeds."
            ) from exc

    def clear_active(self) -> bool:
        """Remove the active pointer. Returns False if there was none."""
        if not self._pointer_present():
            return False
        try:
            if _is_windows():
                os.rmdir(self.current_link)
            else:
                self.current_link.unlink()
        except OSError as exc:
            raise ActivationError(f"Cannot remove {self.current_link}: {exc}") from exc
        logger.info("Active pointer cleared")
        return True

    # ------------------------------------------------------------------
    # Staging
    # ------------------------------------------------------------------

    def create_staging_dir(self, prefix: str = "install-") -> Path:
        """Create a unique scratch directory on the registry's filesystem."""
        try:
            self.staging_root.mkdir(parents=True, exist_ok=True)
            return Path(tempfile.mkdtemp(prefix=prefix, dir=self.staging_root))
        except OSError as exc:
            raise RegistryFilesystemError(f"Cannot create staging directory: {exc}") from exc

    def sweep_staging(self) -> int:
        """Remove scratch directories left behind by killed processes.

        Must be called with the registry lock held so it never deletes
        another process's active staging directory.  Best-effort: errors are
        logged and skipped.
        """
        if not self.staging_root.is_dir():
            return 0
        removed = 0
        for entry in self.staging_root.iterdir():
            try:
                if entry.is_dir() and not entry.is_symlink():
                    shutil.rmtree(entry)
                else:
                    entry.unlink()
                removed += 1
            except OSError as exc:
                logger.warning("Could not remove stale staging entry %s: %s", entry, exc)
        if removed:
            logger.info("Swept %d stale staging entr%s", removed, "y" if removed == 1 else "ies")
        return removed


__all__ = ["LOCK_TIMEOUT_SECONDS", "RegistryStore", "RemovalResult"]
