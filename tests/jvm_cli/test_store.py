"""Tests for the on-disk registry and the active pointer."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest
from filelock import Timeout

from jvm_cli.errors import ActivationError, BuildNotFoundError, RegistryFilesystemError

pytestmark = pytest.mark.skipif(os.name == "nt", reason="symlink pointer is POSIX only")


class TestListBuilds:
    def test_missing_home_lists_nothing(self, store):
        assert store.list_builds() == []

    def test_sorted_and_filtered(self, store, make_build):
        make_build("jdk-21.0.0")
        make_build("jdk-17.0.1")
        (store.versions_dir / ".jdk-22.partial").mkdir()
        (store.versions_dir / "README").write_text("not a build", encoding="utf-8")

        assert [b.name for b in store.list_builds()] == ["jdk-17.0.1", "jdk-21.0.0"]


class TestActivePointer:
    def test_no_pointer(self, store, make_build):
        make_build("jdk-17.0.1")
        assert store.get_active() is None

    def test_set_and_get(self, store, make_build):
        make_build("jdk-17.0.1")
        path = store.set_active("jdk-17.0.1")

        assert path == store.build_path("jdk-17.0.1")
        assert store.current_link.is_symlink()
        assert store.get_active().name == "jdk-17.0.1"

    def test_switch_replaces_pointer(self, store, make_build):
        make_build("jdk-17.0.1")
        make_build("jdk-21.0.0 (temurin)")
        store.set_active("jdk-17.0.1")
        store.set_active("jdk-21.0.0 (temurin)")

        assert store.get_active().name == "jdk-21.0.0 (temurin)"
        assert not list(store.home.glob(".current.*.tmp"))

    def test_activating_twice_is_harmless(self, store, make_build):
        make_build("jdk-17.0.1")
        store.set_active("jdk-17.0.1")
        store.set_active("jdk-17.0.1")
        assert store.get_active().name == "jdk-17.0.1"

    def test_missing_build(self, store):
        with pytest.raises(BuildNotFoundError):
            store.set_active("jdk-99")

    def test_refuses_to_replace_a_real_directory(self, store, make_build):
        make_build("jdk-17.0.1")
        store.current_link.mkdir(parents=True)
        with pytest.raises(ActivationError):
            store.set_active("jdk-17.0.1")

    def test_dangling_pointer_reads_as_none(self, store, make_build):
        build_dir = make_build("jdk-17.0.1")
        store.set_active("jdk-17.0.1")
        (build_dir / "bin" / "java").unlink()
        (build_dir / "bin").rmdir()
        build_dir.rmdir()

        assert store.get_active() is None

    def test_pointer_outside_versions_reads_as_none(self, store, tmp_path):
        store.ensure_layout()
        elsewhere = tmp_path / "elsewhere"
        elsewhere.mkdir()
        os.symlink(elsewhere, store.current_link)

        assert store.get_active() is None

    def test_clear_active(self, store, make_build):
        make_build("jdk-17.0.1")
        store.set_active("jdk-17.0.1")

        assert store.clear_active() is True
        assert store.get_active() is None
        assert store.clear_active() is False


class TestRemoveBuild:
    def test_removes_inactive_build(self, store, make_build):
        make_build("jdk-17.0.1")
        make_build("jdk-21.0.0")
        store.set_active("jdk-21.0.0")

        result = store.remove_build("jdk-17.0.1")

        assert result.pointer_cleared is False
        assert not store.exists("jdk-17.0.1")
        assert store.get_active().name == "jdk-21.0.0"

    def test_removing_active_build_clears_pointer(self, store, make_build):
        make_build("jdk-17.0.1")
        store.set_active("jdk-17.0.1")

        result = store.remove_build("jdk-17.0.1")

        assert result.pointer_cleared is True
        assert not store.current_link.is_symlink()
        assert store.get_active() is None
        assert store.list_builds() == []

    def test_leaves_no_staging_behind(self, store, make_build):
        make_build("jdk-17.0.1")
        store.remove_build("jdk-17.0.1")
        assert list(store.staging_root.iterdir()) == []

    def test_missing_build(self, store):
        with pytest.raises(BuildNotFoundError):
            store.remove_build("jdk-17")

    def test_failed_move_keeps_active_pointer(self, store, make_build):
        """A removal that cannot move the build must not unset it."""
        make_build("jdk-17.0.1")
        store.set_active("jdk-17.0.1")

        with patch(
            "jvm_cli.registry.store.os.replace",
            side_effect=PermissionError("Permission denied"),
        ):
            with pytest.raises(RegistryFilesystemError, match="Cannot remove"):
                store.remove_build("jdk-17.0.1")

        assert store.exists("jdk-17.0.1")
        assert store.get_active().name == "jdk-17.0.1"
        assert list(store.staging_root.iterdir()) == []


class TestStaging:
    def test_create_staging_dir_is_under_home(self, store):
        staging = store.create_staging_dir()
        assert staging.parent == store.staging_root
        assert staging.name.startswith("install-")

    def test_sweep_removes_leftovers(self, store):
        store.create_staging_dir()
        store.create_staging_dir(prefix="remove-")
        (store.staging_root / "stray.part").write_bytes(b"x")

        assert store.sweep_staging() == 3
        assert list(store.staging_root.iterdir()) == []

    def test_sweep_without_staging_root(self, store):
        assert store.sweep_staging() == 0


class TestLock:
    def test_locked_creates_layout(self, store):
        with store.locked():
            assert store.versions_dir.is_dir()

    def test_timeout_becomes_filesystem_error(self, store):
        with patch("jvm_cli.registry.store.FileLock") as mock_lock:
            mock_lock.return_value.__enter__.side_effect = Timeout(str(store.lock_path))
            with pytest.raises(RegistryFilesystemError, match="registry lock"):
                with store.locked():
                    pass
