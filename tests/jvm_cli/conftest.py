from __future__ import annotations

import io
import tarfile
import zipfile
from pathlib import Path
from typing import Callable

import pytest

from jvm_cli.registry.store import RegistryStore


@pytest.fixture
def jvm_home(tmp_path, monkeypatch) -> Path:
    """Point JVM_HOME at an empty temporary directory."""
    home = tmp_path / ".jvm"
    monkeypatch.setenv("JVM_HOME", str(home))
    for var in ("JVM_DEFAULT_VENDOR", "JVM_DEFAULT_VERSION", "JVM_HTTP_TIMEOUT", "GH_TOKEN", "GITHUB_TOKEN"):
        monkeypatch.delenv(var, raising=False)
    return home


@pytest.fixture
def store(jvm_home) -> RegistryStore:
    return RegistryStore(jvm_home)


@pytest.fixture
def make_build(store) -> Callable[[str], Path]:
    """Create a fake installed build with a bin/java file."""

    def _make(name: str) -> Path:
        build_dir = store.build_path(name)
        (build_dir / "bin").mkdir(parents=True)
        (build_dir / "bin" / "java").write_text("#!/bin/sh\n", encoding="utf-8")
        return build_dir

    return _make


def _tar_bytes(files: dict[str, bytes]) -> bytes:
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as tar:
        for name, data in files.items():
            info = tarfile.TarInfo(name)
            info.size = len(data)
            info.mode = 0o755 if name.endswith("/java") else 0o644
            tar.addfile(info, io.BytesIO(data))
    return buffer.getvalue()


def _zip_bytes(files: dict[str, bytes]) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        for name, data in files.items():
            info = zipfile.ZipInfo(name)
            mode = 0o755 if name.endswith("/java") else 0o644
            info.external_attr = (0o100000 | mode) << 16
            zf.writestr(info, data)
    return buffer.getvalue()


@pytest.fixture
def tarball() -> Callable[[dict[str, bytes]], bytes]:
    return _tar_bytes


@pytest.fixture
def zip_archive() -> Callable[[dict[str, bytes]], bytes]:
    return _zip_bytes
