"""High-level operations behind the CLI commands."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

import httpx

from jvm_cli.activation.environment import PrivilegedEnvironment, default_privileged_environment
from jvm_cli.activation.switch import EnvironmentEffect, activate
from jvm_cli.config import JvmConfig
from jvm_cli.http_client import build_client
from jvm_cli.install.download import ProgressCallback
from jvm_cli.install.installer import ArchiveInstaller, InstallResult, StepCallback, install_build
from jvm_cli.registry.models import BuildIdentifier
from jvm_cli.registry.store import RegistryStore, RemovalResult
from jvm_cli.resolution.matcher import resolve, resolve_for_uninstall
from jvm_cli.vendors import HostPlatform, Vendor, get_vendor

logger = logging.getLogger(__name__)

_UNSET = object()


@dataclass(frozen=True)
class BuildListing:
    build: BuildIdentifier
    path: str
    active: bool


@dataclass(frozen=True)
class UseResult:
    build: BuildIdentifier
    effect: EnvironmentEffect


class JvmService:
    """Service wrapper around the registry, vendors, installer and switch."""

    def __init__(
        self,
        config: JvmConfig,
        *,
        client_factory: Callable[[float], httpx.Client] = build_client,
        host: Optional[HostPlatform] = None,
        privileged: object = _UNSET,
    ) -> None:
        self.config = config
        self.store = RegistryStore(config.home)
        self._client_factory = client_factory
        self._host = host
        self._privileged: Optional[PrivilegedEnvironment] = (
            default_privileged_environment() if privileged is _UNSET else privileged  # type: ignore[assignment]
        )

    def list_builds(self) -> list[BuildListing]:
        active = self.store.get_active()
        return [
            BuildListing(
                build=build,
                path=str(self.store.build_path(build.name)),
                active=active is not None and active.name == build.name,
            )
            for build in self.store.list_builds()
        ]

    def current(self) -> Optional[BuildIdentifier]:
        return self.store.get_active()

    def use(self, specifier: str, *, shell: Optional[str] = None) -> UseResult:
        build = resolve(self.store.list_builds(), specifier)
        effect = activate(self.store, build, privileged=self._privileged, shell=shell)
        return UseResult(build=build, effect=effect)

    def vendor(self, name: str, client: httpx.Client) -> Vendor:
        return get_vendor(name, client, self._host, timeout=self.config.timeout)

    def install(
        self,
        version: Optional[str] = None,
        vendor: Optional[str] = None,
        *,
        on_progress: Optional[ProgressCallback] = None,
        on_step: Optional[StepCallback] = None,
    ) -> InstallResult:
        version = (version or self.config.default_version).strip()
        vendor_name = vendor or self.config.default_vendor
        with self._client_factory(self.config.timeout) as client:
            strategy = self.vendor(vendor_name, client)
            installer = ArchiveInstaller(
                self.store,
                client,
                timeout=max(self.config.timeout, 60.0),
                on_progress=on_progress,
                on_step=on_step,
            )
            return install_build(self.store, strategy, version, installer)

    def uninstall(self, specifier: str) -> RemovalResult:
        with self.store.locked():
            build = resolve_for_uninstall(self.store.list_builds(), specifier)
            return self.store.remove_build(build.name)


__all__ = ["BuildListing", "JvmService", "UseResult"]
