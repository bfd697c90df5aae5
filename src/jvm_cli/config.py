"""Configuration loading for the jvm CLI.

Settings come from three layers, later layers winning:

1. built-in defaults,
2. an optional ``config.toml`` inside the jvm home (read only, never written),
3. ``JVM_*`` environment variables.

Example ``config.toml``::

    [install]
    default_vendor = "temurin"
    default_version = "21"

    [network]
    timeout = 60
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import toml  # type: ignore[import-untyped]

from jvm_cli.core.constants import CONFIG_FILE, DEFAULT_VENDOR
from jvm_cli.errors import ConfigError

DEFAULT_VERSION = "21"
DEFAULT_TIMEOUT = 30.0

ENV_DEFAULT_VENDOR = "JVM_DEFAULT_VENDOR"
ENV_DEFAULT_VERSION = "JVM_DEFAULT_VERSION"
ENV_HTTP_TIMEOUT = "JVM_HTTP_TIMEOUT"


@dataclass(frozen=True)
class JvmConfig:
    """Resolved settings for one CLI invocation."""

    home: Path
    default_vendor: str = DEFAULT_VENDOR
    default_version: str = DEFAULT_VERSION
    timeout: float = DEFAULT_TIMEOUT

    @property
    def config_file(self) -> Path:
        return self.home / CONFIG_FILE


def _read_config_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        data = toml.load(path)
    except (toml.TomlDecodeError, OSError) as exc:
        raise ConfigError(f"Cannot read {path}: {exc}") from exc
    return data if isinstance(data, dict) else {}


def _parse_timeout(value: Any, source: str) -> float:
    try:
        timeout = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid timeout {value!r} in {source}") from exc
    if timeout <= 0:
        raise ConfigError(f"Timeout must be positive, got {timeout} in {source}")
    return timeout


def _string_setting(section: Any, key: str, default: str, source: str) -> str:
    if not isinstance(section, dict) or key not in section:
        return default
    value = section[key]
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"'{key}' in {source} must be a non-empty string")
    return value.strip()


def load_config(home: Path) -> JvmConfig:
    """Build a :class:`JvmConfig` for *home*.

    Raises:
        ConfigError: If the file cannot be parsed or a value has the wrong type.
    """
    config_path = home / CONFIG_FILE
    data = _read_config_file(config_path)
    source = str(config_path)

    install_section = data.get("install")
    network_section = data.get("network")

    default_vendor = _string_setting(install_section, "default_vendor", DEFAULT_VENDOR, source)
    default_version = _string_setting(install_section, "default_version", DEFAULT_VERSION, source)

    timeout = DEFAULT_TIMEOUT
    if isinstance(network_section, dict) and "timeout" in network_section:
        timeout = _parse_timeout(network_section["timeout"], source)

    if env_vendor := os.environ.get(ENV_DEFAULT_VENDOR, "").strip():
        default_vendor = env_vendor
    if env_version := os.environ.get(ENV_DEFAULT_VERSION, "").strip():
        default_version = env_version
    if env_timeout := os.environ.get(ENV_HTTP_TIMEOUT, "").strip():
        timeout = _parse_timeout(env_timeout, ENV_HTTP_TIMEOUT)

    return JvmConfig(
        home=home,
        default_vendor=default_vendor.lower(),
        default_version=default_version,
        timeout=timeout,
    )


__all__ = [
    "DEFAULT_TIMEOUT",
    "DEFAULT_VERSION",
    "ENV_DEFAULT_VENDOR",
    "ENV_DEFAULT_VERSION",
    "ENV_HTTP_TIMEOUT",
    "JvmConfig",
    "load_config",
]
