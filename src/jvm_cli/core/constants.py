"""Shared names for the jvm home directory layout."""

from __future__ import annotations

FAMILY = "jdk"
FAMILY_PREFIX = f"{FAMILY}-"

VERSIONS_DIR = "versions"
CURRENT_LINK = "current"
STAGING_DIR = ".staging"
LOCK_FILE = ".jvm.lock"
CONFIG_FILE = "config.toml"

JAVA_HOME_VAR = "JAVA_HOME"

DEFAULT_VENDOR = "oracle"

__all__ = [
    "FAMILY",
    "FAMILY_PREFIX",
    "VERSIONS_DIR",
    "CURRENT_LINK",
    "STAGING_DIR",
    "LOCK_FILE",
    "CONFIG_FILE",
    "JAVA_HOME_VAR",
    "DEFAULT_VENDOR",
]
