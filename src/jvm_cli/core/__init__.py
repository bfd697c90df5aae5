"""Core constants for the jvm CLI."""

from .constants import (
    CONFIG_FILE,
    CURRENT_LINK,
    DEFAULT_VENDOR,
    FAMILY,
    FAMILY_PREFIX,
    JAVA_HOME_VAR,
    LOCK_FILE,
    STAGING_DIR,
    VERSIONS_DIR,
)

__all__ = [
    "CONFIG_FILE",
    "CURRENT_LINK",
    "DEFAULT_VENDOR",
    "FAMILY",
    "FAMILY_PREFIX",
    "JAVA_HOME_VAR",
    "LOCK_FILE",
    "STAGING_DIR",
    "VERSIONS_DIR",
]
