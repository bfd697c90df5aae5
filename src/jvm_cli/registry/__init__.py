"""Installed builds and the active pointer."""

from .models import BuildIdentifier, strip_family, version_extends
from .store import RegistryStore, RemovalResult

__all__ = [
    "BuildIdentifier",
    "RegistryStore",
    "RemovalResult",
    "strip_family",
    "version_extends",
]
