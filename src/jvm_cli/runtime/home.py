"""Home directory discovery for the jvm CLI.

Provides the canonical function for locating the user-global ``~/.jvm/``
directory that holds installed builds and the active pointer.
"""

from __future__ import annotations

import os
from pathlib import Path

JVM_HOME_ENV = "JVM_HOME"


def get_jvm_home() -> Path:
    """Return the path to the user-global ``~/.jvm/`` directory.

    Resolution order:
    1. ``JVM_HOME`` environment variable (all platforms)
    2. ``~/.jvm/`` (``Path.home() / ".jvm"``)

    ``JVM_HOME`` names the manager's own directory, not a JDK; ``JAVA_HOME``
    is what activation points at the selected build.

    Returns:
        Path: Absolute path to the jvm home directory.
    """
    if env_home := os.environ.get(JVM_HOME_ENV):
        return Path(env_home).expanduser()

    return Path.home() / ".jvm"
