"""Putting ``$JAVA_HOME/bin`` on the user's PATH.

POSIX shells get one line appended to their startup file; Windows gets
``%JAVA_HOME%\\bin`` appended to the user ``Path`` with ``setx``.  Both are
idempotent: an existing entry is left alone.
"""

from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from jvm_cli.activation.environment import shell_name
from jvm_cli.errors import PrivilegedOperationError, RegistryFilesystemError

logger = logging.getLogger(__name__)

PROFILE_MARKER = "# added by jvm"
POSIX_PATH_LINE = 'export PATH="$JAVA_HOME/bin:$PATH"'
FISH_PATH_LINE = "set -gx PATH $JAVA_HOME/bin $PATH"
WINDOWS_PATH_ENTRY = "%JAVA_HOME%\\bin"

_PROFILE_FILES = {
    "zsh": ".zshrc",
    "bash": ".bashrc",
    "fish": ".config/fish/config.fish",
}


@dataclass(frozen=True)
class PathSetupResult:
    location: str
    line: str
    changed: bool


def profile_path(user_home: Path, shell: Optional[str] = None) -> Path:
    """Startup file for *shell*; ``.bashrc`` when the shell is unknown."""
    return user_home / _PROFILE_FILES.get(shell_name(shell), ".bashrc")


def path_line(shell: Optional[str] = None) -> str:
    return FISH_PATH_LINE if shell_name(shell) == "fish" else POSIX_PATH_LINE


def add_to_shell_profile(user_home: Path, shell: Optional[str] = None) -> PathSetupResult:
    """Append the PATH line to the shell profile unless it is already there.

    Raises:
        RegistryFilesystemError: If the profile cannot be read or written.
    """
    profile = profile_path(user_home, shell)
    line = path_line(shell)
    try:
        profile.parent.mkdir(parents=True, exist_ok=True)
        content = profile.read_text(encoding="utf-8") if profile.exists() else ""
        if line in content:
            return PathSetupResult(location=str(profile), line=line, changed=False)
        prefix = "" if not content or content.endswith("\n") else "\n"
        with open(profile, "a", encoding="utf-8") as handle:
            handle.write(f"{prefix}\n{PROFILE_MARKER}\n{line}\n")
    except OSError as exc:
        raise RegistryFilesystemError(f"Could not update {profile}: {exc}") from exc
    logger.info("Appended PATH line to %s", profile)
    return PathSetupResult(location=str(profile), line=line, changed=True)


def add_to_windows_user_path(current_path: Optional[str] = None) -> PathSetupResult:
    """Append ``%JAVA_HOME%\\bin`` to the user ``Path`` via ``setx``.

    Raises:
        PrivilegedOperationError: If ``setx`` fails.
    """
    current_path = current_path if current_path is not None else os.environ.get("Path", "")
    if WINDOWS_PATH_ENTRY.lower() in current_path.lower():
        return PathSetupResult(location="user Path", line=WINDOWS_PATH_ENTRY, changed=False)

    new_value = f"{current_path};{WINDOWS_PATH_ENTRY}" if current_path else WINDOWS_PATH_ENTRY
    try:
        result = subprocess.run(
            ["setx", "Path", new_value],
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as exc:
        raise PrivilegedOperationError(f"Failed to run setx: {exc}") from exc
    if result.returncode != 0:
        raise PrivilegedOperationError(
            f"setx exited with {result.returncode}: {(result.stderr or '').strip()}"
        )
    return PathSetupResult(location="user Path", line=WINDOWS_PATH_ENTRY, changed=True)


def ensure_java_on_path(
    user_home: Optional[Path] = None, shell: Optional[str] = None
) -> PathSetupResult:
    """Platform dispatch for ``jvm setup-path``."""
    if os.name == "nt":
        return add_to_windows_user_path()
    return add_to_shell_profile(user_home or Path.home(), shell)


__all__ = [
    "FISH_PATH_LINE",
    "POSIX_PATH_LINE",
    "PROFILE_MARKER",
    "PathSetupResult",
    "WINDOWS_PATH_ENTRY",
    "add_to_shell_profile",
    "add_to_windows_user_path",
    "ensure_java_on_path",
    "path_line",
    "profile_path",
]
