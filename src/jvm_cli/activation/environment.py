"""Making ``JAVA_HOME`` visible to the user's shells.

A child process cannot change its parent shell's environment.  On Windows
the variable is persisted machine-wide with an elevated ``setx``; elsewhere
the caller prints a command for the user to evaluate.
"""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import PurePath
from typing import Optional, Protocol

from jvm_cli.errors import PrivilegedOperationError

logger = logging.getLogger(__name__)


class PrivilegedEnvironment(Protocol):
    """Capability to persist an environment variable for new sessions."""

    def describe(self, name: str, value: str) -> str:
        """Return the equivalent command a user could run by hand."""
        ...

    def set_variable(self, name: str, value: str) -> None:
        """Persist *name*; raise :class:`PrivilegedOperationError` on failure."""
        ...


class WindowsMachineEnvironment:
    """Runs ``setx /M`` through an elevated ``cmd`` started by PowerShell."""

    def __init__(self, *, timeout: float = 120.0) -> None:
        self.timeout = timeout

    def describe(self, name: str, value: str) -> str:
        return f'setx /M {name} "{value}"'

    def build_command(self, name: str, value: str) -> list[str]:
        setx = self.describe(name, value)
        script = (
            f"$p = Start-Process cmd -ArgumentList '/c {setx}' -Verb RunAs -Wait -PassThru; "
            "exit $p.ExitCode"
        )
        return ["powershell", "-NoProfile", "-Command", script]

    def set_variable(self, name: str, value: str) -> None:
        command = self.build_command(name, value)
        logger.debug("Running elevated: %s", command)
        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as exc:
            raise PrivilegedOperationError(f"Failed to run setx: {exc}") from exc
        if result.returncode != 0:
            detail = (result.stderr or result.stdout or "").strip()
            raise PrivilegedOperationError(
                f"setx exited with {result.returncode} (run the terminal as Administrator)"
                + (f": {detail}" if detail else "")
            )


def default_privileged_environment() -> Optional[PrivilegedEnvironment]:
    """Return the host's privileged capability, or None where there is none."""
    if os.name == "nt":
        return WindowsMachineEnvironment()
    return None


def shell_name(shell: Optional[str] = None) -> str:
    """Basename of *shell* or ``$SHELL`` (``/usr/bin/zsh`` -> ``zsh``)."""
    shell = shell if shell is not None else os.environ.get("SHELL", "")
    return PurePath(shell).name.lower() if shell else ""


def export_command(name: str, value: str, shell: Optional[str] = None) -> str:
    """Shell-specific command that sets *name* to *value* in the current shell."""
    kind = shell_name(shell)
    if kind == "fish":
        return f'set -gx {name} "{value}"'
    if kind in ("pwsh", "powershell", "pwsh.exe", "powershell.exe"):
        return f'$env:{name} = "{value}"'
    return f'export {name}="{value}"'


__all__ = [
    "PrivilegedEnvironment",
    "WindowsMachineEnvironment",
    "default_privileged_environment",
    "export_command",
    "shell_name",
]
