"""Active build switching and environment integration."""

from .environment import (
    PrivilegedEnvironment,
    WindowsMachineEnvironment,
    default_privileged_environment,
    export_command,
)
from .profile import PathSetupResult, ensure_java_on_path
from .switch import EffectKind, EnvironmentEffect, activate

__all__ = [
    "EffectKind",
    "EnvironmentEffect",
    "PathSetupResult",
    "PrivilegedEnvironment",
    "WindowsMachineEnvironment",
    "activate",
    "default_privileged_environment",
    "ensure_java_on_path",
    "export_command",
]
