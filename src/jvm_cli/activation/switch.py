"""Switching the active build."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from jvm_cli.activation.environment import PrivilegedEnvironment, export_command
from jvm_cli.core.constants import JAVA_HOME_VAR
from jvm_cli.errors import PrivilegedOperationError
from jvm_cli.registry.models import BuildIdentifier
from jvm_cli.registry.store import RegistryStore

logger = logging.getLogger(__name__)


class EffectKind(str, Enum):
    PERSISTED = "persisted"
    SHELL = "shell"


@dataclass(frozen=True)
class EnvironmentEffect:
    """What activation did (or asks the user to do) about ``JAVA_HOME``.

    ``PERSISTED``: the variable was written machine-wide; ``succeeded`` tells
    whether the elevated call worked and ``command`` is the manual fallback.
    ``SHELL``: nothing was persisted; the user must evaluate ``command``.
    """

    kind: EffectKind
    variable: str
    value: str
    command: str
    succeeded: bool = True
    message: str = ""


def activate(
    store: RegistryStore,
    build: BuildIdentifier,
    *,
    privileged: Optional[PrivilegedEnvironment] = None,
    shell: Optional[str] = None,
) -> EnvironmentEffect:
    """Point the active pointer at *build* and report the environment effect.

    Activating the already-active build is harmless and yields the same
    state.

    Raises:
        BuildNotFoundError: If *build* is not installed.
        ActivationError: If the pointer cannot be replaced.
    """
    with store.locked():
        target_path = store.set_active(build.name)

    if privileged is None:
        value = str(store.current_link)
        return EnvironmentEffect(
            kind=EffectKind.SHELL,
            variable=JAVA_HOME_VAR,
            value=value,
            command=export_command(JAVA_HOME_VAR, value, shell),
        )

    value = str(target_path)
    command = privileged.describe(JAVA_HOME_VAR, value)
    try:
        privileged.set_variable(JAVA_HOME_VAR, value)
    except PrivilegedOperationError as exc:
        logger.warning("Persisting %s failed: %s", JAVA_HOME_VAR, exc)
        return EnvironmentEffect(
            kind=EffectKind.PERSISTED,
            variable=JAVA_HOME_VAR,
            value=value,
            command=command,
            succeeded=False,
            message=str(exc),
        )
    return EnvironmentEffect(
        kind=EffectKind.PERSISTED,
        variable=JAVA_HOME_VAR,
        value=value,
        command=command,
    )


__all__ = ["EffectKind", "EnvironmentEffect", "activate"]
