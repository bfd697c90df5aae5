"""Shared plumbing for jvm commands: service construction and error reporting."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

import typer

from jvm_cli.cli.ui import console, print_error
from jvm_cli.config import load_config
from jvm_cli.errors import JvmError, NetworkError
from jvm_cli.runtime.home import get_jvm_home
from jvm_cli.service import JvmService

logger = logging.getLogger(__name__)


def load_service() -> JvmService:
    """Build the service for the current home, exiting on a bad config."""
    try:
        config = load_config(get_jvm_home())
    except JvmError as exc:
        print_error(str(exc))
        raise typer.Exit(1)
    logger.debug("Using jvm home %s", config.home)
    return JvmService(config)


@contextmanager
def command_errors(action: str) -> Iterator[None]:
    """Turn :class:`JvmError` into a red message and exit status 1."""
    try:
        yield
    except NetworkError as exc:
        print_error(str(exc), title=f"Network error during {action}")
        raise typer.Exit(1)
    except JvmError as exc:
        logger.debug("%s failed", action, exc_info=True)
        print_error(str(exc))
        raise typer.Exit(1)


__all__ = ["command_errors", "console", "load_service"]
