#!/usr/bin/env python3
"""
jvm - manage multiple Java (JDK) installations side by side.

Usage:
    jvm install 21
    jvm install 17 temurin
    eval "$(jvm use 21)"
    jvm list --verbose
"""

from __future__ import annotations

import logging

import typer
from rich.logging import RichHandler

from jvm_cli.cli.commands import current, install, list_builds, setup_path, uninstall, use, vendors
from jvm_cli.cli.ui import console, err_console

__version__ = "1.0.0"

app = typer.Typer(
    name="jvm",
    help="Install Java versions and switch between them",
    add_completion=False,
    no_args_is_help=True,
)


@app.callback()
def callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging on stderr"),
) -> None:
    """Install Java versions and switch between them."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(console=err_console, show_path=False)],
            force=True,
        )
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)


def version() -> None:
    """Print the jvm version."""
    console.print(f"jvm {__version__}", highlight=False)


# (command, primary name, alias)
_COMMANDS = [
    (version, "version", "v"),
    (list_builds, "list", "ls"),
    (current, "current", None),
    (use, "use", "u"),
    (install, "install", "i"),
    (uninstall, "uninstall", "rm"),
    (vendors, "vendors", None),
    (setup_path, "setup-path", None),
]


def register_commands(target: typer.Typer) -> None:
    """Attach every command, plus its short alias as a hidden duplicate."""
    for func, name, alias in _COMMANDS:
        target.command(name=name)(func)
        if alias:
            target.command(name=alias, hidden=True)(func)


register_commands(app)


def main():
    app()


if __name__ == "__main__":
    main()
