"""``jvm use``: switch the active JDK build."""

from __future__ import annotations

import sys
from typing import Optional

import typer

from jvm_cli.activation.switch import EffectKind
from jvm_cli.cli.helpers import command_errors, console, load_service
from jvm_cli.cli.ui import err_console, print_error, select_with_arrows


def use(
    version: Optional[str] = typer.Argument(
        None,
        help="Build name, version prefix or range (e.g. 17, 17.0, jdk-17.0.2, '^21')",
    ),
) -> None:
    """Switch the active JDK version.

    On macOS/Linux the JAVA_HOME export is printed on stdout so it can be
    evaluated: eval "$(jvm use 21)".
    """
    service = load_service()

    if version is None:
        listings = service.list_builds()
        if not listings:
            print_error("No versions installed yet.")
            raise typer.Exit(1)
        if not sys.stdin.isatty():
            print_error("Missing version argument.")
            raise typer.Exit(1)
        options = {listing.build.name: listing.path for listing in listings}
        active = next((listing.build.name for listing in listings if listing.active), None)
        version = select_with_arrows(options, "Select a JDK build", default_key=active)

    with command_errors("use"):
        if not service.store.list_builds():
            print_error("No versions installed yet.")
            raise typer.Exit(1)
        result = service.use(version)

    effect = result.effect
    if effect.kind is EffectKind.SHELL:
        err_console.print(f"[green]✔[/green] Now using {result.build.name}", highlight=False)
        console.print(effect.command, highlight=False, markup=False, soft_wrap=True)
        return

    if effect.succeeded:
        console.print(
            f"[green]✔[/green] Now using {result.build.name}; "
            f"{effect.variable} set to {effect.value} (machine-wide)",
            highlight=False,
        )
        return

    print_error(
        f"Switched to {result.build.name}, but setting {effect.variable} failed: {effect.message}\n"
        f"Run as Administrator: {effect.command}"
    )
    raise typer.Exit(1)


__all__ = ["use"]
