"""``jvm uninstall``: remove an installed JDK build."""

from __future__ import annotations

import typer

from jvm_cli.cli.helpers import command_errors, console, load_service


def uninstall(
    version: str = typer.Argument(..., help="Build name, version prefix or range to remove"),
) -> None:
    """Remove an installed JDK from ~/.jvm/versions/."""
    service = load_service()
    with command_errors("uninstall"):
        removal = service.uninstall(version)

    console.print(f"[green]✔[/green] {removal.build.name} uninstalled successfully.", highlight=False)
    if removal.pointer_cleared:
        console.print("[yellow]Current version unset.[/yellow] Run 'jvm use <version>' to pick another.")


__all__ = ["uninstall"]
