"""Read-only commands: ``list``, ``current`` and ``vendors``."""

from __future__ import annotations

import typer

from jvm_cli.cli.helpers import command_errors, console, load_service
from jvm_cli.vendors import VENDORS


def list_builds(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Also show the installation path"),
) -> None:
    """List installed JDK builds."""
    service = load_service()
    with command_errors("list"):
        listings = service.list_builds()

    if not listings:
        console.print("No versions installed yet.")
        return

    for listing in listings:
        marker = "[green]*[/green] " if listing.active else "  "
        line = f"{marker}{listing.build.name}"
        if verbose:
            line += f"  [dim](path: {listing.path})[/dim]"
        if listing.active:
            line += "  [green](current)[/green]"
        console.print(line, highlight=False)


def current() -> None:
    """Show the active JDK build."""
    service = load_service()
    with command_errors("current"):
        active = service.current()
    if active is None:
        console.print("No active version. Run 'jvm use <version>' to select one.")
        raise typer.Exit(1)
    console.print(active.name, highlight=False)


def vendors() -> None:
    """List the vendors 'jvm install' can download from."""
    service = load_service()
    for name, vendor_cls in VENDORS.items():
        default = "  [dim](default)[/dim]" if name == service.config.default_vendor else ""
        console.print(f"[cyan]{name}[/cyan]  {vendor_cls.label}{default}", highlight=False)


__all__ = ["current", "list_builds", "vendors"]
