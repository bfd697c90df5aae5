"""``jvm setup-path``: put $JAVA_HOME/bin on PATH."""

from __future__ import annotations

from jvm_cli.activation.profile import ensure_java_on_path
from jvm_cli.cli.helpers import command_errors, console


def setup_path() -> None:
    """Add $JAVA_HOME/bin to PATH in your shell profile (user Path on Windows)."""
    with command_errors("setup-path"):
        result = ensure_java_on_path()

    if not result.changed:
        console.print(f"PATH already includes Java in {result.location}.", highlight=False)
        return
    console.print(f"[green]✔[/green] Added to {result.location}:", highlight=False)
    console.print(f"  {result.line}", highlight=False, markup=False)
    console.print("[dim]Open a new shell for the change to take effect.[/dim]")


__all__ = ["setup_path"]
