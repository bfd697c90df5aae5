"""``jvm install``: download and unpack a vendor JDK."""

from __future__ import annotations

from typing import Optional

import typer

from jvm_cli.cli.helpers import command_errors, console, load_service
from jvm_cli.cli.ui import StepTracker, download_progress

_STEP_LABELS = {
    "download": "Download archive",
    "extract": "Extract archive",
    "publish": "Publish build",
    "cleanup": "Remove staging files",
}


def install(
    version: Optional[str] = typer.Argument(
        None, help="Version to install (e.g. 21, 17.0.2); defaults to the configured version"
    ),
    vendor: Optional[str] = typer.Argument(
        None, help="Vendor to download from (see 'jvm vendors'); defaults to the configured vendor"
    ),
    progress: bool = typer.Option(True, "--progress/--no-progress", help="Show a download progress bar"),
) -> None:
    """Download and install a JDK into ~/.jvm/versions/."""
    service = load_service()
    version = version or service.config.default_version
    vendor = vendor or service.config.default_vendor

    tracker = StepTracker(f"Install {vendor} {version}")
    for key, label in _STEP_LABELS.items():
        tracker.add(key, label)

    def on_step(step: str, detail: str) -> None:
        # cleanup runs in a finally block, so the step before it may have failed
        if step != "cleanup":
            tracker.complete_running()
        tracker.start(step, detail)

    console.print(f"[cyan]Resolving {vendor} {version}...[/cyan]", highlight=False)
    try:
        with command_errors("install"), download_progress(progress) as on_progress:
            result = service.install(version, vendor, on_progress=on_progress, on_step=on_step)
    except typer.Exit:
        tracker.fail_running(exclude=("cleanup",))
        tracker.complete_running()
        if any(step["status"] != "pending" for step in tracker.steps):
            console.print(tracker.render())
        raise

    if result.already_installed:
        console.print(f"{result.build.name} is already installed.", highlight=False)
        return

    tracker.complete_running()
    if result.descriptor is not None:
        for notice in result.descriptor.notices:
            console.print(f"[yellow]⚠[/yellow]  {notice}", highlight=False)
    console.print(tracker.render())
    console.print(
        f"[green]✔[/green] Installed {result.build.name} into {result.path}",
        highlight=False,
    )
    console.print(f"[dim]To activate it, run: jvm use \"{result.build.name}\"[/dim]", highlight=False)


__all__ = ["install"]
