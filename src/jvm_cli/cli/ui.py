"""Rich console helpers for jvm commands."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Dict, Iterator, Optional

import readchar
import typer
from rich.console import Console
from rich.live import Live
from rich.markup import escape
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TransferSpeedColumn,
)
from rich.table import Table
from rich.tree import Tree

from jvm_cli.install.download import ProgressCallback

console = Console()
err_console = Console(stderr=True)


class StepTracker:
    """Track install steps and render them as a Rich tree."""

    _SYMBOLS = {
        "pending": "[green dim]○[/green dim]",
        "running": "[cyan]○[/cyan]",
        "done": "[green]●[/green]",
        "error": "[red]●[/red]",
    }

    def __init__(self, title: str):
        self.title = title
        self.steps: list[dict[str, str]] = []

    def add(self, key: str, label: str) -> None:
        if key not in [s["key"] for s in self.steps]:
            self.steps.append({"key": key, "label": label, "status": "pending", "detail": ""})

    def start(self, key: str, detail: str = "") -> None:
        self._update(key, "running", detail)

    def complete_running(self) -> None:
        for step in self.steps:
            if step["status"] == "running":
                step["status"] = "done"

    def fail_running(self, *, exclude: tuple[str, ...] = ()) -> None:
        for step in self.steps:
            if step["status"] == "running" and step["key"] not in exclude:
                step["status"] = "error"

    def _update(self, key: str, status: str, detail: str) -> None:
        for step in self.steps:
            if step["key"] == key:
                step["status"] = status
                if detail:
                    step["detail"] = detail
                return
        self.steps.append({"key": key, "label": key, "status": status, "detail": detail})

    def render(self) -> Tree:
        tree = Tree(f"[cyan]{self.title}[/cyan]", guide_style="grey50")
        for step in self.steps:
            symbol = self._SYMBOLS.get(step["status"], " ")
            detail = step["detail"].strip()
            if step["status"] == "pending":
                line = f"{symbol} [bright_black]{step['label']}[/bright_black]"
            elif detail:
                line = f"{symbol} [white]{step['label']}[/white] [bright_black]({detail})[/bright_black]"
            else:
                line = f"{symbol} [white]{step['label']}[/white]"
            tree.add(line)
        return tree


@contextmanager
def download_progress(enabled: bool = True) -> Iterator[Optional[ProgressCallback]]:
    """Yield a progress callback backed by a Rich progress bar, or None."""
    if not enabled:
        yield None
        return

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        DownloadColumn(),
        TransferSpeedColumn(),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Downloading...", total=None)

        def update(downloaded: int, total: int) -> None:
            progress.update(task, completed=downloaded, total=total or None)

        yield update


def print_error(message: str, *, title: Optional[str] = None) -> None:
    """Print a failure the way every command reports it."""
    if title:
        err_console.print(Panel(escape(message), title=title, border_style="red"))
    else:
        err_console.print(f"[red]Error:[/red] {escape(message)}")


def get_key() -> str:
    """Get a single keypress in a cross-platform way using readchar."""
    key = readchar.readkey()

    if key == readchar.key.UP or key == readchar.key.CTRL_P:
        return "up"
    if key == readchar.key.DOWN or key == readchar.key.CTRL_N:
        return "down"
    if key == readchar.key.ENTER:
        return "enter"
    if key == readchar.key.ESC or key == "\x1b":
        return "escape"
    if key == readchar.key.CTRL_C:
        raise KeyboardInterrupt
    return key


def select_with_arrows(
    options: Dict[str, str],
    prompt_text: str = "Select a build",
    default_key: str | None = None,
) -> str:
    """Interactive selection using arrow keys with Rich Live display."""
    option_keys = list(options.keys())
    selected_index = option_keys.index(default_key) if default_key in option_keys else 0

    def create_selection_panel() -> Panel:
        table = Table.grid(padding=(0, 2))
        table.add_column(style="cyan", justify="left", width=3)
        table.add_column(style="white", justify="left")
        for i, key in enumerate(option_keys):
            pointer = "▶" if i == selected_index else " "
            table.add_row(pointer, f"[cyan]{key}[/cyan] [dim]({options[key]})[/dim]")
        table.add_row("", "")
        table.add_row("", "[dim]Use ↑/↓ to navigate, Enter to select, Esc to cancel[/dim]")
        return Panel(
            table,
            title=f"[bold]{prompt_text}[/bold]",
            border_style="cyan",
            padding=(1, 2),
        )

    console.print()
    with Live(create_selection_panel(), console=console, transient=True, auto_refresh=False) as live:
        while True:
            try:
                key = get_key()
            except KeyboardInterrupt:
                console.print("\n[yellow]Selection cancelled[/yellow]")
                raise typer.Exit(1)
            if key == "up":
                selected_index = (selected_index - 1) % len(option_keys)
            elif key == "down":
                selected_index = (selected_index + 1) % len(option_keys)
            elif key == "enter":
                return option_keys[selected_index]
            elif key == "escape":
                console.print("\n[yellow]Selection cancelled[/yellow]")
                raise typer.Exit(1)
            live.update(create_selection_panel(), refresh=True)


__all__ = [
    "StepTracker",
    "console",
    "download_progress",
    "err_console",
    "get_key",
    "print_error",
    "select_with_arrows",
]
