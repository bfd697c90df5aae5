"""Command-line layer: Typer commands and Rich output helpers."""
