"""CLI command modules for jvm.

Each module holds one command (or a few closely related read-only ones);
``jvm_cli.register_commands`` wires them onto the Typer app.
"""

from .install import install
from .listing import current, list_builds, vendors
from .setup_path import setup_path
from .uninstall import uninstall
from .use import use

__all__ = [
    "current",
    "install",
    "list_builds",
    "setup_path",
    "uninstall",
    "use",
    "vendors",
]
