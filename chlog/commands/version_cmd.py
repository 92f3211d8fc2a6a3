"""Version information command."""

from __future__ import annotations

import platform
import sys

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .. import __version__


def version_info() -> dict[str, str]:
    return {
        "Version": __version__,
        "Python": platform.python_version(),
        "Platform": f"{sys.platform}/{platform.machine()}",
    }


def run_version(plain: bool = False) -> int:
    info = version_info()
    if plain:
        print(f"chlog {info['Version']}")
        print(f"python: {info['Python']}")
        print(f"platform: {info['Platform']}")
        return 0

    table = Table.grid(padding=(0, 2))
    table.add_column(style="yellow", justify="right")
    table.add_column(style="bold")
    for label, value in info.items():
        table.add_row(label, value)

    console = Console()
    console.print(Panel(table, title="[bold cyan]chlog[/]", subtitle="YAML-first changelog management", expand=False))
    return 0
