"""Report which runtime packages the backend can import.

Backs ``sample-backend check-deps``: prints one table row per package and
returns a non-zero exit code when anything is unavailable.
"""

from __future__ import annotations

import importlib
import sys
from typing import Optional

from rich.console import Console
from rich.table import Table

# import name -> distribution name on the package index
PACKAGES: dict[str, str] = {
    "fastapi": "fastapi",
    "uvicorn": "uvicorn",
    "pydantic": "pydantic",
    "pydantic_settings": "pydantic-settings",
    "sqlmodel": "sqlmodel",
    "sqlalchemy": "sqlalchemy",
    "yaml": "pyyaml",
    "rich": "rich",
    "click": "click",
}


def find_missing(packages: dict[str, str] = PACKAGES) -> dict[str, str]:
    """Return the subset of ``packages`` that cannot be imported."""
    missing = {}
    for mod, dist in packages.items():
        try:
            importlib.import_module(mod)
        except ImportError:
            missing[mod] = dist
    return missing


def main(packages: dict[str, str] = PACKAGES, console: Optional[Console] = None) -> int:
    console = console or Console()
    missing = find_missing(packages)

    table = Table(title="Runtime packages")
    table.add_column("Package")
    table.add_column("Import")
    table.add_column("Version")
    for mod, dist in packages.items():
        if mod in missing:
            table.add_row(f"[red]{dist}[/red]", mod, "[bold red]not installed[/bold red]")
        else:
            version = getattr(sys.modules[mod], "__version__", "unknown")
            table.add_row(f"[green]{dist}[/green]", mod, str(version))
    console.print(table)

    if missing:
        names = " ".join(sorted(set(missing.values())))
        console.print(f"[bold red]{len(missing)} package(s) unavailable.[/bold red] Install with: pip install {names}")
        return 1

    console.print("[bold green]All runtime packages importable[/bold green]")
    return 0


if __name__ == "__main__":
    sys.exit(main())
