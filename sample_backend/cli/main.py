#!/usr/bin/env python3
"""
Command-line entry point for the starter template backend.

Commands:
1. serve            run the API under uvicorn
2. init-db          create the database tables
3. check-layout     verify a template checkout against its documented layout
4. export-manifest  write the default layout manifest for customisation
5. check-deps       verify runtime packages are importable
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
from pydantic import ValidationError as SettingsValidationError
from rich.console import Console
from rich.table import Table

from sample_backend import __version__
from sample_backend.cli import check_deps
from sample_backend.core.config import get_settings, load_config, save_config
from sample_backend.core.db import create_engine_for_url, init_db
from sample_backend.core.exceptions import AppError
from sample_backend.core.layout import DEFAULT_MANIFEST, check_layout
from sample_backend.core.logging_setup import parse_level, setup_logging

console = Console()
logger = logging.getLogger(__name__)


def print_banner():
    """Print the project banner."""
    console.print(f"[bold blue]sample-backend[/bold blue] {__version__}  full-stack starter API")


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable verbose output.")
@click.option("--debug", is_flag=True, default=False, help="Enable debug mode with additional logging.")
@click.version_option(__version__, prog_name="sample-backend")
@click.pass_context
def main(ctx: click.Context, verbose: bool, debug: bool):
    """Manage the backend of the full-stack starter template."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    setup_logging(level)


@main.command()
@click.option("--host", default="127.0.0.1", show_default=True, help="Interface to bind.")
@click.option("--port", "-p", default=8000, show_default=True, type=int, help="Port to bind.")
@click.option("--reload", is_flag=True, default=False, help="Reload on code changes.")
def serve(host: str, port: int, reload: bool):
    """Run the API server."""
    import uvicorn

    try:
        settings = get_settings()
    except (AppError, SettingsValidationError) as e:
        console.print(f"[bold red]Configuration error:[/bold red] {e}")
        raise SystemExit(1) from e

    # Settings decide the level once the server owns the process
    setup_logging(parse_level(settings.log_level), settings.log_file)
    print_banner()
    console.print(f"  Environment: {settings.app_env}")
    console.print(f"  Listening on http://{host}:{port}{settings.api_prefix}")

    uvicorn.run(
        "sample_backend.api.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_config=None,
    )


@main.command("init-db")
def init_db_command():
    """Create all database tables."""
    try:
        settings = get_settings()
        engine = create_engine_for_url(settings.database_url)
        init_db(engine)
    except (AppError, SettingsValidationError) as e:
        console.print(f"[bold red]Configuration error:[/bold red] {e}")
        raise SystemExit(1) from e
    engine.dispose()
    console.print(f"[bold green]Database ready:[/bold green] {settings.database_url}")


@main.command("check-layout")
@click.argument("root", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option(
    "--manifest",
    "-m",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=DEFAULT_MANIFEST,
    help="Layout manifest (YAML). Defaults to the bundled template layout.",
)
@click.pass_context
def check_layout_command(ctx: click.Context, root: Path, manifest: Path):
    """Verify ROOT matches the documented template layout."""
    try:
        report = check_layout(root, manifest)
    except AppError as e:
        console.print(f"\n[bold red]Manifest error:[/bold red] {e.message}")
        logger.exception("Invalid layout manifest")
        if ctx.obj.get("debug"):
            raise
        raise SystemExit(1) from e

    if report.ok:
        console.print(f"[bold green]Layout OK[/bold green] ({report.checked} entries checked)")
        return

    table = Table(title=f"Layout issues in {report.root}")
    table.add_column("Kind", style="red")
    table.add_column("Path")
    table.add_column("Problem")
    for issue in report.issues:
        table.add_row(issue.kind, issue.path, issue.message)
    console.print(table)
    console.print(f"[bold red]{len(report.issues)} issue(s)[/bold red] in {report.checked} entries")
    raise SystemExit(1)


@main.command("export-manifest")
@click.argument("destination", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--force", is_flag=True, default=False, help="Overwrite an existing file.")
def export_manifest(destination: Path, force: bool):
    """Write the bundled layout manifest to DESTINATION."""
    if destination.exists() and not force:
        console.print(f"[bold red]Refusing to overwrite[/bold red] {destination} (use --force)")
        raise SystemExit(1)
    save_config(load_config(DEFAULT_MANIFEST), destination)
    console.print(f"[bold green]Manifest written:[/bold green] {destination}")


@main.command("check-deps")
def check_deps_command():
    """Verify every runtime package can be imported."""
    raise SystemExit(check_deps.main())


if __name__ == "__main__":
    main()
