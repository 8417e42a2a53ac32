"""Database setup and legacy data import CLI commands."""

import json
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from src.config.database import init_db
from src.config.settings import settings
from src.services.core.legacy_import import LegacyImportService
from src.services.core.template_registry import template_registry

console = Console()


@click.command(name="init-db")
def init_database():
    """Create tables and store the template catalog."""
    init_db()
    inserted = template_registry.ensure_synced(force=True)
    console.print(
        f"[bold green]✓ Database initialized ({inserted} template(s) stored)[/bold green]"
    )


@click.command(name="import-json")
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory with users.json, teams.json, reports.json (default: DATA_DIR)",
)
def import_json(data_dir):
    """Import the legacy JSON file store."""
    data_dir = data_dir or Path(settings.DATA_DIR)
    if not data_dir.is_dir():
        console.print(f"[bold red]✗ Not a directory: {data_dir}[/bold red]")
        raise click.Abort()

    console.print(f"[bold blue]Importing from {data_dir}...[/bold blue]\n")
    try:
        result = LegacyImportService().import_directory(data_dir)
    except (json.JSONDecodeError, ValueError, KeyError) as e:
        console.print(f"[bold red]✗ Import failed: {e}[/bold red]")
        raise click.Abort()

    table = Table(title="Import Results")
    table.add_column("Entity", style="cyan")
    table.add_column("Imported", justify="right")
    table.add_column("Skipped", justify="right")
    for entity in ("teams", "users", "reports"):
        table.add_row(
            entity.title(),
            str(result.imported[entity]),
            str(result.skipped[entity]),
        )
    console.print(table)

    if result.placeholders:
        console.print(
            f"[yellow]⚠ Created {result.placeholders} placeholder user(s) for report authors[/yellow]"
        )
