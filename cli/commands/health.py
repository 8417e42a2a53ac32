"""Health check CLI command."""

import json

import click
from rich.console import Console
from rich.table import Table

from src.services.core.health_check import HealthCheckService

console = Console()


@click.command(name="check-health")
@click.option("--json", "as_json", is_flag=True, help="Print the raw result as JSON")
def check_health(as_json):
    """Check database, bot, template and Google Sheets status.

    Exits with status 1 when any check fails.
    """
    result = HealthCheckService().check_all()
    healthy = result["status"] == "healthy"

    if as_json:
        click.echo(json.dumps(result, indent=2))
    else:
        _print_report(result, healthy)

    if not healthy:
        raise SystemExit(1)


def _print_report(result: dict, healthy: bool):
    if healthy:
        console.print("[bold green]✓ System Status: HEALTHY[/bold green]\n")
    else:
        console.print("[bold yellow]⚠ System Status: UNHEALTHY[/bold yellow]\n")

    table = Table(title="Health Check Results")
    table.add_column("Component", style="cyan")
    table.add_column("Status", justify="center")
    table.add_column("Message")

    for name, check in result["checks"].items():
        mark = "[green]✓[/green]" if check["healthy"] else "[red]✗[/red]"
        table.add_row(name.replace("_", " ").title(), mark, check["message"])

    console.print(table)
