"""Team management CLI commands."""

import click
from rich.console import Console
from rich.table import Table

from src.exceptions import ConstraintViolationError
from src.repositories.report_repository import ReportRepository
from src.repositories.team_repository import TeamRepository
from src.services.core.template_registry import template_registry

console = Console()


@click.command(name="list-teams")
def list_teams():
    """List all teams with member and report counts."""
    repo = TeamRepository()
    teams = repo.get_all()

    if not teams:
        console.print("[yellow]No teams found[/yellow]")
        return

    report_counts = ReportRepository().count_by_team()

    table = Table(title=f"Teams ({len(teams)})")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Template")
    table.add_column("Members", justify="right")
    table.add_column("Reports", justify="right")

    for team in teams:
        template = template_registry.get_template(team.template_id)
        table.add_row(
            team.id,
            team.name,
            template.name if template else (team.template_id or "-"),
            str(len(repo.get_members(team.id))),
            str(report_counts.get(team.id, 0)),
        )

    console.print(table)


@click.command(name="create-team")
@click.argument("name")
@click.option("--created-by", type=int, required=True, help="Creator's Telegram ID")
@click.option("--description", default="", help="Team description")
@click.option("--template", "template_id", default=None, help="Template ID or key")
def create_team(name, created_by, description, template_id):
    """Create a team."""
    if template_id:
        template = template_registry.get_template(template_id)
        if template is None:
            console.print(f"[bold red]✗ Unknown template: {template_id}[/bold red]")
            raise click.Abort()
        template_registry.ensure_synced()
        template_id = template.id

    try:
        team = TeamRepository().create(
            name=name,
            created_by=created_by,
            description=description,
            template_id=template_id,
        )
    except ConstraintViolationError as e:
        console.print(f"[bold red]✗ {e}[/bold red]")
        raise click.Abort()

    console.print(f"[bold green]✓ Created team {team.name} ({team.id})[/bold green]")


@click.command(name="delete-team")
@click.argument("team_id")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
def delete_team(team_id, yes):
    """Delete a team; its members become unassigned."""
    repo = TeamRepository()
    team = repo.get_by_id(team_id)

    if not team:
        console.print(f"[bold red]✗ Team not found: {team_id}[/bold red]")
        raise click.Abort()

    if not yes:
        click.confirm(f"Delete team '{team.name}'?", abort=True)

    repo.delete(team_id)
    console.print(f"[bold green]✓ Deleted team {team.name}[/bold green]")
