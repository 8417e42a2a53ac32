"""Report template CLI commands."""

import click
from rich.console import Console
from rich.table import Table

from src.repositories.team_repository import TeamRepository
from src.services.core.template_registry import template_registry

console = Console()


@click.command(name="list-templates")
@click.option("--fields", "show_fields", is_flag=True, help="Show each template's fields")
def list_templates(show_fields):
    """List catalog templates."""
    templates = template_registry.list_templates()

    table = Table(title=f"Templates ({len(templates)})")
    table.add_column("ID", style="cyan")
    table.add_column("Key")
    table.add_column("Name")
    table.add_column("Fields", justify="right")

    for template in templates:
        table.add_row(
            template.id, template.key or "-", template.name, str(len(template.fields))
        )
    console.print(table)

    if not show_fields:
        return

    for template in templates:
        fields_table = Table(title=template.name)
        fields_table.add_column("Field ID", style="cyan")
        fields_table.add_column("Type")
        fields_table.add_column("Required", justify="center")
        fields_table.add_column("Label")
        for template_field in template.fields:
            fields_table.add_row(
                template_field.id,
                template_field.type,
                "✓" if template_field.required else "",
                template_field.display_label,
            )
        console.print(fields_table)


@click.command(name="sync-templates")
def sync_templates():
    """Store any catalog templates missing from the database."""
    inserted = template_registry.ensure_synced(force=True)
    if inserted:
        console.print(f"[bold green]✓ Stored {inserted} new template(s)[/bold green]")
    else:
        console.print("[green]✓ Templates already in sync[/green]")


@click.command(name="assign-template")
@click.argument("team_id")
@click.argument("template_id", required=False)
@click.option("--clear", is_flag=True, help="Remove the team's template")
def assign_template(team_id, template_id, clear):
    """Assign a report template to a team."""
    if clear:
        resolved_id = None
    elif template_id:
        template = template_registry.get_template(template_id)
        if template is None:
            console.print(f"[bold red]✗ Unknown template: {template_id}[/bold red]")
            raise click.Abort()
        template_registry.ensure_synced()
        resolved_id = template.id
    else:
        console.print("[bold red]✗ Pass a TEMPLATE_ID or --clear[/bold red]")
        raise click.Abort()

    team = TeamRepository().set_template(team_id, resolved_id)
    if team is None:
        console.print(f"[bold red]✗ Team not found: {team_id}[/bold red]")
        raise click.Abort()

    console.print(
        f"[bold green]✓ Team {team.name} now uses: {resolved_id or 'default report form'}[/bold green]"
    )
