"""CLI main entry point."""

import click
from rich.console import Console

from cli.commands.data import import_json, init_database
from cli.commands.health import check_health
from cli.commands.teams import create_team, delete_team, list_teams
from cli.commands.templates import assign_template, list_templates, sync_templates
from cli.commands.users import list_users, promote_user
from cli.commands.webhook import set_webhook
from src import __version__

console = Console()


@click.group()
@click.version_option(version=__version__)
def cli():
    """Team Reports - Telegram Mini App report collection"""
    pass


# Add commands to CLI
cli.add_command(init_database)
cli.add_command(import_json)
cli.add_command(list_users)
cli.add_command(promote_user)
cli.add_command(list_teams)
cli.add_command(create_team)
cli.add_command(delete_team)
cli.add_command(list_templates)
cli.add_command(sync_templates)
cli.add_command(assign_template)
cli.add_command(set_webhook)
cli.add_command(check_health)


if __name__ == "__main__":
    cli()
