"""User management CLI commands."""

import click
from rich.console import Console
from rich.table import Table

from src.config.constants import ROLE_ADMIN, ROLE_EMPLOYEE
from src.repositories.user_repository import UserRepository

console = Console()


@click.command(name="list-users")
@click.option("--team", "team_id", default=None, help="Only members of this team")
@click.option(
    "--role", type=click.Choice([ROLE_ADMIN, ROLE_EMPLOYEE]), default=None
)
def list_users(team_id, role):
    """List all users."""
    repo = UserRepository()
    users = repo.get_all(team_id=team_id, role=role)

    if not users:
        console.print("[yellow]No users found[/yellow]")
        return

    table = Table(title=f"Users ({len(users)})")
    table.add_column("Telegram ID", style="cyan")
    table.add_column("Name")
    table.add_column("Username")
    table.add_column("Role")
    table.add_column("Team")

    for user in users:
        table.add_row(
            str(user.telegram_id),
            user.display_name,
            f"@{user.username}" if user.username else "-",
            user.role,
            user.team_id or "-",
        )

    console.print(table)


@click.command(name="promote-user")
@click.argument("telegram_id", type=int)
@click.option(
    "--role", type=click.Choice([ROLE_ADMIN, ROLE_EMPLOYEE]), default=ROLE_ADMIN
)
def promote_user(telegram_id, role):
    """Promote user to admin or demote to employee."""
    repo = UserRepository()
    user = repo.get_by_telegram_id(telegram_id)

    if not user:
        console.print(f"[bold red]✗ User not found: {telegram_id}[/bold red]")
        raise click.Abort()

    repo.update_role(telegram_id, role)

    console.print(
        f"[bold green]✓ Updated {user.display_name} to role: {role}[/bold green]"
    )
