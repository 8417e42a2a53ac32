"""Telegram webhook CLI command."""

import asyncio

import click
from rich.console import Console

from src.services.core.telegram_bot import TelegramBotService

console = Console()


@click.command(name="set-webhook")
@click.argument("url")
def set_webhook(url):
    """Point the bot's webhook at URL (e.g. https://example.com/webhook)."""
    if not url.startswith("https://"):
        console.print("[bold red]✗ Telegram requires an https:// webhook URL[/bold red]")
        raise click.Abort()

    ok = asyncio.run(TelegramBotService().set_webhook(url))
    if not ok:
        console.print("[bold red]✗ Telegram rejected the webhook[/bold red]")
        raise click.Abort()

    console.print(f"[bold green]✓ Webhook set to {url}[/bold green]")
