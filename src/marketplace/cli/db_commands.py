"""Schema management commands."""

import typer
from rich.console import Console
from rich.prompt import Confirm

from src.marketplace.core.services import DbManageService
from src.marketplace.runtime.context import get_config
from src.marketplace.runtime.init_db import init_db

console = Console()

db_app = typer.Typer(help="Create or drop the marketplace schema")


@db_app.command("init")
def init() -> None:
    """Create every table that does not exist yet."""
    init_db()
    console.print("[green]Database initialized[/green]")


@db_app.command("drop")
def drop(
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation prompt"),
) -> None:
    """Drop every marketplace table."""
    if get_config().app.is_production:
        console.print("[red]Refusing to drop tables in production[/red]")
        raise typer.Exit(code=1)
    if not force and not Confirm.ask("Drop all tables? This deletes every row"):
        console.print("[yellow]Aborted[/yellow]")
        raise typer.Exit()
    DbManageService().drop_all()
    console.print("[green]All tables dropped[/green]")
