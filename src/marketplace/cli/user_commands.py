"""Account management commands run directly against the database."""

import typer
from rich.console import Console
from rich.table import Table
from sqlmodel import col, select

from src.marketplace.core.exceptions import NotFoundError
from src.marketplace.core.services import DbSessionService, VendorModerationService
from src.marketplace.entities.core.user import User, UserRepository, UserRole
from src.marketplace.entities.core.user.table import UserTable

console = Console()

users_app = typer.Typer(help="Manage marketplace accounts")


@users_app.command("list")
def list_users(
    role: UserRole | None = typer.Option(None, "--role", "-r", help="Only show this role"),
    limit: int = typer.Option(50, "--limit", "-l", help="Maximum number of users to show"),
) -> None:
    """List accounts, oldest first."""
    with DbSessionService().session_scope() as session:
        statement = select(UserTable).order_by(col(UserTable.created_at)).limit(limit)
        if role is not None:
            statement = statement.where(UserTable.role == role)
        rows = session.exec(statement).all()

        if not rows:
            console.print("[yellow]No users found[/yellow]")
            return

        table = Table(title="Users")
        table.add_column("ID", style="cyan")
        table.add_column("Username", style="green")
        table.add_column("Phone", style="blue")
        table.add_column("Role", style="magenta")
        table.add_column("Verified", style="yellow")
        table.add_column("Suspended", style="red")
        for row in rows:
            table.add_row(
                row.id,
                row.username,
                row.phone_number or "",
                str(row.role),
                "yes" if row.is_verified else "no",
                "yes" if row.deleted_at else "no",
            )
        console.print(table)


@users_app.command("create-admin")
def create_admin(
    username: str = typer.Argument(..., help="Username for the administrator"),
    phone_number: str = typer.Option(..., "--phone", "-p", help="Phone number for OTP login"),
    email: str | None = typer.Option(None, "--email", "-e", help="Email address"),
    full_name: str | None = typer.Option(None, "--full-name", "-n", help="Display name"),
) -> None:
    """Create a verified administrator; admins cannot self-register."""
    with DbSessionService().session_scope() as session:
        users = UserRepository(session)
        if users.find_first_by_any(email=email, username=username, phone_number=phone_number):
            console.print(f"[red]A user matching '{username}' already exists[/red]")
            raise typer.Exit(code=1)
        admin = users.create(
            User(
                username=username,
                email=email,
                phone_number=phone_number,
                full_name=full_name,
                role=UserRole.ADMIN,
                is_verified=True,
            )
        )
        console.print(f"[green]Created admin '{admin.username}' ({admin.id})[/green]")


def _set_suspended(user_id: str, suspended: bool) -> None:
    with DbSessionService().session_scope() as session:
        moderation = VendorModerationService(session)
        try:
            if suspended:
                user = moderation.suspend_user(user_id)
            else:
                user = moderation.activate_user(user_id)
        except NotFoundError as e:
            console.print(f"[red]{e.detail}[/red]")
            raise typer.Exit(code=1) from e
    state = "suspended" if suspended else "activated"
    console.print(f"[green]User '{user.username}' {state}[/green]")


@users_app.command("suspend")
def suspend(user_id: str = typer.Argument(..., help="ID of the user to suspend")) -> None:
    """Suspend an account; its session tokens stop working immediately."""
    _set_suspended(user_id, suspended=True)


@users_app.command("activate")
def activate(user_id: str = typer.Argument(..., help="ID of the user to reactivate")) -> None:
    """Lift a suspension."""
    _set_suspended(user_id, suspended=False)
