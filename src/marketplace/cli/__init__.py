"""Main CLI application module."""

import typer

from .db_commands import db_app
from .user_commands import users_app

app = typer.Typer(
    help="Marketplace administration CLI",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(db_app, name="db")
app.add_typer(users_app, name="users")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
