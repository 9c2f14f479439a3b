import pytest
from rich.console import Console
from typer.testing import CliRunner

from src.marketplace.cli import app, user_commands
from src.marketplace.core.services import DbSessionService
from src.marketplace.entities import UserRepository, UserRole

runner = CliRunner()


@pytest.fixture(autouse=True)
def shared_engine(engine, monkeypatch):
    """Point every command at the per-test database and widen table output."""
    monkeypatch.setattr(user_commands, "DbSessionService", lambda: DbSessionService(engine))
    monkeypatch.setattr(user_commands, "console", Console(width=200))


class TestUserCommands:
    def test_create_admin(self, session):
        result = runner.invoke(app, ["users", "create-admin", "root", "--phone", "+962770000001"])

        assert result.exit_code == 0, result.output
        admin = UserRepository(session).find_first_by_any(username="root")
        assert admin is not None
        assert admin.role == UserRole.ADMIN
        assert admin.is_verified

    def test_create_admin_rejects_duplicates(self, customer):
        result = runner.invoke(app, ["users", "create-admin", "layla", "--phone", "0790000000"])
        assert result.exit_code == 1

    def test_list_filters_by_role(self, customer, admin):
        result = runner.invoke(app, ["users", "list", "--role", "admin"])

        assert result.exit_code == 0
        assert "root" in result.output
        assert "layla" not in result.output

    def test_suspend_and_activate(self, customer, session):
        result = runner.invoke(app, ["users", "suspend", customer.id])
        assert result.exit_code == 0, result.output
        assert UserRepository(session).refresh(customer.id).is_suspended

        result = runner.invoke(app, ["users", "activate", customer.id])
        assert result.exit_code == 0
        assert not UserRepository(session).refresh(customer.id).is_suspended

    def test_suspend_unknown_user(self):
        result = runner.invoke(app, ["users", "suspend", "missing"])
        assert result.exit_code == 1
        assert "User not found" in result.output
