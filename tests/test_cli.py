"""Tests for the admin CLI."""
import pytest
from click.testing import CliRunner

from property_office import cli as cli_module
from property_office.core.config import Settings
from property_office.core.security import verify_password
from property_office.storage import SqlStorage


@pytest.fixture
def database_url(tmp_path, monkeypatch):
    url = f"sqlite:///{tmp_path / 'cli.db'}"
    monkeypatch.setattr(cli_module, "settings", Settings(ENV="dev", DATABASE_URL=url))
    return url


def _open(url):
    storage = SqlStorage.from_url(url)
    storage.create_schema()
    return storage


def test_create_admin(database_url):
    result = CliRunner().invoke(
        cli_module.cli,
        ["create-admin", "--username", "yonetici", "--password", "secret1"],
    )
    assert result.exit_code == 0, result.output
    assert "Created admin" in result.output

    storage = _open(database_url)
    user = storage.get_user_by_username("yonetici")
    assert user.role.value == "admin"
    assert verify_password("secret1", user.password)
    storage.close()


def test_create_admin_rejects_short_password(database_url):
    result = CliRunner().invoke(
        cli_module.cli,
        ["create-admin", "--username", "yonetici", "--password", "123"],
    )
    assert result.exit_code != 0


def test_set_password(database_url):
    runner = CliRunner()
    runner.invoke(cli_module.cli, ["create-admin", "--username", "yonetici", "--password", "secret1"])
    result = runner.invoke(
        cli_module.cli, ["set-password", "--username", "yonetici", "--password", "secret2"]
    )
    assert result.exit_code == 0, result.output

    storage = _open(database_url)
    assert verify_password("secret2", storage.get_user_by_username("yonetici").password)
    storage.close()


def test_seed_demo_is_idempotent(database_url):
    runner = CliRunner()
    assert "Demo data loaded" in runner.invoke(cli_module.cli, ["seed-demo"]).output
    assert "already present" in runner.invoke(cli_module.cli, ["seed-demo"]).output


def test_requires_database_url(monkeypatch):
    monkeypatch.setattr(cli_module, "settings", Settings(ENV="dev", DATABASE_URL=""))
    result = CliRunner().invoke(cli_module.cli, ["seed-demo"])
    assert result.exit_code != 0
    assert "DATABASE_URL" in result.output
