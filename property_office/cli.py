"""CLI tools for property office administration."""

import click

from property_office.core.config import settings
from property_office.core.security import hash_password
from property_office.db.enums import Role
from property_office.schemas import UserCreate, UserUpsert
from property_office.schemas.user import PASSWORD_MIN
from property_office.services import seed_demo_data
from property_office.storage.factory import build_storage


def _open_storage():
    if not settings.DATABASE_URL:
        raise click.ClickException("DATABASE_URL is not set; nothing to write to")
    return build_storage(settings)


@click.group()
def cli():
    """Property office CLI tools."""
    pass


@cli.command()
@click.option("--username", required=True, help="Login name for the admin")
@click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
@click.option("--email", default=None, help="Optional contact email")
def create_admin(username: str, password: str, email: str | None):
    """
    Create an admin account.

    Example:
        property-office create-admin --username yonetici
    """
    if len(password) < PASSWORD_MIN:
        raise click.ClickException(f"Password must be at least {PASSWORD_MIN} characters")

    storage, session_store = _open_storage()
    try:
        if storage.get_user_by_username(username):
            click.echo(f"❌ User '{username}' already exists")
            return
        user = storage.create_user(
            UserCreate(
                username=username,
                password=hash_password(password),
                role=Role.ADMIN,
                email=email,
            )
        )
        click.echo(f"✓ Created admin: {username}")
        click.echo(f"  ID: {user.id}")
    except Exception as e:
        click.echo(f"❌ Error: {e}")
    finally:
        session_store.close()
        storage.close()


@cli.command()
@click.option("--username", required=True, help="User whose password to replace")
@click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
def set_password(username: str, password: str):
    """Reset a user's password."""
    if len(password) < PASSWORD_MIN:
        raise click.ClickException(f"Password must be at least {PASSWORD_MIN} characters")

    storage, session_store = _open_storage()
    try:
        user = storage.get_user_by_username(username)
        if not user:
            click.echo(f"❌ User '{username}' not found")
            return
        storage.upsert_user(UserUpsert(id=user.id, password=hash_password(password)))
        click.echo(f"✓ Password updated for {username}")
    finally:
        session_store.close()
        storage.close()


@cli.command()
@click.option("--admin-password", default=None, help="Defaults to SEED_ADMIN_PASSWORD")
def seed_demo(admin_password: str | None):
    """Load sample buildings, residents and blog posts."""
    if settings.is_production:
        raise click.ClickException("Refusing to seed demo data in production")

    storage, session_store = _open_storage()
    try:
        if seed_demo_data(storage, admin_password or settings.SEED_ADMIN_PASSWORD):
            click.echo("✓ Demo data loaded")
        else:
            click.echo("Demo data already present, nothing to do")
    finally:
        session_store.close()
        storage.close()


@cli.command()
@click.option("--host", default="127.0.0.1", help="Interface to bind")
@click.option("--port", default=8000, help="Port to listen on")
def serve(host: str, port: int):
    """Run the API with uvicorn."""
    import uvicorn

    uvicorn.run("property_office.main:app", host=host, port=port)


if __name__ == "__main__":
    cli()
