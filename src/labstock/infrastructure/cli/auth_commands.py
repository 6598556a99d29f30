"""CLI commands for signing in and managing users."""

from __future__ import annotations

import click

from labstock.infrastructure.bootstrap import Container
from labstock.infrastructure.cli.common import (
    domain_errors,
    pass_container,
    require_user,
    token_option,
)


@click.command("login")
@click.option("--first-name", required=True, help="First name.")
@click.option("--last-name", required=True, help="Last name.")
@click.password_option("--password", confirmation_prompt=False, help="Password.")
@pass_container
def auth_login(container: Container, first_name: str, last_name: str, password: str) -> None:
    """Sign in and print a bearer token."""
    with domain_errors():
        result = container.login().handle(first_name, last_name, password)

    click.echo(f"Signed in as {result.user.first_name} {result.user.last_name} ({result.user.role})")
    click.echo(result.token)


@click.command("whoami")
@token_option
@pass_container
def auth_whoami(container: Container, token: str | None) -> None:
    """Show the user the token belongs to."""
    user = require_user(container, token)
    click.echo(f"{user.display_name} ({user.role.value}) id={user.id}")


@click.command("init-admin")
@click.option("--first-name", required=True, help="First name.")
@click.option("--last-name", required=True, help="Last name.")
@click.option("--email", default=None, help="Email address.")
@click.password_option("--password", help="Password.")
@pass_container
def user_init_admin(
    container: Container,
    first_name: str,
    last_name: str,
    email: str | None,
    password: str,
) -> None:
    """Create the first admin account on an empty data directory."""
    with domain_errors():
        dto = container.bootstrap_admin().handle(first_name, last_name, password, email)
    click.echo(f"Admin {dto.first_name} {dto.last_name} created (id={dto.id})")


@click.command("add")
@click.option("--first-name", required=True, help="First name.")
@click.option("--last-name", required=True, help="Last name.")
@click.option("--email", default=None, help="Email address.")
@click.option(
    "--role",
    type=click.Choice(["user", "advisor", "admin"]),
    default="user",
    show_default=True,
)
@click.password_option("--password", help="Initial password.")
@token_option
@pass_container
def user_add(
    container: Container,
    first_name: str,
    last_name: str,
    email: str | None,
    role: str,
    password: str,
    token: str | None,
) -> None:
    """Add a user (admin only)."""
    actor = require_user(container, token)
    with domain_errors():
        dto = container.register_user().handle(
            actor, first_name, last_name, password, role, email
        )
    click.echo(f"User {dto.first_name} {dto.last_name} added as {dto.role} (id={dto.id})")


@click.command("list")
@token_option
@pass_container
def user_list(container: Container, token: str | None) -> None:
    """List all users (admin only)."""
    actor = require_user(container, token)
    with domain_errors():
        users = container.list_users().handle(actor)

    if not users:
        click.echo("No users found.")
        return

    click.echo(f"{'ID':<36}  {'Name':<24} {'Role':<8} {'Email'}")
    click.echo("-" * 80)
    for u in users:
        name = f"{u.first_name} {u.last_name}"
        click.echo(f"{u.id:<36}  {name:<24} {u.role:<8} {u.email or ''}")
