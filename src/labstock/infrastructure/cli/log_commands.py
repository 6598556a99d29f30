"""CLI command for the activity log."""

from __future__ import annotations

from datetime import datetime, timezone

import click

from labstock.infrastructure.bootstrap import Container
from labstock.infrastructure.cli.common import (
    domain_errors,
    pass_container,
    require_user,
    token_option,
)


def _as_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


@click.command("show")
@click.option("--user-id", default=None, help="Only entries by this user.")
@click.option("--action", default=None, help="Only this action, e.g. REQUEST_APPROVE.")
@click.option("--since", type=click.DateTime(), default=None, help="Earliest timestamp (UTC).")
@click.option("--until", type=click.DateTime(), default=None, help="Latest timestamp (UTC).")
@click.option("--limit", type=int, default=50, show_default=True)
@token_option
@pass_container
def log_show(
    container: Container,
    user_id: str | None,
    action: str | None,
    since: datetime | None,
    until: datetime | None,
    limit: int,
    token: str | None,
) -> None:
    """Show the activity log, newest first (admin only)."""
    actor = require_user(container, token)
    with domain_errors():
        entries = container.show_activity().handle(
            actor,
            user_id=user_id,
            action=action,
            start=_as_utc(since),
            end=_as_utc(until),
            limit=limit,
        )

    if not entries:
        click.echo("No log entries found.")
        return

    for e in entries:
        click.echo(f"{e.timestamp}  {e.action:<16} {e.user_name:<20} {e.details}")
