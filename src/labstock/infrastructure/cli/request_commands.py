"""CLI commands for material requests."""

from __future__ import annotations

import click

from labstock.application.dto import RequestDTO
from labstock.infrastructure.bootstrap import Container
from labstock.infrastructure.cli.common import (
    domain_errors,
    pass_container,
    require_user,
    token_option,
)


def _display_request(dto: RequestDTO) -> None:
    """Shared formatting for a single request."""
    click.echo(f"Request {dto.id}  (status={dto.status})")
    click.echo(f"Requester: {dto.user_name}")
    click.echo(f"Item:      {dto.item_name} x {dto.quantity}")
    if dto.reason:
        click.echo(f"Reason:    {dto.reason}")
    if dto.admin_note:
        click.echo(f"Note:      {dto.admin_note}")
    if dto.return_type:
        click.echo(f"Return:    {dto.return_type} / {dto.return_status or 'outstanding'}")


def _apply(container: Container, token: str | None, payload: dict) -> RequestDTO:
    actor = require_user(container, token)
    with domain_errors():
        return container.request_action().handle(actor, payload)


@click.command("create")
@click.option("--item", "item_id", required=True, help="Item ID.")
@click.option("--quantity", required=True, type=int, help="Units requested.")
@click.option("--reason", default="", help="What the items are for.")
@token_option
@pass_container
def request_create(
    container: Container,
    item_id: str,
    quantity: int,
    reason: str,
    token: str | None,
) -> None:
    """Request items from the inventory."""
    actor = require_user(container, token)
    with domain_errors():
        dto = container.create_request().handle(actor, item_id, quantity, reason)
    _display_request(dto)


@click.command("list")
@click.option(
    "--status",
    type=click.Choice(["pending", "approved", "rejected"]),
    default=None,
    help="Only requests in this status.",
)
@token_option
@pass_container
def request_list(container: Container, status: str | None, token: str | None) -> None:
    """List requests, newest first."""
    require_user(container, token)
    with domain_errors():
        requests = container.list_requests().handle(status)

    if not requests:
        click.echo("No requests found.")
        return

    click.echo(f"{'ID':<36}  {'Requester':<20} {'Item':<20} {'Qty':>4} {'Status':<9} {'Return'}")
    click.echo("-" * 104)
    for r in requests:
        click.echo(
            f"{r.id:<36}  {r.user_name:<20} {r.item_name:<20} {r.quantity:>4} "
            f"{r.status:<9} {r.return_status or ''}"
        )


@click.command("review")
@click.option("--id", "request_id", required=True, help="Request ID.")
@click.option("--action", type=click.Choice(["approve", "reject"]), required=True)
@click.option("--note", default=None, help="Note for the requester.")
@click.option(
    "--return-type",
    type=click.Choice(["self_declaration", "admin_check"]),
    default=None,
    help="How the loan comes back (approve only; default self_declaration).",
)
@token_option
@pass_container
def request_review(
    container: Container,
    request_id: str,
    action: str,
    note: str | None,
    return_type: str | None,
    token: str | None,
) -> None:
    """Approve or reject a pending request (advisor/admin)."""
    dto = _apply(
        container,
        token,
        {"id": request_id, "action": action, "adminNote": note, "returnType": return_type},
    )
    _display_request(dto)


@click.command("cancel")
@click.option("--id", "request_id", required=True, help="Request ID.")
@token_option
@pass_container
def request_cancel(container: Container, request_id: str, token: str | None) -> None:
    """Cancel your own pending request (admins may cancel any)."""
    actor = require_user(container, token)
    with domain_errors():
        container.cancel_request().handle(actor, request_id)
    click.echo(f"Request {request_id} cancelled.")


@click.command("return")
@click.option("--id", "request_id", required=True, help="Request ID.")
@token_option
@pass_container
def request_return(container: Container, request_id: str, token: str | None) -> None:
    """Return borrowed items (requester only)."""
    dto = _apply(container, token, {"id": request_id, "action": "return_request"})
    if dto.return_status == "returned":
        click.echo(f"Request {request_id} returned; stock restored.")
    else:
        click.echo(f"Request {request_id} awaiting return confirmation.")


@click.command("confirm-return")
@click.option("--id", "request_id", required=True, help="Request ID.")
@token_option
@pass_container
def request_confirm_return(container: Container, request_id: str, token: str | None) -> None:
    """Confirm borrowed items are back (advisor/admin)."""
    _apply(container, token, {"id": request_id, "action": "confirm_return"})
    click.echo(f"Request {request_id} return confirmed.")
