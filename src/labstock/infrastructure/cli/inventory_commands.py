"""CLI commands for inventory management."""

from __future__ import annotations

import click

from labstock.infrastructure.bootstrap import Container
from labstock.infrastructure.cli.common import (
    domain_errors,
    pass_container,
    require_user,
    token_option,
)


@click.command("add")
@click.option("--name", required=True, help="Item name.")
@click.option("--category", required=True, help="Category, e.g. Electronics.")
@click.option("--quantity", default=0, type=int, show_default=True, help="Units in stock.")
@click.option("--min-quantity", default=0, type=int, show_default=True, help="Low-stock threshold.")
@click.option("--location", default="", help="Shelf or cabinet.")
@click.option("--description", default="", help="Free text.")
@token_option
@pass_container
def inventory_add(
    container: Container,
    name: str,
    category: str,
    quantity: int,
    min_quantity: int,
    location: str,
    description: str,
    token: str | None,
) -> None:
    """Add an item to the inventory (advisor/admin)."""
    actor = require_user(container, token)
    with domain_errors():
        line = container.add_item().handle(
            actor,
            name=name,
            category=category,
            quantity=quantity,
            min_quantity=min_quantity,
            description=description,
            location=location,
        )
    click.echo(f"Item '{line.name}' added with {line.quantity} in stock (id={line.id})")


@click.command("update")
@click.option("--id", "item_id", required=True, help="Item ID.")
@click.option("--name", default=None)
@click.option("--category", default=None)
@click.option("--quantity", default=None, type=int, help="Set the stock level directly.")
@click.option("--min-quantity", default=None, type=int)
@click.option("--location", default=None)
@click.option("--description", default=None)
@token_option
@pass_container
def inventory_update(container: Container, item_id: str, token: str | None, **fields) -> None:
    """Edit an item (advisor/admin)."""
    actor = require_user(container, token)
    changes = {k: v for k, v in fields.items() if v is not None}
    with domain_errors():
        line = container.update_item().handle(actor, item_id, changes)
    click.echo(f"Item '{line.name}' updated (quantity={line.quantity})")


@click.command("delete")
@click.option("--id", "item_id", required=True, help="Item ID.")
@token_option
@pass_container
def inventory_delete(container: Container, item_id: str, token: str | None) -> None:
    """Delete an item (advisor/admin).  Open requests are not touched."""
    actor = require_user(container, token)
    with domain_errors():
        container.delete_item().handle(actor, item_id)
    click.echo(f"Item {item_id} deleted.")


@click.command("show")
@click.option("--low-stock", is_flag=True, default=False, help="Only items at or below their minimum.")
@token_option
@pass_container
def inventory_show(container: Container, low_stock: bool, token: str | None) -> None:
    """Show current inventory levels."""
    require_user(container, token)
    with domain_errors():
        lines = container.show_inventory().handle(low_stock_only=low_stock)

    if not lines:
        click.echo("No inventory records found.")
        return

    click.echo(f"{'ID':<36}  {'Name':<20} {'Category':<14} {'Qty':>5} {'Min':>5}  {'Location'}")
    click.echo("-" * 96)
    for line in lines:
        flag = " LOW" if line.low_stock else ""
        click.echo(
            f"{line.id:<36}  {line.name:<20} {line.category:<14} "
            f"{line.quantity:>5} {line.min_quantity:>5}  {line.location}{flag}"
        )
