from dataclasses import replace
from pathlib import Path

import click

from labstock.infrastructure.bootstrap import Container
from labstock.infrastructure.cli.auth_commands import (
    auth_login,
    auth_whoami,
    user_add,
    user_init_admin,
    user_list,
)
from labstock.infrastructure.cli.inventory_commands import (
    inventory_add,
    inventory_delete,
    inventory_show,
    inventory_update,
)
from labstock.infrastructure.cli.log_commands import log_show
from labstock.infrastructure.cli.request_commands import (
    request_cancel,
    request_confirm_return,
    request_create,
    request_list,
    request_return,
    request_review,
)
from labstock.infrastructure.config import Settings
from labstock.infrastructure.logging_setup import configure_logging


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding the JSON collections (default: LABSTOCK_DATA_DIR).",
)
@click.option("--log-level", default=None, help="Diagnostic log level (default: LABSTOCK_LOG_LEVEL).")
@click.option("--log-json", is_flag=True, default=False, help="Emit diagnostic logs as JSON lines.")
@click.pass_context
def cli(ctx: click.Context, data_dir: Path | None, log_level: str | None, log_json: bool) -> None:
    """labstock: workshop inventory and material requests"""
    settings = Settings.from_env()
    configure_logging(log_level or settings.log_level, json_output=log_json)
    if data_dir is not None:
        settings = replace(settings, data_dir=data_dir)
    ctx.obj = Container(settings)


@cli.group()
def auth() -> None:
    """Sign in."""


@cli.group()
def user() -> None:
    """Manage users."""


@cli.group()
def inventory() -> None:
    """Manage inventory."""


@cli.group()
def request() -> None:
    """Request, review and return items."""


@cli.group()
def log() -> None:
    """Inspect the activity log."""


# Register subcommands
auth.add_command(auth_login)
auth.add_command(auth_whoami)
user.add_command(user_init_admin)
user.add_command(user_add)
user.add_command(user_list)
inventory.add_command(inventory_add)
inventory.add_command(inventory_update)
inventory.add_command(inventory_delete)
inventory.add_command(inventory_show)
request.add_command(request_create)
request.add_command(request_list)
request.add_command(request_review)
request.add_command(request_cancel)
request.add_command(request_return)
request.add_command(request_confirm_return)
log.add_command(log_show)
