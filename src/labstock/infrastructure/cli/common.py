"""Helpers shared by the CLI command modules."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

import click

from labstock.application.errors import INTERNAL_ERROR_MESSAGE
from labstock.domain.exceptions import DomainException
from labstock.domain.model.user import User
from labstock.infrastructure.bootstrap import Container
from labstock.infrastructure.persistence.json_record_store import StorageError

logger = logging.getLogger(__name__)

token_option = click.option(
    "--token",
    envvar="LABSTOCK_TOKEN",
    default=None,
    help="Bearer token from 'auth login' (or set LABSTOCK_TOKEN).",
)

pass_container = click.make_pass_decorator(Container)


@contextmanager
def domain_errors() -> Iterator[None]:
    """Turn domain and storage failures into a clean CLI error."""
    try:
        yield
    except DomainException as exc:
        raise click.ClickException(str(exc))
    except StorageError:
        logger.exception("storage failure")
        raise click.ClickException(INTERNAL_ERROR_MESSAGE)


def require_user(container: Container, token: str | None) -> User:
    with domain_errors():
        return container.access.require_user(token)
