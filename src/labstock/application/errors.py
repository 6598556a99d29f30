"""Map exceptions to the HTTP status an adapter should answer with."""

from __future__ import annotations

from labstock.domain.exceptions import DomainException

INTERNAL_ERROR_STATUS = 500
INTERNAL_ERROR_MESSAGE = "An internal error occurred; please try again"


def status_for(exc: BaseException) -> int:
    if isinstance(exc, DomainException):
        return exc.http_status
    return INTERNAL_ERROR_STATUS


def public_message(exc: BaseException) -> str:
    """The message safe to show a caller.  Internal errors stay generic."""
    if isinstance(exc, DomainException):
        return str(exc)
    return INTERNAL_ERROR_MESSAGE
