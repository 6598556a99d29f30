"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the outer layers (CLI, HTTP adapters) can catch them uniformly.  Each
class carries the HTTP status an adapter should answer with.
"""


class DomainException(Exception):
    """Base class for all domain errors."""

    http_status = 400


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class InsufficientStock(ValidationError):
    """The requested quantity exceeds what is currently in stock."""


class DuplicatePending(ValidationError):
    """The user already has a pending request for this item."""


class InvalidState(DomainException):
    """The operation is not allowed in the entity's current state."""


class AlreadyReviewed(InvalidState):
    """The request has already left the pending state."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    http_status = 404


class Unauthorized(DomainException):
    """No credential, or the credential is invalid or expired."""

    http_status = 401


class Forbidden(DomainException):
    """The actor is authenticated but lacks the role or ownership required."""

    http_status = 403
