"""MaterialRequest aggregate: the core of the domain.

A request moves PENDING -> APPROVED or PENDING -> REJECTED exactly once.
An approved request is a loan; it then carries an orthogonal return
status (none -> PENDING_RETURN -> RETURNED, or none -> RETURNED).

Stock changes are NOT made here.  The application handlers coordinate
the request transition with the InventoryLedger.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from labstock.domain.exceptions import (
    AlreadyReviewed,
    InvalidState,
    ValidationError,
)

CANCELLED_NOTE = "Request cancelled"


class RequestStatus(Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ReturnType(Enum):
    SELF_DECLARATION = "self_declaration"
    ADMIN_CHECK = "admin_check"


class ReturnStatus(Enum):
    PENDING_RETURN = "pending_return"
    RETURNED = "returned"


class RequestAction(Enum):
    """Every action a reviewer or requester can apply to an existing request."""

    APPROVE = "approve"
    REJECT = "reject"
    RETURN_REQUEST = "return_request"
    CONFIRM_RETURN = "confirm_return"

    @staticmethod
    def parse(raw: str) -> RequestAction:
        try:
            return RequestAction(raw)
        except ValueError as exc:
            raise ValidationError(f"Invalid action: {raw!r}") from exc


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class MaterialRequest:
    """Aggregate root for a material request.

    Use ``MaterialRequest.create()`` for new requests.  ``__init__`` is kept
    plain so repositories can reconstitute persisted requests as-is.
    """

    id: str | None
    user_id: str
    user_name: str
    item_id: str
    item_name: str  # snapshot, survives a later rename of the item
    quantity: int
    reason: str = ""
    status: RequestStatus = RequestStatus.PENDING
    created_at: datetime = field(default_factory=_utcnow)
    admin_note: str | None = None
    reviewed_by: str | None = None
    reviewed_at: datetime | None = None
    return_type: ReturnType | None = None
    return_status: ReturnStatus | None = None
    return_requested_at: datetime | None = None
    returned_at: datetime | None = None

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def create(
        user_id: str,
        user_name: str,
        item_id: str,
        item_name: str,
        quantity: int,
        reason: str = "",
    ) -> MaterialRequest:
        if not item_id:
            raise ValidationError("Item and quantity are required")
        MaterialRequest.validate_quantity(quantity)
        return MaterialRequest(
            id=None,
            user_id=user_id,
            user_name=user_name,
            item_id=item_id,
            item_name=item_name,
            quantity=quantity,
            reason=(reason or "").strip(),
        )

    @staticmethod
    def validate_quantity(quantity: object) -> int:
        if not isinstance(quantity, int) or isinstance(quantity, bool):
            raise ValidationError(
                f"Quantity must be an integer, got {type(quantity).__name__}"
            )
        if quantity <= 0:
            raise ValidationError("Quantity must be positive")
        return quantity

    # --- Review transitions ---------------------------------------------------

    def approve(
        self,
        reviewer_id: str,
        return_type: ReturnType | None = None,
        note: str | None = None,
    ) -> None:
        """Transition PENDING -> APPROVED.

        Stock must already have been reserved by the caller.
        """
        self._require_pending()
        self.status = RequestStatus.APPROVED
        self.return_type = return_type or ReturnType.SELF_DECLARATION
        self._stamp_review(reviewer_id, note)

    def reject(self, reviewer_id: str, note: str | None = None) -> None:
        """Transition PENDING -> REJECTED.  No stock effect."""
        self._require_pending()
        self.status = RequestStatus.REJECTED
        self._stamp_review(reviewer_id, note)

    def cancel(self, actor_id: str) -> None:
        """Withdraw a pending request; recorded as a rejection."""
        if self.status != RequestStatus.PENDING:
            raise InvalidState("Only pending requests can be cancelled")
        self.status = RequestStatus.REJECTED
        self._stamp_review(actor_id, CANCELLED_NOTE)

    # --- Return transitions ---------------------------------------------------

    def begin_return(self) -> ReturnStatus:
        """Requester declares the borrowed items returned.

        Self-declared returns complete immediately; admin-checked returns
        wait in PENDING_RETURN for a reviewer to confirm.
        """
        self._require_open_loan()
        if self.return_status == ReturnStatus.PENDING_RETURN:
            raise InvalidState("Return is already awaiting confirmation")

        now = _utcnow()
        self.return_requested_at = now
        if self.return_type == ReturnType.ADMIN_CHECK:
            self.return_status = ReturnStatus.PENDING_RETURN
        else:
            self.return_status = ReturnStatus.RETURNED
            self.returned_at = now
        return self.return_status

    def mark_returned(self) -> None:
        """Reviewer confirms the items are back."""
        self._require_open_loan()
        self.return_status = ReturnStatus.RETURNED
        self.returned_at = _utcnow()

    # --- Computed properties --------------------------------------------------

    @property
    def is_pending(self) -> bool:
        return self.status == RequestStatus.PENDING

    @property
    def is_outstanding_loan(self) -> bool:
        return (
            self.status == RequestStatus.APPROVED
            and self.return_status != ReturnStatus.RETURNED
        )

    # --- Internal helpers -----------------------------------------------------

    def _require_pending(self) -> None:
        if self.status != RequestStatus.PENDING:
            raise AlreadyReviewed(
                f"Request has already been reviewed (status={self.status.value})"
            )

    def _require_open_loan(self) -> None:
        if self.status != RequestStatus.APPROVED:
            raise InvalidState(
                f"Only approved requests can be returned (status={self.status.value})"
            )
        if self.return_status == ReturnStatus.RETURNED:
            raise InvalidState("Request has already been returned")

    def _stamp_review(self, reviewer_id: str, note: str | None) -> None:
        self.admin_note = note or None
        self.reviewed_by = reviewer_id
        self.reviewed_at = _utcnow()
