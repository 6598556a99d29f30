"""Application service: Review Request use case.

Approval is the one place stock leaves the shelf.  The whole
check-reserve-transition cycle runs inside the requests critical
section, and the stock level is re-read at approval time because other
approvals may have consumed it since the request was filed.
"""

from __future__ import annotations

import logging

from labstock.application.dto import RequestDTO
from labstock.domain.events import EventPublisher, LifecycleEvent
from labstock.domain.exceptions import (
    AlreadyReviewed,
    EntityNotFoundError,
    Forbidden,
    ValidationError,
)
from labstock.domain.model.activity import LogAction
from labstock.domain.model.request import MaterialRequest, RequestAction, ReturnType
from labstock.domain.model.user import User
from labstock.domain.repository.inventory_repository import InventoryRepository
from labstock.domain.repository.request_repository import RequestRepository
from labstock.domain.service.inventory_ledger import InventoryLedger
from labstock.domain.service.write_guard import REQUESTS_KEY, WriteGuard, shared_guard

logger = logging.getLogger(__name__)

_DECISIONS = (RequestAction.APPROVE, RequestAction.REJECT)


class ReviewRequestHandler:

    def __init__(
        self,
        request_repo: RequestRepository,
        inventory_repo: InventoryRepository,
        publisher: EventPublisher,
        guard: WriteGuard | None = None,
    ) -> None:
        self._request_repo = request_repo
        self._publisher = publisher
        self._guard = guard or shared_guard()
        self._ledger = InventoryLedger(inventory_repo, self._guard)

    def handle(
        self,
        actor: User,
        request_id: str,
        decision: RequestAction,
        note: str | None = None,
        return_type: ReturnType | None = None,
    ) -> RequestDTO:
        """Approve or reject a pending request.

        Either the stock is decremented AND the request becomes APPROVED,
        or nothing changes.
        """
        if not actor.can_approve_requests:
            raise Forbidden("You are not allowed to review requests")
        if decision not in _DECISIONS:
            raise ValidationError(f"Invalid review decision: {decision.value}")

        with self._guard.hold(REQUESTS_KEY):
            request = self._request_repo.get_by_id(request_id)
            if request is None:
                raise EntityNotFoundError(f"Request '{request_id}' not found")
            if not request.is_pending:
                raise AlreadyReviewed(
                    f"Request has already been reviewed (status={request.status.value})"
                )

            if decision == RequestAction.APPROVE:
                self._approve(actor, request, note, return_type)
            else:
                request.reject(actor.id, note)  # type: ignore[arg-type]
                self._request_repo.save(request)

        logger.info("request %s %s by %s", request.id, request.status.value, actor.id)
        self._publish(actor, request, decision, note)
        return RequestDTO.from_domain(request)

    def _approve(
        self,
        actor: User,
        request: MaterialRequest,
        note: str | None,
        return_type: ReturnType | None,
    ) -> None:
        # Raises before any write if the item is gone or stock is short.
        self._ledger.reserve(request.item_id, request.quantity)

        request.approve(actor.id, return_type, note)  # type: ignore[arg-type]
        try:
            self._request_repo.save(request)
        except Exception:
            logger.exception(
                "saving approved request %s failed; releasing %d unit(s) of %s",
                request.id, request.quantity, request.item_id,
            )
            self._ledger.restore(request.item_id, request.quantity)
            raise

    def _publish(
        self,
        actor: User,
        request: MaterialRequest,
        decision: RequestAction,
        note: str | None,
    ) -> None:
        approved = decision == RequestAction.APPROVE
        metadata = {
            "requestId": request.id,
            "action": decision.value,
            "adminNote": note,
        }
        if approved:
            metadata["returnType"] = request.return_type.value  # type: ignore[union-attr]
        self._publisher.publish(
            LifecycleEvent(
                action=LogAction.REQUEST_APPROVE if approved else LogAction.REQUEST_REJECT,
                actor=actor,
                details=f"Request {'approved' if approved else 'rejected'}: {request.item_name}",
                metadata=metadata,
            )
        )
