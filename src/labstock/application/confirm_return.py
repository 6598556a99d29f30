"""Application service: Confirm Return use case.

A reviewer confirms the borrowed items are back and stock is restored.
If the item was deleted from inventory in the meantime the request is
still marked returned, but there is nothing to restock.
"""

from __future__ import annotations

import logging

from labstock.application.dto import RequestDTO
from labstock.domain.events import EventPublisher, LifecycleEvent
from labstock.domain.exceptions import EntityNotFoundError, Forbidden
from labstock.domain.model.activity import LogAction
from labstock.domain.model.user import User
from labstock.domain.repository.inventory_repository import InventoryRepository
from labstock.domain.repository.request_repository import RequestRepository
from labstock.domain.service.inventory_ledger import InventoryLedger
from labstock.domain.service.write_guard import REQUESTS_KEY, WriteGuard, shared_guard

logger = logging.getLogger(__name__)


class ConfirmReturnHandler:

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

    def handle(self, actor: User, request_id: str) -> RequestDTO:
        if not actor.can_approve_requests:
            raise Forbidden("You are not allowed to confirm returns")

        with self._guard.hold(REQUESTS_KEY):
            request = self._request_repo.get_by_id(request_id)
            if request is None:
                raise EntityNotFoundError(f"Request '{request_id}' not found")

            # Raises InvalidState on an already-returned request, so stock
            # is never restored twice.
            request.mark_returned()
            restocked = self._ledger.restore_if_present(request.item_id, request.quantity)
            try:
                self._request_repo.save(request)
            except Exception:
                logger.exception(
                    "saving returned request %s failed; taking back %d unit(s) of %s",
                    request.id, request.quantity, request.item_id,
                )
                if restocked is not None:
                    self._ledger.reserve(request.item_id, request.quantity)
                raise

        logger.info("request %s return confirmed by %s", request.id, actor.id)
        self._publisher.publish(
            LifecycleEvent(
                action=LogAction.RETURN_CONFIRM,
                actor=actor,
                details=f"Return confirmed: {request.item_name}",
                metadata={
                    "requestId": request.id,
                    "restocked": restocked is not None,
                    "newQuantity": restocked,
                },
            )
        )
        return RequestDTO.from_domain(request)
