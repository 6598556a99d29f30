"""Application service: Create Request use case.

Checks the item and its current stock, enforces one pending request
per (user, item), and snapshots the item name onto the request.
"""

from __future__ import annotations

import logging

from labstock.application.dto import RequestDTO
from labstock.domain.events import EventPublisher, LifecycleEvent
from labstock.domain.exceptions import DuplicatePending, ValidationError
from labstock.domain.model.activity import LogAction
from labstock.domain.model.request import MaterialRequest
from labstock.domain.model.user import User
from labstock.domain.repository.inventory_repository import InventoryRepository
from labstock.domain.repository.request_repository import RequestRepository
from labstock.domain.service.inventory_ledger import InventoryLedger
from labstock.domain.service.write_guard import REQUESTS_KEY, WriteGuard, shared_guard

logger = logging.getLogger(__name__)


class CreateRequestHandler:

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
        item_id: str,
        quantity: int,
        reason: str = "",
    ) -> RequestDTO:
        if not item_id or not quantity:
            raise ValidationError("Item and quantity are required")
        MaterialRequest.validate_quantity(quantity)

        with self._guard.hold(REQUESTS_KEY):
            item = self._ledger.check_available(item_id, quantity)

            if self._request_repo.find_pending(actor.id, item_id):  # type: ignore[arg-type]
                raise DuplicatePending(
                    f"You already have a pending request for {item.name}"
                )

            request = MaterialRequest.create(
                user_id=actor.id,  # type: ignore[arg-type]
                user_name=actor.display_name,
                item_id=item_id,
                item_name=item.name,
                quantity=quantity,
                reason=reason,
            )
            self._request_repo.save(request)

        logger.info(
            "request %s created by %s for %d x %s",
            request.id, actor.id, quantity, item.name,
        )
        self._publisher.publish(
            LifecycleEvent(
                action=LogAction.REQUEST_CREATE,
                actor=actor,
                details=f"New request: {item.name} ({quantity} units)",
                metadata={
                    "requestId": request.id,
                    "itemId": item_id,
                    "quantity": quantity,
                    "reason": request.reason,
                },
            )
        )
        return RequestDTO.from_domain(request)
