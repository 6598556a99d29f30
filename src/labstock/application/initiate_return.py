"""Application service: Initiate Return use case.

Only the requester can start a return.  A self-declared return restocks
at once; an admin-checked return waits for ConfirmReturnHandler.
"""

from __future__ import annotations

import logging

from labstock.application.dto import RequestDTO
from labstock.domain.events import EventPublisher, LifecycleEvent
from labstock.domain.exceptions import EntityNotFoundError, Forbidden
from labstock.domain.model.activity import LogAction
from labstock.domain.model.request import ReturnStatus
from labstock.domain.model.user import User
from labstock.domain.repository.inventory_repository import InventoryRepository
from labstock.domain.repository.request_repository import RequestRepository
from labstock.domain.service.inventory_ledger import InventoryLedger
from labstock.domain.service.write_guard import REQUESTS_KEY, WriteGuard, shared_guard

logger = logging.getLogger(__name__)


class InitiateReturnHandler:

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
        restocked: int | None = None

        with self._guard.hold(REQUESTS_KEY):
            request = self._request_repo.get_by_id(request_id)
            if request is None:
                raise EntityNotFoundError(f"Request '{request_id}' not found")
            if request.user_id != actor.id:
                raise Forbidden("Only the requester can return these items")

            outcome = request.begin_return()
            if outcome == ReturnStatus.RETURNED:
                restocked = self._ledger.restore_if_present(
                    request.item_id, request.quantity
                )
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

        logger.info("request %s return initiated: %s", request.id, outcome.value)
        self._publisher.publish(
            LifecycleEvent(
                action=LogAction.RETURN_INITIATE,
                actor=actor,
                details=f"Return initiated: {request.item_name} ({outcome.value})",
                metadata={
                    "requestId": request.id,
                    "returnType": request.return_type.value,  # type: ignore[union-attr]
                    "returnStatus": outcome.value,
                    "restocked": restocked is not None,
                },
            )
        )
        return RequestDTO.from_domain(request)
