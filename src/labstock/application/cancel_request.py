"""Application service: Cancel Request use case.

The requester (or an admin) withdraws a request that is still pending.
It is recorded as a rejection with a system note; stock is untouched.
"""

from __future__ import annotations

from labstock.application.dto import RequestDTO
from labstock.domain.events import EventPublisher, LifecycleEvent
from labstock.domain.exceptions import EntityNotFoundError, Forbidden, ValidationError
from labstock.domain.model.activity import LogAction
from labstock.domain.model.user import User
from labstock.domain.repository.request_repository import RequestRepository
from labstock.domain.service.write_guard import REQUESTS_KEY, WriteGuard, shared_guard


class CancelRequestHandler:

    def __init__(
        self,
        request_repo: RequestRepository,
        publisher: EventPublisher,
        guard: WriteGuard | None = None,
    ) -> None:
        self._request_repo = request_repo
        self._publisher = publisher
        self._guard = guard or shared_guard()

    def handle(self, actor: User, request_id: str) -> RequestDTO:
        if not request_id:
            raise ValidationError("Request ID is required")

        with self._guard.hold(REQUESTS_KEY):
            request = self._request_repo.get_by_id(request_id)
            if request is None:
                raise EntityNotFoundError(f"Request '{request_id}' not found")
            if request.user_id != actor.id and not actor.is_admin:
                raise Forbidden("You are not allowed to cancel this request")

            request.cancel(actor.id)  # type: ignore[arg-type]
            self._request_repo.save(request)

        self._publisher.publish(
            LifecycleEvent(
                action=LogAction.REQUEST_CANCEL,
                actor=actor,
                details=f"Request cancelled: {request.item_name}",
                metadata={"requestId": request.id},
            )
        )
        return RequestDTO.from_domain(request)
