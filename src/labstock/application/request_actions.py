"""Application service: dispatch an action applied to an existing request.

Takes the update payload ``{id, action, adminNote?, returnType?}`` and
routes it by ``RequestAction``.  Every member of the enum must have a
route; construction fails otherwise.
"""

from __future__ import annotations

from typing import Any, Callable

from labstock.application.confirm_return import ConfirmReturnHandler
from labstock.application.dto import RequestDTO
from labstock.application.initiate_return import InitiateReturnHandler
from labstock.application.review_request import ReviewRequestHandler
from labstock.domain.exceptions import ValidationError
from labstock.domain.model.request import RequestAction, ReturnType
from labstock.domain.model.user import User

_Route = Callable[[User, str, dict[str, Any]], RequestDTO]


def _parse_return_type(raw: object) -> ReturnType | None:
    if raw is None or raw == "":
        return None
    try:
        return ReturnType(raw)
    except ValueError as exc:
        raise ValidationError(f"Invalid return type: {raw!r}") from exc


class RequestActionHandler:

    def __init__(
        self,
        review: ReviewRequestHandler,
        initiate_return: InitiateReturnHandler,
        confirm_return: ConfirmReturnHandler,
    ) -> None:
        self._review = review
        self._initiate_return = initiate_return
        self._confirm_return = confirm_return

        self._routes: dict[RequestAction, _Route] = {
            RequestAction.APPROVE: self._handle_review,
            RequestAction.REJECT: self._handle_review,
            RequestAction.RETURN_REQUEST: self._handle_return,
            RequestAction.CONFIRM_RETURN: self._handle_confirm,
        }
        missing = set(RequestAction) - set(self._routes)
        if missing:
            raise RuntimeError(f"No route for action(s): {sorted(a.value for a in missing)}")

    def handle(self, actor: User, payload: dict[str, Any]) -> RequestDTO:
        request_id = payload.get("id")
        raw_action = payload.get("action")
        if not request_id or not raw_action:
            raise ValidationError("Request ID and action are required")

        action = RequestAction.parse(raw_action)
        return self._routes[action](actor, request_id, payload)

    # --- Routes ---------------------------------------------------------------

    def _handle_review(
        self, actor: User, request_id: str, payload: dict[str, Any]
    ) -> RequestDTO:
        action = RequestAction.parse(payload["action"])
        return_type = None
        if action == RequestAction.APPROVE:
            return_type = _parse_return_type(payload.get("returnType"))
        return self._review.handle(
            actor,
            request_id,
            action,
            note=payload.get("adminNote") or None,
            return_type=return_type,
        )

    def _handle_return(
        self, actor: User, request_id: str, payload: dict[str, Any]
    ) -> RequestDTO:
        return self._initiate_return.handle(actor, request_id)

    def _handle_confirm(
        self, actor: User, request_id: str, payload: dict[str, Any]
    ) -> RequestDTO:
        return self._confirm_return.handle(actor, request_id)
