"""Application service: List Requests use case (query)."""

from __future__ import annotations

from labstock.application.dto import RequestDTO
from labstock.domain.exceptions import ValidationError
from labstock.domain.model.request import RequestStatus
from labstock.domain.repository.request_repository import RequestRepository


class ListRequestsHandler:

    def __init__(self, request_repo: RequestRepository) -> None:
        self._request_repo = request_repo

    def handle(self, status: str | None = None) -> list[RequestDTO]:
        """Return requests newest first, optionally filtered by status."""
        wanted: RequestStatus | None = None
        if status:
            try:
                wanted = RequestStatus(status)
            except ValueError as exc:
                raise ValidationError(f"Invalid status: {status!r}") from exc

        requests = self._request_repo.list_all(wanted)
        requests.sort(key=lambda r: r.created_at, reverse=True)
        return [RequestDTO.from_domain(r) for r in requests]
