"""Abstract repository for the MaterialRequest aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from labstock.domain.model.request import MaterialRequest, RequestStatus


class RequestRepository(ABC):

    @abstractmethod
    def get_by_id(self, request_id: str) -> MaterialRequest | None:
        """Return a request by its ID, or None if not found."""

    @abstractmethod
    def list_all(self, status: RequestStatus | None = None) -> list[MaterialRequest]:
        """Return every request, optionally restricted to one status."""

    @abstractmethod
    def find_pending(self, user_id: str, item_id: str) -> list[MaterialRequest]:
        """Return the pending requests a user holds for an item."""

    @abstractmethod
    def save(self, request: MaterialRequest) -> None:
        """Persist a new or updated request, assigning an ID to new ones."""
