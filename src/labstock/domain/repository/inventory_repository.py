"""Abstract repository for the InventoryItem aggregate.

Defined in the domain layer so the domain never depends on
infrastructure.  Concrete implementations (JSON, in-memory) live
elsewhere.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from labstock.domain.model.inventory import InventoryItem


class InventoryRepository(ABC):

    @abstractmethod
    def get_by_id(self, item_id: str) -> InventoryItem | None:
        """Return an item by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[InventoryItem]:
        """Return every inventory item."""

    @abstractmethod
    def save(self, item: InventoryItem) -> None:
        """Persist a new or updated item, assigning an ID to new ones."""

    @abstractmethod
    def delete(self, item_id: str) -> bool:
        """Remove an item.  Returns False if it did not exist."""
