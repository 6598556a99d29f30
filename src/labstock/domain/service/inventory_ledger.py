"""Domain service: Inventory Ledger.

The only code allowed to move stock.  Each primitive re-reads the stored
quantity immediately before mutating it (no caching) and runs inside the
item's critical section, so concurrent approvals against one item are
serialized instead of overwriting each other.
"""

from __future__ import annotations

import logging

from labstock.domain.exceptions import EntityNotFoundError, InsufficientStock
from labstock.domain.model.inventory import InventoryItem
from labstock.domain.repository.inventory_repository import InventoryRepository
from labstock.domain.service.write_guard import WriteGuard, item_key, shared_guard

logger = logging.getLogger(__name__)


class InventoryLedger:

    def __init__(
        self,
        inventory_repo: InventoryRepository,
        guard: WriteGuard | None = None,
    ) -> None:
        self._inventory_repo = inventory_repo
        self._guard = guard or shared_guard()

    def check_available(self, item_id: str, amount: int) -> InventoryItem:
        """Return the item if *amount* could be reserved right now.

        Read-only; used when a request is created.  Approval re-checks.
        """
        item = self._load(item_id)
        if amount > item.quantity:
            raise InsufficientStock(
                f"Insufficient stock for {item.name} "
                f"(requested {amount}, available {item.quantity})"
            )
        return item

    def reserve(self, item_id: str, amount: int) -> int:
        """Decrement stock by *amount* and return the new quantity.

        Raises EntityNotFoundError if the item is gone and
        InsufficientStock if the decrement would go below zero.  Nothing
        is written in either case.
        """
        with self._guard.hold(item_key(item_id)):
            item = self._load(item_id)
            before = item.quantity
            after = item.reserve(amount)
            self._inventory_repo.save(item)
        logger.info("reserved %d of item %s (%d -> %d)", amount, item_id, before, after)
        return after

    def restore(self, item_id: str, amount: int) -> int:
        """Increment stock by *amount* and return the new quantity."""
        with self._guard.hold(item_key(item_id)):
            item = self._load(item_id)
            before = item.quantity
            after = item.restore(amount)
            self._inventory_repo.save(item)
        logger.info("restored %d of item %s (%d -> %d)", amount, item_id, before, after)
        return after

    def restore_if_present(self, item_id: str, amount: int) -> int | None:
        """Restore stock unless the item has been deleted meanwhile.

        Returns the new quantity, or None when there was nothing to restock.
        """
        try:
            return self.restore(item_id, amount)
        except EntityNotFoundError:
            logger.warning(
                "item %s no longer exists; %d unit(s) not restocked", item_id, amount
            )
            return None

    def _load(self, item_id: str) -> InventoryItem:
        item = self._inventory_repo.get_by_id(item_id)
        if item is None:
            raise EntityNotFoundError(f"Item '{item_id}' not found")
        return item
