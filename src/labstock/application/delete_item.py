"""Application service: Delete Inventory Item use case.

Open requests referring to the item are left alone.  Approving one
later fails with EntityNotFoundError; confirming its return skips the
restock.
"""

from __future__ import annotations

from labstock.domain.events import EventPublisher, LifecycleEvent
from labstock.domain.exceptions import EntityNotFoundError, Forbidden
from labstock.domain.model.activity import LogAction
from labstock.domain.model.user import User
from labstock.domain.repository.inventory_repository import InventoryRepository
from labstock.domain.service.write_guard import WriteGuard, item_key, shared_guard


class DeleteItemHandler:

    def __init__(
        self,
        inventory_repo: InventoryRepository,
        publisher: EventPublisher,
        guard: WriteGuard | None = None,
    ) -> None:
        self._inventory_repo = inventory_repo
        self._publisher = publisher
        self._guard = guard or shared_guard()

    def handle(self, actor: User, item_id: str) -> None:
        if not actor.can_manage_inventory:
            raise Forbidden("You are not allowed to manage inventory")

        with self._guard.hold(item_key(item_id)):
            item = self._inventory_repo.get_by_id(item_id)
            if item is None or not self._inventory_repo.delete(item_id):
                raise EntityNotFoundError(f"Item '{item_id}' not found")

        self._publisher.publish(
            LifecycleEvent(
                action=LogAction.INVENTORY_DELETE,
                actor=actor,
                details=f"Inventory item deleted: {item.name}",
                metadata={"itemId": item_id},
            )
        )
