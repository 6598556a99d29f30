"""Application service: Update Inventory Item use case.

A direct administrative edit.  This is the only path besides approval
and return that may change ``quantity``.  It runs inside the item's
critical section so it cannot interleave with a reservation.
"""

from __future__ import annotations

from typing import Any

from labstock.application.dto import InventoryLineDTO
from labstock.domain.events import EventPublisher, LifecycleEvent
from labstock.domain.exceptions import EntityNotFoundError, Forbidden, ValidationError
from labstock.domain.model.activity import LogAction
from labstock.domain.model.user import User
from labstock.domain.repository.inventory_repository import InventoryRepository
from labstock.domain.service.write_guard import WriteGuard, item_key, shared_guard


class UpdateItemHandler:

    def __init__(
        self,
        inventory_repo: InventoryRepository,
        publisher: EventPublisher,
        guard: WriteGuard | None = None,
    ) -> None:
        self._inventory_repo = inventory_repo
        self._publisher = publisher
        self._guard = guard or shared_guard()

    def handle(self, actor: User, item_id: str, changes: dict[str, Any]) -> InventoryLineDTO:
        if not actor.can_manage_inventory:
            raise Forbidden("You are not allowed to manage inventory")
        if not changes:
            raise ValidationError("Nothing to update")

        with self._guard.hold(item_key(item_id)):
            item = self._inventory_repo.get_by_id(item_id)
            if item is None:
                raise EntityNotFoundError(f"Item '{item_id}' not found")
            item.apply_edit(**changes)
            self._inventory_repo.save(item)

        self._publisher.publish(
            LifecycleEvent(
                action=LogAction.INVENTORY_UPDATE,
                actor=actor,
                details=f"Inventory item updated: {item.name}",
                metadata={"itemId": item_id, "fields": sorted(changes)},
            )
        )
        return InventoryLineDTO.from_domain(item)
