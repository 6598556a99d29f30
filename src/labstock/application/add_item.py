"""Application service: Add Inventory Item use case."""

from __future__ import annotations

from labstock.application.dto import InventoryLineDTO
from labstock.domain.events import EventPublisher, LifecycleEvent
from labstock.domain.exceptions import Forbidden
from labstock.domain.model.activity import LogAction
from labstock.domain.model.inventory import InventoryItem
from labstock.domain.model.user import User
from labstock.domain.repository.inventory_repository import InventoryRepository


class AddItemHandler:

    def __init__(
        self,
        inventory_repo: InventoryRepository,
        publisher: EventPublisher,
    ) -> None:
        self._inventory_repo = inventory_repo
        self._publisher = publisher

    def handle(
        self,
        actor: User,
        name: str,
        category: str,
        quantity: int = 0,
        min_quantity: int = 0,
        description: str = "",
        location: str = "",
    ) -> InventoryLineDTO:
        if not actor.can_manage_inventory:
            raise Forbidden("You are not allowed to manage inventory")

        item = InventoryItem.create(
            name=name,
            category=category,
            quantity=quantity,
            min_quantity=min_quantity,
            description=description,
            location=location,
            created_by=actor.id,
        )
        self._inventory_repo.save(item)

        self._publisher.publish(
            LifecycleEvent(
                action=LogAction.INVENTORY_CREATE,
                actor=actor,
                details=f"Inventory item added: {item.name}",
                metadata={"itemId": item.id},
            )
        )
        return InventoryLineDTO.from_domain(item)
