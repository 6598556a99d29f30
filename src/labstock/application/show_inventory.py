"""Application service: Show Inventory use case (query)."""

from __future__ import annotations

from labstock.application.dto import InventoryLineDTO
from labstock.domain.repository.inventory_repository import InventoryRepository


class ShowInventoryHandler:

    def __init__(self, inventory_repo: InventoryRepository) -> None:
        self._inventory_repo = inventory_repo

    def handle(self, low_stock_only: bool = False) -> list[InventoryLineDTO]:
        items = self._inventory_repo.list_all()
        lines = [InventoryLineDTO.from_domain(item) for item in items]
        if low_stock_only:
            lines = [line for line in lines if line.low_stock]
        return lines
