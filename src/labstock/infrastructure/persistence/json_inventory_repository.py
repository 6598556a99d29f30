"""JSON-file-backed implementation of InventoryRepository."""

from __future__ import annotations

from datetime import datetime, timezone

from labstock.domain.model.inventory import InventoryItem
from labstock.domain.repository.inventory_repository import InventoryRepository
from labstock.infrastructure.persistence.json_record_store import JsonRecordStore
from labstock.infrastructure.persistence.timestamps import from_iso, to_iso

COLLECTION = "inventory"


class JsonInventoryRepository(InventoryRepository):

    def __init__(self, store: JsonRecordStore) -> None:
        self._store = store

    # --- InventoryRepository interface ----------------------------------------

    def get_by_id(self, item_id: str) -> InventoryItem | None:
        raw = self._store.find_by_id(COLLECTION, item_id)
        return self._to_domain(raw) if raw is not None else None

    def list_all(self) -> list[InventoryItem]:
        return [self._to_domain(raw) for raw in self._store.read_all(COLLECTION)]

    def save(self, item: InventoryItem) -> None:
        raw = self._to_raw(item)
        if item.id is None:
            item.id = self._store.create(COLLECTION, raw)["id"]
        else:
            self._store.put(COLLECTION, raw)

    def delete(self, item_id: str) -> bool:
        return self._store.delete_by_id(COLLECTION, item_id)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(item: InventoryItem) -> dict:
        raw = {
            "name": item.name,
            "description": item.description,
            "category": item.category,
            "quantity": item.quantity,
            "minQuantity": item.min_quantity,
            "location": item.location,
            "createdAt": to_iso(item.created_at),
            "updatedAt": to_iso(item.updated_at),
            "createdBy": item.created_by,
        }
        if item.id is not None:
            raw["id"] = item.id
        return raw

    @staticmethod
    def _to_domain(raw: dict) -> InventoryItem:
        created_at = from_iso(raw.get("createdAt")) or datetime.now(timezone.utc)
        return InventoryItem(
            id=raw["id"],
            name=raw["name"],
            category=raw.get("category", ""),
            quantity=int(raw.get("quantity", 0)),
            min_quantity=int(raw.get("minQuantity", 0)),
            description=raw.get("description", ""),
            location=raw.get("location", ""),
            created_by=raw.get("createdBy"),
            created_at=created_at,
            updated_at=from_iso(raw.get("updatedAt")) or created_at,
        )
