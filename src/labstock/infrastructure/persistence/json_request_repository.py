"""JSON-file-backed implementation of RequestRepository."""

from __future__ import annotations

from datetime import datetime, timezone

from labstock.domain.model.request import (
    MaterialRequest,
    RequestStatus,
    ReturnStatus,
    ReturnType,
)
from labstock.domain.repository.request_repository import RequestRepository
from labstock.infrastructure.persistence.json_record_store import JsonRecordStore
from labstock.infrastructure.persistence.timestamps import from_iso, to_iso

COLLECTION = "requests"


class JsonRequestRepository(RequestRepository):

    def __init__(self, store: JsonRecordStore) -> None:
        self._store = store

    # --- RequestRepository interface ------------------------------------------

    def get_by_id(self, request_id: str) -> MaterialRequest | None:
        raw = self._store.find_by_id(COLLECTION, request_id)
        return self._to_domain(raw) if raw is not None else None

    def list_all(self, status: RequestStatus | None = None) -> list[MaterialRequest]:
        if status is None:
            records = self._store.read_all(COLLECTION)
        else:
            records = self._store.find_many(
                COLLECTION, lambda r: r.get("status") == status.value
            )
        return [self._to_domain(raw) for raw in records]

    def find_pending(self, user_id: str, item_id: str) -> list[MaterialRequest]:
        records = self._store.find_many(
            COLLECTION,
            lambda r: r.get("userId") == user_id
            and r.get("itemId") == item_id
            and r.get("status") == RequestStatus.PENDING.value,
        )
        return [self._to_domain(raw) for raw in records]

    def save(self, request: MaterialRequest) -> None:
        raw = self._to_raw(request)
        if request.id is None:
            request.id = self._store.create(COLLECTION, raw)["id"]
        else:
            self._store.put(COLLECTION, raw)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(request: MaterialRequest) -> dict:
        # Optional fields are written as None and dropped by the store, so
        # an outstanding loan simply has no "returnStatus" key.
        raw = {
            "userId": request.user_id,
            "userName": request.user_name,
            "itemId": request.item_id,
            "itemName": request.item_name,
            "quantity": request.quantity,
            "reason": request.reason,
            "status": request.status.value,
            "createdAt": to_iso(request.created_at),
            "adminNote": request.admin_note,
            "reviewedBy": request.reviewed_by,
            "reviewedAt": to_iso(request.reviewed_at),
            "returnType": request.return_type.value if request.return_type else None,
            "returnStatus": request.return_status.value if request.return_status else None,
            "returnRequestedAt": to_iso(request.return_requested_at),
            "returnedAt": to_iso(request.returned_at),
        }
        if request.id is not None:
            raw["id"] = request.id
        return raw

    @staticmethod
    def _to_domain(raw: dict) -> MaterialRequest:
        return MaterialRequest(
            id=raw["id"],
            user_id=raw["userId"],
            user_name=raw.get("userName", ""),
            item_id=raw["itemId"],
            item_name=raw.get("itemName", ""),
            quantity=int(raw["quantity"]),
            reason=raw.get("reason") or "",
            status=RequestStatus(raw["status"]),
            created_at=from_iso(raw.get("createdAt")) or datetime.now(timezone.utc),
            admin_note=raw.get("adminNote"),
            reviewed_by=raw.get("reviewedBy"),
            reviewed_at=from_iso(raw.get("reviewedAt")),
            return_type=ReturnType(raw["returnType"]) if raw.get("returnType") else None,
            return_status=ReturnStatus(raw["returnStatus"]) if raw.get("returnStatus") else None,
            return_requested_at=from_iso(raw.get("returnRequestedAt")),
            returned_at=from_iso(raw.get("returnedAt")),
        )
