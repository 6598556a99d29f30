"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.  Enum values are
rendered as their wire strings and timestamps as ISO-8601.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any

from labstock.domain.model.activity import LogEntry
from labstock.domain.model.inventory import InventoryItem
from labstock.domain.model.request import MaterialRequest
from labstock.domain.model.user import User


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


@dataclass(frozen=True)
class RequestDTO:
    """Output: a material request as shown to callers."""

    id: str
    user_id: str
    user_name: str
    item_id: str
    item_name: str
    quantity: int
    reason: str
    status: str
    created_at: str
    admin_note: str | None = None
    reviewed_by: str | None = None
    reviewed_at: str | None = None
    return_type: str | None = None
    return_status: str | None = None
    return_requested_at: str | None = None
    returned_at: str | None = None

    @staticmethod
    def from_domain(request: MaterialRequest) -> RequestDTO:
        return RequestDTO(
            id=request.id,  # type: ignore[arg-type]
            user_id=request.user_id,
            user_name=request.user_name,
            item_id=request.item_id,
            item_name=request.item_name,
            quantity=request.quantity,
            reason=request.reason,
            status=request.status.value,
            created_at=request.created_at.isoformat(),
            admin_note=request.admin_note,
            reviewed_by=request.reviewed_by,
            reviewed_at=_iso(request.reviewed_at),
            return_type=request.return_type.value if request.return_type else None,
            return_status=request.return_status.value if request.return_status else None,
            return_requested_at=_iso(request.return_requested_at),
            returned_at=_iso(request.returned_at),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class InventoryLineDTO:
    """Output: one inventory item with its stock level."""

    id: str
    name: str
    category: str
    quantity: int
    min_quantity: int
    location: str
    description: str
    low_stock: bool

    @staticmethod
    def from_domain(item: InventoryItem) -> InventoryLineDTO:
        return InventoryLineDTO(
            id=item.id,  # type: ignore[arg-type]
            name=item.name,
            category=item.category,
            quantity=item.quantity,
            min_quantity=item.min_quantity,
            location=item.location,
            description=item.description,
            low_stock=item.is_low_stock,
        )


@dataclass(frozen=True)
class UserDTO:
    """Output: a user without the password hash."""

    id: str
    first_name: str
    last_name: str
    role: str
    email: str | None
    created_at: str

    @staticmethod
    def from_domain(user: User) -> UserDTO:
        return UserDTO(
            id=user.id,  # type: ignore[arg-type]
            first_name=user.first_name,
            last_name=user.last_name,
            role=user.role.value,
            email=user.email,
            created_at=user.created_at.isoformat(),
        )


@dataclass(frozen=True)
class LogEntryDTO:
    id: str
    action: str
    user_id: str
    user_name: str
    details: str
    metadata: dict[str, Any]
    timestamp: str

    @staticmethod
    def from_domain(entry: LogEntry) -> LogEntryDTO:
        return LogEntryDTO(
            id=entry.id,  # type: ignore[arg-type]
            action=entry.action.value,
            user_id=entry.user_id,
            user_name=entry.user_name,
            details=entry.details,
            metadata=dict(entry.metadata),
            timestamp=entry.timestamp.isoformat(),
        )
