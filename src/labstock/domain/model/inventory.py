"""InventoryItem aggregate: the stock counter for one workshop item.

``quantity`` is the single source of truth for available stock.  It only
changes through ``reserve()`` (request approval), ``restore()`` (return)
or ``apply_edit()`` (direct administrative edit).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from labstock.domain.exceptions import InsufficientStock, ValidationError

EDITABLE_FIELDS = (
    "name",
    "description",
    "category",
    "quantity",
    "min_quantity",
    "location",
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _check_count(label: str, value: object) -> int:
    # bool is an int subclass; "True" is not a stock level
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValidationError(
            f"{label} must be an integer, got {type(value).__name__}"
        )
    if value < 0:
        raise ValidationError(f"{label} cannot be negative")
    return value


@dataclass
class InventoryItem:
    """Aggregate root for a stocked item.

    Invariants:
    - ``quantity`` is always >= 0
    - ``min_quantity`` is always >= 0
    """

    id: str | None
    name: str
    category: str
    quantity: int = 0
    min_quantity: int = 0
    description: str = ""
    location: str = ""
    created_by: str | None = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    # --- Factory (used for NEW items only) ------------------------------------

    @staticmethod
    def create(
        name: str,
        category: str,
        quantity: int = 0,
        min_quantity: int = 0,
        description: str = "",
        location: str = "",
        created_by: str | None = None,
    ) -> InventoryItem:
        if not name or not name.strip():
            raise ValidationError("Item name is required")
        if not category or not category.strip():
            raise ValidationError("Item category is required")
        return InventoryItem(
            id=None,
            name=name.strip(),
            category=category.strip(),
            quantity=_check_count("Quantity", quantity),
            min_quantity=_check_count("Minimum quantity", min_quantity),
            description=description or "",
            location=location or "",
            created_by=created_by,
        )

    # --- Stock movements ------------------------------------------------------

    def reserve(self, amount: int) -> int:
        """Take *amount* units out of stock for an approved request.

        Checked, not clamped: raises InsufficientStock before mutating if
        the decrement would take ``quantity`` below zero.
        """
        if not isinstance(amount, int) or amount <= 0:
            raise ValidationError("Reservation amount must be a positive integer")
        if amount > self.quantity:
            raise InsufficientStock(
                f"Insufficient stock for {self.name} "
                f"(need {amount}, have {self.quantity})"
            )
        self.quantity -= amount
        self.updated_at = _utcnow()
        return self.quantity

    def restore(self, amount: int) -> int:
        """Put *amount* units back into stock after a return.

        There is no upper bound on restock.
        """
        if not isinstance(amount, int) or amount <= 0:
            raise ValidationError("Restore amount must be a positive integer")
        self.quantity += amount
        self.updated_at = _utcnow()
        return self.quantity

    def apply_edit(self, **changes: object) -> None:
        """Direct administrative edit of descriptive fields or stock levels."""
        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValidationError(
                f"Cannot edit field(s): {', '.join(sorted(unknown))}"
            )
        if "quantity" in changes:
            changes["quantity"] = _check_count("Quantity", changes["quantity"])
        if "min_quantity" in changes:
            changes["min_quantity"] = _check_count(
                "Minimum quantity", changes["min_quantity"]
            )
        for key in ("name", "category"):
            if key in changes:
                value = changes[key]
                if not isinstance(value, str) or not value.strip():
                    raise ValidationError(f"Item {key} cannot be empty")
                changes[key] = value.strip()

        for key, value in changes.items():
            setattr(self, key, value)
        self.updated_at = _utcnow()

    # --- Computed properties --------------------------------------------------

    @property
    def is_low_stock(self) -> bool:
        return self.min_quantity > 0 and self.quantity <= self.min_quantity
