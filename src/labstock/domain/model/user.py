"""User aggregate and the role-based capability checks."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from labstock.domain.exceptions import ValidationError


class Role(Enum):
    USER = "user"
    ADVISOR = "advisor"
    ADMIN = "admin"

    @staticmethod
    def parse(raw: str) -> Role:
        try:
            return Role(raw)
        except ValueError as exc:
            raise ValidationError(f"Invalid role: {raw!r}") from exc


@dataclass
class User:
    """A person who can sign in.

    ``password_hash`` is opaque to the domain; hashing and verification
    live in the security adapter.
    """

    id: str | None
    first_name: str
    last_name: str
    password_hash: str
    role: Role = Role.USER
    email: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def can_approve_requests(self) -> bool:
        return self.role in (Role.ADMIN, Role.ADVISOR)

    @property
    def can_manage_inventory(self) -> bool:
        return self.role in (Role.ADMIN, Role.ADVISOR)

    def has_name(self, first_name: str, last_name: str) -> bool:
        """Case-insensitive match on first and last name."""
        return (
            self.first_name.lower() == first_name.strip().lower()
            and self.last_name.lower() == last_name.strip().lower()
        )
