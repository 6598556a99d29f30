"""JSON-file-backed implementation of UserRepository."""

from __future__ import annotations

from datetime import datetime, timezone

from labstock.domain.model.user import Role, User
from labstock.domain.repository.user_repository import UserRepository
from labstock.infrastructure.persistence.json_record_store import JsonRecordStore
from labstock.infrastructure.persistence.timestamps import from_iso, to_iso

COLLECTION = "users"


class JsonUserRepository(UserRepository):

    def __init__(self, store: JsonRecordStore) -> None:
        self._store = store

    def get_by_id(self, user_id: str) -> User | None:
        raw = self._store.find_by_id(COLLECTION, user_id)
        return self._to_domain(raw) if raw is not None else None

    def get_by_name(self, first_name: str, last_name: str) -> User | None:
        first, last = first_name.strip().lower(), last_name.strip().lower()
        raw = self._store.find_one(
            COLLECTION,
            lambda r: r.get("firstName", "").lower() == first
            and r.get("lastName", "").lower() == last,
        )
        return self._to_domain(raw) if raw is not None else None

    def list_all(self) -> list[User]:
        return [self._to_domain(raw) for raw in self._store.read_all(COLLECTION)]

    def save(self, user: User) -> None:
        raw = {
            "firstName": user.first_name,
            "lastName": user.last_name,
            "email": user.email,
            "password": user.password_hash,
            "role": user.role.value,
            "createdAt": to_iso(user.created_at),
        }
        if user.id is None:
            user.id = self._store.create(COLLECTION, raw)["id"]
        else:
            self._store.put(COLLECTION, {**raw, "id": user.id})

    @staticmethod
    def _to_domain(raw: dict) -> User:
        return User(
            id=raw["id"],
            first_name=raw["firstName"],
            last_name=raw["lastName"],
            password_hash=raw["password"],
            role=Role(raw.get("role", Role.USER.value)),
            email=raw.get("email"),
            created_at=from_iso(raw.get("createdAt")) or datetime.now(timezone.utc),
        )
