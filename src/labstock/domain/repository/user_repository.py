"""Abstract repository for the User aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from labstock.domain.model.user import User


class UserRepository(ABC):

    @abstractmethod
    def get_by_id(self, user_id: str) -> User | None:
        """Return a user by ID, or None."""

    @abstractmethod
    def get_by_name(self, first_name: str, last_name: str) -> User | None:
        """Return the user with this first and last name (case-insensitive)."""

    @abstractmethod
    def list_all(self) -> list[User]:
        """Return every user."""

    @abstractmethod
    def save(self, user: User) -> None:
        """Persist a new or updated user, assigning an ID to new ones."""
