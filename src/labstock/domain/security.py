"""Ports for credential handling.

The domain only needs to turn a bearer token back into a user id and to
check a password; how tokens are signed and passwords hashed is an
infrastructure concern.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from labstock.domain.model.user import Role, User


@dataclass(frozen=True)
class TokenClaims:
    user_id: str
    role: Role
    email: str | None = None


class TokenService(ABC):

    @abstractmethod
    def issue(self, user: User) -> str:
        """Return a signed bearer token for *user*."""

    @abstractmethod
    def decode(self, token: str) -> TokenClaims | None:
        """Return the claims of a valid token, or None if invalid or expired."""


class PasswordHasher(ABC):

    @abstractmethod
    def hash(self, password: str) -> str:
        """Return a salted hash of *password*."""

    @abstractmethod
    def verify(self, password: str, hashed: str) -> bool:
        """True if *password* matches *hashed*."""
