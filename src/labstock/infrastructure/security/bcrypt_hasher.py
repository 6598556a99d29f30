"""Password hashing with bcrypt."""

from __future__ import annotations

import bcrypt

from labstock.domain.security import PasswordHasher

BCRYPT_ROUNDS = 12


class BcryptPasswordHasher(PasswordHasher):

    def __init__(self, rounds: int = BCRYPT_ROUNDS) -> None:
        self._rounds = rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
        except ValueError:
            # Not a bcrypt hash at all.
            return False
