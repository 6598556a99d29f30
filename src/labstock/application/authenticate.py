"""Application services: sign-in and resolving the current user.

``AccessService`` is what every outer adapter calls first: it turns the
bearer token into a ``User`` (or refuses with Unauthorized).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from labstock.application.dto import UserDTO
from labstock.domain.events import EventPublisher, LifecycleEvent
from labstock.domain.exceptions import Unauthorized, ValidationError
from labstock.domain.model.activity import LogAction
from labstock.domain.model.user import User
from labstock.domain.repository.user_repository import UserRepository
from labstock.domain.security import PasswordHasher, TokenService

logger = logging.getLogger(__name__)

_BAD_CREDENTIALS = "User not found or password incorrect"


@dataclass(frozen=True)
class LoginResult:
    token: str
    user: UserDTO


class LoginHandler:

    def __init__(
        self,
        user_repo: UserRepository,
        hasher: PasswordHasher,
        tokens: TokenService,
        publisher: EventPublisher,
    ) -> None:
        self._user_repo = user_repo
        self._hasher = hasher
        self._tokens = tokens
        self._publisher = publisher

    def handle(self, first_name: str, last_name: str, password: str) -> LoginResult:
        if not first_name or not last_name or not password:
            raise ValidationError("First name, last name and password are required")

        user = self._user_repo.get_by_name(first_name, last_name)
        if user is None or not self._hasher.verify(password, user.password_hash):
            logger.warning("failed sign-in for %s %s", first_name, last_name)
            raise Unauthorized(_BAD_CREDENTIALS)

        token = self._tokens.issue(user)
        self._publisher.publish(
            LifecycleEvent(
                action=LogAction.USER_LOGIN,
                actor=user,
                details=f"User signed in: {user.display_name}",
            )
        )
        return LoginResult(token=token, user=UserDTO.from_domain(user))


class AccessService:

    def __init__(self, user_repo: UserRepository, tokens: TokenService) -> None:
        self._user_repo = user_repo
        self._tokens = tokens

    def current_user(self, token: str | None) -> User | None:
        """Return the user a bearer token belongs to, or None."""
        if not token:
            return None
        claims = self._tokens.decode(token)
        if claims is None:
            return None
        return self._user_repo.get_by_id(claims.user_id)

    def require_user(self, token: str | None) -> User:
        user = self.current_user(token)
        if user is None:
            raise Unauthorized("Authentication required")
        return user


def bearer_token(authorization: str | None) -> str | None:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if authorization and authorization.startswith("Bearer "):
        return authorization[len("Bearer "):].strip() or None
    return None
