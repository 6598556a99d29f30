"""Signed bearer tokens (HS256 JWT via PyJWT)."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

import jwt

from labstock.domain.model.user import Role, User
from labstock.domain.security import TokenClaims, TokenService

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


class JwtTokenService(TokenService):

    def __init__(self, secret: str, ttl: timedelta = timedelta(days=7)) -> None:
        self._secret = secret
        self._ttl = ttl

    def issue(self, user: User) -> str:
        now = datetime.now(tz=timezone.utc)
        payload = {
            "userId": user.id,
            "email": user.email,
            "role": user.role.value,
            "iat": int(now.timestamp()),
            "exp": int((now + self._ttl).timestamp()),
        }
        payload = {k: v for k, v in payload.items() if v is not None}
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def decode(self, token: str) -> TokenClaims | None:
        try:
            payload = jwt.decode(token, self._secret, algorithms=[ALGORITHM])
        except jwt.ExpiredSignatureError:
            logger.info("rejected expired token")
            return None
        except jwt.PyJWTError as exc:
            logger.info("rejected invalid token: %s", exc)
            return None

        try:
            return TokenClaims(
                user_id=payload["userId"],
                role=Role(payload["role"]),
                email=payload.get("email"),
            )
        except (KeyError, ValueError):
            logger.info("rejected token with malformed claims")
            return None
