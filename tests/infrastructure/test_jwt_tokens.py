"""Tests for the PyJWT-backed token service."""

from datetime import timedelta

import jwt

from labstock.domain.model.user import Role
from labstock.infrastructure.security.jwt_tokens import ALGORITHM, JwtTokenService
from tests.fakes import make_user

SECRET = "test-secret-with-enough-length-for-hs256"


class TestJwtTokenService:

    def test_issue_and_decode(self):
        service = JwtTokenService(SECRET)
        user = make_user(Role.ADVISOR)
        user.email = "ada@example.org"

        claims = service.decode(service.issue(user))

        assert claims.user_id == user.id
        assert claims.role == Role.ADVISOR
        assert claims.email == "ada@example.org"

    def test_payload_carries_expiry(self):
        service = JwtTokenService(SECRET, timedelta(days=7))
        payload = jwt.decode(service.issue(make_user()), SECRET, algorithms=[ALGORITHM])
        assert payload["exp"] - payload["iat"] == 7 * 24 * 3600
        assert "email" not in payload

    def test_expired_token_rejected(self):
        service = JwtTokenService(SECRET, timedelta(seconds=-60))
        assert service.decode(service.issue(make_user())) is None

    def test_wrong_secret_rejected(self):
        token = JwtTokenService(SECRET).issue(make_user())
        assert JwtTokenService("another-secret-with-enough-length").decode(token) is None

    def test_garbage_rejected(self):
        assert JwtTokenService(SECRET).decode("not.a.token") is None

    def test_malformed_claims_rejected(self):
        token = jwt.encode({"role": "user"}, SECRET, algorithm=ALGORITHM)
        assert JwtTokenService(SECRET).decode(token) is None
