"""Tests for the bcrypt password hasher."""

from labstock.infrastructure.security.bcrypt_hasher import BcryptPasswordHasher


class TestBcryptPasswordHasher:

    def test_hash_and_verify(self):
        hasher = BcryptPasswordHasher(rounds=4)
        hashed = hasher.hash("s3cret")
        assert hashed != "s3cret"
        assert hashed.startswith("$2")
        assert hasher.verify("s3cret", hashed)
        assert not hasher.verify("wrong", hashed)

    def test_salted(self):
        hasher = BcryptPasswordHasher(rounds=4)
        assert hasher.hash("same") != hasher.hash("same")

    def test_non_bcrypt_hash_does_not_verify(self):
        assert not BcryptPasswordHasher(rounds=4).verify("pw", "plain-text")
