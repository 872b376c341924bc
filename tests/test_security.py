"""Token issuer and password hasher tests."""
from datetime import timedelta

import jwt
import pytest

from user_api.adapters.security.jwt_tokens import JWT_ALGORITHM, InvalidTokenError, JWTTokenIssuer

SECRET = "unit-test-secret-with-enough-length!"


def test_issue_and_verify():
    issuer = JWTTokenIssuer(SECRET, 2)

    token, expires_at = issuer.issue("user-1")
    claims = issuer.verify(token)

    assert claims["sub"] == "user-1"
    assert claims["exp"] - claims["iat"] == int(timedelta(hours=2).total_seconds())
    assert int(expires_at.timestamp()) == claims["exp"]


def test_expired_token_is_rejected():
    issuer = JWTTokenIssuer(SECRET, 1)
    token = jwt.encode({"sub": "user-1", "iat": 0, "exp": 1}, SECRET, algorithm=JWT_ALGORITHM)

    with pytest.raises(InvalidTokenError):
        issuer.verify(token)


def test_token_without_subject_is_rejected():
    issuer = JWTTokenIssuer(SECRET, 1)
    token = jwt.encode({"iat": 0, "exp": 9999999999}, SECRET, algorithm=JWT_ALGORITHM)

    with pytest.raises(InvalidTokenError):
        issuer.verify(token)


def test_garbage_token_is_rejected():
    with pytest.raises(InvalidTokenError):
        JWTTokenIssuer(SECRET, 1).verify("not.a.token")


def test_empty_secret_is_refused():
    with pytest.raises(ValueError):
        JWTTokenIssuer("", 1)


def test_password_hash_roundtrip(hasher):
    hashed = hasher.hash("TestPass123!")

    assert hashed != "TestPass123!"
    assert hasher.verify("TestPass123!", hashed)
    assert not hasher.verify("wrong", hashed)


def test_verify_against_malformed_hash(hasher):
    assert hasher.verify("anything", "not-a-bcrypt-hash") is False
