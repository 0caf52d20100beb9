"""Password hashing and token tests — the two building blocks of login."""

import uuid
from datetime import timedelta

import jwt
import pytest

from tasktracker.auth.jwt import TokenError, create_access_token, verify_token
from tasktracker.auth.password import hash_password, verify_password
from tasktracker.config import settings


# ─── Passwords ───────────────────────────────────────────


def test_hash_is_salted():
    assert hash_password("hunter2") != hash_password("hunter2")


def test_hash_uses_configured_cost():
    cost = hash_password("hunter2").split("$")[2]
    assert int(cost) == settings.bcrypt_rounds
    assert int(cost) >= 10


def test_verify_password():
    hashed = hash_password("hunter2")
    assert verify_password("hunter2", hashed) is True
    assert verify_password("hunter3", hashed) is False


def test_verify_password_never_raises_on_bad_hash():
    assert verify_password("hunter2", "not-a-bcrypt-hash") is False
    assert verify_password("hunter2", "") is False


# ─── Tokens ──────────────────────────────────────────────


def test_token_roundtrip():
    user_id = str(uuid.uuid4())
    assert verify_token(create_access_token(user_id)) == user_id


def test_token_claims():
    token = create_access_token("abc")
    claims = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    assert claims["sub"] == "abc"
    assert claims["exp"] - claims["iat"] == settings.access_token_expire_minutes * 60


def test_expired_and_tampered_fail_identically():
    """Callers get the same error either way."""
    expired = create_access_token("abc", expires_delta=timedelta(seconds=-1))
    header, payload, _ = create_access_token("abc").split(".")
    foreign_sig = jwt.encode({"sub": "abc"}, "a-completely-different-secret-key-value").split(".")[2]
    tampered = f"{header}.{payload}.{foreign_sig}"

    with pytest.raises(TokenError) as e1:
        verify_token(expired)
    with pytest.raises(TokenError) as e2:
        verify_token(tampered)
    assert str(e1.value) == str(e2.value) == "Invalid token"


def test_garbage_token():
    with pytest.raises(TokenError):
        verify_token("a.b.c")
