"""Auth tests — registration and login.

Learn: Tests cover:
1. Registration + duplicate prevention + required fields
2. Passwords stored only as bcrypt hashes
3. Login → token whose subject is the registered user
4. Login failures (unknown user, wrong password) are both 400
"""

import uuid

import jwt
import pytest
from sqlalchemy import select

from tasktracker.auth.jwt import verify_token
from tasktracker.config import settings
from tasktracker.db.models import User


def _name(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8]}"


# ═══════════════════════════════════════════════════════════
# Registration
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_register_user(client):
    """Register a new account — 201 with a message, no token."""
    r = await client.post("/register", json={"username": _name("reg"), "password": "pw1"})
    assert r.status_code == 201
    assert r.json() == {"message": "User created successfully"}


@pytest.mark.asyncio
async def test_register_stores_bcrypt_hash(client, session_factory):
    """The plaintext password never reaches the database."""
    username = _name("hash")
    await client.post("/register", json={"username": username, "password": "pw1"})

    async with session_factory() as s:
        user = (await s.execute(select(User).where(User.username == username))).scalars().one()
    assert user.password_hash != "pw1"
    assert user.password_hash.startswith(f"$2b${settings.bcrypt_rounds:02d}$")


@pytest.mark.asyncio
async def test_register_duplicate_username(client):
    """Same username twice is a 400 conflict, whatever the password."""
    username = _name("dup")
    r1 = await client.post("/register", json={"username": username, "password": "first"})
    assert r1.status_code == 201

    r2 = await client.post("/register", json={"username": username, "password": "second"})
    assert r2.status_code == 400
    assert r2.json() == {"error": "Username already exists"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"username": "", "password": "pw"},
        {"username": "someone", "password": ""},
        {"username": "   ", "password": "pw"},
        {"password": "pw"},
        {"username": "someone"},
        {},
    ],
)
async def test_register_requires_username_and_password(client, body):
    r = await client.post("/register", json=body)
    assert r.status_code == 400
    assert r.json() == {"error": "Username and password required"}


@pytest.mark.asyncio
async def test_register_username_too_long(client):
    r = await client.post("/register", json={"username": "u" * 151, "password": "pw"})
    assert r.status_code == 400
    assert r.json() == {"error": "Username must be at most 150 characters"}

    r = await client.post("/register", json={"username": "u" * 150, "password": "pw"})
    assert r.status_code == 201


@pytest.mark.asyncio
async def test_register_without_body(client):
    """No JSON body at all is a 400 with an error message, not a 422."""
    r = await client.post("/register")
    assert r.status_code == 400
    assert "error" in r.json()


# ═══════════════════════════════════════════════════════════
# Login
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_login_success(client, session_factory):
    """register → login returns a token whose subject is the new user."""
    username = _name("login")
    await client.post("/register", json={"username": username, "password": "pw1"})

    r = await client.post("/login", json={"username": username, "password": "pw1"})
    assert r.status_code == 200
    body = r.json()
    assert body["username"] == username

    async with session_factory() as s:
        user = (await s.execute(select(User).where(User.username == username))).scalars().one()
    assert verify_token(body["token"]) == str(user.id)


@pytest.mark.asyncio
async def test_login_token_expires_in_one_hour(client):
    username = _name("exp")
    await client.post("/register", json={"username": username, "password": "pw1"})
    r = await client.post("/login", json={"username": username, "password": "pw1"})

    claims = jwt.decode(r.json()["token"], options={"verify_signature": False})
    assert claims["exp"] - claims["iat"] == 3600


@pytest.mark.asyncio
async def test_login_issues_fresh_token_each_time(client):
    """Each login mints its own token; both verify to the same subject."""
    username = _name("fresh")
    await client.post("/register", json={"username": username, "password": "pw1"})
    t1 = (await client.post("/login", json={"username": username, "password": "pw1"})).json()["token"]
    t2 = (await client.post("/login", json={"username": username, "password": "pw1"})).json()["token"]
    assert verify_token(t1) == verify_token(t2)


@pytest.mark.asyncio
async def test_login_wrong_password(client):
    username = _name("wrong")
    await client.post("/register", json={"username": username, "password": "correct"})

    r = await client.post("/login", json={"username": username, "password": "incorrect"})
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid password"}


@pytest.mark.asyncio
async def test_login_nonexistent_user(client):
    r = await client.post("/login", json={"username": _name("nobody"), "password": "whatever"})
    assert r.status_code == 400
    assert r.json() == {"error": "User not found"}


@pytest.mark.asyncio
async def test_login_missing_fields(client):
    r = await client.post("/login", json={"username": "alice"})
    assert r.status_code == 400
    assert "error" in r.json()
