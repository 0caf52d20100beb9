"""Test fixtures — a fresh in-memory database per test, real auth pipeline.

Learn: Testing pattern for async SQLAlchemy + FastAPI:

1. Settings are required at import time, so the env vars are set here,
   before anything from tasktracker is imported.
2. Each test gets its own in-memory SQLite engine (aiosqlite + StaticPool,
   so every session shares the single connection that holds the data).
   Tables come straight from Base.metadata.
3. get_db is overridden to hand out sessions from that engine. Auth is
   NOT overridden: tests register, log in, and send real tokens, because
   the guard and ownership scoping are exactly what we want to exercise.
"""

import os

os.environ["TASKTRACKER_DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["TASKTRACKER_SECRET_KEY"] = "test-secret-key-0123456789-abcdefghijklmnop"
os.environ["TASKTRACKER_BCRYPT_ROUNDS"] = "10"

import uuid  # noqa: E402

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from tasktracker.db.engine import get_db  # noqa: E402
from tasktracker.db.models import Base, User  # noqa: E402
from tasktracker.main import app  # noqa: E402


@pytest_asyncio.fixture()
async def db_engine():
    """Per-test in-memory database with the schema created."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture()
async def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture()
async def db_session(session_factory):
    """A session for calling services directly (no HTTP)."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture()
async def owner_id(db_session):
    """Id of a user row that owns tasks in service-level tests."""
    user = User(username=f"owner-{uuid.uuid4().hex[:8]}", password_hash="$2b$10$notarealhash")
    db_session.add(user)
    await db_session.commit()
    return user.id


@pytest_asyncio.fixture()
async def client(session_factory):
    """HTTP client against the real app, with get_db pointed at the test DB."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def login(client):
    """Register + log in a fresh user; returns the Authorization headers.

    Usage: headers = await login() or await login("alice", "pw1")
    """

    async def _login(username: str | None = None, password: str = "password_123") -> dict:
        username = username or f"user-{uuid.uuid4().hex[:8]}"
        r = await client.post("/register", json={"username": username, "password": password})
        assert r.status_code == 201, r.text
        r = await client.post("/login", json={"username": username, "password": password})
        assert r.status_code == 200, r.text
        return {"Authorization": r.json()["token"]}

    return _login
