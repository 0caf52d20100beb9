"""UserService tests — registration and credential checks, without HTTP."""

import pytest

from tasktracker.errors import AuthError, ConflictError
from tasktracker.services.user_service import UserService


@pytest.mark.asyncio
async def test_register_then_authenticate(db_session):
    svc = UserService(db_session)
    user = await svc.register("  bob ", "pw1")

    assert user.username == "bob"
    assert (await svc.authenticate("bob", "pw1")).id == user.id


@pytest.mark.asyncio
async def test_concurrent_duplicate_is_conflict(db_session, monkeypatch):
    """A duplicate that slips past the pre-check hits the unique constraint."""
    svc = UserService(db_session)
    await svc.register("bob", "pw1")

    async def not_found(username):
        return None

    monkeypatch.setattr(svc, "get_by_username", not_found)

    with pytest.raises(ConflictError, match="Username already exists"):
        await svc.register("bob", "pw2")


@pytest.mark.asyncio
async def test_authenticate_failures(db_session):
    svc = UserService(db_session)
    await svc.register("carol", "pw1")

    with pytest.raises(AuthError, match="Invalid password"):
        await svc.authenticate("carol", "nope")
    with pytest.raises(AuthError, match="User not found"):
        await svc.authenticate("nobody", "pw1")
