"""User service — registration and credential checks.

Learn: Registration does a friendly pre-check for the username, but the
unique constraint on users.username is the real guard: two concurrent
registrations can both pass the pre-check, and the loser's INSERT fails
with IntegrityError, which we report as the same ConflictError.
"""

from typing import Optional

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tasktracker.auth.password import hash_password, verify_password
from tasktracker.db.models import User
from tasktracker.errors import AuthError, ConflictError, ValidationError

logger = structlog.get_logger()

# users.username is VARCHAR(150)
MAX_USERNAME_LENGTH = 150


def _require_credentials(
    username: Optional[str], password: Optional[str]
) -> tuple[str, str]:
    username = (username or "").strip()
    if not username or not password:
        raise ValidationError("Username and password required")
    return username, password


class UserService:
    """Business logic for accounts."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_username(self, username: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.username == username))
        return result.scalars().first()

    async def register(self, username: Optional[str], password: Optional[str]) -> User:
        """Create an account. No token is issued; the caller logs in next."""
        username, password = _require_credentials(username, password)
        if len(username) > MAX_USERNAME_LENGTH:
            raise ValidationError(f"Username must be at most {MAX_USERNAME_LENGTH} characters")

        if await self.get_by_username(username):
            raise ConflictError("Username already exists")

        user = User(username=username, password_hash=hash_password(password))
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError("Username already exists")

        logger.info("auth.registered", user_id=str(user.id))
        return user

    async def authenticate(self, username: Optional[str], password: Optional[str]) -> User:
        """Return the user if the password matches, else raise AuthError.

        Both failure modes are 400; only the message differs.
        """
        username, password = _require_credentials(username, password)

        user = await self.get_by_username(username)
        if not user:
            logger.info("auth.login_failed", reason="user_not_found")
            raise AuthError("User not found")

        if not verify_password(password, user.password_hash):
            logger.info("auth.login_failed", reason="bad_password", user_id=str(user.id))
            raise AuthError("Invalid password")

        return user
