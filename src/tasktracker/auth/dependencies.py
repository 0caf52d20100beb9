"""FastAPI auth dependencies.

Learn: get_current_user is the access guard. It's attached to the tasks
router in api/__init__.py, so no task route can run without it. The
token travels as the raw Authorization header value; a "Bearer " prefix
is tolerated for clients that add one.

The guard never touches the database: the token's own subject is the
identity, and every task query is then filtered by it.
"""

import uuid
from typing import Optional

import structlog
from fastapi import Header

from tasktracker.auth.jwt import TokenError, verify_token
from tasktracker.errors import UnauthorizedError

logger = structlog.get_logger()


class CurrentIdentity:
    """The authenticated user making the request.

    Learn: downstream code only ever reads user_id from here, never
    from the request body or path, so a caller can only act as the
    subject of their own token.
    """

    def __init__(self, user_id: uuid.UUID):
        self.user_id = user_id

    def __repr__(self) -> str:
        return f"CurrentIdentity(user_id={self.user_id})"


def _extract_token(authorization: Optional[str]) -> Optional[str]:
    if authorization is None:
        return None
    token = authorization.strip()
    if token[:7].lower() == "bearer ":
        token = token[7:].strip()
    return token or None


async def get_current_user(
    authorization: Optional[str] = Header(None),
) -> CurrentIdentity:
    """Extract and verify the bearer token (401 if missing or bad)."""
    token = _extract_token(authorization)
    if token is None:
        raise UnauthorizedError("Access denied: no token provided")

    try:
        subject = verify_token(token)
        user_id = uuid.UUID(subject)
    except (TokenError, ValueError):
        raise UnauthorizedError("Invalid token")

    structlog.contextvars.bind_contextvars(user_id=str(user_id))
    return CurrentIdentity(user_id=user_id)
