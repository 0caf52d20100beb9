"""JWT token creation and verification.

Learn: JWT (JSON Web Token) provides stateless authentication. The
server never stores issued tokens: the signature proves we minted it and
the exp claim bounds its lifetime (one hour by default). There is no
refresh token and no revocation, so a leaked token is valid until exp.

Every verification failure surfaces as the same TokenError so callers
can't tell "expired" from "tampered"; only the logs record the reason.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
import structlog

from tasktracker.config import settings

logger = structlog.get_logger()


class TokenError(Exception):
    """Raised when token verification fails."""


def create_access_token(
    user_id: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Create a signed access token whose subject is the user id."""
    now = datetime.now(timezone.utc)
    expires = now + (
        expires_delta
        if expires_delta is not None
        else timedelta(minutes=settings.access_token_expire_minutes)
    )
    payload = {
        "sub": str(user_id),
        "iat": now,
        "exp": expires,
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


def verify_token(token: str) -> str:
    """Verify a token's signature and expiry and return its subject.

    Raises TokenError on any failure.
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp", "iat"]},
        )
    except jwt.ExpiredSignatureError:
        logger.info("auth.token_rejected", reason="expired")
        raise TokenError("Invalid token")
    except jwt.InvalidTokenError as e:
        logger.info("auth.token_rejected", reason="invalid", error=str(e))
        raise TokenError("Invalid token")
    return payload["sub"]
