"""Password hashing utilities.

Learn: Uses bcrypt for password hashing. bcrypt generates a random salt
for every hash, so hashing the same password twice gives two different
strings, and the cost factor (settings.bcrypt_rounds, never below 10)
makes brute force expensive. Passwords are truncated to 72 bytes
(bcrypt's limit).

verify_password is the only way hashes get compared anywhere in the app.
"""

import bcrypt

from tasktracker.config import settings


def hash_password(password: str) -> str:
    """Hash a password with bcrypt. Produces a "$2b$<rounds>$..." string."""
    pw_bytes = password.encode("utf-8")[:72]
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(pw_bytes, salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored hash. Never raises on a mismatch."""
    try:
        pw_bytes = password.encode("utf-8")[:72]
        hash_bytes = password_hash.encode("utf-8")
        return bcrypt.checkpw(pw_bytes, hash_bytes)
    except (ValueError, TypeError):
        return False
