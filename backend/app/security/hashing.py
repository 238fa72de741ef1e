# backend/app/security/hashing.py
"""
Password hashing with bcrypt.

Every hash gets its own random salt, embedded in the returned string, so
two accounts with the same password never share a hash.
"""
from typing import Optional

import bcrypt

from backend.app.core.config import settings

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def password_too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > MAX_PASSWORD_BYTES


def get_password_hash(password: str, rounds: Optional[int] = None) -> str:
    """
    Hash a plaintext password with a fresh salt.

    Raises ValueError for passwords longer than MAX_PASSWORD_BYTES; callers
    are expected to reject those before hashing.
    """
    if password_too_long(password):
        raise ValueError("password exceeds 72 bytes")

    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    if not plain_password or not hashed_password:
        return False
    if password_too_long(plain_password):
        return False

    try:
        return bcrypt.checkpw(
            plain_password.encode("utf-8"), hashed_password.encode("utf-8")
        )
    except ValueError:
        # Stored value is not a bcrypt hash
        return False
