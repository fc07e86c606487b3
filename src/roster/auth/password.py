"""Password hashing utilities.

Learn: Uses bcrypt for secure password hashing. bcrypt salts each hash
automatically, and the work factor (settings.bcrypt_rounds) keeps a
single hash in the tens of milliseconds. Passwords are truncated to
72 bytes (bcrypt's limit).

bcrypt is CPU-bound, so request handlers call the *_async variants,
which run in a worker thread and keep the event loop free.
"""

import asyncio
from typing import Optional

import bcrypt

from roster.config import settings


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """Hash a password with bcrypt. Returns the "$2b$..." string."""
    pw_bytes = password.encode("utf-8")[:72]
    salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
    return bcrypt.hashpw(pw_bytes, salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored hash.

    Returns False (never raises) on mismatch or an unreadable hash.
    """
    try:
        pw_bytes = password.encode("utf-8")[:72]
        return bcrypt.checkpw(pw_bytes, password_hash.encode("utf-8"))
    except (ValueError, TypeError):
        return False


async def hash_password_async(password: str) -> str:
    return await asyncio.to_thread(hash_password, password)


async def verify_password_async(password: str, password_hash: str) -> bool:
    return await asyncio.to_thread(verify_password, password, password_hash)
