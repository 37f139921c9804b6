"""Password hashing utilities.

bcrypt reads at most 72 bytes of input (newer releases refuse longer
input outright), so passwords are first reduced to the base64 of their
SHA-256 digest. Every password, whatever its length, then hashes to a
44-byte bcrypt input and no characters are silently dropped.

Both functions are CPU-bound; async callers run them with
``asyncio.to_thread``.
"""

import base64
import hashlib

import bcrypt

from credo.config import AuthSettings


def _prehash(password: str) -> bytes:
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def hash_password(password: str, settings: AuthSettings) -> str:
    """Hash a password with bcrypt.

    Args:
        password: Plain-text password, any length
        settings: Authentication settings (cost factor)

    Returns:
        bcrypt hash as text
    """
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(_prehash(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str | None) -> bool:
    """Check a password against a stored bcrypt hash.

    Args:
        password: Plain-text password
        password_hash: Stored hash, None for users without a local password

    Returns:
        True if the password matches
    """
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(_prehash(password), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed hash in the store
        return False
