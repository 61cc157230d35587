"""
Password hashing utilities using bcrypt.

Passwords are never stored in plain text: hash_password() is applied before
any user row is written, and verify_password() only accepts bcrypt hashes.
"""

import bcrypt

from shared.config.logging import get_logger
from shared.config.settings import settings

logger = get_logger(__name__)

BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Example:
        hashed = hash_password("mypassword123")
        # Returns something like: $2b$12$...
    """
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against its hash.

    Non-bcrypt values are rejected outright.
    """
    if not hashed_password or not hashed_password.startswith(BCRYPT_PREFIXES):
        logger.warning("SECURITY: Non-bcrypt password hash rejected")
        return False

    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        logger.warning("SECURITY: Malformed bcrypt hash rejected")
        return False


def _hash_rounds(hashed_password: str) -> int | None:
    # "$2b$12$..." -> 12
    parts = hashed_password.split("$")
    if len(parts) < 4:
        return None
    try:
        return int(parts[2])
    except ValueError:
        return None


def needs_rehash(hashed_password: str) -> bool:
    """
    Check if a password hash should be regenerated after a successful login.

    True for non-bcrypt values and for hashes made with fewer rounds than
    currently configured.
    """
    if not hashed_password.startswith(BCRYPT_PREFIXES):
        return True

    rounds = _hash_rounds(hashed_password)
    return rounds is None or rounds < settings.bcrypt_rounds
