"""
Password hashing and verification utilities.

Hashes are produced with bcrypt; when the bcrypt backend is unusable the
hash falls back to PBKDF2-SHA256, which ``verify_password`` also accepts.
"""

import logging

from passlib.context import CryptContext

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
fallback_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def _truncate(password: str) -> str:
    encoded = password.encode("utf-8")
    if len(encoded) <= BCRYPT_MAX_BYTES:
        return password
    return encoded[:BCRYPT_MAX_BYTES].decode("utf-8", errors="ignore")


def hash_password(password: str) -> str:
    """
    Hash a plaintext password.

    Args:
        password: The plaintext password to hash

    Returns:
        The hashed password as a string

    Raises:
        ValueError: If neither bcrypt nor the fallback can hash the password
    """
    try:
        return pwd_context.hash(_truncate(password))
    except Exception as e:
        logger.warning("bcrypt hashing unavailable (%s), using pbkdf2_sha256", e)
        try:
            return fallback_context.hash(password)
        except Exception as fallback_error:
            raise ValueError(
                f"Password hashing failed: bcrypt error: {e}, fallback error: {fallback_error}"
            )


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plaintext password against a stored hash.

    Returns:
        True if the password matches, False otherwise
    """
    if fallback_context.identify(hashed_password):
        return fallback_context.verify(plain_password, hashed_password)
    try:
        return pwd_context.verify(_truncate(plain_password), hashed_password)
    except Exception as e:
        logger.warning("Password verification failed: %s", e)
        return False
