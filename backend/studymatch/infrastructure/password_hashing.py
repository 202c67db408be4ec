"""Password Hashing: bcrypt wrappers used only by the account service.

Invariants:
    - Plain passwords never leave this module except as bcrypt hashes
    - Inputs are truncated to bcrypt's 72-byte limit before hashing and checking
    - verify_password returns False for malformed hashes instead of raising
"""

import logging

import bcrypt

logger = logging.getLogger(__name__)

BCRYPT_MAX_BYTES = 72


def _to_bytes(password: str) -> bytes:
    data = password.encode("utf-8")
    if len(data) > BCRYPT_MAX_BYTES:
        logger.warning(
            f"Password exceeds {BCRYPT_MAX_BYTES} bytes, truncating",
        )
        data = data[:BCRYPT_MAX_BYTES]
    return data


def hash_password(password: str, rounds: int = 12) -> str:
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_to_bytes(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(_to_bytes(password), password_hash.encode("utf-8"))
    except ValueError as e:
        logger.error(f"Password verification error: {e}")
        return False
