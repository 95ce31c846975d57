"""
utils/passwords.py
------------------
bcrypt helpers for storing user passwords.
"""

import bcrypt

BCRYPT_ROUNDS = 10


def get_password_hash(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a plaintext password with a fresh salt."""
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds))
    return hashed.decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """Check a plaintext password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False
