"""
Password hashing and verification.

Uses bcrypt with automatic salting; the work factor comes from
``config.bcrypt_rounds`` (env var: ``BCRYPT_ROUNDS``).
"""

from __future__ import annotations

import bcrypt

from config.settings import config


def hash_password(password: str) -> str:
    """Hash a password with bcrypt (auto-salted)."""
    salt = bcrypt.gensalt(rounds=config.bcrypt_rounds)
    return bcrypt.hashpw(password.encode(), salt).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time check against a stored hash; malformed hashes never match."""
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except (ValueError, TypeError):
        return False
