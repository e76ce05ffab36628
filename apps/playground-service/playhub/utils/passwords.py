"""
Password hashing for user credentials.

Responsibilities:
- Hash passwords with Argon2id
- Verify a candidate password against a stored hash without raising
- Report when a stored hash was made with outdated parameters
"""
from __future__ import annotations

import os

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError


def _hasher_from_env() -> PasswordHasher:
    """Build the hasher; cost parameters can be lowered for test runs via env."""
    time_cost = int(os.getenv("PLAYHUB_ARGON2_TIME_COST", "2"))
    memory_cost = int(os.getenv("PLAYHUB_ARGON2_MEMORY_COST", "65536"))
    return PasswordHasher(time_cost=time_cost, memory_cost=memory_cost, parallelism=4, hash_len=32)


_argon2 = _hasher_from_env()


def hash_password(password: str) -> str:
    if not password:
        raise ValueError("password must not be empty")
    return _argon2.hash(password)


def verify_password(password: str, encoded_hash: str) -> bool:
    if not password or not encoded_hash:
        return False
    try:
        return _argon2.verify(encoded_hash, password)
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False


def needs_rehash(encoded_hash: str) -> bool:
    return _argon2.check_needs_rehash(encoded_hash)
