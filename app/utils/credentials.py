"""Credential generation and hashing helpers."""
from __future__ import annotations

import secrets
import string

import bcrypt

CREDENTIAL_LENGTH = 32
_ALPHABET = string.ascii_letters + string.digits


def random_string(length: int = CREDENTIAL_LENGTH) -> str:
    """Return a cryptographically random alphanumeric string."""
    return ''.join(secrets.choice(_ALPHABET) for _ in range(length))


def hash_secret(secret: str, rounds: int = 12) -> str:
    """Hash a token secret for storage (bcrypt, cost-parameterized)."""
    return bcrypt.hashpw(secret.encode('utf-8'), bcrypt.gensalt(rounds=rounds)).decode('utf-8')


def verify_secret(secret: str, secret_hash: str) -> bool:
    try:
        return bcrypt.checkpw(secret.encode('utf-8'), secret_hash.encode('utf-8'))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False
