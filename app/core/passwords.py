"""Salted scrypt password hashing.

Encoded form: ``scrypt$<n>$<r>$<p>$<salt b64>$<hash b64>`` so the cost can be
raised later without invalidating stored hashes.
"""

from __future__ import annotations

import base64
import os

from cryptography.exceptions import InvalidKey
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt

from app.config import get_settings

SCHEME = "scrypt"
SALT_BYTES = 16
KEY_LENGTH = 32
BLOCK_SIZE = 8
PARALLELISM = 1


def _b64encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).decode("ascii")


def _b64decode(text: str) -> bytes:
    return base64.urlsafe_b64decode(text.encode("ascii"))


def hash_password(password: str) -> str:
    """Derive a salted one-way hash for storage."""
    n = get_settings().password_scrypt_n
    salt = os.urandom(SALT_BYTES)
    kdf = Scrypt(salt=salt, length=KEY_LENGTH, n=n, r=BLOCK_SIZE, p=PARALLELISM)
    derived = kdf.derive(password.encode("utf-8"))
    return "$".join(
        [
            SCHEME,
            str(n),
            str(BLOCK_SIZE),
            str(PARALLELISM),
            _b64encode(salt),
            _b64encode(derived),
        ]
    )


def verify_password(password: str, encoded: str) -> bool:
    """Constant-time check of ``password`` against an encoded hash."""
    try:
        scheme, n, r, p, salt, expected = encoded.split("$")
    except ValueError:
        return False
    if scheme != SCHEME:
        return False
    try:
        kdf = Scrypt(
            salt=_b64decode(salt),
            length=KEY_LENGTH,
            n=int(n),
            r=int(r),
            p=int(p),
        )
        digest = _b64decode(expected)
    except ValueError:
        return False
    try:
        kdf.verify(password.encode("utf-8"), digest)
    except InvalidKey:
        return False
    return True
