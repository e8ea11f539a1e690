"""Password hashing strategies."""

from __future__ import annotations

import hashlib
import hmac
import secrets

from taskmaster.domain.users.repositories import PasswordHasher

SCRYPT_N = 16384
SCRYPT_R = 8
SCRYPT_P = 1
SCRYPT_KEY_LEN = 64
SALT_BYTES = 16


def _derive(password: str, salt: str) -> bytes:
    return hashlib.scrypt(
        password.encode("utf-8"),
        salt=salt.encode("utf-8"),
        n=SCRYPT_N,
        r=SCRYPT_R,
        p=SCRYPT_P,
        dklen=SCRYPT_KEY_LEN,
    )


class ScryptPasswordHasher(PasswordHasher):
    """Stores ``<hex salt>:<hex scrypt key>``."""

    def hash(self, password: str) -> str:
        salt = secrets.token_hex(SALT_BYTES)
        return f"{salt}:{_derive(password, salt).hex()}"

    def verify(self, password: str, hashed: str) -> bool:
        salt, sep, digest = (hashed or "").partition(":")
        if not sep or not salt or not digest:
            return False
        try:
            expected = bytes.fromhex(digest)
        except ValueError:
            return False
        return hmac.compare_digest(expected, _derive(password, salt))
