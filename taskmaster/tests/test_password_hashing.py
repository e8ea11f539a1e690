from __future__ import annotations

from taskmaster.application.services.password_hashing import ScryptPasswordHasher


def test_hash_then_verify_round_trip() -> None:
    hasher = ScryptPasswordHasher()
    stored = hasher.hash("pw")

    assert hasher.verify("pw", stored)
    assert not hasher.verify("pw2", stored)


def test_hash_format_is_salt_colon_hex_key() -> None:
    stored = ScryptPasswordHasher().hash("secret123")

    salt, key = stored.split(":")
    assert len(salt) == 32
    assert len(key) == 128
    int(key, 16)


def test_same_password_gets_fresh_salt() -> None:
    hasher = ScryptPasswordHasher()

    assert hasher.hash("pw") != hasher.hash("pw")


def test_malformed_stored_hash_never_verifies() -> None:
    hasher = ScryptPasswordHasher()

    assert not hasher.verify("pw", "")
    assert not hasher.verify("pw", "no-separator")
    assert not hasher.verify("pw", "salt:not-hex")
