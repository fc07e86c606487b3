"""Password hashing tests."""

import pytest

from roster.auth.password import (
    hash_password,
    hash_password_async,
    verify_password,
    verify_password_async,
)


def test_hash_is_not_plaintext():
    h = hash_password("secret1")
    assert "secret1" not in h
    assert h.startswith("$2")


def test_verify_correct_password():
    h = hash_password("secret1")
    assert verify_password("secret1", h) is True


def test_verify_wrong_password_returns_false():
    h = hash_password("secret1")
    assert verify_password("secret2", h) is False


def test_same_password_gets_different_salts():
    assert hash_password("secret1") != hash_password("secret1")


def test_verify_against_garbage_hash_returns_false():
    """An unreadable stored hash is a mismatch, not a crash."""
    assert verify_password("secret1", "not-a-bcrypt-hash") is False
    assert verify_password("secret1", "") is False


@pytest.mark.asyncio
async def test_async_variants():
    h = await hash_password_async("secret1")
    assert await verify_password_async("secret1", h) is True
    assert await verify_password_async("nope", h) is False
