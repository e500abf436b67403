"""Credentials - bcrypt hashing never stores plaintext and tolerates malformed hashes."""

import logging

import pytest

from marketplace.core.errors import InvalidArgumentError
from marketplace.infrastructure.credentials import hash_password, verify_password
from tests.helpers import PASSWORD, PASSWORD_HASH


def test_hash_is_not_plaintext():
    assert PASSWORD not in PASSWORD_HASH
    assert PASSWORD_HASH.startswith("$2")


def test_verify_accepts_right_password():
    assert verify_password(PASSWORD_HASH, PASSWORD)


def test_verify_rejects_wrong_password():
    assert not verify_password(PASSWORD_HASH, "wrong")


def test_same_password_hashes_differently():
    assert hash_password("pw") != hash_password("pw")


def test_malformed_hash_is_false_not_error():
    assert verify_password("not-a-bcrypt-hash", "pw") is False


def test_hash_refuses_password_past_byte_limit():
    # 72 characters, 144 bytes
    with pytest.raises(InvalidArgumentError) as exc:
        hash_password("é" * 72)
    assert exc.value.field == "password"


def test_hash_accepts_password_at_byte_limit():
    assert verify_password(hash_password("é" * 36), "é" * 36)


def test_verify_over_long_password_is_false_and_logged_as_such(caplog):
    with caplog.at_level(logging.WARNING, logger="marketplace.infrastructure.credentials"):
        assert verify_password(PASSWORD_HASH, "é" * 72) is False
    assert "byte limit" in caplog.text
    assert "malformed" not in caplog.text
