"""Unit tests for password hashing."""

from __future__ import annotations

import pytest

from microblog.auth.passwords import hash_password, verify_password


pytestmark = pytest.mark.unit


class TestHashPassword:
    """Tests for hash_password."""

    def test_is_bcrypt_and_salted(self) -> None:
        """Should produce a distinct bcrypt digest each time."""
        first = hash_password("foobar", rounds=4)
        second = hash_password("foobar", rounds=4)

        assert first.startswith("$2b$04$")
        assert first != second

    def test_default_rounds_from_settings(self) -> None:
        """Should use the configured cost factor."""
        # test overrides set bcrypt_rounds to 4
        assert hash_password("foobar").startswith("$2b$04$")


class TestVerifyPassword:
    """Tests for verify_password."""

    def test_correct_password(self) -> None:
        """Should accept the original password."""
        digest = hash_password("foobar", rounds=4)
        assert verify_password("foobar", digest) is True

    def test_wrong_password(self) -> None:
        """Should reject any other password."""
        digest = hash_password("foobar", rounds=4)
        assert verify_password("foobaz", digest) is False

    def test_malformed_digest(self) -> None:
        """Should return False instead of raising."""
        assert verify_password("foobar", "not-a-bcrypt-hash") is False

    def test_rejects_password_beyond_bcrypt_limit(self) -> None:
        """Should refuse to hash more than 72 bytes."""
        with pytest.raises(ValueError, match="72 bytes"):
            hash_password("\u65e5" * 25, rounds=4)

    def test_longer_attempt_never_matches(self) -> None:
        """Should not accept an attempt that shares the first 72 bytes."""
        digest = hash_password("a" * 72, rounds=4)

        assert verify_password("a" * 72, digest) is True
        assert verify_password("a" * 73, digest) is False
