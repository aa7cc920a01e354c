"""
Tests for password hashing.
"""

import pytest

from finflow.auth.passwords import PasswordHasher


@pytest.fixture
def hasher():
    return PasswordHasher(iterations=1_000)


class TestPasswordHasher:
    def test_verify_own_hash(self, hasher):
        digest = hasher.hash("correct horse battery")
        assert hasher.verify("correct horse battery", digest)

    def test_hash_is_salted(self, hasher):
        first = hasher.hash("same-password")
        second = hasher.hash("same-password")

        assert first != second
        assert hasher.verify("same-password", first)
        assert hasher.verify("same-password", second)

    def test_digest_is_not_the_password(self, hasher):
        digest = hasher.hash("plaintext123")
        assert "plaintext123" not in digest

    def test_wrong_password(self, hasher):
        digest = hasher.hash("right-password")
        assert not hasher.verify("wrong-password", digest)

    @pytest.mark.parametrize("digest", ["", "no-separator", "a:b:c", ":abc", "abc:"])
    def test_malformed_digest_returns_false(self, hasher, digest):
        assert hasher.verify("anything", digest) is False

    def test_iterations_are_part_of_the_digest_check(self, hasher):
        digest = hasher.hash("password123")
        assert not PasswordHasher(iterations=2_000).verify("password123", digest)

    def test_unencodable_password_returns_false(self, hasher):
        digest = hasher.hash("password123")
        # Lone surrogate cannot be UTF-8 encoded
        assert hasher.verify("\ud800", digest) is False

    def test_non_ascii_digest_returns_false(self, hasher):
        assert hasher.verify("password123", "salt:é") is False
