"""Tests for password hashing."""

from unittest.mock import patch

import pytest

from whereto_auth.domain.errors import HashingError
from whereto_auth.domain.services import PasswordHasher, generate_temp_password


class TestPasswordHasher:
    """Hash/verify behaviour."""

    def test_verify_matches_own_hash(self, hasher: PasswordHasher):
        """A hash verifies against the password it came from."""
        for password in ["password123", "p", "ünïcødé-pässwörd", " spaced out "]:
            assert hasher.verify(password, hasher.hash(password))

    def test_verify_rejects_other_password(self, hasher: PasswordHasher):
        hashed = hasher.hash("password123")
        assert not hasher.verify("password124", hashed)
        assert not hasher.verify("Password123", hashed)

    def test_hash_is_salted(self, hasher: PasswordHasher):
        """Same password hashed twice gives two different strings."""
        first = hasher.hash("password123")
        second = hasher.hash("password123")
        assert first != second
        assert hasher.verify("password123", first)
        assert hasher.verify("password123", second)

    def test_hash_never_contains_plaintext(self, hasher: PasswordHasher):
        hashed = hasher.hash("password123")
        assert hashed
        assert "password123" not in hashed
        assert hashed.startswith("$2b$")
        assert len(hashed) == 60

    def test_malformed_hash_is_not_an_error(self, hasher: PasswordHasher):
        """Garbage hashes return False instead of raising."""
        assert not hasher.verify("password123", "not-a-hash")
        assert not hasher.verify("password123", "$2b$04$tooshort")
        assert not hasher.verify("password123", "")

    def test_empty_password_never_verifies(self, hasher: PasswordHasher):
        assert not hasher.verify("", hasher.hash("password123"))

    def test_long_passwords_hash_and_verify(self, hasher: PasswordHasher):
        """Passwords past bcrypt's 72-byte input limit still work."""
        long_password = "a" * 80
        assert hasher.verify(long_password, hasher.hash(long_password))
        assert hasher.verify("é" * 50, hasher.hash("é" * 50))  # 100 bytes

    def test_bytes_after_72_matter(self, hasher: PasswordHasher):
        hashed = hasher.hash("a" * 72 + "x")
        assert hasher.verify("a" * 72 + "x", hashed)
        assert not hasher.verify("a" * 72 + "y", hashed)
        assert not hasher.verify("a" * 72, hashed)

    def test_dummy_hash_built_up_front(self):
        """The first lookup miss costs one verify, not a hash plus a verify."""
        hasher = PasswordHasher(rounds=4)
        with patch.object(hasher, "hash") as hash_:
            hasher.dummy_verify("anything")
        hash_.assert_not_called()

    def test_dummy_verify_returns_nothing(self, hasher: PasswordHasher):
        assert hasher.dummy_verify("anything") is None
        assert hasher.dummy_verify("") is None

    def test_entropy_failure_raises_hashing_error(self, hasher: PasswordHasher):
        with patch.object(hasher._context, "hash", side_effect=OSError("no entropy")):
            with pytest.raises(HashingError):
                hasher.hash("password123")


class TestTempPassword:
    def test_length_and_alphabet(self):
        password = generate_temp_password(16)
        assert len(password) == 16
        assert password.isalnum()

    def test_distinct(self):
        assert generate_temp_password() != generate_temp_password()
