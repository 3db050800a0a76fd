"""Tests for password hashing and validation."""

import pytest

from grantees.auth.password import (
    PasswordStrengthError,
    check_needs_rehash,
    hash_password,
    validate_password_strength,
    verify_password,
)


class TestPasswordHashing:
    def test_hash_and_verify(self):
        password = "Builder2026"
        hashed = hash_password(password)
        assert hashed.startswith("$argon2id$")
        assert verify_password(password, hashed) is True

    def test_wrong_password_rejected(self):
        hashed = hash_password("Correct2026")
        assert verify_password("Wrong2026", hashed) is False

    def test_invalid_hash_rejected(self):
        assert verify_password("Builder2026", "not-a-hash") is False

    def test_fresh_hash_needs_no_rehash(self):
        assert check_needs_rehash(hash_password("Builder2026")) is False


class TestPasswordStrength:
    def test_strong_password_accepted(self):
        validate_password_strength("grants4all")  # Should not raise

    def test_empty_password_rejected(self):
        with pytest.raises(PasswordStrengthError, match="empty"):
            validate_password_strength("")

    def test_short_password_rejected(self):
        with pytest.raises(PasswordStrengthError, match="at least 8"):
            validate_password_strength("abc123")

    def test_no_digit_rejected(self):
        with pytest.raises(PasswordStrengthError, match="digit"):
            validate_password_strength("NoDigitHere")

    def test_no_letter_rejected(self):
        with pytest.raises(PasswordStrengthError, match="letter"):
            validate_password_strength("1234567890")

    def test_too_long_password_rejected(self):
        with pytest.raises(PasswordStrengthError, match="at most"):
            validate_password_strength("a" * 128 + "1")
