"""Account passwords: argon2id hashes and the sign-up strength rule."""

from __future__ import annotations

import argon2
from argon2.exceptions import InvalidHashError, VerifyMismatchError

from grantees.config import get_settings

_hasher = argon2.PasswordHasher(
    time_cost=2,
    memory_cost=64 * 1024,
    parallelism=1,
    hash_len=32,
    salt_len=16,
    type=argon2.Type.ID,
)


class PasswordStrengthError(ValueError):
    """The chosen password is rejected at registration."""


def hash_password(password: str) -> str:
    return _hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """False for a wrong password or a stored value that is not an argon2 hash."""
    try:
        return _hasher.verify(password_hash, password)
    except (VerifyMismatchError, InvalidHashError):
        return False


def check_needs_rehash(password_hash: str) -> bool:
    """True when the hash was made with older hasher parameters."""
    return _hasher.check_needs_rehash(password_hash)


def validate_password_strength(password: str) -> None:
    """
    Reject passwords outside the configured length, or without both a letter and a digit.

    Raises:
        PasswordStrengthError: With the first rule the password breaks.
    """
    settings = get_settings()
    if not password or password.isspace():
        msg = "Password cannot be empty"
        raise PasswordStrengthError(msg)

    rules = (
        (len(password) >= settings.password_min_length, f"at least {settings.password_min_length} characters"),
        (len(password) <= settings.password_max_length, f"at most {settings.password_max_length} characters"),
        (any(c.isalpha() for c in password), "at least one letter"),
        (any(c.isdigit() for c in password), "at least one digit"),
    )
    for ok, requirement in rules:
        if not ok:
            msg = f"Password must contain {requirement}"
            raise PasswordStrengthError(msg)
