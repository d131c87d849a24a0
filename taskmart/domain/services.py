# taskmart/domain/services.py
from __future__ import annotations

import hmac
import re
import secrets

OTP_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
OTP_LENGTH = 5

_OTP_RE = re.compile(r"^[0-9A-Z]{5}$")
_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_SPECIAL_CHARS = "!@#$%^&*()_+-=[]{};':\"\\|,.<>/?"


def generate_otp_code() -> str:
    """5 characters, each drawn uniformly from 0-9A-Z."""
    return "".join(secrets.choice(OTP_ALPHABET) for _ in range(OTP_LENGTH))


def is_valid_otp_format(code: str) -> bool:
    return bool(_OTP_RE.match(code.upper()))


def normalize_identity(identity: str) -> str:
    return identity.strip().lower()


def is_valid_email(email: str) -> bool:
    return bool(_EMAIL_RE.match(email))


def secure_compare(a: str, b: str) -> bool:
    """
    Constant-time comparison for secrets.
    Accepts strings; falls back to bytes if needed.
    """
    try:
        # hmac.compare_digest supports str if types match
        return hmac.compare_digest(a, b)
    except TypeError:
        return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))


def password_violations(password: str, *, min_length: int = 7) -> list[str]:
    """
    Return every strength rule `password` breaks; an empty list means it is acceptable.
    """
    errors: list[str] = []

    if len(password) < min_length:
        errors.append(f"Password must be at least {min_length} characters long")

    if not any("A" <= ch <= "Z" for ch in password):
        errors.append("Password must contain at least one capital letter")

    if not any("0" <= ch <= "9" for ch in password):
        errors.append("Password must contain at least one number")

    if not any(ch in _SPECIAL_CHARS for ch in password):
        errors.append("Password must contain at least one special character")

    return errors
